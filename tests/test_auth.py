"""Tests for the shared Kubernetes API handle."""

import threading
import time
from unittest.mock import patch

from kubernetes.config import ConfigException

from oci_dns_solver import auth


@patch("oci_dns_solver.auth.client.CoreV1Api")
@patch("oci_dns_solver.auth.config")
def test_loads_incluster_config_once(mock_config, mock_core_cls):
    first = auth.get_core_api()
    second = auth.get_core_api()

    assert first is second is mock_core_cls.return_value
    mock_config.load_incluster_config.assert_called_once()
    mock_config.load_kube_config.assert_not_called()
    mock_core_cls.assert_called_once()


@patch("oci_dns_solver.auth.client.CoreV1Api")
@patch("oci_dns_solver.auth.config")
def test_falls_back_to_kubeconfig_outside_cluster(mock_config, mock_core_cls):
    mock_config.ConfigException = ConfigException
    mock_config.load_incluster_config.side_effect = ConfigException("not in cluster")

    api = auth.get_core_api()

    assert api is mock_core_cls.return_value
    mock_config.load_kube_config.assert_called_once()


@patch("oci_dns_solver.auth.client.CoreV1Api")
@patch("oci_dns_solver.auth.config")
def test_concurrent_first_use_creates_one_handle(mock_config, mock_core_cls):
    mock_config.load_incluster_config.side_effect = lambda: time.sleep(0.05)
    results = []
    start = threading.Barrier(8)

    def worker():
        start.wait()
        results.append(auth.get_core_api())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 8
    assert all(api is mock_core_cls.return_value for api in results)
    mock_config.load_incluster_config.assert_called_once()
    mock_core_cls.assert_called_once()
