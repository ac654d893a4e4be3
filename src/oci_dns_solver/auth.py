"""Shared Kubernetes API client management."""

from __future__ import annotations

import logging
import threading

from kubernetes import client, config

logger = logging.getLogger(__name__)

_core_api: client.CoreV1Api | None = None
_lock = threading.Lock()


def get_core_api() -> client.CoreV1Api:
    """Return a cached CoreV1Api, loading in-cluster config or falling back to kubeconfig."""
    global _core_api
    if _core_api is None:
        with _lock:
            if _core_api is None:
                try:
                    config.load_incluster_config()
                except config.ConfigException:
                    logger.debug("Not running in a cluster, loading kubeconfig")
                    config.load_kube_config()
                _core_api = client.CoreV1Api()
    return _core_api
