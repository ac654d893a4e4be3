"""DNS-01 challenge solver for OCI DNS — present and clean up challenge TXT records."""

from __future__ import annotations

import logging

from kubernetes import client

from oci_dns_solver.auth import get_core_api
from oci_dns_solver.config import AppConfig
from oci_dns_solver.credentials import resolve_auth_context
from oci_dns_solver.dns import get_dns_provider
from oci_dns_solver.dns.base import DnsProvider
from oci_dns_solver.dns.util import build_mutation
from oci_dns_solver.errors import ClientInitError, ConfigDecodeError, MutationError
from oci_dns_solver.models import ChallengeRequest, ProviderConfig, RecordOperation

logger = logging.getLogger(__name__)


class OciDnsSolver:
    """Stateless solver: every call decodes, authenticates and patches from scratch.

    The Kubernetes API handle is the only thing shared between calls. It is
    either injected or taken from the process-wide cache on first use.
    """

    name = "oci"

    def __init__(self, config: AppConfig, core_api: client.CoreV1Api | None = None) -> None:
        self._config = config
        self._core_api = core_api

    def _get_core_api(self) -> client.CoreV1Api:
        if self._core_api is None:
            return get_core_api()
        return self._core_api

    def present(self, request: ChallengeRequest) -> None:
        """Publish the challenge TXT record. Safe to call repeatedly with the same request."""
        logger.debug(
            "call function Present: namespace=%s, zone=%s, fqdn=%s",
            request.resource_namespace,
            request.resolved_zone,
            request.resolved_fqdn,
        )
        self._patch(request, RecordOperation.ADD, "can not create TXT record")

    def clean_up(self, request: ChallengeRequest) -> None:
        """Remove the challenge TXT record carrying ``request.key``, leaving other values in place."""
        logger.debug(
            "call function CleanUp: namespace=%s, zone=%s, fqdn=%s",
            request.resource_namespace,
            request.resolved_zone,
            request.resolved_fqdn,
        )
        self._patch(request, RecordOperation.REMOVE, "can not delete TXT record")

    def _patch(self, request: ChallengeRequest, operation: RecordOperation, failure: str) -> None:
        try:
            provider_config = ProviderConfig.decode(request.config)
        except ConfigDecodeError as exc:
            raise ConfigDecodeError(f"unable to load config: {exc}") from exc

        provider = self._dns_provider(provider_config, request.resource_namespace)
        with provider:
            try:
                provider.apply(build_mutation(provider_config, request, operation))
            except Exception as exc:
                raise MutationError(f"{failure}: {exc}") from exc

    def _dns_provider(self, provider_config: ProviderConfig, namespace: str) -> DnsProvider:
        try:
            auth_context = resolve_auth_context(
                self._config,
                self._get_core_api,
                namespace,
                provider_config.profile_secret_name,
            )
            return get_dns_provider(self._config, auth_context)
        except Exception as exc:
            raise ClientInitError(f"unable to initialize OCI DNS client: {exc}") from exc
