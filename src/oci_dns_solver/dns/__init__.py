"""DNS provider factory — build an authenticated OCI DNS provider."""

from __future__ import annotations

from oci_dns_solver.config import AppConfig
from oci_dns_solver.credentials import AuthContext
from oci_dns_solver.dns.base import DnsProvider
from oci_dns_solver.dns.oci_dns import OciDnsProvider


def get_dns_provider(config: AppConfig, auth_context: AuthContext) -> DnsProvider:
    """Instantiate the OCI DNS provider for one challenge operation.

    Args:
        config: Application configuration.
        auth_context: Signer and client config chosen by the credential resolver.

    Returns:
        A configured DnsProvider instance.
    """
    return OciDnsProvider(
        auth_context=auth_context,
        timeout=config.request_timeout_seconds,
    )
