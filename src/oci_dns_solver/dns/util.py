"""DNS utility functions."""

from __future__ import annotations

from oci_dns_solver.models import ChallengeRequest, MutationRequest, ProviderConfig, RecordOperation


def strip_trailing_dot(fqdn: str) -> str:
    """Drop the root label separator, e.g. ``_acme-challenge.example.com.`` -> ``_acme-challenge.example.com``."""
    return fqdn.removesuffix(".")


def build_mutation(
    provider_config: ProviderConfig,
    request: ChallengeRequest,
    operation: RecordOperation,
) -> MutationRequest:
    """Build the challenge TXT patch for ``request``.

    The record data is the challenge key exactly as received, so repeating
    the same add or remove is a no-op at the provider.
    """
    return MutationRequest(
        zone=request.resolved_zone,
        compartment_id=provider_config.compartment_ocid,
        domain=strip_trailing_dot(request.resolved_fqdn),
        rdata=request.key,
        operation=operation,
    )
