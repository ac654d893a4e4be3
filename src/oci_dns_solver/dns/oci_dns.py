"""OCI DNS provider — patch challenge TXT records via the oci SDK."""

from __future__ import annotations

import logging

from oci.dns import DnsClient
from oci.dns.models import PatchZoneRecordsDetails, RecordOperation
from oci.exceptions import RequestException, ServiceError
from oci.retry import NoneRetryStrategy

from oci_dns_solver.credentials import AuthContext
from oci_dns_solver.dns.base import DnsProvider
from oci_dns_solver.models import MutationRequest
from oci_dns_solver.retry import DEFAULT_RETRY_POLICY, RetryPolicy

logger = logging.getLogger(__name__)


class OciDnsProvider(DnsProvider):
    """DNS provider backed by OCI DNS zones."""

    def __init__(
        self,
        auth_context: AuthContext,
        timeout: float | None = None,
        retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY,
        _dns_client: DnsClient | None = None,
    ) -> None:
        self._retry_policy = retry_policy
        self._dns_client = _dns_client or DnsClient(
            auth_context.client_config,
            signer=auth_context.signer,
            timeout=timeout,
        )

    def apply(self, mutation: MutationRequest) -> None:
        details = PatchZoneRecordsDetails(
            items=[
                RecordOperation(
                    domain=mutation.domain,
                    rtype=mutation.rtype,
                    rdata=mutation.rdata,
                    ttl=mutation.ttl,
                    operation=mutation.operation.value,
                )
            ]
        )
        kwargs = {}
        if mutation.compartment_id:
            kwargs["compartment_id"] = mutation.compartment_id

        # Re-sends are driven by the retry policy only; the SDK's own retry is off.
        self._retry_policy.call(
            lambda: self._dns_client.patch_zone_records(
                zone_name_or_id=mutation.zone,
                patch_zone_records_details=details,
                retry_strategy=NoneRetryStrategy(),
                **kwargs,
            ),
            retry_on=(ServiceError, RequestException),
        )
        logger.info(
            "Applied %s TXT record %s in OCI zone %s",
            mutation.operation.value,
            mutation.domain,
            mutation.zone,
        )

    def close(self) -> None:
        """Close the DNS client's HTTP session."""
        self._dns_client.base_client.session.close()
