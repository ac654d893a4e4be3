"""Data classes describing a challenge, its provider config and the resulting record patch."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from oci_dns_solver.errors import ConfigDecodeError

CHALLENGE_RECORD_TYPE = "TXT"
CHALLENGE_TTL = 60


class RecordOperation(str, Enum):
    """Patch operation applied to the challenge record."""

    ADD = "ADD"
    REMOVE = "REMOVE"


@dataclass(frozen=True)
class ChallengeRequest:
    """One DNS-01 challenge instance as sent by cert-manager."""

    uid: str
    action: str
    type: str
    dns_name: str
    key: str
    resource_namespace: str
    resolved_fqdn: str
    resolved_zone: str
    config: Any = None
    allow_ambient_credentials: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> ChallengeRequest:
        return cls(
            uid=data.get("uid", ""),
            action=data.get("action", ""),
            type=data.get("type", ""),
            dns_name=data.get("dnsName", ""),
            key=data["key"],
            resource_namespace=data.get("resourceNamespace", ""),
            resolved_fqdn=data["resolvedFQDN"],
            resolved_zone=data["resolvedZone"],
            config=data.get("config"),
            allow_ambient_credentials=bool(data.get("allowAmbientCredentials", False)),
        )


@dataclass(frozen=True)
class ProviderConfig:
    """Decoded issuer webhook config: target compartment and credential secret name."""

    compartment_ocid: str = ""
    profile_secret_name: str = ""

    @classmethod
    def decode(cls, blob: str | bytes | Mapping | None) -> ProviderConfig:
        """Decode the opaque config blob carried on a challenge request.

        ``None`` (no config on the issuer) and a JSON ``null`` both yield an
        empty config. Unknown keys are ignored.

        Raises:
            ConfigDecodeError: The blob is not valid JSON, not an object, or
                a recognized key holds a non-string value.
        """
        if blob is None:
            return cls()
        if isinstance(blob, (str, bytes, bytearray)):
            try:
                data = json.loads(blob)
            except ValueError as exc:
                raise ConfigDecodeError(f"cannot unmarshal raw JSON: {exc}") from exc
        else:
            data = blob
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigDecodeError(f"config must be a JSON object, got {type(data).__name__}")

        compartment_ocid = data.get("compartmentOCID", "")
        profile_secret_name = data.get("ociProfileSecretName", "")
        for name, value in (("compartmentOCID", compartment_ocid), ("ociProfileSecretName", profile_secret_name)):
            if value is not None and not isinstance(value, str):
                raise ConfigDecodeError(f"{name} must be a string, got {type(value).__name__}")

        return cls(
            compartment_ocid=compartment_ocid or "",
            profile_secret_name=profile_secret_name or "",
        )


@dataclass(frozen=True)
class MutationRequest:
    """A single challenge-record patch against one zone."""

    zone: str
    compartment_id: str
    domain: str
    rdata: str
    operation: RecordOperation
    rtype: str = CHALLENGE_RECORD_TYPE
    ttl: int = CHALLENGE_TTL
