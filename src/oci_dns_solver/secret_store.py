"""Kubernetes Secret operations — read an OCI API-key profile for the explicit credential path."""

from __future__ import annotations

import base64
import binascii
import logging
from dataclasses import dataclass

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

logger = logging.getLogger(__name__)

# Secret data key -> CredentialBundle attribute
CREDENTIAL_FIELDS = {
    "tenancy": "tenancy",
    "user": "user",
    "region": "region",
    "fingerprint": "fingerprint",
    "privateKey": "private_key",
    "privateKeyPassphrase": "private_key_passphrase",
}


@dataclass(frozen=True)
class CredentialBundle:
    """A complete OCI API-key profile."""

    tenancy: str
    user: str
    region: str
    fingerprint: str
    private_key: str
    private_key_passphrase: str

    def __repr__(self) -> str:
        return (
            f"CredentialBundle(tenancy={self.tenancy!r}, user={self.user!r}, "
            f"region={self.region!r}, fingerprint={self.fingerprint!r})"
        )


@dataclass(frozen=True)
class SecretLookup:
    """Result of reading a profile secret: a bundle only when every field resolved."""

    bundle: CredentialBundle | None
    diagnostics: tuple[str, ...] = ()


def _decode_field(data: dict[str, str], key: str) -> str:
    if key not in data or data[key] is None:
        raise KeyError(f"key {key!r} not found in secret data")
    try:
        return base64.b64decode(data[key], validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise KeyError(f"key {key!r} is not valid base64-encoded UTF-8: {exc}") from exc


def lookup_credential_bundle(
    core_api: client.CoreV1Api,
    namespace: str,
    secret_name: str,
    timeout: float | None = None,
) -> SecretLookup:
    """Read ``namespace/secret_name`` once and extract the six profile fields.

    Failures never raise: a missing secret, an API or transport error, or
    an absent field is recorded as a diagnostic and the bundle is ``None``.
    """
    diagnostics: list[str] = []
    data: dict[str, str] = {}

    if not secret_name:
        diagnostics.append(f"no profile secret configured for namespace `{namespace}`")
    else:
        try:
            secret = core_api.read_namespaced_secret(
                name=secret_name,
                namespace=namespace,
                _request_timeout=timeout,
            )
        except (ApiException, HTTPError, ValueError) as exc:
            diagnostics.append(f"unable to get secret `{namespace}/{secret_name}`; {exc}")
        else:
            data = secret.data or {}

    values: dict[str, str] = {}
    for key, attribute in CREDENTIAL_FIELDS.items():
        try:
            values[attribute] = _decode_field(data, key)
        except KeyError as exc:
            diagnostics.append(f"unable to get {key} from secret `{namespace}/{secret_name}`; {exc.args[0]}")

    if diagnostics:
        return SecretLookup(bundle=None, diagnostics=tuple(diagnostics))
    return SecretLookup(bundle=CredentialBundle(**values))
