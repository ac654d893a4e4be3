"""OCI authentication — pick workload identity, an explicit API-key profile, or instance principal."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from kubernetes import client
from kubernetes.config import ConfigException
from oci.auth import signers as oci_signers
from oci.exceptions import InvalidPrivateKey
from oci.signer import Signer

from oci_dns_solver.config import AppConfig
from oci_dns_solver.errors import CredentialError
from oci_dns_solver.secret_store import lookup_credential_bundle

logger = logging.getLogger(__name__)

WORKLOAD_IDENTITY = "workload_identity"
EXPLICIT = "explicit"
INSTANCE_PRINCIPAL = "instance_principal"


@dataclass(frozen=True)
class AuthContext:
    """Signer and OCI client config for one challenge operation.

    ``client_config`` is empty for the ambient strategies; for an API-key
    profile it is the full profile, as the SDK validates it against a plain
    ``Signer``.
    """

    strategy: str
    signer: Any = field(repr=False)
    client_config: dict[str, str] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class Disqualified:
    """A strategy that does not apply to this request, and why."""

    strategy: str
    reason: str


@dataclass(frozen=True)
class _ResolveInput:
    config: AppConfig
    get_core_api: Callable[[], client.CoreV1Api]
    namespace: str
    secret_name: str


def _workload_identity(inputs: _ResolveInput) -> AuthContext | Disqualified:
    if not inputs.config.use_workload_identity:
        return Disqualified(WORKLOAD_IDENTITY, "OCI_USE_WORKLOAD_IDENTITY is not enabled")
    try:
        signer = oci_signers.get_oke_workload_identity_resource_principal_signer()
    except Exception as exc:
        raise CredentialError(f"unable to authenticate with Workload Identity; {exc}") from exc
    return AuthContext(strategy=WORKLOAD_IDENTITY, signer=signer)


def _explicit_credentials(inputs: _ResolveInput) -> AuthContext | Disqualified:
    logger.debug(
        "Trying to load oci profile from secret `%s` in namespace `%s`",
        inputs.secret_name,
        inputs.namespace,
    )
    try:
        core_api = inputs.get_core_api()
    except ConfigException as exc:
        return Disqualified(EXPLICIT, f"unable to load Kubernetes client config; {exc}")
    lookup = lookup_credential_bundle(
        core_api,
        inputs.namespace,
        inputs.secret_name,
        timeout=inputs.config.request_timeout_seconds,
    )
    if lookup.bundle is None:
        return Disqualified(EXPLICIT, "user config not valid:\n" + "\n".join(lookup.diagnostics))

    bundle = lookup.bundle
    try:
        signer = Signer(
            tenancy=bundle.tenancy,
            user=bundle.user,
            fingerprint=bundle.fingerprint,
            private_key_file_location=None,
            pass_phrase=bundle.private_key_passphrase or None,
            private_key_content=bundle.private_key,
        )
    except (InvalidPrivateKey, ValueError) as exc:
        raise CredentialError(f"unable to load private key from secret `{inputs.namespace}/{inputs.secret_name}`; {exc}") from exc
    client_config = {
        "tenancy": bundle.tenancy,
        "user": bundle.user,
        "fingerprint": bundle.fingerprint,
        "key_content": bundle.private_key,
        "region": bundle.region,
    }
    if bundle.private_key_passphrase:
        client_config["pass_phrase"] = bundle.private_key_passphrase
    return AuthContext(strategy=EXPLICIT, signer=signer, client_config=client_config)


def _instance_principal(inputs: _ResolveInput) -> AuthContext | Disqualified:
    logger.debug("Trying Instance Principal auth")
    try:
        signer = oci_signers.InstancePrincipalsSecurityTokenSigner()
    except Exception as exc:
        raise CredentialError(f"unable to authenticate with Instance Principal; {exc}") from exc
    return AuthContext(strategy=INSTANCE_PRINCIPAL, signer=signer)


_STRATEGIES: tuple[Callable[[_ResolveInput], AuthContext | Disqualified], ...] = (
    _workload_identity,
    _explicit_credentials,
    _instance_principal,
)


def resolve_auth_context(
    config: AppConfig,
    get_core_api: Callable[[], client.CoreV1Api],
    namespace: str,
    secret_name: str,
) -> AuthContext:
    """Return the first applicable authentication context.

    Strategies are tried in a fixed order: workload identity (only when
    enabled, no fallback), the API-key profile stored in
    ``namespace/secret_name`` (only when all six fields are present), then
    instance principal. A strategy that does not apply is logged and
    skipped; one that applies but cannot initialize raises.

    ``get_core_api`` is only called by the API-key strategy, so an
    unavailable Kubernetes config never blocks workload identity.

    Note that a secret that cannot be read at all still falls through to
    instance principal, the same as a secret with missing fields.

    Raises:
        CredentialError: The selected strategy failed to initialize.
    """
    inputs = _ResolveInput(config=config, get_core_api=get_core_api, namespace=namespace, secret_name=secret_name)
    for strategy in _STRATEGIES:
        outcome = strategy(inputs)
        if isinstance(outcome, AuthContext):
            logger.debug("Authenticating with %s", outcome.strategy)
            return outcome
        logger.debug("Skipping %s auth: %s", outcome.strategy, outcome.reason)
    raise CredentialError("no authentication strategy applies")
