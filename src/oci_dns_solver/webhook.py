"""cert-manager webhook adapter — turn a ChallengePayload document into a solver call."""

from __future__ import annotations

import logging
import threading

from oci_dns_solver.config import load_config
from oci_dns_solver.errors import SolverError
from oci_dns_solver.models import ChallengeRequest
from oci_dns_solver.solver import OciDnsSolver

logger = logging.getLogger(__name__)

_API_VERSION = "acme.cert-manager.io/v1alpha1"
_KIND = "ChallengePayload"

_solver: OciDnsSolver | None = None
_lock = threading.Lock()


def get_solver() -> OciDnsSolver:
    """Return the process-wide solver, configured from the environment on first use."""
    global _solver
    if _solver is None:
        with _lock:
            if _solver is None:
                _solver = OciDnsSolver(load_config())
    return _solver


def _response(uid: str, api_version: str, error: str | None = None, reason: str | None = None) -> dict:
    response: dict = {"uid": uid, "success": error is None}
    if error is not None:
        response["status"] = {"status": "Failure", "message": error, "reason": reason}
    return {"apiVersion": api_version, "kind": _KIND, "response": response}


def handle_challenge_payload(payload: dict, solver: OciDnsSolver | None = None) -> dict:
    """Dispatch a ChallengePayload to ``present`` or ``clean_up`` and build the reply.

    Solver failures become an unsuccessful response carrying the failing
    stage as its reason; they are not raised.

    Raises:
        ValueError: The payload has no ``request`` object, or the request lacks
            ``key``, ``resolvedFQDN`` or ``resolvedZone``.
    """
    request_data = payload.get("request")
    if not isinstance(request_data, dict):
        raise ValueError("ChallengePayload has no request")
    api_version = payload.get("apiVersion", _API_VERSION)

    try:
        request = ChallengeRequest.from_dict(request_data)
    except KeyError as exc:
        raise ValueError(f"ChallengePayload request is missing {exc}") from exc
    if solver is None:
        solver = get_solver()

    if request.action == "Present":
        operation = solver.present
    elif request.action == "CleanUp":
        operation = solver.clean_up
    else:
        return _response(request.uid, api_version, f"unsupported action: {request.action!r}", "BadRequest")

    try:
        operation(request)
    except SolverError as exc:
        logger.warning("%s failed for %s: %s", request.action, request.resolved_fqdn, exc)
        return _response(request.uid, api_version, str(exc), exc.stage)
    return _response(request.uid, api_version)
