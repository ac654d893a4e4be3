"""Exceptions raised by the challenge solver, annotated with the failing stage."""

from __future__ import annotations


class SolverError(Exception):
    """Base class for failures surfaced by ``present`` / ``clean_up``."""

    stage = "solver"


class ConfigDecodeError(SolverError):
    """The issuer's webhook config blob could not be decoded."""

    stage = "decode"


class ClientInitError(SolverError):
    """Authentication or DNS client construction failed."""

    stage = "client-init"


class CredentialError(ClientInitError):
    """The selected authentication strategy failed to initialize."""


class MutationError(SolverError):
    """The TXT record patch failed or exhausted its retries."""

    stage = "mutation"
