"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

_DEFAULT_REQUEST_TIMEOUT_SECONDS = 30


@dataclass(frozen=True)
class AppConfig:
    """Process-wide solver configuration, read once at startup."""

    use_workload_identity: bool = False
    request_timeout_seconds: int = _DEFAULT_REQUEST_TIMEOUT_SECONDS


def load_config() -> AppConfig:
    """Load and validate solver configuration from environment variables."""
    # Only the literal "true" enables workload identity.
    use_workload_identity = os.environ.get("OCI_USE_WORKLOAD_IDENTITY") == "true"

    raw_timeout = os.environ.get("OCI_REQUEST_TIMEOUT_SECONDS", str(_DEFAULT_REQUEST_TIMEOUT_SECONDS))
    try:
        request_timeout_seconds = int(raw_timeout)
    except ValueError:
        raise ValueError(f"OCI_REQUEST_TIMEOUT_SECONDS must be an integer, got: {raw_timeout!r}")
    if request_timeout_seconds < 1:
        raise ValueError(f"OCI_REQUEST_TIMEOUT_SECONDS must be a positive integer, got: {request_timeout_seconds}")

    return AppConfig(
        use_workload_identity=use_workload_identity,
        request_timeout_seconds=request_timeout_seconds,
    )
