"""Abstract base class for DNS providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Self

from oci_dns_solver.models import MutationRequest


class DnsProvider(ABC):
    """Interface for DNS providers that patch ACME DNS-01 challenge TXT records."""

    def close(self) -> None:
        """Release resources. Override in subclasses that hold open connections."""

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @abstractmethod
    def apply(self, mutation: MutationRequest) -> None:
        """Apply a single record patch.

        Adding a record that already exists, or removing one that is already
        gone, must succeed. A remove only matches records whose data equals
        ``mutation.rdata``.

        Args:
            mutation: The record operation and the zone it targets.
        """
