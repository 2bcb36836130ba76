"""Registry collaborator interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from regwatch.models.snapshot import CompanySnapshot


class RegistryError(RuntimeError):
    """Raised when the registry cannot be reached or answers unexpectedly.

    Unlike a missing entity, this aborts the whole pass.
    """


class RegistryClient(ABC):
    """Resolves entity keys to normalized snapshots."""

    @abstractmethod
    def is_valid_key(self, key: str) -> bool:
        """Return True if *key* is structurally a valid identifier."""

    @abstractmethod
    async def resolve(self, key: str) -> CompanySnapshot | None:
        """Fetch and normalize the entity behind *key*.

        Returns:
            The snapshot, or None when the registry has no such entity.

        Raises:
            RegistryError: on transport failures and unexpected responses.
        """

    @abstractmethod
    async def search(self, name: str) -> list[str]:
        """Return candidate keys for entities matching *name*, best first."""

    async def aclose(self) -> None:  # noqa: B027
        """Release network resources.  The default implementation holds none."""
