"""Registry collaborators for regwatch.

Exports:
    RegistryClient -- Abstract interface the reconciler resolves entities through.
    RegistryError  -- Collaborator I/O failure; aborts the pass.
    ZefixClient    -- Zefix public REST API implementation.
    build_registry -- Factory used by the application bootstrap.
"""

from __future__ import annotations

from regwatch.models.config import RegistryConfig
from regwatch.registry.base import RegistryClient, RegistryError
from regwatch.registry.zefix import ZefixClient, normalize_company

__all__ = [
    "RegistryClient",
    "RegistryError",
    "ZefixClient",
    "build_registry",
    "normalize_company",
]


def build_registry(config: RegistryConfig) -> RegistryClient:
    """Build the registry client for *config*."""
    return ZefixClient(config)
