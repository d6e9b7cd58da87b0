"""Base Module - Shared Exceptions.

Exports the exception hierarchy used across the registry, resolver and
loading boundary.
"""

from .errors import (
    ConfigurationError,
    RegistryError,
    TenantViewsError,
    ViewLoadError,
    ViewNotFoundError,
    ViewResolutionError,
)

__all__ = [
    "TenantViewsError",
    "RegistryError",
    "ConfigurationError",
    "ViewResolutionError",
    "ViewNotFoundError",
    "ViewLoadError",
]
