"""View Registry Package.

Read-only mapping from ``(tenant, object, view)`` keys to lazily loaded view
implementations, with one-hop fallback to the default tenant.
"""

from .base import (
    DEFAULT_VIEW_ATTRIBUTE,
    HandlerRegistration,
    RegistryConfig,
    ResolutionKey,
    ViewRegistration,
)
from .manager import (
    RegistryEntry,
    TenantFallbackPolicy,
    ViewRegistry,
    get_registry,
    reset_registry,
)
from .manifest import (
    ManifestHandler,
    ManifestView,
    ViewManifest,
    generate_manifest,
    load_manifest,
    load_registry_config,
    manifest_to_config,
    write_manifest,
)

__all__ = [
    "DEFAULT_VIEW_ATTRIBUTE",
    "HandlerRegistration",
    "RegistryConfig",
    "ResolutionKey",
    "ViewRegistration",
    "RegistryEntry",
    "TenantFallbackPolicy",
    "ViewRegistry",
    "get_registry",
    "reset_registry",
    "ManifestHandler",
    "ManifestView",
    "ViewManifest",
    "generate_manifest",
    "load_manifest",
    "load_registry_config",
    "manifest_to_config",
    "write_manifest",
]
