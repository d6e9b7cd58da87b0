"""View Registry Management.

This module provides the read-only view registry: a static mapping from
:class:`ResolutionKey` to a lazily evaluated :class:`RegistryEntry`, plus the
tenant fallback policy that decides when the default tenant's entry stands in
for a tenant that has not customized a view.

Lookup Semantics:
    1. Try the exact ``(tenant_id, object_code, view_name)`` key
    2. If absent, substitute the default tenant and retry once
    3. If still absent, return ``None``: the caller decides whether that is
       a NotFound condition or a reason to try the next format tier

    The policy performs exactly one substitution. There is no chain of
    tenants and no search across unrelated objects.

Lazy Loading:
    Entries import nothing until :meth:`RegistryEntry.load` is awaited.
    Imports run in a worker thread via :func:`asyncio.to_thread` so a slow
    import never blocks the event loop.

.. note::
   The registry is constructed once from a build-time manifest and never
   mutated. A new deployment means a new registry (and a new resolver).

Examples:
    Build a registry and look up a view::

        >>> registry = ViewRegistry.from_manifest("views.yml")
        >>> entry = registry.lookup("acme", "assets", "asset-detail.detail-view")
        >>> entry.key.tenant_id   # "acme", or "0_default" after fallback
        >>> component = await entry.load()

.. seealso::
   :mod:`tenantviews.registry.base` : Keys and registration dataclasses
   :mod:`tenantviews.registry.manifest` : Manifest loading and generation
"""

import asyncio
import hashlib
import importlib
import importlib.util
import inspect
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from tenantviews.base.errors import RegistryError, ViewLoadError
from tenantviews.utils.config import DEFAULT_TENANT, get_config_builder
from tenantviews.utils.logger import get_logger

from .base import HandlerRegistration, RegistryConfig, ResolutionKey, ViewRegistration
from .manifest import load_registry_config

logger = get_logger("registry")


class RegistryEntry:
    """Lazily evaluated loader bound to exactly one registration.

    :param registration: View or handler registration this entry loads
    :param name: Diagnostic name used in logs and load errors
    """

    def __init__(self, registration: ViewRegistration | HandlerRegistration, name: str):
        self.registration = registration
        self.name = name

    @property
    def key(self) -> ResolutionKey | None:
        """Registry key for view entries, ``None`` for handler entries."""
        if isinstance(self.registration, ViewRegistration):
            return self.registration.key
        return None

    @property
    def tenant_id(self) -> str:
        return self.registration.tenant_id

    @property
    def source(self) -> str:
        """Human-readable location of the implementation."""
        reg = self.registration
        if reg.module_path:
            return f"{reg.module_path}:{reg.attribute}"
        if reg.file_path:
            return f"{reg.file_path}:{reg.attribute}"
        return f"<loader {getattr(reg.loader, '__qualname__', repr(reg.loader))}>"

    async def load(self) -> Any:
        """Fetch the implementation this entry points at.

        :return: The component (or handler) object
        :raises ViewLoadError: If the import, module execution or attribute access fails
        """
        reg = self.registration
        try:
            if reg.loader is not None:
                result = reg.loader()
                if inspect.isawaitable(result):
                    result = await result
                return result
            return await asyncio.to_thread(self._import_attribute)
        except ViewLoadError:
            raise
        except Exception as e:
            logger.error(f"Failed to load {self.name} from {self.source}: {e}")
            raise ViewLoadError(self.name, f"{type(e).__name__}: {e}") from e

    def _import_attribute(self) -> Any:
        reg = self.registration
        if reg.module_path:
            module = importlib.import_module(reg.module_path)
        else:
            module = _import_file(Path(reg.file_path))

        try:
            return getattr(module, reg.attribute)
        except AttributeError as e:
            raise ViewLoadError(
                self.name, f"attribute '{reg.attribute}' not found in {self.source}"
            ) from e

    def __repr__(self) -> str:
        return f"RegistryEntry({self.name!r}, source={self.source!r})"


def _import_file(path: Path):
    """Import a Python file by location, reusing the module on later calls."""
    path = path.resolve()
    module_name = "_tenantviews_dynamic_" + hashlib.sha1(str(path).encode()).hexdigest()[:16]

    if module_name in sys.modules:
        return sys.modules[module_name]

    if not path.is_file():
        raise FileNotFoundError(f"View module not found: {path}")

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create import spec for {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        del sys.modules[module_name]
        raise
    return module


class TenantFallbackPolicy:
    """Decides which registry keys stand for a requested key.

    Per-tenant customization is an override of a universal baseline, not a
    tree of inheritance: a requested key maps to at most two candidates,
    the tenant's own key and the default tenant's key.

    :param default_tenant: Tenant used as the universal fallback
    :type default_tenant: str
    """

    def __init__(self, default_tenant: str = DEFAULT_TENANT):
        if not default_tenant or not default_tenant.strip():
            raise RegistryError("Default tenant must be a non-empty string")
        self.default_tenant = default_tenant.strip()

    def normalize(self, tenant_id: str | None) -> str:
        """Map an absent or blank tenant to the default tenant."""
        if tenant_id is None:
            return self.default_tenant
        tenant_id = tenant_id.strip()
        return tenant_id or self.default_tenant

    def candidates(self, key: ResolutionKey) -> list[ResolutionKey]:
        """Ordered keys to probe for ``key``: the tenant's own, then the default's."""
        if key.tenant_id == self.default_tenant:
            return [key]
        return [key, key.with_tenant(self.default_tenant)]


class ViewRegistry:
    """Read-only registry of view implementations and detail-view handlers.

    :param config: Complete set of registrations
    :type config: RegistryConfig
    :param policy: Tenant fallback policy; built from ``config.default_tenant`` if omitted
    :type policy: TenantFallbackPolicy | None
    :raises RegistryError: If two registrations claim the same key or tenant handler
    """

    def __init__(self, config: RegistryConfig, policy: TenantFallbackPolicy | None = None):
        self.config = config
        self.policy = policy or TenantFallbackPolicy(config.default_tenant)
        self._views: dict[ResolutionKey, RegistryEntry] = {}
        self._handlers: dict[str, RegistryEntry] = {}

        for reg in config.views:
            key = reg.key
            if key in self._views:
                raise RegistryError(
                    f"Duplicate view registration for {key.path}: "
                    f"{self._views[key].source} and {RegistryEntry(reg, key.path).source}"
                )
            self._views[key] = RegistryEntry(reg, key.path)

        for reg in config.handlers:
            if reg.tenant_id in self._handlers:
                raise RegistryError(f"Duplicate detail-view handler registration for tenant {reg.tenant_id}")
            self._handlers[reg.tenant_id] = RegistryEntry(
                reg, f"companies/{reg.tenant_id}/components/ui/{reg.attribute}"
            )

        logger.info(
            f"Registered {len(self._views)} views and {len(self._handlers)} handlers "
            f"across {len(self.tenants())} tenants"
        )

    @classmethod
    def from_manifest(cls, manifest_path: str | Path) -> "ViewRegistry":
        """Build a registry from a YAML manifest file."""
        return cls(load_registry_config(manifest_path))

    @property
    def default_tenant(self) -> str:
        return self.policy.default_tenant

    def get_entry(self, key: ResolutionKey) -> RegistryEntry | None:
        """Exact lookup with no tenant fallback."""
        return self._views.get(key)

    def lookup(self, tenant_id: str, object_code: str, view_name: str) -> RegistryEntry | None:
        """Look up a view, substituting the default tenant once if needed.

        :param tenant_id: Requesting tenant (already normalized)
        :param object_code: Business object code
        :param view_name: Generation-specific view name
        :return: The tenant's entry, the default tenant's entry, or ``None``
        """
        requested = ResolutionKey(tenant_id, object_code, view_name)
        for candidate in self.policy.candidates(requested):
            entry = self._views.get(candidate)
            if entry is not None:
                if candidate != requested:
                    logger.debug(f"No override for {requested}, using {candidate.tenant_id}")
                return entry
        return None

    def get_handler(self, tenant_id: str) -> RegistryEntry | None:
        """Tenant-scoped handler lookup (never falls back to the default tenant)."""
        return self._handlers.get(tenant_id)

    def list_views(self, tenant_id: str | None = None, object_code: str | None = None) -> list[RegistryEntry]:
        """List view entries sorted by key, optionally filtered."""
        entries: Iterable[RegistryEntry] = self._views.values()
        if tenant_id is not None:
            entries = [e for e in entries if e.key.tenant_id == tenant_id]
        if object_code is not None:
            entries = [e for e in entries if e.key.object_code == object_code]
        return sorted(entries, key=lambda e: (e.key.tenant_id, e.key.object_code, e.key.view_name))

    def list_handlers(self) -> list[RegistryEntry]:
        return [self._handlers[t] for t in sorted(self._handlers)]

    def tenants(self) -> list[str]:
        tenants = {key.tenant_id for key in self._views} | set(self._handlers)
        return sorted(tenants)

    def get_stats(self) -> dict[str, Any]:
        """Registry statistics for debugging and the CLI."""
        return {
            "default_tenant": self.default_tenant,
            "views": len(self._views),
            "handlers": len(self._handlers),
            "tenants": self.tenants(),
            "objects": sorted({key.object_code for key in self._views}),
            "handler_tenants": sorted(self._handlers),
        }

    def __contains__(self, key: object) -> bool:
        return key in self._views

    def __len__(self) -> int:
        return len(self._views)


# ==============================================================================
# GLOBAL REGISTRY INSTANCE
# ==============================================================================

_registry: ViewRegistry | None = None


def get_registry(config_path: str | None = None) -> ViewRegistry:
    """Retrieve the global registry, building it from configuration on first use.

    The manifest comes from ``views.manifest_path`` and the fallback tenant
    from ``views.default_tenant``. Subsequent calls return the same instance
    and ignore ``config_path``.

    :param config_path: Optional explicit path to configuration file
    :return: The global registry
    :raises RegistryError: If no manifest is configured or it cannot be loaded
    """
    global _registry

    if _registry is None:
        logger.debug("Creating new registry instance...")
        settings = get_config_builder(config_path).get_views_config()
        manifest_path = settings["manifest_path"]
        if manifest_path is None:
            raise RegistryError(
                "No view manifest configured. Set views.manifest_path in config.yml "
                "(generate one with 'tenantviews manifest <companies-dir>')."
            )

        config = load_registry_config(manifest_path, settings["handler_attribute"])
        _registry = ViewRegistry(config, TenantFallbackPolicy(settings["default_tenant"]))

    return _registry


def reset_registry() -> None:
    """Drop the global registry so the next :func:`get_registry` rebuilds it."""
    global _registry
    _registry = None
