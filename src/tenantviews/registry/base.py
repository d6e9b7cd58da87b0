"""Registry Keys and Registration Definitions.

This module defines the structured key that addresses a view implementation
and the registration dataclasses that describe where each implementation
lives. The registry is built once from these registrations (usually produced
from a build-time manifest) and is read-only afterwards; nothing is scanned
at runtime.

The module provides two categories of definitions:

1. **ResolutionKey**: The immutable ``(tenant_id, object_code, view_name)``
   triple used by the registry and the resolution cache
2. **Registration Dataclasses**: Lazy-loading metadata for view modules and
   tenant-scoped detail-view handlers

Every registration points at its implementation in exactly one way:

- ``module_path``: a dotted, importable module
- ``file_path``: a Python file loaded by location (the directory convention
  ``companies/<tenant>/objects/<object>/layouts/<view>.py`` produces these)
- ``loader``: an in-process callable (sync or async) returning the component

.. note::
   Registrations never import anything. Modules are imported only when a
   resolved view is first rendered.

Examples:
    Registering a tenant override and the default baseline::

        >>> RegistryConfig(
        ...     views=[
        ...         ViewRegistration(
        ...             tenant_id="acme",
        ...             object_code="assets",
        ...             view_name="asset-detail.detail-view",
        ...             module_path="acme_views.assets.detail",
        ...         ),
        ...         ViewRegistration(
        ...             tenant_id="0_default",
        ...             object_code="assets",
        ...             view_name="asset-detail.detail_view_meta",
        ...             file_path="companies/0_default/objects/assets/layouts/asset-detail.detail_view_meta.py",
        ...         ),
        ...     ],
        ...     handlers=[
        ...         HandlerRegistration(tenant_id="acme", module_path="acme_views.handler"),
        ...     ],
        ... )

.. seealso::
   :class:`tenantviews.registry.manager.ViewRegistry` : Registry built from these definitions
   :mod:`tenantviews.registry.manifest` : Build-time manifest that produces registrations
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from tenantviews.base.errors import RegistryError
from tenantviews.utils.config import DEFAULT_HANDLER_ATTRIBUTE, DEFAULT_TENANT

DEFAULT_VIEW_ATTRIBUTE = "render"


@dataclass(frozen=True)
class ResolutionKey:
    """Structured key addressing one view implementation.

    Keys are immutable and compare by value, so they can be used directly as
    dictionary keys in the registry and the resolution cache.

    :param tenant_id: Tenant (company) identifier
    :type tenant_id: str
    :param object_code: Business object code, e.g. ``"assets"``
    :type object_code: str
    :param view_name: View name, e.g. ``"asset-detail.layout"``
    :type view_name: str
    """
    tenant_id: str
    object_code: str
    view_name: str

    @property
    def path(self) -> str:
        """Diagnostic candidate path following the companies directory convention."""
        return f"companies/{self.tenant_id}/objects/{self.object_code}/layouts/{self.view_name}"

    def with_tenant(self, tenant_id: str) -> "ResolutionKey":
        return ResolutionKey(tenant_id, self.object_code, self.view_name)

    def __str__(self) -> str:
        return f"{self.tenant_id}:{self.object_code}:{self.view_name}"


def _check_single_source(owner: str, module_path, file_path, loader) -> None:
    sources = [s for s in (module_path, file_path, loader) if s is not None]
    if len(sources) != 1:
        raise RegistryError(
            f"{owner} must define exactly one of module_path, file_path or loader "
            f"(got {len(sources)})"
        )


@dataclass
class ViewRegistration:
    """Registration metadata for one view implementation.

    :param tenant_id: Tenant that owns this implementation
    :type tenant_id: str
    :param object_code: Business object the view renders
    :type object_code: str
    :param view_name: Generation-specific view name (e.g. ``"asset-detail.layout"``)
    :type view_name: str
    :param module_path: Python module path for lazy import
    :type module_path: str | None
    :param file_path: Python file loaded by location
    :type file_path: str | None
    :param attribute: Attribute of the module holding the component, defaults to ``"render"``
    :type attribute: str
    :param loader: In-process callable returning the component (may be async)
    :type loader: Callable | None
    """
    tenant_id: str
    object_code: str
    view_name: str
    module_path: str | None = None
    file_path: str | None = None
    attribute: str = DEFAULT_VIEW_ATTRIBUTE
    loader: Callable[[], Any] | None = None

    def __post_init__(self):
        for name in ("tenant_id", "object_code", "view_name"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise RegistryError(f"ViewRegistration.{name} must be a non-empty string, got {value!r}")
        _check_single_source(f"View registration {self.key}", self.module_path, self.file_path, self.loader)

    @property
    def key(self) -> ResolutionKey:
        return ResolutionKey(self.tenant_id, self.object_code, self.view_name)


@dataclass
class HandlerRegistration:
    """Registration metadata for a tenant-scoped detail-view handler.

    The handler receives the raw layout of a ``.layout`` view and decides how
    to wire it to data fetching, edit mode and mutations. Handlers are looked
    up for the requesting tenant only; they are never inherited from the
    default tenant.

    :param tenant_id: Tenant that owns the handler
    :type tenant_id: str
    :param module_path: Python module path for lazy import
    :type module_path: str | None
    :param file_path: Python file loaded by location
    :type file_path: str | None
    :param attribute: Attribute holding the handler callable
    :type attribute: str
    :param loader: In-process callable returning the handler (may be async)
    :type loader: Callable | None
    """
    tenant_id: str
    module_path: str | None = None
    file_path: str | None = None
    attribute: str = DEFAULT_HANDLER_ATTRIBUTE
    loader: Callable[[], Any] | None = None

    def __post_init__(self):
        if not isinstance(self.tenant_id, str) or not self.tenant_id.strip():
            raise RegistryError(f"HandlerRegistration.tenant_id must be a non-empty string, got {self.tenant_id!r}")
        _check_single_source(f"Handler registration for {self.tenant_id}", self.module_path, self.file_path, self.loader)


@dataclass
class RegistryConfig:
    """Complete, statically known set of view and handler registrations.

    :param views: Registration entries for view implementations
    :type views: list[ViewRegistration]
    :param handlers: Registration entries for detail-view handlers (optional)
    :type handlers: list[HandlerRegistration]
    :param default_tenant: Tenant used as the universal fallback
    :type default_tenant: str
    """
    views: list[ViewRegistration]
    handlers: list[HandlerRegistration] = field(default_factory=list)
    default_tenant: str = DEFAULT_TENANT
