"""View resolution facade.

:class:`ViewResolver` is the single entry point pages use to obtain a view::

    resolver = ViewResolver(registry, deps=app_dependencies)

    boundary = resolver.request_view("acme", "assets", "detail", record_id="42")
    output = await boundary

Resolution is synchronous and cached per ``(tenant, object, kind:base name)``;
only the module fetch behind the returned view is asynchronous.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

from tenantviews.base.errors import ViewNotFoundError
from tenantviews.loading.boundary import ViewBoundary
from tenantviews.registry.base import ResolutionKey
from tenantviews.registry.manager import ViewRegistry, get_registry
from tenantviews.utils.logger import get_logger
from tenantviews.utils.naming import to_singular

from .adapter import LazyView, build_component_view, build_view
from .cache import ResolutionCache
from .detector import FormatDetector
from .types import (
    COMPONENT_CACHE_KIND,
    ResolvedView,
    ViewKind,
    cache_view_name,
    detail_base_name,
    list_view_names,
    placeholder_id,
)

logger = get_logger("resolver")


class ViewResolver:
    """Resolves, caches and mounts tenant-scoped views.

    :param registry: View registry (read-only)
    :type registry: ViewRegistry
    :param deps: Dependency bundle handed unmodified to meta and legacy views
    :param singularize: Object-code singularization, defaults to :func:`to_singular`
    :param cache: Resolution cache; a private one is created if omitted
    """

    def __init__(
        self,
        registry: ViewRegistry,
        deps: Any = None,
        singularize: Callable[[str], str] = to_singular,
        cache: ResolutionCache | None = None,
    ):
        self.registry = registry
        self.deps = deps
        self.singularize = singularize
        self.cache = cache if cache is not None else ResolutionCache()
        self.detector = FormatDetector(registry)

    def normalize_tenant(self, tenant_id: str | None) -> str:
        return self.registry.policy.normalize(tenant_id)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_detail(
        self, tenant_id: str | None, object_code: str, singular_object_code: str | None = None
    ) -> ResolvedView:
        """Resolve the detail view for an object.

        :raises ViewNotFoundError: If no detail generation exists for tenant or default
        """
        tenant_id = self.normalize_tenant(tenant_id)
        singular = singular_object_code or self.singularize(object_code)
        base_name = detail_base_name(singular)
        key = ResolutionKey(tenant_id, object_code, cache_view_name(ViewKind.DETAIL, base_name))

        def pipeline() -> ResolvedView:
            detection = self.detector.detect(tenant_id, object_code, singular)
            return ResolvedView(
                component=build_view(detection, self.deps),
                format=detection.format,
                is_new_format=detection.is_new_format,
                source=detection.source,
            )

        return self.cache.get_or_resolve(key, pipeline)

    def resolve_list(self, tenant_id: str | None, object_code: str) -> ResolvedView:
        """Resolve the list (table) view for an object.

        :raises ViewNotFoundError: If neither list view name exists for tenant or default
        """
        tenant_id = self.normalize_tenant(tenant_id)
        key = ResolutionKey(tenant_id, object_code, cache_view_name(ViewKind.LIST, object_code))

        def pipeline() -> ResolvedView:
            entry = self._lookup_first(tenant_id, object_code, list_view_names(object_code), object_code)
            return ResolvedView(
                component=build_component_view(entry, self.deps),
                format=None,
                is_new_format=False,
                source=entry.key,
            )

        return self.cache.get_or_resolve(key, pipeline)

    def load_component(
        self,
        tenant_id: str | None,
        object_code: str,
        component_name: str,
        fallback_name: str | None = None,
    ) -> LazyView:
        """Resolve an arbitrarily named component with tenant fallback.

        ``fallback_name`` is tried (with its own tenant fallback) when
        ``component_name`` is not registered anywhere.

        :raises ViewNotFoundError: Listing every probed key
        """
        tenant_id = self.normalize_tenant(tenant_id)
        names = [component_name] + ([fallback_name] if fallback_name else [])
        cache_name = cache_view_name(COMPONENT_CACHE_KIND, "|".join(names))
        key = ResolutionKey(tenant_id, object_code, cache_name)

        def pipeline() -> ResolvedView:
            entry = self._lookup_first(tenant_id, object_code, names, component_name)
            return ResolvedView(
                component=build_component_view(entry, bind_deps=False),
                format=None,
                is_new_format=False,
                source=entry.key,
            )

        return self.cache.get_or_resolve(key, pipeline).component

    def resolve(self, tenant_id: str | None, object_code: str, kind: ViewKind | str) -> ResolvedView:
        kind = ViewKind(kind)
        if kind is ViewKind.DETAIL:
            return self.resolve_detail(tenant_id, object_code)
        return self.resolve_list(tenant_id, object_code)

    def _lookup_first(self, tenant_id: str, object_code: str, names: list[str], base_name: str):
        checked: list[ResolutionKey] = []
        for view_name in names:
            checked.extend(self.registry.policy.candidates(ResolutionKey(tenant_id, object_code, view_name)))
            entry = self.registry.lookup(tenant_id, object_code, view_name)
            if entry is not None:
                return entry

        error = ViewNotFoundError(tenant_id, object_code, base_name, checked)
        logger.warning(str(error))
        raise error

    # ------------------------------------------------------------------
    # Mounting
    # ------------------------------------------------------------------

    def request_view(
        self,
        tenant_id: str | None,
        object_code: str,
        kind: ViewKind | str,
        record_id: Any = None,
    ) -> ViewBoundary:
        """Resolve a page view and wrap it in a loading boundary.

        :param tenant_id: Requesting tenant; blank or ``None`` means the default tenant
        :param object_code: Plural business object code
        :param kind: ``"list"`` or ``"detail"``
        :param record_id: Record shown by a detail view
        :return: Boundary to ``await`` for the rendered output
        :raises ViewNotFoundError: If resolution fails
        """
        kind = ViewKind(kind)
        view = self.resolve(tenant_id, object_code, kind)

        if kind is ViewKind.DETAIL:
            singular = self.singularize(object_code)
            props = {"object_code": object_code, "record_id": record_id}
            return ViewBoundary(view, placeholder_id(kind, object_code, singular), props)

        return ViewBoundary(view, placeholder_id(kind, object_code), {"object_code": object_code})

    def get_stats(self) -> dict[str, Any]:
        return {"registry": self.registry.get_stats(), "cache": self.cache.get_stats()}


# ==============================================================================
# GLOBAL RESOLVER INSTANCE
# ==============================================================================

_resolver: ViewResolver | None = None


def get_resolver(config_path: str | Path | None = None, deps: Any = None) -> ViewResolver:
    """Retrieve the global resolver, building it (and the registry) on first use.

    :param config_path: Optional explicit path to configuration file
    :param deps: Dependency bundle used when the resolver is first built
    """
    global _resolver

    if _resolver is None:
        registry = get_registry(str(config_path) if config_path is not None else None)
        _resolver = ViewResolver(registry, deps=deps)
        logger.debug("Created global view resolver")

    return _resolver


def reset_resolver() -> None:
    """Drop the global resolver and registry."""
    from tenantviews.registry.manager import reset_registry

    global _resolver
    _resolver = None
    reset_registry()
