"""View Resolution Package.

Format detection, adaptation, caching and the :class:`ViewResolver` facade.
"""

from .adapter import LazyView, build_component_view, build_handler_view, build_view
from .cache import ResolutionCache
from .detector import FormatDetector
from .resolver import ViewResolver, get_resolver, reset_resolver
from .types import (
    COMPONENT_CACHE_KIND,
    Detection,
    FormatTag,
    ResolvedView,
    ViewKind,
    cache_view_name,
    detail_base_name,
    detail_view_names,
    list_view_names,
    placeholder_id,
)

__all__ = [
    "LazyView",
    "build_component_view",
    "build_handler_view",
    "build_view",
    "ResolutionCache",
    "FormatDetector",
    "ViewResolver",
    "get_resolver",
    "reset_resolver",
    "Detection",
    "FormatTag",
    "ResolvedView",
    "ViewKind",
    "COMPONENT_CACHE_KIND",
    "cache_view_name",
    "detail_base_name",
    "detail_view_names",
    "list_view_names",
    "placeholder_id",
]
