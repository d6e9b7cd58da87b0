"""Resolution value types and view-name derivation."""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from tenantviews.registry.base import ResolutionKey

if TYPE_CHECKING:
    from .adapter import LazyView


class ViewKind(str, Enum):
    """Page-level view kinds."""

    LIST = "list"
    DETAIL = "detail"


class FormatTag(str, Enum):
    """Detail-view generations, in detection priority order."""

    NEW_WITH_HANDLER = "new_with_handler"
    CURRENT_META = "current_meta"
    LEGACY = "legacy"


# View-name suffixes
LAYOUT_SUFFIX = "layout"
DETAIL_META_SUFFIX = "detail_view_meta"
DETAIL_LEGACY_SUFFIX = "detail-view"
TABLE_META_SUFFIX = "table_view_meta"
TABLE_LEGACY_SUFFIX = "table-view"

TIER_SUFFIXES: dict[FormatTag, str] = {
    FormatTag.NEW_WITH_HANDLER: LAYOUT_SUFFIX,
    FormatTag.CURRENT_META: DETAIL_META_SUFFIX,
    FormatTag.LEGACY: DETAIL_LEGACY_SUFFIX,
}


def detail_base_name(singular_object_code: str) -> str:
    return f"{singular_object_code}-detail"


def detail_view_names(singular_object_code: str) -> dict[FormatTag, str]:
    """Candidate detail view names per tier.

    >>> detail_view_names("asset")[FormatTag.CURRENT_META]
    'asset-detail.detail_view_meta'
    """
    base = detail_base_name(singular_object_code)
    return {tag: f"{base}.{suffix}" for tag, suffix in TIER_SUFFIXES.items()}


def list_view_names(object_code: str) -> list[str]:
    """Candidate list view names, current generation first."""
    return [f"{object_code}.{TABLE_META_SUFFIX}", f"{object_code}.{TABLE_LEGACY_SUFFIX}"]


COMPONENT_CACHE_KIND = "component"


def cache_view_name(kind: ViewKind | str, base_name: str) -> str:
    """View name of a cache key, qualified by what was resolved.

    Detail pages, list pages and named components share one cache; the
    qualifier keeps their keys disjoint even when base names coincide.

    >>> cache_view_name(ViewKind.DETAIL, "asset-detail")
    'detail:asset-detail'
    """
    kind = kind.value if isinstance(kind, ViewKind) else kind
    return f"{kind}:{base_name}"


def placeholder_id(kind: ViewKind, object_code: str, singular_object_code: str | None = None) -> str:
    """Test id of the loading placeholder shown while a view loads."""
    if kind is ViewKind.DETAIL:
        return f"loading-{detail_base_name(singular_object_code)}"
    return f"loading-{object_code}"


@dataclass(frozen=True)
class ResolvedView:
    """Result of resolving one key.

    :param component: Uniform invocable produced by the adapter
    :param format: Detected detail generation, ``None`` for list views and components
    :param is_new_format: Whether the component expects no ``deps`` bundle
    :param source: Registry key the implementation was sourced from
    """

    component: "LazyView"
    format: FormatTag | None
    is_new_format: bool
    source: ResolutionKey


@dataclass(frozen=True)
class Detection:
    """Detector outcome: which tier matched and the entries backing it."""

    format: FormatTag
    source: ResolutionKey
    entry: Any
    handler: Any = None
    checked: tuple[ResolutionKey, ...] = ()

    @property
    def is_new_format(self) -> bool:
        return self.format is FormatTag.NEW_WITH_HANDLER
