"""Adapters presenting every view generation through one call contract.

Whatever the detected generation, callers receive a :class:`LazyView`: an
awaitable-callable that loads its module on first use and is rendered with
``await view(object_code=..., record_id=...)``.

- ``NEW_WITH_HANDLER``: layout and handler are fetched together and joined.
  Rendering calls ``handler(object_code=..., record_id=..., layout=layout)``.
- ``CURRENT_META`` / ``LEGACY``: rendering calls the component itself with the
  dependency bundle bound as ``deps``.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from tenantviews.registry.manager import RegistryEntry
from tenantviews.utils.logger import get_logger

from .types import Detection, FormatTag

logger = get_logger("resolver")

Loader = Callable[[], Awaitable[Any]]


class LazyView:
    """Invocable view whose implementation is fetched on first render.

    Concurrent first renders share one in-flight fetch. A successful fetch is
    kept for the lifetime of the object; a failed fetch is not, so a later
    render fetches again.

    :param name: Diagnostic name
    :param loader: Coroutine function returning the render callable
    :param bound_props: Props merged under caller-supplied props on every render
    """

    def __init__(self, name: str, loader: Loader, bound_props: dict[str, Any] | None = None):
        self.name = name
        self._loader = loader
        self.bound_props = dict(bound_props or {})
        self._impl: Any = None
        self._loaded = False
        self._pending: asyncio.Task | None = None

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def load(self) -> Any:
        """Fetch (once) and return the render callable.

        :raises ViewLoadError: If the underlying module cannot be loaded
        """
        if self._loaded:
            return self._impl

        if self._pending is None:
            self._pending = asyncio.ensure_future(self._loader())

        pending = self._pending
        try:
            impl = await asyncio.shield(pending)
        except BaseException:
            if self._pending is pending and pending.done():
                self._pending = None
            raise

        self._impl = impl
        self._loaded = True
        self._pending = None
        return impl

    async def __call__(self, **props: Any) -> Any:
        impl = await self.load()
        result = impl(**{**self.bound_props, **props})
        if inspect.isawaitable(result):
            result = await result
        return result

    def __repr__(self) -> str:
        state = "loaded" if self._loaded else "pending" if self._pending else "unloaded"
        return f"LazyView({self.name!r}, {state})"


# =============================================================================
# Builders
# =============================================================================

def build_handler_view(layout_entry: RegistryEntry, handler_entry: RegistryEntry) -> LazyView:
    """Join a raw layout with its tenant's handler into one render callable.

    Both fetches always run to completion; the first failure is raised.
    """

    async def load():
        results = await asyncio.gather(layout_entry.load(), handler_entry.load(), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        layout, handler = results

        def render(object_code: str, record_id: Any = None, **_ignored: Any) -> Any:
            return handler(object_code=object_code, record_id=record_id, layout=layout)

        return render

    return LazyView(layout_entry.name, load)


def build_component_view(entry: RegistryEntry, deps: Any = None, *, bind_deps: bool = True) -> LazyView:
    """Wrap a self-contained component; ``deps`` is passed through untouched."""
    return LazyView(entry.name, entry.load, {"deps": deps} if bind_deps else None)


def build_view(detection: Detection, deps: Any = None) -> LazyView:
    """Build the invocable for a detection result."""
    if detection.format is FormatTag.NEW_WITH_HANDLER:
        return build_handler_view(detection.entry, detection.handler)
    return build_component_view(detection.entry, deps)
