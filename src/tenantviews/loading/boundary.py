"""Suspension boundary for lazily loaded views.

A :class:`ViewBoundary` pairs a resolved view with the props it will be
rendered with and the placeholder displayed until its module arrives::

    boundary = resolver.request_view("acme", "assets", ViewKind.DETAIL, record_id="42")
    boundary.render()   # Placeholder(test_id='loading-asset-detail', text='Loading...')
    await boundary      # fetches the module and renders it
    boundary.render()   # the rendered output

Failures are never turned into an empty render: the boundary enters
``FAILED`` and re-raises the :class:`ViewLoadError`, or the error the view
raised while rendering, from :meth:`render`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from tenantviews.resolution.types import ResolvedView

LOADING_TEXT = "Loading..."


class BoundaryState(str, Enum):
    PENDING = "pending"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Placeholder:
    """Neutral loading indicator identified by a test id."""

    test_id: str
    text: str = LOADING_TEXT


class ViewBoundary:
    """Mounts a resolved view, showing a placeholder until it settles.

    :param view: Resolved view to mount
    :type view: ResolvedView
    :param placeholder_id: Test id of the loading placeholder
    :type placeholder_id: str
    :param props: Props the view is rendered with
    :type props: dict | None
    """

    def __init__(self, view: "ResolvedView", placeholder_id: str, props: dict[str, Any] | None = None):
        self.view = view
        self.placeholder = Placeholder(placeholder_id)
        self.props = dict(props or {})
        self.state = BoundaryState.PENDING
        self.output: Any = None
        self.error: Exception | None = None

    @property
    def is_new_format(self) -> bool:
        return self.view.is_new_format

    async def mount(self) -> Any:
        """Fetch the view's module, render it and return the output.

        Any failure, whether fetching or rendering, leaves the boundary in
        ``FAILED`` with the exception recorded on :attr:`error`.

        :raises ViewLoadError: If the module cannot be fetched
        :raises Exception: Whatever the view raised while rendering
        """
        try:
            output = await self.view.component(**self.props)
        except Exception as e:
            self.state = BoundaryState.FAILED
            self.error = e
            raise

        self.output = output
        self.error = None
        self.state = BoundaryState.READY
        return self.output

    def render(self) -> Any:
        """Current visible content: the placeholder, the output, or the recorded failure."""
        if self.state is BoundaryState.FAILED:
            raise self.error
        if self.state is BoundaryState.PENDING:
            return self.placeholder
        return self.output

    def __await__(self):
        return self.mount().__await__()

    def __repr__(self) -> str:
        return f"ViewBoundary({self.view.source}, state={self.state.value})"
