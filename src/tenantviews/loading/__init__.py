"""Loading boundary shown while a resolved view's module is fetched."""

from .boundary import BoundaryState, Placeholder, ViewBoundary

__all__ = ["BoundaryState", "Placeholder", "ViewBoundary"]
