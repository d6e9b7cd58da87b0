"""Error Hierarchy - Exceptions Raised by View Resolution

This module provides the exception classes raised by the registry, the
resolver and the loading boundary. Every exception derives from
:class:`TenantViewsError` so callers can catch the whole family at one seam.

Error Taxonomy:
    - **RegistryError**: Invalid registrations, duplicate keys, broken manifests
    - **ConfigurationError**: Invalid configuration values
    - **ViewNotFoundError**: No registry entry matched, even after tenant fallback
      and (for detail views) after every format tier was evaluated
    - **ViewLoadError**: The asynchronous fetch of a resolved candidate failed

A layout registered without its handler (or a handler without a layout) is
not an error: detection treats it as "tier not satisfied" and moves on.

.. note::
   The resolver performs no retries and no silent degradation beyond the two
   sanctioned fallbacks (tenant to default tenant, tier N to tier N+1). Every
   failure reaches the caller with enough detail to diagnose it.

.. seealso::
   :mod:`tenantviews.resolution.detector` : Where NotFound is raised for detail views
   :mod:`tenantviews.registry.manager` : Where load failures are raised
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tenantviews.registry.base import ResolutionKey


class TenantViewsError(Exception):
    """Base exception for all tenant view errors.

    This is the root exception class for all custom exceptions within the
    package. It provides a common base for error handling at the edges of the
    application (CLI, request handlers).
    """

    pass


class RegistryError(TenantViewsError):
    """Exception for registry-related errors.

    Raised when registrations are malformed, when two registrations claim the
    same key, or when a manifest cannot be read.
    """

    pass


class ConfigurationError(TenantViewsError):
    """Exception for configuration-related errors.

    Raised when configuration files are invalid, missing required settings,
    or contain incompatible values.
    """

    pass


class ViewResolutionError(TenantViewsError):
    """Base class for failures while turning a request into a view."""

    pass


class ViewNotFoundError(ViewResolutionError):
    """No implementation exists for the requested tenant, object and view.

    The message names the tenant, the object, the view and every candidate
    path that was probed, in probe order.

    :param tenant_id: Tenant that made the request (after normalization)
    :type tenant_id: str
    :param object_code: Business object code (e.g. ``"assets"``)
    :type object_code: str
    :param view_name: Base view name that was being resolved
    :type view_name: str
    :param checked: Every registry key that was probed
    :type checked: Sequence[ResolutionKey]
    """

    def __init__(
        self,
        tenant_id: str,
        object_code: str,
        view_name: str,
        checked: Sequence[ResolutionKey],
    ):
        self.tenant_id = tenant_id
        self.object_code = object_code
        self.view_name = view_name
        self.checked = list(checked)
        super().__init__(self._build_message())

    @property
    def checked_paths(self) -> list[str]:
        return [key.path for key in self.checked]

    def _build_message(self) -> str:
        paths = "\n".join(f"  - {path}" for path in self.checked_paths) or "  (none)"
        return (
            f"View not found: {self.view_name} for object {self.object_code} "
            f"(tenant {self.tenant_id}).\n"
            f"Checked {len(self.checked)} candidate paths:\n{paths}"
        )


class ViewLoadError(TenantViewsError):
    """The module behind a resolved view could not be fetched.

    Always chained to the original exception. Raised when the view is
    rendered, not when it is resolved.

    :param name: Diagnostic name of the view that failed to load
    :type name: str
    :param reason: Short description of the failure
    :type reason: str
    """

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to load view {name}: {reason}")
