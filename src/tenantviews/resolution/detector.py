"""Detail-view format detection.

Three generations of detail view can coexist in one deployment. For a
``(tenant, object)`` pair the detector probes them in priority order and the
first complete match wins:

1. ``NEW_WITH_HANDLER``: a ``<singular>-detail.layout`` entry (tenant or
   default) together with a handler registered for the requesting tenant
2. ``CURRENT_META``: a ``<singular>-detail.detail_view_meta`` entry
3. ``LEGACY``: a ``<singular>-detail.detail-view`` entry

Half of a tier-1 pair is not a match. It is logged and detection continues
with tier 2.
"""

from tenantviews.base.errors import ViewNotFoundError
from tenantviews.registry.base import ResolutionKey
from tenantviews.registry.manager import ViewRegistry
from tenantviews.utils.logger import get_logger

from .types import Detection, FormatTag, detail_base_name, detail_view_names

logger = get_logger("resolver")


class FormatDetector:
    """Selects the detail-view generation for a tenant and object.

    :param registry: Registry to probe
    :type registry: ViewRegistry
    """

    def __init__(self, registry: ViewRegistry):
        self.registry = registry

    def detect(self, tenant_id: str, object_code: str, singular_object_code: str) -> Detection:
        """Run tiered detection.

        :param tenant_id: Normalized requesting tenant
        :param object_code: Plural business object code (``"assets"``)
        :param singular_object_code: Singular form used in view names (``"asset"``)
        :return: Detection describing the winning tier
        :raises ViewNotFoundError: If no tier matched; lists every probed key
        """
        names = detail_view_names(singular_object_code)
        policy = self.registry.policy
        checked: list[ResolutionKey] = []

        for tag, view_name in names.items():
            checked.extend(policy.candidates(ResolutionKey(tenant_id, object_code, view_name)))
            entry = self.registry.lookup(tenant_id, object_code, view_name)

            if tag is FormatTag.NEW_WITH_HANDLER:
                handler = self.registry.get_handler(tenant_id)
                if entry is not None and handler is not None:
                    return self._matched(tag, entry, checked, handler)
                if entry is not None:
                    logger.warning(
                        f"Layout {entry.key.path} found but tenant {tenant_id} has no "
                        f"detail-view handler; trying older formats"
                    )
                elif handler is not None:
                    logger.debug(f"Tenant {tenant_id} has a handler but no {view_name} for {object_code}")
                continue

            if entry is not None:
                return self._matched(tag, entry, checked)

        error = ViewNotFoundError(tenant_id, object_code, detail_base_name(singular_object_code), checked)
        logger.warning(str(error))
        raise error

    @staticmethod
    def _matched(tag, entry, checked, handler=None) -> Detection:
        logger.debug(f"Detected {tag.value} for {entry.key}")
        return Detection(format=tag, source=entry.key, entry=entry, handler=handler, checked=tuple(checked))
