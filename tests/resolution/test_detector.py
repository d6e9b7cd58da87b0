"""Tests for tiered detail-view format detection."""

import logging

import pytest

from tenantviews.base.errors import ViewNotFoundError
from tenantviews.registry import ResolutionKey
from tenantviews.resolution import FormatDetector, FormatTag


def detect(registry, tenant_id="acme", object_code="assets", singular="asset"):
    return FormatDetector(registry).detect(tenant_id, object_code, singular)


class TestTierPriority:
    """Test that the first complete tier wins."""

    def test_layout_and_handler_beat_meta(self, build_registry):
        registry = build_registry(
            [("acme", "assets", "asset-detail.layout"), ("acme", "assets", "asset-detail.detail_view_meta")],
            handlers=["acme"],
        )
        detection = detect(registry)
        assert detection.format is FormatTag.NEW_WITH_HANDLER
        assert detection.is_new_format is True
        assert detection.handler.tenant_id == "acme"

    def test_default_layout_with_tenant_handler(self, build_registry):
        registry = build_registry([("0_default", "assets", "asset-detail.layout")], handlers=["acme"])
        detection = detect(registry)
        assert detection.format is FormatTag.NEW_WITH_HANDLER
        assert detection.source.tenant_id == "0_default"

    def test_meta_beats_legacy(self, build_registry):
        registry = build_registry(
            [("acme", "assets", "asset-detail.detail-view"), ("0_default", "assets", "asset-detail.detail_view_meta")]
        )
        detection = detect(registry)
        assert detection.format is FormatTag.CURRENT_META
        assert detection.source == ResolutionKey("0_default", "assets", "asset-detail.detail_view_meta")

    def test_legacy_only(self, build_registry):
        registry = build_registry([("acme", "assets", "asset-detail.detail-view")])
        detection = detect(registry)
        assert detection.format is FormatTag.LEGACY
        assert detection.is_new_format is False
        assert detection.handler is None


class TestPartialNewFormat:
    """Test that half of the layout/handler pair never matches."""

    def test_layout_without_handler_falls_through(self, build_registry, caplog):
        registry = build_registry(
            [("acme", "assets", "asset-detail.layout"), ("acme", "assets", "asset-detail.detail_view_meta")]
        )
        with caplog.at_level(logging.WARNING, logger="resolver"):
            detection = detect(registry)
        assert detection.format is FormatTag.CURRENT_META
        assert "no detail-view handler" in caplog.text

    def test_handler_without_layout_falls_through(self, build_registry):
        registry = build_registry([("acme", "assets", "asset-detail.detail-view")], handlers=["acme"])
        assert detect(registry).format is FormatTag.LEGACY

    def test_default_handler_not_inherited(self, build_registry):
        registry = build_registry(
            [("0_default", "assets", "asset-detail.layout"), ("0_default", "assets", "asset-detail.detail-view")],
            handlers=["0_default"],
        )
        assert detect(registry).format is FormatTag.LEGACY

    def test_partial_only_is_not_found(self, build_registry):
        registry = build_registry([("acme", "assets", "asset-detail.layout")])
        with pytest.raises(ViewNotFoundError):
            detect(registry)


class TestNotFound:
    """Test NotFound diagnostics."""

    def test_lists_six_candidates_for_custom_tenant(self, build_registry):
        registry = build_registry([("0_default", "assets", "asset-detail.detail-view")])
        with pytest.raises(ViewNotFoundError) as exc_info:
            detect(registry, object_code="widgets", singular="widget")

        error = exc_info.value
        assert error.tenant_id == "acme"
        assert error.object_code == "widgets"
        assert error.view_name == "widget-detail"
        assert error.checked_paths == [
            "companies/acme/objects/widgets/layouts/widget-detail.layout",
            "companies/0_default/objects/widgets/layouts/widget-detail.layout",
            "companies/acme/objects/widgets/layouts/widget-detail.detail_view_meta",
            "companies/0_default/objects/widgets/layouts/widget-detail.detail_view_meta",
            "companies/acme/objects/widgets/layouts/widget-detail.detail-view",
            "companies/0_default/objects/widgets/layouts/widget-detail.detail-view",
        ]
        assert "Checked 6 candidate paths" in str(error)

    def test_lists_three_candidates_for_default_tenant(self, build_registry):
        with pytest.raises(ViewNotFoundError) as exc_info:
            detect(build_registry([]), tenant_id="0_default", object_code="widgets", singular="widget")
        assert len(exc_info.value.checked) == 3

    def test_detection_records_checked_keys(self, build_registry):
        registry = build_registry([("acme", "assets", "asset-detail.detail_view_meta")])
        detection = detect(registry)
        assert len(detection.checked) == 4
