"""Tests for the view registry, fallback policy and lazy entries."""

import sys
from unittest.mock import patch

import pytest

from tenantviews.base.errors import RegistryError, ViewLoadError
from tenantviews.registry import (
    HandlerRegistration,
    RegistryConfig,
    ResolutionKey,
    TenantFallbackPolicy,
    ViewRegistration,
    ViewRegistry,
    get_registry,
    reset_registry,
)
from tenantviews.registry.manager import RegistryEntry


class TestTenantFallbackPolicy:
    """Test the one-hop tenant fallback policy."""

    def test_candidates_for_custom_tenant(self):
        policy = TenantFallbackPolicy("0_default")
        key = ResolutionKey("acme", "assets", "asset-detail.layout")
        assert policy.candidates(key) == [key, ResolutionKey("0_default", "assets", "asset-detail.layout")]

    def test_candidates_for_default_tenant_probe_once(self):
        policy = TenantFallbackPolicy("0_default")
        key = ResolutionKey("0_default", "assets", "asset-detail.layout")
        assert policy.candidates(key) == [key]

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_normalize_blank_tenant(self, raw):
        assert TenantFallbackPolicy("0_default").normalize(raw) == "0_default"

    def test_normalize_strips(self):
        assert TenantFallbackPolicy().normalize("  acme ") == "acme"

    def test_rejects_blank_default(self):
        with pytest.raises(RegistryError):
            TenantFallbackPolicy(" ")


class TestLookup:
    """Test registry lookup semantics."""

    def test_exact_match(self, build_registry):
        registry = build_registry([("acme", "assets", "v"), ("0_default", "assets", "v")])
        entry = registry.lookup("acme", "assets", "v")
        assert entry.key.tenant_id == "acme"

    def test_falls_back_to_default_tenant(self, build_registry):
        registry = build_registry([("0_default", "assets", "v")])
        entry = registry.lookup("acme", "assets", "v")
        assert entry.key == ResolutionKey("0_default", "assets", "v")

    def test_absent_everywhere(self, build_registry):
        registry = build_registry([("0_default", "quotes", "v")])
        assert registry.lookup("acme", "assets", "v") is None

    def test_never_crosses_objects(self, build_registry):
        registry = build_registry([("acme", "quotes", "v")])
        assert registry.lookup("acme", "assets", "v") is None

    def test_single_hop_only(self, build_registry):
        # A third tenant is never consulted
        registry = build_registry([("globex", "assets", "v")])
        assert registry.lookup("acme", "assets", "v") is None

    def test_default_tenant_probes_once(self, build_registry):
        registry = build_registry([])
        with patch.object(registry.policy, "candidates", wraps=registry.policy.candidates) as spy:
            assert registry.lookup("0_default", "assets", "v") is None
        spy.assert_called_once_with(ResolutionKey("0_default", "assets", "v"))
        assert registry.policy.candidates(ResolutionKey("0_default", "assets", "v")) == [
            ResolutionKey("0_default", "assets", "v")
        ]

    def test_custom_default_tenant(self, build_registry):
        registry = build_registry([("base", "assets", "v")], default_tenant="base")
        assert registry.lookup("acme", "assets", "v").key.tenant_id == "base"

    def test_get_entry_is_exact(self, build_registry):
        registry = build_registry([("0_default", "assets", "v")])
        assert registry.get_entry(ResolutionKey("acme", "assets", "v")) is None
        assert ResolutionKey("0_default", "assets", "v") in registry


class TestHandlers:
    """Test tenant-scoped handler lookup."""

    def test_handler_for_tenant(self, build_registry):
        registry = build_registry(handlers=["acme"])
        assert registry.get_handler("acme").tenant_id == "acme"

    def test_handler_never_falls_back(self, build_registry):
        registry = build_registry(handlers=["0_default"])
        assert registry.get_handler("acme") is None

    def test_duplicate_handler_rejected(self, handler_registration):
        config = RegistryConfig(views=[], handlers=[handler_registration("acme"), handler_registration("acme")])
        with pytest.raises(RegistryError, match="acme"):
            ViewRegistry(config)


class TestIntrospection:
    """Test stats and listing helpers."""

    def test_duplicate_view_rejected(self, view_registration):
        config = RegistryConfig(views=[view_registration("acme", "assets", "v"), view_registration("acme", "assets", "v")])
        with pytest.raises(RegistryError, match="Duplicate view registration"):
            ViewRegistry(config)

    def test_stats(self, build_registry):
        registry = build_registry(
            [("acme", "assets", "a"), ("0_default", "assets", "a"), ("0_default", "quotes", "q")],
            handlers=["acme"],
        )
        stats = registry.get_stats()
        assert stats["views"] == 3
        assert stats["handlers"] == 1
        assert stats["tenants"] == ["0_default", "acme"]
        assert stats["objects"] == ["assets", "quotes"]
        assert stats["default_tenant"] == "0_default"
        assert len(registry) == 3

    def test_list_views_filters_and_sorts(self, build_registry):
        registry = build_registry(
            [("acme", "quotes", "b"), ("acme", "assets", "a"), ("0_default", "assets", "a")]
        )
        assert [str(e.key) for e in registry.list_views(tenant_id="acme")] == ["acme:assets:a", "acme:quotes:b"]
        assert [str(e.key) for e in registry.list_views(object_code="assets")] == [
            "0_default:assets:a",
            "acme:assets:a",
        ]

    def test_tenants_include_handler_only_tenants(self, build_registry):
        registry = build_registry([("0_default", "assets", "a")], handlers=["initech"])
        assert registry.tenants() == ["0_default", "initech"]


class TestRegistryEntry:
    """Test lazy loading of registry entries."""

    @pytest.mark.asyncio
    async def test_sync_loader(self):
        target = object()
        entry = RegistryEntry(ViewRegistration("acme", "assets", "v", loader=lambda: target), "v")
        assert await entry.load() is target

    @pytest.mark.asyncio
    async def test_async_loader(self):
        target = object()

        async def loader():
            return target

        entry = RegistryEntry(ViewRegistration("acme", "assets", "v", loader=loader), "v")
        assert await entry.load() is target

    @pytest.mark.asyncio
    async def test_loader_failure_wrapped(self):
        def loader():
            raise RuntimeError("boom")

        entry = RegistryEntry(ViewRegistration("acme", "assets", "v", loader=loader), "acme-v")
        with pytest.raises(ViewLoadError, match="acme-v") as exc_info:
            await entry.load()
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_module_path(self):
        reg = ViewRegistration("acme", "assets", "v", module_path="tenantviews.utils.naming", attribute="to_singular")
        entry = RegistryEntry(reg, "v")
        loaded = await entry.load()
        assert loaded("assets") == "asset"

    @pytest.mark.asyncio
    async def test_missing_module(self):
        reg = ViewRegistration("acme", "assets", "v", module_path="tenantviews_missing_module_xyz")
        with pytest.raises(ViewLoadError, match="ModuleNotFoundError"):
            await RegistryEntry(reg, "v").load()

    @pytest.mark.asyncio
    async def test_missing_attribute(self):
        reg = ViewRegistration("acme", "assets", "v", module_path="tenantviews.utils.naming", attribute="nope")
        with pytest.raises(ViewLoadError, match="attribute 'nope' not found"):
            await RegistryEntry(reg, "v").load()

    @pytest.mark.asyncio
    async def test_file_path(self, companies_tree):
        path = companies_tree.view("acme", "assets", "asset-detail.detail-view")
        entry = RegistryEntry(ViewRegistration("acme", "assets", "asset-detail.detail-view", file_path=str(path)), "v")
        render = await entry.load()
        assert render(record_id="1")["rendered"] == "acme/asset-detail.detail-view"

    @pytest.mark.asyncio
    async def test_file_module_reused(self, companies_tree):
        path = companies_tree.view("acme", "assets", "assets.table-view")
        reg = ViewRegistration("acme", "assets", "assets.table-view", file_path=str(path))
        first = await RegistryEntry(reg, "a").load()
        second = await RegistryEntry(reg, "b").load()
        assert first is second

    @pytest.mark.asyncio
    async def test_broken_file_not_left_in_sys_modules(self, companies_tree):
        path = companies_tree.view("acme", "assets", "assets.table-view", source="raise ValueError('bad view')\n")
        reg = ViewRegistration("acme", "assets", "assets.table-view", file_path=str(path))
        before = set(sys.modules)
        with pytest.raises(ViewLoadError, match="bad view"):
            await RegistryEntry(reg, "v").load()
        leaked = [name for name in set(sys.modules) - before if name.startswith("_tenantviews_dynamic_")]
        assert leaked == []

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        reg = HandlerRegistration("acme", file_path=str(tmp_path / "missing.py"))
        entry = RegistryEntry(reg, "handler")
        assert entry.key is None
        with pytest.raises(ViewLoadError, match="FileNotFoundError"):
            await entry.load()

    def test_source_description(self):
        reg = ViewRegistration("acme", "assets", "v", module_path="acme.views", attribute="render")
        assert RegistryEntry(reg, "v").source == "acme.views:render"


class TestGlobalRegistry:
    """Test the configuration-driven registry singleton."""

    def _write_config(self, tmp_path, body):
        config = tmp_path / "config.yml"
        config.write_text(body)
        return str(config)

    def test_builds_from_configured_manifest(self, tmp_path, companies_tree):
        companies_tree.view("0_default", "assets", "assets.table_view_meta")
        from tenantviews.registry import generate_manifest, write_manifest

        write_manifest(generate_manifest(companies_tree.root, relative_to=tmp_path), tmp_path / "views.yml")
        config = self._write_config(tmp_path, "views:\n  manifest_path: views.yml\n  default_tenant: 0_default\n")

        registry = get_registry(config)
        assert registry is get_registry()
        assert registry.lookup("acme", "assets", "assets.table_view_meta") is not None

        reset_registry()
        assert get_registry(config) is not registry

    def test_configured_default_tenant_wins(self, tmp_path):
        (tmp_path / "views.yml").write_text("default_tenant: 0_default\nviews: []\n")
        config = self._write_config(tmp_path, "views:\n  manifest_path: views.yml\n  default_tenant: base\n")
        assert get_registry(config).default_tenant == "base"

    def test_missing_manifest_setting(self, tmp_path):
        config = self._write_config(tmp_path, "logging:\n  rich_tracebacks: false\n")
        with pytest.raises(RegistryError, match="views.manifest_path"):
            get_registry(config)
