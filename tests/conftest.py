"""
Pytest configuration and shared test utilities.

This module provides shared fixtures for all tenantviews tests: singleton
resets, in-memory registry factories and a writer for on-disk companies
trees.
"""

import textwrap
from pathlib import Path

import pytest

from tenantviews.registry import HandlerRegistration, RegistryConfig, ViewRegistration, ViewRegistry
from tenantviews.resolution.resolver import reset_resolver
from tenantviews.utils.config import reset_config


@pytest.fixture(autouse=True)
def reset_singletons(monkeypatch):
    """Every test starts without cached configuration, registry or resolver."""
    monkeypatch.delenv("CONFIG_FILE", raising=False)
    reset_config()
    reset_resolver()
    yield
    reset_config()
    reset_resolver()


# ===================================================================
# In-memory registrations
# ===================================================================

def make_component(label: str):
    """Component that echoes its label and the props it was rendered with."""

    def component(**props):
        return {"rendered": label, "props": props}

    component.label = label
    return component


def make_handler(tenant_id: str):
    """Detail-view handler that records what it was called with."""

    def handler(object_code, record_id, layout):
        return {"handled_by": tenant_id, "object_code": object_code, "record_id": record_id, "layout": layout}

    return handler


@pytest.fixture
def view_registration():
    """Factory for view registrations backed by in-process loaders."""

    def factory(tenant_id, object_code, view_name, component=None):
        target = component if component is not None else make_component(f"{tenant_id}/{view_name}")
        return ViewRegistration(tenant_id, object_code, view_name, loader=lambda: target)

    return factory


@pytest.fixture
def handler_registration():
    """Factory for handler registrations backed by in-process loaders."""

    def factory(tenant_id, handler=None):
        target = handler if handler is not None else make_handler(tenant_id)
        return HandlerRegistration(tenant_id, loader=lambda: target)

    return factory


@pytest.fixture
def build_registry(view_registration, handler_registration):
    """Build a registry from ``(tenant, object, view)`` triples and handler tenants."""

    def factory(views=(), handlers=(), default_tenant="0_default"):
        config = RegistryConfig(
            views=[view_registration(*spec) if isinstance(spec, tuple) else spec for spec in views],
            handlers=[handler_registration(h) if isinstance(h, str) else h for h in handlers],
            default_tenant=default_tenant,
        )
        return ViewRegistry(config)

    return factory


# ===================================================================
# On-disk companies tree
# ===================================================================

VIEW_MODULE = '''
LABEL = "{label}"


def render(**props):
    return {{"rendered": LABEL, "props": props}}
'''

LAYOUT_MODULE = '''
layout = {{"sections": ["{label}"]}}
'''

HANDLER_MODULE = '''
def detail_view_handler(object_code, record_id, layout):
    return {{"handled_by": "{label}", "object_code": object_code, "record_id": record_id, "layout": layout}}
'''


@pytest.fixture
def companies_tree(tmp_path):
    """Writer for ``companies/<tenant>/...`` modules under ``tmp_path``.

    Returns a helper with ``view(tenant, object, view_name)`` and
    ``handler(tenant)`` methods and a ``root`` attribute.
    """

    class CompaniesTree:
        root = tmp_path / "companies"

        def view(self, tenant_id: str, object_code: str, view_name: str, source: str | None = None) -> Path:
            path = self.root / tenant_id / "objects" / object_code / "layouts" / f"{view_name}.py"
            template = LAYOUT_MODULE if view_name.endswith(".layout") else VIEW_MODULE
            return self._write(path, source or template.format(label=f"{tenant_id}/{view_name}"))

        def handler(self, tenant_id: str, source: str | None = None) -> Path:
            path = self.root / tenant_id / "components" / "ui" / "detail_view_handler.py"
            return self._write(path, source or HANDLER_MODULE.format(label=tenant_id))

        @staticmethod
        def _write(path: Path, source: str) -> Path:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source))
            return path

    CompaniesTree.root.mkdir()
    return CompaniesTree()
