"""Build-time view manifest.

The runtime never scans directories. Instead, a manifest enumerating every
``(tenant, object, view) -> implementation`` entry is generated once from the
companies directory convention and loaded into a :class:`ViewRegistry`::

    companies/
        0_default/
            objects/assets/layouts/asset-detail.detail_view_meta.py
            objects/assets/layouts/assets.table_view_meta.py
        acme/
            objects/assets/layouts/asset-detail.layout.py
            components/ui/detail_view_handler.py

Manifest format (YAML)::

    version: 1
    default_tenant: 0_default
    views:
      - tenant: acme
        object: assets
        view: asset-detail.layout
        path: companies/acme/objects/assets/layouts/asset-detail.layout.py
        attribute: layout
    handlers:
      - tenant: acme
        module: acme_views.handler

Relative ``path`` values are resolved against the manifest's directory.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from tenantviews.base.errors import RegistryError
from tenantviews.utils.config import DEFAULT_HANDLER_ATTRIBUTE, DEFAULT_TENANT
from tenantviews.utils.logger import get_logger

from .base import (
    DEFAULT_VIEW_ATTRIBUTE,
    HandlerRegistration,
    RegistryConfig,
    ViewRegistration,
)

logger = get_logger("registry")

MANIFEST_VERSION = 1
HANDLER_FILENAME = "detail_view_handler.py"

# Attribute exported by tier-1 layout modules (raw layout description, not a component)
LAYOUT_ATTRIBUTE = "layout"


# =============================================================================
# Manifest Models
# =============================================================================

class _SourceModel(BaseModel):
    """Common validation for entries pointing at a module or a file."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    module: str | None = Field(default=None, description="Dotted importable module")
    path: str | None = Field(default=None, description="Python file, relative to the manifest")

    @model_validator(mode="after")
    def _exactly_one_source(self):
        if (self.module is None) == (self.path is None):
            raise ValueError("exactly one of 'module' or 'path' must be set")
        return self


class ManifestView(_SourceModel):
    """One view implementation entry."""

    tenant: str = Field(min_length=1, description="Owning tenant")
    object_code: str = Field(alias="object", min_length=1, description="Business object code")
    view: str = Field(min_length=1, description="View name, e.g. 'asset-detail.layout'")
    attribute: str = Field(default=DEFAULT_VIEW_ATTRIBUTE, description="Module attribute holding the component")


class ManifestHandler(_SourceModel):
    """Tenant-scoped detail-view handler entry."""

    tenant: str = Field(min_length=1, description="Owning tenant")
    attribute: str | None = Field(
        default=None, description="Module attribute holding the handler (views.handler_attribute when omitted)"
    )


class ViewManifest(BaseModel):
    """Complete build-time manifest."""

    model_config = ConfigDict(extra="forbid")

    version: int = Field(default=MANIFEST_VERSION, description="Manifest format version")
    default_tenant: str = Field(default=DEFAULT_TENANT, min_length=1)
    views: list[ManifestView] = Field(default_factory=list)
    handlers: list[ManifestHandler] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_version(self):
        if self.version != MANIFEST_VERSION:
            raise ValueError(f"unsupported manifest version {self.version} (expected {MANIFEST_VERSION})")
        return self


# =============================================================================
# Loading
# =============================================================================

def load_manifest(path: str | Path) -> ViewManifest:
    """Load and validate a manifest file.

    :raises RegistryError: If the file is missing, is not valid YAML or fails validation
    """
    path = Path(path)
    if not path.is_file():
        raise RegistryError(f"View manifest not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise RegistryError(f"Invalid YAML in view manifest {path}: {e}") from e

    if not isinstance(data, dict):
        raise RegistryError(f"View manifest {path} must contain a mapping, got {type(data).__name__}")

    try:
        return ViewManifest.model_validate(data)
    except ValidationError as e:
        raise RegistryError(f"Invalid view manifest {path}:\n{e}") from e


def _resolve_file(base_dir: Path, value: str | None) -> str | None:
    if value is None:
        return None
    file_path = Path(value)
    if not file_path.is_absolute():
        file_path = base_dir / file_path
    return str(file_path)


def manifest_to_config(
    manifest: ViewManifest,
    base_dir: str | Path = ".",
    handler_attribute: str = DEFAULT_HANDLER_ATTRIBUTE,
) -> RegistryConfig:
    """Convert a manifest into registrations, anchoring relative paths at ``base_dir``."""
    base_dir = Path(base_dir)
    views = [
        ViewRegistration(
            tenant_id=entry.tenant,
            object_code=entry.object_code,
            view_name=entry.view,
            module_path=entry.module,
            file_path=_resolve_file(base_dir, entry.path),
            attribute=entry.attribute,
        )
        for entry in manifest.views
    ]
    handlers = [
        HandlerRegistration(
            tenant_id=entry.tenant,
            module_path=entry.module,
            file_path=_resolve_file(base_dir, entry.path),
            attribute=entry.attribute or handler_attribute,
        )
        for entry in manifest.handlers
    ]
    return RegistryConfig(views=views, handlers=handlers, default_tenant=manifest.default_tenant)


def load_registry_config(path: str | Path, handler_attribute: str = DEFAULT_HANDLER_ATTRIBUTE) -> RegistryConfig:
    """Load a manifest file straight into a :class:`RegistryConfig`."""
    path = Path(path)
    manifest = load_manifest(path)
    logger.debug(f"Loaded manifest {path}: {len(manifest.views)} views, {len(manifest.handlers)} handlers")
    return manifest_to_config(manifest, path.resolve().parent, handler_attribute)


# =============================================================================
# Generation (build step)
# =============================================================================

def _relative(path: Path, relative_to: Path | None) -> str:
    if relative_to is None:
        return str(path.resolve())
    return Path(os.path.relpath(path.resolve(), relative_to.resolve())).as_posix()


def _view_attribute(view_name: str) -> str:
    return LAYOUT_ATTRIBUTE if view_name.endswith(".layout") else DEFAULT_VIEW_ATTRIBUTE


def generate_manifest(
    root: str | Path,
    relative_to: str | Path | None = None,
    default_tenant: str = DEFAULT_TENANT,
) -> ViewManifest:
    """Scan a companies tree and enumerate every view and handler module.

    :param root: Directory holding one sub-directory per tenant
    :param relative_to: Directory the emitted paths are made relative to
        (normally the directory the manifest will be written to); absolute
        paths are emitted when omitted
    :param default_tenant: Default tenant recorded in the manifest
    :return: Manifest with entries sorted by tenant, object and view
    :raises RegistryError: If ``root`` is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise RegistryError(f"Companies directory not found: {root}")
    relative_to = Path(relative_to) if relative_to is not None else None

    views: list[ManifestView] = []
    handlers: list[ManifestHandler] = []

    for tenant_dir in sorted(p for p in root.iterdir() if p.is_dir()):
        tenant = tenant_dir.name
        if tenant.startswith((".", "_")):
            continue

        objects_dir = tenant_dir / "objects"
        if objects_dir.is_dir():
            for object_dir in sorted(p for p in objects_dir.iterdir() if p.is_dir()):
                layouts_dir = object_dir / "layouts"
                if not layouts_dir.is_dir():
                    continue
                for view_file in sorted(layouts_dir.glob("*.py")):
                    if view_file.name.startswith("_"):
                        continue
                    view_name = view_file.name[: -len(".py")]
                    views.append(
                        ManifestView(
                            tenant=tenant,
                            object_code=object_dir.name,
                            view=view_name,
                            path=_relative(view_file, relative_to),
                            attribute=_view_attribute(view_name),
                        )
                    )

        handler_file = tenant_dir / "components" / "ui" / HANDLER_FILENAME
        if handler_file.is_file():
            handlers.append(ManifestHandler(tenant=tenant, path=_relative(handler_file, relative_to)))

    logger.info(f"Discovered {len(views)} views and {len(handlers)} handlers under {root}")
    return ViewManifest(default_tenant=default_tenant, views=views, handlers=handlers)


def write_manifest(manifest: ViewManifest, path: str | Path) -> Path:
    """Write a manifest as YAML and return the written path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = manifest.model_dump(by_alias=True, exclude_none=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False, default_flow_style=False)
    return path
