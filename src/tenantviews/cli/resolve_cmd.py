"""Resolve Command.

Runs resolution for one tenant and object and explains the outcome: which
format tier won, which tenant the implementation came from, and every
candidate path that was considered. NotFound diagnostics exit with status 1.
"""

import sys

import click
from rich.markup import escape

from tenantviews.base.errors import TenantViewsError, ViewNotFoundError
from tenantviews.resolution import ViewKind, ViewResolver
from tenantviews.utils.log_filter import quiet_logger

from ._common import QUIET_LOGGERS, load_registry, print_error
from .styles import Messages, Styles, console


@click.command()
@click.argument("tenant")
@click.argument("object_code", metavar="OBJECT")
@click.option(
    "--kind",
    "-k",
    type=click.Choice([k.value for k in ViewKind]),
    default=ViewKind.DETAIL.value,
    show_default=True,
    help="View kind to resolve",
)
@click.option("--manifest", "-m", type=click.Path(exists=True, dir_okay=False), help="View manifest (default: views.manifest_path)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Configuration file")
def resolve(tenant, object_code, kind, manifest, config_path):
    """Resolve the view TENANT would see for OBJECT."""
    try:
        resolver = ViewResolver(load_registry(manifest, config_path))
        with quiet_logger(QUIET_LOGGERS):
            view = resolver.resolve(tenant, object_code, kind)
    except ViewNotFoundError as e:
        console.print(Messages.error(f"No {kind} view for {escape(object_code)} (tenant {escape(e.tenant_id)})"))
        console.print(f"[{Styles.DIM}]Checked {len(e.checked)} candidate paths:[/{Styles.DIM}]")
        for path in e.checked_paths:
            console.print(f"  [{Styles.PATH}]{escape(path)}[/{Styles.PATH}]")
        sys.exit(1)
    except TenantViewsError as e:
        print_error(e)
        sys.exit(1)

    tenant_id = resolver.normalize_tenant(tenant)
    console.print(Messages.success(f"Resolved {kind} view for {escape(object_code)}"))
    console.print(Messages.label_value("Tenant", tenant_id))
    console.print(Messages.label_value("Format", view.format.value if view.format else "-"))
    console.print(Messages.label_value("New format", str(view.is_new_format)))
    console.print(Messages.label_value("View", view.source.view_name))
    source_tenant = view.source.tenant_id
    if source_tenant != tenant_id:
        source_tenant += " (fallback)"
    console.print(Messages.label_value("Source tenant", source_tenant))
    console.print(Messages.label_value("Path", view.source.path))
