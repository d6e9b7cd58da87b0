"""Registry Display Command.

Shows the contents of a view registry: a summary, one table of view
registrations (tenant, object, view name, source) and one table of
tenant-scoped detail-view handlers.
"""

import sys

import click
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tenantviews.base.errors import TenantViewsError

from ._common import load_registry, print_error
from .styles import Styles, console


def display_registry_contents(registry, tenant: str | None = None, verbose: bool = False) -> None:
    """Print registry summary and tables.

    Args:
        registry: Registry to display
        tenant: Only show entries owned by this tenant
        verbose: Also show the implementation source of each entry
    """
    stats = registry.get_stats()

    console.print()
    console.print(Panel(Text("View Registry", style=Styles.HEADER), border_style=Styles.BORDER, expand=False))
    console.print()

    console.print(f"[{Styles.HEADER}]Registry Summary[/{Styles.HEADER}]")
    console.print(f"  [{Styles.ACCENT}]•[/{Styles.ACCENT}] Default tenant: {stats['default_tenant']}")
    console.print(f"  [{Styles.ACCENT}]•[/{Styles.ACCENT}] Views: {stats['views']}")
    console.print(f"  [{Styles.ACCENT}]•[/{Styles.ACCENT}] Handlers: {stats['handlers']}")
    console.print(f"  [{Styles.ACCENT}]•[/{Styles.ACCENT}] Tenants: {', '.join(stats['tenants']) or '-'}")
    console.print()

    views = registry.list_views(tenant_id=tenant)
    if views:
        _display_views_table(views, verbose)
    else:
        console.print(f"[{Styles.DIM}]No views registered{f' for {tenant}' if tenant else ''}[/{Styles.DIM}]\n")

    handlers = [h for h in registry.list_handlers() if tenant is None or h.tenant_id == tenant]
    if handlers:
        _display_handlers_table(handlers, verbose)


def _display_views_table(views, verbose: bool) -> None:
    console.print(f"[{Styles.HEADER}]Views[/{Styles.HEADER}]\n")

    table = Table(show_header=True, header_style=Styles.HEADER, border_style=Styles.DIM, expand=False)
    table.add_column("Tenant", style=Styles.ACCENT, no_wrap=True)
    table.add_column("Object", style=Styles.VALUE, no_wrap=True)
    table.add_column("View", no_wrap=True)
    if verbose:
        table.add_column("Source", style=Styles.PATH)

    for entry in views:
        row = [entry.key.tenant_id, entry.key.object_code, entry.key.view_name]
        if verbose:
            row.append(entry.source)
        table.add_row(*row)

    console.print(table)
    console.print()


def _display_handlers_table(handlers, verbose: bool) -> None:
    console.print(f"[{Styles.HEADER}]Detail-View Handlers[/{Styles.HEADER}]\n")

    table = Table(show_header=True, header_style=Styles.HEADER, border_style=Styles.DIM, expand=False)
    table.add_column("Tenant", style=Styles.ACCENT, no_wrap=True)
    if verbose:
        table.add_column("Source", style=Styles.PATH)

    for entry in handlers:
        if verbose:
            table.add_row(entry.tenant_id, entry.source)
        else:
            table.add_row(entry.tenant_id)

    console.print(table)
    console.print()


@click.command()
@click.option("--manifest", "-m", type=click.Path(exists=True, dir_okay=False), help="View manifest (default: views.manifest_path)")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Configuration file")
@click.option("--tenant", "-t", help="Only show entries owned by this tenant")
@click.option("--verbose", "-v", is_flag=True, help="Show implementation sources")
def registry(manifest, config_path, tenant, verbose):
    """Display registered views and detail-view handlers."""
    try:
        view_registry = load_registry(manifest, config_path)
    except TenantViewsError as e:
        print_error(e)
        sys.exit(1)

    display_registry_contents(view_registry, tenant=tenant, verbose=verbose)
