"""Manifest Generation Command.

Build step that scans a companies directory tree and writes the YAML
manifest the registry is constructed from at runtime.
"""

import sys
from pathlib import Path

import click

from tenantviews.base.errors import TenantViewsError
from tenantviews.registry import generate_manifest, write_manifest
from tenantviews.utils.config import DEFAULT_TENANT
from tenantviews.utils.log_filter import quiet_logger

from ._common import QUIET_LOGGERS, print_error
from .styles import Messages, console


@click.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default="views.yml",
    show_default=True,
    help="Manifest file to write",
)
@click.option("--default-tenant", default=DEFAULT_TENANT, show_default=True, help="Fallback tenant recorded in the manifest")
def manifest(root, output, default_tenant):
    """Generate the view manifest from the companies directory ROOT."""
    output_path = Path(output)
    try:
        with quiet_logger(QUIET_LOGGERS):
            view_manifest = generate_manifest(root, relative_to=output_path.resolve().parent, default_tenant=default_tenant)
        write_manifest(view_manifest, output_path)
    except TenantViewsError as e:
        print_error(e)
        sys.exit(1)

    console.print(
        Messages.success(
            f"Wrote {len(view_manifest.views)} views and {len(view_manifest.handlers)} handlers to {output_path}"
        )
    )
