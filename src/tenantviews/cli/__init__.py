"""Command line interface for tenant views.

Commands:
    manifest: Generate the build-time view manifest from a companies tree
    registry: Display registered views and handlers
    resolve: Run resolution for a tenant and object and show the outcome
"""

from .main import cli, main

__all__ = ["cli", "main"]
