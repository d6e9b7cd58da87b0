"""Helpers shared by CLI commands."""

from rich.markup import escape

from tenantviews.registry import ViewRegistry, get_registry
from tenantviews.utils.log_filter import quiet_logger

from .styles import Messages, console

QUIET_LOGGERS = ["registry", "resolver", "CONFIG"]


def load_registry(manifest: str | None, config_path: str | None) -> ViewRegistry:
    """Build a registry from an explicit manifest or from configuration."""
    with quiet_logger(QUIET_LOGGERS):
        if manifest:
            return ViewRegistry.from_manifest(manifest)
        return get_registry(config_path)


def print_error(error: Exception) -> None:
    console.print(Messages.error(escape(str(error))))
