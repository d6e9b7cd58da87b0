"""Centralized styling for the tenantviews CLI.

All command output goes through the shared Rich ``console`` with a theme
built from :class:`ColorTheme`, so commands use semantic style names
(``header``, ``accent``, ``path``) instead of raw colors.
"""

from dataclasses import dataclass

from rich.console import Console
from rich.theme import Theme


@dataclass
class ColorTheme:
    """Color theme for the CLI.

    Status colors follow UI conventions; the remaining colors define the
    tool's identity and can be overridden.
    """

    error: str = "#ff0000"
    warning: str = "#ffaa00"

    primary: str = "#5f87af"
    success: str = "#87af87"
    accent: str = "#87afd7"
    path: str = "#a2ae9d"
    info: str = "#8787af"

    text_secondary: str = "#888888"
    text_dim: str = "#666666"
    border_default: str = "#555555"
    border_dim: str = "#444444"


DEFAULT_THEME = ColorTheme()


def _build_rich_theme(theme: ColorTheme) -> Theme:
    return Theme(
        {
            "success": f"bold {theme.success}",
            "error": f"bold {theme.error}",
            "warning": f"bold {theme.warning}",
            "info": f"bold {theme.info}",
            "primary": f"bold {theme.primary}",
            "secondary": theme.text_secondary,
            "dim": theme.text_dim,
            "header": f"bold {theme.primary}",
            "label": "bold",
            "value": theme.success,
            "path": theme.path,
            "accent": theme.accent,
            "border": theme.border_default,
            "border_dim": theme.border_dim,
        }
    )


console = Console(theme=_build_rich_theme(DEFAULT_THEME))


class Styles:
    """Style names defined by the Rich theme."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    DIM = "dim"
    PRIMARY = "primary"
    SECONDARY = "secondary"

    HEADER = "header"
    LABEL = "label"
    VALUE = "value"
    PATH = "path"
    ACCENT = "accent"

    BORDER = "border"
    BORDER_DIM = "border_dim"


class Messages:
    """Pre-formatted message helpers for common patterns."""

    @staticmethod
    def success(text: str) -> str:
        return f"[success]✓ {text}[/success]"

    @staticmethod
    def error(text: str) -> str:
        return f"[error]✗ {text}[/error]"

    @staticmethod
    def warning(text: str) -> str:
        return f"[warning]⚠️  {text}[/warning]"

    @staticmethod
    def info(text: str) -> str:
        return f"[info]ℹ️  {text}[/info]"

    @staticmethod
    def header(text: str) -> str:
        return f"[header]{text}[/header]"

    @staticmethod
    def label_value(label: str, value: str) -> str:
        """Format a label-value pair."""
        return f"[label]{label}:[/label] [value]{value}[/value]"

    @staticmethod
    def path(text: str) -> str:
        return f"[path]{text}[/path]"


__all__ = ["ColorTheme", "DEFAULT_THEME", "console", "Styles", "Messages"]
