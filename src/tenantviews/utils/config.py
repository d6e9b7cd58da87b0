"""
Configuration System

YAML configuration for the view registry and resolver. Features:
- Single-file YAML loading with environment resolution
- ``.env`` loading from the working directory
- Dot-path access with defaults
- One cached builder per explicit path plus a default singleton

A missing config.yml is not an error: the resolver is usable as a plain
library, in which case every lookup returns its default.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from tenantviews.base.errors import ConfigurationError

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

DEFAULT_TENANT = "0_default"
DEFAULT_HANDLER_ATTRIBUTE = "detail_view_handler"


class ConfigBuilder:
    """
    Configuration builder.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution
    - Explicit fail-fast behavior for required configurations
    """

    # Sentinel object to distinguish between "no default provided" and "default is None"
    _REQUIRED = object()

    def _require_config(self, path: str, default: Any = _REQUIRED) -> Any:
        """
        Get configuration value with explicit control over required vs. optional settings.

        Args:
            path: Dot-separated configuration path (e.g., "views.default_tenant")
            default: Default value to use if config is missing. If not provided,
                    the configuration is considered required and will raise
                    ConfigurationError. If provided, logs a debug line when the
                    default is used.

        Returns:
            The configuration value, or default if provided and config is missing

        Raises:
            ConfigurationError: If required configuration (no default) is missing or None
        """
        value = self.get(path)

        if value is None:
            if default is self._REQUIRED:
                raise ConfigurationError(
                    f"Missing required configuration: '{path}' must be explicitly set in "
                    f"{self.config_path or 'config.yml'}."
                )
            logger.debug(f"Using default value for '{path}' = {default}")
            return default
        return value

    def __init__(self, config_path: str | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the config.yml file. If None, looks in current directory.

        Raises:
            FileNotFoundError: If an explicit config_path does not exist.
        """
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)  # Don't override existing env vars
            logger.debug(f"Loaded .env file from {dotenv_path}")

        if config_path is None:
            cwd_config = Path.cwd() / "config.yml"
            if cwd_config.exists():
                config_path = cwd_config
        elif not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config_path = Path(config_path) if config_path is not None else None
        if self.config_path is None:
            logger.debug(f"No config.yml found in {Path.cwd()}, using defaults")
            self.raw_config = {}
        else:
            self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            if not isinstance(config, dict):
                error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
                logger.error(error_msg)
                raise ConfigurationError(error_msg)

            logger.debug(f"Loaded configuration from {file_path}")
            return config
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise ConfigurationError(error_msg) from e

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
                    var_name = match.group(1)
                    default_value = match.group(2)
                else:  # $VAR_NAME
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    logger.info(f"Environment variable '{var_name}' not found, keeping original value")
                    return match.group(0)
                return env_value

            pattern = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
            return re.sub(pattern, replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from single file with environment variables resolved."""
        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))

        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def resolve_path(self, value: str) -> Path:
        """Resolve a path setting relative to the configuration file's directory."""
        path = Path(value).expanduser()
        if path.is_absolute():
            return path
        base = self.config_path.parent if self.config_path is not None else Path.cwd()
        return (base / path).resolve()

    def get_views_config(self) -> dict[str, Any]:
        """Build the resolver settings block with defaults applied."""
        default_tenant = self._require_config("views.default_tenant", DEFAULT_TENANT)
        if not isinstance(default_tenant, str) or not default_tenant.strip():
            raise ConfigurationError(
                f"views.default_tenant must be a non-empty string, got {default_tenant!r}"
            )

        manifest_path = self.get("views.manifest_path")
        return {
            "default_tenant": default_tenant.strip(),
            "manifest_path": self.resolve_path(manifest_path) if manifest_path else None,
            "handler_attribute": self._require_config(
                "views.handler_attribute", DEFAULT_HANDLER_ATTRIBUTE
            ),
        }


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def _get_config(config_path: str | None = None, set_as_default: bool = False) -> ConfigBuilder:
    """Get configuration instance (singleton pattern with optional explicit path).

    Args:
        config_path: Optional explicit path to configuration file. If provided,
                    this path is used instead of the default singleton behavior.
        set_as_default: If True and config_path is provided, also set this config as the
                       default singleton so future calls without config_path use it.

    Returns:
        ConfigBuilder instance for the specified or default configuration
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            config_file = os.environ.get("CONFIG_FILE")
            _default_config = ConfigBuilder(config_file) if config_file else ConfigBuilder()
            logger.debug("Initialized default configuration system")
        return _default_config

    resolved_path = str(Path(config_path).resolve())

    if resolved_path not in _config_cache:
        logger.info(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)

    if set_as_default:
        _default_config = _config_cache[resolved_path]
        logger.debug(f"Set explicit config as default: {resolved_path}")

    return _config_cache[resolved_path]


def reset_config() -> None:
    """Drop every cached configuration builder (used by tests)."""
    global _default_config
    _default_config = None
    _config_cache.clear()


# =============================================================================
# PUBLIC CONFIGURATION ACCESS
# =============================================================================


def get_config_builder(
    config_path: str | None = None, set_as_default: bool = False
) -> ConfigBuilder:
    """Get configuration builder instance for full config access.

    Args:
        config_path: Optional explicit path to configuration file. If None, uses
                    the default singleton (CONFIG_FILE env var or cwd/config.yml).
        set_as_default: If True and config_path is provided, also set this config
                       as the default singleton for future calls without config_path.

    Returns:
        ConfigBuilder instance

    Examples:
        >>> config = get_config_builder()
        >>> tenant = config.get("views.default_tenant", "0_default")
    """
    return _get_config(config_path, set_as_default)


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "views.default_tenant")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> tenant = get_config_value("views.default_tenant", "0_default")
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def get_views_config(config_path: str | None = None) -> dict[str, Any]:
    """Get resolver settings (default tenant, manifest path, handler attribute)."""
    return _get_config(config_path).get_views_config()
