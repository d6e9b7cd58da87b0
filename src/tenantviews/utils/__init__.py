"""Utility Package.

Modules:
    config: YAML configuration builder and access functions
    logger: Rich component logging
    log_filter: Temporary log suppression helpers
    naming: Singular/plural conversion for object codes
"""

from . import config, log_filter, logger, naming

__all__ = ["config", "logger", "log_filter", "naming"]
