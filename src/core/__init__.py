"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import ValidationError, ValidationResult, require_symbol
from .logging_config import configure_logging, get_logger, LogContext
from .json import safe_json_dumps
from .id import (
    Prefix,
    new_menu_id,
    new_event_name,
    new_render_id,
)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "require_symbol",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "safe_json_dumps",
    # IDs
    "Prefix",
    "new_menu_id",
    "new_event_name",
    "new_render_id",
]
