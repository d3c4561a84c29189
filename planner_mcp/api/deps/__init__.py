"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    extract_service_key,
    get_gateway,
    get_multiplexer,
    get_settings_dependency,
    require_service_key,
)

__all__ = [
    "extract_service_key",
    "get_gateway",
    "get_multiplexer",
    "get_settings_dependency",
    "require_service_key",
]
