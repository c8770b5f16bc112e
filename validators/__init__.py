"""Draft lottery configuration validation module."""

from .draft_rules import validate_draft_config, validate_draft_config_simple
from .types import InvalidReason, ValidationResult

__all__ = [
    "validate_draft_config",
    "validate_draft_config_simple",
    "ValidationResult",
    "InvalidReason",
]
