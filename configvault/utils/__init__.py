"""
Utils module - Utility functions and helpers.

This module contains utility functions used throughout ConfigVault.
"""

from configvault.utils.paths import (
    get_app_config_dir,
    get_app_log_dir,
    ensure_private_directory,
    restrict_file_permissions,
)
from configvault.utils.validators import (
    ValidationError,
    validate_path_argument,
    validate_text_argument,
)

__all__ = [
    "get_app_config_dir",
    "get_app_log_dir",
    "ensure_private_directory",
    "restrict_file_permissions",
    "ValidationError",
    "validate_path_argument",
    "validate_text_argument",
]
