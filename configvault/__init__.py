"""
ConfigVault - Password-Protected Configuration Storage
======================================================

This package stores a single JSON configuration payload (including
cloud-storage credentials) on local disk, encrypted under a key derived
from a user password.

Security Notice:
- No secrets are logged
- Fail-closed design pattern
- Keys are derived per call and never cached
- All paths are OS-aware
"""

from configvault.core.config import SecureConfig
from configvault.core.errors import (
    ConfigError,
    ConfigIOError,
    ConfigNotFoundError,
    DecryptionError,
    EncryptionError,
    ErrorKind,
    InvalidPasswordError,
    SerializationError,
)
from configvault.core.logging import configure_package_logger, get_secure_logger
from configvault.core.store import SecureConfigStore

__version__ = "0.1.0"
__author__ = "ConfigVault Team"

__all__ = [
    "SecureConfig",
    "SecureConfigStore",
    "ConfigError",
    "ConfigIOError",
    "ConfigNotFoundError",
    "DecryptionError",
    "EncryptionError",
    "ErrorKind",
    "InvalidPasswordError",
    "SerializationError",
    "configure_package_logger",
    "get_secure_logger",
    "__version__",
]
