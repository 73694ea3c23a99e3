"""
Core module - Contains configuration, logging, errors and the store.
"""

from configvault.core.config import SecureConfig
from configvault.core.logging import get_secure_logger, SecureLogFilter
from configvault.core.store import SecureConfigStore

__all__ = ["SecureConfig", "get_secure_logger", "SecureLogFilter", "SecureConfigStore"]
