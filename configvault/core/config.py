"""
Secure Configuration Module
===========================

Provides immutable, environment-aware settings for the config store itself
(where the envelope lives, how it is written, how logging behaves).

Security Features:
- Immutable configuration after initialization
- Environment variable override support
- Sensitive-looking keys are never read from the environment
- Work-factor floor for key derivation
- OS-aware path handling
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Any, Optional

from configvault.core.crypto.kdf import PBKDF2_ITERATIONS, SALT_SIZE
from configvault.utils.paths import (
    APP_NAME,
    ensure_private_directory,
    get_app_config_dir,
    get_app_log_dir,
)


# Security Constants
_SENSITIVE_KEYS: Final[frozenset[str]] = frozenset({
    "password", "secret", "key", "token", "api_key",
    "private", "credential", "auth", "salt", "nonce"
})

MIN_KDF_ITERATIONS: Final[int] = 100_000
MIN_SALT_LENGTH: Final[int] = 16
DEFAULT_CONFIG_FILE: Final[str] = "config.encrypted"


def _is_sensitive_key(key: str) -> bool:
    """Check if a configuration key might contain sensitive data."""
    key_lower = key.lower()
    # Only the field name is checked, not the section prefix
    field_name = key_lower.rsplit(".", 1)[-1]
    if field_name == "key_derivation_iterations":
        return False
    return any(sensitive in field_name for sensitive in _SENSITIVE_KEYS)


@dataclass(frozen=True, slots=True)
class PathConfig:
    """Immutable path configuration with OS-aware defaults."""

    config_dir: Path = field(default_factory=get_app_config_dir)
    log_dir: Path = field(default_factory=get_app_log_dir)

    def __post_init__(self) -> None:
        """Validate paths after initialization."""
        for field_name in ["config_dir", "log_dir"]:
            path = getattr(self, field_name)
            if not path.is_absolute():
                raise ValueError(f"{field_name} must be an absolute path: {path}")


@dataclass(frozen=True, slots=True)
class StoreConfig:
    """Immutable encrypted store configuration."""

    file_name: str = DEFAULT_CONFIG_FILE
    key_derivation_iterations: int = PBKDF2_ITERATIONS
    salt_length: int = SALT_SIZE

    def __post_init__(self) -> None:
        """Validate store settings."""
        if not self.file_name or Path(self.file_name).name != self.file_name:
            raise ValueError(f"file_name must be a bare file name: {self.file_name!r}")
        if self.key_derivation_iterations < MIN_KDF_ITERATIONS:
            raise ValueError(f"Key derivation iterations must be at least {MIN_KDF_ITERATIONS:,}")
        if self.salt_length < MIN_SALT_LENGTH:
            raise ValueError(f"Salt length must be at least {MIN_SALT_LENGTH} bytes")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Immutable logging configuration."""

    level: str = "INFO"
    max_file_size_bytes: int = 10 * 1024 * 1024  # 10 MB
    backup_count: int = 5
    enable_console: bool = True
    enable_file: bool = False
    enable_json: bool = False

    def __post_init__(self) -> None:
        """Validate logging settings."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.level.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {self.level}")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class SecureConfig:
    """
    Centralized, immutable configuration loader with environment override support.

    Usage:
        config = SecureConfig.load()
        store = SecureConfigStore.from_config(config)
        iterations = config.store.key_derivation_iterations

    Environment variables are prefixed with CONFIGVAULT_ and use double
    underscores between section and key.
    """

    __slots__ = ("_paths", "_store", "_logging", "_app_name", "_frozen", "_config_hash")

    _instance: Optional[SecureConfig] = None

    def __init__(
        self,
        paths: Optional[PathConfig] = None,
        store: Optional[StoreConfig] = None,
        logging: Optional[LoggingConfig] = None,
        app_name: str = APP_NAME,
    ) -> None:
        """Initialize configuration. Use SecureConfig.load() for standard initialization."""
        object.__setattr__(self, "_frozen", False)
        object.__setattr__(self, "_paths", paths or PathConfig())
        object.__setattr__(self, "_store", store or StoreConfig())
        object.__setattr__(self, "_logging", logging or LoggingConfig())
        object.__setattr__(self, "_app_name", app_name)
        object.__setattr__(self, "_config_hash", self._compute_hash())
        object.__setattr__(self, "_frozen", True)

    def _compute_hash(self) -> str:
        """Compute a short fingerprint of the configuration."""
        config_str = f"{self._paths}|{self._store}|{self._logging}|{self._app_name}"
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @property
    def paths(self) -> PathConfig:
        return self._paths

    @property
    def store(self) -> StoreConfig:
        return self._store

    @property
    def logging(self) -> LoggingConfig:
        return self._logging

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def config_hash(self) -> str:
        return self._config_hash

    @property
    def config_path(self) -> Path:
        """Full path of the encrypted envelope file."""
        return self._paths.config_dir / self._store.file_name

    @classmethod
    def load(cls, env_prefix: str = "CONFIGVAULT") -> SecureConfig:
        """
        Load configuration with environment variable overrides.

        Examples:
            CONFIGVAULT_LOGGING__LEVEL=DEBUG
            CONFIGVAULT_PATHS__CONFIG_DIR=/custom/path
            CONFIGVAULT_STORE__KEY_DERIVATION_ITERATIONS=200000

        Args:
            env_prefix: Prefix for environment variables (default: CONFIGVAULT)

        Returns:
            Configured SecureConfig instance

        Raises:
            ValueError: If an override fails validation
        """
        env_overrides = cls._parse_env_overrides(env_prefix)

        paths_kwargs: dict[str, Any] = {}
        if "paths.config_dir" in env_overrides:
            paths_kwargs["config_dir"] = Path(env_overrides["paths.config_dir"])
        if "paths.log_dir" in env_overrides:
            paths_kwargs["log_dir"] = Path(env_overrides["paths.log_dir"])

        store_kwargs: dict[str, Any] = {}
        if "store.file_name" in env_overrides:
            store_kwargs["file_name"] = env_overrides["store.file_name"]
        if "store.key_derivation_iterations" in env_overrides:
            store_kwargs["key_derivation_iterations"] = int(
                env_overrides["store.key_derivation_iterations"]
            )

        logging_kwargs: dict[str, Any] = {}
        if "logging.level" in env_overrides:
            logging_kwargs["level"] = env_overrides["logging.level"]
        if "logging.enable_console" in env_overrides:
            logging_kwargs["enable_console"] = _parse_bool(env_overrides["logging.enable_console"])
        if "logging.enable_file" in env_overrides:
            logging_kwargs["enable_file"] = _parse_bool(env_overrides["logging.enable_file"])
        if "logging.enable_json" in env_overrides:
            logging_kwargs["enable_json"] = _parse_bool(env_overrides["logging.enable_json"])

        return cls(
            paths=PathConfig(**paths_kwargs) if paths_kwargs else None,
            store=StoreConfig(**store_kwargs) if store_kwargs else None,
            logging=LoggingConfig(**logging_kwargs) if logging_kwargs else None,
        )

    @staticmethod
    def _parse_env_overrides(prefix: str) -> dict[str, str]:
        """Parse environment variables with the given prefix."""
        overrides: dict[str, str] = {}
        prefix_upper = f"{prefix.upper()}_"

        for key, value in os.environ.items():
            if key.startswith(prefix_upper):
                # CONFIGVAULT_SECTION__KEY -> section.key
                config_key = key[len(prefix_upper):].lower().replace("__", ".")

                # SECURITY: Skip sensitive keys from environment
                if _is_sensitive_key(config_key):
                    continue

                overrides[config_key] = value

        return overrides

    @classmethod
    def get_instance(cls) -> SecureConfig:
        """Get or create the process-wide configuration instance."""
        if cls._instance is None:
            cls._instance = cls.load()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Reset the singleton instance. Use only for testing."""
        cls._instance = None

    def ensure_directories(self) -> None:
        """Create the config and log directories with owner-only permissions."""
        ensure_private_directory(self._paths.config_dir)
        if self._logging.enable_file:
            ensure_private_directory(self._paths.log_dir)

    def __repr__(self) -> str:
        """Safe string representation."""
        return f"SecureConfig(hash={self._config_hash}, app={self._app_name})"

    def __setattr__(self, name: str, value: Any) -> None:
        """Prevent modification after initialization."""
        if getattr(self, "_frozen", False):
            raise AttributeError("SecureConfig is immutable after initialization")
        super().__setattr__(name, value)
