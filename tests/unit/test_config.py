"""Unit tests for SecureConfig and its sections."""

from pathlib import Path

import pytest

from configvault.core.config import (
    LoggingConfig,
    PathConfig,
    SecureConfig,
    StoreConfig,
)


class TestStoreConfig:
    """Tests for StoreConfig validation."""

    def test_defaults(self):
        """Test default store settings."""
        config = StoreConfig()
        assert config.file_name == "config.encrypted"
        assert config.key_derivation_iterations == 100_000
        assert config.salt_length == 32

    def test_iteration_floor(self):
        """Test work factors below 100,000 are rejected."""
        with pytest.raises(ValueError, match="iterations"):
            StoreConfig(key_derivation_iterations=99_999)

    def test_salt_floor(self):
        """Test short salts are rejected."""
        with pytest.raises(ValueError, match="Salt"):
            StoreConfig(salt_length=8)

    @pytest.mark.parametrize("name", ["", "sub/config.encrypted", "../config.encrypted"])
    def test_file_name_must_be_bare(self, name):
        """Test file names with directories are rejected."""
        with pytest.raises(ValueError, match="file_name"):
            StoreConfig(file_name=name)


class TestPathAndLoggingConfig:
    """Tests for PathConfig and LoggingConfig validation."""

    def test_relative_paths_rejected(self, tmp_path):
        """Test relative directories are refused."""
        with pytest.raises(ValueError, match="absolute"):
            PathConfig(config_dir=Path("relative"), log_dir=tmp_path)

    def test_default_paths_are_absolute(self):
        """Test OS defaults are absolute and app-specific."""
        paths = PathConfig()
        assert paths.config_dir.is_absolute()
        assert paths.config_dir.name == "ConfigVault"

    def test_invalid_log_level(self):
        """Test unknown log levels are refused."""
        with pytest.raises(ValueError, match="log level"):
            LoggingConfig(level="LOUD")


class TestSecureConfig:
    """Tests for the SecureConfig container."""

    @pytest.fixture
    def config(self, tmp_path):
        return SecureConfig(
            paths=PathConfig(config_dir=tmp_path / "cfg", log_dir=tmp_path / "logs"),
        )

    def test_config_path(self, config, tmp_path):
        """Test the envelope path joins directory and file name."""
        assert config.config_path == tmp_path / "cfg" / "config.encrypted"

    def test_immutable(self, config):
        """Test attributes cannot be replaced after construction."""
        with pytest.raises(AttributeError, match="immutable"):
            config._store = StoreConfig()

    def test_repr_is_safe(self, config):
        """Test repr shows only the fingerprint and app name."""
        assert repr(config) == f"SecureConfig(hash={config.config_hash}, app=ConfigVault)"

    def test_ensure_directories(self, config, tmp_path):
        """Test the config directory is created; the log dir only when file logging is on."""
        config.ensure_directories()
        assert (tmp_path / "cfg").is_dir()
        assert not (tmp_path / "logs").exists()

    def test_load_env_overrides(self, monkeypatch, tmp_path):
        """Test environment variables override defaults."""
        monkeypatch.setenv("CONFIGVAULT_PATHS__CONFIG_DIR", str(tmp_path / "env-cfg"))
        monkeypatch.setenv("CONFIGVAULT_STORE__FILE_NAME", "settings.enc")
        monkeypatch.setenv("CONFIGVAULT_STORE__KEY_DERIVATION_ITERATIONS", "250000")
        monkeypatch.setenv("CONFIGVAULT_LOGGING__LEVEL", "DEBUG")
        monkeypatch.setenv("CONFIGVAULT_LOGGING__ENABLE_CONSOLE", "false")

        config = SecureConfig.load()

        assert config.config_path == tmp_path / "env-cfg" / "settings.enc"
        assert config.store.key_derivation_iterations == 250_000
        assert config.logging.level == "DEBUG"
        assert config.logging.enable_console is False

    def test_load_ignores_sensitive_keys(self, monkeypatch):
        """Test sensitive-looking variables are never read."""
        monkeypatch.setenv("CONFIGVAULT_STORE__PASSWORD", "hunter2")
        monkeypatch.setenv("CONFIGVAULT_STORE__SECRET_KEY", "abc")

        overrides = SecureConfig._parse_env_overrides("CONFIGVAULT")

        assert "store.password" not in overrides
        assert "store.secret_key" not in overrides

    def test_load_rejects_weak_iterations(self, monkeypatch):
        """Test an environment override cannot lower the work factor floor."""
        monkeypatch.setenv("CONFIGVAULT_STORE__KEY_DERIVATION_ITERATIONS", "1000")
        with pytest.raises(ValueError):
            SecureConfig.load()

    def test_singleton(self):
        """Test get_instance caches until reset."""
        first = SecureConfig.get_instance()
        assert SecureConfig.get_instance() is first

        SecureConfig.reset_instance()
        assert SecureConfig.get_instance() is not first
