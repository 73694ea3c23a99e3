"""Pytest configuration and shared fixtures for ConfigVault tests."""

import logging
from pathlib import Path

import pytest

from configvault.core.config import SecureConfig
from configvault.core.store.config_store import SecureConfigStore


# Test constants
TEST_PASSWORD = "correct horse battery staple"
TEST_CONFIG_JSON = '{"bucket": "backups", "region": "eu-west-1", "endpoint": null}'


@pytest.fixture
def config_path(tmp_path: Path) -> Path:
    """Return an envelope path inside a not-yet-created config directory."""
    return tmp_path / "ConfigVault" / "config.encrypted"


@pytest.fixture
def store(config_path: Path) -> SecureConfigStore:
    """Provide a store with the default work factor."""
    return SecureConfigStore(config_path)


@pytest.fixture
def saved_store(store: SecureConfigStore) -> SecureConfigStore:
    """Provide a store that already holds TEST_CONFIG_JSON."""
    store.save(TEST_CONFIG_JSON, TEST_PASSWORD)
    return store


@pytest.fixture(autouse=True)
def reset_config_singleton():
    """Keep SecureConfig.get_instance() from leaking between tests."""
    SecureConfig.reset_instance()
    yield
    SecureConfig.reset_instance()


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers attached to the package logger by a test."""
    yield
    logger = logging.getLogger("configvault")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def password() -> str:
    """Password used by saved_store."""
    return TEST_PASSWORD


@pytest.fixture
def config_json() -> str:
    """Payload stored by saved_store."""
    return TEST_CONFIG_JSON
