"""
Config Store Errors
===================

Closed error taxonomy for the encrypted configuration store.

Every failure the store can report is one of the ``ErrorKind`` members,
raised as the matching ``ConfigError`` subclass. Callers branch on the
class (or on ``error.kind``); the command layer collapses the kind to a
stable string code.

Security Notice:
- Messages never include passwords, keys or plaintext
- Authentication failures carry no detail about their cause
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Error kinds with their stable boundary codes."""
    IO = "io_error"
    SERIALIZATION = "serialization_error"
    ENCRYPTION = "encryption_error"
    DECRYPTION = "decryption_error"
    INVALID_PASSWORD = "invalid_password"
    CONFIG_NOT_FOUND = "config_not_found"

    @property
    def code(self) -> str:
        return self.value


class ConfigError(Exception):
    """Base class for all config store failures."""

    kind: ErrorKind

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)

    @property
    def default_message(self) -> str:
        return self.kind.name.replace("_", " ").capitalize()


class ConfigIOError(ConfigError):
    """An underlying file read, write or metadata call failed."""
    kind = ErrorKind.IO


class SerializationError(ConfigError):
    """The envelope file is not valid envelope JSON."""
    kind = ErrorKind.SERIALIZATION


class EncryptionError(ConfigError):
    """Cipher construction or the encrypt step failed."""
    kind = ErrorKind.ENCRYPTION


class DecryptionError(ConfigError):
    """
    The envelope could not be decrypted for a reason other than
    authentication: unsupported version or algorithm, bad base64,
    bad parameters, or a payload that is not UTF-8.
    """
    kind = ErrorKind.DECRYPTION


class InvalidPasswordError(ConfigError):
    """
    AEAD authentication failed.

    Deliberately covers both a wrong password and a tampered or
    corrupted file; the two are not distinguishable.
    """
    kind = ErrorKind.INVALID_PASSWORD

    @property
    def default_message(self) -> str:
        return "Invalid password"


class ConfigNotFoundError(ConfigError):
    """No configuration file exists at the expected path."""
    kind = ErrorKind.CONFIG_NOT_FOUND

    @property
    def default_message(self) -> str:
        return "Config file not found"
