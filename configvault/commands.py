"""
Command Boundary
================

String-typed entry points for a UI or IPC layer.

Each command runs one store operation and returns a CommandResult
instead of raising. Failures carry a stable ``code`` the caller can
branch on (for example re-prompting on ``invalid_password``) and a
short, fixed user-facing message. Exception text never crosses this
boundary.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, asdict
from typing import Any, Callable, Final, Optional

from configvault.core.errors import ConfigError, ErrorKind
from configvault.core.store.config_store import SecureConfigStore
from configvault.utils.validators import (
    ValidationError,
    validate_path_argument,
    validate_text_argument,
)

INVALID_ARGUMENT: Final[str] = "invalid_argument"
UNKNOWN_COMMAND: Final[str] = "unknown_command"

_USER_MESSAGES: Final[dict[ErrorKind, str]] = {
    ErrorKind.IO: "Could not read or write the configuration file",
    ErrorKind.SERIALIZATION: "The configuration file is corrupt",
    ErrorKind.ENCRYPTION: "The configuration could not be encrypted",
    ErrorKind.DECRYPTION: "The configuration file format is not supported",
    ErrorKind.INVALID_PASSWORD: "Incorrect password",
    ErrorKind.CONFIG_NOT_FOUND: "No saved configuration found",
}

_log = logging.getLogger("configvault.commands")


@dataclass(frozen=True, slots=True)
class CommandError:
    """Error as seen by the UI layer."""
    code: str
    message: str

    @classmethod
    def from_exception(cls, exc: ConfigError) -> "CommandError":
        return cls(code=exc.kind.code, message=_USER_MESSAGES[exc.kind])


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Outcome of a command: a value on success, an error otherwise."""
    ok: bool
    value: Any = None
    error: Optional[CommandError] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def __repr__(self) -> str:
        # value may be decrypted configuration
        if self.ok:
            return f"CommandResult(ok=True, value_type={type(self.value).__name__})"
        return f"CommandResult(ok=False, error={self.error!r})"


def _run(name: str, operation: Callable[[], Any]) -> CommandResult:
    try:
        value = operation()
    except ValidationError as e:
        _log.info("%s rejected: %s", name, e)
        return CommandResult(ok=False, error=CommandError(INVALID_ARGUMENT, str(e)))
    except ConfigError as e:
        _log.info("%s failed: %s", name, e.kind.code)
        return CommandResult(ok=False, error=CommandError.from_exception(e))
    return CommandResult(ok=True, value=value)


def _store(store: Optional[SecureConfigStore]) -> SecureConfigStore:
    return store if store is not None else SecureConfigStore.from_config()


def save_config(
    config_json: str,
    password: str,
    store: Optional[SecureConfigStore] = None,
) -> CommandResult:
    def operation() -> None:
        validate_text_argument(config_json, "config_json")
        validate_text_argument(password, "password")
        _store(store).save(config_json, password)

    return _run("save_config", operation)


def load_config(password: str, store: Optional[SecureConfigStore] = None) -> CommandResult:
    def operation() -> str:
        validate_text_argument(password, "password")
        return _store(store).load(password)

    return _run("load_config", operation)


def config_exists(store: Optional[SecureConfigStore] = None) -> CommandResult:
    return _run("config_exists", lambda: _store(store).exists())


def delete_config(store: Optional[SecureConfigStore] = None) -> CommandResult:
    return _run("delete_config", lambda: _store(store).delete())


def export_config(
    export_path: str,
    config_json: str,
    store: Optional[SecureConfigStore] = None,
) -> CommandResult:
    def operation() -> None:
        destination = validate_path_argument(export_path, "export_path")
        validate_text_argument(config_json, "config_json")
        _store(store).export_plaintext(destination, config_json)

    return _run("export_config", operation)


def import_config(import_path: str, store: Optional[SecureConfigStore] = None) -> CommandResult:
    def operation() -> str:
        source = validate_path_argument(import_path, "import_path")
        return _store(store).import_plaintext(source)

    return _run("import_config", operation)


COMMANDS: Final[dict[str, Callable[..., CommandResult]]] = {
    "save_config": save_config,
    "load_config": load_config,
    "config_exists": config_exists,
    "delete_config": delete_config,
    "export_config": export_config,
    "import_config": import_config,
}


def dispatch(command: str, **arguments: Any) -> CommandResult:
    """
    Invoke a command by name.

    Unknown names and bad argument sets are reported as results, not
    raised.
    """
    handler = COMMANDS.get(command)
    if handler is None:
        return CommandResult(ok=False, error=CommandError(UNKNOWN_COMMAND, f"Unknown command: {command}"))

    try:
        inspect.signature(handler).bind(**arguments)
    except TypeError:
        return CommandResult(
            ok=False,
            error=CommandError(INVALID_ARGUMENT, f"Invalid arguments for {command}"),
        )

    return handler(**arguments)
