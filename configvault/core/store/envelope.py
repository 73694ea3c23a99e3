"""
Configuration Envelope
======================

The on-disk record holding the encrypted configuration and everything
needed to decrypt it except the password.

File Format (UTF-8 JSON):
    {
      "data": "<base64 AES-GCM ciphertext + tag>",
      "salt": "<base64, 32 bytes>",
      "nonce": "<base64, 12 bytes>",
      "version": "1.0",
      "algorithm": "AES-256-GCM",
      "iterations": 100000
    }

``version``, ``algorithm`` and ``iterations`` were added after the first
files were written; when absent they read as the values those files used.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass, asdict
from typing import Final

from configvault.core.crypto.kdf import PBKDF2_ITERATIONS
from configvault.core.errors import DecryptionError, SerializationError

ENVELOPE_VERSION: Final[str] = "1.0"
ENVELOPE_ALGORITHM: Final[str] = "AES-256-GCM"

_REQUIRED_FIELDS: Final[tuple[str, ...]] = ("data", "salt", "nonce")


def b64encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def b64decode(text: str, field_name: str) -> bytes:
    """
    Strictly decode a base64 envelope field.

    Raises:
        DecryptionError: If the text is not valid base64
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecryptionError(f"Invalid base64 in {field_name}") from e


@dataclass(frozen=True, slots=True)
class Envelope:
    """
    Immutable encrypted configuration record.

    Attributes:
        data: Base64 ciphertext with appended authentication tag
        salt: Base64 PBKDF2 salt
        nonce: Base64 AES-GCM nonce
        version: Format identifier
        algorithm: Cipher identifier
        iterations: PBKDF2 work factor used to write this envelope
    """

    data: str
    salt: str
    nonce: str
    version: str = ENVELOPE_VERSION
    algorithm: str = ENVELOPE_ALGORITHM
    iterations: int = PBKDF2_ITERATIONS

    @classmethod
    def seal(
        cls,
        ciphertext: bytes,
        salt: bytes,
        nonce: bytes,
        iterations: int,
    ) -> "Envelope":
        """Build a current-format envelope from raw cipher output."""
        return cls(
            data=b64encode(ciphertext),
            salt=b64encode(salt),
            nonce=b64encode(nonce),
            version=ENVELOPE_VERSION,
            algorithm=ENVELOPE_ALGORITHM,
            iterations=iterations,
        )

    def to_json(self) -> str:
        """Serialize to the pretty-printed on-disk form."""
        return json.dumps(asdict(self), indent=2)

    @classmethod
    def from_json(cls, text: str) -> "Envelope":
        """
        Parse the on-disk form.

        Raises:
            SerializationError: If the text is not JSON, is not an object,
                or has missing or wrongly typed fields
        """
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Malformed envelope JSON: {e.msg}") from e

        if not isinstance(raw, dict):
            raise SerializationError("Envelope must be a JSON object")

        for name in _REQUIRED_FIELDS:
            if name not in raw:
                raise SerializationError(f"Envelope missing field: {name}")

        fields = {
            "data": raw["data"],
            "salt": raw["salt"],
            "nonce": raw["nonce"],
            "version": raw.get("version", ENVELOPE_VERSION),
            "algorithm": raw.get("algorithm", ENVELOPE_ALGORITHM),
            "iterations": raw.get("iterations", PBKDF2_ITERATIONS),
        }

        for name, value in fields.items():
            expected = int if name == "iterations" else str
            # bool is an int subclass; reject it explicitly
            if not isinstance(value, expected) or isinstance(value, bool):
                raise SerializationError(f"Envelope field has wrong type: {name}")

        return cls(**fields)

    def check_compatible(self) -> None:
        """
        Refuse envelopes this implementation does not write.

        Raises:
            DecryptionError: On a version or algorithm mismatch
        """
        if self.version != ENVELOPE_VERSION:
            raise DecryptionError(f"Unsupported encryption version: {self.version}")
        if self.algorithm != ENVELOPE_ALGORITHM:
            raise DecryptionError(f"Unsupported encryption algorithm: {self.algorithm}")

    def __repr__(self) -> str:
        """Safe representation without salt, nonce or ciphertext."""
        return (
            f"Envelope(version={self.version!r}, algorithm={self.algorithm!r}, "
            f"iterations={self.iterations}, data_len={len(self.data)})"
        )
