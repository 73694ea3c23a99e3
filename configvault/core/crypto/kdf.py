"""
Key Derivation Functions
========================

Password-based key derivation for the configuration envelope.

Implements:
    - PBKDF2-HMAC-SHA256 with a caller-supplied work factor
    - Random salt generation
"""

from __future__ import annotations

import secrets
from typing import Final

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from configvault.core.memory.secure_memory import KEY_SIZE, SecureKey, SecurePassword

# PBKDF2 parameters written into new envelopes
PBKDF2_ITERATIONS: Final[int] = 100_000
SALT_SIZE: Final[int] = 32


def generate_salt(length: int = SALT_SIZE) -> bytes:
    """Generate a cryptographically secure random salt."""
    return secrets.token_bytes(length)


def derive_key_pbkdf2(
    password: SecurePassword,
    salt: bytes,
    iterations: int = PBKDF2_ITERATIONS,
) -> SecureKey:
    """
    Derive a 256-bit key from a password using PBKDF2-HMAC-SHA256.

    Args:
        password: Password buffer (borrowed, not wiped here)
        salt: Random salt stored alongside the ciphertext
        iterations: Work factor; on load this is the value stored in the
            envelope, not the current default

    Returns:
        SecureKey the caller must wipe

    Raises:
        ValueError: If iterations is not a positive integer
    """
    if iterations < 1:
        raise ValueError("Iterations must be a positive integer")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_SIZE,
        salt=salt,
        iterations=iterations,
    )
    # derive() returns immutable bytes; keep only the bytearray copy
    derived = kdf.derive(password.as_bytes())
    key = SecureKey(bytearray(derived))
    del derived
    return key
