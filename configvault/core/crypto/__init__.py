"""
ConfigVault Cryptographic Core
==============================

Provides password-based authenticated encryption for the config envelope.

Architecture:
    1. PBKDF2-HMAC-SHA256: Password to 256-bit key
    2. AES-256-GCM: Authenticated encryption of the payload

Security Properties:
    - All encryption is authenticated (AEAD)
    - Keys never touch disk (memory-only)
    - Secure RNG for all random values

WARNING: This module handles sensitive cryptographic material.
         Incorrect usage can compromise security.
"""

from configvault.core.crypto.aes_gcm import (
    AesGcmCipher,
    AES_KEY_SIZE,
    AES_NONCE_SIZE,
    AES_TAG_SIZE,
)
from configvault.core.crypto.kdf import (
    derive_key_pbkdf2,
    generate_salt,
    PBKDF2_ITERATIONS,
    SALT_SIZE,
)

__all__ = [
    "AesGcmCipher",
    "AES_KEY_SIZE",
    "AES_NONCE_SIZE",
    "AES_TAG_SIZE",
    "derive_key_pbkdf2",
    "generate_salt",
    "PBKDF2_ITERATIONS",
    "SALT_SIZE",
]
