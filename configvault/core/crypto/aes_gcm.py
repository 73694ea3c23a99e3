"""
AES-256-GCM Authenticated Encryption
====================================

Thin wrapper over ``cryptography``'s AESGCM for the configuration envelope.

Security Properties:
    - 256-bit key (derived from the user's password)
    - 96-bit nonce (NIST recommended), fresh for every encryption
    - 128-bit authentication tag appended to the ciphertext

NIST SP 800-38D Compliance:
    - GCM mode with 96-bit IV
    - Unique nonce for each encryption under same key

WARNING:
    - Never reuse (key, nonce) pairs
    - Always verify tag before using plaintext
"""

from __future__ import annotations

import secrets
from typing import Final, Optional

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from configvault.core.memory.secure_memory import SecureKey, KEY_SIZE

# Constants following NIST recommendations
AES_KEY_SIZE: Final[int] = KEY_SIZE  # 256 bits
AES_NONCE_SIZE: Final[int] = 12  # 96 bits (NIST recommended for GCM)
AES_TAG_SIZE: Final[int] = 16  # 128 bits


class AesGcmCipher:
    """
    AES-256-GCM Authenticated Encryption with Associated Data (AEAD).

    Keys are supplied by the caller as a SecureKey and are never stored
    on the cipher object; a new AESGCM context is built for every call.

    Usage:
        cipher = AesGcmCipher()
        nonce = cipher.generate_nonce()
        ciphertext = cipher.encrypt(plaintext, key=key, nonce=nonce)
        plaintext = cipher.decrypt(ciphertext, key=key, nonce=nonce)
    """

    __slots__ = ()

    @staticmethod
    def generate_nonce() -> bytes:
        """
        Generate a cryptographically secure random nonce.

        Returns:
            12 bytes of cryptographic random data

        Security:
            96-bit nonces with random generation have negligible collision
            probability for up to 2^32 encryptions under same key.
        """
        return secrets.token_bytes(AES_NONCE_SIZE)

    def encrypt(
        self,
        plaintext: bytes | memoryview,
        key: SecureKey,
        nonce: bytes,
        aad: Optional[bytes] = None,
    ) -> bytes:
        """
        Encrypt plaintext using AES-256-GCM.

        Args:
            plaintext: Data to encrypt (can be empty)
            key: 32-byte derived key
            nonce: 12-byte nonce, never used before under this key
            aad: Additional Authenticated Data (authenticated but not encrypted)

        Returns:
            Ciphertext with the authentication tag appended

        Raises:
            ValueError: If key or nonce have the wrong size
        """
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        if len(nonce) != AES_NONCE_SIZE:
            raise ValueError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")

        aesgcm = AESGCM(key.as_bytes())
        return aesgcm.encrypt(nonce, plaintext, aad)

    def decrypt(
        self,
        ciphertext: bytes,
        key: SecureKey,
        nonce: bytes,
        aad: Optional[bytes] = None,
    ) -> bytes:
        """
        Decrypt ciphertext using AES-256-GCM with integrity verification.

        Args:
            ciphertext: Encrypted data with authentication tag
            key: The 32-byte key
            nonce: The nonce used during encryption
            aad: Additional Authenticated Data (must match encryption AAD)

        Returns:
            Decrypted plaintext bytes

        Raises:
            ValueError: If parameters are invalid
            cryptography.exceptions.InvalidTag: If authentication fails

        Security Notes:
            - Integrity is verified BEFORE any plaintext is returned
            - InvalidTag means wrong key, tampered data, or wrong nonce/AAD
        """
        if len(key) != AES_KEY_SIZE:
            raise ValueError(f"Key must be exactly {AES_KEY_SIZE} bytes")
        if len(nonce) != AES_NONCE_SIZE:
            raise ValueError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")
        if len(ciphertext) < AES_TAG_SIZE:
            raise ValueError("Ciphertext too short (missing authentication tag)")

        aesgcm = AESGCM(key.as_bytes())
        return aesgcm.decrypt(nonce, ciphertext, aad)
