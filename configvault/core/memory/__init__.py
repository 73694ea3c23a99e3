"""
ConfigVault Memory Security Module
==================================

Provides secure memory handling primitives.

Security Features:
- Locked memory buffers (prevent swapping)
- Explicit zeroization (don't rely on GC)
- Exception-safe cleanup
- Redacted representations

Components:
- secure_memory.py: Owned buffers for passwords, payloads and keys
- zeroization.py: Memory wiping utilities

WARNING:
- Python's memory model doesn't guarantee secure erasure
- These are best-effort mitigations
"""

from configvault.core.memory.secure_memory import (
    SecureBuffer,
    SecurePassword,
    SecurePlaintext,
    SecureKey,
    MemoryGuard,
    REDACTED,
)
from configvault.core.memory.zeroization import (
    secure_zero,
)

__all__ = [
    "SecureBuffer",
    "SecurePassword",
    "SecurePlaintext",
    "SecureKey",
    "MemoryGuard",
    "REDACTED",
    "secure_zero",
]
