"""
Memory Zeroization Utilities
============================

Provides explicit memory zeroization helpers.

Security Properties:
- Explicit zeroization (no GC reliance)
- Fallback to Python-level zeroing when memset cannot reach the buffer

Key Concepts:
- Zeroization: Overwriting a mutable buffer with zero bytes
"""

from __future__ import annotations

import ctypes


def secure_zero(data: bytearray) -> None:
    """
    Securely zero a byte buffer in place.

    Uses ctypes.memset on the buffer's own storage so the write goes
    through a foreign call the interpreter cannot elide, with a fallback
    to Python-level zeroing.

    Args:
        data: Mutable byte buffer to zero

    Security Notes:
        - This is best-effort; Python may have copies
        - Buffer must be mutable (bytearray, not bytes)
    """
    size = len(data)
    if size == 0:
        return

    try:
        addr = ctypes.addressof((ctypes.c_char * size).from_buffer(data))
        ctypes.memset(addr, 0, size)
    except (TypeError, ValueError, BufferError):
        # Fallback: Python-level zeroing
        for i in range(size):
            data[i] = 0
