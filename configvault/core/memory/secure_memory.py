"""
Secure Memory Buffers
=====================

Owned byte buffers for passwords, decrypted payloads and derived keys.

Security Properties:
- Explicit zeroization (don't rely on Python GC)
- Memory locking where supported (prevent swapping)
- Read-only borrows for the KDF and cipher
- Automatic cleanup on context exit, including exceptional exit
- Redacted representations (safe to pass to a logger)

Limitations:
- A ``str`` or ``bytes`` handed to ``wrap()`` is immutable and cannot be
  wiped; only the buffer's own copy is controlled
- Library calls may copy data internally
- Best-effort security, not guaranteed
"""

from __future__ import annotations

import ctypes
import platform
from typing import Final, List, Optional

from configvault.core.memory.zeroization import secure_zero


# Platform detection
IS_WINDOWS: Final[bool] = platform.system() == "Windows"
IS_LINUX: Final[bool] = platform.system() == "Linux"
IS_MACOS: Final[bool] = platform.system() == "Darwin"

KEY_SIZE: Final[int] = 32  # 256 bits
REDACTED: Final[str] = "[REDACTED]"


def _libc() -> Optional[ctypes.CDLL]:
    if IS_LINUX:
        return ctypes.CDLL("libc.so.6", use_errno=True)
    if IS_MACOS:
        return ctypes.CDLL("libc.dylib", use_errno=True)
    return None


def _mlock(address: int, size: int) -> bool:
    """
    Lock memory pages to prevent swapping.

    Returns True if successful, False otherwise.
    """
    try:
        if IS_WINDOWS:
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.VirtualLock(ctypes.c_void_p(address), ctypes.c_size_t(size)))
        libc = _libc()
        if libc is not None:
            return libc.mlock(ctypes.c_void_p(address), ctypes.c_size_t(size)) == 0
    except (OSError, AttributeError):
        pass
    return False


def _munlock(address: int, size: int) -> bool:
    """Unlock memory pages."""
    try:
        if IS_WINDOWS:
            kernel32 = ctypes.windll.kernel32
            return bool(kernel32.VirtualUnlock(ctypes.c_void_p(address), ctypes.c_size_t(size)))
        libc = _libc()
        if libc is not None:
            return libc.munlock(ctypes.c_void_p(address), ctypes.c_size_t(size)) == 0
    except (OSError, AttributeError):
        pass
    return False


def _address_of(buffer: bytearray) -> int:
    return ctypes.addressof((ctypes.c_char * len(buffer)).from_buffer(buffer))


class SecureBuffer:
    """
    Owned byte buffer that is zeroed when its scope ends.

    The buffer takes ownership of a ``bytearray``; callers must not keep
    a second reference to it. Content is only reachable through
    ``as_bytes()``, which returns a read-only memoryview instead of a copy.

    Usage:
        with SecureBuffer.wrap(bytearray(secret)) as buf:
            kdf.derive(buf.as_bytes())
        # Buffer is now zeroed

        # Or manually
        buf = SecureBuffer.wrap(data)
        try:
            use(buf.as_bytes())
        finally:
            buf.wipe()

    Security Notes:
        - Always use the context manager or call wipe() explicitly
        - Never copy as_bytes() into bytes or str
    """

    __slots__ = ("_buffer", "_wiped", "_locked", "__weakref__")

    def __init__(self, buffer: bytearray, lock_memory: bool = True) -> None:
        if not isinstance(buffer, bytearray):
            raise TypeError("SecureBuffer requires a bytearray it can own")

        self._buffer = buffer
        self._wiped = False
        self._locked = False

        if lock_memory and len(buffer):
            try:
                self._locked = _mlock(_address_of(buffer), len(buffer))
            except (TypeError, ValueError, BufferError):
                pass

    @classmethod
    def wrap(
        cls,
        data: bytearray | bytes | str,
        lock_memory: bool = True,
    ) -> "SecureBuffer":
        """
        Take ownership of sensitive data.

        A ``bytearray`` is adopted as-is. ``bytes`` and ``str`` are copied
        once into a fresh ``bytearray`` (UTF-8 for text); the immutable
        original cannot be wiped and should be dropped by the caller.
        """
        if isinstance(data, str):
            data = bytearray(data.encode("utf-8"))
        elif isinstance(data, bytes):
            data = bytearray(data)
        return cls(data, lock_memory=lock_memory)

    def as_bytes(self) -> memoryview:
        """
        Borrow the content read-only.

        The view is only valid until wipe(); it is never a copy.
        """
        if self._wiped:
            raise ValueError(f"{type(self).__name__} has been wiped")
        return memoryview(self._buffer).toreadonly()

    @property
    def is_wiped(self) -> bool:
        """Check if buffer has been wiped."""
        return self._wiped

    @property
    def is_locked(self) -> bool:
        """Check if memory is locked."""
        return self._locked

    def wipe(self) -> None:
        """Overwrite the buffer with zero bytes. Safe to call repeatedly."""
        if self._wiped:
            return

        secure_zero(self._buffer)

        if self._locked:
            try:
                _munlock(_address_of(self._buffer), len(self._buffer))
            except (TypeError, ValueError, BufferError):
                pass
            self._locked = False

        self._wiped = True

    def __enter__(self) -> "SecureBuffer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - always wipe."""
        self.wipe()

    def __del__(self) -> None:
        try:
            self.wipe()
        except Exception:
            pass

    def __len__(self) -> int:
        return len(self._buffer)

    def __repr__(self) -> str:
        """Safe representation."""
        if self._wiped:
            return f"{type(self).__name__}(WIPED)"
        return f"{type(self).__name__}(len={len(self._buffer)})"

    __str__ = __repr__


class SecurePassword(SecureBuffer):
    """
    Password bytes.

    Every textual rendering is the fixed redaction marker so a password
    can never reach a log line by accident.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"SecurePassword({REDACTED})"

    def __str__(self) -> str:
        return REDACTED


class SecurePlaintext(SecureBuffer):
    """Serialized configuration payload (UTF-8 JSON bytes)."""

    __slots__ = ()

    def decode(self) -> str:
        """
        Decode the payload as UTF-8 text.

        Raises:
            UnicodeDecodeError: If the bytes are not valid UTF-8
        """
        return str(self.as_bytes(), "utf-8")


class SecureKey(SecureBuffer):
    """
    Derived 256-bit symmetric key.

    Owned by the call that derived it and wiped before that call returns.
    """

    __slots__ = ()

    def __init__(self, buffer: bytearray, lock_memory: bool = True) -> None:
        if isinstance(buffer, bytearray) and len(buffer) != KEY_SIZE:
            raise ValueError(f"Key must be exactly {KEY_SIZE} bytes")
        super().__init__(buffer, lock_memory=lock_memory)

    def __repr__(self) -> str:
        if self._wiped:
            return "SecureKey(WIPED)"
        return f"SecureKey({REDACTED})"


class MemoryGuard:
    """
    RAII-style guard for secure memory operations.

    Ensures that registered buffers are wiped even if
    an exception occurs.

    Usage:
        with MemoryGuard() as guard:
            password = guard.track(SecurePassword.wrap(raw))
            key = guard.track(derive_key(password, salt))
            # All tracked buffers wiped on exit
    """

    __slots__ = ("_tracked",)

    def __init__(self) -> None:
        self._tracked: List[SecureBuffer] = []

    def track(self, buffer: SecureBuffer) -> SecureBuffer:
        """
        Track a buffer for automatic cleanup.

        Returns the buffer for convenience.
        """
        self._tracked.append(buffer)
        return buffer

    def wipe_all(self) -> None:
        """Wipe all tracked buffers."""
        for buf in self._tracked:
            buf.wipe()
        self._tracked.clear()

    def __enter__(self) -> "MemoryGuard":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.wipe_all()
