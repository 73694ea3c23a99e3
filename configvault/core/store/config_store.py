"""
Secure Config Store
===================

Password-protected storage for a single JSON configuration payload.

Save Flow:
1. Wrap password and payload in secure buffers
2. Generate a fresh random salt and nonce
3. Derive a 256-bit key with PBKDF2-HMAC-SHA256
4. Encrypt with AES-256-GCM
5. Write the base64 envelope atomically with owner-only permissions
6. Wipe buffers and key on every exit path

Load Flow:
1. Read and parse the envelope
2. Refuse unknown versions or algorithms
3. Derive the key from the stored salt and stored iteration count
4. Decrypt and verify; any tag failure is reported as InvalidPassword
5. Return the UTF-8 payload, wiping buffers and key first

Security Properties:
- No key or plaintext is cached between calls
- A wrong password and a tampered file are indistinguishable
- Only the envelope ever reaches disk (export is the explicit exception)
- No retries and no automatic format migration
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Optional

from cryptography.exceptions import InvalidTag

from configvault.core.config import SecureConfig
from configvault.core.crypto.aes_gcm import AesGcmCipher, AES_NONCE_SIZE, AES_TAG_SIZE
from configvault.core.crypto.kdf import (
    PBKDF2_ITERATIONS,
    SALT_SIZE,
    derive_key_pbkdf2,
    generate_salt,
)
from configvault.core.errors import (
    ConfigIOError,
    ConfigNotFoundError,
    DecryptionError,
    EncryptionError,
    InvalidPasswordError,
    SerializationError,
)
from configvault.core.file_ops.atomic_write import atomic_write_text
from configvault.core.file_ops.secure_delete import secure_delete
from configvault.core.memory.secure_memory import (
    MemoryGuard,
    SecurePassword,
    SecurePlaintext,
)
from configvault.core.store.envelope import Envelope, b64decode

# Upper bound on a stored work factor; a tampered envelope must not
# be able to stall load() for hours
MAX_KDF_ITERATIONS: Final[int] = 10_000_000

SensitiveInput = str | bytes | bytearray


class SecureConfigStore:
    """
    Encrypted configuration file at a fixed path.

    Usage:
        store = SecureConfigStore(Path("~/.config/ConfigVault/config.encrypted").expanduser())
        store.save('{"bucket": "backups"}', password)

        try:
            settings = store.load(password)
        except InvalidPasswordError:
            ...  # ask for the password again
        except ConfigNotFoundError:
            ...  # first-time setup

    Sensitive inputs may be ``str``, ``bytes`` or ``bytearray``. A
    ``bytearray`` is taken over by the store and is all zero bytes
    after the call returns; immutable inputs are copied once into
    buffers that are wiped.

    Concurrency:
        Each call is self-contained. Concurrent save() calls on the same
        path are not coordinated; the last os.replace() wins.
    """

    __slots__ = ("_path", "_iterations", "_salt_length", "_cipher", "_log")

    def __init__(
        self,
        config_path: Path | str,
        iterations: int = PBKDF2_ITERATIONS,
        salt_length: int = SALT_SIZE,
    ) -> None:
        """
        Args:
            config_path: Location of the envelope file
            iterations: PBKDF2 work factor written into new envelopes
            salt_length: Salt size in bytes for new envelopes
        """
        if not 1 <= iterations <= MAX_KDF_ITERATIONS:
            raise ValueError(f"Iterations must be between 1 and {MAX_KDF_ITERATIONS:,}")
        if salt_length < 1:
            raise ValueError("Salt length must be positive")

        self._path = Path(config_path)
        self._iterations = iterations
        self._salt_length = salt_length
        self._cipher = AesGcmCipher()
        self._log = logging.getLogger("configvault.store")

    @classmethod
    def from_config(cls, config: Optional[SecureConfig] = None) -> "SecureConfigStore":
        """Build a store from application settings."""
        config = config or SecureConfig.get_instance()
        return cls(
            config.config_path,
            iterations=config.store.key_derivation_iterations,
            salt_length=config.store.salt_length,
        )

    @property
    def config_path(self) -> Path:
        return self._path

    @property
    def iterations(self) -> int:
        return self._iterations

    def save(self, plaintext_json: SensitiveInput, password: SensitiveInput) -> None:
        """
        Encrypt ``plaintext_json`` under ``password`` and replace the file.

        Raises:
            EncryptionError: If an input is not encodable text or the
                cipher rejects its inputs
            ConfigIOError: If the envelope cannot be written
        """
        with MemoryGuard() as guard:
            try:
                secure_password = guard.track(SecurePassword.wrap(password))
                secure_plaintext = guard.track(SecurePlaintext.wrap(plaintext_json))
            except UnicodeEncodeError:
                # The exception would carry the whole input string
                raise EncryptionError("Password and config must be valid Unicode text") from None

            salt = generate_salt(self._salt_length)
            nonce = self._cipher.generate_nonce()

            key = guard.track(derive_key_pbkdf2(secure_password, salt, self._iterations))
            try:
                ciphertext = self._cipher.encrypt(secure_plaintext.as_bytes(), key=key, nonce=nonce)
            except (ValueError, OverflowError) as e:
                raise EncryptionError("Encryption failed") from e

        envelope = Envelope.seal(
            ciphertext=ciphertext,
            salt=salt,
            nonce=nonce,
            iterations=self._iterations,
        )

        try:
            atomic_write_text(self._path, envelope.to_json())
        except OSError as e:
            raise ConfigIOError(f"Failed to write config file: {e.strerror or e}") from e

        self._log.info("Saved encrypted config to %s", self._path)

    def load(self, password: SensitiveInput) -> str:
        """
        Decrypt and return the stored payload.

        Raises:
            ConfigNotFoundError: If there is no envelope file
            ConfigIOError: If the file cannot be read
            SerializationError: If the file is not envelope JSON
            DecryptionError: On unsupported format or malformed fields
            InvalidPasswordError: If authentication fails, or the password
                is not encodable text and so cannot match any saved key
        """
        with MemoryGuard() as guard:
            try:
                secure_password = guard.track(SecurePassword.wrap(password))
            except UnicodeEncodeError:
                raise InvalidPasswordError() from None

            envelope = self._read_envelope()
            envelope.check_compatible()

            ciphertext = b64decode(envelope.data, "data")
            salt = b64decode(envelope.salt, "salt")
            nonce = b64decode(envelope.nonce, "nonce")

            if len(nonce) != AES_NONCE_SIZE:
                raise DecryptionError(f"Nonce must be exactly {AES_NONCE_SIZE} bytes")
            if not 1 <= envelope.iterations <= MAX_KDF_ITERATIONS:
                raise DecryptionError(f"Unsupported iteration count: {envelope.iterations}")

            key = guard.track(derive_key_pbkdf2(secure_password, salt, envelope.iterations))

            # A truncated ciphertext is tampering, reported like any tag failure
            if len(ciphertext) < AES_TAG_SIZE:
                self._log.warning("Config authentication failed for %s", self._path)
                raise InvalidPasswordError()

            try:
                decrypted = self._cipher.decrypt(ciphertext, key=key, nonce=nonce)
            except InvalidTag:
                self._log.warning("Config authentication failed for %s", self._path)
                raise InvalidPasswordError() from None

            plaintext = guard.track(SecurePlaintext(bytearray(decrypted)))
            del decrypted

            try:
                result = plaintext.decode()
            except UnicodeDecodeError:
                raise DecryptionError("Decrypted config is not valid UTF-8") from None

        self._log.info("Loaded encrypted config from %s", self._path)
        return result

    def exists(self) -> bool:
        """Whether an envelope file is present. Nothing is decrypted."""
        return self._path.exists()

    def delete(self) -> None:
        """
        Overwrite the envelope with random then zero bytes and remove it.

        Succeeds when there is nothing to delete. This is best effort:
        journaling filesystems, copy-on-write snapshots and SSD wear
        levelling may retain earlier copies.

        Raises:
            ConfigIOError: If overwriting or removal fails
        """
        try:
            removed = secure_delete(self._path)
        except OSError as e:
            raise ConfigIOError(f"Failed to delete config file: {e.strerror or e}") from e

        if removed:
            self._log.info("Deleted config file %s", self._path)

    def export_plaintext(self, destination: Path | str, plaintext_json: str) -> None:
        """
        Write the payload unencrypted to ``destination``.

        The exported file has no confidentiality protection; treat it as
        sensitive.

        Raises:
            ConfigIOError: If the text is not encodable or the file cannot
                be written
        """
        destination = Path(destination)
        try:
            data = plaintext_json.encode("utf-8")
        except UnicodeEncodeError:
            raise ConfigIOError("Config is not valid Unicode text") from None

        try:
            destination.write_bytes(data)
        except OSError as e:
            raise ConfigIOError(f"Failed to export config: {e.strerror or e}") from e
        except UnicodeEncodeError:
            raise ConfigIOError("Export path is not a valid filesystem path") from None

        self._log.warning("Exported unencrypted config to %s", destination)

    def import_plaintext(self, source: Path | str) -> str:
        """
        Read an unencrypted payload previously written by export_plaintext().

        Raises:
            ConfigNotFoundError: If ``source`` does not exist
            ConfigIOError: If the file cannot be read as UTF-8 text
        """
        source = Path(source)
        if not source.exists():
            raise ConfigNotFoundError(f"Import file not found: {source}")

        try:
            text = source.read_bytes().decode("utf-8")
        except OSError as e:
            raise ConfigIOError(f"Failed to import config: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise ConfigIOError("Import file is not valid UTF-8 text") from e

        self._log.info("Imported config from %s", source)
        return text

    def _read_envelope(self) -> Envelope:
        if not self._path.exists():
            raise ConfigNotFoundError()

        try:
            text = self._path.read_bytes().decode("utf-8")
        except FileNotFoundError:
            raise ConfigNotFoundError() from None
        except OSError as e:
            raise ConfigIOError(f"Failed to read config file: {e.strerror or e}") from e
        except UnicodeDecodeError as e:
            raise SerializationError("Config file is not UTF-8 text") from e

        return Envelope.from_json(text)

    def __repr__(self) -> str:
        return f"SecureConfigStore(path={str(self._path)!r}, iterations={self._iterations})"
