"""
ConfigVault Store Module
========================

Password-protected persistence of the application configuration.

Components:
- envelope.py: On-disk JSON record (ciphertext, salt, nonce, parameters)
- config_store.py: save/load/exists/delete/export/import operations
"""

from configvault.core.store.envelope import (
    Envelope,
    ENVELOPE_VERSION,
    ENVELOPE_ALGORITHM,
)
from configvault.core.store.config_store import SecureConfigStore, MAX_KDF_ITERATIONS

__all__ = [
    "Envelope",
    "ENVELOPE_VERSION",
    "ENVELOPE_ALGORITHM",
    "SecureConfigStore",
    "MAX_KDF_ITERATIONS",
]
