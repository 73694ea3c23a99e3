"""
ConfigVault File Operations Module
==================================

Provides the file primitives the config store is built on.

Security Features:
- Atomic replacement (no half-written files)
- Owner-only permissions on written files
- Overwrite-before-delete

Components:
- atomic_write.py: Write-then-rename with restricted permissions
- secure_delete.py: Random and zero overwrite passes, then unlink
"""

from configvault.core.file_ops.atomic_write import atomic_write_text
from configvault.core.file_ops.secure_delete import secure_delete

__all__ = [
    "atomic_write_text",
    "secure_delete",
]
