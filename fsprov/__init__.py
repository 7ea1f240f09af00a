"""
fsprov - declarative filesystem provisioning.

This package converges a host towards a described filesystem: it provisions
LVM or file-backed storage, formats it, registers it in fstab, mounts it and
can freeze/unfreeze it for snapshots.
"""

__version__ = "0.1.0"
__all__ = ["cli", "models", "services"]
