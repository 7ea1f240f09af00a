"""
Input validation functions.
"""

import re


SIZE_PATTERN = re.compile(r"^(\d+(\.\d+)?[bBsSkKmMgGtTpPeE]?|(\d{1,2}|100)%(FREE|VG|PVS|ORIGIN))$")


def validate_name(name: str) -> None:
    """
    Validate a name (filesystem label, volume group, etc.).

    Args:
        name: Name to validate

    Raises:
        ValueError: If name is invalid
    """
    if not name:
        raise ValueError("Name cannot be empty")

    if len(name) < 1 or len(name) > 64:
        raise ValueError("Name must be between 1 and 64 characters")

    # Allow alphanumeric, dots, underscores, hyphens
    if not re.match(r'^[a-zA-Z0-9][a-zA-Z0-9._-]*$', name):
        raise ValueError("Name must start with alphanumeric and contain only alphanumeric, dots, underscores, or hyphens")


def validate_size(size: str) -> None:
    """
    Validate a storage size such as "10G", "512M" or "100%FREE".

    Raises:
        ValueError: If size is invalid
    """
    if not SIZE_PATTERN.match(size):
        raise ValueError(f"Invalid size '{size}': expected a number with optional unit suffix or a percentage")


def validate_mode(mode: str) -> None:
    """
    Validate an octal permission string ("755", "0750").

    Raises:
        ValueError: If mode is invalid
    """
    if not re.match(r"^[0-7]{3,4}$", mode):
        raise ValueError(f"Invalid mode '{mode}': expected 3 or 4 octal digits")


def validate_absolute_path(path: str) -> None:
    """
    Validate that a path is absolute.

    Raises:
        ValueError: If path is not absolute
    """
    if not path.startswith("/"):
        raise ValueError(f"Path '{path}' must be absolute")
