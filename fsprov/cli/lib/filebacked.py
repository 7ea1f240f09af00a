"""
File-backed storage: backing files attached to loop devices.
"""

import logging
import os
from typing import Optional

from fsprov.cli.lib.command import run, run_checked
from fsprov.cli.lib.exceptions import FilesystemError

logger = logging.getLogger(__name__)


def loop_attached(device: str, path: str) -> bool:
    """
    Check if a loop device is attached to a backing file.

    Args:
        device: Loop device (e.g., "/dev/loop7")
        path: Backing file path

    Returns:
        True if `device` is backed by `path`, False if it is free

    Raises:
        FilesystemError: If the loop device is backed by another file
    """
    result = run(["losetup", device])
    if result.returncode != 0:
        return False

    # e.g. "/dev/loop7: [64768]:1835 (/srv/images/data.img)"
    if f"({path})" in result.stdout:
        return True

    raise FilesystemError(f"Loop device {device} is attached to another file: {result.stdout.strip()}")


def ensure_backing_file(path: str, size: str, sparse: bool = True, device: Optional[str] = None) -> None:
    """
    Create a backing file and attach it to a loop device.

    The file is created only when absent; an existing file is never resized.

    Args:
        path: Backing file path
        size: File size (e.g., "10G")
        sparse: Allocate blocks lazily
        device: Loop device to attach the file to

    Raises:
        ExternalCommandError: If creating or attaching fails
    """
    if not os.path.exists(path):
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)

        if sparse:
            run_checked(["truncate", "-s", size, path])
        else:
            run_checked(["fallocate", "-l", size, path])
        logger.info("Created %s backing file %s of size %s", "sparse" if sparse else "allocated", path, size)

    if device and not loop_attached(device, path):
        run_checked(["losetup", device, path])
        logger.info("Attached %s to %s", path, device)
