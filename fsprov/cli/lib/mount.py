"""
Mount table inspection and mount operations.
"""

import logging
import os
import shutil
from pathlib import Path
from typing import List, Optional, Tuple, Union

from fsprov.cli.lib.command import run, run_checked
from fsprov.cli.lib.fstab import unescape_field

logger = logging.getLogger(__name__)

PROC_MOUNTS = Path("/proc/mounts")


def _normalize_path(path: str) -> str:
    if path != "/":
        path = path.rstrip("/")
    return path


def _same_device(a: str, b: str) -> bool:
    if a == b:
        return True
    if a.startswith("/") and b.startswith("/"):
        return os.path.realpath(a) == os.path.realpath(b)
    return False


def active_mounts(proc_mounts: Union[str, Path] = PROC_MOUNTS) -> List[Tuple[str, str]]:
    """
    Read active mounts.

    Returns:
        List of (device, mount_point) pairs
    """
    mounts = []
    with open(proc_mounts, "r", encoding="utf-8") as file:
        for line in file:
            fields = line.split()
            if len(fields) < 2:
                continue
            mounts.append((unescape_field(fields[0]), unescape_field(fields[1])))
    return mounts


def is_mounted(device: str, mount_point: Optional[str] = None, proc_mounts: Union[str, Path] = PROC_MOUNTS) -> bool:
    """
    Check if a device is mounted, optionally at a given mount point.

    Symlinked device paths (/dev/disk/by-uuid/..., /dev/mapper/...) match the
    node they resolve to.
    """
    target = _normalize_path(mount_point) if mount_point else None
    for mounted_device, mounted_at in active_mounts(proc_mounts):
        if target is not None and _normalize_path(mounted_at) != target:
            continue
        if _same_device(device, mounted_device):
            return True
    return False


def is_mountpoint(path: str) -> bool:
    """
    Check if a path is a mount point.
    """
    result = run(["mountpoint", "-q", path])
    return result.returncode == 0


def mount_device(device: str, mount_point: str, fstype: Optional[str] = None, options: Optional[str] = None) -> None:
    """
    Mount a device.

    Args:
        device: Device path (or remote export for network filesystems)
        mount_point: Mount point directory
        fstype: Filesystem type
        options: Comma-separated mount options

    Raises:
        ExternalCommandError: If mounting fails
    """
    cmd = ["mount"]
    if fstype:
        cmd.extend(["-t", fstype])
    if options:
        cmd.extend(["-o", options])
    cmd.extend([device, mount_point])
    run_checked(cmd)


def probe_mountable(device: str, probe_dir: Union[str, Path]) -> bool:
    """
    Check whether a device already holds a mountable filesystem.

    Mounts the device on a scratch directory and unmounts it again. Failure to
    create the scratch directory is logged and otherwise ignored; the mount
    attempt then decides.

    Args:
        device: Device path
        probe_dir: Scratch mount directory

    Returns:
        True if the device could be mounted

    Raises:
        ExternalCommandError: If the probe mount cannot be unmounted
    """
    probe_dir = str(probe_dir)
    try:
        os.makedirs(probe_dir, exist_ok=True)
    except OSError as e:
        logger.debug("Could not create probe directory %s: %s", probe_dir, e)

    result = run(["mount", device, probe_dir])
    if result.returncode != 0:
        return False

    run_checked(["umount", probe_dir])
    return True


def ensure_directory(
    path: str,
    owner: Optional[str] = None,
    group: Optional[str] = None,
    mode: Optional[str] = None,
) -> None:
    """
    Create a directory (recursively) and apply ownership and mode.

    Args:
        path: Directory path
        owner: User name
        group: Group name
        mode: Octal mode string (e.g., "755")
    """
    os.makedirs(path, exist_ok=True)
    if owner or group:
        shutil.chown(path, user=owner, group=group)
    if mode:
        os.chmod(path, int(mode, 8))
