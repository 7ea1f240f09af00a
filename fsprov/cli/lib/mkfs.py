"""
Filesystem creation (mkfs) helpers.
"""

import shlex
import shutil
from typing import List, Optional


def tool_installed(tool: str) -> bool:
    """
    Check if an executable is on PATH.

    Args:
        tool: Executable name (e.g., "mkfs.xfs")
    """
    return shutil.which(tool) is not None


def mkfs_tool(fstype: str) -> str:
    return f"mkfs.{fstype}"


def build_mkfs_command(
    fstype: str,
    label: str,
    device: str,
    options: str = "",
    forceopt: Optional[str] = None,
) -> List[str]:
    """
    Build the mkfs command line.

    Produces `mkfs -t <fstype> [<forceopt>] <options...> -L <label> <device>`.

    Args:
        fstype: Filesystem type
        label: Filesystem label
        device: Device to format
        options: Extra mkfs options, shell-quoted
        forceopt: Force flag for this fstype, only set when forcing

    Returns:
        Command argv
    """
    cmd = ["mkfs", "-t", fstype]
    if forceopt:
        cmd.extend(shlex.split(forceopt))
    if options:
        cmd.extend(shlex.split(options))
    cmd.extend(["-L", label, device])
    return cmd
