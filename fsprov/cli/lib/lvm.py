"""
LVM logical volume management functions.
"""

import logging
from typing import Optional

from fsprov.cli.lib.command import run, run_checked

logger = logging.getLogger(__name__)


def lv_exists(vg_name: str, lv_name: str) -> bool:
    """
    Check if a logical volume exists.

    Args:
        vg_name: Volume group name
        lv_name: Logical volume name

    Returns:
        True if the LV exists
    """
    result = run(["lvdisplay", f"/dev/{vg_name}/{lv_name}"])
    return result.returncode == 0


def ensure_lv(
    vg_name: str,
    lv_name: str,
    size: str,
    stripes: Optional[int] = None,
    mirrors: Optional[int] = None,
) -> str:
    """
    Create a logical volume unless it already exists.

    Sizes containing "%" (e.g., "100%FREE") are passed as extents.

    Args:
        vg_name: Volume group name
        lv_name: Logical volume name
        size: Size (e.g., "10G") or extent percentage
        stripes: Number of stripes
        mirrors: Number of mirrors

    Returns:
        Path to the logical volume (e.g., "/dev/vg_name/lv_name")

    Raises:
        ExternalCommandError: If LV creation fails
    """
    lv_path = f"/dev/{vg_name}/{lv_name}"

    if lv_exists(vg_name, lv_name):
        logger.info("Logical volume %s already exists", lv_path)
        return lv_path

    cmd = ["lvcreate"]
    if "%" in size:
        cmd.extend(["-l", size])
    else:
        cmd.extend(["-L", size])
    cmd.extend(["-n", lv_name])
    if stripes is not None:
        cmd.extend(["-i", str(stripes)])
    if mirrors is not None:
        cmd.extend(["-m", str(mirrors)])
    # answer yes to signature wipe prompts
    cmd.extend(["-y", vg_name])

    run_checked(cmd)
    logger.info("Created logical volume %s", lv_path)
    return lv_path
