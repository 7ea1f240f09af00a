"""
Filesystem freeze (fsfreeze) helpers.
"""

import logging

from fsprov.cli.lib.command import run, run_checked
from fsprov.cli.lib.exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


def is_frozen(mount_point: str) -> bool:
    """
    Check if a mounted filesystem is frozen.

    The kernel exposes no frozen flag, so this asks it to freeze: a frozen
    filesystem answers EBUSY. A probe freeze that succeeds is undone at once,
    so a filesystem that was not frozen is briefly frozen by this call. If
    undoing the probe fails, the unfreeze is tried once more before the error
    is raised.

    Args:
        mount_point: Mount point

    Returns:
        True if the filesystem is frozen

    Raises:
        ExternalCommandError: If fsfreeze fails for another reason, or the
            probe freeze cannot be undone
    """
    result = run(["fsfreeze", "--freeze", mount_point])
    if result.returncode == 0:
        _undo_probe(mount_point)
        return False

    if "busy" in (result.stderr or "").lower():
        return True

    raise ExternalCommandError(result.argv, result.returncode, result.stderr or "")


def _undo_probe(mount_point: str) -> None:
    undo = run(["fsfreeze", "--unfreeze", mount_point])
    if undo.returncode == 0:
        return

    logger.warning("Failed to unfreeze %s after probe freeze, retrying: %s", mount_point, (undo.stderr or "").strip())
    retry = run(["fsfreeze", "--unfreeze", mount_point])
    if retry.returncode != 0:
        logger.error("%s is left frozen", mount_point)
        raise ExternalCommandError(undo.argv, undo.returncode, undo.stderr or "")


def freeze(mount_point: str) -> None:
    """
    Freeze a mounted filesystem.

    Raises:
        ExternalCommandError: If fsfreeze fails
    """
    run_checked(["fsfreeze", "--freeze", mount_point])


def unfreeze(mount_point: str) -> None:
    """
    Unfreeze a mounted filesystem.

    Raises:
        ExternalCommandError: If fsfreeze fails
    """
    run_checked(["fsfreeze", "--unfreeze", mount_point])
