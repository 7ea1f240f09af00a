"""
Device node helpers.
"""

import logging
import os
import time

from fsprov.cli.lib.exceptions import DeviceTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_WAIT_INTERVAL = 0.3
DEFAULT_WAIT_ATTEMPTS = 1000


def wait_for_device(
    device: str, interval: float = DEFAULT_WAIT_INTERVAL, attempts: int = DEFAULT_WAIT_ATTEMPTS
) -> None:
    """
    Block until a device node exists.

    Polls every `interval` seconds, at most `attempts` times.

    Args:
        device: Device path (e.g., "/dev/mapper/vg0-data")
        interval: Seconds between polls
        attempts: Maximum number of polls

    Raises:
        DeviceTimeoutError: If the device does not appear in time
    """
    for attempt in range(1, attempts + 1):
        if os.path.exists(device):
            return
        time.sleep(interval)
        logger.debug("waiting for %s to exist, try # %d", device, attempt)

    raise DeviceTimeoutError(
        f"Timeout waiting for device {device} after {attempts} attempts", device=device, attempts=attempts
    )
