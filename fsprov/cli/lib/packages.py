"""
Package installation through the host package manager.
"""

import logging
import shutil
from typing import Optional

from fsprov.cli.lib.command import run, run_checked
from fsprov.cli.lib.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SUPPORTED_MANAGERS = ("apt-get", "dnf", "yum", "zypper")


def detect_package_manager() -> str:
    """
    Find the first supported package manager on PATH.

    Raises:
        ConfigurationError: If none is available
    """
    for manager in SUPPORTED_MANAGERS:
        if shutil.which(manager):
            return manager
    raise ConfigurationError(f"No supported package manager found (tried: {', '.join(SUPPORTED_MANAGERS)})")


def is_installed(name: str, manager: str) -> bool:
    if manager == "apt-get":
        result = run(["dpkg", "-s", name])
    else:
        result = run(["rpm", "-q", name])
    return result.returncode == 0


def ensure_installed(name: str, manager: Optional[str] = None) -> None:
    """
    Install a package unless it is already installed.

    Args:
        name: Package name
        manager: Package manager to use; detected when not given

    Raises:
        ConfigurationError: If the manager is unsupported
        ExternalCommandError: If installation fails
    """
    manager = manager or detect_package_manager()
    if manager not in SUPPORTED_MANAGERS:
        raise ConfigurationError(f"Unsupported package manager: {manager}")

    if is_installed(name, manager):
        logger.debug("Package %s is already installed", name)
        return

    if manager == "apt-get":
        run_checked(["apt-get", "install", "-y", name], env={"DEBIAN_FRONTEND": "noninteractive"})
    elif manager == "zypper":
        run_checked(["zypper", "--non-interactive", "install", name])
    else:
        run_checked([manager, "install", "-y", name])
    logger.info("Installed package %s", name)
