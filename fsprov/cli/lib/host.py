"""
The local host as seen by the convergence service.

`LocalHost` gathers every query and side effect the service needs behind one
object, so the service can run against a fake host in tests.
"""

import os
from typing import Optional

from fsprov.cli.lib import device as device_lib
from fsprov.cli.lib import filebacked, freeze, fstab, lvm, mkfs, mount, packages
from fsprov.cli.lib.command import CmdResult, run_checked
from fsprov.cli.lib.config import FsprovConfig
from fsprov.cli.lib.fstab import FstabEntry


class LocalHost:
    """Host operations backed by the real system."""

    def __init__(self, config: FsprovConfig):
        self.config = config

    # Packages and storage

    def ensure_installed(self, name: str) -> None:
        packages.ensure_installed(name, manager=self.config.package_manager)

    def ensure_logical_volume(
        self, name: str, group: str, size: str, stripes: Optional[int] = None, mirrors: Optional[int] = None
    ) -> None:
        lvm.ensure_lv(group, name, size, stripes=stripes, mirrors=mirrors)

    def ensure_backing_file(self, path: str, size: str, sparse: bool, device: Optional[str]) -> None:
        filebacked.ensure_backing_file(path, size, sparse=sparse, device=device)

    # Devices

    def device_exists(self, path: str) -> bool:
        return os.path.exists(path)

    def wait_for_device(self, path: str) -> None:
        device_lib.wait_for_device(path, interval=self.config.wait_interval, attempts=self.config.wait_attempts)

    def tool_installed(self, tool: str) -> bool:
        return mkfs.tool_installed(tool)

    def probe_mountable(self, device: str, label: str) -> bool:
        return mount.probe_mountable(device, os.path.join(str(self.config.probe_dir), label))

    # Mount table and mounts

    def upsert_fstab_entry(self, entry: FstabEntry) -> bool:
        return fstab.upsert_entry(self.config.fstab_path, entry)

    def is_mounted(self, device: str, mount_point: Optional[str] = None) -> bool:
        return mount.is_mounted(device, mount_point, proc_mounts=self.config.proc_mounts_path)

    def is_mountpoint(self, path: str) -> bool:
        return mount.is_mountpoint(path)

    def mount(self, device: str, path: str, fstype: str, options: str) -> None:
        mount.mount_device(device, path, fstype=fstype, options=options)

    def ensure_directory(
        self, path: str, owner: Optional[str] = None, group: Optional[str] = None, mode: Optional[str] = None
    ) -> None:
        mount.ensure_directory(path, owner=owner, group=group, mode=mode)

    # Freezing

    def is_frozen(self, mount_point: str) -> bool:
        return freeze.is_frozen(mount_point)

    def freeze(self, mount_point: str) -> None:
        freeze.freeze(mount_point)

    def unfreeze(self, mount_point: str) -> None:
        freeze.unfreeze(mount_point)

    def run_checked(self, argv) -> CmdResult:
        return run_checked(argv)
