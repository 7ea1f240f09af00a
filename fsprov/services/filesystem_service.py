"""
Filesystem convergence service.

Decides, for a desired FilesystemSpec and the host's observed state, which
operations to run: provision storage, wait for the device, mkfs, register in
fstab, mount, freeze/unfreeze.
"""

import logging
from functools import cached_property
from typing import Optional

from fsprov.cli.lib.config import FsprovConfig
from fsprov.cli.lib.exceptions import ConfigurationError
from fsprov.cli.lib.fstab import FstabEntry
from fsprov.cli.lib.mkfs import build_mkfs_command, mkfs_tool
from fsprov.models import Action, FilesystemSpec

logger = logging.getLogger(__name__)


def resolve_device(spec: FilesystemSpec) -> str:
    """
    Derive the device path of a filesystem.

    Precedence: backing file (the loop device given in `device`), volume
    group, UUID, explicit device, then `/dev/mapper/<label>`.

    Raises:
        ConfigurationError: If a backing file is given without a loop device
    """
    label = spec.effective_label
    if spec.file:
        if not spec.device:
            raise ConfigurationError(f"Filesystem {label}: a loop device is required with a backing file")
        return spec.device
    if spec.vg:
        return f"/dev/mapper/{spec.vg}-{label}"
    if spec.uuid:
        return f"/dev/disk/by-uuid/{spec.uuid}"
    if spec.device:
        return spec.device
    return f"/dev/mapper/{label}"


class FilesystemProvider:
    """
    Converges one filesystem on a host.

    A provider serves a single action; the resolved device is cached for its
    lifetime so side effects cannot change it mid-action.
    """

    def __init__(self, spec: FilesystemSpec, host, config: Optional[FsprovConfig] = None):
        self.spec = spec
        self.host = host
        self.config = config if config is not None else host.config

    @cached_property
    def device(self) -> str:
        return resolve_device(self.spec)

    @property
    def label(self) -> str:
        return self.spec.effective_label

    @property
    def netfs(self) -> bool:
        return self.config.is_netfs(self.spec.fstype)

    def run(self, action: Action) -> None:
        handlers = {
            Action.CREATE: self.create,
            Action.ENABLE: self.enable,
            Action.MOUNT: self.mount,
            Action.FREEZE: self.freeze,
            Action.UNFREEZE: self.unfreeze,
        }
        action = Action(action)
        logger.debug("filesystem %s: %s", self.label, action.value)
        handlers[action]()

    def _deferred(self) -> bool:
        if not self.spec.device_defer or self.netfs:
            return False
        if self.host.device_exists(self.device):
            return False
        logger.info("filesystem %s: device %s is absent and deferred, skipping", self.label, self.device)
        return True

    def _mount_point(self, path: str) -> None:
        # mount points hold no files and need not be user writable
        if self.host.is_mountpoint(path):
            return
        self.host.ensure_directory(path, owner="root", group="root", mode="755")

    # create

    def create(self) -> None:
        spec = self.spec
        device = self.device

        if (spec.vg or spec.file) and spec.size is not None:
            if spec.file:
                self.host.ensure_backing_file(spec.file, spec.size, spec.sparse, device)
            else:
                self.host.ensure_logical_volume(
                    self.label, spec.vg, spec.size, stripes=spec.stripes, mirrors=spec.mirrors
                )
        elif self._deferred():
            return

        if not (self.host.device_exists(device) or self.netfs):
            self.host.wait_for_device(device)

        if self.host.is_mounted(device):
            logger.info("filesystem %s: %s is mounted, not formatting", self.label, device)
            return

        self._format()

    def _format(self) -> None:
        spec = self.spec
        device = self.device
        tool = self.config.tool(spec.fstype)

        for package in list(tool.packages) + spec.package_list:
            self.host.ensure_installed(package)

        cmd = build_mkfs_command(
            spec.fstype,
            self.label,
            device,
            options=spec.mkfs_options,
            forceopt=tool.forceopt if spec.force else None,
        )

        if not spec.force and not self.host.tool_installed(mkfs_tool(spec.fstype)):
            logger.info("filesystem %s: %s is not installed, not formatting", self.label, mkfs_tool(spec.fstype))
            return

        if not spec.ignore_existing and self.host.probe_mountable(device, self.label):
            logger.info("filesystem %s: %s already holds a mountable filesystem, not formatting", self.label, device)
            return

        logger.info("filesystem %s creating %s on %s", self.label, spec.fstype, device)
        self.host.run_checked(cmd)

    # enable

    def enable(self) -> None:
        spec = self.spec
        if not spec.mount:
            return

        self._mount_point(spec.mount)

        device = self.device
        device_or_file = device
        options = spec.options
        # fstab records the backing file, the loop device goes into the options
        if spec.file and device.startswith("/dev/loop"):
            device_or_file = spec.file
            options = ",".join(o for o in (options, f"loop={device}") if o)

        if self._deferred():
            return

        self.host.upsert_fstab_entry(
            FstabEntry(
                device=device_or_file,
                mount_point=spec.mount,
                fstype=spec.fstype,
                options=options,
                dump=spec.dump,
                passno=spec.pass_,
            )
        )

    # mount

    def mount(self) -> None:
        spec = self.spec
        if not spec.mount:
            return

        self._mount_point(spec.mount)

        if self._deferred():
            return

        device = self.device
        if self.host.is_mounted(device, spec.mount):
            logger.info("filesystem %s: %s is already mounted at %s", self.label, device, spec.mount)
        else:
            self.host.mount(device, spec.mount, spec.fstype, spec.options)

        # ownership is left alone on network filesystems
        if self.netfs:
            return

        if self.host.is_mountpoint(spec.mount):
            self.host.ensure_directory(spec.mount, owner=spec.user, group=spec.group, mode=spec.mode)

    # freeze / unfreeze

    def _require_mount(self) -> str:
        if not self.spec.mount:
            raise ConfigurationError(f"Filesystem {self.label}: mount not specified")
        return self.spec.mount

    def freeze(self) -> None:
        mount = self._require_mount()
        if self.host.is_frozen(mount):
            logger.info("filesystem %s: %s is already frozen", self.label, mount)
            return
        logger.info("Freeze %s", mount)
        self.host.freeze(mount)

    def unfreeze(self) -> None:
        mount = self._require_mount()
        if not self.host.is_frozen(mount):
            logger.info("filesystem %s: %s is not frozen", self.label, mount)
            return
        logger.info("Unfreeze %s", mount)
        self.host.unfreeze(mount)


def converge(spec: FilesystemSpec, action: Action, host) -> None:
    """Run one action for one filesystem."""
    FilesystemProvider(spec, host).run(action)
