"""
Filesystem action commands.
"""

from typing import Optional

import typer

from fsprov.cli.lib.config import load_config
from fsprov.cli.lib.exceptions import FilesystemError
from fsprov.cli.lib.host import LocalHost
from fsprov.models import Action, build_spec
from fsprov.services.filesystem_service import FilesystemProvider


def _converge(ctx: typer.Context, action: Action, **fields) -> None:
    name = fields.get("name")
    try:
        spec = build_spec(**fields)
        cfg = load_config(ctx.obj.get("config_path") if ctx.obj else None)
        FilesystemProvider(spec, LocalHost(cfg)).run(action)
        typer.echo(f"Filesystem {spec.effective_label}: {action.value} done")
    except FilesystemError as e:
        typer.echo(f"Error running {action.value} for filesystem {name}: {e}", err=True)
        raise typer.Exit(1)


def create(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Filesystem name (default label)"),
    label: Optional[str] = typer.Option(None, "--label", help="Filesystem label"),
    device: Optional[str] = typer.Option(None, "--device", help="Device, or loop device with --file"),
    vg: Optional[str] = typer.Option(None, "--vg", help="LVM volume group"),
    file: Optional[str] = typer.Option(None, "--file", help="Backing file"),
    uuid: Optional[str] = typer.Option(None, "--uuid", help="Filesystem UUID"),
    fstype: str = typer.Option("ext3", "--fstype", help="Filesystem type"),
    mkfs_options: str = typer.Option("", "--mkfs-options", help="Extra mkfs options"),
    package: Optional[str] = typer.Option(None, "--package", help="Comma-separated packages to install"),
    sparse: bool = typer.Option(True, "--sparse/--no-sparse", help="Sparse backing file (default: True)"),
    size: Optional[str] = typer.Option(None, "--size", help="LV or backing file size (e.g., 10G)"),
    stripes: Optional[int] = typer.Option(None, "--stripes", help="LVM stripes"),
    mirrors: Optional[int] = typer.Option(None, "--mirrors", help="LVM mirrors"),
    force: bool = typer.Option(False, "--force", help="Pass the mkfs force flag"),
    ignore_existing: bool = typer.Option(
        False, "--ignore-existing", help="Format even over an existing filesystem (destroys data)"
    ),
    device_defer: bool = typer.Option(False, "--device-defer", help="Do nothing while the device is absent"),
):
    """
    Create a filesystem.

    Provisions the LV or backing file when a size is given, waits for the
    device and runs mkfs unless the device is mounted or already formatted.
    """
    _converge(
        ctx,
        Action.CREATE,
        name=name,
        label=label,
        device=device,
        vg=vg,
        file=file,
        uuid=uuid,
        fstype=fstype,
        mkfs_options=mkfs_options,
        package=package,
        sparse=sparse,
        size=size,
        stripes=stripes,
        mirrors=mirrors,
        force=force,
        ignore_existing=ignore_existing,
        device_defer=device_defer,
    )


def enable(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Filesystem name (default label)"),
    mount: Optional[str] = typer.Option(None, "--mount", help="Mount point"),
    label: Optional[str] = typer.Option(None, "--label", help="Filesystem label"),
    device: Optional[str] = typer.Option(None, "--device", help="Device, or loop device with --file"),
    vg: Optional[str] = typer.Option(None, "--vg", help="LVM volume group"),
    file: Optional[str] = typer.Option(None, "--file", help="Backing file"),
    uuid: Optional[str] = typer.Option(None, "--uuid", help="Filesystem UUID"),
    fstype: str = typer.Option("ext3", "--fstype", help="Filesystem type"),
    options: str = typer.Option("defaults", "--options", help="Mount options"),
    dump: int = typer.Option(0, "--dump", help="fstab dump field (0-2)"),
    pass_: int = typer.Option(0, "--pass", help="fstab fsck pass field (0-2)"),
    device_defer: bool = typer.Option(False, "--device-defer", help="Do nothing while the device is absent"),
):
    """
    Register a filesystem in fstab.
    """
    _converge(
        ctx,
        Action.ENABLE,
        name=name,
        mount=mount,
        label=label,
        device=device,
        vg=vg,
        file=file,
        uuid=uuid,
        fstype=fstype,
        options=options,
        dump=dump,
        pass_=pass_,
        device_defer=device_defer,
    )


def mount(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Filesystem name (default label)"),
    mount: Optional[str] = typer.Option(None, "--mount", help="Mount point"),
    label: Optional[str] = typer.Option(None, "--label", help="Filesystem label"),
    device: Optional[str] = typer.Option(None, "--device", help="Device, or loop device with --file"),
    vg: Optional[str] = typer.Option(None, "--vg", help="LVM volume group"),
    file: Optional[str] = typer.Option(None, "--file", help="Backing file"),
    uuid: Optional[str] = typer.Option(None, "--uuid", help="Filesystem UUID"),
    fstype: str = typer.Option("ext3", "--fstype", help="Filesystem type"),
    options: str = typer.Option("defaults", "--options", help="Mount options"),
    user: Optional[str] = typer.Option(None, "--user", help="Mount point owner"),
    group: Optional[str] = typer.Option(None, "--group", help="Mount point group"),
    mode: Optional[str] = typer.Option(None, "--mode", help="Mount point mode (e.g., 755)"),
    device_defer: bool = typer.Option(False, "--device-defer", help="Do nothing while the device is absent"),
):
    """
    Mount a filesystem and set the mount point's owner, group and mode.
    """
    _converge(
        ctx,
        Action.MOUNT,
        name=name,
        mount=mount,
        label=label,
        device=device,
        vg=vg,
        file=file,
        uuid=uuid,
        fstype=fstype,
        options=options,
        user=user,
        group=group,
        mode=mode,
        device_defer=device_defer,
    )


def freeze(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Filesystem name"),
    mount: Optional[str] = typer.Option(None, "--mount", help="Mount point"),
):
    """
    Freeze a mounted filesystem (fsfreeze).
    """
    _converge(ctx, Action.FREEZE, name=name, mount=mount)


def unfreeze(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Filesystem name"),
    mount: Optional[str] = typer.Option(None, "--mount", help="Mount point"),
):
    """
    Unfreeze a frozen filesystem.
    """
    _converge(ctx, Action.UNFREEZE, name=name, mount=mount)
