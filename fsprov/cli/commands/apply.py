"""
Converge every filesystem listed in a filesystems file.
"""

from pathlib import Path

import typer

from fsprov.cli.lib.config import load_config
from fsprov.cli.lib.exceptions import FilesystemError
from fsprov.cli.lib.filesystems import load_filesystems
from fsprov.cli.lib.host import LocalHost
from fsprov.services.filesystem_service import FilesystemProvider


def apply(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Filesystems file (INI, one section per filesystem)"),
):
    """
    Apply a filesystems file.

    Runs each filesystem's actions (default: create, enable, mount) in file
    order. The first failure stops the run.
    """
    try:
        filesystems = load_filesystems(path)
        cfg = load_config(ctx.obj.get("config_path") if ctx.obj else None)
        host = LocalHost(cfg)

        for spec, actions in filesystems:
            for action in actions:
                typer.echo(f"Filesystem {spec.name}: {action.value}")
                # one provider per action: the device is resolved once per action
                FilesystemProvider(spec, host).run(action)

        typer.echo(f"Applied {len(filesystems)} filesystem(s)")

    except FilesystemError as e:
        typer.echo(f"Error applying {path}: {e}", err=True)
        raise typer.Exit(1)
