#!/usr/bin/env python3
"""
Main CLI entry point using Typer.
"""

import sys
from pathlib import Path
from typing import Optional

import typer

from fsprov.cli.commands import apply, filesystem
from fsprov.cli.lib.log import configure_logging

app = typer.Typer(
    name="fsprov",
    help="Declarative filesystem provisioning tool",
    add_completion=False,
)


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    config: Optional[Path] = typer.Option(None, "--config", help="Config file (default: /etc/fsprov/fsprov.conf)"),
):
    """Converge filesystems: create, enable (fstab), mount, freeze, unfreeze."""
    configure_logging(verbose)
    ctx.obj = {"config_path": config}


# Register commands
app.command("create")(filesystem.create)
app.command("enable")(filesystem.enable)
app.command("mount")(filesystem.mount)
app.command("freeze")(filesystem.freeze)
app.command("unfreeze")(filesystem.unfreeze)
app.command("apply")(apply.apply)


def main() -> int:
    """Main entry point."""
    try:
        app()
        return 0
    except KeyboardInterrupt:
        typer.echo("\nOperation cancelled by user", err=True)
        return 130
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
