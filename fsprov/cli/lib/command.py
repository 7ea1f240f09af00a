"""
External command execution.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from fsprov.cli.lib.exceptions import ExternalCommandError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CmdResult:
    argv: List[str]
    returncode: int
    stdout: str
    stderr: str


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(str(a)) for a in argv)


def run(argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> CmdResult:
    """
    Run a command and capture its output.

    The command is always logged; a non-zero exit status is returned, not raised.

    Args:
        argv: Command and arguments
        env: Extra environment variables

    Returns:
        CmdResult with exit status and captured output
    """
    argv_list = [str(a) for a in argv]
    logger.info("CMD %s", format_argv(argv_list))

    kwargs = {}
    if env:
        kwargs["env"] = dict(os.environ, **env)

    result = subprocess.run(
        argv_list,
        capture_output=True,
        text=True,
        check=False,
        **kwargs
    )

    if result.stderr:
        logger.debug("STDERR %s", result.stderr)

    return CmdResult(argv=argv_list, returncode=result.returncode, stdout=result.stdout, stderr=result.stderr)


def run_checked(argv: Sequence[str], *, env: Optional[Mapping[str, str]] = None) -> CmdResult:
    """
    Run a command, raising if it fails.

    Raises:
        ExternalCommandError: If the command exits non-zero
    """
    result = run(argv, env=env)
    if result.returncode != 0:
        raise ExternalCommandError(result.argv, result.returncode, result.stderr or "")
    return result
