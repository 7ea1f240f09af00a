"""
Persistent mount table (fstab) management.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_FSTAB_MODE = 0o644

# fstab and /proc/mounts encode these characters as octal escapes
OCTAL_ESCAPES = (("\\", "\\134"), (" ", "\\040"), ("\t", "\\011"), ("\n", "\\012"))


def escape_field(field: str) -> str:
    for char, escaped in OCTAL_ESCAPES:
        field = field.replace(char, escaped)
    return field


def unescape_field(field: str) -> str:
    for char, escaped in reversed(OCTAL_ESCAPES):
        field = field.replace(escaped, char)
    return field


@dataclass(frozen=True)
class FstabEntry:
    device: str
    mount_point: str
    fstype: str
    options: str = "defaults"
    dump: int = 0
    passno: int = 0

    def to_line(self) -> str:
        device = escape_field(self.device)
        mount_point = escape_field(self.mount_point)
        return f"{device} {mount_point} {self.fstype} {self.options} {self.dump} {self.passno}"


def parse_line(line: str) -> Optional[FstabEntry]:
    """
    Parse one fstab line.

    Returns:
        FstabEntry, or None for blank lines, comments and malformed lines
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return None

    fields = stripped.split()
    if len(fields) < 3:
        return None

    try:
        dump = int(fields[4]) if len(fields) > 4 else 0
        passno = int(fields[5]) if len(fields) > 5 else 0
    except ValueError:
        return None

    return FstabEntry(
        device=unescape_field(fields[0]),
        mount_point=unescape_field(fields[1]),
        fstype=fields[2],
        options=fields[3] if len(fields) > 3 else "defaults",
        dump=dump,
        passno=passno,
    )


def _read_lines(path: Path) -> List[str]:
    if not path.exists():
        return []
    with open(path, "r", encoding="utf-8") as file:
        return file.read().splitlines()


def read_entries(path: Union[str, Path]) -> List[FstabEntry]:
    entries = []
    for line in _read_lines(Path(path)):
        entry = parse_line(line)
        if entry is not None:
            entries.append(entry)
    return entries


def _atomic_write_lines(path: Path, lines: List[str]) -> None:
    mode = stat.S_IMODE(path.stat().st_mode) if path.exists() else DEFAULT_FSTAB_MODE
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as file:
            file.write("\n".join(lines))
            file.write("\n")
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    finally:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass


def upsert_entry(path: Union[str, Path], entry: FstabEntry) -> bool:
    """
    Create or update the fstab entry for a mount point.

    An identical entry is left alone. An entry for the same mount point with
    different fields is replaced in place, and any further entries for that
    mount point are dropped. Otherwise the entry is appended.

    Args:
        path: fstab path
        entry: Desired entry

    Returns:
        True if the file was changed
    """
    path = Path(path)
    lines = _read_lines(path)

    new_lines: List[str] = []
    found = False
    changed = False
    for line in lines:
        existing = parse_line(line)
        if existing is None or existing.mount_point != entry.mount_point:
            new_lines.append(line)
            continue
        if found:
            changed = True
            continue
        found = True
        if existing == entry:
            new_lines.append(line)
        else:
            new_lines.append(entry.to_line())
            changed = True

    if not found:
        new_lines.append(entry.to_line())
        changed = True

    if not changed:
        logger.debug("fstab entry for %s is up to date", entry.mount_point)
        return False

    _atomic_write_lines(path, new_lines)
    logger.info("Updated %s: %s", path, entry.to_line())
    return True
