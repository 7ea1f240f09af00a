"""
Configuration loader for fsprov.

Holds the filesystem tool table (packages to install and the mkfs force flag
per filesystem type), the set of network filesystem types, and host paths that
tests and unusual hosts need to override.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Mapping, Optional, Tuple


DEFAULT_CONFIG_PATH = Path("/etc/fsprov/fsprov.conf")

DEFAULT_NET_FS_TYPES: Tuple[str, ...] = ("nfs", "nfs4", "cifs", "smbfs", "nbd")

TOOLS_SECTION_PREFIX = "tools:"


@dataclass(frozen=True)
class ToolConfig:
    packages: Tuple[str, ...] = ()
    forceopt: Optional[str] = None


DEFAULT_TOOLS: Dict[str, ToolConfig] = {
    "ext2": ToolConfig(packages=("e2fsprogs",), forceopt="-F"),
    "ext3": ToolConfig(packages=("e2fsprogs",), forceopt="-F"),
    "ext4": ToolConfig(packages=("e2fsprogs",), forceopt="-F"),
    "xfs": ToolConfig(packages=("xfsprogs",), forceopt="-f"),
    "btrfs": ToolConfig(packages=("btrfs-progs",), forceopt="-f"),
}


@dataclass(frozen=True)
class FsprovConfig:
    fstab_path: Path = Path("/etc/fstab")
    proc_mounts_path: Path = Path("/proc/mounts")
    probe_dir: Path = Path("/tmp/filesystemchecks")
    wait_interval: float = 0.3
    wait_attempts: int = 1000
    net_fs_types: FrozenSet[str] = frozenset(DEFAULT_NET_FS_TYPES)
    package_manager: Optional[str] = None
    tools: Mapping[str, ToolConfig] = field(default_factory=lambda: dict(DEFAULT_TOOLS))

    def tool(self, fstype: str) -> ToolConfig:
        return self.tools.get(fstype, ToolConfig())

    def is_netfs(self, fstype: str) -> bool:
        return fstype in self.net_fs_types


def _config_path() -> Path:
    env = os.environ.get("FSPROV_CONFIG_PATH")
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _read_ini(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path, encoding="utf-8")
    return parser


def _split_list(raw: str) -> Tuple[str, ...]:
    return tuple(t.strip() for t in raw.split(",") if t.strip())


def _parse_tools(parser: configparser.ConfigParser) -> Dict[str, ToolConfig]:
    tools = dict(DEFAULT_TOOLS)
    for section in parser.sections():
        if not section.startswith(TOOLS_SECTION_PREFIX):
            continue
        fstype = section[len(TOOLS_SECTION_PREFIX):].strip()
        if not fstype:
            continue
        base = tools.get(fstype, ToolConfig())
        values = parser[section]
        packages = _split_list(values["package"]) if "package" in values else base.packages
        forceopt = values.get("forceopt", base.forceopt)
        tools[fstype] = ToolConfig(packages=packages, forceopt=forceopt.strip() if forceopt else None)
    return tools


def load_config(path: Optional[Path] = None) -> FsprovConfig:
    """
    Load config from `path`, else `FSPROV_CONFIG_PATH`, else `/etc/fsprov/fsprov.conf`.

    Missing files are not an error; defaults are returned.
    """
    parser = _read_ini(Path(path) if path else _config_path())
    section = parser["fsprov"] if parser.has_section("fsprov") else {}

    def _get(key: str, default: str) -> str:
        if isinstance(section, dict):
            return str(section.get(key, default)).strip()
        return str(section.get(key, fallback=default)).strip()

    def _get_int(key: str, default: int) -> int:
        raw = _get(key, str(default))
        try:
            return int(raw)
        except Exception:
            return default

    def _get_float(key: str, default: float) -> float:
        raw = _get(key, str(default))
        try:
            return float(raw)
        except Exception:
            return default

    net_fs_types = _split_list(_get("net_fs_types", ",".join(DEFAULT_NET_FS_TYPES)))
    package_manager = _get("package_manager", "")

    return FsprovConfig(
        fstab_path=Path(_get("fstab_path", "/etc/fstab")),
        proc_mounts_path=Path(_get("proc_mounts_path", "/proc/mounts")),
        probe_dir=Path(_get("probe_dir", "/tmp/filesystemchecks")),
        wait_interval=_get_float("wait_interval", 0.3),
        wait_attempts=_get_int("wait_attempts", 1000),
        net_fs_types=frozenset(net_fs_types),
        package_manager=package_manager or None,
        tools=_parse_tools(parser),
    )
