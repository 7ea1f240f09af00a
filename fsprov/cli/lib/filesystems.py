"""
Filesystems file loader.

A filesystems file lists several filesystems to converge in one run. Each INI
section is one filesystem; the section name is its name and the keys are
FilesystemSpec fields, plus `actions`:

    [data]
    vg = vg0
    size = 10G
    fstype = xfs
    mount = /srv/data
    actions = create,enable,mount
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Dict, List, Tuple, Union

from fsprov.cli.lib.exceptions import ConfigurationError
from fsprov.models import Action, FilesystemSpec, build_spec

DEFAULT_ACTIONS = (Action.CREATE, Action.ENABLE, Action.MOUNT)

BOOL_FIELDS = {"sparse", "force", "ignore_existing", "device_defer"}
INT_FIELDS = {"stripes", "mirrors", "pass", "dump"}


def _parse_actions(raw: str, section: str) -> List[Action]:
    actions = []
    for token in (t.strip() for t in raw.split(",")):
        if not token:
            continue
        try:
            actions.append(Action(token))
        except ValueError:
            raise ConfigurationError(f"[{section}] unknown action '{token}'")
    return actions


def _section_fields(parser: configparser.ConfigParser, section: str) -> Dict[str, object]:
    fields: Dict[str, object] = {"name": section}
    for key in parser.options(section):
        if key == "actions":
            continue
        try:
            if key in BOOL_FIELDS:
                fields[key] = parser.getboolean(section, key)
            elif key in INT_FIELDS:
                fields[key] = parser.getint(section, key)
            else:
                fields[key] = parser.get(section, key)
        except ValueError as e:
            raise ConfigurationError(f"[{section}] invalid value for {key}: {e}")
    return fields


def load_filesystems(path: Union[str, Path]) -> List[Tuple[FilesystemSpec, List[Action]]]:
    """
    Load a filesystems file.

    Args:
        path: INI file path

    Returns:
        (spec, actions) pairs in file order

    Raises:
        ConfigurationError: If the file is missing or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Filesystems file {path} does not exist")

    # interpolation off: mount options may contain "%"
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(path, encoding="utf-8")
    except configparser.Error as e:
        raise ConfigurationError(f"Cannot parse {path}: {e}")

    filesystems = []
    for section in parser.sections():
        fields = _section_fields(parser, section)
        if parser.has_option(section, "actions"):
            actions = _parse_actions(parser.get(section, "actions"), section)
        else:
            actions = list(DEFAULT_ACTIONS)
        filesystems.append((build_spec(**fields), actions))
    return filesystems
