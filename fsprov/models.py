"""
Pydantic models describing the desired state of a filesystem.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fsprov.cli.lib.exceptions import ConfigurationError
from fsprov.cli.lib.validators import validate_absolute_path, validate_mode, validate_name, validate_size


class Action(str, Enum):
    """Convergence actions."""

    CREATE = "create"
    ENABLE = "enable"
    MOUNT = "mount"
    FREEZE = "freeze"
    UNFREEZE = "unfreeze"


class FilesystemSpec(BaseModel):
    """Desired state of one filesystem."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = Field(..., description="Resource name, used as the label when none is given", min_length=1)
    label: Optional[str] = Field(None, description="Filesystem label")

    # Device sources
    device: Optional[str] = Field(None, description="Explicit device; the loop device for file-backed storage")
    vg: Optional[str] = Field(None, description="LVM volume group")
    file: Optional[str] = Field(None, description="Backing file path")
    uuid: Optional[str] = Field(None, description="Filesystem UUID")

    # Creation
    fstype: str = Field("ext3", description="Filesystem type", min_length=1)
    mkfs_options: str = Field("", description="Extra mkfs options")
    package: Optional[str] = Field(None, description="Comma-separated packages to install before mkfs")

    # LVM and file-backed storage
    sparse: bool = Field(True, description="Create the backing file sparse")
    size: Optional[str] = Field(None, description="Size of the logical volume or backing file (e.g., 10G)")
    stripes: Optional[int] = Field(None, description="LVM stripes", gt=0)
    mirrors: Optional[int] = Field(None, description="LVM mirrors", ge=0)

    # Mounting
    mount: Optional[str] = Field(None, description="Mount point")
    options: str = Field("defaults", description="Mount options", min_length=1)
    user: Optional[str] = Field(None, description="Mount point owner")
    group: Optional[str] = Field(None, description="Mount point group")
    mode: Optional[str] = Field(None, description="Mount point mode (octal)")
    pass_: int = Field(0, alias="pass", description="fsck pass", ge=0, le=2)
    dump: int = Field(0, description="dump frequency", ge=0, le=2)

    # Dangerous
    force: bool = Field(False, description="Pass the filesystem's force flag to mkfs")
    ignore_existing: bool = Field(False, description="Format even if a mountable filesystem is present")
    device_defer: bool = Field(False, description="Do nothing while the device is absent")

    # name doubles as the label, which ends up in device and directory paths
    @field_validator("name", "label")
    def check_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            validate_name(v)
        return v

    @field_validator("vg")
    def check_vg(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            validate_name(v)
        return v

    @field_validator("size")
    def check_size(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            validate_size(v)
        return v

    @field_validator("mode")
    def check_mode(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            validate_mode(v)
        return v

    @field_validator("mount", "file")
    def check_path(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            validate_absolute_path(v)
        return v

    @field_validator("fstype")
    def check_fstype(cls, v: str) -> str:
        if any(c.isspace() for c in v):
            raise ValueError("fstype must not contain whitespace")
        return v

    @property
    def effective_label(self) -> str:
        return self.label or self.name

    @property
    def package_list(self) -> list:
        if not self.package:
            return []
        return [p.strip() for p in self.package.split(",") if p.strip()]


def build_spec(**fields: Any) -> FilesystemSpec:
    """
    Build a FilesystemSpec, dropping unset (None) values.

    Raises:
        ConfigurationError: If validation fails
    """
    data = {k: v for k, v in fields.items() if v is not None}
    try:
        return FilesystemSpec(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid filesystem '{fields.get('name')}': {e}") from e
