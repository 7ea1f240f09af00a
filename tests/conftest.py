"""
Pytest configuration and fixtures.
"""

import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from fsprov.cli.lib.config import FsprovConfig
from fsprov.cli.lib.exceptions import DeviceTimeoutError


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: unit tests")
    config.addinivalue_line("markers", "integration: CLI tests")


class FakeHost:
    """In-memory host recording every side effect."""

    def __init__(
        self,
        config=None,
        existing=(),
        mounted=(),
        mountpoints=(),
        formatted=(),
        tools=("mkfs.ext3", "mkfs.ext4", "mkfs.xfs"),
        frozen=(),
    ):
        self.config = config or FsprovConfig()
        self.existing = set(existing)
        self.mounted = set(mounted)
        self.mountpoints = set(mountpoints)
        self.formatted = set(formatted)
        self.tools = set(tools)
        self.frozen = set(frozen)
        self.calls = []

    def called(self, name):
        return [c for c in self.calls if c[0] == name]

    def ensure_installed(self, name):
        self.calls.append(("ensure_installed", name))

    def ensure_logical_volume(self, name, group, size, stripes=None, mirrors=None):
        self.calls.append(("ensure_logical_volume", name, group, size, stripes, mirrors))
        self.existing.add(f"/dev/mapper/{group}-{name}")

    def ensure_backing_file(self, path, size, sparse, device):
        self.calls.append(("ensure_backing_file", path, size, sparse, device))
        self.existing.add(device)

    def device_exists(self, path):
        return path in self.existing

    def wait_for_device(self, path):
        self.calls.append(("wait_for_device", path))
        if path not in self.existing:
            raise DeviceTimeoutError(f"Timeout waiting for device {path}", device=path)

    def tool_installed(self, tool):
        return tool in self.tools

    def probe_mountable(self, device, label):
        self.calls.append(("probe_mountable", device, label))
        return device in self.formatted

    def upsert_fstab_entry(self, entry):
        self.calls.append(("upsert_fstab_entry", entry))
        return True

    def is_mounted(self, device, mount_point=None):
        return any(d == device and (mount_point is None or p == mount_point) for d, p in self.mounted)

    def is_mountpoint(self, path):
        return path in self.mountpoints

    def mount(self, device, path, fstype, options):
        self.calls.append(("mount", device, path, fstype, options))
        self.mounted.add((device, path))
        self.mountpoints.add(path)

    def ensure_directory(self, path, owner=None, group=None, mode=None):
        self.calls.append(("ensure_directory", path, owner, group, mode))

    def is_frozen(self, mount_point):
        return mount_point in self.frozen

    def freeze(self, mount_point):
        self.calls.append(("freeze", mount_point))
        self.frozen.add(mount_point)

    def unfreeze(self, mount_point):
        self.calls.append(("unfreeze", mount_point))
        self.frozen.discard(mount_point)

    def run_checked(self, argv):
        argv = list(argv)
        self.calls.append(("run", argv))
        if argv[0] == "mkfs":
            self.formatted.add(argv[-1])


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def fake_host():
    """A host with nothing provisioned."""
    return FakeHost()


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for testing."""
    with patch("subprocess.run") as mock:
        yield mock


@pytest.fixture
def mock_path_exists():
    """Mock os.path.exists for testing."""
    with patch("os.path.exists") as mock:
        yield mock


@pytest.fixture
def mock_which():
    """Mock shutil.which for testing."""
    with patch("shutil.which") as mock:
        yield mock


@pytest.fixture
def make_host():
    """Factory for FakeHost with a given observed state."""
    return FakeHost
