"""
Unit tests for filebacked module.
"""

from unittest.mock import MagicMock, patch

import pytest

from fsprov.cli.lib.exceptions import ExternalCommandError, FilesystemError
from fsprov.cli.lib.filebacked import ensure_backing_file, loop_attached


class TestLoopAttached:
    """Tests for loop_attached function."""

    @pytest.mark.unit
    def test_free(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(returncode=1, stdout="", stderr="No such device or address")

        assert loop_attached("/dev/loop3", "/srv/data.img") is False

    @pytest.mark.unit
    def test_attached(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(returncode=0, stdout="/dev/loop3: [64768]:1835 (/srv/data.img)\n")

        assert loop_attached("/dev/loop3", "/srv/data.img") is True

    @pytest.mark.unit
    def test_attached_elsewhere(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(returncode=0, stdout="/dev/loop3: [64768]:99 (/srv/other.img)\n")

        with pytest.raises(FilesystemError, match="attached to another file"):
            loop_attached("/dev/loop3", "/srv/data.img")


class TestEnsureBackingFile:
    """Tests for ensure_backing_file function."""

    @pytest.mark.unit
    @patch("os.makedirs")
    def test_create_sparse(self, mock_makedirs, mock_subprocess, mock_path_exists):
        mock_path_exists.return_value = False
        mock_subprocess.side_effect = [
            MagicMock(returncode=0),  # truncate
            MagicMock(returncode=1, stdout=""),  # losetup (free)
            MagicMock(returncode=0),  # losetup attach
        ]

        ensure_backing_file("/srv/images/data.img", "10G", sparse=True, device="/dev/loop3")

        mock_makedirs.assert_called_once_with("/srv/images", exist_ok=True)
        mock_subprocess.assert_any_call(
            ["truncate", "-s", "10G", "/srv/images/data.img"], capture_output=True, text=True, check=False
        )
        mock_subprocess.assert_any_call(
            ["losetup", "/dev/loop3", "/srv/images/data.img"], capture_output=True, text=True, check=False
        )

    @pytest.mark.unit
    @patch("os.makedirs")
    def test_create_allocated(self, mock_makedirs, mock_subprocess, mock_path_exists):
        mock_path_exists.return_value = False
        mock_subprocess.return_value = MagicMock(returncode=0)

        ensure_backing_file("/srv/images/data.img", "1G", sparse=False)

        mock_subprocess.assert_called_once_with(
            ["fallocate", "-l", "1G", "/srv/images/data.img"], capture_output=True, text=True, check=False
        )

    @pytest.mark.unit
    def test_existing_and_attached(self, mock_subprocess, mock_path_exists):
        mock_path_exists.return_value = True
        mock_subprocess.return_value = MagicMock(returncode=0, stdout="/dev/loop3: [1]:2 (/srv/data.img)")

        ensure_backing_file("/srv/data.img", "10G", device="/dev/loop3")

        mock_subprocess.assert_called_once_with(["losetup", "/dev/loop3"], capture_output=True, text=True, check=False)

    @pytest.mark.unit
    @patch("os.makedirs")
    def test_create_fails(self, mock_makedirs, mock_subprocess, mock_path_exists):
        mock_path_exists.return_value = False
        mock_subprocess.return_value = MagicMock(returncode=1, stderr="No space left on device")

        with pytest.raises(ExternalCommandError, match="No space left on device"):
            ensure_backing_file("/srv/data.img", "10G", device="/dev/loop3")
