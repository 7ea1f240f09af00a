"""
Unit tests for freeze module.
"""

from unittest.mock import MagicMock

import pytest

from fsprov.cli.lib.exceptions import ExternalCommandError
from fsprov.cli.lib.freeze import freeze, is_frozen, unfreeze


class TestIsFrozen:
    """Tests for is_frozen function."""

    @pytest.mark.unit
    def test_not_frozen(self, mock_subprocess):
        """Test a successful probe freeze is undone."""
        mock_subprocess.side_effect = [
            MagicMock(returncode=0),  # fsfreeze --freeze (probe)
            MagicMock(returncode=0),  # fsfreeze --unfreeze
        ]

        assert is_frozen("/srv/data") is False
        mock_subprocess.assert_any_call(
            ["fsfreeze", "--unfreeze", "/srv/data"], capture_output=True, text=True, check=False
        )

    @pytest.mark.unit
    def test_frozen(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(
            returncode=1, stderr="fsfreeze: /srv/data: freeze failed: Device or resource busy"
        )

        assert is_frozen("/srv/data") is True
        assert mock_subprocess.call_count == 1

    @pytest.mark.unit
    def test_probe_fails(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(returncode=1, stderr="fsfreeze: /srv/data: not a mount point")

        with pytest.raises(ExternalCommandError, match="not a mount point"):
            is_frozen("/srv/data")

    @pytest.mark.unit
    def test_undo_retried_once(self, mock_subprocess):
        mock_subprocess.side_effect = [
            MagicMock(returncode=0, stderr=""),  # fsfreeze --freeze
            MagicMock(returncode=1, stderr="Device or resource busy"),  # fsfreeze --unfreeze
            MagicMock(returncode=0, stderr=""),  # fsfreeze --unfreeze (retry)
        ]

        assert is_frozen("/srv/data") is False
        assert mock_subprocess.call_count == 3

    @pytest.mark.unit
    def test_undo_fails_twice(self, mock_subprocess):
        mock_subprocess.side_effect = [
            MagicMock(returncode=0, stderr=""),
            MagicMock(returncode=1, stderr="Input/output error"),
            MagicMock(returncode=1, stderr="Input/output error"),
        ]

        with pytest.raises(ExternalCommandError, match="Input/output error") as exc_info:
            is_frozen("/srv/data")
        assert exc_info.value.argv == ["fsfreeze", "--unfreeze", "/srv/data"]
        assert mock_subprocess.call_count == 3


class TestFreeze:
    """Tests for freeze and unfreeze functions."""

    @pytest.mark.unit
    def test_freeze(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(returncode=0)

        freeze("/srv/data")

        mock_subprocess.assert_called_once_with(
            ["fsfreeze", "--freeze", "/srv/data"], capture_output=True, text=True, check=False
        )

    @pytest.mark.unit
    def test_unfreeze_fails(self, mock_subprocess):
        mock_subprocess.return_value = MagicMock(returncode=1, stderr="Invalid argument")

        with pytest.raises(ExternalCommandError, match="Invalid argument"):
            unfreeze("/srv/data")
