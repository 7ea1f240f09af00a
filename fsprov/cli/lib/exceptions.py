"""Exceptions raised while converging a filesystem."""

from typing import List, Optional, Sequence


class FilesystemError(Exception):
    """Base exception for fsprov errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(FilesystemError, ValueError):
    """A required field is missing or invalid for the requested action."""

    pass


class DeviceTimeoutError(FilesystemError, TimeoutError):
    """A device node never appeared."""

    def __init__(self, message: str, device: Optional[str] = None, attempts: int = 0):
        super().__init__(message)
        self.device = device
        self.attempts = attempts


class ExternalCommandError(FilesystemError, RuntimeError):
    """An external command exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "", message: Optional[str] = None):
        self.argv: List[str] = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        if message is None:
            message = f"Command '{' '.join(self.argv)}' failed with exit status {returncode}"
            if stderr:
                message = f"{message}: {str(stderr).strip()}"
        super().__init__(message)
