"""
Exceptions raised by PathKit filesystem operations.
"""

from typing import Optional


class FilesystemError(Exception):
    """Base exception for filesystem operation failures."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ExpansionError(FilesystemError):
    """The home-directory shorthand in a path could not be resolved."""
    pass


class NotAFileError(FilesystemError):
    """The path does not denote an existing file."""

    def __init__(self, path: str):
        super().__init__(f"{path} is not a file", path=path)


class NotADirectoryPathError(FilesystemError):
    """The path does not denote an existing directory."""

    def __init__(self, path: str):
        super().__init__(f"{path} is not a directory", path=path)


class FilesystemIOError(FilesystemError):
    """A native filesystem call failed (permission, disk, wrong entry type...)."""

    def __init__(self, message: str, path: Optional[str] = None, cause: Optional[Exception] = None):
        super().__init__(message, path=path)
        self.cause = cause

    @property
    def errno(self) -> Optional[int]:
        """errno of the underlying error, if it has one."""
        return getattr(self.cause, "errno", None)
