"""
Path service for PathKit.

Thin wrappers over native filesystem calls. Each operation expands a
leading ``~`` and checks the entry type itself, then logs through the
service's own logger.
"""

import hashlib
import os
import shutil
import stat
import warnings
from pathlib import Path
from typing import List, Optional, Union

from core.exceptions import (
    ExpansionError,
    FilesystemIOError,
    NotADirectoryPathError,
    NotAFileError,
)
from core.logger import PathLogger, StructuredLogger


PathInput = Union[str, "os.PathLike[str]"]

DEFAULT_DIRECTORY_MODE = 0o755
DEFAULT_FILE_MODE = 0o644

_SEPARATORS = ("/", "\\")


class PathService:
    """Filesystem operations with home expansion and structured logging."""

    def __init__(self, verbosity: int = 0, logger: Optional[PathLogger] = None):
        """
        Initialize PathService.

        Args:
            verbosity: 0 logs errors only, 4 and up logs debug detail.
                Ignored when a logger is supplied.
            logger: Logger to use instead of creating one on first use
        """
        self.verbosity = verbosity
        self._logger = logger

    @property
    def logger(self) -> PathLogger:
        if self._logger is None:
            self._logger = StructuredLogger.for_verbosity(self.verbosity)
        return self._logger

    # ------------------------------------------------------------------
    # Expansion and predicates
    # ------------------------------------------------------------------

    def expand_home(self, path: PathInput) -> str:
        """
        Expand a leading ``~`` to the current user's home directory.

        Paths without the shorthand are returned unchanged.

        Raises:
            ExpansionError: If the home directory cannot be resolved, or the
                path names another user's home (``~user``)
        """
        path = os.fspath(path)
        expanded = path

        if path.startswith("~"):
            if len(path) > 1 and path[1] not in _SEPARATORS:
                self.logger.warning("Cannot expand user-specific home directory", path=path)
                raise ExpansionError("cannot expand user-specific home dir", path=path)
            try:
                home = str(Path.home())
            except (RuntimeError, KeyError) as e:
                self.logger.warning("Failed to resolve home directory", path=path, error=str(e))
                raise ExpansionError(f"cannot resolve home directory: {e}", path=path) from e
            expanded = home + path[1:]

        self.logger.debug("Expanding path", path=path, expanded=expanded)
        return expanded

    # Older method names
    build_absolute_path_from_home = expand_home

    def _stat(self, path: PathInput) -> Optional[os.stat_result]:
        """Expand and stat a path; None when either step fails."""
        try:
            return os.stat(self.expand_home(path))
        except (ExpansionError, OSError, ValueError):
            return None

    def exists(self, path: PathInput) -> bool:
        """True if any filesystem entry exists at the path."""
        result = self._stat(path)
        self.logger.debug("Checking to see if path exists", path=os.fspath(path))
        return result is not None

    check_exists = exists

    def is_directory(self, path: PathInput) -> bool:
        """True if the path exists and is a directory."""
        result = self._stat(path)
        self.logger.debug("Checking to see if path is a directory", path=os.fspath(path))
        return result is not None and stat.S_ISDIR(result.st_mode)

    def is_file(self, path: PathInput) -> bool:
        """True if the path exists and is not a directory."""
        result = self._stat(path)
        self.logger.debug("Checking to see if path is a file", path=os.fspath(path))
        return result is not None and not stat.S_ISDIR(result.st_mode)

    def is_empty_directory(self, path: PathInput) -> bool:
        """
        True if the path is an existing directory with no entries.

        Only the first entry of the listing is read.

        Raises:
            FilesystemIOError: If the directory exists but its listing
                cannot be opened or read
        """
        if not self.is_directory(path):
            return False

        resolved = self.expand_home(path)
        self.logger.debug("Checking to see if path is an empty directory", path=resolved)

        try:
            with os.scandir(resolved) as entries:
                first = next(entries, None)
        except OSError as e:
            self.logger.error("Failed to read directory listing", path=resolved, error=str(e))
            raise FilesystemIOError(
                f"cannot read directory {resolved}: {e}", path=resolved, cause=e
            ) from e

        return first is None

    # ------------------------------------------------------------------
    # Directories
    # ------------------------------------------------------------------

    def create_directory(self, path: PathInput, mode: int = DEFAULT_DIRECTORY_MODE) -> bool:
        """
        Create a directory and any missing parents (like ``mkdir -p``).

        Args:
            path: Directory to create
            mode: Permission bits for newly created directories

        Returns:
            True once the directory exists

        Raises:
            ExpansionError: If the path cannot be expanded
            FilesystemIOError: If the directory cannot be created
        """
        resolved = self.expand_home(path)
        self.logger.debug("Creating directory", path=resolved)

        if self.is_directory(resolved):
            return True

        try:
            os.makedirs(resolved, mode)
        except OSError as e:
            self.logger.warning("Failed to create directory", path=resolved, error=str(e))
            raise FilesystemIOError(
                f"cannot create directory {resolved}: {e}", path=resolved, cause=e
            ) from e

        self.logger.debug("Directory created successfully", path=resolved)
        return True

    def remove_directory(self, path: PathInput, recursive: bool = False) -> bool:
        """
        Remove a directory.

        Args:
            path: Directory to remove
            recursive: If True, remove all of its contents as well;
                otherwise the directory must be empty

        Returns:
            True if the directory was removed

        Raises:
            ExpansionError: If the path cannot be expanded
            NotADirectoryPathError: If the path is not an existing directory
            FilesystemIOError: If removal fails (e.g. directory not empty)
        """
        resolved = self.expand_home(path)
        self.logger.debug("Attempting to remove directory", directory=resolved)

        if not self.is_directory(resolved):
            self.logger.warning("Failed to remove directory", directory=resolved)
            raise NotADirectoryPathError(resolved)

        try:
            if os.path.islink(resolved):
                self.logger.debug("Removing symlink to directory", directory=resolved)
                os.unlink(resolved)
            elif recursive:
                self.logger.debug("Removing directory with recursion", directory=resolved)
                shutil.rmtree(resolved)
            else:
                self.logger.debug("Removing directory without recursion", directory=resolved)
                os.rmdir(resolved)
        except OSError as e:
            self.logger.warning("Failed to remove directory", directory=resolved, error=str(e))
            raise FilesystemIOError(
                f"cannot remove directory {resolved}: {e}", path=resolved, cause=e
            ) from e

        self.logger.debug("Directory was removed", directory=resolved)
        return True

    def get_directory_contents(self, path: PathInput) -> List[str]:
        """
        List the names of the immediate children of a directory.

        Names are returned in the order the OS yields them, not sorted.

        Raises:
            ExpansionError: If the path cannot be expanded
            FilesystemIOError: If the path cannot be listed as a directory
        """
        resolved = self.expand_home(path)
        self.logger.debug("Listing directory contents", path=resolved)

        try:
            with os.scandir(resolved) as entries:
                return [entry.name for entry in entries]
        except OSError as e:
            self.logger.warning("Failed to list directory", path=resolved, error=str(e))
            raise FilesystemIOError(
                f"cannot list directory {resolved}: {e}", path=resolved, cause=e
            ) from e

    # ------------------------------------------------------------------
    # Files
    # ------------------------------------------------------------------

    def _read_file(self, resolved: str) -> bytes:
        """Read an already expanded path."""
        self.logger.debug("Attempting to load file", file=resolved)

        if not self.is_file(resolved):
            self.logger.info("Could not read file", file=resolved)
            raise NotAFileError(resolved)

        try:
            with open(resolved, "rb") as f:
                contents = f.read()
        except OSError as e:
            self.logger.info("Could not read file", file=resolved, error=str(e))
            raise FilesystemIOError(
                f"cannot read file {resolved}: {e}", path=resolved, cause=e
            ) from e

        self.logger.debug("File read successfully", file=resolved, size=len(contents))
        return contents

    def load_file_bytes(self, path: PathInput) -> bytes:
        """
        Read a whole file as bytes.

        Raises:
            ExpansionError: If the path cannot be expanded
            NotAFileError: If the path is not an existing file
            FilesystemIOError: If the read fails
        """
        return self._read_file(self.expand_home(path))

    def load_file_string(self, path: PathInput, encoding: str = "utf-8") -> str:
        """
        Read a whole file as text.

        Raises:
            ExpansionError: If the path cannot be expanded
            NotAFileError: If the path is not an existing file
            FilesystemIOError: If the read or the decode fails
        """
        resolved = self.expand_home(path)
        contents = self._read_file(resolved)
        try:
            return contents.decode(encoding)
        except UnicodeDecodeError as e:
            self.logger.info("Could not decode file", file=resolved, encoding=encoding)
            raise FilesystemIOError(
                f"cannot decode {resolved} as {encoding}: {e}", path=resolved, cause=e
            ) from e

    def load_file_if_exists(self, path: PathInput) -> str:
        """Deprecated: use load_file_string."""
        warnings.warn(
            "load_file_if_exists is deprecated, use load_file_string",
            DeprecationWarning,
            stacklevel=2
        )
        return self.load_file_string(path)

    def write_file(
        self,
        path: PathInput,
        data: Union[bytes, str],
        mode: int = DEFAULT_FILE_MODE
    ) -> None:
        """
        Write data to a file, creating or truncating it.

        Parent directories are not created. The write is not atomic: a
        failure part way through can leave a truncated file behind.

        Args:
            path: File to write
            data: Content; str is encoded as UTF-8
            mode: Permission bits used when the file is created

        Raises:
            ExpansionError: If the path cannot be expanded
            FilesystemIOError: If the file cannot be opened or written
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        resolved = self.expand_home(path)
        self.logger.debug("Writing file", filename=resolved, mode=oct(mode))

        try:
            fd = os.open(resolved, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, "wb") as f:
                f.write(data)
        except OSError as e:
            self.logger.warning("Failed to write file", filename=resolved, mode=oct(mode), error=str(e))
            raise FilesystemIOError(
                f"cannot write file {resolved}: {e}", path=resolved, cause=e
            ) from e

        self.logger.debug("Successfully wrote file", filename=resolved, size=len(data))

    def get_file_sha256_checksum(self, path: PathInput) -> str:
        """
        SHA-256 of a file's content as 64 lowercase hex characters.

        Matches the output of ``sha256sum`` / ``shasum -a 256``.

        Raises:
            ExpansionError: If the path cannot be expanded
            NotAFileError: If the path is not an existing file
            FilesystemIOError: If the read fails
        """
        resolved = self.expand_home(path)
        try:
            contents = self._read_file(resolved)
        except (NotAFileError, FilesystemIOError):
            self.logger.warning("Failed to retrieve file checksum", path=resolved)
            raise

        checksum = hashlib.sha256(contents).hexdigest()
        self.logger.debug("Computed file checksum", path=resolved, checksum=checksum)
        return checksum

    # ------------------------------------------------------------------
    # String helpers
    # ------------------------------------------------------------------

    @staticmethod
    def force_trailing_slash(path: str) -> str:
        """Append "/" unless the path already ends with one. "" becomes "/"."""
        if not path:
            return "/"
        if not path.endswith("/"):
            path += "/"
        return path

    @staticmethod
    def get_file_extension(path: str) -> str:
        """
        Extension of the last path segment, without the dot.

        "file.bk.ext" gives "ext"; "none" and "test." give "".
        """
        name = path.rsplit("/", 1)[-1]
        dot = name.rfind(".")
        if dot == -1:
            return ""
        return name[dot + 1:]
