"""
Filesystem module for PathKit.

Provides home-aware path resolution and thin, logged wrappers over native
file and directory operations.
"""

from .path_service import PathService, DEFAULT_DIRECTORY_MODE, DEFAULT_FILE_MODE

__all__ = ['PathService', 'DEFAULT_DIRECTORY_MODE', 'DEFAULT_FILE_MODE']
