"""Exceptions raised while importing files into the dotfiles repository."""

from __future__ import annotations

from pathlib import Path


class DotinError(Exception):
    """Base class for all dotin errors."""


class ConfigError(DotinError):
    """Raised when a configuration file cannot be loaded."""


class ResolutionError(DotinError):
    """Raised when an input path cannot be canonicalized."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Cannot resolve {str(path)!r}: {reason}")


class OutOfScopeFileError(DotinError):
    """Raised when a file lives outside of the home directory."""

    def __init__(self, path: Path, home_dir: Path):
        self.path = path
        self.home_dir = home_dir
        super().__init__(
            f"dotin can only import files inside of home directory {str(home_dir)!r}, "
            f"but {str(path)!r} seems to be outside of it"
        )


class DestinationCollisionError(DotinError):
    """Raised when something already exists at a planned destination."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"File at {str(path)!r} already exists, and cannot be imported")


class ObstructedDirectoryError(DotinError):
    """Raised when a non-directory occupies a path needed as a directory."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Cannot create directory at {str(path)!r}, there's a file there")


class CrossFilesystemMoveError(DotinError):
    """Raised when source and destination live on different filesystems."""

    def __init__(self, source: Path, destination: Path):
        self.source = source
        self.destination = destination
        super().__init__(
            f"Cannot move {str(source)!r} to folder {str(destination)!r} because they're "
            "not in the same filesystem"
        )


class DirectoryCreationError(DotinError):
    """Raised when a directory needed by the import cannot be created."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"Failed to create directory {str(path)!r}: {reason}")


class MoveError(DotinError):
    """Raised when renaming a file into the group folder fails."""

    def __init__(self, source: Path, destination: Path, reason: str):
        self.source = source
        self.destination = destination
        super().__init__(f"Failed to move {str(source)!r} to {str(destination)!r}: {reason}")
