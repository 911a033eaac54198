"""Core functionality for dotin."""

from .config import Config
from .errors import DotinError
from .importer import ImportManager, ImportResult, import_files

__all__ = ["Config", "DotinError", "ImportManager", "ImportResult", "import_files"]
