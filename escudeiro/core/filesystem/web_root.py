"""
Web Root
========

Resolve request paths inside the served directory and list its contents.
Every path handed out by this module is guaranteed to lie inside the web root.
"""

import os
from pathlib import Path
from typing import Any, List, Optional, Union
from urllib.parse import quote

from escudeiro.config.logging import get_logger
from escudeiro.core.exceptions import (
    ConfigurationError,
    DirectoryListingError,
    FileNotFoundInRootError,
    PathOutsideRootError,
)
from escudeiro.models.schemas import DirectoryEntry, DirectoryListing

logger = get_logger(__name__)

INDEX_HTML = "index.html"
INDEX_PHP = "index.php"
FILES_PREFIX = "/files/"


def normalize_relative_path(path: str) -> str:
    """
    Normalize a request path relative to the web root.

    Leading slashes are dropped and directories keep one trailing slash, so
    "/docs" and "docs/" both become "docs/". The root is the empty string.
    """
    parts = [part for part in path.replace("\\", "/").split("/") if part and part != "."]
    if not parts:
        return ""
    return "/".join(parts) + "/"


class WebRoot:
    """The directory served by the application."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root).resolve()
        self.logger: Any = logger.bind(component="web_root")

    @classmethod
    def from_setting(cls, root: Optional[Path]) -> "WebRoot":
        """
        Build a web root from the WEB_ROOT setting.

        Raises:
            ConfigurationError: If the setting is missing or not a directory
        """
        if root is None:
            raise ConfigurationError("WEB_ROOT environment variable is not defined")
        if not Path(root).is_dir():
            raise ConfigurationError(f"WEB_ROOT directory ({root}) does not exist")
        return cls(root)

    def resolve(self, relative_path: str) -> Path:
        """
        Resolve a request path to an absolute path inside the web root.

        Args:
            relative_path: Path from the request URL, with or without leading slash

        Returns:
            Absolute resolved path (which may not exist)

        Raises:
            PathOutsideRootError: If the path escapes the web root
            FileNotFoundInRootError: If the path cannot be resolved
        """
        try:
            candidate = (self.root / relative_path.lstrip("/")).resolve()
        except OSError as e:
            self.logger.info("Path could not be resolved", path=relative_path, error=str(e))
            raise FileNotFoundInRootError(f"Not found: {relative_path}") from e
        if candidate != self.root and self.root not in candidate.parents:
            self.logger.warning("Path outside web root rejected", path=relative_path)
            raise PathOutsideRootError(f"Path outside web root: {relative_path}")
        return candidate

    def resolve_existing(self, relative_path: str) -> Path:
        """
        Resolve a request path and require that it exists.

        Raises:
            PathOutsideRootError: If the path escapes the web root
            FileNotFoundInRootError: If nothing exists at the path
        """
        path = self.resolve(relative_path)
        try:
            path.stat()
        except OSError as e:
            self.logger.info("File or directory not found", path=str(path), error=str(e))
            raise FileNotFoundInRootError(f"Not found: {relative_path}") from e
        return path

    def find_index(self, directory: Path) -> Optional[Path]:
        """Return the directory's index.html, else its index.php, else None."""
        for name in (INDEX_HTML, INDEX_PHP):
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None

    def list_names(self, directory: Path) -> List[str]:
        """
        List entry names of one directory level, sorted by name.

        Raises:
            DirectoryListingError: If the directory cannot be read
        """
        try:
            return sorted(os.listdir(directory))
        except OSError as e:
            self.logger.error("Failed to list directory", directory=str(directory), error=str(e))
            raise DirectoryListingError(f"Failed to list directory {directory}: {e}") from e

    def list_directory(self, relative_path: str) -> DirectoryListing:
        """
        Build the listing for a directory inside the web root.

        Directories link to "<name>/" so browsing stays relative; files link to
        "/files/<path><name>" and open in a new tab.

        Raises:
            PathOutsideRootError: If the path escapes the web root
            FileNotFoundInRootError: If the directory does not exist
            DirectoryListingError: If the path is not a readable directory
        """
        current_path = normalize_relative_path(relative_path)
        directory = self.resolve_existing(current_path)
        if not directory.is_dir():
            raise DirectoryListingError(f"Not a directory: {current_path}")

        self.logger.info("Listing directory", directory=str(directory))

        entries: List[DirectoryEntry] = []
        for name in self.list_names(directory):
            is_dir = (directory / name).is_dir()
            if is_dir:
                href = quote(name) + "/"
            else:
                href = FILES_PREFIX + quote(current_path + name)
            entries.append(DirectoryEntry(name=name, is_dir=is_dir, href=href, new_tab=not is_dir))

        return DirectoryListing(current_path=current_path.rstrip("/"), entries=entries)
