"""
Template resource loading.

Resolves classpath-style and filesystem locators to their text content.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..config import get_settings


logger = logging.getLogger(__name__)

CLASSPATH_PREFIX = "classpath:"
FILE_PREFIX = "file:"


class ResourceLoader:
    """
    Loads template resources.

    Supported locators:
    - classpath:<relative/path> - searched in each search path, first hit wins
    - file:<path> - filesystem path, relative paths resolve against base_dir
    - <path> - same as file:
    """

    def __init__(
        self,
        search_paths: Optional[Sequence[Union[str, Path]]] = None,
        base_dir: Optional[Union[str, Path]] = None,
        encoding: Optional[str] = None
    ):
        """
        Initialize the loader.

        Args:
            search_paths: Roots for classpath: locators (defaults to the
                configured resource path, then the working directory)
            base_dir: Root for relative filesystem locators (defaults to cwd)
            encoding: Default text encoding (defaults to the configured one)
        """
        settings = get_settings()
        if search_paths is None:
            search_paths = settings.resource_path or [Path.cwd()]
        self.search_paths: List[Path] = [Path(p) for p in search_paths]
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.encoding = encoding or settings.file_encoding

    def load(self, locator: str, encoding: Optional[str] = None) -> str:
        """
        Load a resource as text.

        Args:
            locator: Resource locator
            encoding: Encoding override for this resource

        Returns:
            Resource content

        Raises:
            OSError: If the resource cannot be found or read
        """
        path = self.resolve_path(locator)
        content = path.read_text(encoding=encoding or self.encoding)
        logger.debug(f"Loaded resource {locator} from {path} ({len(content)} chars)")
        return content

    def resolve_path(self, locator: str) -> Path:
        """
        Map a locator to the file it refers to.

        Raises:
            FileNotFoundError: If no candidate file exists
        """
        if locator.startswith(CLASSPATH_PREFIX):
            relative = locator[len(CLASSPATH_PREFIX):].lstrip('/')
            for root in self.search_paths:
                candidate = root / relative
                if candidate.is_file():
                    return candidate
            raise FileNotFoundError(
                f"Resource '{locator}' not found in search paths: "
                f"{[str(p) for p in self.search_paths]}"
            )

        if locator.startswith(FILE_PREFIX):
            locator = locator[len(FILE_PREFIX):]

        path = Path(locator)
        if not path.is_absolute():
            path = self.base_dir / path
        if not path.is_file():
            raise FileNotFoundError(f"Resource '{locator}' not found: {path}")
        return path
