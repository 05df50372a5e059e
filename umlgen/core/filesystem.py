"""
File system access used to persist generated code.

Generators never touch the disk directly; they go through a FileSystem so
tests and previews can substitute an in-memory destination.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Union

from .errors import DestinationError
from ..logging_config import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


class FileSystem(ABC):
    """Destination for generated directories and files."""

    @abstractmethod
    def create_directory(self, path: PathLike) -> Path:
        """
        Create a directory.

        Raises:
            DestinationError: If the directory cannot be created
        """
        pass

    @abstractmethod
    def write_text_file(self, path: PathLike, content: str) -> Path:
        """
        Write text content to a file, replacing any existing file.

        Raises:
            DestinationError: If the file cannot be written
        """
        pass


class LocalFileSystem(FileSystem):
    """Writes to the local disk."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def create_directory(self, path: PathLike) -> Path:
        path = Path(path)
        try:
            path.mkdir(exist_ok=True)
        except OSError as e:
            logger.debug("Directory creation failed for %s: %s", path, e)
            raise DestinationError(path, "create_directory", e) from e
        return path

    def write_text_file(self, path: PathLike, content: str) -> Path:
        path = Path(path)
        try:
            # newline="" keeps the configured line endings untranslated
            with path.open("w", encoding=self.encoding, newline="") as f:
                f.write(content)
        except OSError as e:
            logger.debug("File write failed for %s: %s", path, e)
            raise DestinationError(path, "write_file", e) from e
        return path


class MemoryFileSystem(FileSystem):
    """Keeps generated output in memory, used for previews and tests."""

    def __init__(self):
        self.directories: List[Path] = []
        self.files: Dict[Path, str] = {}

    def create_directory(self, path: PathLike) -> Path:
        path = Path(path)
        if path in self.files:
            raise DestinationError(
                path, "create_directory", FileExistsError(f"File exists: {path}")
            )
        if path not in self.directories:
            self.directories.append(path)
        return path

    def write_text_file(self, path: PathLike, content: str) -> Path:
        path = Path(path)
        if path in self.directories:
            raise DestinationError(
                path, "write_file", IsADirectoryError(f"Is a directory: {path}")
            )
        self.files[path] = content
        return path

    def read_text(self, path: PathLike) -> str:
        return self.files[Path(path)]
