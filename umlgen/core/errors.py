"""
Exceptions raised during code generation.
"""

from pathlib import Path
from typing import Union


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class DestinationError(GeneratorError):
    """A directory or file could not be created at the destination.

    Attributes:
        path: Path of the directory or file that failed.
        operation: ``"create_directory"`` or ``"write_file"``.
    """

    def __init__(self, path: Union[str, Path], operation: str, cause: Exception):
        self.path = Path(path)
        self.operation = operation
        self.cause = cause
        super().__init__(f"Failed to {operation.replace('_', ' ')} {self.path}: {cause}")


class UserCancelled(GeneratorError):
    """The user dismissed a selection prompt before generation started."""

    pass
