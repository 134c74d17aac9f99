from pathlib import Path
from typing import List, Union

from railrename.common.transaction import FileOp


class RenameError(Exception):
    """Base exception for rename-related errors."""

    def __init__(self, message: str):
        super().__init__(message)
        # File operations already applied when the error was raised.
        # Nothing is rolled back; callers report these to the user.
        self.completed_ops: List[FileOp] = []


class InvalidPathError(RenameError):
    """Raised when a path does not match any known artifact location."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Path does not map to a class under the project convention: {path}")
        self.path = Path(path)


class InvalidSymbolError(RenameError):
    """Raised when a class or controller name cannot be converted to a path."""

    def __init__(self, name: str):
        super().__init__(f"Not a valid class or controller name: {name}")
        self.name = name


class FileConflictError(RenameError):
    """Raised when the destination of a move already exists."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Destination already exists: {path}")
        self.path = Path(path)


class FileMissingError(RenameError):
    """Raised when the source of a required move does not exist."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Source does not exist: {path}")
        self.path = Path(path)


class DefinitionNotFoundError(RenameError):
    """
    A moved file holds no `class`/`module` declaration for the old name.

    Recorded as a warning on the rename result, never raised out of an
    operation: the move itself stays in place.
    """

    def __init__(self, path: Union[str, Path], symbol: str):
        super().__init__(f"No class or module declaration for {symbol} in {path}")
        self.path = Path(path)
        self.symbol = symbol


class UserAbortedError(RenameError):
    """Raised when the user declines to start an irreversible operation."""

    def __init__(self, operation: str):
        super().__init__(f"Aborted by user: {operation}")
        self.operation = operation


class UndecodableFileError(RenameError):
    """
    A project file is not valid UTF-8 text.

    Rewrite passes skip such files and record this as a warning.
    """

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"Not valid UTF-8 text, left unchanged: {path}")
        self.path = Path(path)
