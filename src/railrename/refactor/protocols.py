from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol


class ReplaceDecision(str, Enum):
    REPLACE = "replace"
    # Replace this and every remaining occurrence in the current file.
    REPLACE_ALL = "replace_all"
    # Declining halts the whole batch.
    DECLINE = "decline"


@dataclass
class ReplaceContext:
    """Data packet passed to the handler for a single occurrence."""

    path: Path
    lineno: int
    line: str
    match: str
    replacement: str


class ConfirmationHandler(Protocol):
    """Protocol for the user decisions a rename may block on."""

    def acknowledge(self, message: str) -> bool:
        """Asks for a yes/no go-ahead before an irreversible operation."""
        ...

    def confirm_replacement(self, context: ReplaceContext) -> ReplaceDecision: ...


class AutoConfirmHandler:
    """Agrees to everything. Used for non-interactive runs."""

    def acknowledge(self, message: str) -> bool:
        return True

    def confirm_replacement(self, context: ReplaceContext) -> ReplaceDecision:
        return ReplaceDecision.REPLACE_ALL
