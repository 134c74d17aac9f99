from .context import RefactorContext
from .documents import Document, DocumentCache
from .engine import RenameEngine, RenameResult, RenameState
from .exceptions import (
    DefinitionNotFoundError,
    FileConflictError,
    FileMissingError,
    InvalidPathError,
    InvalidSymbolError,
    RenameError,
    UndecodableFileError,
    UserAbortedError,
)
from .protocols import (
    AutoConfirmHandler,
    ConfirmationHandler,
    ReplaceContext,
    ReplaceDecision,
)
from .rewriter import ReferenceRewriter, RewriteResult, RewriteStatus

__all__ = [
    "RefactorContext",
    "Document",
    "DocumentCache",
    "RenameEngine",
    "RenameResult",
    "RenameState",
    "RenameError",
    "InvalidPathError",
    "InvalidSymbolError",
    "UndecodableFileError",
    "FileConflictError",
    "FileMissingError",
    "DefinitionNotFoundError",
    "UserAbortedError",
    "ConfirmationHandler",
    "AutoConfirmHandler",
    "ReplaceContext",
    "ReplaceDecision",
    "ReferenceRewriter",
    "RewriteResult",
    "RewriteStatus",
]
