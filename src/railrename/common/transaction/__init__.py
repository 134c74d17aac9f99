from .filesystem import FileSystemAdapter, RealFileSystem
from .journal import Journal
from .ops import FileOp, MoveDirectoryOp, MoveFileOp, WriteFileOp

__all__ = [
    "Journal",
    "FileOp",
    "MoveFileOp",
    "MoveDirectoryOp",
    "WriteFileOp",
    "FileSystemAdapter",
    "RealFileSystem",
]
