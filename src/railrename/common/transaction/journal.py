from pathlib import Path
from typing import List, Optional

from .filesystem import FileSystemAdapter, RealFileSystem
from .ops import FileOp, MoveDirectoryOp, MoveFileOp, WriteFileOp


class Journal:
    """
    Applies file operations immediately and records each one.

    There is no rollback: an entry is appended only after the operation has
    succeeded, so the journal is always an exact trace of what was changed on
    disk, including when a later step fails.
    """

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs: FileSystemAdapter = fs or RealFileSystem()
        self._ops: List[FileOp] = []

    def _abs(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root_path / path

    def move_file(self, src: Path, dest: Path) -> MoveFileOp:
        self.fs.move(self._abs(src), self._abs(dest))
        op = MoveFileOp(src, dest)
        self._ops.append(op)
        return op

    def move_directory(self, src: Path, dest: Path) -> MoveDirectoryOp:
        self.fs.move(self._abs(src), self._abs(dest))
        op = MoveDirectoryOp(src, dest)
        self._ops.append(op)
        return op

    def write(self, path: Path, content: str, replacements: int = 0) -> WriteFileOp:
        self.fs.write_text(self._abs(path), content)
        op = WriteFileOp(path, replacements)
        self._ops.append(op)
        return op

    @property
    def ops(self) -> List[FileOp]:
        return list(self._ops)

    @property
    def count(self) -> int:
        return len(self._ops)

    def preview(self) -> List[str]:
        return [op.describe() for op in self._ops]
