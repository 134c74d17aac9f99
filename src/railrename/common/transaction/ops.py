from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileOp:
    path: Path

    def describe(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class MoveFileOp(FileOp):
    dest: Path

    def describe(self) -> str:
        return f"[MOVE] {self.path.as_posix()} -> {self.dest.as_posix()}"


@dataclass(frozen=True)
class MoveDirectoryOp(FileOp):
    dest: Path

    def describe(self) -> str:
        return f"[MOVE DIR] {self.path.as_posix()} -> {self.dest.as_posix()}"


@dataclass(frozen=True)
class WriteFileOp(FileOp):
    replacements: int = 0

    def describe(self) -> str:
        return f"[WRITE] {self.path.as_posix()} ({self.replacements} replacements)"
