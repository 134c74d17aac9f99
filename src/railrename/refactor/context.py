from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from railrename.common.transaction import FileSystemAdapter, RealFileSystem
from railrename.config import RenameConfig, load_config
from railrename.convention import ArtifactClassifier, ProjectScanner
from .documents import DocumentCache


@dataclass
class RefactorContext:
    root_path: Path
    config: RenameConfig
    scanner: ProjectScanner
    classifier: ArtifactClassifier
    documents: DocumentCache
    fs: FileSystemAdapter

    @classmethod
    def from_root(
        cls,
        root_path: Path,
        config: Optional[RenameConfig] = None,
        fs: Optional[FileSystemAdapter] = None,
    ) -> "RefactorContext":
        config = config or load_config(root_path)
        fs = fs or RealFileSystem()
        scanner = ProjectScanner(root_path, config)
        return cls(
            root_path=root_path,
            config=config,
            scanner=scanner,
            classifier=ArtifactClassifier(scanner),
            documents=DocumentCache(root_path, fs),
            fs=fs,
        )
