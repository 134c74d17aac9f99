import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from railrename.common.transaction import FileSystemAdapter, RealFileSystem
from .exceptions import UndecodableFileError

log = logging.getLogger(__name__)


@dataclass
class Document:
    path: Path
    text: str
    dirty: bool = False
    # True when the cache loaded the document itself and may close it.
    owned: bool = True


class DocumentCache:
    """
    In-memory copies of project files, keyed by project-relative path.

    Ownership rule: documents the cache loads itself are closed by whoever
    opened them through `open()`. Documents handed in by the caller via
    `adopt()` (e.g. files already open in an editor) are never closed here.
    """

    def __init__(self, root_path: Path, fs: Optional[FileSystemAdapter] = None):
        self.root_path = root_path
        self.fs: FileSystemAdapter = fs or RealFileSystem()
        self._docs: Dict[Path, Document] = {}

    def __contains__(self, path: Path) -> bool:
        return Path(path) in self._docs

    def get(self, path: Path) -> Optional[Document]:
        return self._docs.get(Path(path))

    def adopt(self, path: Path, text: str, dirty: bool = True) -> Document:
        doc = Document(Path(path), text, dirty=dirty, owned=False)
        self._docs[doc.path] = doc
        return doc

    def open(self, path: Path) -> Tuple[Document, bool]:
        """
        Returns the document for `path` and whether this call loaded it.

        The caller must `close()` the document when the flag is True.
        Raises UndecodableFileError for files that are not UTF-8 text.
        """
        path = Path(path)
        existing = self._docs.get(path)
        if existing is not None:
            return existing, False
        try:
            text = self.fs.read_text(self.root_path / path)
        except UnicodeDecodeError as e:
            raise UndecodableFileError(path) from e
        doc = Document(path, text)
        self._docs[path] = doc
        return doc, True

    def close(self, path: Path) -> None:
        doc = self._docs.get(Path(path))
        if doc is None:
            return
        if not doc.owned:
            log.debug("Not closing caller-owned document %s", doc.path)
            return
        if doc.dirty:
            raise RuntimeError(f"Refusing to close document with unsaved edits: {doc.path}")
        del self._docs[doc.path]

    def relocate(self, src: Path, dest: Path) -> None:
        """Re-keys open documents after a file or directory move."""
        src, dest = Path(src), Path(dest)
        for path in list(self._docs):
            if path == src:
                new_path = dest
            elif src in path.parents:
                new_path = dest / path.relative_to(src)
            else:
                continue
            doc = self._docs.pop(path)
            doc.path = new_path
            self._docs[new_path] = doc

    def flush(self) -> List[Path]:
        """Writes every document with pending edits back to disk."""
        saved: List[Path] = []
        for doc in self._docs.values():
            if doc.dirty:
                self.fs.write_text(self.root_path / doc.path, doc.text)
                doc.dirty = False
                saved.append(doc.path)
        return saved

    @property
    def open_paths(self) -> List[Path]:
        return list(self._docs)
