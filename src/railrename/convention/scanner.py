import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from railrename.config import RenameConfig

log = logging.getLogger(__name__)

HIDDEN_PREFIX = "."


class ProjectScanner:
    """
    Enumerates project files relative to the project root.

    Every scan hits the file system again; nothing is cached between calls.
    Discovery is best-effort: unreadable or missing roots contribute no files
    instead of raising.
    """

    def __init__(self, root_path: Path, config: Optional[RenameConfig] = None):
        self.root_path = root_path
        self.config = config or RenameConfig()

    def list_files(self, root_dirs: Iterable[str]) -> List[Path]:
        results: List[Path] = []
        seen = set()
        for rel_root in root_dirs:
            for path in self._walk(rel_root):
                if path not in seen:
                    seen.add(path)
                    results.append(path)
        return results

    def _walk(self, rel_root: str) -> List[Path]:
        abs_root = self.root_path / rel_root
        if abs_root.is_file():
            return [Path(rel_root)]
        if not abs_root.is_dir():
            log.debug("Scan root does not exist: %s", abs_root)
            return []

        found: List[Path] = []

        def _on_error(err: OSError) -> None:
            log.debug("Skipping unreadable path %s: %s", err.filename, err)

        for dirpath, dirnames, filenames in os.walk(abs_root, onerror=_on_error):
            # Pruning dirnames in place stops os.walk from descending.
            dirnames[:] = sorted(d for d in dirnames if not d.startswith(HIDDEN_PREFIX))
            current = Path(dirpath)
            for filename in sorted(filenames):
                file_path = current / filename
                if file_path.is_file():
                    found.append(file_path.relative_to(self.root_path))
        return found

    def is_source(self, path: Path) -> bool:
        suffix = path.suffix.lstrip(".")
        if suffix not in self.config.source_extensions:
            return False
        stem = path.name.split(".", 1)[0]
        return not any(stem.endswith(marker) for marker in self.config.generated_suffixes)

    def filter_source(self, files: Iterable[Path]) -> List[Path]:
        return [f for f in files if self.is_source(f)]

    def source_files(self, scope: Optional[Iterable[str]] = None) -> List[Path]:
        dirs = list(scope) if scope is not None else self.config.source_dirs
        return self.filter_source(self.list_files(dirs))
