from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .codec import path_to_symbol
from .kinds import CLASS_EXTENSION, CLASSIFY_ORDER, KIND_SPECS, ArtifactKind
from .scanner import ProjectScanner


@dataclass(frozen=True)
class Classification:
    kind: ArtifactKind
    symbol: str


def classify(path: Union[str, Path]) -> Optional[Classification]:
    """
    Derives the artifact kind and class name defined by a project-relative path.

    Prefixes are tried in CLASSIFY_ORDER and the first match wins. Returns None
    for paths that do not define a class under the project convention.
    """
    rel = Path(path).as_posix()
    if not rel.endswith(CLASS_EXTENSION):
        return None

    for kind in CLASSIFY_ORDER:
        prefix = KIND_SPECS[kind].prefix
        if not rel.startswith(prefix):
            continue
        fragment = rel[len(prefix) : -len(CLASS_EXTENSION)]
        if not fragment or fragment.startswith("/"):
            return None
        return Classification(kind, path_to_symbol(fragment))
    return None


class ArtifactClassifier:
    def __init__(self, scanner: ProjectScanner):
        self.scanner = scanner

    def classify(self, path: Union[str, Path]) -> Optional[Classification]:
        return classify(path)

    def list_class_files(self) -> List[Path]:
        return [
            f
            for f in self.scanner.source_files()
            if f.suffix == CLASS_EXTENSION
        ]
