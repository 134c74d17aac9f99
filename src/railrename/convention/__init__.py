from .classifier import ArtifactClassifier, Classification, classify
from .codec import camelize, decamelize, path_to_symbol, symbol_to_path
from .kinds import ArtifactKind, KindSpec, KIND_SPECS, CLASSIFY_ORDER
from .scanner import ProjectScanner

__all__ = [
    "ArtifactClassifier",
    "Classification",
    "classify",
    "camelize",
    "decamelize",
    "path_to_symbol",
    "symbol_to_path",
    "ArtifactKind",
    "KindSpec",
    "KIND_SPECS",
    "CLASSIFY_ORDER",
    "ProjectScanner",
]
