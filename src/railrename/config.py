import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

try:
    import tomllib
except ImportError:
    import tomli as tomllib

log = logging.getLogger(__name__)

CONFIG_FILENAME = "railrename.toml"

DEFAULT_SOURCE_EXTENSIONS = [
    "builder",
    "erb",
    "haml",
    "liquid",
    "mab",
    "rake",
    "rb",
    "rhtml",
    "rjs",
    "rxml",
    "yml",
    "rsel",
]

# Markers checked from the start directory upwards, strongest first.
ROOT_MARKERS = ("config/environment.rb", "Gemfile", ".git")


@dataclass
class RenameConfig:
    source_extensions: List[str] = field(
        default_factory=lambda: list(DEFAULT_SOURCE_EXTENSIONS)
    )
    # Stem suffixes of tool-generated shadow files (e.g. foo_flymake.rb).
    generated_suffixes: List[str] = field(default_factory=lambda: ["_flymake"])
    source_dirs: List[str] = field(
        default_factory=lambda: ["app", "config", "lib", "test", "spec"]
    )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenameConfig":
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                log.debug("Ignoring unknown config key: %s", key)
                continue
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Config key '{key}' must be a list of strings")
            kwargs[key] = list(value)
        return cls(**kwargs)


def find_project_root(start_dir: Optional[Path] = None) -> Path:
    start = (start_dir or Path.cwd()).resolve()
    current = start
    while True:
        for marker in ROOT_MARKERS:
            if (current / marker).exists():
                return current
        if current.parent == current:
            return start
        current = current.parent


def load_config(root_path: Path) -> RenameConfig:
    standalone = root_path / CONFIG_FILENAME
    if standalone.is_file():
        with standalone.open("rb") as f:
            return RenameConfig.from_dict(tomllib.load(f))

    pyproject = root_path / "pyproject.toml"
    if pyproject.is_file():
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
        section = data.get("tool", {}).get("railrename")
        if section is not None:
            return RenameConfig.from_dict(section)

    return RenameConfig()
