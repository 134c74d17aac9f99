from pathlib import Path
from typing import Any, Dict, List, Tuple


class WorkspaceFactory:
    """Fluent builder for throwaway Rails-style project trees."""

    def __init__(self, root_path: Path):
        self.root_path = root_path
        self._files: List[Tuple[str, str]] = []
        self._dirs: List[str] = []
        self._config: Dict[str, Any] = {}

    def with_source(self, path: str, content: str) -> "WorkspaceFactory":
        self._files.append((path, content))
        return self

    def with_dir(self, path: str) -> "WorkspaceFactory":
        self._dirs.append(path)
        return self

    def with_config(self, config: Dict[str, Any]) -> "WorkspaceFactory":
        self._config.update(config)
        return self

    def with_rails_skeleton(self) -> "WorkspaceFactory":
        return self.with_source("config/environment.rb", "# Load the Rails application.\n")

    def build(self) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        for rel in self._dirs:
            (self.root_path / rel).mkdir(parents=True, exist_ok=True)
        for rel, content in self._files:
            target = self.root_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        if self._config:
            lines = []
            for key, values in self._config.items():
                items = ", ".join(f'"{v}"' for v in values)
                lines.append(f"{key} = [{items}]")
            (self.root_path / "railrename.toml").write_text(
                "\n".join(lines) + "\n", encoding="utf-8"
            )
        return self.root_path
