import pytest
from typing import TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from .workspace import WorkspaceFactory
    from .bus import SpyBus


@pytest.fixture
def workspace_factory(tmp_path: Path) -> "WorkspaceFactory":
    """Provides a factory to create isolated test workspaces."""
    from .workspace import WorkspaceFactory

    return WorkspaceFactory(tmp_path)


@pytest.fixture
def spy_bus(monkeypatch) -> "SpyBus":
    """Provides a SpyBus already patched into the global bus."""
    from .bus import SpyBus

    spy = SpyBus()
    with spy.patch(monkeypatch):
        yield spy
