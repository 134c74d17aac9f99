from .bus import SpyBus
from .confirm import ScriptedConfirmation
from .workspace import WorkspaceFactory

__all__ = ["SpyBus", "ScriptedConfirmation", "WorkspaceFactory"]
