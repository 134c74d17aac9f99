from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Union

from needle.pointer import SemanticPointer


class SpyRenderer:
    def __init__(self):
        self.messages: List[Dict[str, Any]] = []

    def render(self, message: str, level: str, **kwargs: Any) -> None:
        # Messages are captured unrendered by SpyBus; nothing to print.
        pass

    def record(self, level: str, msg_id: Union[str, SemanticPointer], params: Dict[str, Any]):
        self.messages.append({"level": level, "id": str(msg_id), "params": params})


class SpyBus:
    """Captures bus messages by id, before they are rendered."""

    def __init__(self):
        self._spy_renderer = SpyRenderer()

    @contextmanager
    def patch(self, monkeypatch: Any):
        import railrename.common

        real_bus = railrename.common.bus

        def intercept_present(
            msg_id: Union[str, SemanticPointer], level: str = "info", **kwargs: Any
        ) -> None:
            self._spy_renderer.record(level, msg_id, kwargs)

        monkeypatch.setattr(real_bus, "present", intercept_present)
        monkeypatch.setattr(real_bus, "_renderer", self._spy_renderer)
        yield self

    @property
    def messages(self) -> List[Dict[str, Any]]:
        return self._spy_renderer.messages

    def get_messages(self) -> List[Dict[str, Any]]:
        return self.messages

    def assert_id_called(self, msg_id: SemanticPointer, level: Optional[str] = None):
        key = str(msg_id)
        for msg in self.messages:
            if msg["id"] == key and (level is None or msg["level"] == level):
                return
        ids_seen = [m["id"] for m in self.messages]
        raise AssertionError(
            f"Message with ID '{key}' was not sent.\nCaptured IDs: {ids_seen}"
        )

    def assert_id_not_called(self, msg_id: SemanticPointer):
        key = str(msg_id)
        if any(m["id"] == key for m in self.messages):
            raise AssertionError(f"Message with ID '{key}' was sent unexpectedly.")
