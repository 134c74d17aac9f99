import json
import re
from pathlib import Path
from typing import Any

import railrename
from railrename.common import L, build_operator, bus, detect_lang, railrename_operator

ASSETS = Path(railrename.__file__).parent / "common" / "assets" / "needle" / "en"
POINTER_RE = re.compile(r"\bL((?:\.[a-z_]+)+)")


class MockRenderer:
    def __init__(self):
        self.messages = []

    def render(self, message: str, level: str, **kwargs: Any) -> None:
        self.messages.append({"level": level, "message": message})


def test_builtin_template_is_formatted():
    assert railrename_operator(L.rename.file.moved, src="a.rb", dest="b.rb") == (
        "Moved a.rb -> b.rb"
    )


def test_unknown_id_falls_back_to_identity():
    assert railrename_operator(L.nonexistent.key) == "nonexistent.key"


def test_missing_language_falls_back_to_english():
    operator = build_operator("xx")

    assert operator(L.error.generic) == "Error: {error}"


def test_bus_forwards_rendered_message_to_renderer(monkeypatch):
    renderer = MockRenderer()
    monkeypatch.setattr(bus, "_renderer", renderer)

    bus.warning(L.rewrite.run.aborted, path="app/views/x.erb")

    assert renderer.messages == [
        {
            "level": "warning",
            "message": "Replacement declined in app/views/x.erb; "
            "remaining files were not processed.",
        }
    ]


def test_detect_lang(monkeypatch):
    monkeypatch.delenv("RAILRENAME_LANG", raising=False)
    monkeypatch.delenv("NEEDLE_LANG", raising=False)
    monkeypatch.setenv("LANG", "de_DE.UTF-8")
    assert detect_lang() == "de"

    monkeypatch.setenv("RAILRENAME_LANG", "fr")
    assert detect_lang() == "fr"

    monkeypatch.delenv("RAILRENAME_LANG")
    monkeypatch.delenv("LANG")
    assert detect_lang() == "en"


def test_every_message_id_used_in_code_has_a_template():
    known = {}
    for asset in ASSETS.glob("*.json"):
        known.update(json.loads(asset.read_text(encoding="utf-8")))

    src_root = Path(railrename.__file__).parent
    used = set()
    for source in src_root.rglob("*.py"):
        used.update(m.group(1)[1:] for m in POINTER_RE.finditer(source.read_text()))

    assert used
    assert sorted(used - set(known)) == []
