import os
from pathlib import Path
from typing import Any, Union

from needle.bus import bus
from needle.operators import I18NFactoryOperator, OverlayOperator
from needle.pointer import L, SemanticPointer
from needle.runtime import nexus as global_nexus
from needle.spec import SemanticPointerProtocol

DEFAULT_LANG = "en"


def detect_lang() -> str:
    # 1. Explicit override
    env_lang = os.getenv("RAILRENAME_LANG") or os.getenv("NEEDLE_LANG")
    if env_lang:
        return env_lang

    # 2. System LANG (e.g. "de_DE.UTF-8" -> "de")
    sys_lang = os.getenv("LANG")
    if sys_lang:
        base_lang = sys_lang.split(".")[0].split("_")[0]
        if base_lang:
            return base_lang.lower()

    return DEFAULT_LANG


_assets_root = Path(__file__).parent / "assets"
_factory = I18NFactoryOperator(_assets_root)


def build_operator(lang: str) -> OverlayOperator:
    """
    Message lookup for one language.

    Priority: built-in assets in `lang` > built-in assets in the default
    language > the global needle nexus.
    """
    layers = [_factory(lang)]
    if lang != DEFAULT_LANG:
        layers.append(_factory(DEFAULT_LANG))
    layers.append(global_nexus)
    return OverlayOperator(layers)


railrename_nexus = build_operator(detect_lang())
bus.set_operator(railrename_nexus)


def railrename_operator(key: Union[str, SemanticPointerProtocol], **kwargs: Any) -> str:
    """Renders a message id to its final string without emitting it."""
    return bus.render_to_string(key, **kwargs)


__all__ = [
    "bus",
    "build_operator",
    "detect_lang",
    "railrename_nexus",
    "railrename_operator",
    "L",
    "SemanticPointer",
]
