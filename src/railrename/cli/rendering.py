from typing import Any, Dict

import typer

LEVELS = ["debug", "info", "success", "warning", "error"]

# Keyword arguments for typer.secho per level. Problems go to stderr so the
# operation trace on stdout stays clean.
LEVEL_STYLES: Dict[str, Dict[str, Any]] = {
    "debug": {"fg": typer.colors.BRIGHT_BLACK},
    "info": {},
    "success": {"fg": typer.colors.GREEN},
    "warning": {"fg": typer.colors.YELLOW, "err": True},
    "error": {"fg": typer.colors.RED, "bold": True, "err": True},
}


class CliRenderer:
    """Terminal sink for the message bus, filtered by `--loglevel`."""

    def __init__(self, loglevel: str = "info"):
        self.threshold = LEVELS.index(loglevel)

    def enabled(self, level: str) -> bool:
        return level in LEVEL_STYLES and LEVELS.index(level) >= self.threshold

    def render(self, message: str, level: str, **kwargs: Any) -> None:
        if self.enabled(level):
            typer.secho(message, **LEVEL_STYLES[level])
