"""Console logger: success/info/warn/error lines on a Rich console."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

_LEVEL_STYLES = {
    "success": "green",
    "info": "blue",
    "warn": "yellow",
    "error": "red",
}


class Logger:
    """Prefixed, level-coloured log lines.

    ``levels`` filters what is printed: ``["all"]`` (default) prints every
    level, ``["none"]`` prints nothing, otherwise only the listed levels.
    """

    def __init__(
        self,
        console: Console | None = None,
        levels: list[str] | str | None = None,
        name: str = "plugpm",
    ):
        self.console = console or Console(stderr=True)
        self.name = name
        if isinstance(levels, str):
            levels = [levels]
        self.levels = list(levels) if levels else ["all"]

    def enabled(self, level: str) -> bool:
        if "none" in self.levels:
            return False
        return "all" in self.levels or level in self.levels

    def _log(self, level: str, message: str | BaseException) -> None:
        if not self.enabled(level):
            return
        text = str(message) if isinstance(message, BaseException) else message
        line = Text(f"[{self.name} {level.upper()}]:", style=_LEVEL_STYLES[level])
        line.append(" ")
        # npm output carries ANSI colours (--color=always)
        line.append_text(Text.from_ansi(text))
        self.console.print(line, highlight=False)

    def success(self, message: str) -> None:
        self._log("success", message)

    def info(self, message: str) -> None:
        self._log("info", message)

    def warn(self, message: str) -> None:
        self._log("warn", message)

    def error(self, message: str | BaseException) -> None:
        self._log("error", message)
