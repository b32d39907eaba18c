"""Path helpers."""

from __future__ import annotations

from pathlib import Path, PureWindowsPath


def resolve_path(path: str, cwd: Path | None = None) -> Path:
    """Resolve *path* relative to *cwd* (default: ``Path.cwd()``)."""
    cwd = cwd or Path.cwd()
    return (cwd / Path(path).expanduser()).resolve()


def to_unix_path(path: str | Path) -> str:
    """Forward-slash form of *path*; drive letters and UNC prefixes are kept."""
    text = str(path)
    if "\\" not in text:
        return text
    return PureWindowsPath(text).as_posix()


def short_path(p: Path) -> str:
    """Return path relative to home directory, using ~ prefix."""
    try:
        rel = p.relative_to(Path.home())
        return f"~/{rel}" if str(rel) != "." else "~"
    except ValueError:
        return str(p)
