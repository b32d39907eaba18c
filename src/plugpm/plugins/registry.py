"""Plugin registry: the set of plugins known to be installed in the base directory."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Protocol, runtime_checkable

from .models import PLUGIN_PREFIX

DEFAULT_PACKAGE_JSON = {
    "name": "picgo-plugins",
    "description": "picgo-plugins",
    "repository": "https://github.com/Molunerfinn/PicGo-Core",
    "license": "MIT",
}


@runtime_checkable
class PluginRegistry(Protocol):
    def has_plugin(self, name: str) -> bool: ...

    def register_plugin(self, name: str) -> None: ...

    def unregister_plugin(self, name: str) -> None: ...


def _read_package_json(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def is_plugin_package(name: str) -> bool:
    bare = name.split("/", 1)[1] if name.startswith("@") and "/" in name else name
    return bare.startswith(PLUGIN_PREFIX)


class PackageRegistry:
    """Registry seeded from the ``dependencies`` of ``<base_dir>/package.json``.

    The package manager owns the file on disk (``--save``); this class only
    tracks which plugins are registered in memory.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self._plugins: list[str] = []
        self._lock = threading.Lock()

    @property
    def package_json(self) -> Path:
        return self.base_dir / "package.json"

    def init(self) -> None:
        """Create the base directory and a minimal package.json if missing, then load."""
        self.base_dir.mkdir(parents=True, exist_ok=True)
        if not self.package_json.exists():
            self.package_json.write_text(json.dumps(DEFAULT_PACKAGE_JSON, indent=2) + "\n")
        self.load()

    def load(self) -> list[str]:
        deps = _read_package_json(self.package_json).get("dependencies", {})
        names = sorted(n for n in deps if is_plugin_package(n)) if isinstance(deps, dict) else []
        with self._lock:
            self._plugins = names
        return list(names)

    def has_plugin(self, name: str) -> bool:
        with self._lock:
            return name in self._plugins

    def register_plugin(self, name: str) -> None:
        with self._lock:
            if name not in self._plugins:
                self._plugins.append(name)

    def unregister_plugin(self, name: str) -> None:
        with self._lock:
            if name in self._plugins:
                self._plugins.remove(name)

    def list_plugins(self) -> list[str]:
        with self._lock:
            return sorted(self._plugins)
