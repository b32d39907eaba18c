"""Plugin name resolution: raw user input -> package-manager specifier + registry key.

Accepted inputs:

- ``foo`` / ``foo@1.2.0``                -> ``picgo-plugin-foo`` (version kept in the specifier)
- ``picgo-plugin-foo[@tag]``             -> passed through
- ``@scope/foo`` / ``@scope/picgo-plugin-foo`` -> ``@scope/picgo-plugin-foo``
- a directory (absolute, or relative to cwd) containing a ``package.json``
  whose ``name`` carries the ``picgo-plugin-`` prefix
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import TYPE_CHECKING

from plugpm.core.utils import resolve_path, to_unix_path

from .models import PLUGIN_PREFIX, ResolvedPlugin

if TYPE_CHECKING:
    from plugpm.core.logger import Logger

MAX_NAME_LENGTH = 214

_PART = r"[a-z0-9~-][a-z0-9._~-]*"
_SPEC_RE = re.compile(
    rf"^(?:@(?P<scope>{_PART})/)?(?P<name>{_PART})(?:@(?P<version>[^\s@/\\]+))?$"
)

# name types
NORMAL = "normal"
SCOPE = "scope"
SIMPLE = "simple"
PATH = "path"
UNKNOWN = "unknown"


def _looks_like_path(raw: str, cwd: Path | None) -> bool:
    if raw.startswith((".", "~", "/")) or "\\" in raw or Path(raw).is_absolute():
        return True
    if re.match(r"^[A-Za-z]:", raw):
        return True
    try:
        return resolve_path(raw, cwd).exists()
    except (OSError, ValueError, RuntimeError):
        return False


def _split(spec: str) -> tuple[str, str, str] | None:
    """Split a package specifier into (scope, name, version); None if invalid."""
    m = _SPEC_RE.match(spec)
    if not m:
        return None
    scope, name, version = m.group("scope") or "", m.group("name"), m.group("version") or ""
    if name == PLUGIN_PREFIX:
        return None
    bare = f"@{scope}/{name}" if scope else name
    if len(bare) > MAX_NAME_LENGTH:
        return None
    return scope, name, version


def _join(scope: str, name: str, version: str = "") -> str:
    full = f"@{scope}/{name}" if scope else name
    return f"{full}@{version}" if version else full


def complete_plugin_name(name: str) -> str:
    """Prepend the plugin prefix to a bare name part unless it already has it."""
    return name if name.startswith(PLUGIN_PREFIX) else f"{PLUGIN_PREFIX}{name}"


def get_plugin_name_type(raw: str, cwd: Path | None = None) -> str:
    """Classify *raw* as normal, scope, simple, path or unknown."""
    raw = raw.strip()
    if not raw:
        return UNKNOWN
    parts = _split(raw)
    # canonical names win over same-named entries in cwd
    if parts is not None and parts[1].startswith(PLUGIN_PREFIX):
        return SCOPE if parts[0] else NORMAL
    if _looks_like_path(raw, cwd):
        return PATH
    return UNKNOWN if parts is None else SIMPLE


def _read_descriptor_name(plugin_dir: Path, raw: str, logger: Logger) -> str:
    """Return the package name declared in *plugin_dir*/package.json, or '' after one warning."""
    pkg_json = plugin_dir / "package.json"
    try:
        if not pkg_json.is_file():
            logger.warn(f"can't find package.json in {raw}")
            return ""
        data = json.loads(pkg_json.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.warn(f"can't read {to_unix_path(pkg_json)}: {e}")
        return ""
    name = data.get("name") if isinstance(data, dict) else None
    if not isinstance(name, str) or not name:
        logger.warn(f"the package.json in {raw} has no name field")
        return ""
    parts = _split(name)
    if parts is None or parts[2] or not parts[1].startswith(PLUGIN_PREFIX):
        logger.warn(
            f"the plugin package.json's name field is {name}, "
            f"need to include the prefix: {PLUGIN_PREFIX}"
        )
        return ""
    return name


def resolve_plugin_name(raw: str, logger: Logger, cwd: Path | None = None) -> ResolvedPlugin:
    """Turn a raw plugin identifier into a ResolvedPlugin.

    Never raises; every failure logs exactly one warning and returns
    ``ResolvedPlugin(success=False)``.
    """
    failed = ResolvedPlugin()
    text = raw.strip() if isinstance(raw, str) else ""
    name_type = get_plugin_name_type(text, cwd)

    if name_type in (NORMAL, SCOPE):
        scope, name, _ = _split(text)
        return ResolvedPlugin(success=True, full_name=text, pkg_name=_join(scope, name))

    if name_type == SIMPLE:
        scope, name, version = _split(text)
        name = complete_plugin_name(name)
        return ResolvedPlugin(
            success=True,
            full_name=_join(scope, name, version),
            pkg_name=_join(scope, name),
        )

    if name_type == PATH:
        try:
            plugin_dir = resolve_path(text, cwd)
            found = plugin_dir.is_dir()
        except (OSError, ValueError, RuntimeError):
            # NUL bytes, unknown ~user, names over the OS limit
            found = False
        if not found:
            logger.warn(f"can't find plugin {text}")
            return failed
        pkg_name = _read_descriptor_name(plugin_dir, text, logger)
        if not pkg_name:
            return failed
        return ResolvedPlugin(success=True, full_name=to_unix_path(plugin_dir), pkg_name=pkg_name)

    logger.warn(f"can't find plugin {text or repr(raw)}")
    return failed
