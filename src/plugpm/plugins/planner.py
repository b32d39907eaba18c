"""Batch planning: resolve, filter and deduplicate raw identifiers for one operation."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from .models import Operation, OperationBatch
from .names import resolve_plugin_name

if TYPE_CHECKING:
    from plugpm.core.logger import Logger

    from .registry import PluginRegistry


def plan_batch(
    operation: Operation,
    plugins: Iterable[str],
    registry: PluginRegistry,
    logger: Logger,
    cwd: Path | None = None,
) -> OperationBatch:
    """Build the OperationBatch for *operation* from raw plugin identifiers.

    Installs hand the package manager the full specifier (remote name with
    version, or local path); uninstall and update address packages by their
    declared name. Already-installed plugins are skipped for installs and
    reported in ``already_installed``.
    """
    operation = Operation(operation)
    batch = OperationBatch(operation=operation)
    seen: set[str] = set()

    for raw in plugins:
        item = resolve_plugin_name(raw, logger, cwd)
        if not item.success:
            continue
        if item.pkg_name in seen:
            continue
        seen.add(item.pkg_name)

        if operation is Operation.INSTALL and registry.has_plugin(item.pkg_name):
            batch.already_installed.append(item.pkg_name)
            logger.success(f"already installed {item.pkg_name}")
            continue

        spec = item.full_name if operation is Operation.INSTALL else item.pkg_name
        batch.specifiers.append(spec)
        batch.pkg_names.append(item.pkg_name)

    return batch
