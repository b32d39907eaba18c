"""Plugins: name resolution, batch planning, package-manager runs, outcome reconciliation."""

from .executor import NpmRunner, PackageManagerNotFound, PluginManagerError, build_args
from .handler import PluginHandler
from .models import (
    PLUGIN_PREFIX,
    Operation,
    OperationBatch,
    Outcome,
    OutcomeKind,
    ProcessResult,
    ResolvedPlugin,
)
from .names import complete_plugin_name, get_plugin_name_type, resolve_plugin_name
from .planner import plan_batch
from .registry import PackageRegistry, PluginRegistry

__all__ = [
    "PLUGIN_PREFIX",
    "NpmRunner",
    "Operation",
    "OperationBatch",
    "Outcome",
    "OutcomeKind",
    "PackageManagerNotFound",
    "PackageRegistry",
    "PluginHandler",
    "PluginManagerError",
    "PluginRegistry",
    "ProcessResult",
    "ResolvedPlugin",
    "build_args",
    "complete_plugin_name",
    "get_plugin_name_type",
    "plan_batch",
    "resolve_plugin_name",
]
