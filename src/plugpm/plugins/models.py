"""Plugin operation models: Operation, ResolvedPlugin, OperationBatch, ProcessResult, Outcome."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from plugpm.core import events

PLUGIN_PREFIX = "picgo-plugin-"


class Operation(str, Enum):
    """Package-manager command for one batch."""

    INSTALL = "install"
    UNINSTALL = "uninstall"
    UPDATE = "update"

    def __str__(self) -> str:
        return self.value


class OutcomeKind(str, Enum):
    """The six outcome notifications; values are the emitted event names."""

    INSTALL_SUCCESS = events.INSTALL_SUCCESS
    INSTALL_FAILED = events.INSTALL_FAILED
    UNINSTALL_SUCCESS = events.UNINSTALL_SUCCESS
    UNINSTALL_FAILED = events.UNINSTALL_FAILED
    UPDATE_SUCCESS = events.UPDATE_SUCCESS
    UPDATE_FAILED = events.UPDATE_FAILED

    @classmethod
    def for_operation(cls, operation: Operation, success: bool) -> OutcomeKind:
        suffix = "Success" if success else "Failed"
        return cls(f"{operation.value}{suffix}")

    @property
    def success(self) -> bool:
        return self.value.endswith("Success")


@dataclass(frozen=True)
class ResolvedPlugin:
    """A raw identifier turned into a package-manager specifier and a registry key."""

    success: bool = False
    full_name: str = ""  # handed to the package manager (name, name@version, or path)
    pkg_name: str = ""  # canonical registry key


@dataclass
class OperationBatch:
    """Deduplicated, filtered set of packages targeted by one call.

    ``specifiers`` and ``pkg_names`` are index-aligned. ``already_installed``
    is only filled for installs and never overlaps ``pkg_names``.
    """

    operation: Operation
    specifiers: list[str] = field(default_factory=list)
    pkg_names: list[str] = field(default_factory=list)
    already_installed: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.specifiers


@dataclass(frozen=True)
class ProcessResult:
    """Exit code and combined stdout/stderr of one package-manager run."""

    exit_code: int
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class Outcome:
    """The single success/failure notification produced by one call."""

    kind: OutcomeKind
    title: str
    body: list[str] | str

    @property
    def event(self) -> str:
        return self.kind.value

    @property
    def success(self) -> bool:
        return self.kind.success

    def payload(self) -> dict:
        body = list(self.body) if isinstance(self.body, list) else self.body
        return {"title": self.title, "body": body}
