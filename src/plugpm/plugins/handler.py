"""PluginHandler: install, uninstall, update plugins through the package manager."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from plugpm.core import events
from plugpm.core.events import EventBus
from plugpm.core.logger import Logger

from .executor import NpmRunner, PackageManagerNotFound
from .models import Operation, OperationBatch, Outcome, OutcomeKind
from .planner import plan_batch
from .registry import PackageRegistry

if TYPE_CHECKING:
    from plugpm.core.config import Config

    from .registry import PluginRegistry


def _title(operation: Operation, success: bool) -> str:
    return f"plugin {operation.value} {'succeeded' if success else 'failed'}"


class PluginHandler:
    """Resolve plugin identifiers, run the package manager, reconcile the registry.

    Every public call produces exactly one Outcome: it is logged, emitted on the
    event bus under its event name, and returned. A package manager that cannot
    be started aborts the call instead: the ``failed`` event carries the error,
    nothing is registered, and the call returns None.
    """

    def __init__(
        self,
        registry: PluginRegistry,
        runner: NpmRunner,
        base_dir: str | Path,
        logger: Logger | None = None,
        event_bus: EventBus | None = None,
        cwd: Path | None = None,
    ):
        self.registry = registry
        self.runner = runner
        self.base_dir = Path(base_dir)
        self.logger = logger or Logger()
        self.events = event_bus or EventBus(self.logger)
        self.cwd = cwd

    @classmethod
    def from_config(
        cls,
        config: Config,
        logger: Logger | None = None,
        event_bus: EventBus | None = None,
    ) -> PluginHandler:
        registry = PackageRegistry(config.base_dir)
        registry.init()
        runner = NpmRunner(config.npm_command, registry=config.registry)
        return cls(
            registry,
            runner,
            config.base_dir,
            logger=logger or Logger(levels=config.log_level),
            event_bus=event_bus,
        )

    # ── public operations ──────────────────────────────────────────

    def install(
        self, plugins: Iterable[str], proxy: str = "", env: dict[str, str] | None = None
    ) -> Outcome | None:
        return self._handle(Operation.INSTALL, plugins, proxy, env)

    def uninstall(self, plugins: Iterable[str]) -> Outcome | None:
        return self._handle(Operation.UNINSTALL, plugins)

    def update(
        self, plugins: Iterable[str], proxy: str = "", env: dict[str, str] | None = None
    ) -> Outcome | None:
        return self._handle(Operation.UPDATE, plugins, proxy, env)

    # ── internals ──────────────────────────────────────────────────

    def plan(self, operation: Operation, plugins: Iterable[str]) -> OperationBatch:
        return plan_batch(operation, plugins, self.registry, self.logger, self.cwd)

    def _handle(
        self,
        operation: Operation,
        plugins: Iterable[str],
        proxy: str = "",
        env: dict[str, str] | None = None,
    ) -> Outcome | None:
        batch = self.plan(operation, plugins)

        if batch.is_empty:
            if batch.already_installed:
                return self._emit(
                    Outcome(
                        OutcomeKind.for_operation(operation, True),
                        _title(operation, True),
                        list(batch.already_installed),
                    )
                )
            return self._emit(
                Outcome(
                    OutcomeKind.for_operation(operation, False),
                    _title(operation, False),
                    f"plugin {operation.value} failed: no valid plugin name or path",
                )
            )

        try:
            result = self.runner.run(operation, batch.specifiers, self.base_dir, proxy, env)
        except PackageManagerNotFound as e:
            self.logger.error(e)
            self.events.emit(events.FAILED, e)
            return None

        if not result.ok:
            return self._emit(
                Outcome(
                    OutcomeKind.for_operation(operation, False),
                    _title(operation, False),
                    f"plugin {operation.value} failed, exit code {result.exit_code}, "
                    f"output:\n{result.output}",
                )
            )

        self._apply(batch)
        body = list(batch.pkg_names)
        if operation is Operation.INSTALL:
            body.extend(batch.already_installed)
        return self._emit(
            Outcome(OutcomeKind.for_operation(operation, True), _title(operation, True), body)
        )

    def _apply(self, batch: OperationBatch) -> None:
        # update rewrites files on disk only; loaded plugins are left as they are
        if batch.operation is Operation.INSTALL:
            for name in batch.pkg_names:
                self.registry.register_plugin(name)
        elif batch.operation is Operation.UNINSTALL:
            for name in batch.pkg_names:
                self.registry.unregister_plugin(name)

    def _emit(self, outcome: Outcome) -> Outcome:
        if outcome.success:
            self.logger.success(outcome.title)
        else:
            self.logger.error(outcome.body if isinstance(outcome.body, str) else outcome.title)
        self.events.emit(outcome.event, outcome.payload())
        return outcome
