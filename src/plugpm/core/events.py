"""Event bus: listeners keyed by event name, synchronous emit."""

from __future__ import annotations

from collections import defaultdict
from typing import Any, Callable

from plugpm.core.logger import Logger

# Generic fatal event, emitted when the package manager cannot be started.
FAILED = "failed"

INSTALL_SUCCESS = "installSuccess"
INSTALL_FAILED = "installFailed"
UNINSTALL_SUCCESS = "uninstallSuccess"
UNINSTALL_FAILED = "uninstallFailed"
UPDATE_SUCCESS = "updateSuccess"
UPDATE_FAILED = "updateFailed"

BUILTIN_EVENTS = (
    FAILED,
    INSTALL_SUCCESS,
    INSTALL_FAILED,
    UNINSTALL_SUCCESS,
    UNINSTALL_FAILED,
    UPDATE_SUCCESS,
    UPDATE_FAILED,
)

Listener = Callable[[Any], None]


class EventBus:
    """Minimal emitter. Listeners run in registration order on the emitting thread.

    A listener that raises is logged at error level; the remaining listeners
    still run and emit itself never raises.
    """

    def __init__(self, logger: Logger | None = None):
        self.logger = logger or Logger()
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def on(self, event: str, listener: Listener) -> Listener:
        self._listeners[event].append(listener)
        return listener

    def off(self, event: str, listener: Listener) -> bool:
        listeners = self._listeners.get(event, [])
        if listener in listeners:
            listeners.remove(listener)
            return True
        return False

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, []))

    def emit(self, event: str, payload: Any = None) -> bool:
        """Call every listener for *event*. Returns True if any were registered."""
        listeners = list(self._listeners.get(event, []))
        for listener in listeners:
            try:
                listener(payload)
            except Exception as e:
                self.logger.error(f"{event} listener raised {type(e).__name__}: {e}")
        return bool(listeners)
