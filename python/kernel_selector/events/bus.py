"""EventBus - typed, same-thread publish/subscribe.

Two event kinds cross the kernel selector boundary:

  SELECTION_CHANGED  (spec_changed.Kernel)     payload: KernelSpec
  KERNEL_CREATED     (kernel_created.Session)  payload: KernelCreated

Dispatch is synchronous: publish() returns after every handler for the kind
has run, in subscription order. A failing handler is logged and does not
prevent delivery to the remaining handlers.

Architecture:
    SwitchCoordinator ──publish SELECTION_CHANGED──> EventBus ──> UISynchronizer
    Session ──────────publish KERNEL_CREATED──────> EventBus ──> SwitchCoordinator
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from kernel_selector.logging import get_component_logger
from kernel_selector.protocols import KernelCreated, KernelSpec, LoggerProtocol

EventHandler = Callable[[Any], None]


class EventKind(str, Enum):
    """Event kinds, valued by their wire names."""
    SELECTION_CHANGED = "spec_changed.Kernel"
    KERNEL_CREATED = "kernel_created.Session"

    @property
    def payload_type(self) -> type:
        return _PAYLOAD_TYPES[self]


_PAYLOAD_TYPES: Dict[EventKind, type] = {
    EventKind.SELECTION_CHANGED: KernelSpec,
    EventKind.KERNEL_CREATED: KernelCreated,
}


class EventBus:
    """Synchronous publish/subscribe bus keyed by EventKind.

    Usage:
        bus = EventBus()
        bus.subscribe(EventKind.SELECTION_CHANGED, on_spec_changed)
        bus.publish(EventKind.SELECTION_CHANGED, spec)
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None) -> None:
        self._logger = get_component_logger("event_bus", logger)
        self._handlers: Dict[EventKind, List[EventHandler]] = {
            kind: [] for kind in EventKind
        }

    def subscribe(self, kind: EventKind, handler: EventHandler) -> None:
        """Register a handler for an event kind (no duplicates)."""
        handlers = self._handlers[EventKind(kind)]
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, kind: EventKind, handler: EventHandler) -> None:
        """Unregister a handler."""
        try:
            self._handlers[EventKind(kind)].remove(handler)
        except ValueError:
            pass

    def handlers(self, kind: EventKind) -> List[EventHandler]:
        return list(self._handlers[EventKind(kind)])

    def publish(self, kind: EventKind, payload: Any) -> None:
        """Dispatch payload to every handler of kind.

        Raises:
            TypeError: payload is not of the type the kind carries.
        """
        kind = EventKind(kind)
        if not isinstance(payload, kind.payload_type):
            raise TypeError(
                f"{kind.value} expects {kind.payload_type.__name__}, "
                f"got {type(payload).__name__}"
            )

        # Copy: handlers may publish or (un)subscribe while dispatching
        for handler in list(self._handlers[kind]):
            try:
                handler(payload)
            except Exception as e:
                self._logger.error(
                    "event_handler_error",
                    event_type=kind.value,
                    handler=getattr(handler, "__qualname__", repr(handler)),
                    error=str(e),
                )


__all__ = ["EventBus", "EventKind", "EventHandler"]
