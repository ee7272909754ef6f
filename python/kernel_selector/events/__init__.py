"""Event integration layer.

Typed publish/subscribe between the switch coordinator, the UI synchronizer
and the session collaborator.
"""

from kernel_selector.events.bus import EventBus, EventHandler, EventKind
from kernel_selector.protocols import KernelCreated, KernelRef

__all__ = ["EventBus", "EventHandler", "EventKind", "KernelCreated", "KernelRef"]
