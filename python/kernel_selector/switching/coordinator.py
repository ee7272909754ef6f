"""SwitchCoordinator - owns the kernel switch protocol and the selection.

State machine:

    IDLE(current) ──request_switch(name != current)──> SWITCHING(requested, previous)
    SWITCHING ──start ok──────────────> IDLE, publish SELECTION_CHANGED, load kernel.js
    SWITCHING ──already starting──────> IDLE(previous), logged, nothing published
    SWITCHING ──any other failure─────> IDLE(previous), exception re-raised

A request arriving while SWITCHING is rejected, not queued. A request for a
name the registry does not know is dropped with a warning.

``current_selection`` is written only by the SELECTION_CHANGED handler, so a
request stays provisional until the session has accepted it. When the session
later reports KERNEL_CREATED for a different (server-resolved) kernel name,
the coordinator re-publishes SELECTION_CHANGED with that spec.
"""

import asyncio
from typing import Optional, Set

from kernel_selector.catalog import SpecRegistry
from kernel_selector.errors import SESSION_ALREADY_STARTING, SessionError
from kernel_selector.events import EventBus, EventKind
from kernel_selector.extensions import ExtensionLoader
from kernel_selector.logging import get_component_logger
from kernel_selector.protocols import (
    KernelCreated,
    KernelSpec,
    LoggerProtocol,
    SessionProtocol,
    SwitchState,
)
from kernel_selector.ui import Presentation


class SwitchCoordinator:
    """Drives kernel switches for one document session.

    Usage:
        coordinator = SwitchCoordinator(registry, session, bus, presentation)
        coordinator.bind_events()
        await coordinator.request_switch("python3")
    """

    def __init__(
        self,
        registry: SpecRegistry,
        session: SessionProtocol,
        bus: EventBus,
        presentation: Presentation,
        *,
        extension_loader: Optional[ExtensionLoader] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._registry = registry
        self._session = session
        self._bus = bus
        self._presentation = presentation
        self._logger = get_component_logger("switch_coordinator", logger)
        self._extension_loader = extension_loader or ExtensionLoader(
            base_url=registry.base_url, logger=logger
        )

        self._current_selection: Optional[str] = None
        self._state = SwitchState.IDLE
        self._requested: Optional[str] = None
        self._previous: Optional[str] = None
        self._extension_tasks: Set["asyncio.Task[bool]"] = set()
        self._bound = False

    # =========================================================================
    # State
    # =========================================================================

    @property
    def current_selection(self) -> Optional[str]:
        return self._current_selection

    @property
    def state(self) -> SwitchState:
        return self._state

    @property
    def requested(self) -> Optional[str]:
        """Kernel name being switched to, while SWITCHING."""
        return self._requested

    @property
    def previous(self) -> Optional[str]:
        """Selection before the in-flight switch, while SWITCHING."""
        return self._previous

    @property
    def pending_extensions(self) -> Set["asyncio.Task[bool]"]:
        return set(self._extension_tasks)

    # =========================================================================
    # Events
    # =========================================================================

    def bind_events(self) -> None:
        if self._bound:
            return
        self._bus.subscribe(EventKind.SELECTION_CHANGED, self._on_selection_changed)
        self._bus.subscribe(EventKind.KERNEL_CREATED, self._on_kernel_created)
        self._bound = True

    def _on_selection_changed(self, spec: KernelSpec) -> None:
        self._current_selection = spec.name

    def _on_kernel_created(self, event: KernelCreated) -> None:
        kernel_name = event.kernel.name
        if kernel_name == self._current_selection:
            return

        # A generic request (e.g. "python") may resolve to a specific kernel
        # (e.g. "python3"); only the server's reply tells us which.
        spec = self._registry.get(kernel_name)
        if spec is None:
            self._logger.warning(
                "kernel_created_unknown_spec",
                kernel_name=kernel_name,
                current_selection=self._current_selection,
            )
            return

        self._logger.info(
            "kernel_selection_reconciled",
            requested=self._current_selection,
            resolved=kernel_name,
        )
        self._bus.publish(EventKind.SELECTION_CHANGED, spec)

    # =========================================================================
    # Switching
    # =========================================================================

    async def request_switch(self, kernel_name: str) -> bool:
        """Switch the session to ``kernel_name``.

        Returns:
            True if the session accepted the switch and SELECTION_CHANGED was
            published; False for no-ops, rejected and abandoned switches.

        Raises:
            Whatever the session raised, other than "already starting".
        """
        if kernel_name == self._current_selection:
            self._logger.debug("kernel_switch_noop", kernel_name=kernel_name)
            return False

        if self._state is SwitchState.SWITCHING:
            self._logger.warning(
                "kernel_switch_rejected",
                kernel_name=kernel_name,
                in_flight=self._requested,
            )
            return False

        spec = self._registry.get(kernel_name)
        if spec is None:
            self._logger.warning(
                "kernel_switch_unknown_spec",
                kernel_name=kernel_name,
                registry_loaded=self._registry.loaded,
            )
            return False

        previous_stylesheet = self._presentation.stylesheet_href
        self._state = SwitchState.SWITCHING
        self._requested = kernel_name
        self._previous = self._current_selection
        self._presentation.stylesheet_href = spec.stylesheet_url or ""

        self._logger.info(
            "kernel_switch_started",
            kernel_name=kernel_name,
            previous=self._previous,
        )

        started = False
        try:
            await self._session.start_session(kernel_name)
            started = True
        except SessionError as e:
            if e.kind != SESSION_ALREADY_STARTING:
                raise
            self._logger.info(
                "kernel_switch_abandoned",
                kernel_name=kernel_name,
                reason="Cannot change kernel while waiting for pending session start.",
            )
            return False
        finally:
            if not started:
                self._presentation.stylesheet_href = previous_stylesheet
            self._state = SwitchState.IDLE
            self._requested = None
            self._previous = None

        self._bus.publish(EventKind.SELECTION_CHANGED, spec)
        self._logger.info("kernel_switch_completed", kernel_name=kernel_name)

        extension_url = spec.extension_url
        if extension_url:
            self._load_extension(extension_url)

        return True

    # Menu activation name kept from the notebook frontend
    change_kernel = request_switch

    def lock_switch(self) -> None:
        """Warn that switching a running session's kernel may not work."""
        self._logger.warning(
            "kernel_switch_unguaranteed",
            message="switching kernel is not guaranteed to work",
        )

    # =========================================================================
    # Extensions
    # =========================================================================

    def _load_extension(self, url: str) -> None:
        task = self._extension_loader.schedule(url)
        self._extension_tasks.add(task)
        task.add_done_callback(self._extension_tasks.discard)

    async def wait_for_extensions(self) -> None:
        """Wait for in-flight extension loads. Never used by the switch itself."""
        if self._extension_tasks:
            await asyncio.gather(*self._extension_tasks, return_exceptions=True)


__all__ = ["SwitchCoordinator"]
