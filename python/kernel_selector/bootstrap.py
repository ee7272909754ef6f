"""Composition Root - build a KernelSelector and inject its dependencies.

This is the only place where the registry, coordinator, synchronizer and
extension loader are instantiated and wired together. There is no global
selector instance: the owning document receives a reference through
``set_kernel_selector`` when it provides one.

Usage:
    from kernel_selector.bootstrap import create_kernel_selector

    selector = create_kernel_selector(session, document=notebook)
    await selector.start()
    for entry in selector.menu_entries:
        ...
    await selector.select("python3")
"""

from typing import Optional, Tuple

import httpx

from kernel_selector.catalog import SpecRegistry
from kernel_selector.events import EventBus
from kernel_selector.extensions import ExtensionLoader
from kernel_selector.logging import get_component_logger
from kernel_selector.protocols import (
    DocumentProtocol,
    LoggerProtocol,
    MenuEntry,
    SessionProtocol,
)
from kernel_selector.settings import Settings, get_settings
from kernel_selector.switching import SwitchCoordinator
from kernel_selector.ui import Presentation, UISynchronizer


class KernelSelector:
    """Facade over the kernel selector components of one document."""

    def __init__(
        self,
        registry: SpecRegistry,
        coordinator: SwitchCoordinator,
        synchronizer: UISynchronizer,
        bus: EventBus,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self.registry = registry
        self.coordinator = coordinator
        self.synchronizer = synchronizer
        self.bus = bus
        self._logger = get_component_logger("kernel_selector", logger)

    @property
    def presentation(self) -> Presentation:
        return self.synchronizer.presentation

    @property
    def menu_entries(self) -> Tuple[MenuEntry, ...]:
        return self.registry.menu_entries

    @property
    def current_selection(self) -> Optional[str]:
        return self.coordinator.current_selection

    def bind_events(self) -> None:
        self.coordinator.bind_events()
        self.synchronizer.bind_events()

    async def start(self) -> None:
        """Bind event handlers, then fetch the kernel spec catalog."""
        self.bind_events()
        await self.registry.refresh()
        self._logger.info(
            "kernel_selector_started",
            kernelspecs=len(self.registry),
            catalog_error=self.registry.last_error,
        )

    async def select(self, kernel_name: str) -> bool:
        """Menu entry activation."""
        return await self.coordinator.request_switch(kernel_name)


def create_kernel_selector(
    session: SessionProtocol,
    *,
    settings: Optional[Settings] = None,
    bus: Optional[EventBus] = None,
    document: Optional[DocumentProtocol] = None,
    presentation: Optional[Presentation] = None,
    client: Optional[httpx.AsyncClient] = None,
    logger: Optional[LoggerProtocol] = None,
) -> KernelSelector:
    """Wire a KernelSelector for one document session.

    Args:
        session: Session collaborator that starts kernels.
        settings: Settings (defaults to get_settings()).
        bus: Event bus shared with the session (created if None).
        document: Owning document; receives the selector via set_kernel_selector.
        presentation: Presentation state to drive (created if None).
        client: Shared httpx client for catalog and extension requests.
        logger: Logger to inject into every component.

    Returns:
        KernelSelector with events not yet bound (see KernelSelector.start).
    """
    settings = settings or get_settings()
    bus = bus or EventBus(logger=logger)
    presentation = presentation or Presentation()

    registry = SpecRegistry(
        settings.base_url,
        client=client,
        timeout=settings.request_timeout,
        logger=logger,
    )
    extension_loader = ExtensionLoader(
        base_url=settings.base_url,
        client=client,
        timeout=settings.extension_timeout,
        logger=logger,
    )
    coordinator = SwitchCoordinator(
        registry,
        session,
        bus,
        presentation,
        extension_loader=extension_loader,
        logger=logger,
    )
    synchronizer = UISynchronizer(bus, presentation, logger=logger)

    selector = KernelSelector(registry, coordinator, synchronizer, bus, logger=logger)

    set_selector = getattr(document, "set_kernel_selector", None)
    if callable(set_selector):
        set_selector(selector)

    return selector


__all__ = ["KernelSelector", "create_kernel_selector"]
