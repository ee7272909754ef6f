"""UISynchronizer - keeps the kernel indicator and logo in step with selection."""

from typing import Optional

from kernel_selector.events import EventBus, EventKind
from kernel_selector.logging import get_component_logger
from kernel_selector.protocols import KernelSpec, LoggerProtocol
from kernel_selector.ui.presentation import Presentation


class UISynchronizer:
    """Updates presentation state when the selected kernel changes.

    Usage:
        synchronizer = UISynchronizer(bus, presentation, logger)
        synchronizer.bind_events()
    """

    def __init__(
        self,
        bus: EventBus,
        presentation: Presentation,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._bus = bus
        self._presentation = presentation
        self._logger = get_component_logger("ui_synchronizer", logger)
        self._bound = False

    @property
    def presentation(self) -> Presentation:
        return self._presentation

    def bind_events(self) -> None:
        """Subscribe to selection changes and wire the logo callbacks."""
        if self._bound:
            return

        self._bus.subscribe(EventKind.SELECTION_CHANGED, self._on_selection_changed)

        logo = self._presentation.logo
        logo.on("load", logo.show)
        logo.on("error", logo.hide)
        self._bound = True

    def _on_selection_changed(self, spec: KernelSpec) -> None:
        presentation = self._presentation
        presentation.indicator_text = spec.display_name

        logo_url = spec.logo_url
        if logo_url:
            presentation.logo.src = logo_url
            presentation.logo.show()
        else:
            presentation.logo.hide()

        self._logger.debug(
            "kernel_indicator_updated",
            kernel_name=spec.name,
            display_name=spec.display_name,
            logo=logo_url,
        )


__all__ = ["UISynchronizer"]
