"""Presentation hooks driven by the kernel selector.

These objects hold presentation state only; a host (web page, terminal UI,
test) renders them. The host reports the outcome of loading the logo image by
calling LogoImage.loaded() or LogoImage.failed().
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List

LogoCallback = Callable[[], None]

LOGO_EVENTS = ("load", "error")


class LogoImage:
    """Kernel logo image: source URL, visibility and load/error callbacks."""

    def __init__(self, src: str = "", visible: bool = False):
        self.src = src
        self.visible = visible
        self._callbacks: Dict[str, List[LogoCallback]] = {name: [] for name in LOGO_EVENTS}

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def on(self, event: str, callback: LogoCallback) -> None:
        """Register a callback for ``"load"`` or ``"error"``."""
        if event not in self._callbacks:
            raise ValueError(f"Unknown logo event: {event!r}. Valid: {list(LOGO_EVENTS)}")
        if callback not in self._callbacks[event]:
            self._callbacks[event].append(callback)

    def loaded(self) -> None:
        """Host notification: the image at ``src`` loaded."""
        for callback in list(self._callbacks["load"]):
            callback()

    def failed(self) -> None:
        """Host notification: the image at ``src`` failed to load."""
        for callback in list(self._callbacks["error"]):
            callback()

    def __repr__(self) -> str:
        return f"LogoImage(src={self.src!r}, visible={self.visible})"


@dataclass
class Presentation:
    """Everything the kernel selector keeps in sync on screen."""
    stylesheet_href: str = ""
    indicator_text: str = ""
    logo: LogoImage = field(default_factory=LogoImage)


__all__ = ["LOGO_EVENTS", "LogoCallback", "LogoImage", "Presentation"]
