"""Presentation state and its synchronizer."""

from kernel_selector.ui.presentation import LOGO_EVENTS, LogoImage, Presentation
from kernel_selector.ui.synchronizer import UISynchronizer

__all__ = ["LOGO_EVENTS", "LogoImage", "Presentation", "UISynchronizer"]
