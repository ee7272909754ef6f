"""Kernel switch protocol."""

from kernel_selector.switching.coordinator import SwitchCoordinator

__all__ = ["SwitchCoordinator"]
