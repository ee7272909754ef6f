"""Data model and collaborator protocols."""

from kernel_selector.protocols.interfaces import (
    LoggerProtocol,
    SessionProtocol,
    DocumentProtocol,
)
from kernel_selector.protocols.types import (
    RESOURCE_KERNEL_CSS,
    RESOURCE_KERNEL_JS,
    RESOURCE_LOGO_64,
    RESOURCE_LOGO_32,
    MENU_ENTRY_ID_PREFIX,
    KernelSpecInfo,
    KernelSpec,
    MenuEntry,
    KernelRef,
    KernelCreated,
    SwitchState,
)

__all__ = [
    # Interfaces
    "LoggerProtocol",
    "SessionProtocol",
    "DocumentProtocol",
    # Resource keys
    "RESOURCE_KERNEL_CSS",
    "RESOURCE_KERNEL_JS",
    "RESOURCE_LOGO_64",
    "RESOURCE_LOGO_32",
    "MENU_ENTRY_ID_PREFIX",
    # Types
    "KernelSpecInfo",
    "KernelSpec",
    "MenuEntry",
    "KernelRef",
    "KernelCreated",
    "SwitchState",
]
