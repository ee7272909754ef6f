"""Data model for kernel specifications and selection events.

KernelSpec mirrors one entry of the notebook server's ``/api/kernelspecs``
catalog. It is validated with pydantic on the way in and never mutated
afterwards; a catalog refresh replaces every instance wholesale.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Well-known resource keys
RESOURCE_KERNEL_CSS = "kernel.css"
RESOURCE_KERNEL_JS = "kernel.js"
RESOURCE_LOGO_64 = "logo-64x64"
RESOURCE_LOGO_32 = "logo-32x32"

MENU_ENTRY_ID_PREFIX = "kernel-submenu-"


class KernelSpecInfo(BaseModel):
    """The ``spec`` block of a catalog entry.

    Only ``display_name`` is interpreted; everything else the server sends
    (language, argv, env, ...) is retained as extra fields.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    display_name: str


class KernelSpec(BaseModel):
    """A kernel specification as published by the notebook server."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    spec: KernelSpecInfo
    resources: Dict[str, str] = Field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.spec.display_name

    def resource(self, key: str) -> Optional[str]:
        """Return the URL of a resource, or None when absent or empty."""
        return self.resources.get(key) or None

    @property
    def stylesheet_url(self) -> Optional[str]:
        return self.resource(RESOURCE_KERNEL_CSS)

    @property
    def extension_url(self) -> Optional[str]:
        return self.resource(RESOURCE_KERNEL_JS)

    @property
    def logo_url(self) -> Optional[str]:
        return self.resource(RESOURCE_LOGO_64)

    @classmethod
    def from_catalog_entry(cls, key: str, entry: Dict[str, Any]) -> "KernelSpec":
        """Build a spec from a catalog entry, defaulting ``name`` to its key."""
        data = dict(entry)
        data.setdefault("name", key)
        return cls.model_validate(data)


@dataclass(frozen=True)
class MenuEntry:
    """One entry of the change-kernel menu."""
    name: str
    display_name: str

    @property
    def element_id(self) -> str:
        return MENU_ENTRY_ID_PREFIX + self.name


@dataclass(frozen=True)
class KernelRef:
    """Reference to a running kernel, as reported by the session."""
    name: str


@dataclass(frozen=True)
class KernelCreated:
    """Payload of the kernel-created confirmation event."""
    kernel: KernelRef

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KernelCreated":
        """Parse the ``{"kernel": {"name": ...}}`` shape sent by sessions."""
        return cls(kernel=KernelRef(name=data["kernel"]["name"]))


class SwitchState(str, Enum):
    """Switch coordinator states."""
    IDLE = "IDLE"
    SWITCHING = "SWITCHING"


__all__ = [
    "RESOURCE_KERNEL_CSS",
    "RESOURCE_KERNEL_JS",
    "RESOURCE_LOGO_64",
    "RESOURCE_LOGO_32",
    "MENU_ENTRY_ID_PREFIX",
    "KernelSpecInfo",
    "KernelSpec",
    "MenuEntry",
    "KernelRef",
    "KernelCreated",
    "SwitchState",
]
