"""Exception hierarchy for the kernel selector."""

SESSION_ALREADY_STARTING = "SessionAlreadyStarting"


class KernelSelectorError(Exception):
    """Base exception for kernel selector errors."""
    pass


class SessionError(KernelSelectorError):
    """Raised by a session collaborator when a kernel cannot be started.

    The ``kind`` attribute is the only thing the switch coordinator
    discriminates on.
    """

    kind: str = "SessionError"

    def __init__(self, message: str = "", kind: str = ""):
        if kind:
            self.kind = kind
        super().__init__(message or self.kind)


class SessionAlreadyStartingError(SessionError):
    """A session start is already pending; the new start was refused."""

    kind = SESSION_ALREADY_STARTING


class CatalogError(KernelSelectorError):
    """Kernel specification catalog payload could not be used."""
    pass


class ExtensionLoadError(KernelSelectorError):
    """Kernel extension module could not be fetched or executed."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.message = message
        super().__init__(f"{url}: {message}")


__all__ = [
    "SESSION_ALREADY_STARTING",
    "KernelSelectorError",
    "SessionError",
    "SessionAlreadyStartingError",
    "CatalogError",
    "ExtensionLoadError",
]
