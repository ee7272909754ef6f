"""Protocol definitions - interfaces for dependency injection.

These are typing.Protocol classes for the collaborators the kernel selector
drives but does not own: the logger, the document session that actually
starts kernels, and the document object that holds the selector.
"""

from typing import Any, Protocol, runtime_checkable


# =============================================================================
# LOGGING
# =============================================================================

@runtime_checkable
class LoggerProtocol(Protocol):
    """Structured logging interface."""

    def info(self, message: str, **kwargs: Any) -> None: ...
    def debug(self, message: str, **kwargs: Any) -> None: ...
    def warning(self, message: str, **kwargs: Any) -> None: ...
    def error(self, message: str, **kwargs: Any) -> None: ...
    def bind(self, **kwargs: Any) -> "LoggerProtocol": ...


# =============================================================================
# SESSION
# =============================================================================

@runtime_checkable
class SessionProtocol(Protocol):
    """Live connection of a document to a kernel.

    ``start_session`` starts (or switches to) the named kernel. It raises
    SessionAlreadyStartingError when a start is already pending and may raise
    anything else on unexpected failure. Once the server confirms the kernel,
    the session publishes KERNEL_CREATED on the event bus.
    """

    async def start_session(self, kernel_name: str) -> None: ...


# =============================================================================
# DOCUMENT
# =============================================================================

@runtime_checkable
class DocumentProtocol(Protocol):
    """Document object that owns a reference to its kernel selector."""

    def set_kernel_selector(self, selector: Any) -> None: ...


__all__ = [
    "LoggerProtocol",
    "SessionProtocol",
    "DocumentProtocol",
]
