"""
Exception hierarchy for deckbridge.

Provides:
- A base error carrying a code, a category and structured details
- Establishment errors (address, connection, protocol, registration send)
- Steady-state socket errors (bad message, transport failure)
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    FATAL = "fatal"
    RECOVERABLE = "recoverable"
    VALIDATION = "validation"


class DeckBridgeError(Exception):
    """Base exception for all deckbridge errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class AddressError(DeckBridgeError):
    """The address could not be turned into a connectable endpoint."""

    def __init__(self, message: str, address: Any = None, code: str = "ADDRESS_ERROR"):
        super().__init__(message, code=code, category=ErrorCategory.FATAL, details={"address": str(address)})


class UnsupportedScheme(AddressError):
    """The address was given as a URL that does not refer to a web socket."""

    def __init__(self, scheme: str, address: Any = None):
        super().__init__(f'Unsupported scheme "{scheme}"', address=address, code="UNSUPPORTED_SCHEME")
        self.scheme = scheme
        self.details["scheme"] = scheme


class ConnectError(DeckBridgeError):
    """Base class for failures while connecting to and registering with the host."""

    def __init__(self, message: str, code: str, endpoint: str | None = None):
        details = {"endpoint": endpoint} if endpoint else {}
        super().__init__(message, code=code, category=ErrorCategory.FATAL, details=details)


class ConnectionError(ConnectError):
    """The network connection could not be established."""

    def __init__(self, message: str = "Connection error", endpoint: str | None = None):
        super().__init__(message, code="CONNECTION_ERROR", endpoint=endpoint)


class ProtocolError(ConnectError):
    """The web socket opening handshake failed."""

    def __init__(self, message: str = "Websocket protocol error", endpoint: str | None = None):
        super().__init__(message, code="PROTOCOL_ERROR", endpoint=endpoint)


class SendError(ConnectError):
    """The registration frame could not be delivered."""

    def __init__(self, message: str = "Send error", endpoint: str | None = None):
        super().__init__(message, code="SEND_ERROR", endpoint=endpoint)


class SocketError(DeckBridgeError):
    """Base class for errors reading or writing an established socket."""


class BadMessage(SocketError):
    """A single message could not be encoded or decoded.

    The connection stays usable; only the offending message is lost.
    """

    def __init__(self, message: str, event: str | None = None, frame: str | None = None):
        details: dict[str, Any] = {}
        if event is not None:
            details["event"] = event
        if frame is not None:
            details["frame"] = frame[:200]
        super().__init__(message, code="BAD_MESSAGE", category=ErrorCategory.RECOVERABLE, details=details)
        self.event = event


class TransportError(SocketError):
    """The web socket failed during normal operation; the socket is closed."""

    def __init__(self, message: str = "WebSocket error"):
        super().__init__(message, code="TRANSPORT_ERROR", category=ErrorCategory.FATAL)


class RegistrationParamsError(DeckBridgeError):
    """The startup parameters handed over by the host were missing or invalid."""

    def __init__(self, code: str, message: str):
        super().__init__(message, code=code, category=ErrorCategory.VALIDATION)
