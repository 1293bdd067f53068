"""
deckbridge - typed WebSocket link between a plugin and the Stream Deck host.
"""

__version__ = "0.1.0"

from deckbridge.errors import (
    AddressError,
    BadMessage,
    ConnectError,
    ConnectionError,
    DeckBridgeError,
    ProtocolError,
    SendError,
    SocketError,
    TransportError,
    UnsupportedScheme,
)
from deckbridge.protocol.codec import MessageCodec
from deckbridge.registration import RegistrationInfo, RegistrationParams
from deckbridge.transport import Connector, DeckSocket, Endpoint, connect, resolve

__all__ = [
    "AddressError",
    "BadMessage",
    "ConnectError",
    "ConnectionError",
    "Connector",
    "DeckBridgeError",
    "DeckSocket",
    "Endpoint",
    "MessageCodec",
    "ProtocolError",
    "RegistrationInfo",
    "RegistrationParams",
    "SendError",
    "SocketError",
    "TransportError",
    "UnsupportedScheme",
    "connect",
    "resolve",
]
