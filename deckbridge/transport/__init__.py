"""Connection establishment and the typed duplex socket."""

from deckbridge.transport.address import LOOPBACK_HOST, Endpoint, resolve
from deckbridge.transport.connect import Connector, ConnectState, connect
from deckbridge.transport.socket import CommandSender, DeckReceiver, DeckSender, DeckSocket

__all__ = [
    "CommandSender",
    "ConnectState",
    "Connector",
    "DeckReceiver",
    "DeckSender",
    "DeckSocket",
    "Endpoint",
    "LOOPBACK_HOST",
    "connect",
    "resolve",
]
