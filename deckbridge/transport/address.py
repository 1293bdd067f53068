"""Turn a port number or a ws:// URL into a connectable endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from deckbridge.errors import AddressError, UnsupportedScheme

SUPPORTED_SCHEME = "ws"
DEFAULT_PORT = 80
LOOPBACK_HOST = "localhost"


@dataclass(frozen=True, slots=True)
class Endpoint:
    """Where to connect. ``path`` is the resource of an explicit URL, empty otherwise."""

    scheme: str
    host: str
    port: int
    path: str = ""

    @property
    def url(self) -> str:
        host = f"[{self.host}]" if ":" in self.host else self.host
        return f"{self.scheme}://{host}:{self.port}{self.path}"

    def __str__(self) -> str:
        return self.url


def _check_port(port: int, address: object) -> int:
    if not 0 <= port <= 65535:
        raise AddressError(f"port out of range: {port}", address=address)
    return port


def resolve(address: int | str | Endpoint, *, loopback_host: str = LOOPBACK_HOST) -> Endpoint:
    """
    Resolve caller input into an :class:`Endpoint` without any I/O.

    A bare port (an int, or a string of digits) maps to the loopback host; a URL
    is used as given and must use the ``ws`` scheme.
    """
    if isinstance(address, Endpoint):
        if address.scheme != SUPPORTED_SCHEME:
            raise UnsupportedScheme(address.scheme, address=address)
        return address
    if isinstance(address, bool):
        raise AddressError("expected a port number or a URL", address=address)
    if isinstance(address, int):
        return Endpoint(SUPPORTED_SCHEME, loopback_host, _check_port(address, address))
    if not isinstance(address, str) or not address.strip():
        raise AddressError("expected a port number or a URL", address=address)

    text = address.strip()
    if text.isascii() and text.isdecimal():
        return Endpoint(SUPPORTED_SCHEME, loopback_host, _check_port(int(text), address))

    parts = urlsplit(text)
    if not parts.scheme:
        raise AddressError(f"not a URL: {text}", address=address)
    scheme = parts.scheme.lower()
    if scheme != SUPPORTED_SCHEME:
        raise UnsupportedScheme(scheme, address=address)
    try:
        port = parts.port
    except ValueError as exc:
        raise AddressError(f"invalid port in {text}", address=address) from exc
    if not parts.hostname:
        raise AddressError(f"missing host in {text}", address=address)
    path = parts.path
    if parts.query:
        path = f"{path or '/'}?{parts.query}"
    return Endpoint(scheme, parts.hostname, DEFAULT_PORT if port is None else port, path)
