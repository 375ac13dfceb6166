"""A UDP transport to a BMC, with address defaulting and timeouts."""

from __future__ import annotations

import socket
import time

DEFAULT_PORT = 623
RECEIVE_BUFFER_SIZE = 512


def normalise_address(addr: str) -> str:
    """Add the default IPMI port (623) to an address that lacks one.

    The address is of the form IP[:port]; IPv6 literals must be enclosed in
    square brackets.
    """
    if ":" not in addr or addr.endswith("]"):
        return f"{addr}:{DEFAULT_PORT}"
    return addr


def _split_host_port(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {addr!r}")
    if host.startswith("["):
        if not host.endswith("]"):
            raise ValueError(f"missing ']' in address {addr!r}")
        host = host[1:-1]
    elif ":" in host:
        raise ValueError(f"too many colons in address {addr!r}")
    try:
        port_number = int(port)
    except ValueError:
        raise ValueError(f"invalid port in address {addr!r}") from None
    if not 0 <= port_number <= 0xFFFF:
        raise ValueError(f"invalid port in address {addr!r}")
    return host, port_number


def _resolve(host: str, port: int) -> tuple[int, tuple]:
    infos = socket.getaddrinfo(host or None, port, type=socket.SOCK_DGRAM)
    if not infos:
        raise OSError(f"no addresses found for {host!r}")
    # IPv4 is preferred to IPv6; only the first address is used
    infos.sort(key=lambda info: info[0] != socket.AF_INET)
    family, _, _, _, sockaddr = infos[0]
    return family, sockaddr


class Transport:
    """A connected UDP socket for exchanging packets with a single BMC.

    Access must be serialised: a request and its response are not matched
    other than by order. Prefer IP literals to hostnames, as the name is
    resolved only once.
    """

    def __init__(self, addr: str) -> None:
        host, port = _split_host_port(normalise_address(addr))
        family, sockaddr = _resolve(host, port)
        sock = socket.socket(family, socket.SOCK_DGRAM)
        try:
            sock.connect(sockaddr)
        except OSError:
            sock.close()
            raise
        self._sock = sock

    def address(self) -> tuple[str, int]:
        """The remote (host, port), always including the port."""
        peer = self._sock.getpeername()
        return peer[0], peer[1]

    def send(self, data: bytes, timeout: float | None = None) -> bytes:
        """Send a packet and block until a reply packet arrives, returning it.

        ``timeout`` bounds the whole exchange in seconds; None waits forever.
        Raises TimeoutError if it expires, or OSError on a network error.
        """
        data = bytes(data)
        deadline = None if timeout is None else time.monotonic() + timeout

        self._sock.settimeout(self._remaining(deadline))
        written = self._sock.send(data)
        if written != len(data):
            raise OSError(f"wrote incomplete message ({written}/{len(data)} bytes)")

        self._sock.settimeout(self._remaining(deadline))
        return self._sock.recv(RECEIVE_BUFFER_SIZE)

    @staticmethod
    def _remaining(deadline: float | None) -> float | None:
        if deadline is None:
            return None
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TimeoutError("deadline exceeded")
        return remaining

    def close(self) -> None:
        """Shut down the socket, rendering the transport unusable."""
        self._sock.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()