"""A byte-oriented connection over a TCP socket."""

from __future__ import annotations

import socket
from types import TracebackType

from newsboard.protocol import ConnectionClosedError


class Connection:
    """One end of a TCP stream, read and written a byte at a time.

    A connection made with no socket is not connected. It can be given one
    by a server when a client is accepted.
    """

    def __init__(self, sock: socket.socket | None = None) -> None:
        self._socket = sock

    @classmethod
    def connect(cls, host: str, port: int) -> Connection:
        """Connect to host on port.

        If the host cannot be resolved or the connection is refused, the
        returned connection reports is_connected() as False.
        """
        try:
            address = socket.gethostbyname(host)
        except (OSError, UnicodeError):
            return cls()
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.connect((address, port))
        except (OSError, OverflowError):
            sock.close()
            return cls()
        return cls(sock)

    def _attach(self, sock: socket.socket) -> None:
        self._socket = sock

    def fileno(self) -> int:
        """The socket's file descriptor, or -1 if not connected."""
        return self._socket.fileno() if self._socket is not None else -1

    def is_connected(self) -> bool:
        """Whether the connection has a socket."""
        return self._socket is not None

    def write(self, byte: int) -> None:
        """Send one byte; only the low eight bits of the value are sent."""
        if self._socket is None:
            raise RuntimeError(
                "Write attempted on a not properly opened connection"
            )
        try:
            self._socket.sendall(bytes((int(byte) & 0xFF,)))
        except OSError as exc:
            raise ConnectionClosedError() from exc

    def read(self) -> int:
        """Receive one byte and return it as an int."""
        if self._socket is None:
            raise RuntimeError(
                "Read attempted on a not properly opened connection"
            )
        try:
            data = self._socket.recv(1)
        except OSError as exc:
            raise ConnectionClosedError() from exc
        if not data:
            raise ConnectionClosedError()
        return data[0]

    def close(self) -> None:
        """Close the socket, if there is one."""
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> Connection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()