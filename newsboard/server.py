"""A listening server that multiplexes many client connections."""

from __future__ import annotations

import select
import socket
from types import TracebackType

from newsboard.connection import Connection

_BACKLOG = 5


class ServerError(Exception):
    """Raised when the server is used in a way it cannot handle."""


class Server:
    """Listens on a port and keeps track of registered connections."""

    def __init__(self, port: int) -> None:
        self._socket: socket.socket | None = None
        self._connections: list[Connection] = []
        self._pending: socket.socket | None = None

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            sock.bind(("", port))
            bound_port = sock.getsockname()[1]
        except (OSError, OverflowError):
            sock.close()
            return
        if bound_port != port:
            sock.close()
            return
        sock.listen(_BACKLOG)
        self._socket = sock

    def is_ready(self) -> bool:
        """Whether the server is listening."""
        return self._socket is not None

    def wait_for_activity(self) -> Connection | None:
        """Block until something happens.

        Returns a registered connection when its client has sent data, or
        None when a new client is waiting to be registered.
        """
        if self._socket is None:
            raise ServerError("waitForActivity: server not opened")

        readable, _, _ = select.select(
            [self._socket, *self._connections], [], []
        )
        if self._socket in readable:
            try:
                new_socket, _ = self._socket.accept()
            except OSError as exc:
                raise ServerError(
                    "waitForActivity: accept returned error"
                ) from exc
            if self._pending is not None:
                new_socket.close()
                raise ServerError(
                    "waitForActivity: a previous connection is waiting "
                    "to be registered"
                )
            self._pending = new_socket
            return None

        for conn in self._connections:
            if conn in readable:
                return conn
        raise ServerError(
            "waitForActivity: could not find registered connection"
        )

    def register_connection(self, conn: Connection) -> None:
        """Give the waiting client's socket to conn and start watching it."""
        if conn.is_connected():
            raise ServerError("registerConnection: connection is busy")
        if self._pending is None:
            raise ServerError(
                "registerConnection: no client is trying to connect"
            )
        conn._attach(self._pending)
        self._connections.append(conn)
        self._pending = None

    def deregister_connection(self, conn: Connection) -> None:
        """Stop watching conn and close it."""
        self._connections = [c for c in self._connections if c is not conn]
        conn.close()

    def close(self) -> None:
        """Close the listening socket and every registered connection."""
        for conn in self._connections:
            conn.close()
        self._connections.clear()
        if self._pending is not None:
            self._pending.close()
            self._pending = None
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> Server:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()