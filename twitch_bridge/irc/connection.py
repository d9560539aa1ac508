"""Line-oriented byte stream to the chat server.

``SocketConnection`` never blocks after ``open()``: readiness is checked with
a zero-timeout ``select`` and only complete lines are handed out. Incoming
lines may end in LF or CRLF; outgoing lines always end in CRLF.
"""

from __future__ import annotations

import select
import socket
from typing import Protocol

from ..constants import IRC_HOST, IRC_PORT, RECV_BUFFER_SIZE
from ..errors.internal import NetworkError

LINE_TERMINATOR = b"\r\n"
NEWLINE = b"\n"
# Unterminated input beyond this many recv sizes is discarded
MAX_BUFFERED_CHUNKS = 4


class StreamConnection(Protocol):
    """What the session needs from a chat transport."""

    def open(self) -> None:
        """Establish the connection. Raises ``NetworkError`` on failure."""
        ...

    def send_line(self, text: str) -> None:
        """Write one line and flush it. Raises ``NetworkError`` on failure."""
        ...

    def is_alive(self) -> bool:
        ...

    def has_line(self) -> bool:
        """Return True if a complete line can be read without blocking."""
        ...

    def read_line(self) -> str:
        """Return the next complete line, or "" if none is buffered."""
        ...

    def close(self) -> None:
        ...


class SocketConnection:
    """Plain TCP implementation of :class:`StreamConnection`."""

    def __init__(
        self,
        host: str = IRC_HOST,
        port: int = IRC_PORT,
        *,
        recv_size: int = RECV_BUFFER_SIZE,
    ) -> None:
        self.host = host
        self.port = port
        self.recv_size = recv_size
        self.sock: socket.socket | None = None
        self._buffer = bytearray()
        self._closed = True

    def open(self) -> None:
        try:
            # No timeout: a hung handshake blocks the caller
            self.sock = socket.create_connection((self.host, self.port))
        except OSError as e:
            self.sock = None
            self._closed = True
            raise NetworkError(
                f"Could not connect to {self.host}:{self.port}: {e}",
                data={"host": self.host, "port": self.port},
            ) from e
        self._buffer.clear()
        self._closed = False

    def send_line(self, text: str) -> None:
        if self.sock is None or self._closed:
            raise NetworkError("send on closed connection", data={"line": text})
        try:
            self.sock.sendall(text.encode("utf-8") + LINE_TERMINATOR)
        except OSError as e:
            self._mark_dead()
            raise NetworkError(f"send failed: {e}") from e

    def is_alive(self) -> bool:
        return self.sock is not None and not self._closed

    def has_line(self) -> bool:
        if NEWLINE in self._buffer:
            return True
        self._poll()
        return NEWLINE in self._buffer

    def read_line(self) -> str:
        if NEWLINE not in self._buffer:
            return ""
        raw, _, rest = bytes(self._buffer).partition(NEWLINE)
        self._buffer[:] = rest
        if raw.endswith(b"\r"):
            raw = raw[:-1]
        return raw.decode("utf-8", errors="replace")

    def close(self) -> None:
        if self.sock is not None:
            try:
                self.sock.close()
            except OSError:
                pass
        self.sock = None
        self._closed = True
        self._buffer.clear()

    def _poll(self) -> None:
        if self.sock is None or self._closed:
            return
        try:
            readable, _, _ = select.select([self.sock], [], [], 0)
            if not readable:
                return
            chunk = self.sock.recv(self.recv_size)
        except (OSError, ValueError):
            self._mark_dead()
            return
        if not chunk:
            # Peer closed
            self._mark_dead()
            return
        self._buffer.extend(chunk)
        if NEWLINE not in self._buffer and len(self._buffer) > self.recv_size * MAX_BUFFERED_CHUNKS:
            self._buffer.clear()

    def _mark_dead(self) -> None:
        self._closed = True


__all__ = ["LINE_TERMINATOR", "MAX_BUFFERED_CHUNKS", "NEWLINE", "SocketConnection", "StreamConnection"]
