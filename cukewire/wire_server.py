"""Socket servers that answer wire protocol requests line by line."""

from __future__ import annotations

import errno
import os
import socket
import stat
from typing import Any, Optional, Protocol, TextIO


class _ProtocolHandler(Protocol):
    def handle(self, request: str) -> str: ...


class SocketServer:
    """Accepts one connection and answers each line it receives."""

    def __init__(self, protocol_handler: _ProtocolHandler) -> None:
        self.protocol_handler = protocol_handler
        self._socket: Optional[socket.socket] = None

    def _listen(self, family: int, address: Any) -> socket.socket:
        if self._socket is not None:
            raise OSError(errno.EALREADY, "Already open")
        sock = socket.socket(family, socket.SOCK_STREAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.bind(address)
            sock.listen(1)
        except BaseException:
            sock.close()
            raise
        self._socket = sock
        return sock

    def _listening_socket(self) -> socket.socket:
        if self._socket is None:
            raise RuntimeError("Server is not listening")
        return self._socket

    def accept_once(self) -> None:
        """Wait for one client and serve it until it disconnects."""
        connection, _ = self._listening_socket().accept()
        with connection, connection.makefile(
            "rw", encoding="utf-8", errors="replace", newline="\n"
        ) as stream:
            self.process_stream(stream)

    def process_stream(self, stream: TextIO) -> None:
        """Answer every line read from ``stream`` with one line written to it."""
        for line in iter(stream.readline, ""):
            request = line[:-1] if line.endswith("\n") else line
            stream.write(self.protocol_handler.handle(request) + "\n")
            stream.flush()

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None

    def __enter__(self) -> SocketServer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class TCPSocketServer(SocketServer):
    """Serves over TCP."""

    def listen(self, host: str = "127.0.0.1", port: int = 0) -> None:
        """Listen on ``host`` and ``port``; port 0 picks an ephemeral port."""
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = self._listen(family, (host, port))
        sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

    def listen_endpoint(self) -> tuple[str, int]:
        host, port = self._listening_socket().getsockname()[:2]
        return host, port


class UnixSocketServer(SocketServer):
    """Serves over a Unix domain socket, removing the socket file on close."""

    def listen(self, unix_path: str | os.PathLike) -> None:
        path = os.fspath(unix_path)
        try:
            if stat.S_ISSOCK(os.stat(path).st_mode):
                os.remove(path)
        except FileNotFoundError:
            pass
        self._listen(socket.AF_UNIX, path)

    def listen_endpoint(self) -> str:
        return self._listening_socket().getsockname()

    def close(self) -> None:
        if self._socket is None:
            return
        path = self._socket.getsockname()
        super().close()
        if isinstance(path, str) and path and not path.startswith("\0"):
            try:
                os.remove(path)
            except FileNotFoundError:
                pass