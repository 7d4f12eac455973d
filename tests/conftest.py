from __future__ import annotations

import socket
import struct
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Callable, Iterator

import pytest

Handler = Callable[[BaseHTTPRequestHandler], None]

METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")


def respond(request: BaseHTTPRequestHandler, status: int = 200) -> None:
    request.send_response(status)
    request.send_header("Content-Length", "0")
    request.end_headers()


def reset_connection(request: BaseHTTPRequestHandler) -> None:
    # SO_LINGER 0 makes close() send RST instead of FIN.
    request.connection.setsockopt(socket.SOL_SOCKET, socket.SO_LINGER, struct.pack("ii", 1, 0))
    request.connection.close()
    request.close_connection = True


def _make_handler_class(handler: Handler) -> type[BaseHTTPRequestHandler]:
    class _Handler(BaseHTTPRequestHandler):
        protocol_version = "HTTP/1.1"

        def _dispatch(self) -> None:
            handler(self)

        def log_message(self, format: str, *args: object) -> None:
            pass

    for method in METHODS:
        setattr(_Handler, f"do_{method}", _Handler._dispatch)
    return _Handler


class _QuietServer(ThreadingHTTPServer):
    daemon_threads = True

    def handle_error(self, request: object, client_address: object) -> None:
        # Clients hang up on slow handlers during timeout tests.
        pass


@pytest.fixture
def http_server() -> Iterator[Callable[[Handler], str]]:
    """Start local HTTP servers; returns a factory yielding each server's URL."""
    servers: list[tuple[ThreadingHTTPServer, threading.Thread]] = []

    def start(handler: Handler) -> str:
        server = _QuietServer(("127.0.0.1", 0), _make_handler_class(handler))
        thread = threading.Thread(target=server.serve_forever, kwargs={"poll_interval": 0.05}, daemon=True)
        thread.start()
        servers.append((server, thread))
        host, port = server.server_address[:2]
        return f"http://{host}:{port}/"

    yield start

    for server, thread in servers:
        server.shutdown()
        server.server_close()
        thread.join(timeout=2)


def cut_off_count(errors: dict[str, int]) -> int:
    """Outcomes for requests still in flight when the run deadline hit."""
    from loadprobe.loadgen import DEADLINE_EXCEEDED

    return sum(count for message, count in errors.items() if message.endswith(DEADLINE_EXCEEDED))
