"""Socket acceptor and per-connection worker.

One thread per accepted connection. The acceptor only accepts and hands
off; parsing, the gate delay, dispatch and the write all run on the
connection's own thread. No read timeouts are set, so a silent client
holds its worker until it disconnects.
"""

import logging
import socket
import threading
import time
from typing import Optional, Tuple

from routes import handle_request
from settings import ServerSettings, get_settings
from telemetry import append_request_telemetry
from wire import parse_request

logger = logging.getLogger("xenon.server")

LISTEN_BACKLOG = 128


def handle_connection(conn: socket.socket, addr, settings: ServerSettings) -> None:
    """Serve one request on *conn* and always close it."""
    t0 = time.perf_counter()
    stream = None
    try:
        stream = conn.makefile("rb")
        request = parse_request(stream, settings.max_body_bytes)
        data, result = handle_request(request, settings)
        conn.sendall(data)
        ms = (time.perf_counter() - t0) * 1000
        logger.info("%s %s -> %s (%.0fms)", request.method[:16], request.path[:128], result.status, ms)
        append_request_telemetry(
            "request",
            {
                "method": request.method[:16],
                "path": request.path[:128],
                "status": result.status,
                "category": result.category,
                "ms": round(ms, 1),
            },
        )
    except OSError as exc:
        logger.warning("transport failure from %s: %s", addr, exc)
        append_request_telemetry("transport_failure", {"error": str(exc)[:200]})
    except Exception as exc:
        logger.exception("internal fault while serving %s", addr)
        append_request_telemetry("internal_fault", {"error": str(exc)[:200]})
    finally:
        if stream is not None:
            try:
                stream.close()
            except OSError:
                pass
        try:
            conn.shutdown(socket.SHUT_WR)
        except OSError:
            pass
        conn.close()


class AdvisorServer:
    """Owns the listening socket and the accept loop."""

    def __init__(self, settings: Optional[ServerSettings] = None):
        self.settings = settings or get_settings()
        self._sock: Optional[socket.socket] = None
        self._stopping = threading.Event()

    @property
    def server_address(self) -> Tuple[str, int]:
        if self._sock is None:
            raise RuntimeError("Server is not bound")
        host, port = self._sock.getsockname()[:2]
        return host, port

    def bind(self) -> Tuple[str, int]:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((self.settings.host, self.settings.port))
        sock.listen(LISTEN_BACKLOG)
        self._sock = sock
        return self.server_address

    def serve_forever(self) -> None:
        """Accept until shutdown(); any other accept error is logged and raised."""
        if self._sock is None:
            self.bind()
        host, port = self.server_address
        logger.info("listening on http://%s:%s", host, port)
        while not self._stopping.is_set():
            try:
                conn, addr = self._sock.accept()
            except OSError:
                if self._stopping.is_set():
                    break
                logger.exception("accept failed; stopping acceptor")
                raise
            worker = threading.Thread(
                target=handle_connection,
                args=(conn, addr, self.settings),
                name=f"conn-{addr[1] if len(addr) > 1 else '?'}",
                daemon=True,
            )
            worker.start()
        logger.info("acceptor stopped")

    def shutdown(self) -> None:
        self._stopping.set()
        if self._sock is not None:
            try:
                self._sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            self._sock.close()
