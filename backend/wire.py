"""Hand-rolled HTTP/1.1 subset: request parsing and response serialization.

The parser reads from a binary stream (``socket.makefile("rb")`` in the
server, ``io.BytesIO`` in tests) and never raises. The writer sniffs the
content type from the body unless one is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import BinaryIO, Optional

logger = logging.getLogger("xenon.wire")

MAX_LINE_BYTES = 8192
MAX_HEADER_LINES = 100
SNIFF_WINDOW = 100

_CRLF = b"\r\n"

REASON_PHRASES = {
    200: "OK",
    400: "Bad Request",
    404: "Not Found",
    500: "Internal Server Error",
}


class HTTPError(Exception):
    """Request-level failure mapped to a status line with an empty body."""

    status_code = 500

    def __init__(self, detail: str = ""):
        super().__init__(detail or REASON_PHRASES.get(self.status_code, "Error"))
        self.detail = detail


class MalformedRequest(HTTPError):
    status_code = 400


class NotFound(HTTPError):
    status_code = 404


@dataclass(frozen=True)
class Request:
    method: str = "GET"
    path: str = "/"
    query: str = ""
    body: Optional[str] = None
    # set when a request or header line overran MAX_LINE_BYTES
    malformed: bool = False


DEFAULT_REQUEST = Request()


@dataclass(frozen=True)
class RouteResult:
    status: int
    body: bytes = b""
    content_type: Optional[str] = None
    category: Optional[str] = None


class _LineTooLong(Exception):
    pass


def _read_line(stream: BinaryIO) -> Optional[str]:
    raw = stream.readline(MAX_LINE_BYTES)
    if not raw:
        return None
    if len(raw) >= MAX_LINE_BYTES and not raw.endswith(b"\n"):
        raise _LineTooLong(len(raw))
    return raw.decode("utf-8", errors="replace").rstrip("\r\n")


def _read_headers(stream: BinaryIO) -> dict[str, str]:
    headers: dict[str, str] = {}
    for _ in range(MAX_HEADER_LINES):
        line = _read_line(stream)
        if line is None or not line.strip():
            break
        name, sep, value = line.partition(":")
        if not sep:
            continue
        headers[name.strip().lower()] = value.strip()
    return headers


def _read_body(stream: BinaryIO, headers: dict[str, str], max_body_bytes: int) -> str:
    try:
        length = int(headers.get("content-length", "0") or "0")
    except ValueError:
        length = 0
    length = max(0, min(length, max_body_bytes))
    if not length:
        return ""
    chunks = []
    remaining = length
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks).decode("utf-8", errors="replace").strip()


def parse_request(stream: BinaryIO, max_body_bytes: int = 65536) -> Request:
    """Read one request from *stream*; any failure yields DEFAULT_REQUEST.

    An over-long request or header line yields a request flagged
    ``malformed`` so the gate can reject it.
    """
    request = DEFAULT_REQUEST
    try:
        line = _read_line(stream)
        if line is None or not line.strip():
            return DEFAULT_REQUEST
        parts = line.split(None, 2)
        method = parts[0]
        target = parts[1] if len(parts) > 1 else "/"
        path, _, query = target.partition("?")
        request = Request(method=method, path=path, query=query)

        headers = _read_headers(stream)
        body = None
        if method == "POST":
            body = _read_body(stream, headers, max_body_bytes)
        return Request(method=method, path=path, query=query, body=body)
    except _LineTooLong as exc:
        logger.debug("line too long: %s bytes", exc)
        return replace(request, malformed=True)
    except Exception as exc:
        logger.debug("request parse failed: %s", exc)
        return DEFAULT_REQUEST


def sniff_content_type(body: bytes) -> str:
    if body.startswith(b"{"):
        return "application/json; charset=utf-8"
    if b"<!doctype" in body[:SNIFF_WINDOW].lower():
        return "text/html; charset=utf-8"
    return "text/plain; charset=utf-8"


def write_response(status: int, body: bytes = b"", content_type: Optional[str] = None) -> bytes:
    r"""Serialize a response.

    Wire format::

        HTTP/1.1 200 OK\r\n
        Content-Type: <type>\r\n
        Content-Length: N\r\n
        Connection: close\r\n
        \r\n
        [body]
    """
    reason = REASON_PHRASES.get(status, "Unknown")
    lines = [f"HTTP/1.1 {status} {reason}"]
    if body:
        lines.append(f"Content-Type: {content_type or sniff_content_type(body)}")
    lines.append(f"Content-Length: {len(body)}")
    lines.append("Connection: close")
    head = _CRLF.join(line.encode("latin-1") for line in lines)
    return head + _CRLF + _CRLF + body


def write_error(exc: HTTPError) -> bytes:
    return write_response(exc.status_code)
