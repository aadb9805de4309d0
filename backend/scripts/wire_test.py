"""Request parser and response writer checks."""

import io

from wire import (
    DEFAULT_REQUEST,
    MalformedRequest,
    NotFound,
    Request,
    parse_request,
    sniff_content_type,
    write_error,
    write_response,
)

from test_utils import split_response


def _parse(raw: bytes, max_body_bytes: int = 65536) -> Request:
    return parse_request(io.BytesIO(raw), max_body_bytes)


def test_get_with_query():
    req = _parse(b"GET /ask?q=winning%20big HTTP/1.1\r\nHost: x\r\n\r\n")
    assert req == Request(method="GET", path="/ask", query="q=winning%20big", body=None)


def test_query_split_on_first_question_mark_only():
    req = _parse(b"GET /ask?q=a?b HTTP/1.1\r\n\r\n")
    assert req.path == "/ask"
    assert req.query == "q=a?b"


def test_empty_stream_yields_default_request():
    assert _parse(b"") == DEFAULT_REQUEST
    assert _parse(b"\r\n") == DEFAULT_REQUEST
    assert DEFAULT_REQUEST == Request("GET", "/", "", None)


def test_method_only_request_line_keeps_root_path():
    req = _parse(b"GET\r\n\r\n")
    assert req.method == "GET"
    assert req.path == "/"


def test_trailer_tokens_are_ignored():
    req = _parse(b"GET /health HTTP/1.1 extra junk\r\n\r\n")
    assert req.path == "/health"
    assert req.query == ""


def test_post_body_read_by_content_length_and_trimmed():
    body = b"  q=make+a+deal  "
    raw = b"POST /ask HTTP/1.1\r\nCONTENT-LENGTH: %d\r\n\r\n" % len(body) + body + b"trailing"
    req = _parse(raw)
    assert req.method == "POST"
    assert req.body == "q=make+a+deal"


def test_post_without_content_length_has_empty_body():
    req = _parse(b"POST /ask HTTP/1.1\r\nHost: x\r\n\r\nq=hello")
    assert req.body == ""


def test_post_body_capped_at_max_body_bytes():
    raw = b"POST /ask HTTP/1.1\r\nContent-Length: 10\r\n\r\nq=abcdefgh"
    assert _parse(raw, max_body_bytes=4).body == "q=ab"


def test_truncated_post_body_keeps_what_arrived():
    raw = b"POST /ask HTTP/1.1\r\nContent-Length: 50\r\n\r\nq=short"
    assert _parse(raw).body == "q=short"


def test_bad_content_length_is_ignored():
    raw = b"POST /ask HTTP/1.1\r\nContent-Length: lots\r\n\r\nq=x"
    assert _parse(raw).body == ""


def test_read_failure_yields_default_request():
    class Broken:
        def readline(self, limit=-1):
            raise OSError("connection reset")

    assert parse_request(Broken()) == DEFAULT_REQUEST


def test_non_utf8_bytes_do_not_raise():
    req = _parse(b"GET /\xff\xfe HTTP/1.1\r\n\r\n")
    assert req.method == "GET"
    assert req.path.startswith("/")


def test_sniff_content_type():
    assert sniff_content_type(b'{"a": 1}').startswith("application/json")
    assert sniff_content_type(b"\n  <!DOCTYPE html><html>").startswith("text/html")
    assert sniff_content_type(b"x" * 120 + b"<!doctype html>").startswith("text/plain")
    assert sniff_content_type(b"hello").startswith("text/plain")


def test_write_response_has_exact_length_and_close():
    body = '{"reply": "café"}'.encode("utf-8")
    status, headers, out_body = split_response(write_response(200, body))
    assert status == 200
    assert headers["content-length"] == str(len(body))
    assert headers["connection"] == "close"
    assert headers["content-type"] == "application/json; charset=utf-8"
    assert out_body == body


def test_explicit_content_type_wins_over_sniffing():
    _, headers, _ = split_response(write_response(200, b"body{}", "text/css; charset=utf-8"))
    assert headers["content-type"] == "text/css; charset=utf-8"


def test_error_responses_have_empty_body():
    raw = write_error(NotFound("nope"))
    assert raw.startswith(b"HTTP/1.1 404 Not Found\r\n")
    status, headers, body = split_response(raw)
    assert status == 404
    assert headers["content-length"] == "0"
    assert "content-type" not in headers
    assert body == b""

    assert write_error(MalformedRequest()).startswith(b"HTTP/1.1 400 Bad Request\r\n")


def test_overlong_request_line_is_flagged():
    raw = b"GET /" + b"a" * 9000 + b" HTTP/1.1\r\n\r\n"
    req = _parse(raw)
    assert req.malformed
    assert len(req.path) < 9000


def test_overlong_header_is_flagged_and_keeps_request_line():
    raw = (
        b"POST /ask HTTP/1.1\r\nX-Big: " + b"a" * 9000
        + b"\r\nContent-Length: 3\r\n\r\nq=x"
    )
    req = _parse(raw)
    assert req.malformed
    assert (req.method, req.path) == ("POST", "/ask")


def test_line_just_under_limit_is_not_flagged():
    raw = b"GET /" + b"a" * 8000 + b" HTTP/1.1\r\n\r\n"
    req = _parse(raw)
    assert not req.malformed
    assert req.path == "/" + "a" * 8000
