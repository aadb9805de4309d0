import threading

import pytest

import telemetry
from server import AdvisorServer
from settings import ServerSettings


@pytest.fixture(autouse=True)
def isolated_telemetry(tmp_path, monkeypatch):
    path = tmp_path / "request_telemetry.log"
    monkeypatch.setattr(telemetry, "REQUEST_TELEMETRY_PATH", path)
    monkeypatch.setenv("REQUEST_TELEMETRY_ENABLED", "1")
    return path


@pytest.fixture
def fast_settings() -> ServerSettings:
    return ServerSettings(host="127.0.0.1", port=0, gate_delay_min_ms=0, gate_delay_max_ms=0)


@pytest.fixture
def live_server(fast_settings):
    server = AdvisorServer(fast_settings)
    host, port = server.bind()
    thread = threading.Thread(target=server.serve_forever, name="acceptor", daemon=True)
    thread.start()
    try:
        yield host, port
    finally:
        server.shutdown()
        thread.join(timeout=5)
