import json
import socket
from datetime import datetime, timedelta, timezone

import check_status
import telemetry
from settings import BUILD_ID, INSTANCE_ID


def test_append_and_summarize(isolated_telemetry):
    telemetry.append_request_telemetry("request", {"status": 200, "category": "deal"})
    telemetry.append_request_telemetry("request", {"status": 400})
    telemetry.append_request_telemetry("transport_failure", {"error": "reset"})

    summary = telemetry.read_request_telemetry_summary(hours=1, limit=2)
    assert summary["file_exists"] is True
    assert summary["counts"] == {"request": 2, "transport_failure": 1}
    assert summary["status_counts"] == {"200": 1, "400": 1}
    assert summary["category_counts"] == {"deal": 1}
    assert summary["reject_rate_percent"] == 50.0
    assert summary["transport_failure_count"] == 1
    assert summary["internal_fault_count"] == 0
    assert [r["event"] for r in summary["recent"]] == ["request", "transport_failure"]


def test_disabled_telemetry_writes_nothing(isolated_telemetry, monkeypatch):
    monkeypatch.setenv("REQUEST_TELEMETRY_ENABLED", "off")
    telemetry.append_request_telemetry("request", {"status": 200})
    assert not isolated_telemetry.exists()
    summary = telemetry.read_request_telemetry_summary()
    assert summary["telemetry_enabled"] is False
    assert summary["counts"] == {}


def test_bad_and_stale_lines(isolated_telemetry):
    stale = datetime.now(timezone.utc) - timedelta(hours=48)
    with open(isolated_telemetry, "w", encoding="utf-8") as f:
        f.write("not json\n\n")
        f.write(json.dumps({"ts": stale.isoformat(), "event": "request", "payload": {}}) + "\n")
    telemetry.append_request_telemetry("internal_fault", {"error": "boom"})

    summary = telemetry.read_request_telemetry_summary(hours=24)
    assert summary["parse_errors"] == 1
    assert summary["counts"] == {"internal_fault": 1}
    assert summary["internal_fault_count"] == 1
    assert summary["reject_rate_percent"] == 0.0


def test_unwritable_path_does_not_raise(monkeypatch, tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    monkeypatch.setattr(telemetry, "REQUEST_TELEMETRY_PATH", blocker / "nested.log")
    telemetry.append_request_telemetry("request", {"status": 200})


def test_check_status_reports_running_server(live_server, monkeypatch, capsys):
    host, port = live_server
    telemetry.append_request_telemetry("request", {"status": 200, "category": "money"})
    monkeypatch.setenv("XENON_BASE_URL", f"http://{host}:{port}/")

    assert check_status.main() == 0
    out = capsys.readouterr().out
    assert INSTANCE_ID in out
    assert BUILD_ID in out
    assert '"money": 1' in out


def test_check_status_unreachable(monkeypatch, capsys):
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        free_port = sock.getsockname()[1]
    monkeypatch.setenv("XENON_BASE_URL", f"http://127.0.0.1:{free_port}")

    assert check_status.main() == 1
    assert "unreachable" in capsys.readouterr().out
