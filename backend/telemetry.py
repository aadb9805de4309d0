"""Request telemetry: JSONL event logging and a windowed summary reader."""

import json
import os
from collections import deque
from datetime import datetime, timezone, timedelta
from pathlib import Path
from typing import Optional

from text_utils import normalize_whitespace

_BACKEND_DIR = Path(__file__).resolve().parent

REQUEST_TELEMETRY_PATH = _BACKEND_DIR / (
    os.getenv("REQUEST_TELEMETRY_LOG", "request_telemetry.log") or "request_telemetry.log"
)


def telemetry_enabled() -> bool:
    return (os.getenv("REQUEST_TELEMETRY_ENABLED", "1") or "1").strip().lower() in (
        "1", "true", "yes", "on",
    )


def append_request_telemetry(event: str, payload: Optional[dict] = None) -> None:
    if not telemetry_enabled():
        return
    try:
        data = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "event": normalize_whitespace(event or "event"),
            "payload": payload or {},
        }
        REQUEST_TELEMETRY_PATH.parent.mkdir(parents=True, exist_ok=True)
        with open(REQUEST_TELEMETRY_PATH, "a", encoding="utf-8") as f:
            f.write(json.dumps(data, ensure_ascii=False) + "\n")
    except Exception:
        # Telemetry must never break a request.
        pass


def _parse_iso_utc(ts_raw: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(str(ts_raw).replace("Z", "+00:00"))
    except Exception:
        return None


def _bump(counter: dict, key) -> None:
    key = str(key)
    counter[key] = counter.get(key, 0) + 1


def read_request_telemetry_summary(hours: int = 24, limit: int = 6) -> dict:
    h = max(1, min(168, int(hours or 24)))
    n = max(1, min(25, int(limit or 6)))
    now_utc = datetime.now(timezone.utc)
    cutoff = now_utc - timedelta(hours=h)

    counts: dict[str, int] = {}
    status_counts: dict[str, int] = {}
    category_counts: dict[str, int] = {}
    recent: deque = deque(maxlen=n)
    parse_errors = 0
    file_exists = REQUEST_TELEMETRY_PATH.exists()

    if file_exists:
        try:
            with open(REQUEST_TELEMETRY_PATH, "r", encoding="utf-8") as f:
                for line in f:
                    raw = (line or "").strip()
                    if not raw:
                        continue
                    try:
                        item = json.loads(raw)
                    except Exception:
                        parse_errors += 1
                        continue
                    ts = _parse_iso_utc(str(item.get("ts") or ""))
                    if not ts or ts < cutoff:
                        continue
                    event = normalize_whitespace(str(item.get("event") or "event")) or "event"
                    _bump(counts, event)
                    payload = item.get("payload") if isinstance(item.get("payload"), dict) else {}
                    if payload.get("status") is not None:
                        _bump(status_counts, payload["status"])
                    if payload.get("category"):
                        _bump(category_counts, payload["category"])
                    recent.append({"ts": ts.isoformat(), "event": event, "payload": payload})
        except OSError:
            pass

    requests_total = counts.get("request", 0)
    rejected = status_counts.get("400", 0)
    reject_rate = round((rejected / requests_total) * 100.0, 2) if requests_total > 0 else 0.0

    return {
        "status": "ok",
        "now_utc": now_utc.isoformat(),
        "window_hours": h,
        "telemetry_enabled": telemetry_enabled(),
        "file_exists": file_exists,
        "file_path": str(REQUEST_TELEMETRY_PATH.name),
        "counts": counts,
        "status_counts": status_counts,
        "category_counts": category_counts,
        "reject_rate_percent": reject_rate,
        "transport_failure_count": counts.get("transport_failure", 0),
        "internal_fault_count": counts.get("internal_fault", 0),
        "recent": list(recent),
        "parse_errors": parse_errors,
    }
