"""
Probes a running advisor for health and version, then prints the local
request telemetry summary.
"""

import json
import os
from pathlib import Path

import httpx
from dotenv import load_dotenv

from settings import DEFAULT_PORT
from telemetry import read_request_telemetry_summary


def _env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    return value if value not in (None, "") else default


def main() -> int:
    env_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path=env_path, override=True)
    base = _env("XENON_BASE_URL", f"http://127.0.0.1:{DEFAULT_PORT}").rstrip("/")

    try:
        with httpx.Client(timeout=15.0) as client:
            health = client.get(f"{base}/health")
            health.raise_for_status()
            version = client.get(f"{base}/version")
            version.raise_for_status()
    except httpx.HTTPError as exc:
        print(f"Advisor unreachable at {base}: {exc}")
        return 1

    print("Health:", health.json().get("status"), "instance:", health.json().get("instance"))
    info = version.json()
    print("Version:", info.get("name"), "build:", info.get("build"), "api:", info.get("api"))

    summary = read_request_telemetry_summary(hours=24, limit=5)
    print("Telemetry (24h):")
    print(json.dumps(
        {k: summary[k] for k in ("counts", "status_counts", "category_counts", "reject_rate_percent")},
        ensure_ascii=False,
        indent=2,
    ))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
