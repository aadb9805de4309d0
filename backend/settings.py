"""Runtime settings and build identity for the advisor service."""

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load backend/.env early so overrides are honored consistently.
env_path = Path(__file__).resolve().parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)


APP_NAME = "xenon-advisor"
BUILD_ID = "xv47-K9xQ2mN7pL4vR1w"
API_VERSION = "1"
INSTANCE_ID = "0xa7f2c4e8b1d9063f"

DEFAULT_PORT = 2847
DEFAULT_SELECTOR_SEED = 0x8D2F4A1C9E7B3065


def _env_int(name: str, default: int, min_value: int, max_value: int) -> int:
    raw = os.getenv(name)
    try:
        value = int(raw, 0) if raw not in (None, "") else default
    except Exception:
        value = default
    return max(min_value, min(max_value, value))


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value not in (None, "") else default


class ServerSettings(BaseModel):
    """Listener, limits and selector configuration."""

    model_config = ConfigDict(frozen=True)

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    max_input_chars: int = 2000
    max_reply_chars: int = 1500
    max_path_length: int = 2048
    max_body_bytes: int = 65536
    gate_delay_min_ms: int = 10
    gate_delay_max_ms: int = 60
    selector_seed: int = DEFAULT_SELECTOR_SEED
    log_level: str = "INFO"


def load_settings(**overrides) -> ServerSettings:
    """Build settings from the environment; keyword overrides win."""
    delay_min = _env_int("GATE_DELAY_MIN_MS", 10, 0, 5000)
    values = {
        "host": _env_str("XENON_HOST", "127.0.0.1"),
        "port": _env_int("XENON_PORT", DEFAULT_PORT, 0, 65535),
        "max_input_chars": _env_int("MAX_INPUT_CHARS", 2000, 4, 100000),
        "max_reply_chars": _env_int("MAX_REPLY_CHARS", 1500, 1, 100000),
        "max_path_length": _env_int("MAX_PATH_LENGTH", 2048, 1, 65536),
        "max_body_bytes": _env_int("MAX_BODY_BYTES", 65536, 0, 10 * 1024 * 1024),
        "gate_delay_min_ms": delay_min,
        "gate_delay_max_ms": _env_int("GATE_DELAY_MAX_MS", 60, delay_min, 5000),
        "selector_seed": _env_int("SELECTOR_SEED", DEFAULT_SELECTOR_SEED, 0, 2**64 - 1),
        "log_level": _env_str("LOG_LEVEL", "INFO").upper(),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ServerSettings(**values)


@lru_cache(maxsize=1)
def get_settings() -> ServerSettings:
    return load_settings()
