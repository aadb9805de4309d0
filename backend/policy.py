"""Request gate: artificial latency plus method and path checks."""

import logging
import random
import time
from typing import Optional
from urllib.parse import unquote

from settings import ServerSettings, get_settings
from text_utils import is_printable_path
from wire import MalformedRequest, Request

logger = logging.getLogger("xenon.policy")

ALLOWED_METHODS = frozenset({"GET", "POST"})


def latency_seconds(settings: ServerSettings, rnd: Optional[random.Random] = None) -> float:
    low = max(0, settings.gate_delay_min_ms)
    high = max(low, settings.gate_delay_max_ms)
    if high == low:
        return low / 1000.0
    return (rnd or random).uniform(low, high) / 1000.0


def apply_latency(settings: Optional[ServerSettings] = None) -> float:
    """Sleep on the calling worker thread only; returns the delay applied."""
    delay = latency_seconds(settings or get_settings())
    if delay > 0:
        time.sleep(delay)
    return delay


def check(request: Request, settings: Optional[ServerSettings] = None) -> None:
    settings = settings or get_settings()
    if request.malformed:
        raise MalformedRequest("oversized request line or header")
    if request.method not in ALLOWED_METHODS:
        raise MalformedRequest(f"method not allowed: {request.method[:16]}")
    path = request.path or ""
    if len(path) > settings.max_path_length:
        raise MalformedRequest(f"path too long: {len(path)}")
    decoded = unquote(path)
    if ".." in path or ".." in decoded:
        raise MalformedRequest("path traversal")
    if not (is_printable_path(path) and is_printable_path(decoded)):
        raise MalformedRequest("non-printable path")


def allow(request: Request, settings: Optional[ServerSettings] = None) -> bool:
    try:
        check(request, settings)
    except MalformedRequest as exc:
        logger.info("gate rejected %s: %s", request.method[:16], exc.detail)
        return False
    return True
