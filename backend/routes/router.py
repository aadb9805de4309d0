"""Route table, dispatch and the full gate-dispatch-write pipeline."""

import logging
from typing import Callable, Optional, Tuple

import policy
from settings import ServerSettings, get_settings
from wire import HTTPError, NotFound, Request, RouteResult, write_error, write_response

from .ask import PREFIX as ASK_PREFIX, ask
from .pages import ASSET_PREFIX, asset, index
from .service import health, version

logger = logging.getLogger("xenon.routes")

Handler = Callable[[Request, Optional[ServerSettings]], RouteResult]


def _is_index(path: str) -> bool:
    return path == "/" or path.startswith("/index")


# Checked in order; first match wins.
ROUTES: Tuple[Tuple[str, Callable[[str], bool], Handler], ...] = (
    ("index", _is_index, index),
    ("ask", lambda p: p.startswith(ASK_PREFIX), ask),
    ("asset", lambda p: p.startswith(ASSET_PREFIX), asset),
    ("health", lambda p: p == "/health", health),
    ("version", lambda p: p == "/version", version),
)


def resolve(path: str) -> Optional[Tuple[str, Handler]]:
    for name, matches, handler in ROUTES:
        if matches(path):
            return name, handler
    return None


def dispatch(request: Request, settings: Optional[ServerSettings] = None) -> RouteResult:
    """Route a validated request; HTTPError becomes an empty-bodied status."""
    try:
        route = resolve(request.path)
        if route is None:
            raise NotFound(f"no route for {request.path[:64]}")
        return route[1](request, settings)
    except HTTPError as exc:
        return RouteResult(status=exc.status_code)


def handle_request(
    request: Request,
    settings: Optional[ServerSettings] = None,
) -> Tuple[bytes, RouteResult]:
    settings = settings or get_settings()
    policy.apply_latency(settings)
    try:
        policy.check(request, settings)
    except HTTPError as exc:
        logger.info("rejected %s %s: %s", request.method[:16], request.path[:64], exc.detail)
        return write_error(exc), RouteResult(status=exc.status_code)
    result = dispatch(request, settings)
    return write_response(result.status, result.body, result.content_type), result
