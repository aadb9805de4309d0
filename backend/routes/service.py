"""Health and version payloads."""

from schemas import HealthResponse, VersionResponse, to_json_bytes
from settings import API_VERSION, APP_NAME, BUILD_ID, INSTANCE_ID
from wire import Request, RouteResult


def health(request: Request, settings=None) -> RouteResult:
    return RouteResult(status=200, body=to_json_bytes(HealthResponse(instance=INSTANCE_ID)))


def version(request: Request, settings=None) -> RouteResult:
    payload = VersionResponse(name=APP_NAME, build=BUILD_ID, api=API_VERSION)
    return RouteResult(status=200, body=to_json_bytes(payload))
