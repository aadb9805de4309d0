from .router import ROUTES, dispatch, handle_request, resolve

__all__ = ["ROUTES", "dispatch", "handle_request", "resolve"]
