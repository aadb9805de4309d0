"""Ask route: pull the question out of the request and answer it."""

import logging
from typing import Optional

from response_bank import AdvisorEngine, engine_for
from schemas import AskResponse, to_json_bytes
from settings import BUILD_ID, ServerSettings
from text_utils import form_value
from wire import Request, RouteResult

logger = logging.getLogger("xenon.routes")

PREFIX = "/ask"


def extract_question(request: Request) -> str:
    """Body ``q`` first, then query string ``q``; the query string wins."""
    question = ""
    body_value = form_value(request.body or "", "q")
    if body_value is not None:
        question = body_value
    query_value = form_value(request.query, "q")
    if query_value is not None:
        question = query_value
    return question


def ask(
    request: Request,
    settings: Optional[ServerSettings] = None,
    engine: Optional[AdvisorEngine] = None,
) -> RouteResult:
    engine = engine or engine_for(settings)
    question = extract_question(request)
    reply, category, source = engine.reply_with_category(question)
    logger.debug("ask category=%s source=%s", category.value, source)
    payload = AskResponse(reply=reply, build=BUILD_ID)
    return RouteResult(status=200, body=to_json_bytes(payload), category=category.value)
