"""Slack webhook router."""

import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from fastapi.responses import JSONResponse

from slack2notion.models.slack import MalformedEventError, parse_event_body
from slack2notion.slack.handlers import handle_slack_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["slack"])

RETRY_HEADER = "X-Slack-Retry-Num"


def is_slack_retry(request: Request, allowed: int = 0) -> bool:
    """True when Slack has retried the delivery more than ``allowed`` times."""
    try:
        retried = int(request.headers.get(RETRY_HEADER, "0"))
    except ValueError:
        return False
    return retried > allowed


@router.post("/slack/events")
async def slack_events(request: Request, background_tasks: BackgroundTasks) -> JSONResponse:
    """Receive Slack webhook events.

    Slack retries (X-Slack-Retry-Num header) are acknowledged immediately
    to prevent duplicate pages.
    """
    if is_slack_retry(request):
        logger.info("Ignore Slack retry: %s", request.headers.get(RETRY_HEADER))
        return JSONResponse({"ok": True})

    try:
        body = parse_event_body(await request.body())
    except MalformedEventError as exc:
        logger.error("Malformed Slack request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    logger.info("type: %s", body.type)
    return handle_slack_event(body, background_tasks, request.app.state.settings)
