"""Slack event dispatch and background page creation."""

import logging

from fastapi import BackgroundTasks
from fastapi.responses import JSONResponse

from slack2notion.config import Settings
from slack2notion.models.slack import CallbackEventBody, ChallengeEventBody, UnknownEventBody
from slack2notion.notion.client import create_notion_client
from slack2notion.parameters import fetch_parameters
from slack2notion.pipeline import add_task_to_notion

logger = logging.getLogger(__name__)


def handle_slack_event(
    body: ChallengeEventBody | CallbackEventBody | UnknownEventBody,
    background_tasks: BackgroundTasks,
    settings: Settings,
) -> JSONResponse:
    """Dispatch a parsed Slack request body based on its type.

    - url_verification: return the challenge token
    - event_callback: schedule page creation in the background
    - anything else: acknowledge with 200
    """
    if isinstance(body, ChallengeEventBody):
        return JSONResponse({"challenge": body.challenge})

    if isinstance(body, CallbackEventBody):
        logger.info("Dispatching event %s", body.event_id)
        background_tasks.add_task(process_event_callback, body, settings)
        return JSONResponse({"ok": True})

    logger.warning("Unknown event type: %s", body.type)
    return JSONResponse({"ok": True})


async def process_event_callback(body: CallbackEventBody, settings: Settings) -> None:
    """Create a Notion page for one event_callback.

    Configuration errors propagate. Anything raised while flattening the
    event or calling Notion is logged and swallowed: Slack has already been
    acknowledged and must not be made to retry.
    """
    parameters = await fetch_parameters(settings.require_parameter_store_id())
    try:
        async with create_notion_client(parameters.token) as client:
            result = await add_task_to_notion(client, parameters.database_id, body)
    except Exception as exc:
        logger.error("Failed to add event %s to Notion: %s", body.event_id, exc, exc_info=True)
        return

    if result is None:
        logger.info("Nothing to create for event %s", body.event_id)
    else:
        logger.info("Event %s -> %s", body.event_id, result.page_url or result.page_id)
