"""Slack ingress: webhook routing and event dispatch."""

from slack2notion.slack.handlers import handle_slack_event, process_event_callback
from slack2notion.slack.router import router

__all__ = [
    "handle_slack_event",
    "process_event_callback",
    "router",
]
