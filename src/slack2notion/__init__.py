"""Slack2Notion: turn Slack messages into Notion task pages."""
