"""Async Notion client construction.

The token comes from the parameter store per event, so the client is
built explicitly by the caller instead of cached at module level.
"""

from notion_client import AsyncClient


def create_notion_client(token: str) -> AsyncClient:
    """Return an async Notion client authenticated with ``token``.

    See https://developers.notion.com/reference/intro
    """
    return AsyncClient(auth=token)
