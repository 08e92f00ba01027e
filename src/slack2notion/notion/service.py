"""Page creation service: create the page, then append its body.

Lets notion_client errors propagate; the event handler decides what to do
with them.
"""

import logging

from notion_client import AsyncClient

from slack2notion.models.notion import DocumentBlock, Status
from slack2notion.notion.blocks import build_children
from slack2notion.notion.models import PageResult
from slack2notion.notion.properties import build_page

logger = logging.getLogger(__name__)


async def create_task_page(
    client: AsyncClient,
    database_id: str,
    title: str,
    blocks: list[DocumentBlock],
    status: Status = Status.NOT_STARTED,
) -> PageResult:
    """Create a page in ``database_id`` and append ``blocks`` as its children.

    Two sequential calls: pages.create, then a single blocks.children.append
    with every encoded block in order.
    """
    created = await client.pages.create(**build_page(database_id, title, status))
    page_id = created["id"]
    logger.info("Created Notion page: %s (%s)", title, page_id)

    children = build_children(blocks)
    await client.blocks.children.append(block_id=page_id, children=children)
    logger.info("Appended %d block(s) to page %s", len(children), page_id)

    return PageResult(page_id=page_id, page_url=created.get("url", ""), title=title)
