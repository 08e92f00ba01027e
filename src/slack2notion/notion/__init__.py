"""Notion output: block encoding and page creation."""

from slack2notion.notion.blocks import build_children, make_block_children, richize, to_rich_text
from slack2notion.notion.client import create_notion_client
from slack2notion.notion.models import PageResult
from slack2notion.notion.properties import build_page
from slack2notion.notion.service import create_task_page

__all__ = [
    "build_children",
    "build_page",
    "create_notion_client",
    "create_task_page",
    "make_block_children",
    "PageResult",
    "richize",
    "to_rich_text",
]
