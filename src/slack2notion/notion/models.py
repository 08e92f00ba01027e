"""Result types for Notion operations."""

from pydantic import BaseModel


class PageResult(BaseModel):
    """Returned after successful Notion page creation."""

    page_id: str
    page_url: str
    title: str
