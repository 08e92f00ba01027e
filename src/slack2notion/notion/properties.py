"""Pure function building pages.create() arguments for the task database."""

from slack2notion.models.notion import Status
from slack2notion.text import truncate

# Default title column of every Notion database
COL_TITLE_NAME = "title"
# Custom status column
COL_STATUS_NAME = "Status"


def build_page(database_id: str, title: str, status: Status = Status.NOT_STARTED) -> dict:
    """Return kwargs for pages.create(): parent database, title and status."""
    return {
        "parent": {"database_id": database_id},
        "properties": {
            COL_TITLE_NAME: {"title": [{"text": {"content": truncate(title, 2000)}}]},
            COL_STATUS_NAME: {"status": {"name": status.value}},
        },
    }
