"""Notion credentials stored as a JSON String parameter in AWS SSM.

The parameter value must look like::

    {"notion": {"token": "secret_...", "database_id": "..."}}
"""

import asyncio
import json
import logging

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, ValidationError

from slack2notion.config import ConfigurationError

logger = logging.getLogger(__name__)


class NotionParameters(BaseModel):
    """Destination credentials for one workspace database."""

    token: str
    database_id: str


class _ParameterDocument(BaseModel):
    notion: NotionParameters


def _get_parameter_value(parameter_store_id: str) -> str | None:
    client = boto3.client("ssm")
    response = client.get_parameter(Name=parameter_store_id, WithDecryption=True)
    return response.get("Parameter", {}).get("Value")


def parse_parameters(value: str, parameter_store_id: str = "") -> NotionParameters:
    """Parse and validate the JSON parameter value.

    Raises ConfigurationError if the value is not JSON or has the wrong shape.
    """
    try:
        document = _ParameterDocument.model_validate(json.loads(value))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigurationError(
            f"Failed to parse parameters, parameterStoreId: {parameter_store_id}"
        ) from exc
    return document.notion


async def fetch_parameters(parameter_store_id: str) -> NotionParameters:
    """Fetch Notion credentials from SSM Parameter Store.

    The blocking boto3 call runs in a worker thread. Raises ConfigurationError
    on AWS errors, a missing value, or an invalid value.
    """
    try:
        value = await asyncio.to_thread(_get_parameter_value, parameter_store_id)
    except (BotoCoreError, ClientError) as exc:
        raise ConfigurationError(
            f"Failed to get parameters, parameterStoreId: {parameter_store_id}"
        ) from exc

    if value is None:
        raise ConfigurationError(
            f"Failed to get parameters, parameterStoreId: {parameter_store_id}"
        )

    logger.debug("Loaded parameters from %s", parameter_store_id)
    return parse_parameters(value, parameter_store_id)
