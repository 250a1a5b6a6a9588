"""Moderator listing endpoints of the REST API."""

from typing import Any

from libs.common.api_client import ApiClient, unwrap
from services.moderation_service.schemas import ConsumerAccount, Organisation

ORGANISATIONS_PATH = "/api/v1/moderator/org"
CONSUMERS_PATH = "/api/v1/moderator/consumers"


def _rows(body: Any, key: str) -> list:
    data = unwrap(body)
    if isinstance(data, dict):
        data = data.get(key)
    return data or []


class ModerationApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def list_organisations(self) -> list[Organisation]:
        body = await self.client.get(ORGANISATIONS_PATH, default_error="Failed to load organisations")
        return [Organisation.model_validate(row) for row in _rows(body, "providers")]

    async def list_consumers(self) -> list[ConsumerAccount]:
        body = await self.client.get(CONSUMERS_PATH, default_error="Failed to load users")
        return [ConsumerAccount.model_validate(row) for row in _rows(body, "consumers")]
