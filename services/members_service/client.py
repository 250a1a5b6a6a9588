"""Provider member endpoints of the REST API."""

from typing import Any, Optional

from libs.common.api_client import ApiClient, unwrap
from services.fees_service.schemas import Member
from services.members_service.schemas import MemberForm, MemberRoster

MEMBER_PATH = "/api/v1/provider/member"
MEMBER_ROSTER_PATH = "/api/v1/provider/member/simplified"


def _member_data(body: Any) -> Any:
    data = unwrap(body)
    if isinstance(data, dict) and "member" in data:
        return data["member"]
    return data


class MemberApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def create_member(self, provider_id: str, payload: dict[str, Any]) -> Optional[Member]:
        body = await self.client.post(
            MEMBER_PATH,
            json={"member": {**payload, "providerId": provider_id}},
            default_error="Failed to add member",
        )
        data = _member_data(body)
        return Member.model_validate(data) if data else None

    async def get_member(self, provider_id: str, member_id: str) -> Optional[MemberForm]:
        body = await self.client.get(
            MEMBER_PATH,
            params={"providerId": provider_id, "memberId": member_id},
            default_error="Failed to load member details",
        )
        data = _member_data(body)
        return MemberForm.model_validate(data) if data else None

    async def update_member(
        self, provider_id: str, member_id: str, payload: dict[str, Any]
    ) -> Optional[Member]:
        body = await self.client.put(
            MEMBER_PATH,
            json={"member": {**payload, "providerId": provider_id, "id": member_id}},
            default_error="Failed to update member",
        )
        data = _member_data(body)
        return Member.model_validate(data) if data else None

    async def list_members(self, provider_id: str) -> MemberRoster:
        body = await self.client.get(
            MEMBER_ROSTER_PATH,
            params={"providerId": provider_id},
            default_error="Failed to load members",
        )
        return MemberRoster.model_validate(unwrap(body) or {})
