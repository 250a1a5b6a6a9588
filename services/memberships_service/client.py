"""Provider search, member lookup and membership endpoints."""

from libs.common.api_client import ApiClient, ApiError, unwrap
from services.memberships_service.schemas import (
    ClaimedMembership,
    MemberDetails,
    MembershipDetail,
    ProviderCategory,
    ProviderSearchResult,
)

PROVIDER_SEARCH_PATH = "/api/v1/provider/search"
MEMBER_LOOKUP_PATH = "/api/v1/provider/member/by-uniqueid"
CLAIM_MEMBERSHIP_PATH = "/api/v1/consumer/claim-membership"
MEMBERSHIP_PATH = "/api/v1/consumer/memberships/{membership_id}"


class MembershipApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def search_providers(
        self, *, category: ProviderCategory, region: str, search: str, limit: int
    ) -> list[ProviderSearchResult]:
        body = await self.client.get(
            PROVIDER_SEARCH_PATH,
            params={
                "category": category.value,
                "region": region,
                "search": search,
                "limit": limit,
            },
            default_error="Failed to search providers",
        )
        data = unwrap(body) or {}
        return [ProviderSearchResult.model_validate(p) for p in data.get("providers") or []]

    async def get_member_by_unique_id(self, *, provider_id: str, unique_id: str) -> MemberDetails:
        body = await self.client.get(
            MEMBER_LOOKUP_PATH,
            params={"providerId": provider_id, "uniqueId": unique_id},
            default_error="Member not found",
        )
        member = (body or {}).get("member")
        if not member:
            raise ApiError("Member not found", status_code=404)
        return MemberDetails.model_validate(member)

    async def claim_membership(
        self, *, consumer_id: str, provider_id: str, member_unique_id: str
    ) -> ClaimedMembership:
        body = await self.client.post(
            CLAIM_MEMBERSHIP_PATH,
            json={
                "consumerId": consumer_id,
                "providerId": provider_id,
                "memberUniqueId": member_unique_id,
            },
            default_error="Failed to link membership",
        )
        return ClaimedMembership.model_validate(unwrap(body))

    async def get_membership(self, membership_id: str) -> MembershipDetail:
        body = await self.client.get(
            MEMBERSHIP_PATH.format(membership_id=membership_id),
            default_error="Membership not found",
        )
        data = unwrap(body)
        if not data:
            raise ApiError("Membership not found", status_code=404)
        return MembershipDetail.model_validate(data)
