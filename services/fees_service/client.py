"""Fee-plan endpoints of the REST API."""

from typing import Any

from libs.common.api_client import ApiClient, ApiError, unwrap
from services.fees_service.schemas import FeePlan, MemberWithFeePlans

FEEPLAN_PATH = "/api/v1/provider/feeplan"
MARK_PAID_PATH = "/api/v1/provider/feeplan/mark-paid"


class FeePlanApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_member_fee_plans(
        self, *, provider_id: str, member_id: str
    ) -> MemberWithFeePlans:
        body = await self.client.get(
            FEEPLAN_PATH,
            params={"providerId": provider_id, "memberId": member_id},
            default_error="Member not found",
        )
        data = unwrap(body)
        if not data:
            raise ApiError("Member not found", status_code=404)
        return MemberWithFeePlans.model_validate(data)

    async def create_fee_plan(self, fee_plan: dict[str, Any]) -> Any:
        return await self.client.post(
            FEEPLAN_PATH,
            json={"feePlan": fee_plan},
            default_error="Failed to create fee plan",
        )

    async def update_fee_plan(self, fee_plan: dict[str, Any]) -> Any:
        return await self.client.put(
            FEEPLAN_PATH,
            json={"feePlan": fee_plan},
            default_error="Failed to update fee plan",
        )

    async def delete_fee_plan(self, fee_plan_id: str) -> None:
        await self.client.delete(
            FEEPLAN_PATH,
            json={"feePlanId": fee_plan_id},
            default_error="Failed to delete fee plan",
        )

    async def mark_paid(
        self, *, fee_plan_id: str, is_offline_paid: bool, provider_id: str
    ) -> FeePlan:
        body = await self.client.post(
            MARK_PAID_PATH,
            json={
                "feePlanId": fee_plan_id,
                "isOfflinePaid": is_offline_paid,
                "providerId": provider_id,
            },
            default_error="Failed to update payment status",
        )
        return FeePlan.model_validate(unwrap(body))
