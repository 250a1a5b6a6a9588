"""Request and response bodies of the portal endpoints."""

from pydantic import Field

from libs.common.api_client import ApiModel
from services.fees_service.editor import SaveReport
from services.fees_service.management import FeeManagementView
from services.fees_service.schemas import FeePlanRow
from services.payments_service.schemas import CheckoutResult


class FeePlanSaveRequest(ApiModel):
    rows: list[FeePlanRow] = Field(default_factory=list)
    snapshot: list[FeePlanRow] = Field(default_factory=list)


class FeePlanSaveResponse(ApiModel):
    report: SaveReport
    view: FeeManagementView


class MarkPaidRequest(ApiModel):
    member_id: str = Field(alias="memberId")
    paid: bool = True


class ClaimMembershipRequest(ApiModel):
    provider_id: str = Field(alias="providerId")
    member_unique_id: str = Field(alias="memberUniqueId")


class CreateOrderBody(ApiModel):
    fee_plan_id: str = Field(alias="feePlanId")


class CheckoutResultBody(ApiModel):
    order_id: str = Field(alias="orderId")
    result: CheckoutResult = Field(default_factory=CheckoutResult)
