from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from libs.common.api_client import ApiModel
from services.fees_service.schemas import FeePlan, Member


class ProviderSummary(ApiModel):
    id: Optional[str] = None
    name: str
    code: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None


class ProviderSearchResult(ProviderSummary):
    id: str
    email: Optional[str] = None
    phone: Optional[str] = None


class MemberDetails(Member):
    provider: Optional[ProviderSummary] = None


class ClaimedMembership(ApiModel):
    id: str
    claimed_at: Optional[datetime] = Field(default=None, alias="claimedAt")
    pending_fee_plans: Optional[int] = Field(default=None, alias="pendingFeePlans")


class MembershipMember(Member):
    provider: ProviderSummary
    fee_plans: list[FeePlan] = Field(default_factory=list, alias="feePlans")

    @field_validator("fee_plans", mode="before")
    @classmethod
    def none_means_empty(cls, v):
        return v or []


class MembershipDetail(ApiModel):
    id: str
    claimed_at: Optional[datetime] = Field(default=None, alias="claimedAt")
    member: MembershipMember
