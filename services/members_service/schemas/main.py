from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from libs.common.api_client import ApiModel
from libs.common.datetime_utils import to_calendar_date
from services.members_service.schemas.enums import Gender


class MemberForm(ApiModel):
    """Add/edit member form. Text fields stay strings for form binding."""

    first_name: str = Field(default="", alias="firstName")
    middle_name: str = Field(default="", alias="middleName")
    last_name: str = Field(default="", alias="lastName")
    date_of_birth: Optional[date] = Field(default=None, alias="dateOfBirth")
    gender: Optional[Gender] = None
    unique_id: str = Field(default="", alias="uniqueId")
    phone: str = ""
    email: str = ""
    category: str = ""
    subcategory: str = ""
    guardian_name: str = Field(default="", alias="guardianName")
    relationship: str = ""

    @field_validator(
        "first_name",
        "middle_name",
        "last_name",
        "unique_id",
        "phone",
        "email",
        "category",
        "subcategory",
        "guardian_name",
        "relationship",
        mode="before",
    )
    @classmethod
    def none_means_blank(cls, v):
        return "" if v is None else v

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def coerce_date_of_birth(cls, v):
        return to_calendar_date(v)

    @field_validator("gender", mode="before")
    @classmethod
    def blank_gender_is_unset(cls, v):
        return v or None


class LinkedConsumer(ApiModel):
    id: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    phone: Optional[str] = None


class SimplifiedMember(ApiModel):
    id: str
    member_name: str = Field(default="", alias="memberName")
    unique_id: str = Field(alias="uniqueId")
    phone: Optional[str] = None
    email: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    joined_at: Optional[datetime] = Field(default=None, alias="joinedAt")
    pending_fee_plans_count: int = Field(default=0, alias="pendingFeePlansCount")
    total_pending_amount: Decimal = Field(default=Decimal("0"), alias="totalPendingAmount")
    has_overdue_fees: bool = Field(default=False, alias="hasOverdueFees")
    overdue_fee_plans_count: int = Field(default=0, alias="overdueFeePlansCount")
    is_linked_to_consumer: bool = Field(default=False, alias="isLinkedToConsumer")
    linked_consumer: Optional[LinkedConsumer] = Field(default=None, alias="linkedConsumer")

    @field_validator(
        "pending_fee_plans_count",
        "total_pending_amount",
        "overdue_fee_plans_count",
        mode="before",
    )
    @classmethod
    def none_means_zero(cls, v):
        return v or 0


class MemberRoster(ApiModel):
    members: list[SimplifiedMember] = Field(default_factory=list)
    total_members: int = Field(default=0, alias="totalMembers")
    total_pending_fees: Decimal = Field(default=Decimal("0"), alias="totalPendingFees")
    total_members_with_overdue_fees: int = Field(default=0, alias="totalMembersWithOverdueFees")

    @field_validator("members", mode="before")
    @classmethod
    def none_means_empty(cls, v):
        return v or []

    @field_validator("total_members", "total_pending_fees", "total_members_with_overdue_fees", mode="before")
    @classmethod
    def none_means_zero(cls, v):
        return v or 0
