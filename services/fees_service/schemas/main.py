from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from libs.common.api_client import ApiModel
from libs.common.datetime_utils import to_calendar_date
from services.fees_service.schemas.enums import FeePlanStatus


class FeePlan(ApiModel):
    id: str
    name: str
    description: Optional[str] = None
    amount: Decimal
    due_date: datetime = Field(alias="dueDate")
    status: str = FeePlanStatus.DUE.value
    is_offline_paid: bool = Field(default=False, alias="isOfflinePaid")
    receipt: Optional[str] = None
    member_id: Optional[str] = Field(default=None, alias="memberId")
    provider_id: Optional[str] = Field(default=None, alias="providerId")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @property
    def is_settled(self) -> bool:
        """Paid through the gateway or reconciled offline."""
        return self.is_offline_paid or self.status == FeePlanStatus.PAID.value


class Member(ApiModel):
    id: str
    unique_id: str = Field(alias="uniqueId")
    first_name: str = Field(default="", alias="firstName")
    middle_name: Optional[str] = Field(default=None, alias="middleName")
    last_name: str = Field(default="", alias="lastName")
    email: Optional[str] = None
    phone: Optional[str] = None
    category: Optional[str] = None
    subcategory: Optional[str] = None
    guardian_name: Optional[str] = Field(default=None, alias="guardianName")

    @property
    def display_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)


class MemberWithFeePlans(Member):
    fee_plans: list[FeePlan] = Field(default_factory=list, alias="feePlans")

    @field_validator("fee_plans", mode="before")
    @classmethod
    def none_means_empty(cls, v):
        return v or []


class FeePlanRow(ApiModel):
    """One editable line in the fee-plan editor.

    ``id`` is None until the plan is persisted. ``amount`` stays a string
    for form binding; ``due_date`` is a calendar date.
    """

    id: Optional[str] = None
    name: str = ""
    description: str = ""
    amount: str = ""
    due_date: Optional[date] = Field(default=None, alias="dueDate")
    is_paid: bool = Field(default=False, alias="isPaid")
    is_deleted: bool = Field(default=False, alias="isDeleted")

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("due_date", mode="before")
    @classmethod
    def coerce_due_date(cls, v):
        return to_calendar_date(v)

    @classmethod
    def from_plan(cls, plan: FeePlan) -> "FeePlanRow":
        return cls(
            id=plan.id,
            name=plan.name,
            description=plan.description or "",
            amount=str(plan.amount),
            due_date=to_calendar_date(plan.due_date),
            is_paid=plan.is_settled,
        )
