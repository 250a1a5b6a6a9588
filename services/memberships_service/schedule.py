"""Consumer payment schedule for one membership."""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel

from libs.common.currency import format_amount
from libs.common.datetime_utils import utc_now
from libs.common.ui import Badge
from services.fees_service.classifier import (
    pending_amount,
    plan_status,
    sort_fee_plans,
    status_badge,
    total_amount,
)
from services.fees_service.schemas import DisplayStatus, FeePlan
from services.memberships_service.client import MembershipApi
from services.memberships_service.schemas import MembershipDetail, ProviderSummary


class ScheduleEntry(BaseModel):
    plan: FeePlan
    status: Union[DisplayStatus, str]
    badge: Badge
    amount_display: str
    can_pay: bool


class MembershipSchedule(BaseModel):
    membership_id: str
    member_name: str
    unique_id: str
    category: Optional[str] = None
    subcategory: Optional[str] = None
    provider: ProviderSummary
    entries: list[ScheduleEntry]
    plan_count: int
    total_amount: Decimal
    pending_amount: Decimal
    total_display: str
    pending_display: str


def build_schedule(detail: MembershipDetail, now: Optional[datetime] = None) -> MembershipSchedule:
    now = now or utc_now()
    member = detail.member
    plans = member.fee_plans

    entries = []
    for plan in sort_fee_plans(plans):
        status = plan_status(plan, now)
        entries.append(
            ScheduleEntry(
                plan=plan,
                status=status,
                badge=status_badge(status),
                amount_display=format_amount(plan.amount),
                can_pay=not plan.is_settled,
            )
        )

    total = total_amount(plans)
    pending = pending_amount(plans)
    return MembershipSchedule(
        membership_id=detail.id,
        member_name=member.display_name,
        unique_id=member.unique_id,
        category=member.category,
        subcategory=member.subcategory,
        provider=member.provider,
        entries=entries,
        plan_count=len(plans),
        total_amount=total,
        pending_amount=pending,
        total_display=format_amount(total),
        pending_display=format_amount(pending),
    )


async def load_schedule(
    api: MembershipApi, membership_id: str, now: Optional[datetime] = None
) -> MembershipSchedule:
    detail = await api.get_membership(membership_id)
    return build_schedule(detail, now)
