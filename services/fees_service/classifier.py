"""Fee-plan status derivation, badges and schedule ordering.

The same rules apply on every surface that shows a fee plan: provider fee
management, the consumer payment schedule and the payment page header.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Iterable, Optional, Union

from libs.common.datetime_utils import DateLike, parse_datetime, utc_now
from libs.common.ui import Badge, BadgeVariant
from services.fees_service.schemas import DisplayStatus, FeePlan, FeePlanStatus


def classify(
    status: str,
    is_offline_paid: bool,
    due_date: Optional[DateLike],
    now: Optional[datetime] = None,
) -> Union[DisplayStatus, str]:
    """Derive the display status of a fee plan.

    The offline flag wins over the stored status. A ``DUE`` plan whose due
    date has passed shows as overdue. Unknown statuses pass through as-is.
    """
    if is_offline_paid:
        return DisplayStatus.PAID_OFFLINE
    if status == FeePlanStatus.PAID.value:
        return DisplayStatus.PAID
    if status == FeePlanStatus.DUE.value:
        # Naive clocks are read in the local timezone, like naive due dates.
        now = parse_datetime(now) if now else utc_now()
        if due_date is not None and parse_datetime(due_date) < now:
            return DisplayStatus.OVERDUE
        return DisplayStatus.DUE
    if status == FeePlanStatus.OVERDUE.value:
        return DisplayStatus.OVERDUE
    return status


_BADGES = {
    DisplayStatus.PAID_OFFLINE: Badge(label="Offline Paid", variant=BadgeVariant.SECONDARY),
    DisplayStatus.PAID: Badge(label="Paid", variant=BadgeVariant.DEFAULT),
    DisplayStatus.DUE: Badge(label="Due", variant=BadgeVariant.OUTLINE),
    DisplayStatus.OVERDUE: Badge(label="Overdue", variant=BadgeVariant.DESTRUCTIVE),
}


def status_badge(display: Union[DisplayStatus, str]) -> Badge:
    if isinstance(display, DisplayStatus):
        return _BADGES[display]
    return Badge(label=str(display), variant=BadgeVariant.OUTLINE)


def plan_status(plan: FeePlan, now: Optional[datetime] = None) -> Union[DisplayStatus, str]:
    return classify(plan.status, plan.is_offline_paid, plan.due_date, now)


def plan_badge(plan: FeePlan, now: Optional[datetime] = None) -> Badge:
    return status_badge(plan_status(plan, now))


def sort_fee_plans(plans: Iterable[FeePlan]) -> list[FeePlan]:
    """Unsettled plans first, then settled ones; each group by ascending due date."""
    return sorted(plans, key=lambda p: (p.is_settled, parse_datetime(p.due_date)))


def total_amount(plans: Iterable[FeePlan]) -> Decimal:
    return sum((p.amount for p in plans), Decimal("0"))


def pending_amount(plans: Iterable[FeePlan]) -> Decimal:
    return sum((p.amount for p in plans if not p.is_settled), Decimal("0"))
