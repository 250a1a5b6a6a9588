"""Member roster for the provider portal."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from libs.auth.models import ProviderSession
from libs.common.currency import format_amount
from libs.common.logging import get_logger
from libs.common.ui import Badge, BadgeVariant
from services.members_service.client import MemberApi
from services.members_service.schemas import SimplifiedMember

logger = get_logger(__name__)


def member_standing_badge(member: SimplifiedMember) -> Badge:
    if member.has_overdue_fees:
        return Badge(label=f"{member.overdue_fee_plans_count} Overdue", variant=BadgeVariant.DESTRUCTIVE)
    if member.pending_fee_plans_count > 0:
        return Badge(label=f"{member.pending_fee_plans_count} Pending", variant=BadgeVariant.SECONDARY)
    return Badge(label="All Paid", variant=BadgeVariant.SUCCESS)


def _matches(member: SimplifiedMember, search: str) -> bool:
    term = search.lower()
    texts = (member.member_name, member.unique_id, member.email or "")
    if any(term in text.lower() for text in texts):
        return True
    return bool(member.phone) and search in member.phone


def filter_members(members: list[SimplifiedMember], search: Optional[str]) -> list[SimplifiedMember]:
    search = (search or "").strip()
    if not search:
        return list(members)
    return [m for m in members if _matches(m, search)]


class RosterRow(BaseModel):
    member: SimplifiedMember
    badge: Badge
    pending_display: str


class RosterPage(BaseModel):
    search: str = ""
    rows: list[RosterRow] = Field(default_factory=list)
    # Totals cover the whole roster, not just the rows matching the search.
    total_members: int = 0
    total_pending_fees: Decimal = Decimal("0")
    total_pending_display: str = ""
    total_members_with_overdue_fees: int = 0


async def load_roster(
    api: MemberApi, session: ProviderSession, search: Optional[str] = None
) -> RosterPage:
    roster = await api.list_members(session.provider_id)
    members = filter_members(roster.members, search)
    logger.debug(
        f"Loaded {len(roster.members)} members for provider {session.provider_id}, {len(members)} shown"
    )
    return RosterPage(
        search=(search or "").strip(),
        rows=[
            RosterRow(
                member=m,
                badge=member_standing_badge(m),
                pending_display=format_amount(m.total_pending_amount),
            )
            for m in members
        ],
        total_members=roster.total_members,
        total_pending_fees=roster.total_pending_fees,
        total_pending_display=format_amount(roster.total_pending_fees),
        total_members_with_overdue_fees=roster.total_members_with_overdue_fees,
    )
