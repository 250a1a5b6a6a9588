"""Moderator listings of organisations and users.

The API returns the full lists; filtering and search happen here, and
statistics are taken over the unfiltered list.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from libs.auth.models import ModeratorSession
from libs.common.datetime_utils import local_tz, parse_datetime, utc_now
from libs.common.logging import get_logger
from libs.common.ui import Badge, BadgeVariant
from services.moderation_service.client import ModerationApi
from services.moderation_service.schemas import (
    ConsumerAccount,
    MembershipFilter,
    Organisation,
    OrganisationFilter,
    ProviderAccountStatus,
    UserFilter,
    VerificationFilter,
)

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Organisations
# ---------------------------------------------------------------------------

_STATUS_VARIANTS = {
    ProviderAccountStatus.PENDING.value: BadgeVariant.SECONDARY,
    ProviderAccountStatus.APPROVED.value: BadgeVariant.DEFAULT,
    ProviderAccountStatus.REJECTED.value: BadgeVariant.DESTRUCTIVE,
    ProviderAccountStatus.SUSPENDED.value: BadgeVariant.OUTLINE,
}


def organisation_badge(status: Optional[str]) -> Badge:
    label = status or ProviderAccountStatus.PENDING.value
    variant = _STATUS_VARIANTS.get(label, _STATUS_VARIANTS[ProviderAccountStatus.PENDING.value])
    return Badge(label=label, variant=variant)


def _organisation_matches(org: Organisation, term: str) -> bool:
    texts = (org.name, org.code, org.admin_name, org.email)
    return any(term in text.lower() for text in texts if text)


def filter_organisations(
    organisations: list[Organisation], criteria: OrganisationFilter
) -> list[Organisation]:
    rows = list(organisations)
    term = criteria.search.strip().lower()
    if term:
        rows = [o for o in rows if _organisation_matches(o, term)]
    if criteria.status:
        rows = [o for o in rows if o.status == criteria.status.value]
    if criteria.type:
        rows = [o for o in rows if o.type == criteria.type.value]
    if criteria.category:
        rows = [o for o in rows if o.category == criteria.category.value]
    return rows


class OrganisationRow(BaseModel):
    organisation: Organisation
    badge: Badge


class OrganisationListing(BaseModel):
    filter: OrganisationFilter
    rows: list[OrganisationRow] = Field(default_factory=list)
    total: int = 0


async def load_organisations(
    api: ModerationApi,
    session: ModeratorSession,
    criteria: Optional[OrganisationFilter] = None,
) -> OrganisationListing:
    criteria = criteria or OrganisationFilter()
    organisations = await api.list_organisations()
    rows = filter_organisations(organisations, criteria)
    logger.debug(f"Moderator {session.moderator_id}: {len(rows)} of {len(organisations)} organisations shown")
    return OrganisationListing(
        filter=criteria,
        rows=[OrganisationRow(organisation=o, badge=organisation_badge(o.status)) for o in rows],
        total=len(organisations),
    )


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


def _user_matches(user: ConsumerAccount, search: str) -> bool:
    term = search.lower()
    texts = (user.first_name, user.last_name, user.email)
    if any(term in text.lower() for text in texts if text):
        return True
    return bool(user.phone) and search in user.phone


def filter_users(users: list[ConsumerAccount], criteria: UserFilter) -> list[ConsumerAccount]:
    rows = list(users)
    search = criteria.search.strip()
    if search:
        rows = [u for u in rows if _user_matches(u, search)]
    if criteria.verification == VerificationFilter.VERIFIED:
        rows = [u for u in rows if u.is_phone_verified]
    elif criteria.verification == VerificationFilter.UNVERIFIED:
        rows = [u for u in rows if not u.is_phone_verified]
    if criteria.membership == MembershipFilter.HAS_MEMBERSHIPS:
        rows = [u for u in rows if u.membership_count > 0]
    elif criteria.membership == MembershipFilter.NO_MEMBERSHIPS:
        rows = [u for u in rows if u.membership_count == 0]
    return rows


class UserStats(BaseModel):
    total_users: int = 0
    verified_users: int = 0
    unverified_users: int = 0
    active_users: int = 0
    new_users_this_month: int = 0


def user_stats(users: list[ConsumerAccount], now: Optional[datetime] = None) -> UserStats:
    """Counts over every user; "this month" is the local calendar month of ``now``."""
    today = (parse_datetime(now) if now else utc_now()).astimezone(local_tz())
    verified = sum(1 for u in users if u.is_phone_verified)
    new_this_month = 0
    for user in users:
        if user.created_at is None:
            continue
        joined = parse_datetime(user.created_at).astimezone(local_tz())
        if (joined.year, joined.month) == (today.year, today.month):
            new_this_month += 1
    return UserStats(
        total_users=len(users),
        verified_users=verified,
        unverified_users=len(users) - verified,
        active_users=sum(1 for u in users if u.membership_count > 0),
        new_users_this_month=new_this_month,
    )


class UserListing(BaseModel):
    filter: UserFilter
    users: list[ConsumerAccount] = Field(default_factory=list)
    stats: UserStats


async def load_users(
    api: ModerationApi,
    session: ModeratorSession,
    criteria: Optional[UserFilter] = None,
    now: Optional[datetime] = None,
) -> UserListing:
    criteria = criteria or UserFilter()
    users = await api.list_consumers()
    shown = filter_users(users, criteria)
    logger.debug(f"Moderator {session.moderator_id}: {len(shown)} of {len(users)} users shown")
    return UserListing(filter=criteria, users=shown, stats=user_stats(users, now))
