"""Memberships Service schemas package."""

from services.memberships_service.schemas.enums import (
    CATEGORY_LABELS,
    WIZARD_STEPS,
    ProviderCategory,
    WizardStep,
)
from services.memberships_service.schemas.main import (
    ClaimedMembership,
    MemberDetails,
    MembershipDetail,
    MembershipMember,
    ProviderSearchResult,
    ProviderSummary,
)

__all__ = [
    "CATEGORY_LABELS",
    "ClaimedMembership",
    "MemberDetails",
    "MembershipDetail",
    "MembershipMember",
    "ProviderCategory",
    "ProviderSearchResult",
    "ProviderSummary",
    "WIZARD_STEPS",
    "WizardStep",
]
