"""Moderation Service schemas package."""

from services.moderation_service.schemas.enums import (
    MembershipFilter,
    ProviderAccountStatus,
    VerificationFilter,
)
from services.moderation_service.schemas.main import (
    ConsumerAccount,
    Organisation,
    OrganisationFilter,
    UserFilter,
)

__all__ = [
    "ConsumerAccount",
    "MembershipFilter",
    "Organisation",
    "OrganisationFilter",
    "ProviderAccountStatus",
    "UserFilter",
    "VerificationFilter",
]
