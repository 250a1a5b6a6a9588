"""Fees Service schemas package."""

from services.fees_service.schemas.enums import DisplayStatus, FeePlanStatus
from services.fees_service.schemas.main import (
    ApiModel,
    FeePlan,
    FeePlanRow,
    Member,
    MemberWithFeePlans,
)

__all__ = [
    "ApiModel",
    "DisplayStatus",
    "FeePlan",
    "FeePlanRow",
    "FeePlanStatus",
    "Member",
    "MemberWithFeePlans",
]
