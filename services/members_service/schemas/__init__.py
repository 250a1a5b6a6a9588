"""Members Service schemas package."""

from services.members_service.schemas.enums import Gender
from services.members_service.schemas.main import (
    LinkedConsumer,
    MemberForm,
    MemberRoster,
    SimplifiedMember,
)

__all__ = [
    "Gender",
    "LinkedConsumer",
    "MemberForm",
    "MemberRoster",
    "SimplifiedMember",
]
