from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from libs.auth.models import AccountType
from libs.common.api_client import ApiModel
from services.memberships_service.schemas import ProviderCategory, ProviderSearchResult
from services.moderation_service.schemas.enums import (
    MembershipFilter,
    ProviderAccountStatus,
    VerificationFilter,
)


class Organisation(ProviderSearchResult):
    admin_name: Optional[str] = Field(default=None, alias="adminName")
    status: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class ConsumerAccount(ApiModel):
    id: str
    first_name: str = Field(default="", alias="firstName")
    last_name: str = Field(default="", alias="lastName")
    phone: Optional[str] = None
    email: Optional[str] = None
    is_phone_verified: bool = Field(default=False, alias="isPhoneVerified")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    membership_count: int = Field(default=0, alias="membershipCount")

    @model_validator(mode="before")
    @classmethod
    def lift_membership_count(cls, data):
        # The API nests relation counts as ``_count: {memberships: n}``.
        if isinstance(data, dict) and "_count" in data and "membershipCount" not in data:
            counts = data.get("_count") or {}
            data = {**data, "membershipCount": counts.get("memberships") or 0}
        return data

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


def _all_means_none(v):
    if v is None or v == "" or (isinstance(v, str) and v.upper() == "ALL"):
        return None
    return v


class OrganisationFilter(BaseModel):
    status: Optional[ProviderAccountStatus] = None
    type: Optional[AccountType] = None
    category: Optional[ProviderCategory] = None
    search: str = ""

    @field_validator("status", "type", "category", mode="before")
    @classmethod
    def all_means_none(cls, v):
        return _all_means_none(v)


class UserFilter(BaseModel):
    verification: Optional[VerificationFilter] = None
    membership: Optional[MembershipFilter] = None
    search: str = ""

    @field_validator("verification", "membership", mode="before")
    @classmethod
    def all_means_none(cls, v):
        return _all_means_none(v)
