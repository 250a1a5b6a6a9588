import enum
from typing import Optional

from pydantic import BaseModel, Field


class PortalRole(str, enum.Enum):
    PROVIDER = "provider"
    CONSUMER = "consumer"
    MODERATOR = "moderator"


class AccountType(str, enum.Enum):
    INDIVIDUAL = "INDIVIDUAL"
    ORGANIZATION = "ORGANIZATION"


class AuthUser(BaseModel):
    """
    Claims carried by a portal identity token.
    """

    user_id: str = Field(..., alias="sub")
    role: PortalRole
    name: Optional[str] = None
    admin_name: Optional[str] = Field(default=None, alias="adminName")
    account_type: Optional[AccountType] = Field(default=None, alias="accountType")
    phone: Optional[str] = None


class ProviderSession(BaseModel):
    """The signed-in provider (organization or individual account)."""

    provider_id: str
    name: str = ""
    admin_name: str = ""
    account_type: AccountType = AccountType.ORGANIZATION
    phone: str = ""


class ConsumerSession(BaseModel):
    """The signed-in payer."""

    consumer_id: str
    name: str = ""


class ModeratorSession(BaseModel):
    moderator_id: str
