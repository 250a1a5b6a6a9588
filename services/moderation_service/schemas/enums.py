import enum


class ProviderAccountStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    SUSPENDED = "SUSPENDED"


class VerificationFilter(str, enum.Enum):
    VERIFIED = "VERIFIED"
    UNVERIFIED = "UNVERIFIED"


class MembershipFilter(str, enum.Enum):
    HAS_MEMBERSHIPS = "HAS_MEMBERSHIPS"
    NO_MEMBERSHIPS = "NO_MEMBERSHIPS"
