import enum


class VerificationStatus(str, enum.Enum):
    PROCESSING = "PROCESSING"
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class KycState(str, enum.Enum):
    """Verification status plus the state before any submission exists."""

    NO_SUBMISSION = "NO_SUBMISSION"
    PROCESSING = "PROCESSING"
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"

    @classmethod
    def from_status(cls, status: "VerificationStatus | None") -> "KycState":
        if status is None:
            return cls.NO_SUBMISSION
        return cls(VerificationStatus(status).value)


class EntityType(str, enum.Enum):
    PVT_LTD = "PVT_LTD"
    PUBLIC_LTD = "PUBLIC_LTD"
    GOVT_ENTITY = "GOVT_ENTITY"
    LLP = "LLP"
    PARTNERSHIP = "PARTNERSHIP"
    PROPRIETORSHIP = "PROPRIETORSHIP"
    OPC = "OPC"
    NON_PROFIT = "NON_PROFIT"
    TRUST = "TRUST"
    SOCIETY = "SOCIETY"
    OTHERS = "OTHERS"


ENTITY_TYPE_LABELS = {
    EntityType.PVT_LTD: "Private Limited",
    EntityType.PUBLIC_LTD: "Public Limited",
    EntityType.GOVT_ENTITY: "Government Entity",
    EntityType.LLP: "Limited Liability Partnership",
    EntityType.PARTNERSHIP: "Partnership",
    EntityType.PROPRIETORSHIP: "Proprietorship",
    EntityType.OPC: "One Person Company",
    EntityType.NON_PROFIT: "Non-Profit",
    EntityType.TRUST: "Trust",
    EntityType.SOCIETY: "Society",
    EntityType.OTHERS: "Others",
}
