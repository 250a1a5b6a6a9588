import enum


class FeePlanStatus(str, enum.Enum):
    DUE = "DUE"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class DisplayStatus(str, enum.Enum):
    """Status shown to users, derived from the stored fee-plan state."""

    PAID_OFFLINE = "PAID_OFFLINE"
    PAID = "PAID"
    DUE = "DUE"
    OVERDUE = "OVERDUE"
