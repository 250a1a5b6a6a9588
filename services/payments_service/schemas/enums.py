import enum


class TransactionStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    PENDING = "PENDING"
    USER_DROPPED = "USER_DROPPED"
    CANCELLED = "CANCELLED"
    NOT_ATTEMPTED = "NOT_ATTEMPTED"
    FLAGGED = "FLAGGED"
    VOID = "VOID"


class OrderStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    PAID = "PAID"
    PENDING = "PENDING"
    FAILED = "FAILED"
    EXPIRED = "EXPIRED"
    TERMINATED = "TERMINATED"
    TERMINATION_REQUESTED = "TERMINATION_REQUESTED"


class HistoryScope(str, enum.Enum):
    """Who is looking at the payment history."""

    CONSUMER = "consumer"
    PROVIDER = "provider"
    MODERATOR = "moderator"
