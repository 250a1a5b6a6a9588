"""Payments Service schemas package."""

from services.payments_service.schemas.enums import (
    HistoryScope,
    OrderStatus,
    TransactionStatus,
)
from services.payments_service.schemas.main import (
    CheckoutResult,
    CreateOrderRequest,
    GatewayOrder,
    HistoryQuery,
    HistorySummary,
    Order,
    Pagination,
    PaymentContext,
    Transaction,
    VerifiedOrder,
)

__all__ = [
    "CheckoutResult",
    "CreateOrderRequest",
    "GatewayOrder",
    "HistoryQuery",
    "HistoryScope",
    "HistorySummary",
    "Order",
    "OrderStatus",
    "Pagination",
    "PaymentContext",
    "Transaction",
    "TransactionStatus",
    "VerifiedOrder",
]
