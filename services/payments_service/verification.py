"""Payment verification page shown after checkout."""

from typing import Optional

from pydantic import BaseModel, Field

from libs.common.api_client import ApiError
from libs.common.logging import get_logger
from libs.common.ui import Badge, BadgeVariant, Toast
from services.payments_service.client import PaymentApi
from services.payments_service.schemas import OrderStatus, Transaction, VerifiedOrder

logger = get_logger(__name__)

MISSING_ORDER_MESSAGE = "No order ID provided"
VERIFY_FAILED_MESSAGE = "Failed to verify payment"


class StatusInfo(BaseModel):
    title: str
    message: str
    badge: Badge
    toast: Optional[Toast] = None


_PROCESSING = StatusInfo(
    title="Payment Processing",
    message="Your payment is being processed. This may take a few minutes.",
    badge=Badge(label="Processing", variant=BadgeVariant.WARNING),
    toast=Toast.info("Payment is being processed"),
)

_STATUS_INFO = {
    OrderStatus.PAID.value: StatusInfo(
        title="Payment Successful!",
        message="Your payment has been processed successfully. You will receive a confirmation shortly.",
        badge=Badge(label="Successful", variant=BadgeVariant.SUCCESS),
        toast=Toast.success("Payment successful!"),
    ),
    OrderStatus.FAILED.value: StatusInfo(
        title="Payment Failed",
        message="Your payment could not be processed. Please try again or contact support.",
        badge=Badge(label="Failed", variant=BadgeVariant.DESTRUCTIVE),
        toast=Toast.error("Payment failed"),
    ),
    OrderStatus.PENDING.value: _PROCESSING,
    OrderStatus.ACTIVE.value: _PROCESSING,
}


def status_info(status: Optional[str]) -> StatusInfo:
    info = _STATUS_INFO.get(status or "")
    if info is not None:
        return info
    return StatusInfo(
        title="Payment Status Unknown",
        message="We are checking your payment status. Please wait.",
        badge=Badge(label=status or "Unknown", variant=BadgeVariant.OUTLINE),
    )


class VerificationPage(BaseModel):
    order_id: Optional[str] = None
    status: Optional[str] = None
    info: Optional[StatusInfo] = None
    payments: list[Transaction] = Field(default_factory=list)
    receipt: Optional[str] = None
    error: Optional[str] = None
    toast: Optional[Toast] = None


async def verify_payment(api: PaymentApi, order_id: Optional[str]) -> VerificationPage:
    if not order_id:
        return VerificationPage(error=MISSING_ORDER_MESSAGE)

    try:
        verified: VerifiedOrder = await api.verify_order(order_id)
    except ApiError as e:
        logger.error(f"Error verifying order {order_id}: {e.message}")
        message = e.message or VERIFY_FAILED_MESSAGE
        return VerificationPage(order_id=order_id, error=message, toast=Toast.error(message))

    status = verified.order.status
    info = status_info(status)
    logger.info(f"Order {order_id} verified with status {status}")
    return VerificationPage(
        order_id=order_id,
        status=status,
        info=info,
        payments=verified.payments,
        receipt=verified.receipt,
        toast=info.toast,
    )
