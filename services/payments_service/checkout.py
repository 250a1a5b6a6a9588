"""Hosted checkout of the payment gateway.

The checkout itself runs in the payer's browser; the server side only sees
its result. ``CheckoutGateway`` is the seam used to drive it from code.
"""

from typing import Protocol

from libs.common.logging import get_logger
from libs.common.ui import CONSUMER_SLUG, Navigation, Outcome, Toast
from services.payments_service.schemas import CheckoutResult

logger = get_logger(__name__)

REDIRECT_TARGET = "_modal"


class CheckoutGateway(Protocol):
    async def checkout(
        self, *, payment_session_id: str, redirect_target: str = REDIRECT_TARGET
    ) -> CheckoutResult: ...


def verify_path(order_id: str) -> str:
    return f"/{CONSUMER_SLUG}/pay/verify?orderId={order_id}"


def interpret_checkout(result: CheckoutResult, order_id: str) -> Outcome:
    """Map a checkout result to what the pay page does next."""
    if result.error:
        logger.warning(f"Checkout for order {order_id} failed: {result.error}")
        return Outcome(ok=False, toast=Toast.error("Payment was cancelled or failed"))
    if result.redirect:
        logger.info(f"Checkout for order {order_id} redirected")
        return Outcome(ok=True, toast=Toast.info("Payment is being processed..."))
    if result.payment_details is not None:
        logger.info(f"Checkout for order {order_id} completed")
        return Outcome(
            ok=True,
            toast=Toast.success("Payment completed successfully!"),
            navigate=Navigation(path=verify_path(order_id)),
        )
    return Outcome(ok=False)
