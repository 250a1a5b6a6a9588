"""Payment initiation for a single fee plan.

``load`` resolves the pay page, ``create_order`` opens a gateway order and
``pay`` runs the whole thing through a ``CheckoutGateway``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel

from libs.auth.models import ConsumerSession
from libs.common.api_client import ApiError
from libs.common.config import get_settings
from libs.common.currency import format_amount
from libs.common.logging import get_logger
from libs.common.ui import CONSUMER_SLUG, Badge, Outcome, Toast
from services.fees_service.classifier import plan_status, status_badge
from services.fees_service.schemas import DisplayStatus, FeePlanStatus
from services.payments_service.checkout import CheckoutGateway, interpret_checkout
from services.payments_service.client import PaymentApi
from services.payments_service.schemas import (
    CheckoutResult,
    CreateOrderRequest,
    GatewayOrder,
    PaymentContext,
)

logger = get_logger(__name__)

FEE_PLAN_REQUIRED_MESSAGE = "Fee plan ID is required"
LOAD_FAILED_MESSAGE = "Failed to load payment details"
SESSION_FAILED_MESSAGE = "Failed to create payment session"
CHECKOUT_FAILED_MESSAGE = "Payment processing failed"
DASHBOARD_PATH = f"/{CONSUMER_SLUG}/dashboard"


class PaymentPage(BaseModel):
    """State of the pay page. ``error`` set means a terminal error view."""

    fee_plan_id: Optional[str] = None
    context: Optional[PaymentContext] = None
    status: Optional[Union[DisplayStatus, str]] = None
    badge: Optional[Badge] = None
    amount_display: Optional[str] = None
    settled: bool = False
    can_pay: bool = False
    receipt: Optional[str] = None
    error: Optional[str] = None
    can_retry: bool = False
    back_path: str = DASHBOARD_PATH


class OrderOutcome(Outcome):
    order_id: Optional[str] = None
    payment_session_id: Optional[str] = None
    # Hosted checkout environment the browser must load.
    gateway_mode: Optional[str] = None


class PaymentFlow:
    def __init__(
        self,
        api: PaymentApi,
        session: Optional[ConsumerSession] = None,
        gateway: Optional[CheckoutGateway] = None,
    ):
        self.api = api
        self.session = session
        self.gateway = gateway
        self.page: Optional[PaymentPage] = None
        self.processing = False

    async def load(self, fee_plan_id: Optional[str], now: Optional[datetime] = None) -> PaymentPage:
        if not fee_plan_id:
            self.page = PaymentPage(error=FEE_PLAN_REQUIRED_MESSAGE)
            return self.page

        try:
            context = await self.api.get_payment_context(fee_plan_id)
        except ApiError as e:
            logger.error(f"Error fetching payment details for {fee_plan_id}: {e.message}")
            self.page = PaymentPage(
                fee_plan_id=fee_plan_id,
                error=e.message or LOAD_FAILED_MESSAGE,
                can_retry=True,
            )
            return self.page

        plan = context.fee_plan
        status = plan_status(plan, now)
        settled = plan.status == FeePlanStatus.PAID.value
        self.page = PaymentPage(
            fee_plan_id=fee_plan_id,
            context=context,
            status=status,
            badge=status_badge(status),
            amount_display=format_amount(plan.amount),
            settled=settled,
            can_pay=not settled,
            receipt=plan.receipt if settled else None,
        )
        return self.page

    async def create_order(self) -> OrderOutcome:
        page = self.page
        if page is None or page.context is None or not page.can_pay:
            return OrderOutcome(ok=False, toast=Toast.error(SESSION_FAILED_MESSAGE))

        context = page.context
        request = CreateOrderRequest(
            fee_plan_id=context.fee_plan.id,
            member_id=context.member.id,
            provider_id=context.provider.id or "",
            consumer_id=self.session.consumer_id if self.session else None,
        )
        self.processing = True
        try:
            order: GatewayOrder = await self.api.create_order(request)
        except ApiError as e:
            logger.error(f"Error creating order for fee plan {context.fee_plan.id}: {e.message}")
            return OrderOutcome(ok=False, toast=Toast.error(e.message))
        finally:
            self.processing = False

        if not order.payment_session_id or not order.order_id:
            logger.error(f"Gateway order for fee plan {context.fee_plan.id} has no session")
            return OrderOutcome(ok=False, toast=Toast.error(SESSION_FAILED_MESSAGE))

        logger.info(f"Created order {order.order_id} for fee plan {context.fee_plan.id}")
        return OrderOutcome(
            ok=True,
            order_id=order.order_id,
            payment_session_id=order.payment_session_id,
            gateway_mode=get_settings().PAYMENT_GATEWAY_MODE,
        )

    def interpret(self, result: CheckoutResult, order_id: str) -> Outcome:
        return interpret_checkout(result, order_id)

    async def pay(self) -> Outcome:
        """Create an order and run the hosted checkout for it."""
        if self.gateway is None:
            raise RuntimeError("No checkout gateway configured")

        created = await self.create_order()
        if not created.ok:
            return created

        self.processing = True
        try:
            result = await self.gateway.checkout(payment_session_id=created.payment_session_id)
        except Exception:
            logger.exception(f"Checkout failed for order {created.order_id}")
            return Outcome(ok=False, toast=Toast.error(CHECKOUT_FAILED_MESSAGE))
        finally:
            self.processing = False
        return interpret_checkout(result, created.order_id)
