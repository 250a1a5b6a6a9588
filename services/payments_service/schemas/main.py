from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from pydantic import Field, computed_field, model_validator

from libs.common.api_client import ApiModel
from services.fees_service.schemas import FeePlan, Member
from services.memberships_service.schemas import ProviderSummary
from services.payments_service.schemas.enums import TransactionStatus


class PaymentContext(ApiModel):
    """Everything the pay page needs for one fee plan."""

    fee_plan: FeePlan = Field(alias="feePlan")
    member: Member
    provider: ProviderSummary


class CreateOrderRequest(ApiModel):
    fee_plan_id: str = Field(alias="feePlanId")
    member_id: str = Field(alias="memberId")
    provider_id: str = Field(alias="providerId")
    consumer_id: Optional[str] = Field(default=None, alias="consumerId")


class GatewayOrder(ApiModel):
    """Order created with the payment gateway. Field names are the gateway's."""

    order_id: Optional[str] = None
    payment_session_id: Optional[str] = None
    order_amount: Optional[Decimal] = None
    order_currency: Optional[str] = None
    order_status: Optional[str] = None


class CheckoutResult(ApiModel):
    """What the hosted checkout reported back. At most one field is set."""

    error: Optional[Any] = None
    redirect: bool = False
    payment_details: Optional[dict] = Field(default=None, alias="paymentDetails")


class Order(ApiModel):
    id: str
    external_order_id: Optional[str] = Field(default=None, alias="externalOrderId")
    amount: Optional[Decimal] = None
    currency: Optional[str] = None
    status: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_gateway_names(cls, data):
        # The gateway's own order entity uses order_id / order_status.
        if isinstance(data, dict):
            data = dict(data)
            data.setdefault("id", data.get("order_id"))
            data.setdefault("status", data.get("order_status"))
            data.setdefault("amount", data.get("order_amount"))
            data.setdefault("currency", data.get("order_currency"))
        return data


class Transaction(ApiModel):
    id: str
    external_payment_id: Optional[str] = Field(default=None, alias="externalPaymentId")
    amount: Decimal = Decimal("0")
    status: str = TransactionStatus.PENDING.value
    payment_time: Optional[datetime] = Field(default=None, alias="paymentTime")
    payment_currency: Optional[str] = Field(default="INR", alias="paymentCurrency")
    payment_message: Optional[str] = Field(default=None, alias="paymentMessage")
    bank_reference: Optional[str] = Field(default=None, alias="bankReference")
    payment_group: Optional[str] = Field(default=None, alias="paymentGroup")
    payment_gateway: Optional[str] = Field(default=None, alias="paymentGateway")
    order_id: Optional[str] = Field(default=None, alias="orderId")
    fee_plan: Optional[dict] = Field(default=None, alias="feePlan")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")


class VerifiedOrder(ApiModel):
    order: Order
    payments: list[Transaction] = Field(default_factory=list)
    receipt: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def accept_bare_order(cls, data):
        if isinstance(data, dict) and "order" not in data:
            return {"order": data}
        return data


class HistoryQuery(ApiModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    status: Optional[TransactionStatus] = None
    start_date: Optional[date] = Field(default=None, alias="startDate")
    end_date: Optional[date] = Field(default=None, alias="endDate")
    search: Optional[str] = None


class Pagination(ApiModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0

    @computed_field
    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages

    @computed_field
    @property
    def has_prev_page(self) -> bool:
        return self.page > 1


class HistorySummary(ApiModel):
    total_transactions: int = Field(default=0, alias="totalTransactions")
    total_amount: Decimal = Field(default=Decimal("0"), alias="totalAmount")
    successful_payments: int = Field(default=0, alias="successfulPayments")
    successful_amount: Decimal = Field(default=Decimal("0"), alias="successfulAmount")
