"""Payment endpoints of the REST API."""

from typing import Optional

from libs.common.api_client import ApiClient, ApiError, unwrap
from services.payments_service.schemas import (
    CreateOrderRequest,
    GatewayOrder,
    HistoryQuery,
    HistoryScope,
    HistorySummary,
    Pagination,
    PaymentContext,
    Transaction,
    VerifiedOrder,
)

FEE_PLAN_CONTEXT_PATH = "/api/v1/fee-plans/{fee_plan_id}"
CREATE_ORDER_PATH = "/api/v1/pg/create-order"
VERIFY_ORDER_PATH = "/api/v1/pg/verify-order"

HISTORY_PATHS = {
    HistoryScope.CONSUMER: "/api/v1/consumer/payment-history",
    HistoryScope.PROVIDER: "/api/v1/provider/payments",
    HistoryScope.MODERATOR: "/api/v1/moderator/transactions",
}
HISTORY_OWNER_PARAMS = {
    HistoryScope.CONSUMER: "consumerId",
    HistoryScope.PROVIDER: "providerId",
}


def _first(raw: dict, *keys, default=0):
    for key in keys:
        if raw.get(key) is not None:
            return raw[key]
    return default


def parse_pagination(raw: Optional[dict], query: HistoryQuery) -> Pagination:
    """Each listing names its pagination fields differently."""
    raw = raw or {}
    return Pagination(
        page=_first(raw, "currentPage", "page", default=query.page),
        limit=_first(raw, "limit", "itemsPerPage", default=query.limit),
        total=_first(raw, "totalCount", "totalItems", "total"),
        total_pages=_first(raw, "totalPages"),
    )


class PaymentApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_payment_context(self, fee_plan_id: str) -> PaymentContext:
        body = await self.client.get(
            FEE_PLAN_CONTEXT_PATH.format(fee_plan_id=fee_plan_id),
            default_error="Failed to load payment details",
        )
        data = unwrap(body)
        if not data:
            raise ApiError("Fee plan not found", status_code=404)
        return PaymentContext.model_validate(data)

    async def create_order(self, request: CreateOrderRequest) -> GatewayOrder:
        body = await self.client.post(
            CREATE_ORDER_PATH,
            json=request.model_dump(by_alias=True, exclude_none=True),
            default_error="Payment failed. Please try again.",
        )
        return GatewayOrder.model_validate(body or {})

    async def verify_order(self, order_id: str) -> VerifiedOrder:
        body = await self.client.get(
            VERIFY_ORDER_PATH,
            params={"orderId": order_id},
            default_error="Failed to verify payment",
        )
        return VerifiedOrder.model_validate(body)

    async def list_transactions(
        self,
        scope: HistoryScope,
        query: HistoryQuery,
        owner_id: Optional[str] = None,
    ) -> tuple[list[Transaction], Pagination, Optional[HistorySummary]]:
        params = query.model_dump(by_alias=True, exclude_none=True, mode="json")
        owner_param = HISTORY_OWNER_PARAMS.get(scope)
        if owner_param:
            params[owner_param] = owner_id

        body = await self.client.get(
            HISTORY_PATHS[scope],
            params=params,
            default_error="Failed to load payment history",
        )
        data = unwrap(body) or {}
        rows = data.get("transactions")
        if rows is None:
            rows = data.get("payments") or []
        summary = data.get("summary")
        return (
            [Transaction.model_validate(row) for row in rows],
            parse_pagination(data.get("pagination"), query),
            HistorySummary.model_validate(summary) if summary else None,
        )
