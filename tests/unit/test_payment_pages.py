"""Unit tests for payment verification, payment history and payment schedules."""

from decimal import Decimal

import pytest

from libs.common.ui import BadgeVariant
from services.memberships_service.client import MembershipApi
from services.memberships_service.schedule import build_schedule, load_schedule
from services.memberships_service.schemas import MembershipDetail
from services.payments_service.client import (
    HISTORY_PATHS,
    VERIFY_ORDER_PATH,
    PaymentApi,
    parse_pagination,
)
from services.payments_service.history import load_history, transaction_badge
from services.payments_service.schemas import HistoryQuery, HistoryScope, TransactionStatus
from services.payments_service.verification import (
    MISSING_ORDER_MESSAGE,
    status_info,
    verify_payment,
)
from tests.conftest import NOW
from tests.factories import (
    FeePlanFactory,
    MembershipFactory,
    TransactionFactory,
    envelope,
    error_body,
)

# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.unit
async def test_verify_without_order_id(api_client, api_stub):
    page = await verify_payment(PaymentApi(api_client), None)

    assert page.error == MISSING_ORDER_MESSAGE
    assert api_stub.requests == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_verify_paid_order(api_client, api_stub):
    api_stub.on(
        "GET",
        VERIFY_ORDER_PATH,
        json={
            "order": {"order_id": "order_1", "order_status": "PAID", "order_amount": 1500},
            "payments": [TransactionFactory.create()],
            "receipt": "https://receipts.example/order_1.pdf",
        },
    )

    page = await verify_payment(PaymentApi(api_client), "order_1")

    assert page.status == "PAID"
    assert page.info.title == "Payment Successful!"
    assert page.toast.message == "Payment successful!"
    assert len(page.payments) == 1
    assert page.receipt.endswith("order_1.pdf")
    assert api_stub.requests[0].url.params["orderId"] == "order_1"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_verify_accepts_bare_order(api_client, api_stub):
    api_stub.on("GET", VERIFY_ORDER_PATH, json={"order_id": "order_1", "order_status": "ACTIVE"})

    page = await verify_payment(PaymentApi(api_client), "order_1")

    assert page.info.title == "Payment Processing"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_verify_failure_shows_error(api_client, api_stub):
    api_stub.on("GET", VERIFY_ORDER_PATH, status_code=502, json=error_body("Gateway timeout"))

    page = await verify_payment(PaymentApi(api_client), "order_1")

    assert page.error == "Gateway timeout"
    assert page.toast.message == "Gateway timeout"


@pytest.mark.unit
def test_status_info_table():
    assert status_info("FAILED").badge.variant == BadgeVariant.DESTRUCTIVE
    assert status_info("PENDING") == status_info("ACTIVE")
    unknown = status_info("EXPIRED")
    assert unknown.title == "Payment Status Unknown"
    assert unknown.badge.label == "EXPIRED"
    assert unknown.toast is None


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_transaction_badges():
    assert transaction_badge(TransactionStatus.SUCCESS.value).label == "Successful"
    assert transaction_badge("USER_DROPPED").label == "Dropped"
    assert transaction_badge("MYSTERY").label == "MYSTERY"


@pytest.mark.unit
@pytest.mark.parametrize(
    "raw",
    [
        {"currentPage": 2, "totalPages": 5, "totalCount": 48, "limit": 10},
        {"page": 2, "totalPages": 5, "totalItems": 48, "itemsPerPage": 10},
        {"page": 2, "totalPages": 5, "total": 48, "limit": 10},
    ],
)
def test_pagination_shapes(raw):
    pagination = parse_pagination(raw, HistoryQuery())

    assert (pagination.page, pagination.total, pagination.total_pages) == (2, 48, 5)
    assert pagination.has_next_page
    assert pagination.has_prev_page


@pytest.mark.asyncio
@pytest.mark.unit
async def test_consumer_history_filters_by_consumer(api_client, api_stub, consumer_session):
    api_stub.on(
        "GET",
        HISTORY_PATHS[HistoryScope.CONSUMER],
        json=envelope(
            {
                "transactions": [TransactionFactory.create(amount=2500.5)],
                "pagination": {"currentPage": 1, "totalPages": 1, "totalCount": 1},
                "summary": {"totalTransactions": 1, "totalAmount": 2500.5},
            }
        ),
    )
    query = HistoryQuery(page=1, status=TransactionStatus.SUCCESS, search="tuition")

    page = await load_history(PaymentApi(api_client), consumer_session, query)

    params = api_stub.requests[0].url.params
    assert params["consumerId"] == "cons-1"
    assert params["status"] == "SUCCESS"
    assert params["search"] == "tuition"
    assert "startDate" not in params
    assert page.rows[0].amount_display == "₹2,500.50"
    assert page.summary.total_amount == Decimal("2500.5")
    assert not page.pagination.has_next_page


@pytest.mark.asyncio
@pytest.mark.unit
async def test_provider_history_reads_payments_key(api_client, api_stub, provider_session):
    api_stub.on(
        "GET",
        HISTORY_PATHS[HistoryScope.PROVIDER],
        json=envelope({"payments": [TransactionFactory.create(), TransactionFactory.create()]}),
    )

    page = await load_history(PaymentApi(api_client), provider_session)

    assert page.scope == HistoryScope.PROVIDER
    assert len(page.rows) == 2
    assert api_stub.requests[0].url.params["providerId"] == "prov-1"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_moderator_history_has_no_owner_filter(api_client, api_stub, moderator_session):
    api_stub.on("GET", HISTORY_PATHS[HistoryScope.MODERATOR], json=envelope({"transactions": []}))

    page = await load_history(PaymentApi(api_client), moderator_session)

    params = api_stub.requests[0].url.params
    assert "consumerId" not in params and "providerId" not in params
    assert page.rows == []


# ---------------------------------------------------------------------------
# Schedule
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_schedule_orders_plans_and_sums_pending():
    detail = MembershipDetail.model_validate(
        MembershipFactory.create(
            id="ms-1",
            fee_plans=[
                FeePlanFactory.create(id="paid", status="PAID", amount=1000, dueDate="2024-01-01T00:00:00.000Z"),
                FeePlanFactory.create(id="june", amount=1500, dueDate="2024-06-01T00:00:00.000Z"),
                FeePlanFactory.create(id="march", amount=500, dueDate="2024-03-01T00:00:00.000Z"),
            ],
        )
    )

    schedule = build_schedule(detail, NOW)

    assert [e.plan.id for e in schedule.entries] == ["march", "june", "paid"]
    assert [e.badge.label for e in schedule.entries] == ["Overdue", "Due", "Paid"]
    assert [e.can_pay for e in schedule.entries] == [True, True, False]
    assert schedule.total_display == "₹3,000"
    assert schedule.pending_amount == Decimal("2000")
    assert schedule.member_name == "Meera Iyer"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_load_schedule_fetches_membership(api_client, api_stub):
    api_stub.on(
        "GET",
        "/api/v1/consumer/memberships/ms-1",
        json=envelope(MembershipFactory.create(id="ms-1", fee_plans=[])),
    )

    schedule = await load_schedule(MembershipApi(api_client), "ms-1", NOW)

    assert schedule.plan_count == 0
    assert schedule.pending_display == "₹0"
