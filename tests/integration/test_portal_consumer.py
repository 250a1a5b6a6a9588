"""Integration tests for the payer portal endpoints."""

import pytest

from services.memberships_service.client import (
    CLAIM_MEMBERSHIP_PATH,
    MEMBER_LOOKUP_PATH,
    PROVIDER_SEARCH_PATH,
)
from services.payments_service.client import (
    CREATE_ORDER_PATH,
    HISTORY_PATHS,
    VERIFY_ORDER_PATH,
)
from services.payments_service.schemas import HistoryScope
from tests.factories import (
    FeePlanFactory,
    MemberFactory,
    MembershipFactory,
    PaymentContextFactory,
    ProviderFactory,
    TransactionFactory,
    envelope,
    error_body,
)

CONTEXT_PATH = "/api/v1/fee-plans/fp-1"


# ---------------------------------------------------------------------------
# Memberships
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_search_providers(client, api_stub, consumer_cookies):
    """GET /user/providers/search: forwards category, region and query."""
    api_stub.on("GET", PROVIDER_SEARCH_PATH, json=envelope({"providers": [ProviderFactory.create()]}))
    client.cookies.update(consumer_cookies)

    response = await client.get(
        "/user/providers/search",
        params={"category": "EDUCATIONAL", "region": "KA", "search": " sun "},
    )

    assert response.status_code == 200, response.text
    assert response.json()[0]["name"] == "Sunrise Academy"
    params = api_stub.requests[0].url.params
    assert params["search"] == "sun"
    assert params["region"] == "KA"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_search_providers_short_query(client, api_stub, consumer_cookies):
    """GET /user/providers/search: one character returns nothing without a call."""
    client.cookies.update(consumer_cookies)

    response = await client.get(
        "/user/providers/search", params={"category": "EDUCATIONAL", "region": "KA", "search": "s"}
    )

    assert response.json() == []
    assert api_stub.requests == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_search_providers_unknown_region(client, consumer_cookies):
    """GET /user/providers/search: 400 for a region outside the list."""
    client.cookies.update(consumer_cookies)

    response = await client.get(
        "/user/providers/search", params={"category": "EDUCATIONAL", "region": "ZZ", "search": "sun"}
    )

    assert response.status_code == 400


@pytest.mark.asyncio
@pytest.mark.integration
async def test_lookup_member(client, api_stub, consumer_cookies):
    """GET /user/members/lookup: unique id is trimmed and upper-cased."""
    api_stub.on("GET", MEMBER_LOOKUP_PATH, json={"success": True, "member": MemberFactory.create()})
    client.cookies.update(consumer_cookies)

    response = await client.get(
        "/user/members/lookup", params={"providerId": "prov-1", "uniqueId": " stu001 "}
    )

    assert response.status_code == 200, response.text
    assert response.json()["uniqueId"] == "STU001"
    assert api_stub.requests[0].url.params["uniqueId"] == "STU001"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_lookup_member_not_found(client, api_stub, consumer_cookies):
    """GET /user/members/lookup: API 404 is passed through."""
    api_stub.on("GET", MEMBER_LOOKUP_PATH, status_code=404, json=error_body("Member not found"))
    client.cookies.update(consumer_cookies)

    response = await client.get(
        "/user/members/lookup", params={"providerId": "prov-1", "uniqueId": "NOPE"}
    )

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Member not found"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_claim_twice_lands_on_same_schedule(client, api_stub, consumer_cookies):
    """POST /user/memberships/claim: a repeated claim redirects to the existing membership."""
    api_stub.on("POST", CLAIM_MEMBERSHIP_PATH, json=envelope({"id": "ms-1"}))
    api_stub.on(
        "POST",
        CLAIM_MEMBERSHIP_PATH,
        status_code=409,
        json=error_body("Membership already claimed", data={"membershipId": "ms-1"}),
    )
    client.cookies.update(consumer_cookies)
    body = {"providerId": "prov-1", "memberUniqueId": "stu001"}

    first = (await client.post("/user/memberships/claim", json=body)).json()
    second = (await client.post("/user/memberships/claim", json=body)).json()

    assert first["ok"] is True
    assert second["ok"] is False
    assert first["navigate"]["path"] == second["navigate"]["path"] == "/user/memberships/ms-1/schedule"
    assert api_stub.body(api_stub.requests[0])["memberUniqueId"] == "STU001"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_membership_schedule(client, api_stub, consumer_cookies):
    """GET /user/memberships/{id}/schedule."""
    api_stub.on(
        "GET",
        "/api/v1/consumer/memberships/ms-1",
        json=envelope(
            MembershipFactory.create(
                id="ms-1",
                fee_plans=[
                    FeePlanFactory.create(amount=1000, status="PAID"),
                    FeePlanFactory.create(amount=2500),
                ],
            )
        ),
    )
    client.cookies.update(consumer_cookies)

    response = await client.get("/user/memberships/ms-1/schedule")

    assert response.status_code == 200, response.text
    data = response.json()
    assert data["plan_count"] == 2
    assert data["pending_display"] == "₹2,500"
    assert data["entries"][-1]["can_pay"] is False


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
@pytest.mark.integration
async def test_pay_page_without_fee_plan(client, consumer_cookies):
    """GET /user/pay: missing feePlanId is a terminal error."""
    client.cookies.update(consumer_cookies)

    data = (await client.get("/user/pay")).json()

    assert data["error"] == "Fee plan ID is required"
    assert data["can_retry"] is False


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_order_and_report_result(client, api_stub, consumer_cookies):
    """POST /user/pay/order then /user/pay/checkout-result."""
    api_stub.on("GET", CONTEXT_PATH, json=envelope(PaymentContextFactory.create()))
    api_stub.on(
        "POST",
        CREATE_ORDER_PATH,
        json={"order_id": "order_1", "payment_session_id": "session_abc"},
    )
    client.cookies.update(consumer_cookies)

    order = (await client.post("/user/pay/order", json={"feePlanId": "fp-1"})).json()
    result = (
        await client.post(
            "/user/pay/checkout-result",
            json={"orderId": order["order_id"], "result": {"paymentDetails": {"paymentMessage": "ok"}}},
        )
    ).json()

    assert order["ok"] is True
    assert order["payment_session_id"] == "session_abc"
    assert result["navigate"]["path"] == "/user/pay/verify?orderId=order_1"
    assert api_stub.body(api_stub.calls("POST", CREATE_ORDER_PATH)[0])["consumerId"] == "cons-1"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_order_for_unknown_plan(client, api_stub, consumer_cookies):
    """POST /user/pay/order: 400 when the fee plan cannot be loaded."""
    api_stub.on("GET", CONTEXT_PATH, status_code=404, json=error_body("Fee plan not found"))
    client.cookies.update(consumer_cookies)

    response = await client.post("/user/pay/order", json={"feePlanId": "fp-1"})

    assert response.status_code == 400
    assert api_stub.calls("POST", CREATE_ORDER_PATH) == []


@pytest.mark.asyncio
@pytest.mark.integration
async def test_verify_payment(client, api_stub, consumer_cookies):
    """GET /user/pay/verify: failed orders show the failure page."""
    api_stub.on("GET", VERIFY_ORDER_PATH, json={"order_id": "order_1", "order_status": "FAILED"})
    client.cookies.update(consumer_cookies)

    data = (await client.get("/user/pay/verify", params={"orderId": "order_1"})).json()

    assert data["status"] == "FAILED"
    assert data["info"]["title"] == "Payment Failed"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_consumer_payment_history(client, api_stub, consumer_cookies):
    """GET /user/payment-history: scoped to the signed-in payer."""
    api_stub.on(
        "GET",
        HISTORY_PATHS[HistoryScope.CONSUMER],
        json=envelope({"transactions": [TransactionFactory.create(status="FAILED")]}),
    )
    client.cookies.update(consumer_cookies)

    data = (await client.get("/user/payment-history", params={"search": "term"})).json()

    assert data["scope"] == "consumer"
    assert data["rows"][0]["badge"]["label"] == "Failed"
    params = api_stub.requests[0].url.params
    assert params["consumerId"] == "cons-1"
    assert params["search"] == "term"
