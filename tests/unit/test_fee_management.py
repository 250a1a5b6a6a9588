"""Unit tests for the provider fee-management screen."""

import pytest

from libs.auth.models import AccountType
from services.fees_service.client import FEEPLAN_PATH, MARK_PAID_PATH, FeePlanApi
from services.fees_service.management import (
    PAID_ONLINE_MESSAGE,
    FeeManagement,
    config_for,
)
from tests.conftest import NOW
from tests.factories import FeePlanFactory, MemberFactory, envelope, error_body


async def _management(api_client, api_stub, session, plans) -> FeeManagement:
    api_stub.on("GET", FEEPLAN_PATH, json=envelope(MemberFactory.create(feePlans=plans)))
    management = FeeManagement(FeePlanApi(api_client), session, "mem-1")
    assert await management.editor.load()
    return management


@pytest.mark.unit
def test_offline_marking_depends_on_account_type(provider_session, individual_session):
    assert config_for(provider_session).allow_offline_marking
    assert config_for(individual_session).account_type == AccountType.INDIVIDUAL
    assert not config_for(individual_session).allow_offline_marking


@pytest.mark.asyncio
@pytest.mark.unit
async def test_view_row_permissions(api_client, api_stub, provider_session):
    plans = [
        FeePlanFactory.create(id="due", dueDate="2024-04-01T00:00:00.000Z"),
        FeePlanFactory.create(id="online", status="PAID"),
        FeePlanFactory.create(id="offline", status="PAID", isOfflinePaid=True),
    ]
    management = await _management(api_client, api_stub, provider_session, plans)

    rows = {view.row.id: view for view in management.view(NOW).rows}

    assert rows["due"].badge.label == "Overdue"
    assert rows["due"].can_edit and rows["due"].can_remove and rows["due"].can_mark_paid
    assert not rows["online"].can_edit
    assert not rows["online"].can_mark_paid
    assert not rows["online"].can_unmark_paid
    assert rows["offline"].badge.label == "Offline Paid"
    assert rows["offline"].can_unmark_paid


@pytest.mark.asyncio
@pytest.mark.unit
async def test_individual_providers_cannot_mark_offline(api_client, api_stub, individual_session):
    management = await _management(
        api_client, api_stub, individual_session, [FeePlanFactory.create(id="a")]
    )

    assert not management.view(NOW).rows[0].can_mark_paid
    outcome = await management.mark_paid("a", True)
    assert not outcome.ok
    assert api_stub.calls("POST", MARK_PAID_PATH) == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_mark_paid_sends_flag_and_reloads(api_client, api_stub, provider_session):
    management = await _management(
        api_client, api_stub, provider_session, [FeePlanFactory.create(id="a")]
    )
    api_stub.on(
        "POST",
        MARK_PAID_PATH,
        json=envelope(FeePlanFactory.create(id="a", status="PAID", isOfflinePaid=True)),
    )

    outcome = await management.mark_paid("a", True)

    assert outcome.ok
    assert outcome.toast.message == "Fee marked as paid successfully!"
    [call] = api_stub.calls("POST", MARK_PAID_PATH)
    assert api_stub.body(call) == {
        "feePlanId": "a",
        "isOfflinePaid": True,
        "providerId": "prov-1",
    }
    assert len(api_stub.calls("GET", FEEPLAN_PATH)) == 2


@pytest.mark.asyncio
@pytest.mark.unit
async def test_unmark_offline_paid(api_client, api_stub, provider_session):
    management = await _management(
        api_client,
        api_stub,
        provider_session,
        [FeePlanFactory.create(id="a", status="PAID", isOfflinePaid=True)],
    )
    api_stub.on("POST", MARK_PAID_PATH, json=envelope(FeePlanFactory.create(id="a")))

    outcome = await management.mark_paid("a", False)

    assert outcome.ok
    assert outcome.toast.message == "Fee marked as unpaid successfully!"


@pytest.mark.asyncio
@pytest.mark.unit
async def test_online_payment_cannot_be_toggled(api_client, api_stub, provider_session):
    management = await _management(
        api_client, api_stub, provider_session, [FeePlanFactory.create(id="a", status="PAID")]
    )

    outcome = await management.mark_paid("a", False)

    assert not outcome.ok
    assert outcome.toast.message == PAID_ONLINE_MESSAGE
    assert api_stub.calls("POST", MARK_PAID_PATH) == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_mark_paid_failure_shows_server_message(api_client, api_stub, provider_session):
    management = await _management(
        api_client, api_stub, provider_session, [FeePlanFactory.create(id="a")]
    )
    api_stub.on("POST", MARK_PAID_PATH, status_code=403, json=error_body("Not your member"))

    outcome = await management.mark_paid("a", True)

    assert not outcome.ok
    assert outcome.toast.message == "Not your member"
