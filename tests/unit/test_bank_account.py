"""Unit tests for the provider bank account form."""

import pytest

from services.wallet_service.bank import (
    BANK_ACCOUNTS_PAGE,
    add_bank_account,
    holder_name,
    prefill,
    to_payload,
    validate_bank_account,
)
from services.wallet_service.client import BANK_ACCOUNT_PATH, WalletApi
from services.wallet_service.schemas import BankAccountForm
from tests.factories import BankAccountFactory, envelope, error_body


def _form(**overrides) -> BankAccountForm:
    defaults = {
        "acc_number": "123456789012",
        "ifsc": "hdfc0001234",
        "acc_name": "Anyone",
        "acc_phone": "9876543210",
    }
    defaults.update(overrides)
    return BankAccountForm(**defaults)


@pytest.mark.unit
def test_holder_name_follows_account_type(provider_session, individual_session):
    assert holder_name(provider_session) == provider_session.name
    assert holder_name(individual_session) == individual_session.admin_name


@pytest.mark.unit
def test_prefill_uses_profile(provider_session):
    form = prefill(provider_session)

    assert form.acc_name == provider_session.name
    assert form.acc_phone == provider_session.phone
    assert form.acc_number == ""


@pytest.mark.unit
def test_validation_messages():
    errors = validate_bank_account(
        _form(acc_number="12ab", ifsc="", acc_name="A", acc_phone="12345", vpa="not-a-vpa")
    )

    assert errors == {
        "accNumber": "Account number must be 9-18 digits",
        "ifsc": "IFSC code is required",
        "accName": "Account holder name must be at least 2 characters",
        "accPhone": "Phone number must be exactly 10 digits",
        "vpa": "Invalid UPI ID format (e.g., user@paytm)",
    }


@pytest.mark.unit
def test_lowercase_ifsc_is_accepted_and_uppercased():
    form = _form(vpa=" asha@okhdfc ")

    assert validate_bank_account(form) == {}
    payload = to_payload(form)
    assert payload["ifsc"] == "HDFC0001234"
    assert payload["vpa"] == "asha@okhdfc"


@pytest.mark.unit
def test_blank_vpa_is_omitted():
    assert "vpa" not in to_payload(_form())


@pytest.mark.asyncio
@pytest.mark.unit
async def test_add_overrides_holder_name_from_profile(api_client, api_stub, provider_session):
    api_stub.on("POST", BANK_ACCOUNT_PATH, json=envelope(BankAccountFactory.create()))

    outcome = await add_bank_account(WalletApi(api_client), provider_session, _form(acc_name="Someone Else"))

    assert outcome.ok
    assert outcome.toast.message == "Bank account added successfully!"
    assert outcome.navigate.path == BANK_ACCOUNTS_PAGE
    assert outcome.account.bank_name == "HDFC Bank"
    [call] = api_stub.requests
    assert call.url.params["providerId"] == "prov-1"
    assert api_stub.body(call)["accName"] == provider_session.name


@pytest.mark.asyncio
@pytest.mark.unit
async def test_invalid_form_is_not_sent(api_client, api_stub, provider_session):
    outcome = await add_bank_account(WalletApi(api_client), provider_session, _form(acc_number=""))

    assert not outcome.ok
    assert outcome.errors == {"accNumber": "Account number is required"}
    assert api_stub.requests == []


@pytest.mark.asyncio
@pytest.mark.unit
async def test_server_rejection_becomes_toast(api_client, api_stub, provider_session):
    api_stub.on("POST", BANK_ACCOUNT_PATH, status_code=400, json=error_body("Account already exists"))

    outcome = await add_bank_account(WalletApi(api_client), provider_session, _form())

    assert not outcome.ok
    assert outcome.toast.message == "Account already exists"
    assert outcome.navigate is None
