"""Bank account form for provider payouts.

Only formats are checked here. The account holder name always comes from the
provider profile.
"""

from typing import Any, Optional

from pydantic import Field

from libs.auth.models import AccountType, ProviderSession
from libs.common.api_client import ApiError
from libs.common.logging import get_logger
from libs.common.ui import PROVIDER_SLUG, Navigation, Outcome, Toast
from services.kyc_service import validators
from services.wallet_service.client import WalletApi
from services.wallet_service.schemas import BankAccount, BankAccountForm

logger = get_logger(__name__)

BANK_ACCOUNTS_PAGE = f"/{PROVIDER_SLUG}/wallet/bank"


class BankSubmitOutcome(Outcome):
    errors: dict[str, str] = Field(default_factory=dict)
    account: Optional[BankAccount] = None


def holder_name(session: ProviderSession) -> str:
    if session.account_type == AccountType.INDIVIDUAL:
        return session.admin_name
    return session.name


def prefill(session: ProviderSession) -> BankAccountForm:
    return BankAccountForm(acc_name=holder_name(session), acc_phone=session.phone)


def validate_bank_account(form: BankAccountForm) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not form.acc_number.strip():
        errors["accNumber"] = "Account number is required"
    elif not validators.bank_account(form.acc_number):
        errors["accNumber"] = "Account number must be 9-18 digits"

    if not form.ifsc.strip():
        errors["ifsc"] = "IFSC code is required"
    elif not validators.ifsc(form.ifsc.upper()):
        errors["ifsc"] = "Invalid IFSC code format"

    if not form.acc_name.strip():
        errors["accName"] = "Account holder name is required"
    elif len(form.acc_name.strip()) < 2:
        errors["accName"] = "Account holder name must be at least 2 characters"

    if not form.acc_phone.strip():
        errors["accPhone"] = "Phone number is required"
    elif not validators.phone(form.acc_phone):
        errors["accPhone"] = "Phone number must be exactly 10 digits"

    if form.vpa.strip() and not validators.vpa(form.vpa):
        errors["vpa"] = "Invalid UPI ID format (e.g., user@paytm)"

    return errors


def to_payload(form: BankAccountForm) -> dict[str, Any]:
    payload = {
        "accNumber": form.acc_number.strip(),
        "ifsc": form.ifsc.strip().upper(),
        "accName": form.acc_name.strip(),
        "accPhone": form.acc_phone.strip(),
        "isDefault": form.is_default,
    }
    if form.vpa.strip():
        payload["vpa"] = form.vpa.strip()
    return payload


async def add_bank_account(
    api: WalletApi, session: ProviderSession, form: BankAccountForm
) -> BankSubmitOutcome:
    # The holder name is taken from the profile, whatever the client sent.
    form = form.model_copy(update={"acc_name": holder_name(session)})
    errors = validate_bank_account(form)
    if errors:
        return BankSubmitOutcome(ok=False, errors=errors)

    try:
        account = await api.add_bank_account(session.provider_id, to_payload(form))
    except ApiError as e:
        logger.error(f"Error adding bank account for provider {session.provider_id}: {e.message}")
        return BankSubmitOutcome(ok=False, toast=Toast.error(e.message))

    logger.info(f"Bank account added for provider {session.provider_id}")
    return BankSubmitOutcome(
        ok=True,
        toast=Toast.success("Bank account added successfully!"),
        navigate=Navigation(path=BANK_ACCOUNTS_PAGE),
        account=account,
    )
