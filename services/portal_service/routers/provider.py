"""Provider portal endpoints."""

from typing import Union

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.datastructures import UploadFile

from libs.auth.dependencies import get_provider_session
from libs.auth.models import AccountType, ProviderSession
from libs.common.api_client import ApiClient
from libs.common.logging import get_logger
from libs.common.ui import PROVIDER_SLUG, Outcome
from services.fees_service.client import FeePlanApi
from services.fees_service.management import FeeManagement, FeeManagementView
from services.kyc_service.client import KycApi
from services.kyc_service.policy import prefill_individual, prefill_organization
from services.kyc_service.schemas import (
    IndividualKycForm,
    KycDocument,
    KycState,
    OrganizationKycForm,
)
from services.kyc_service.submission import (
    KycSubmitOutcome,
    MultipartKeyConflict,
    from_multipart,
    submit_individual,
    submit_organization,
)
from services.kyc_service.workflow import (
    InvalidKycTransition,
    KycStatusPage,
    load_status_page,
    state_after_submit,
)
from services.members_service.client import MemberApi
from services.members_service.forms import (
    LOAD_FAILED_MESSAGE,
    MemberSubmitOutcome,
    add_member,
    load_member_form,
    update_member,
)
from services.members_service.roster import RosterPage, load_roster
from services.members_service.schemas import MemberForm
from services.payments_service.client import PaymentApi
from services.payments_service.history import PaymentHistoryPage, load_history
from services.payments_service.schemas import HistoryQuery
from services.portal_service.dependencies import get_api_client, history_query
from services.portal_service.schemas import (
    FeePlanSaveRequest,
    FeePlanSaveResponse,
    MarkPaidRequest,
)
from services.wallet_service.bank import BankSubmitOutcome, add_bank_account, prefill
from services.wallet_service.client import WalletApi
from services.wallet_service.schemas import BankAccount, BankAccountForm

logger = get_logger(__name__)
router = APIRouter(prefix=f"/{PROVIDER_SLUG}", tags=["provider"])


# ---------------------------------------------------------------------------
# Members
# ---------------------------------------------------------------------------


@router.get("/members", response_model=RosterPage)
async def list_members(
    search: str = Query(""),
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Member roster with fee standing, optionally narrowed by a search term."""
    return await load_roster(MemberApi(client), session, search)


@router.post("/members", response_model=MemberSubmitOutcome)
async def create_member(
    payload: MemberForm,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    return await add_member(MemberApi(client), session, payload)


@router.get("/members/{member_id}", response_model=MemberForm)
async def get_member_form(
    member_id: str,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Edit form prefilled with the member's current details."""
    form = await load_member_form(MemberApi(client), session, member_id)
    if form is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=LOAD_FAILED_MESSAGE)
    return form


@router.put("/members/{member_id}", response_model=MemberSubmitOutcome)
async def edit_member(
    member_id: str,
    payload: MemberForm,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    return await update_member(MemberApi(client), session, member_id, payload)


# ---------------------------------------------------------------------------
# Fee management
# ---------------------------------------------------------------------------


async def _load_management(
    client: ApiClient, session: ProviderSession, member_id: str
) -> FeeManagement:
    management = FeeManagement(FeePlanApi(client), session, member_id)
    if not await management.editor.load():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=management.editor.error)
    return management


@router.get("/members/{member_id}/fee-plans", response_model=FeeManagementView)
async def get_fee_plans(
    member_id: str,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Member details with editable fee-plan rows."""
    management = await _load_management(client, session, member_id)
    return management.view()


@router.post("/members/{member_id}/fee-plans", response_model=FeePlanSaveResponse)
async def save_fee_plans(
    member_id: str,
    payload: FeePlanSaveRequest,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Reconcile the submitted rows against their snapshot and save."""
    management = await _load_management(client, session, member_id)
    editor = management.editor
    editor.restore(payload.rows, payload.snapshot)
    # Settled plans are read-only whatever the client sent.
    editor.enforce_locks()
    report = await editor.save()
    return FeePlanSaveResponse(report=report, view=management.view())


@router.post("/fee-plans/{fee_plan_id}/mark-paid", response_model=Outcome)
async def mark_fee_plan_paid(
    fee_plan_id: str,
    payload: MarkPaidRequest,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Set or clear the offline-paid flag of a fee plan."""
    management = await _load_management(client, session, payload.member_id)
    return await management.mark_paid(fee_plan_id, payload.paid)


# ---------------------------------------------------------------------------
# KYC
# ---------------------------------------------------------------------------


@router.get("/kyc", response_model=KycStatusPage)
async def get_kyc_status(
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    return await load_status_page(KycApi(client), session)


@router.get("/kyc/form", response_model=None)
async def get_kyc_form(session: ProviderSession = Depends(get_provider_session)) -> dict:
    """Blank KYC form for the provider's account type, prefilled from the profile."""
    form: Union[IndividualKycForm, OrganizationKycForm]
    if session.account_type == AccountType.INDIVIDUAL:
        form = prefill_individual(session)
    else:
        form = prefill_organization(session)
    # Both forms accept each other's payload, so serialize here rather than via a Union model.
    return form.model_dump(mode="json", by_alias=True)


async def _ensure_submittable(api: KycApi, session: ProviderSession) -> None:
    verification = await api.get_verification(session.provider_id, session.account_type)
    state = KycState.from_status(verification.status if verification else None)
    try:
        state_after_submit(state)
    except InvalidKycTransition as e:
        logger.warning(f"KYC resubmission refused for provider {session.provider_id}: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


async def _read_kyc_form(request: Request, form_cls):
    form = await request.form()
    data: dict[str, str] = {}
    files: dict[str, KycDocument] = {}
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            if not value.filename:
                continue
            files[key] = KycDocument(
                filename=value.filename,
                content_type=value.content_type or "application/octet-stream",
                content=await value.read(),
            )
        else:
            data[key] = value
    try:
        return from_multipart(form_cls, data, files)
    except MultipartKeyConflict as e:
        raise RequestValidationError(
            [{"type": "value_error", "loc": ("body", e.key), "msg": str(e), "input": None}]
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())


@router.post("/kyc/organization", response_model=KycSubmitOutcome)
async def submit_organization_kyc(
    request: Request,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Submit organization KYC details and documents as multipart form data."""
    api = KycApi(client)
    await _ensure_submittable(api, session)
    form = await _read_kyc_form(request, OrganizationKycForm)
    return await submit_organization(api, session, form)


@router.post("/kyc/individual", response_model=KycSubmitOutcome)
async def submit_individual_kyc(
    request: Request,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Submit individual KYC details and documents as multipart form data."""
    api = KycApi(client)
    await _ensure_submittable(api, session)
    form = await _read_kyc_form(request, IndividualKycForm)
    return await submit_individual(api, session, form)


# ---------------------------------------------------------------------------
# Payout accounts
# ---------------------------------------------------------------------------


@router.get("/wallet/bank", response_model=list[BankAccount])
async def list_bank_accounts(
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    return await WalletApi(client).list_bank_accounts(session.provider_id)


@router.get("/wallet/bank/form", response_model=BankAccountForm)
async def get_bank_account_form(session: ProviderSession = Depends(get_provider_session)):
    return prefill(session)


@router.post("/wallet/bank", response_model=BankSubmitOutcome)
async def create_bank_account(
    payload: BankAccountForm,
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    return await add_bank_account(WalletApi(client), session, payload)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


@router.get("/payments", response_model=PaymentHistoryPage)
async def list_payments(
    query: HistoryQuery = Depends(history_query),
    session: ProviderSession = Depends(get_provider_session),
    client: ApiClient = Depends(get_api_client),
):
    """Payments received by the provider."""
    return await load_history(PaymentApi(client), session, query)
