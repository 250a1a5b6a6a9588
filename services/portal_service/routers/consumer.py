"""Payer portal endpoints: membership linking, schedules and payments."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from libs.auth.dependencies import get_consumer_session
from libs.auth.models import ConsumerSession
from libs.common.api_client import ApiClient
from libs.common.logging import get_logger
from libs.common.rate_limit import claim_limit, lookup_limit, payment_limit
from libs.common.ui import CONSUMER_SLUG, Outcome
from services.memberships_service.client import MembershipApi
from services.memberships_service.regions import is_region
from services.memberships_service.schedule import MembershipSchedule, load_schedule
from services.memberships_service.schemas import (
    MemberDetails,
    ProviderCategory,
    ProviderSearchResult,
)
from services.memberships_service.search import ProviderSearch
from services.memberships_service.wizard import (
    MEMBER_NOT_FOUND_MESSAGE,
    claim_membership,
    normalize_unique_id,
)
from services.payments_service.client import PaymentApi
from services.payments_service.flow import OrderOutcome, PaymentFlow, PaymentPage
from services.payments_service.history import PaymentHistoryPage, load_history
from services.payments_service.schemas import HistoryQuery
from services.payments_service.verification import VerificationPage, verify_payment
from services.portal_service.dependencies import get_api_client, history_query
from services.portal_service.schemas import (
    CheckoutResultBody,
    ClaimMembershipRequest,
    CreateOrderBody,
)

logger = get_logger(__name__)
router = APIRouter(prefix=f"/{CONSUMER_SLUG}", tags=["consumer"])


# ---------------------------------------------------------------------------
# Memberships
# ---------------------------------------------------------------------------


@router.get("/providers/search", response_model=list[ProviderSearchResult])
async def search_providers(
    category: ProviderCategory,
    region: str,
    q: str = Query("", alias="search"),
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    """Providers matching the query in one category and region.

    Debouncing happens in the browser; this runs the search immediately.
    """
    if not is_region(region):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown region: {region}"
        )
    return await ProviderSearch(MembershipApi(client)).fetch(category, region, q)


@router.get("/members/lookup", response_model=MemberDetails)
@lookup_limit
async def lookup_member(
    request: Request,
    provider_id: str = Query(..., alias="providerId"),
    unique_id: str = Query(..., alias="uniqueId"),
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    """Member record of a provider, found by its unique id."""
    unique_id = normalize_unique_id(unique_id)
    if not unique_id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=MEMBER_NOT_FOUND_MESSAGE)
    return await MembershipApi(client).get_member_by_unique_id(
        provider_id=provider_id, unique_id=unique_id
    )


@router.post("/memberships/claim", response_model=Outcome)
@claim_limit
async def claim(
    request: Request,
    payload: ClaimMembershipRequest,
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    """Link a member record to the signed-in payer."""
    return await claim_membership(
        MembershipApi(client),
        session,
        provider_id=payload.provider_id,
        member_unique_id=normalize_unique_id(payload.member_unique_id),
    )


@router.get("/memberships/{membership_id}/schedule", response_model=MembershipSchedule)
async def get_schedule(
    membership_id: str,
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    return await load_schedule(MembershipApi(client), membership_id)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


@router.get("/pay", response_model=PaymentPage)
async def get_payment_page(
    fee_plan_id: Optional[str] = Query(None, alias="feePlanId"),
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    return await PaymentFlow(PaymentApi(client), session).load(fee_plan_id)


@router.post("/pay/order", response_model=OrderOutcome)
@payment_limit
async def create_order(
    request: Request,
    payload: CreateOrderBody,
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    """Open a gateway order; the browser runs the checkout with its session id."""
    flow = PaymentFlow(PaymentApi(client), session)
    page = await flow.load(payload.fee_plan_id)
    if page.error:
        logger.info(f"Order refused for fee plan {payload.fee_plan_id}: {page.error}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=page.error)
    return await flow.create_order()


@router.post("/pay/checkout-result", response_model=Outcome)
async def report_checkout_result(
    payload: CheckoutResultBody,
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    """What the page does once the hosted checkout has returned."""
    return PaymentFlow(PaymentApi(client), session).interpret(payload.result, payload.order_id)


@router.get("/pay/verify", response_model=VerificationPage)
async def verify(
    order_id: Optional[str] = Query(None, alias="orderId"),
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    return await verify_payment(PaymentApi(client), order_id)


@router.get("/payment-history", response_model=PaymentHistoryPage)
async def payment_history(
    query: HistoryQuery = Depends(history_query),
    session: ConsumerSession = Depends(get_consumer_session),
    client: ApiClient = Depends(get_api_client),
):
    return await load_history(PaymentApi(client), session, query)
