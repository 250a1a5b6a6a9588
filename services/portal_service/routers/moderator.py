"""Moderator portal endpoints."""

from fastapi import APIRouter, Depends

from libs.auth.dependencies import get_moderator_session
from libs.auth.models import ModeratorSession
from libs.common.api_client import ApiClient
from libs.common.ui import MODERATOR_SLUG
from services.moderation_service.client import ModerationApi
from services.moderation_service.listings import (
    OrganisationListing,
    UserListing,
    load_organisations,
    load_users,
)
from services.moderation_service.schemas import OrganisationFilter, UserFilter
from services.payments_service.client import PaymentApi
from services.payments_service.history import PaymentHistoryPage, load_history
from services.payments_service.schemas import HistoryQuery
from services.portal_service.dependencies import (
    get_api_client,
    history_query,
    organisation_filter,
    user_filter,
)

router = APIRouter(prefix=f"/{MODERATOR_SLUG}", tags=["moderator"])


@router.get("/transactions", response_model=PaymentHistoryPage)
async def list_transactions(
    query: HistoryQuery = Depends(history_query),
    session: ModeratorSession = Depends(get_moderator_session),
    client: ApiClient = Depends(get_api_client),
):
    """Every transaction on the platform."""
    return await load_history(PaymentApi(client), session, query)


@router.get("/organisations", response_model=OrganisationListing)
async def list_organisations(
    criteria: OrganisationFilter = Depends(organisation_filter),
    session: ModeratorSession = Depends(get_moderator_session),
    client: ApiClient = Depends(get_api_client),
):
    """Provider accounts with their status badges."""
    return await load_organisations(ModerationApi(client), session, criteria)


@router.get("/users", response_model=UserListing)
async def list_users(
    criteria: UserFilter = Depends(user_filter),
    session: ModeratorSession = Depends(get_moderator_session),
    client: ApiClient = Depends(get_api_client),
):
    return await load_users(ModerationApi(client), session, criteria)
