"""Shared FastAPI dependencies for the portal routers."""

from datetime import date
from typing import Optional

from fastapi import Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from libs.auth.dependencies import forwarded_cookies
from libs.common.api_client import ApiClient
from services.moderation_service.schemas import OrganisationFilter, UserFilter
from services.payments_service.schemas import HistoryQuery, TransactionStatus


def get_api_client(request: Request) -> ApiClient:
    """API client that acts on behalf of the caller's identity cookies."""
    return ApiClient().with_cookies(forwarded_cookies(request))


def history_query(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    status: Optional[TransactionStatus] = Query(None),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    search: Optional[str] = Query(None),
) -> HistoryQuery:
    """Pagination and filters shared by every payment history listing."""
    return HistoryQuery(
        page=page,
        limit=limit,
        status=status,
        start_date=start_date,
        end_date=end_date,
        search=search,
    )


def _filter_model(model_cls, **values):
    try:
        return model_cls(**values)
    except ValidationError as e:
        raise RequestValidationError(e.errors())


def organisation_filter(
    status: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    search: str = Query(""),
) -> OrganisationFilter:
    """Organisation listing filters; ``ALL`` or absent means unfiltered."""
    return _filter_model(OrganisationFilter, status=status, type=type, category=category, search=search)


def user_filter(
    verification: Optional[str] = Query(None),
    membership: Optional[str] = Query(None),
    search: str = Query(""),
) -> UserFilter:
    return _filter_model(UserFilter, verification=verification, membership=membership, search=search)
