"""Payment history listings for payers, providers and moderators.

One query model and one page model serve all three scopes; only the
endpoint and the owner filter differ.
"""

from typing import Optional, Union

from pydantic import BaseModel, Field

from libs.auth.models import ConsumerSession, ModeratorSession, ProviderSession
from libs.common.currency import format_amount
from libs.common.logging import get_logger
from libs.common.ui import Badge, BadgeVariant
from services.payments_service.client import PaymentApi
from services.payments_service.schemas import (
    HistoryQuery,
    HistoryScope,
    HistorySummary,
    Pagination,
    Transaction,
    TransactionStatus,
)

logger = get_logger(__name__)

Session = Union[ConsumerSession, ProviderSession, ModeratorSession]

_TRANSACTION_BADGES = {
    TransactionStatus.SUCCESS.value: Badge(label="Successful", variant=BadgeVariant.SUCCESS),
    TransactionStatus.FAILED.value: Badge(label="Failed", variant=BadgeVariant.DESTRUCTIVE),
    TransactionStatus.PENDING.value: Badge(label="Processing", variant=BadgeVariant.WARNING),
    TransactionStatus.USER_DROPPED.value: Badge(label="Dropped", variant=BadgeVariant.SECONDARY),
    TransactionStatus.CANCELLED.value: Badge(label="Cancelled", variant=BadgeVariant.SECONDARY),
    TransactionStatus.NOT_ATTEMPTED.value: Badge(label="Not Attempted", variant=BadgeVariant.OUTLINE),
    TransactionStatus.FLAGGED.value: Badge(label="Flagged", variant=BadgeVariant.DESTRUCTIVE),
    TransactionStatus.VOID.value: Badge(label="Void", variant=BadgeVariant.OUTLINE),
}


def transaction_badge(status: str) -> Badge:
    return _TRANSACTION_BADGES.get(status) or Badge(label=status, variant=BadgeVariant.OUTLINE)


class TransactionRow(BaseModel):
    transaction: Transaction
    badge: Badge
    amount_display: str


class PaymentHistoryPage(BaseModel):
    scope: HistoryScope
    query: HistoryQuery
    rows: list[TransactionRow] = Field(default_factory=list)
    pagination: Pagination
    summary: Optional[HistorySummary] = None


def scope_of(session: Session) -> tuple[HistoryScope, Optional[str]]:
    if isinstance(session, ConsumerSession):
        return HistoryScope.CONSUMER, session.consumer_id
    if isinstance(session, ProviderSession):
        return HistoryScope.PROVIDER, session.provider_id
    return HistoryScope.MODERATOR, None


async def load_history(
    api: PaymentApi, session: Session, query: Optional[HistoryQuery] = None
) -> PaymentHistoryPage:
    query = query or HistoryQuery()
    scope, owner_id = scope_of(session)
    transactions, pagination, summary = await api.list_transactions(scope, query, owner_id)
    logger.debug(f"Loaded {len(transactions)} {scope.value} transactions (page {pagination.page})")
    return PaymentHistoryPage(
        scope=scope,
        query=query,
        rows=[
            TransactionRow(
                transaction=t,
                badge=transaction_badge(t.status),
                amount_display=format_amount(t.amount, t.payment_currency),
            )
            for t in transactions
        ],
        pagination=pagination,
        summary=summary,
    )
