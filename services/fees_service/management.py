"""Provider fee-management screen.

One component serves every provider flavour. ``FeeManagementConfig`` carries
what differs between them; the editing rules are shared through
``FeePlanEditor``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from libs.auth.models import AccountType, ProviderSession
from libs.common.api_client import ApiError
from libs.common.logging import get_logger
from libs.common.ui import Badge, Outcome, Toast
from services.fees_service.classifier import plan_badge
from services.fees_service.client import FeePlanApi
from services.fees_service.editor import FeePlanEditor
from services.fees_service.schemas import FeePlan, FeePlanRow, FeePlanStatus, Member

logger = get_logger(__name__)

MARK_PAID_FAILED_MESSAGE = "Failed to update payment status"
PAID_ONLINE_MESSAGE = "This fee has already been paid online and cannot be modified"


class FeeManagementConfig(BaseModel):
    account_type: AccountType
    allow_offline_marking: bool = True


CONFIGS = {
    AccountType.ORGANIZATION: FeeManagementConfig(
        account_type=AccountType.ORGANIZATION, allow_offline_marking=True
    ),
    AccountType.INDIVIDUAL: FeeManagementConfig(
        account_type=AccountType.INDIVIDUAL, allow_offline_marking=False
    ),
}


def config_for(session: ProviderSession) -> FeeManagementConfig:
    return CONFIGS[session.account_type]


class FeePlanRowView(BaseModel):
    index: int
    row: FeePlanRow
    badge: Optional[Badge] = None
    can_edit: bool
    can_remove: bool
    can_mark_paid: bool
    can_unmark_paid: bool


class FeeManagementView(BaseModel):
    member: Optional[Member] = None
    rows: list[FeePlanRowView] = Field(default_factory=list)
    snapshot: list[FeePlanRow] = Field(default_factory=list)
    error: Optional[str] = None


class FeeManagement:
    def __init__(
        self,
        api: FeePlanApi,
        session: ProviderSession,
        member_id: str,
        config: Optional[FeeManagementConfig] = None,
    ):
        self.api = api
        self.session = session
        self.config = config or config_for(session)
        self.editor = FeePlanEditor(api, session, member_id)

    def _server_plan(self, fee_plan_id: Optional[str]) -> Optional[FeePlan]:
        if not fee_plan_id or self.editor.member is None:
            return None
        for plan in self.editor.member.fee_plans:
            if plan.id == fee_plan_id:
                return plan
        return None

    def view(self, now: Optional[datetime] = None) -> FeeManagementView:
        editor = self.editor
        single = len(editor.rows) == 1
        rows = []
        for index, row in enumerate(editor.rows):
            if row.is_deleted:
                continue
            plan = self._server_plan(row.id)
            offline = self.config.allow_offline_marking and row.id is not None
            rows.append(
                FeePlanRowView(
                    index=index,
                    row=row,
                    badge=plan_badge(plan, now) if plan else None,
                    can_edit=not row.is_paid,
                    can_remove=not single and not row.is_paid,
                    can_mark_paid=offline and not row.is_paid,
                    can_unmark_paid=offline and bool(plan and plan.is_offline_paid),
                )
            )
        return FeeManagementView(
            member=editor.member,
            rows=rows,
            snapshot=editor.snapshot,
            error=editor.error,
        )

    async def mark_paid(self, fee_plan_id: str, paid: bool) -> Outcome:
        """Toggle the offline-paid flag of a persisted plan, then reload."""
        if not self.config.allow_offline_marking:
            return Outcome(ok=False, toast=Toast.error(MARK_PAID_FAILED_MESSAGE))

        plan = self._server_plan(fee_plan_id)
        if plan and plan.status == FeePlanStatus.PAID.value and not plan.is_offline_paid:
            return Outcome(ok=False, toast=Toast.error(PAID_ONLINE_MESSAGE))

        try:
            await self.api.mark_paid(
                fee_plan_id=fee_plan_id,
                is_offline_paid=paid,
                provider_id=self.session.provider_id,
            )
        except ApiError as e:
            logger.error(f"Error marking payment for fee plan {fee_plan_id}: {e.message}")
            return Outcome(ok=False, toast=Toast.error(e.message or MARK_PAID_FAILED_MESSAGE))

        logger.info(f"Fee plan {fee_plan_id} offline-paid set to {paid}")
        await self.editor.load()
        message = (
            "Fee marked as paid successfully!"
            if paid
            else "Fee marked as unpaid successfully!"
        )
        return Outcome(ok=True, toast=Toast.success(message))
