"""Fee-plan editor and save reconciler.

The editor keeps an editable list of rows for one member plus a snapshot of
what the server returned at the last fetch. Saving diffs the rows against the
snapshot and sends only the writes that are needed:

- one DELETE per soft-deleted row that was persisted,
- one POST per row without an id,
- one PUT per persisted row whose name, description, amount or due date
  differs from its snapshot.

All writes are sent concurrently and awaited together. The batch is not
atomic: if any write fails the save is reported as failed even though some
writes may already have been applied. ``SaveReport.operations`` records the
outcome of each write so callers can tell which ones landed.
"""

from __future__ import annotations

import asyncio
import enum
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field

from libs.auth.models import ProviderSession
from libs.common.api_client import ApiError
from libs.common.currency import to_decimal
from libs.common.logging import get_logger
from libs.common.ui import Toast
from services.fees_service.client import FeePlanApi
from services.fees_service.schemas import FeePlanRow, MemberWithFeePlans

logger = get_logger(__name__)

REQUIRED_FIELDS_MESSAGE = "Please fill in all required fields for each fee plan."
INVALID_AMOUNT_MESSAGE = "Each fee plan amount must be a number greater than zero."
SAVE_FAILED_MESSAGE = "Failed to save fee plans. Please try again."
FETCH_FAILED_MESSAGE = "Failed to fetch member details. Please check the Member ID."
SAVED_MESSAGE = "Fee plans saved successfully!"

# Fields that become read-only once a plan is settled.
CORE_FIELDS = frozenset({"name", "description", "amount", "due_date"})
EDITABLE_FIELDS = CORE_FIELDS


class FeePlanLockedError(ValueError):
    """Raised when editing a plan that has already been paid."""


class OperationKind(str, enum.Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ChangeSet(BaseModel):
    creates: list[dict[str, Any]] = Field(default_factory=list)
    updates: list[dict[str, Any]] = Field(default_factory=list)
    deletes: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.creates or self.updates or self.deletes)


class SaveOperation(BaseModel):
    kind: OperationKind
    fee_plan_id: Optional[str] = None
    name: Optional[str] = None
    ok: bool
    error: Optional[str] = None


class SaveReport(BaseModel):
    ok: bool
    error: Optional[str] = None
    toast: Optional[Toast] = None
    operations: list[SaveOperation] = Field(default_factory=list)

    @property
    def partially_applied(self) -> bool:
        return not self.ok and any(op.ok for op in self.operations)


def empty_row() -> FeePlanRow:
    return FeePlanRow()


def _same_amount(a: str, b: str) -> bool:
    da, db = to_decimal(a), to_decimal(b)
    if da is not None and db is not None:
        return da == db
    return a.strip() == b.strip()


def is_modified(row: FeePlanRow, original: Optional[FeePlanRow]) -> bool:
    """Whether a persisted row differs from its snapshot counterpart.

    Due dates are compared as calendar dates; a missing date on either side
    is not treated as a change.
    """
    if original is None:
        return True
    return (
        row.name != original.name
        or row.description != original.description
        or not _same_amount(row.amount, original.amount)
        or (
            original.due_date is not None
            and row.due_date is not None
            and original.due_date != row.due_date
        )
    )


def _payload(row: FeePlanRow, *, provider_id: str, member_id: str) -> dict[str, Any]:
    amount = to_decimal(row.amount)
    return {
        "providerId": provider_id,
        "memberId": member_id,
        "name": row.name,
        "description": row.description,
        "amount": float(amount) if amount is not None else None,
        "dueDate": row.due_date.isoformat() if row.due_date else None,
    }


def diff_fee_plans(
    rows: list[FeePlanRow],
    snapshot: list[FeePlanRow],
    *,
    provider_id: str,
    member_id: str,
) -> ChangeSet:
    """Compute the minimal set of writes that bring the server in line with ``rows``."""
    originals = {r.id: r for r in snapshot if r.id}
    changes = ChangeSet()

    for row in rows:
        if row.is_deleted and row.id:
            changes.deletes.append(row.id)

    for row in rows:
        if row.is_deleted:
            continue
        payload = _payload(row, provider_id=provider_id, member_id=member_id)
        if not row.id:
            changes.creates.append(payload)
        elif is_modified(row, originals.get(row.id)):
            changes.updates.append({**payload, "id": row.id})

    return changes


def validate_rows(rows: list[FeePlanRow]) -> Optional[str]:
    """Return the aggregate validation error for visible rows, if any.

    Missing fields are reported before bad amounts.
    """
    visible = [row for row in rows if not row.is_deleted]
    for row in visible:
        if not row.name or not row.amount.strip() or row.due_date is None:
            return REQUIRED_FIELDS_MESSAGE
    for row in visible:
        amount = to_decimal(row.amount)
        if amount is None or amount <= 0:
            return INVALID_AMOUNT_MESSAGE
    return None


class FeePlanEditor:
    """Editable fee plans of one member, as seen by a provider."""

    def __init__(self, api: FeePlanApi, session: ProviderSession, member_id: str):
        self.api = api
        self.session = session
        self.member_id = member_id
        self.member: Optional[MemberWithFeePlans] = None
        self.rows: list[FeePlanRow] = [empty_row()]
        self.snapshot: list[FeePlanRow] = []
        self.error: Optional[str] = None
        self.success = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def hydrate(self, member: MemberWithFeePlans) -> None:
        """Replace rows and snapshot with the server's current fee plans."""
        self.member = member
        if member.fee_plans:
            self.rows = [FeePlanRow.from_plan(p) for p in member.fee_plans]
            self.snapshot = [row.model_copy(deep=True) for row in self.rows]
        else:
            self.rows = [empty_row()]
            self.snapshot = []

    def restore(self, rows: list[FeePlanRow], snapshot: list[FeePlanRow]) -> None:
        """Resume an edit session whose state was kept by the client."""
        self.rows = [r.model_copy(deep=True) for r in rows] or [empty_row()]
        self.snapshot = [r.model_copy(deep=True) for r in snapshot]

    def enforce_locks(self) -> int:
        """Reset rows of settled plans to the server's values.

        Returns how many rows had to be reset.
        """
        if self.member is None:
            return 0
        settled = {p.id: p for p in self.member.fee_plans if p.is_settled}
        reset = 0
        for index, row in enumerate(self.rows):
            plan = settled.get(row.id) if row.id else None
            if plan is None:
                continue
            locked = FeePlanRow.from_plan(plan)
            if row != locked:
                self.rows[index] = locked
                reset += 1
        if reset:
            logger.warning(f"Reset {reset} settled fee plan row(s) for member {self.member_id}")
        return reset

    async def load(self) -> bool:
        self.error = None
        self.member = None
        try:
            member = await self.api.get_member_fee_plans(
                provider_id=self.session.provider_id, member_id=self.member_id
            )
        except ApiError as e:
            logger.error(f"Error fetching member {self.member_id}: {e.message}")
            self.error = FETCH_FAILED_MESSAGE
            return False
        self.hydrate(member)
        return True

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    @property
    def visible_rows(self) -> list[FeePlanRow]:
        return [r for r in self.rows if not r.is_deleted]

    def add_row(self) -> None:
        self.rows.append(empty_row())

    def remove_row(self, index: int) -> None:
        """Remove a row; persisted rows are only marked deleted.

        No-op while a single row remains, and for paid rows.
        """
        if len(self.rows) == 1:
            return
        row = self.rows[index]
        if row.is_paid:
            return
        if row.id:
            self.rows[index] = row.model_copy(update={"is_deleted": True})
        else:
            del self.rows[index]

    def edit_field(self, index: int, field: str, value: Any) -> None:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown fee plan field: {field}")
        row = self.rows[index]
        if row.is_paid and field in CORE_FIELDS:
            raise FeePlanLockedError("Paid fee plans cannot be edited")
        updated = row.model_dump()
        updated[field] = value
        self.rows[index] = FeePlanRow.model_validate(updated)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def plan_changes(self) -> ChangeSet:
        return diff_fee_plans(
            self.rows,
            self.snapshot,
            provider_id=self.session.provider_id,
            member_id=self.member.id if self.member else self.member_id,
        )

    async def save(self) -> SaveReport:
        self.error = None
        self.success = False

        problem = validate_rows(self.rows)
        if problem:
            self.error = problem
            return SaveReport(ok=False, error=problem)

        changes = self.plan_changes()
        operations: list[tuple[OperationKind, Optional[str], Optional[str]]] = []
        calls = []

        for fee_plan_id in changes.deletes:
            operations.append((OperationKind.DELETE, fee_plan_id, None))
            calls.append(self.api.delete_fee_plan(fee_plan_id))
        for payload in changes.creates:
            operations.append((OperationKind.CREATE, None, payload["name"]))
            calls.append(self.api.create_fee_plan(payload))
        for payload in changes.updates:
            operations.append((OperationKind.UPDATE, payload["id"], payload["name"]))
            calls.append(self.api.update_fee_plan(payload))

        results = await asyncio.gather(*calls, return_exceptions=True)

        report_ops = []
        for (kind, fee_plan_id, name), result in zip(operations, results):
            if isinstance(result, BaseException):
                message = result.message if isinstance(result, ApiError) else str(result)
                logger.error(
                    f"Fee plan {kind.value} failed for member {self.member_id}: {message}",
                    exc_info=not isinstance(result, ApiError),
                )
                report_ops.append(
                    SaveOperation(
                        kind=kind, fee_plan_id=fee_plan_id, name=name, ok=False, error=message
                    )
                )
            else:
                report_ops.append(
                    SaveOperation(kind=kind, fee_plan_id=fee_plan_id, name=name, ok=True)
                )

        if not all(op.ok for op in report_ops):
            self.error = SAVE_FAILED_MESSAGE
            return SaveReport(
                ok=False,
                error=SAVE_FAILED_MESSAGE,
                toast=Toast.error(SAVE_FAILED_MESSAGE),
                operations=report_ops,
            )

        logger.info(
            f"Saved fee plans for member {self.member_id}: "
            f"{len(changes.creates)} created, {len(changes.updates)} updated, "
            f"{len(changes.deletes)} deleted"
        )
        await self.load()
        self.success = True
        return SaveReport(ok=True, toast=Toast.success(SAVED_MESSAGE), operations=report_ops)


def amount_total(rows: list[FeePlanRow]) -> Decimal:
    """Sum of the visible rows' amounts, ignoring blanks."""
    total = Decimal("0")
    for row in rows:
        if row.is_deleted:
            continue
        amount = to_decimal(row.amount)
        if amount is not None:
            total += amount
    return total
