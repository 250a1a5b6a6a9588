"""Add and edit forms for a provider's members.

Checks run in the order the form shows its fields; the first failure is also
surfaced as the outcome's ``error`` for a toast.
"""

import re
from datetime import date
from typing import Any, Optional

from pydantic import Field

from libs.auth.models import ProviderSession
from libs.common.api_client import ApiError
from libs.common.datetime_utils import to_calendar_date, utc_now
from libs.common.logging import get_logger
from libs.common.ui import PROVIDER_SLUG, Navigation, Outcome, Toast
from services.fees_service.schemas import Member
from services.kyc_service import validators
from services.members_service.client import MemberApi
from services.members_service.schemas import MemberForm

logger = get_logger(__name__)

ADD_FAILED_MESSAGE = "Failed to add member"
UPDATE_FAILED_MESSAGE = "Failed to update member"
LOAD_FAILED_MESSAGE = "Failed to load member details"
REDIRECT_DELAY_SECONDS = 1.5

_NON_DIGITS = re.compile(r"\D")


class MemberSubmitOutcome(Outcome):
    errors: dict[str, str] = Field(default_factory=dict)
    member: Optional[Member] = None
    # Blank form to show after a successful add.
    form: Optional[MemberForm] = None


def member_page(member_id: str) -> str:
    return f"/{PROVIDER_SLUG}/members/view/{member_id}"


def digits_only(value: str) -> str:
    return _NON_DIGITS.sub("", value or "")


def validate_member(form: MemberForm, today: Optional[date] = None) -> dict[str, str]:
    errors: dict[str, str] = {}

    if not form.first_name.strip():
        errors["firstName"] = "First name is required"
    if not form.last_name.strip():
        errors["lastName"] = "Last name is required"
    if not form.unique_id.strip():
        errors["uniqueId"] = "Unique ID is required"

    phone = digits_only(form.phone)
    if not phone:
        errors["phone"] = "Phone number is required"
    elif not validators.phone(phone):
        errors["phone"] = "Please enter a valid 10-digit phone number"

    if form.email.strip() and not validators.email(form.email):
        errors["email"] = "Please enter a valid email address"

    today = today or to_calendar_date(utc_now())
    if form.date_of_birth and form.date_of_birth > today:
        errors["dateOfBirth"] = "Date of birth cannot be in the future"

    return errors


def _optional(value: str) -> Optional[str]:
    return value.strip() or None


def to_payload(form: MemberForm) -> dict[str, Any]:
    return {
        "firstName": form.first_name.strip(),
        "middleName": _optional(form.middle_name),
        "lastName": form.last_name.strip(),
        "dateOfBirth": form.date_of_birth.isoformat() if form.date_of_birth else None,
        "gender": form.gender.value if form.gender else None,
        "uniqueId": form.unique_id.strip(),
        "phone": digits_only(form.phone),
        "email": _optional(form.email),
        "category": _optional(form.category),
        "subcategory": _optional(form.subcategory),
        "guardianName": _optional(form.guardian_name),
        "relationship": _optional(form.relationship),
    }


def _invalid(errors: dict[str, str]) -> MemberSubmitOutcome:
    return MemberSubmitOutcome(ok=False, errors=errors, error=next(iter(errors.values())))


def _failure_message(e: ApiError, default: str) -> str:
    return e.message if e.status_code is not None else default


async def add_member(
    api: MemberApi,
    session: ProviderSession,
    form: MemberForm,
    today: Optional[date] = None,
) -> MemberSubmitOutcome:
    errors = validate_member(form, today)
    if errors:
        return _invalid(errors)

    try:
        member = await api.create_member(session.provider_id, to_payload(form))
    except ApiError as e:
        logger.error(f"Error adding member for provider {session.provider_id}: {e.message}")
        return MemberSubmitOutcome(ok=False, toast=Toast.error(_failure_message(e, ADD_FAILED_MESSAGE)))

    logger.info(f"Member {form.unique_id.strip()} added for provider {session.provider_id}")
    return MemberSubmitOutcome(
        ok=True,
        toast=Toast.success("Member added successfully!"),
        member=member,
        form=MemberForm(),
    )


async def load_member_form(
    api: MemberApi, session: ProviderSession, member_id: str
) -> Optional[MemberForm]:
    """Current member details as an edit form, or None when they cannot be loaded."""
    try:
        form = await api.get_member(session.provider_id, member_id)
    except ApiError as e:
        logger.error(f"Error loading member {member_id} for provider {session.provider_id}: {e.message}")
        return None
    if form is None:
        logger.warning(f"Member {member_id} not returned for provider {session.provider_id}")
    return form


async def update_member(
    api: MemberApi,
    session: ProviderSession,
    member_id: str,
    form: MemberForm,
    today: Optional[date] = None,
) -> MemberSubmitOutcome:
    errors = validate_member(form, today)
    if errors:
        return _invalid(errors)

    try:
        member = await api.update_member(session.provider_id, member_id, to_payload(form))
    except ApiError as e:
        logger.error(f"Error updating member {member_id} for provider {session.provider_id}: {e.message}")
        return MemberSubmitOutcome(ok=False, toast=Toast.error(_failure_message(e, UPDATE_FAILED_MESSAGE)))

    logger.info(f"Member {member_id} updated for provider {session.provider_id}")
    return MemberSubmitOutcome(
        ok=True,
        toast=Toast.success("Member updated successfully!"),
        navigate=Navigation(path=member_page(member_id), delay_seconds=REDIRECT_DELAY_SECONDS),
        member=member,
    )
