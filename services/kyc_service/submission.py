"""Multipart assembly and submission of KYC forms."""

from __future__ import annotations

import enum
from datetime import date
from typing import Any, Mapping, Optional, TypeVar

from pydantic import BaseModel, Field

from libs.auth.models import ProviderSession
from libs.common.api_client import ApiError
from libs.common.logging import get_logger
from libs.common.ui import PROVIDER_SLUG, Navigation, Outcome, Toast
from services.kyc_service.client import KycApi
from services.kyc_service.policy import validate_individual, validate_organization
from services.kyc_service.schemas import (
    IndividualKycForm,
    KycDocument,
    OrganizationKycForm,
    ProviderVerification,
)

logger = get_logger(__name__)

SUBMIT_FAILED_MESSAGE = "An error occurred while submitting KYC details"
STATUS_PAGE = f"/{PROVIDER_SLUG}/kyc"

FileParts = list[tuple[str, tuple[str, bytes, str]]]


class KycSubmitOutcome(Outcome):
    errors: dict[str, str] = Field(default_factory=dict)
    verification: Optional[ProviderVerification] = None


def _text(value: Any) -> Optional[str]:
    if isinstance(value, enum.Enum):
        value = value.value
    elif isinstance(value, date):
        value = value.isoformat()
    if isinstance(value, str) and value:
        return value
    return None


def to_multipart(form: BaseModel) -> tuple[dict[str, str], FileParts]:
    """Flatten a form into text fields and file parts.

    Nested models become ``parent.child`` keys. Empty strings are dropped.
    """
    data: dict[str, str] = {}
    files: FileParts = []

    def visit(model: BaseModel, prefix: str) -> None:
        for name, field in type(model).model_fields.items():
            key = f"{prefix}{field.alias or name}"
            value = getattr(model, name)
            if isinstance(value, KycDocument):
                files.append((key, (value.filename, value.content, value.content_type)))
            elif isinstance(value, BaseModel):
                visit(value, f"{key}.")
            else:
                text = _text(value)
                if text is not None:
                    data[key] = text

    visit(form, "")
    return data, files


FormT = TypeVar("FormT", bound=BaseModel)


class MultipartKeyConflict(ValueError):
    """A flattened key clashes with a plain value under the same name."""

    def __init__(self, key: str, conflicting: str):
        self.key = key
        self.conflicting = conflicting
        super().__init__(f"'{key}' conflicts with field '{conflicting}'")


def from_multipart(
    form_cls: type[FormT],
    data: Mapping[str, str],
    files: Mapping[str, KycDocument],
) -> FormT:
    """Rebuild a form from flattened ``parent.child`` keys.

    Raises:
        MultipartKeyConflict: when a key is sent both as a plain value and as
            the parent of dotted keys (``address=x`` with ``address.city=y``).
    """
    nested: dict[str, Any] = {}
    for key, value in [*data.items(), *files.items()]:
        target = nested
        *parents, leaf = key.split(".")
        for depth, parent in enumerate(parents):
            target = target.setdefault(parent, {})
            if not isinstance(target, dict):
                raise MultipartKeyConflict(key, ".".join(parents[: depth + 1]))
        if isinstance(target.get(leaf), dict):
            raise MultipartKeyConflict(key, key)
        target[leaf] = value
    return form_cls.model_validate(nested)


async def _submit(
    session: ProviderSession,
    errors: dict[str, str],
    form: BaseModel,
    send,
    success_message: str,
) -> KycSubmitOutcome:
    if errors:
        return KycSubmitOutcome(ok=False, errors=errors)

    data, files = to_multipart(form)
    try:
        verification = await send(session.provider_id, data, files)
    except ApiError as e:
        logger.error(f"Error submitting KYC for provider {session.provider_id}: {e.message}")
        message = e.message if e.status_code is not None else SUBMIT_FAILED_MESSAGE
        return KycSubmitOutcome(ok=False, toast=Toast.error(message))

    logger.info(f"KYC submitted for provider {session.provider_id}")
    return KycSubmitOutcome(
        ok=True,
        toast=Toast.success(success_message),
        navigate=Navigation(path=STATUS_PAGE),
        verification=verification,
    )


async def submit_organization(
    api: KycApi, session: ProviderSession, form: OrganizationKycForm
) -> KycSubmitOutcome:
    return await _submit(
        session,
        validate_organization(form),
        form,
        api.submit_organization,
        "Organization KYC submitted successfully!",
    )


async def submit_individual(
    api: KycApi,
    session: ProviderSession,
    form: IndividualKycForm,
    today: Optional[date] = None,
) -> KycSubmitOutcome:
    return await _submit(
        session,
        validate_individual(form, today),
        form,
        api.submit_individual,
        "KYC details submitted successfully!",
    )
