"""Membership linking wizard.

Steps run strictly in order: category, region, provider, member, review.
Going back keeps every selection and only clears the step error.
"""

from __future__ import annotations

from typing import Optional

from libs.auth.models import ConsumerSession
from libs.common.api_client import ApiError
from libs.common.config import get_settings
from libs.common.logging import get_logger
from libs.common.ui import CONSUMER_SLUG, Navigation, Outcome, Toast
from services.memberships_service.client import MembershipApi
from services.memberships_service.regions import is_region
from services.memberships_service.schemas import (
    WIZARD_STEPS,
    MemberDetails,
    ProviderCategory,
    ProviderSearchResult,
    WizardStep,
)
from services.memberships_service.search import ProviderSearch

logger = get_logger(__name__)

MEMBER_NOT_FOUND_MESSAGE = "Member not found"
CLAIM_FAILED_MESSAGE = "Failed to link membership"
CLAIM_SUCCESS_MESSAGE = "Membership linked successfully!"
ALREADY_CLAIMED_MESSAGE = "Membership already exists. Redirecting..."


def schedule_path(membership_id: str) -> str:
    return f"/{CONSUMER_SLUG}/memberships/{membership_id}/schedule"


def normalize_unique_id(value: str) -> str:
    return value.strip().upper()


def existing_membership_id(error: ApiError) -> Optional[str]:
    """Membership id carried by a 409 claim response, if any."""
    data = error.response_data.get("data")
    if isinstance(data, dict):
        membership_id = data.get("membershipId")
        if membership_id:
            return str(membership_id)
    return None


async def claim_membership(
    api: MembershipApi,
    session: ConsumerSession,
    *,
    provider_id: str,
    member_unique_id: str,
) -> Outcome:
    """Claim a member record for the consumer and say where to go next."""
    try:
        membership = await api.claim_membership(
            consumer_id=session.consumer_id,
            provider_id=provider_id,
            member_unique_id=member_unique_id,
        )
    except ApiError as e:
        message = e.message or CLAIM_FAILED_MESSAGE
        membership_id = existing_membership_id(e) if e.is_conflict else None
        if membership_id:
            logger.info(
                f"Consumer {session.consumer_id} already claimed member "
                f"{member_unique_id}; redirecting to membership {membership_id}"
            )
            return Outcome(
                ok=False,
                error=message,
                toast=Toast.error(ALREADY_CLAIMED_MESSAGE),
                navigate=Navigation(
                    path=schedule_path(membership_id),
                    delay_seconds=get_settings().CLAIM_REDIRECT_DELAY_SECONDS,
                ),
            )
        logger.error(f"Error claiming membership for {session.consumer_id}: {message}")
        return Outcome(ok=False, error=message, toast=Toast.error(message))

    logger.info(f"Consumer {session.consumer_id} claimed membership {membership.id}")
    return Outcome(
        ok=True,
        toast=Toast.success(CLAIM_SUCCESS_MESSAGE),
        navigate=Navigation(path=schedule_path(membership.id)),
    )


class WizardStepError(ValueError):
    pass


class MembershipWizard:
    def __init__(
        self,
        api: MembershipApi,
        session: ConsumerSession,
        search: Optional[ProviderSearch] = None,
    ):
        self.api = api
        self.session = session
        self.search = search or ProviderSearch(api)

        self.step = WizardStep.CATEGORY
        self.category: Optional[ProviderCategory] = None
        self.region: Optional[str] = None
        self.query = ""
        self.provider: Optional[ProviderSearchResult] = None
        self.member_unique_id = ""
        self.member: Optional[MemberDetails] = None
        self.error: Optional[str] = None
        self.loading = False

    # Selections

    def select_category(self, category: ProviderCategory) -> None:
        self.category = ProviderCategory(category)

    def select_region(self, region: str) -> None:
        if not is_region(region):
            raise WizardStepError(f"Unknown region: {region}")
        self.region = region

    def set_query(self, query: str) -> None:
        self.query = query
        self.search.update(self.category, self.region, query)

    def select_provider(self, provider: ProviderSearchResult) -> None:
        self.provider = provider

    def set_member_unique_id(self, value: str) -> None:
        self.member_unique_id = value

    # Navigation

    def can_advance(self) -> bool:
        if self.step == WizardStep.CATEGORY:
            return self.category is not None
        if self.step == WizardStep.REGION:
            return bool(self.region)
        if self.step == WizardStep.PROVIDER:
            return self.provider is not None
        if self.step == WizardStep.MEMBER:
            return self.member is not None
        return False

    def advance(self) -> WizardStep:
        """Move to the next step. The member step advances via ``fetch_member``."""
        if self.step == WizardStep.MEMBER:
            raise WizardStepError("Fetch member details to continue")
        if not self.can_advance():
            raise WizardStepError(f"Complete the {self.step.value} step first")
        self.step = WIZARD_STEPS[WIZARD_STEPS.index(self.step) + 1]
        self.error = None
        return self.step

    def back(self) -> WizardStep:
        index = WIZARD_STEPS.index(self.step)
        if index > 0:
            self.step = WIZARD_STEPS[index - 1]
        self.error = None
        return self.step

    # Remote steps

    async def fetch_member(self) -> bool:
        if self.step != WizardStep.MEMBER:
            raise WizardStepError("Member lookup is only available on the member step")
        if self.provider is None or not self.member_unique_id.strip():
            return False

        self.loading = True
        self.error = None
        try:
            self.member = await self.api.get_member_by_unique_id(
                provider_id=self.provider.id,
                unique_id=normalize_unique_id(self.member_unique_id),
            )
        except ApiError as e:
            logger.warning(f"Member lookup failed for {self.member_unique_id!r}: {e.message}")
            self.error = e.message or MEMBER_NOT_FOUND_MESSAGE
            self.member = None
            return False
        finally:
            self.loading = False

        self.step = WizardStep.REVIEW
        return True

    async def submit(self) -> Outcome:
        if self.step != WizardStep.REVIEW or self.provider is None or self.member is None:
            raise WizardStepError("Review the membership before submitting")

        self.loading = True
        self.error = None
        try:
            outcome = await claim_membership(
                self.api,
                self.session,
                provider_id=self.provider.id,
                member_unique_id=self.member.unique_id,
            )
        finally:
            self.loading = False
        self.error = outcome.error
        return outcome
