"""KYC verification state machine and status page.

Back-office review moves a verification between states; the provider can
only (re)submit, which always lands in ``PROCESSING``. The status page is a
lookup table with one entry per ``KycState``.
"""

from typing import Optional

from pydantic import BaseModel

from libs.auth.models import AccountType, ProviderSession
from libs.common.api_client import ApiError
from libs.common.logging import get_logger
from libs.common.ui import PROVIDER_SLUG, Badge, BadgeVariant
from services.kyc_service.client import KycApi
from services.kyc_service.schemas import KycState, ProviderVerification

logger = get_logger(__name__)

SUBMITTABLE_STATES = frozenset({KycState.NO_SUBMISSION, KycState.PENDING, KycState.REJECTED})


class InvalidKycTransition(Exception):
    def __init__(self, state: KycState):
        self.state = state
        super().__init__(f"KYC cannot be submitted while {state.value}")


class PageAction(BaseModel):
    label: str
    path: str


class KycStatusPage(BaseModel):
    state: KycState
    title: str
    message: str
    badge: Optional[Badge] = None
    actions: list[PageAction]
    show_contact_support: bool = False
    remarks: Optional[str] = None


def kyc_form_path(account_type: AccountType) -> str:
    if account_type == AccountType.INDIVIDUAL:
        return f"/{PROVIDER_SLUG}/kyc/individual"
    return f"/{PROVIDER_SLUG}/kyc/organization"


_DASHBOARD = "/{slug}/dashboard"
_MEMBERS = "/{slug}/members"
_SUBMIT = "{form}"

# state -> (title, message, badge, actions, show_contact_support)
_PAGES = {
    KycState.NO_SUBMISSION: (
        "Complete your KYC",
        "Submit your verification details to start collecting fees.",
        None,
        [("Start KYC", _SUBMIT), ("Back to Dashboard", _DASHBOARD)],
        False,
    ),
    KycState.PROCESSING: (
        "Verification in progress",
        "We have received your documents and are reviewing them. This usually takes 2-3 business days.",
        Badge(label="Processing", variant=BadgeVariant.SECONDARY),
        [("Back to Dashboard", _DASHBOARD)],
        True,
    ),
    KycState.PENDING: (
        "Action required",
        "Some of your details need attention. Please review and resubmit your KYC.",
        Badge(label="Pending", variant=BadgeVariant.WARNING),
        [("Resubmit KYC", _SUBMIT), ("Back to Dashboard", _DASHBOARD)],
        True,
    ),
    KycState.VERIFIED: (
        "KYC verified",
        "Your account is verified. You can now manage members and collect fees.",
        Badge(label="Verified", variant=BadgeVariant.SUCCESS),
        [("View Members", _MEMBERS), ("Back to Dashboard", _DASHBOARD)],
        False,
    ),
    KycState.REJECTED: (
        "Verification rejected",
        "Your KYC submission was rejected. Please correct the details and submit again.",
        Badge(label="Rejected", variant=BadgeVariant.DESTRUCTIVE),
        [("Resubmit KYC", _SUBMIT), ("Back to Dashboard", _DASHBOARD)],
        True,
    ),
}

_missing = set(KycState) - set(_PAGES)
if _missing:
    raise RuntimeError(f"KYC status page has no entry for {sorted(s.value for s in _missing)}")


def can_submit(state: KycState) -> bool:
    return state in SUBMITTABLE_STATES


def state_after_submit(state: KycState) -> KycState:
    if not can_submit(state):
        raise InvalidKycTransition(state)
    return KycState.PROCESSING


def status_page(
    verification: Optional[ProviderVerification],
    account_type: AccountType = AccountType.ORGANIZATION,
) -> KycStatusPage:
    state = KycState.from_status(verification.status if verification else None)
    title, message, badge, actions, support = _PAGES[state]
    form = kyc_form_path(account_type)
    return KycStatusPage(
        state=state,
        title=title,
        message=message,
        badge=badge,
        actions=[
            PageAction(label=label, path=path.format(slug=PROVIDER_SLUG, form=form))
            for label, path in actions
        ],
        show_contact_support=support,
        remarks=verification.remarks if verification else None,
    )


async def load_status_page(api: KycApi, session: ProviderSession) -> KycStatusPage:
    try:
        verification = await api.get_verification(session.provider_id, session.account_type)
    except ApiError as e:
        logger.error(f"Error loading KYC status for provider {session.provider_id}: {e.message}")
        raise
    return status_page(verification, session.account_type)
