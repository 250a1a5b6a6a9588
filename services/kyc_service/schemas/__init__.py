"""KYC Service schemas package."""

from services.kyc_service.schemas.enums import (
    ENTITY_TYPE_LABELS,
    EntityType,
    KycState,
    VerificationStatus,
)
from services.kyc_service.schemas.main import (
    AadhaarCard,
    Address,
    IndividualKycForm,
    KycDocument,
    OrganizationKycForm,
    PanCard,
    ProviderVerification,
)

__all__ = [
    "AadhaarCard",
    "Address",
    "ENTITY_TYPE_LABELS",
    "EntityType",
    "IndividualKycForm",
    "KycDocument",
    "KycState",
    "OrganizationKycForm",
    "PanCard",
    "ProviderVerification",
    "VerificationStatus",
]
