"""Required fields and documents for KYC forms.

Validation never stops at the first problem: every violation is collected
into a ``{field_key: message}`` mapping, keyed the same way the multipart
payload is (``registeredAddress.city``, ``panCard.panNumber``...).
"""

from datetime import date
from typing import Optional

from libs.auth.models import ProviderSession
from libs.common.config import get_settings
from libs.common.datetime_utils import age_on, utc_now
from services.kyc_service import validators
from services.kyc_service.schemas import (
    Address,
    EntityType,
    IndividualKycForm,
    KycDocument,
    OrganizationKycForm,
)

CIN_ENTITY_TYPES = frozenset(
    {EntityType.PVT_LTD, EntityType.PUBLIC_LTD, EntityType.GOVT_ENTITY, EntityType.OPC}
)
GST_EXEMPT_ENTITY_TYPES = frozenset({EntityType.TRUST, EntityType.SOCIETY})

ALLOWED_DOCUMENT_EXTENSIONS = frozenset({"pdf", "jpg", "jpeg", "png"})
MINIMUM_AGE = 18


def requires_cin(entity_type: Optional[EntityType]) -> bool:
    return entity_type in CIN_ENTITY_TYPES


def requires_llpin(entity_type: Optional[EntityType]) -> bool:
    return entity_type == EntityType.LLP


def requires_gst(entity_type: Optional[EntityType]) -> bool:
    return entity_type not in GST_EXEMPT_ENTITY_TYPES


def document_error(document: KycDocument) -> Optional[str]:
    if document.extension not in ALLOWED_DOCUMENT_EXTENSIONS:
        return "Only PDF, JPG, JPEG or PNG files are allowed"
    limit = get_settings().KYC_MAX_DOCUMENT_BYTES
    if document.size > limit:
        return f"File must be smaller than {limit // (1024 * 1024)}MB"
    return None


def _check_document(
    errors: dict[str, str], key: str, document: Optional[KycDocument], missing: str
) -> None:
    if document is None:
        errors[key] = missing
        return
    problem = document_error(document)
    if problem:
        errors[key] = problem


def _check_address(errors: dict[str, str], prefix: str, address: Address) -> None:
    if not address.address_line1.strip():
        errors[f"{prefix}.addressLine1"] = "Address line 1 is required"
    if not address.city.strip():
        errors[f"{prefix}.city"] = "City is required"
    if not address.state:
        errors[f"{prefix}.state"] = "State is required"
    if not address.pincode.strip():
        errors[f"{prefix}.pincode"] = "Pincode is required"
    elif not validators.pincode(address.pincode):
        errors[f"{prefix}.pincode"] = "Invalid pincode format"


def validate_organization(form: OrganizationKycForm) -> dict[str, str]:
    errors: dict[str, str] = {}
    entity_type = form.entity_type

    if not form.organization_name.strip():
        errors["organizationName"] = "Organization name is required"
    if entity_type is None:
        errors["entityType"] = "Entity type is required"
    if entity_type == EntityType.OTHERS and not form.other_entity_type.strip():
        errors["otherEntityType"] = "Please specify the entity type"

    if requires_cin(entity_type):
        if not form.cin_number.strip():
            errors["cinNumber"] = "CIN number is required for this entity type"
        elif not validators.cin(form.cin_number.upper()):
            errors["cinNumber"] = "Invalid CIN format"

    if requires_llpin(entity_type):
        if not form.llpin_number.strip():
            errors["llpinNumber"] = "LLPIN number is required for LLP"
        elif not validators.llpin(form.llpin_number.upper()):
            errors["llpinNumber"] = "Invalid LLPIN format (e.g., AAB-1234)"

    if not form.pan_number.strip():
        errors["panNumber"] = "PAN number is required"
    elif not validators.pan(form.pan_number.upper()):
        errors["panNumber"] = "Invalid PAN format"

    gst_required = requires_gst(entity_type)
    if gst_required:
        if not form.gst_number.strip():
            errors["gstNumber"] = "GST number is required for this entity type"
        elif not validators.gst(form.gst_number.upper()):
            errors["gstNumber"] = "Invalid GST format"

    _check_address(errors, "registeredAddress", form.registered_address)

    if not form.contact_person_name.strip():
        errors["contactPersonName"] = "Contact person name is required"
    if not form.contact_person_pan.strip():
        errors["contactPersonPan"] = "Contact person PAN is required"
    elif not validators.pan(form.contact_person_pan.upper()):
        errors["contactPersonPan"] = "Invalid PAN format"
    if not form.contact_person_aadhaar.strip():
        errors["contactPersonAadhaar"] = "Contact person Aadhaar is required"
    elif not validators.aadhaar(form.contact_person_aadhaar):
        errors["contactPersonAadhaar"] = "Invalid Aadhaar format"

    _check_document(
        errors,
        "registrationCertificate",
        form.registration_certificate,
        "Registration certificate is required",
    )
    _check_document(errors, "panDocument", form.pan_document, "PAN document is required")
    if gst_required:
        _check_document(errors, "gstDocument", form.gst_document, "GST document is required")
    _check_document(
        errors,
        "contactPersonPanDocument",
        form.contact_person_pan_document,
        "Contact person PAN document is required",
    )
    _check_document(
        errors,
        "contactPersonAadhaarDocument",
        form.contact_person_aadhaar_document,
        "Contact person Aadhaar document is required",
    )
    return errors


def validate_individual(
    form: IndividualKycForm, today: Optional[date] = None
) -> dict[str, str]:
    errors: dict[str, str] = {}
    today = today or utc_now().date()

    if not form.full_name.strip():
        errors["fullName"] = "Full name is required"

    if form.date_of_birth is None:
        errors["dateOfBirth"] = "Date of birth is required"
    elif age_on(form.date_of_birth, today) < MINIMUM_AGE:
        errors["dateOfBirth"] = "Must be at least 18 years old"

    _check_address(errors, "permanentAddress", form.permanent_address)

    pan_number = form.pan_card.pan_number
    if not pan_number.strip():
        errors["panCard.panNumber"] = "PAN number is required"
    elif not validators.pan(pan_number.upper()):
        errors["panCard.panNumber"] = "Invalid PAN format (e.g., ABCDE1234F)"
    _check_document(
        errors,
        "panCard.documentFile",
        form.pan_card.document_file,
        "PAN card document is required",
    )

    aadhaar_number = form.aadhaar_card.aadhaar_number
    if not aadhaar_number.strip():
        errors["aadhaarCard.aadhaarNumber"] = "Aadhaar number is required"
    elif not validators.aadhaar(aadhaar_number):
        errors["aadhaarCard.aadhaarNumber"] = "Invalid Aadhaar format"
    _check_document(
        errors,
        "aadhaarCard.documentFile",
        form.aadhaar_card.document_file,
        "Aadhaar card document is required",
    )
    return errors


def prefill_organization(session: ProviderSession) -> OrganizationKycForm:
    return OrganizationKycForm(organization_name=session.name)


def prefill_individual(session: ProviderSession) -> IndividualKycForm:
    return IndividualKycForm(full_name=session.admin_name)
