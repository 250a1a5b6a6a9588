from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from libs.common.api_client import ApiModel
from services.kyc_service.schemas.enums import EntityType, VerificationStatus


class KycDocument(BaseModel):
    """An uploaded KYC file held in memory until submission."""

    filename: str
    content_type: str = "application/octet-stream"
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        _, _, ext = self.filename.rpartition(".")
        return ext.lower() if ext != self.filename else ""


class Address(ApiModel):
    address_line1: str = Field(default="", alias="addressLine1")
    address_line2: str = Field(default="", alias="addressLine2")
    city: str = ""
    state: str = ""
    pincode: str = ""


class OrganizationKycForm(ApiModel):
    organization_name: str = Field(default="", alias="organizationName")
    entity_type: Optional[EntityType] = Field(default=None, alias="entityType")
    other_entity_type: str = Field(default="", alias="otherEntityType")
    cin_number: str = Field(default="", alias="cinNumber")
    llpin_number: str = Field(default="", alias="llpinNumber")
    pan_number: str = Field(default="", alias="panNumber")
    gst_number: str = Field(default="", alias="gstNumber")
    registered_address: Address = Field(default_factory=Address, alias="registeredAddress")
    contact_person_name: str = Field(default="", alias="contactPersonName")
    contact_person_pan: str = Field(default="", alias="contactPersonPan")
    contact_person_aadhaar: str = Field(default="", alias="contactPersonAadhaar")

    registration_certificate: Optional[KycDocument] = Field(
        default=None, alias="registrationCertificate"
    )
    pan_document: Optional[KycDocument] = Field(default=None, alias="panDocument")
    gst_document: Optional[KycDocument] = Field(default=None, alias="gstDocument")
    contact_person_pan_document: Optional[KycDocument] = Field(
        default=None, alias="contactPersonPanDocument"
    )
    contact_person_aadhaar_document: Optional[KycDocument] = Field(
        default=None, alias="contactPersonAadhaarDocument"
    )

    @field_validator("entity_type", mode="before")
    @classmethod
    def blank_entity_type(cls, v):
        return v or None


class PanCard(ApiModel):
    pan_number: str = Field(default="", alias="panNumber")
    document_file: Optional[KycDocument] = Field(default=None, alias="documentFile")


class AadhaarCard(ApiModel):
    aadhaar_number: str = Field(default="", alias="aadhaarNumber")
    document_file: Optional[KycDocument] = Field(default=None, alias="documentFile")


class IndividualKycForm(ApiModel):
    full_name: str = Field(default="", alias="fullName")
    date_of_birth: Optional[date] = Field(default=None, alias="dateOfBirth")
    permanent_address: Address = Field(default_factory=Address, alias="permanentAddress")
    pan_card: PanCard = Field(default_factory=PanCard, alias="panCard")
    aadhaar_card: AadhaarCard = Field(default_factory=AadhaarCard, alias="aadhaarCard")


class ProviderVerification(ApiModel):
    id: str
    provider_id: Optional[str] = Field(default=None, alias="providerId")
    status: VerificationStatus = VerificationStatus.PROCESSING
    remarks: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
