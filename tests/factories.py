"""
Payload factories for creating valid REST API responses.

Every factory produces a camelCase dict shaped like the API's JSON.
Override any field via kwargs.

Usage:
    plan = FeePlanFactory.create(status="PAID")
    api_stub.on("GET", FEEPLAN_PATH, json=envelope(MemberFactory.create(feePlans=[plan])))
"""

import uuid
from datetime import date
from typing import Any

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:8]}"


def envelope(data: Any = None, **extra) -> dict:
    """Wrap a payload in the API's ``{success, data}`` envelope."""
    body = {"success": True, "data": data}
    body.update(extra)
    return body


def error_body(message: str, **extra) -> dict:
    body = {"success": False, "error": message}
    body.update(extra)
    return body


def identity_cookie(role: str, sub: str, **claims) -> dict[str, str]:
    """Signed identity cookie for the given portal role."""
    from libs.auth.dependencies import issue_identity
    from libs.common.config import get_settings

    settings = get_settings()
    names = {
        "provider": settings.PROVIDER_COOKIE,
        "consumer": settings.CONSUMER_COOKIE,
        "moderator": settings.MODERATOR_COOKIE,
    }
    token = issue_identity({"sub": sub, "role": role, **claims})
    return {names[role]: token}


# ---------------------------------------------------------------------------
# Fees
# ---------------------------------------------------------------------------


class FeePlanFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": _id("fp"),
            "name": "Term 1 Tuition",
            "description": "First term",
            "amount": 1500,
            "dueDate": "2024-06-01T00:00:00.000Z",
            "status": "DUE",
            "isOfflinePaid": False,
            "receipt": None,
            "memberId": "mem-1",
            "providerId": "prov-1",
        }
        defaults.update(overrides)
        return defaults


class MemberFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": "mem-1",
            "uniqueId": "STU001",
            "firstName": "Meera",
            "lastName": "Iyer",
            "email": "meera@example.com",
            "phone": "9123456780",
            "category": "Grade 5",
            "subcategory": "Section A",
            "feePlans": [],
        }
        defaults.update(overrides)
        return defaults


class SimplifiedMemberFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": _id("mem"),
            "memberName": "Meera Iyer",
            "uniqueId": "STU001",
            "phone": "9123456780",
            "email": "meera@example.com",
            "category": "Grade 5",
            "subcategory": "Section A",
            "joinedAt": "2024-04-01T10:00:00.000Z",
            "pendingFeePlansCount": 0,
            "totalPendingAmount": 0,
            "hasOverdueFees": False,
            "overdueFeePlansCount": 0,
            "isLinkedToConsumer": False,
            "linkedConsumer": None,
        }
        defaults.update(overrides)
        return defaults

    @staticmethod
    def roster(members: list, **overrides) -> dict:
        defaults = {
            "members": members,
            "totalMembers": len(members),
            "totalPendingFees": sum(m["totalPendingAmount"] for m in members),
            "totalMembersWithOverdueFees": sum(1 for m in members if m["hasOverdueFees"]),
        }
        defaults.update(overrides)
        return defaults


# ---------------------------------------------------------------------------
# Memberships
# ---------------------------------------------------------------------------


class ProviderFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": "prov-1",
            "name": "Sunrise Academy",
            "code": "SUN01",
            "category": "EDUCATIONAL",
            "type": "ORGANIZATION",
            "region": "KA",
            "city": "Bengaluru",
            "country": "IN",
        }
        defaults.update(overrides)
        return defaults


class MembershipFactory:
    @staticmethod
    def create(fee_plans=None, **overrides) -> dict:
        member = MemberFactory.create(
            provider=ProviderFactory.create(),
            feePlans=fee_plans if fee_plans is not None else [FeePlanFactory.create()],
        )
        defaults = {
            "id": _id("ms"),
            "claimedAt": "2024-04-01T10:00:00.000Z",
            "member": member,
        }
        defaults.update(overrides)
        return defaults


# ---------------------------------------------------------------------------
# Moderation
# ---------------------------------------------------------------------------


class OrganisationFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = ProviderFactory.create(
            id=_id("prov"),
            adminName="Asha Rao",
            email="admin@sunrise.example",
            phone="9876543210",
            status="APPROVED",
            createdAt="2024-01-10T09:00:00.000Z",
        )
        defaults.update(overrides)
        return defaults


class ConsumerAccountFactory:
    @staticmethod
    def create(memberships: int = 0, **overrides) -> dict:
        defaults = {
            "id": _id("cons"),
            "firstName": "Ravi",
            "lastName": "Kumar",
            "phone": "9988776655",
            "email": "ravi@example.com",
            "isPhoneVerified": True,
            "createdAt": "2024-03-02T08:00:00.000Z",
            "_count": {"memberships": memberships},
        }
        defaults.update(overrides)
        return defaults


# ---------------------------------------------------------------------------
# KYC
# ---------------------------------------------------------------------------


class VerificationFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": _id("kyc"),
            "providerId": "prov-1",
            "status": "PROCESSING",
            "remarks": None,
            "createdAt": "2024-05-01T09:00:00.000Z",
            "updatedAt": "2024-05-01T09:00:00.000Z",
        }
        defaults.update(overrides)
        return defaults


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------


class PaymentContextFactory:
    @staticmethod
    def create(fee_plan=None, **overrides) -> dict:
        defaults = {
            "feePlan": fee_plan or FeePlanFactory.create(id="fp-1"),
            "member": MemberFactory.create(),
            "provider": ProviderFactory.create(),
        }
        defaults.update(overrides)
        return defaults


class TransactionFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": _id("txn"),
            "externalPaymentId": "cf_pay_1",
            "amount": 1500,
            "status": "SUCCESS",
            "paymentTime": "2024-05-10T08:00:00.000Z",
            "paymentCurrency": "INR",
            "paymentGroup": "upi",
            "orderId": "order_1",
        }
        defaults.update(overrides)
        return defaults


class BankAccountFactory:
    @staticmethod
    def create(**overrides) -> dict:
        defaults = {
            "id": _id("bank"),
            "accNumber": "123456789012",
            "ifsc": "HDFC0001234",
            "accName": "Sunrise Academy",
            "accPhone": "9876543210",
            "isDefault": True,
            "bankName": "HDFC Bank",
            "verificationStatus": "PENDING",
        }
        defaults.update(overrides)
        return defaults


# ---------------------------------------------------------------------------
# KYC forms
# ---------------------------------------------------------------------------


class KycFormFactory:
    """Complete, valid KYC forms as models; documents are small PDFs."""

    @staticmethod
    def document(name: str = "doc.pdf", size: int = 1024):
        from services.kyc_service.schemas import KycDocument

        return KycDocument(filename=name, content_type="application/pdf", content=b"x" * size)

    @staticmethod
    def address():
        from services.kyc_service.schemas import Address

        return Address(address_line1="12 MG Road", city="Bengaluru", state="KA", pincode="560001")

    @classmethod
    def organization(cls, **overrides):
        from services.kyc_service.schemas import EntityType, OrganizationKycForm

        defaults = {
            "organization_name": "Sunrise Academy Pvt Ltd",
            "entity_type": EntityType.PVT_LTD,
            "cin_number": "U80301KA2015PTC012345",
            "pan_number": "AAACS1234K",
            "gst_number": "29AAACS1234K1Z5",
            "registered_address": cls.address(),
            "contact_person_name": "Asha Rao",
            "contact_person_pan": "ABCPR1234D",
            "contact_person_aadhaar": "2345 6789 0123",
            "registration_certificate": cls.document(),
            "pan_document": cls.document(),
            "gst_document": cls.document(),
            "contact_person_pan_document": cls.document(),
            "contact_person_aadhaar_document": cls.document(),
        }
        defaults.update(overrides)
        return OrganizationKycForm(**defaults)

    @classmethod
    def individual(cls, **overrides):
        from services.kyc_service.schemas import AadhaarCard, IndividualKycForm, PanCard

        defaults = {
            "full_name": "Asha Rao",
            "date_of_birth": date(1990, 1, 1),
            "permanent_address": cls.address(),
            "pan_card": PanCard(pan_number="ABCPR1234D", document_file=cls.document()),
            "aadhaar_card": AadhaarCard(
                aadhaar_number="234567890123", document_file=cls.document("a.png")
            ),
        }
        defaults.update(overrides)
        return IndividualKycForm(**defaults)
