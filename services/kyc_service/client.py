"""KYC endpoints of the REST API."""

from typing import Optional

from libs.auth.models import AccountType
from libs.common.api_client import ApiClient, ApiError, unwrap
from services.kyc_service.schemas import ProviderVerification

ORGANIZATION_KYC_PATH = "/api/v1/provider/kyc/organization"
INDIVIDUAL_KYC_PATH = "/api/v1/provider/kyc/individual"


def kyc_api_path(account_type: AccountType) -> str:
    if account_type == AccountType.INDIVIDUAL:
        return INDIVIDUAL_KYC_PATH
    return ORGANIZATION_KYC_PATH


class KycApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_verification(
        self, provider_id: str, account_type: AccountType = AccountType.ORGANIZATION
    ) -> Optional[ProviderVerification]:
        """Current verification record, or None when nothing was submitted yet."""
        try:
            body = await self.client.get(
                kyc_api_path(account_type),
                params={"providerId": provider_id},
                default_error="Failed to load KYC status",
            )
        except ApiError as e:
            if e.is_not_found:
                return None
            raise
        data = unwrap(body) or {}
        verification = data.get("verification") if "verification" in data else data
        if not verification:
            return None
        return ProviderVerification.model_validate(verification)

    async def _submit(self, path: str, provider_id: str, data: dict, files: list) -> ProviderVerification:
        body = await self.client.post(
            path,
            params={"providerId": provider_id},
            data=data,
            files=files,
            default_error="Failed to submit KYC details",
        )
        return ProviderVerification.model_validate(unwrap(body))

    async def submit_organization(
        self, provider_id: str, data: dict, files: list
    ) -> ProviderVerification:
        return await self._submit(ORGANIZATION_KYC_PATH, provider_id, data, files)

    async def submit_individual(
        self, provider_id: str, data: dict, files: list
    ) -> ProviderVerification:
        return await self._submit(INDIVIDUAL_KYC_PATH, provider_id, data, files)
