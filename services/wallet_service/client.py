"""Provider payout account endpoints."""

from typing import Any

from libs.common.api_client import ApiClient, unwrap
from services.wallet_service.schemas import BankAccount

BANK_ACCOUNT_PATH = "/api/v1/provider/wallet/bank"


class WalletApi:
    def __init__(self, client: ApiClient):
        self.client = client

    async def add_bank_account(self, provider_id: str, payload: dict[str, Any]) -> BankAccount:
        body = await self.client.post(
            BANK_ACCOUNT_PATH,
            params={"providerId": provider_id},
            json=payload,
            default_error="Failed to add bank account. Please try again.",
        )
        return BankAccount.model_validate(unwrap(body))

    async def list_bank_accounts(self, provider_id: str) -> list[BankAccount]:
        body = await self.client.get(
            BANK_ACCOUNT_PATH,
            params={"providerId": provider_id},
            default_error="Failed to load bank accounts",
        )
        data = unwrap(body) or []
        return [BankAccount.model_validate(row) for row in data]
