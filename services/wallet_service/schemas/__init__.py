"""Wallet Service schemas package."""

from services.wallet_service.schemas.bank import BankAccount, BankAccountForm

__all__ = ["BankAccount", "BankAccountForm"]
