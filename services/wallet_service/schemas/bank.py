from datetime import datetime
from typing import Optional

from pydantic import Field

from libs.common.api_client import ApiModel


class BankAccountForm(ApiModel):
    acc_number: str = Field(default="", alias="accNumber")
    ifsc: str = ""
    acc_name: str = Field(default="", alias="accName")  # prefilled, not editable
    acc_phone: str = Field(default="", alias="accPhone")
    vpa: str = ""  # optional UPI id
    is_default: bool = Field(default=False, alias="isDefault")


class BankAccount(ApiModel):
    id: str
    acc_number: str = Field(alias="accNumber")
    ifsc: str
    acc_name: str = Field(alias="accName")
    acc_phone: Optional[str] = Field(default=None, alias="accPhone")
    vpa: Optional[str] = None
    is_default: bool = Field(default=False, alias="isDefault")
    bank_name: Optional[str] = Field(default=None, alias="bankName")
    branch_name: Optional[str] = Field(default=None, alias="branchName")
    verification_status: Optional[str] = Field(default=None, alias="verificationStatus")
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
