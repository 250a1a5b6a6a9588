"""Format checks for Indian identity and registration numbers.

Each check takes the raw string and returns a bool. Callers decide on
case-folding; the patterns themselves expect upper case.
"""

import re

PAN_RE = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
CIN_RE = re.compile(r"^[LU][0-9]{5}[A-Z]{2}[0-9]{4}[A-Z]{3}[0-9]{6}$")
LLPIN_RE = re.compile(r"^[A-Z]{3}-[0-9]{4}$")
GST_RE = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
PINCODE_RE = re.compile(r"^[1-9][0-9]{5}$")
AADHAAR_RE = re.compile(r"^[2-9][0-9]{11}$")
IFSC_RE = re.compile(r"^[A-Z]{4}0[A-Z0-9]{6}$")
BANK_ACCOUNT_RE = re.compile(r"^\d{9,18}$")
PHONE_RE = re.compile(r"^\d{10}$")
VPA_RE = re.compile(r"^[a-zA-Z0-9._-]{2,256}@[a-zA-Z][a-zA-Z0-9]{1,64}$")
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _matches(pattern: re.Pattern, value: str) -> bool:
    return bool(value) and pattern.fullmatch(value.strip()) is not None


def pan(value: str) -> bool:
    return _matches(PAN_RE, value)


def cin(value: str) -> bool:
    return _matches(CIN_RE, value)


def llpin(value: str) -> bool:
    return _matches(LLPIN_RE, value)


def gst(value: str) -> bool:
    return _matches(GST_RE, value)


def pincode(value: str) -> bool:
    return _matches(PINCODE_RE, value)


def aadhaar(value: str) -> bool:
    # Aadhaar is often written in groups of four.
    return _matches(AADHAAR_RE, value.replace(" ", "") if value else value)


def ifsc(value: str) -> bool:
    return _matches(IFSC_RE, value)


def bank_account(value: str) -> bool:
    return _matches(BANK_ACCOUNT_RE, value)


def phone(value: str) -> bool:
    return _matches(PHONE_RE, value)


def vpa(value: str) -> bool:
    return _matches(VPA_RE, value)


def email(value: str) -> bool:
    return _matches(EMAIL_RE, value)
