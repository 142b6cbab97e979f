"""Masking functions — one fixed-shape formatter per entity kind.

All maskers are deterministic and never raise: input too short for a
rule degrades to that kind's ``[MASKED_<KIND>]`` sentinel.  Each masker
also leaves its own output alone, so masking twice is the same as
masking once.
"""

from __future__ import annotations
import re
from typing import Callable

from .patterns import digits_of, split_segments
from .types import EntityKind

PASSWORD_MASK = "[REDACTED]"

# Output shapes of the digit-reformatting maskers
_MASKED_PHONE_RE = re.compile(r"^\(\d{3}\) \*\*\*-\*\*\d{2}$")
_MASKED_SSN_RE = re.compile(r"^\*\*\*-\*\*-\d{4}$")
_MASKED_CARD_RE = re.compile(r"^\*\*\*\*-\*\*\*\*-\*\*\*\*-\d{4}$")
_MASKED_ACCOUNT_RE = re.compile(r"^\*{4}\d{4}$")
_MASKED_ROUTING_RE = re.compile(r"^\d{4}\*{5}$")


def _stars(n: int) -> str:
    return "*" * max(0, n)


def mask_email(value: str) -> str:
    at = value.find("@")
    if at <= 0:
        return EntityKind.EMAIL.sentinel
    local, domain = value[:at], value[at:]
    if len(local) <= 2:
        return "**" + domain
    return local[0] + _stars(len(local) - 2) + local[-1] + domain


def mask_phone(value: str) -> str:
    if _MASKED_PHONE_RE.match(value):
        return value
    digits = digits_of(value)
    if len(digits) >= 10:
        return f"({digits[:3]}) ***-**{digits[-2:]}"
    return EntityKind.PHONE.sentinel


def mask_national_id(value: str) -> str:
    if _MASKED_SSN_RE.match(value):
        return value
    digits = digits_of(value)
    if len(digits) == 9:
        return f"***-**-{digits[-4:]}"
    return EntityKind.NATIONAL_ID.sentinel


def mask_payment_card(value: str) -> str:
    if _MASKED_CARD_RE.match(value):
        return value
    digits = digits_of(value)
    if len(digits) >= 13:
        return f"****-****-****-{digits[-4:]}"
    return EntityKind.PAYMENT_CARD.sentinel


def mask_bank_account(value: str) -> str:
    if _MASKED_ACCOUNT_RE.match(value):
        return value
    digits = digits_of(value)
    if len(digits) >= 8:
        return f"****{digits[-4:]}"
    return EntityKind.BANK_ACCOUNT.sentinel


def mask_routing_number(value: str) -> str:
    if _MASKED_ROUTING_RE.match(value):
        return value
    digits = digits_of(value)
    if len(digits) == 9:
        # first four digits identify the bank
        return f"{digits[:4]}*****"
    return EntityKind.ROUTING_NUMBER.sentinel


def mask_iban(value: str) -> str:
    if len(value) < 8 or value == EntityKind.IBAN.sentinel:
        return EntityKind.IBAN.sentinel
    # country code + check digits, then the last four
    return value[:4] + _stars(len(value) - 8) + value[-4:]


def mask_delimited_account(value: str) -> str:
    """014-00066 -> 014-*0066, 01-01-01-99-1082000 -> 01-**-**-**-***2000."""
    parts = split_segments(value)
    if len(parts) < 2:
        return EntityKind.DELIMITED_ACCOUNT.sentinel

    if "-" in value:
        separator = "-"
    elif "." in value:
        separator = "."
    else:
        separator = " "

    first, middle, last = parts[0], parts[1:-1], parts[-1]
    if len(last) > 4:
        masked_last = _stars(len(last) - 4) + last[-4:]
    elif len(last) > 2:
        masked_last = _stars(len(last) - 2) + last[-2:]
    else:
        masked_last = _stars(len(last))

    return separator.join([first, *(_stars(len(p)) for p in middle), masked_last])


def mask_password(value: str) -> str:
    return PASSWORD_MASK


def mask_generic(value: str) -> str:
    if len(value) <= 4:
        return _stars(len(value))
    return value[0] + _stars(len(value) - 2) + value[-1]


MASKERS: dict[EntityKind, Callable[[str], str]] = {
    EntityKind.EMAIL: mask_email,
    EntityKind.PHONE: mask_phone,
    EntityKind.NATIONAL_ID: mask_national_id,
    EntityKind.PAYMENT_CARD: mask_payment_card,
    EntityKind.BANK_ACCOUNT: mask_bank_account,
    EntityKind.ROUTING_NUMBER: mask_routing_number,
    EntityKind.DELIMITED_ACCOUNT: mask_delimited_account,
    EntityKind.IBAN: mask_iban,
    EntityKind.PASSWORD: mask_password,
    EntityKind.GENERIC: mask_generic,
}

def mask_as(kind: EntityKind, value: str) -> str:
    """Mask ``value`` with the rule for ``kind``."""
    return MASKERS[kind](value)
