"""Entity detectors — one regex/validation rule per sensitive entity kind.

Every detector is a pure ``str -> bool`` test.  Matching is a search, not
a full match: a value *containing* an email is treated as an email.
Order matters only to the redaction policy, which evaluates them in the
sequence of CONTENT_DETECTORS.
"""

from __future__ import annotations
import re
from typing import Any, Callable

from .types import EntityKind

EMAIL_RE = re.compile(
    r"\b[A-Za-z0-9._%+\-]+@[A-Za-z0-9.\-]+\.[A-Za-z]{2,}\b"
)

# US-style: optional +1, area code with optional parens, 3-3-4 digits
PHONE_RE = re.compile(
    r"(\+?1[\-.\s]?)?\(?([0-9]{3})\)?[\-.\s]?([0-9]{3})[\-.\s]?([0-9]{4})"
)

# SSN: dashed form, or any bare 9-digit token
NATIONAL_ID_RE = re.compile(r"\b\d{3}-\d{2}-\d{4}\b|\b\d{9}\b")

PAYMENT_CARD_RE = re.compile(r"\b(?:\d{4}[\-\s]?){3}\d{4}\b")

IBAN_RE = re.compile(r"\b[A-Z]{2}\d{2}[A-Z0-9]{4,30}\b", re.IGNORECASE)

ROUTING_NUMBER_RE = re.compile(r"\b\d{9}\b")

# Most bank accounts are 8-17 digits
BANK_ACCOUNT_RE = re.compile(r"\b\d{8,17}\b")

# Loose screen for segmented account numbers: 014-00066, 01-01-01-99-1082000
FORMATTED_ACCOUNT_RE = re.compile(r"\b\d{2,4}[\-.\s]\d{2,8}(?:[\-.\s]\d{1,8})*\b")
DASHED_ACCOUNT_RE = re.compile(r"\b\d{3}-\d{5,8}\b|\b\d{2}(?:-\d{2}){2,5}-\d{4,10}\b")

# Exact shapes accepted after the screen
_ACCOUNT_SHAPES: tuple[re.Pattern, ...] = (
    re.compile(r"^\d{3}-\d{5,8}$"),
    re.compile(r"^\d{2}(?:-\d{2}){2,5}-\d{4,10}$"),
)
_FLEXIBLE_ACCOUNT_SHAPE = re.compile(r"^\d{2,4}(?:[\-.\s]\d{2,8}){1,6}$")
_SEGMENT_SPLIT = re.compile(r"[\-. ]+")

ABA_WEIGHTS: tuple[int, ...] = (3, 7, 1, 3, 7, 1, 3, 7, 1)

_CARD_LENGTHS = (15, 16)
_NATIONAL_ID_LENGTH = 9

_NON_DIGIT = re.compile(r"\D")


def digits_of(text: str) -> str:
    """Strip everything that is not a decimal digit."""
    return _NON_DIGIT.sub("", text)


def is_email(text: str) -> bool:
    return EMAIL_RE.search(text) is not None


def is_phone(text: str) -> bool:
    return PHONE_RE.search(text) is not None


def is_national_id(text: str) -> bool:
    return NATIONAL_ID_RE.search(text) is not None


def is_payment_card(text: str) -> bool:
    return PAYMENT_CARD_RE.search(text) is not None


def is_iban(text: str) -> bool:
    return IBAN_RE.search(text) is not None


def aba_checksum_ok(digits: str) -> bool:
    """ABA routing checksum: weighted digit sum must be a multiple of 10."""
    if len(digits) != 9 or not digits.isdigit():
        return False
    total = sum(int(d) * w for d, w in zip(digits, ABA_WEIGHTS))
    return total % 10 == 0


def is_routing_number(text: str) -> bool:
    if ROUTING_NUMBER_RE.search(text) is None:
        return False
    return aba_checksum_ok(digits_of(text))


def is_bank_account_number(text: str, *, account_context: bool = False) -> bool:
    """8-17 digit account number.

    ``account_context`` means the column name already says "account" (and
    is not monetary); the digit run alone is then enough.  Without it the
    rule is conservative: at least 10 digits, and not a card- or SSN-length
    number.
    """
    if BANK_ACCOUNT_RE.search(text) is None:
        return False
    digits = digits_of(text)
    if not 8 <= len(digits) <= 17:
        return False
    if account_context:
        return True
    return (
        len(digits) >= 10
        and len(digits) not in _CARD_LENGTHS
        and len(digits) != _NATIONAL_ID_LENGTH
    )


def is_delimited_account(text: str) -> bool:
    if FORMATTED_ACCOUNT_RE.search(text) is None and DASHED_ACCOUNT_RE.search(text) is None:
        return False
    if not 6 <= len(digits_of(text)) <= 20:
        return False
    if any(shape.match(text) for shape in _ACCOUNT_SHAPES):
        return True
    if _FLEXIBLE_ACCOUNT_SHAPE.match(text):
        segments = [s for s in _SEGMENT_SPLIT.split(text) if s]
        return 2 <= len(segments) <= 7
    return False


def split_segments(text: str) -> list[str]:
    """Split a delimited account on '-', '.' or ' ', dropping empty parts."""
    return [s for s in _SEGMENT_SPLIT.split(text) if s]


# Content detectors in precedence order, without column context
CONTENT_DETECTORS: list[tuple[EntityKind, Callable[[str], bool]]] = [
    (EntityKind.EMAIL, is_email),
    (EntityKind.PHONE, is_phone),
    (EntityKind.NATIONAL_ID, is_national_id),
    (EntityKind.PAYMENT_CARD, is_payment_card),
    (EntityKind.IBAN, is_iban),
    (EntityKind.ROUTING_NUMBER, is_routing_number),
    (EntityKind.BANK_ACCOUNT, is_bank_account_number),
    (EntityKind.DELIMITED_ACCOUNT, is_delimited_account),
]


def detect_kind(text: str) -> EntityKind | None:
    """First entity kind whose detector matches, ignoring column names."""
    for kind, detector in CONTENT_DETECTORS:
        if detector(text):
            return kind
    return None


def contains_pii(value: Any) -> bool:
    """True when any content detector fires on the value's text."""
    if value is None:
        return False
    text = str(value)
    if not text.strip():
        return False
    return detect_kind(text) is not None
