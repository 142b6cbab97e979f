"""Tests for the per-kind masking functions."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from pii_guard import EntityKind, mask_as
from pii_guard.masking import (
    MASKERS,
    mask_bank_account,
    mask_delimited_account,
    mask_email,
    mask_generic,
    mask_iban,
    mask_national_id,
    mask_password,
    mask_payment_card,
    mask_phone,
    mask_routing_number,
)


# ── Shapes ───────────────────────────────────────────────────────────

def test_mask_email():
    assert mask_email("john.doe@acme.com") == "j******e@acme.com"
    assert mask_email("abc@x.org") == "a*c@x.org"


def test_mask_email_short_local_part():
    masked = mask_email("jd@x.com")
    assert masked == "**@x.com"
    assert masked.count("@") == 1
    assert masked.endswith("@x.com")


def test_mask_email_degrades_to_sentinel():
    assert mask_email("not-an-email") == "[MASKED_EMAIL]"
    assert mask_email("@x.com") == "[MASKED_EMAIL]"


def test_mask_phone():
    assert mask_phone("555-123-4567") == "(555) ***-**67"
    assert mask_phone("(555) 123 4567") == "(555) ***-**67"
    assert mask_phone("12345") == "[MASKED_PHONE]"


def test_mask_national_id():
    assert mask_national_id("123-45-6789") == "***-**-6789"
    assert mask_national_id("123456789") == "***-**-6789"
    assert mask_national_id("12345") == "[MASKED_SSN]"


def test_mask_payment_card():
    assert mask_payment_card("4111 1111 1111 1111") == "****-****-****-1111"
    assert mask_payment_card("378282246310005") == "****-****-****-0005"
    assert mask_payment_card("4111") == "[MASKED_CARD]"


def test_mask_bank_account():
    assert mask_bank_account("12345678901") == "****8901"
    assert mask_bank_account("ACCT 12345678") == "****5678"
    assert mask_bank_account("1234") == "[MASKED_ACCOUNT]"


def test_mask_routing_number():
    assert mask_routing_number("021000021") == "0210*****"
    assert mask_routing_number("0210") == "[MASKED_ROUTING]"


def test_mask_iban():
    assert mask_iban("GB82WEST12345698765432") == "GB82" + "*" * 14 + "5432"
    assert mask_iban("XX12ABCD3456") == "XX12****3456"
    assert mask_iban("GB82") == "[MASKED_IBAN]"


def test_mask_delimited_account():
    assert mask_delimited_account("014-00066") == "014-*0066"
    assert mask_delimited_account("01-01-01-99-1082000") == "01-**-**-**-***2000"
    assert mask_delimited_account("12.34.567") == "12.**.*67"
    assert mask_delimited_account("12 34") == "12 **"
    assert mask_delimited_account("123456") == "[MASKED_ACCOUNT]"


def test_mask_password_and_generic():
    assert mask_password("hunter2") == "[REDACTED]"
    assert mask_generic("secret") == "s****t"
    assert mask_generic("abcd") == "****"
    assert mask_generic("") == ""


def test_every_kind_has_a_masker():
    assert set(MASKERS) == set(EntityKind)


# ── Idempotence ──────────────────────────────────────────────────────

SAMPLES = {
    EntityKind.EMAIL: "john.doe@acme.com",
    EntityKind.PHONE: "555-123-4567",
    EntityKind.NATIONAL_ID: "123-45-6789",
    EntityKind.PAYMENT_CARD: "4111-1111-1111-1111",
    EntityKind.BANK_ACCOUNT: "12345678901",
    EntityKind.ROUTING_NUMBER: "021000021",
    EntityKind.DELIMITED_ACCOUNT: "01-01-01-99-1082000",
    EntityKind.IBAN: "GB82WEST12345698765432",
    EntityKind.PASSWORD: "hunter2",
    EntityKind.GENERIC: "secret",
}


@pytest.mark.parametrize("kind", list(EntityKind))
def test_masking_twice_changes_nothing(kind):
    once = mask_as(kind, SAMPLES[kind])
    assert once != SAMPLES[kind]
    assert mask_as(kind, once) == once


@pytest.mark.parametrize("kind", [
    EntityKind.EMAIL, EntityKind.PHONE, EntityKind.NATIONAL_ID,
    EntityKind.PAYMENT_CARD, EntityKind.BANK_ACCOUNT, EntityKind.ROUTING_NUMBER,
    EntityKind.DELIMITED_ACCOUNT, EntityKind.IBAN,
])
def test_sentinels_are_stable(kind):
    assert mask_as(kind, kind.sentinel) == kind.sentinel
