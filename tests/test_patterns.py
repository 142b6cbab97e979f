"""Tests for the entity detectors and column classifier."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import pytest

from pii_guard import ColumnClassifier, EntityKind, InvalidArgumentError, contains_pii, looks_monetary
from pii_guard.patterns import (
    aba_checksum_ok,
    detect_kind,
    is_bank_account_number,
    is_delimited_account,
    is_email,
    is_iban,
    is_national_id,
    is_payment_card,
    is_phone,
    is_routing_number,
)


# ── Detectors ────────────────────────────────────────────────────────

def test_email_detection():
    assert is_email("alice@example.com")
    assert is_email("contact: bob.smith+news@mail.acme.co.uk")
    assert not is_email("alice at example dot com")


def test_phone_detection():
    assert is_phone("(555) 123-4567")
    assert is_phone("+1 555.123.4567")
    assert is_phone("5551234567")
    assert not is_phone("12-34")


def test_national_id_detection():
    assert is_national_id("123-45-6789")
    assert is_national_id("123456789")
    assert not is_national_id("12-345-6789")


def test_payment_card_detection():
    assert is_payment_card("4111-1111-1111-1111")
    assert is_payment_card("4111 1111 1111 1111")
    assert is_payment_card("4111111111111111")
    assert not is_payment_card("4111-1111")


def test_iban_detection():
    assert is_iban("GB82WEST12345698765432")
    assert is_iban("ab12cdef")
    assert not is_iban("GB8")


def test_aba_checksum():
    assert aba_checksum_ok("021000021")
    assert aba_checksum_ok("011000015")
    assert not aba_checksum_ok("123456789")
    assert not aba_checksum_ok("02100002")


def test_routing_number_checksum_gate():
    # same shape, only the checksum differs
    assert is_routing_number("021000021")
    assert not is_routing_number("123456789")
    assert not is_routing_number("02100002")


def test_bank_account_with_context():
    assert is_bank_account_number("12345678", account_context=True)
    assert is_bank_account_number("123456789", account_context=True)
    assert not is_bank_account_number("1234567", account_context=True)


def test_bank_account_without_context_is_conservative():
    assert not is_bank_account_number("12345678")          # too short
    assert not is_bank_account_number("123456789")         # SSN length
    assert not is_bank_account_number("4111111111111111")  # card length
    assert not is_bank_account_number("411111111111111")   # card length
    assert is_bank_account_number("123456789012")
    assert not is_bank_account_number("123456789012345678")  # 18 digits


def test_delimited_account_shapes():
    assert is_delimited_account("014-00066")
    assert is_delimited_account("01-01-01-99-1082000")
    assert is_delimited_account("12.34.56")
    assert is_delimited_account("1234 5678")
    assert not is_delimited_account("1-2")
    assert not is_delimited_account("12-34")          # too few digits
    assert not is_delimited_account("014-00066-abc")


def test_detect_kind_uses_fixed_order():
    assert detect_kind("call 555-123-4567 or mail a@b.com") is EntityKind.EMAIL
    assert detect_kind("123-45-6789") is EntityKind.NATIONAL_ID
    assert detect_kind("4111-1111-1111-1111") is EntityKind.PAYMENT_CARD
    # a bare 9-digit token is claimed by the national-id rule first
    assert detect_kind("021000021") is EntityKind.NATIONAL_ID
    assert detect_kind("nothing here") is None


def test_contains_pii():
    assert contains_pii("a@b.com")
    assert contains_pii(12345678901)
    assert not contains_pii(None)
    assert not contains_pii("   ")
    assert not contains_pii("The weather is nice today")


# ── Column classifier ────────────────────────────────────────────────

def test_monetary_columns():
    c = ColumnClassifier()
    for name in ["balance", "Account_Balance", "total_amount", "unit_price", "fee",
                 "loan_amt", "amt_paid", "net_sales", "sum_x", "max", "gross_margin"]:
        assert c.is_monetary(name), name
    for name in ["summary", "network", "email", "id"]:
        assert not c.is_monetary(name), name


def test_sensitive_columns():
    c = ColumnClassifier()
    for name in ["email", "EmailAddress", "home_phone", "ssn", "social_security",
                 "user_pwd", "customer_address", "routing_number", "iban",
                 "bank_account_number", "acct_no", "dob", "pin"]:
        assert c.is_sensitive(name), name
    for name in ["account_name", "account_type", "bank_name", "account_balance",
                 "id", "created_at"]:
        assert not c.is_sensitive(name), name


def test_implied_kind_priority():
    c = ColumnClassifier()
    assert c.implied_kind("work_email") is EntityKind.EMAIL
    assert c.implied_kind("mobile") is EntityKind.PHONE
    assert c.implied_kind("ssn") is EntityKind.NATIONAL_ID
    assert c.implied_kind("credit_card_no") is EntityKind.PAYMENT_CARD
    assert c.implied_kind("password") is EntityKind.PASSWORD
    assert c.implied_kind("iban") is EntityKind.IBAN
    assert c.implied_kind("routing_number") is EntityKind.ROUTING_NUMBER
    assert c.implied_kind("bank_account_number") is EntityKind.BANK_ACCOUNT
    assert c.implied_kind("customer_address") is EntityKind.GENERIC
    # email outranks account
    assert c.implied_kind("account_email") is EntityKind.EMAIL


def test_classify():
    c = ColumnClassifier()
    email = c.classify("email")
    assert email.is_sensitive and not email.is_monetary
    assert email.implied_kind is EntityKind.EMAIL

    balance = c.classify("account_balance")
    assert balance.is_monetary and not balance.is_sensitive
    assert balance.implied_kind is None

    plain = c.classify("description")
    assert not plain.is_monetary and not plain.is_sensitive


def test_account_context():
    c = ColumnClassifier()
    assert c.has_account_context("acct_ref")
    assert c.has_account_context("bank_code")
    assert not c.has_account_context("account_balance")
    assert not c.has_account_context("memo")


def test_column_name_must_be_string():
    c = ColumnClassifier()
    with pytest.raises(InvalidArgumentError):
        c.classify(None)
    with pytest.raises(ValueError):
        c.is_sensitive(42)


def test_extended_tables():
    from pii_guard import DEFAULT_TABLES
    tables = DEFAULT_TABLES.extended(sensitive_columns=["NIN"], balance_columns=["exposure"])
    c = ColumnClassifier(tables)
    assert c.is_sensitive("nin")
    assert c.is_monetary("exposure")
    # defaults are untouched
    assert not ColumnClassifier().is_sensitive("nin")


# ── Monetary heuristic ───────────────────────────────────────────────

def test_looks_monetary():
    for value in ["$1,234.56", "1,234", "1042.50", "-12.5", "999999999",
                  "12.3400", " 42 ", "0"]:
        assert looks_monetary(value), value
    for value in ["1000000000", "12345678901", "12.345", "NaN", "Infinity",
                  "abc", "123-45-6789"]:
        assert not looks_monetary(value), value


def test_looks_monetary_needs_plain_ascii_decimals():
    for value in [".75", "+3", "-1,234.5", "1,234,567.10"]:
        assert looks_monetary(value), value
    for value in ["1e1000000", "9E+9999999", "1E5", "123_45_6789",
                  "\uff11\uff12\uff13\uff14\uff15\uff16\uff17\uff18\uff19", "\uff14\uff12",
                  ".", "+", "1."]:
        assert not looks_monetary(value), value


def test_looks_monetary_huge_digit_strings():
    assert not looks_monetary("9" * 2_000_000)
    assert not looks_monetary("1." + "5" * 100)
