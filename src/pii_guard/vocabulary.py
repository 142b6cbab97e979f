"""Classification tables — the vocabularies every classifier reads.

Tables are frozen: build one ClassificationTables at startup (or use
DEFAULT_TABLES) and share it.  Nothing in the package mutates them.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import Iterable

from .types import EntityKind


SENSITIVE_COLUMN_NAMES: frozenset[str] = frozenset({
    "email", "emailaddress", "email_address", "e_mail",
    "phone", "phonenumber", "phone_number", "mobile", "cellphone", "telephone",
    "ssn", "socialsecuritynumber", "social_security_number",
    "creditcard", "credit_card", "cardnumber", "card_number",
    "password", "pwd", "passcode", "pin",
    "dob", "dateofbirth", "date_of_birth", "birthdate",
    "address", "street", "streetaddress", "street_address",
    "zipcode", "zip_code", "postalcode", "postal_code",
    "driverlicense", "driver_license", "license_number",
    # banking
    "accountnumber", "account_number", "bankaccount", "bank_account",
    "routingnumber", "routing_number", "aba", "aba_number",
    "iban", "swift", "sortcode", "sort_code", "bsb",
    "accountno", "acct_number", "acct_no", "bank_acc",
})

BALANCE_COLUMN_NAMES: frozenset[str] = frozenset({
    "balance", "currentbalance", "available_balance", "availablebalance",
    "amount", "total", "subtotal", "price", "cost", "value", "worth",
    "balance_amount", "account_balance", "ending_balance", "endingbalance",
    "beginning_balance", "beginningbalance", "current_amount", "currentamount",
    "balance_due", "balancedue", "outstanding_balance", "outstandingbalance",
    "ledger_balance", "ledgerbalance", "cleared_balance", "clearedbalance",
    "pending_balance", "pendingbalance", "hold_amount", "holdamount",
    "credit_balance", "creditbalance", "debit_balance", "debitbalance",
})

# Substrings that make any column monetary
MONETARY_TOKENS: tuple[str, ...] = (
    "balance", "amount", "total", "price", "cost", "value", "worth",
    "fee", "charge", "payment", "deposit", "withdrawal",
)

# Substrings that make a column sensitive outright
SENSITIVE_TOKENS: tuple[str, ...] = (
    "email", "phone", "ssn", "social", "password", "pwd",
    "address", "routing", "iban",
)

# Sensitive only when the name is not descriptive ("account_name", "account_type")
ACCOUNT_TOKENS: tuple[str, ...] = ("account", "bank")
ACCOUNT_EXCLUSIONS: tuple[str, ...] = ("name", "type")

# Column-name hints for the content-based bank account rule
ACCOUNT_CONTEXT_TOKENS: tuple[str, ...] = ("account", "bank", "acct")

# Column name -> masking kind, first match wins
KIND_HINTS: tuple[tuple[EntityKind, tuple[str, ...]], ...] = (
    (EntityKind.EMAIL, ("email",)),
    (EntityKind.PHONE, ("phone", "mobile", "telephone")),
    (EntityKind.NATIONAL_ID, ("ssn", "social")),
    (EntityKind.PAYMENT_CARD, ("card", "credit")),
    (EntityKind.PASSWORD, ("password", "pwd")),
    (EntityKind.IBAN, ("iban",)),
    (EntityKind.ROUTING_NUMBER, ("routing", "aba")),
    (EntityKind.BANK_ACCOUNT, ("account", "bank", "acct")),
)


@dataclass(frozen=True)
class ClassificationTables:
    """Immutable vocabulary bundle handed to ColumnClassifier and friends."""
    sensitive_column_names: frozenset[str] = SENSITIVE_COLUMN_NAMES
    balance_column_names: frozenset[str] = BALANCE_COLUMN_NAMES
    monetary_tokens: tuple[str, ...] = MONETARY_TOKENS
    sensitive_tokens: tuple[str, ...] = SENSITIVE_TOKENS
    account_tokens: tuple[str, ...] = ACCOUNT_TOKENS
    account_exclusions: tuple[str, ...] = ACCOUNT_EXCLUSIONS
    account_context_tokens: tuple[str, ...] = ACCOUNT_CONTEXT_TOKENS
    kind_hints: tuple[tuple[EntityKind, tuple[str, ...]], ...] = field(
        default=KIND_HINTS
    )

    def extended(
        self,
        *,
        sensitive_columns: Iterable[str] = (),
        balance_columns: Iterable[str] = (),
    ) -> "ClassificationTables":
        """Return a copy with extra exact-match column names added."""
        return replace(
            self,
            sensitive_column_names=self.sensitive_column_names
            | {c.lower() for c in sensitive_columns},
            balance_column_names=self.balance_column_names
            | {c.lower() for c in balance_columns},
        )


DEFAULT_TABLES = ClassificationTables()
