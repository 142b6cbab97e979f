"""Column classifier and monetary heuristic.

Column classification is a pure function of the name: nothing is cached,
so two calls with the same name always agree and concurrent callers never
share mutable state.
"""

from __future__ import annotations
import re

from .exceptions import InvalidArgumentError
from .types import ColumnClassification, EntityKind
from .vocabulary import DEFAULT_TABLES, ClassificationTables

# sum_x, net, gross_total, avg ... but not "summary" or "network"
_AGGREGATE_NAME_RE = re.compile(r"\b(sum|net|gross|min|max|avg|average)(_|$)")

# $1,234.56 / 999 / 12.50
CURRENCY_LITERAL_RE = re.compile(r"^\$?\d{1,3}(?:,\d{3})*(?:\.\d{2})?$", re.ASCII)

# 1,234.5 / -12 / .75 ; no exponents, underscores or non-ASCII digits
_DECIMAL_TEXT_RE = re.compile(r"^[+-]?(\d[\d,]*)?(?:\.(\d+))?$", re.ASCII)

# fewer than ten integer digits, i.e. under one billion
_MONETARY_MAX_DIGITS = 9


def _check_name(column_name: object) -> str:
    if not isinstance(column_name, str):
        raise InvalidArgumentError(
            f"column name must be a string, got {type(column_name).__name__}"
        )
    return column_name


class ColumnClassifier:
    """Decides from a column name whether it holds money or sensitive data."""

    __slots__ = ("tables",)

    def __init__(self, tables: ClassificationTables | None = None) -> None:
        self.tables = tables or DEFAULT_TABLES

    def is_monetary(self, column_name: str) -> bool:
        lower = _check_name(column_name).lower()
        if lower in self.tables.balance_column_names:
            return True
        if any(token in lower for token in self.tables.monetary_tokens):
            return True
        return (
            lower.endswith("amt")
            or lower.startswith("amt_")
            or _AGGREGATE_NAME_RE.search(lower) is not None
        )

    def is_sensitive(self, column_name: str) -> bool:
        # Monetary names are never sensitive, even "account_balance"
        if self.is_monetary(column_name):
            return False
        lower = column_name.lower()
        if lower in self.tables.sensitive_column_names:
            return True
        if any(token in lower for token in self.tables.sensitive_tokens):
            return True
        if any(token in lower for token in self.tables.account_tokens):
            return not any(ex in lower for ex in self.tables.account_exclusions)
        return False

    def implied_kind(self, column_name: str) -> EntityKind:
        """Masking kind a sensitive column name asks for."""
        lower = _check_name(column_name).lower()
        for kind, hints in self.tables.kind_hints:
            if any(hint in lower for hint in hints):
                return kind
        return EntityKind.GENERIC

    def has_account_context(self, column_name: str) -> bool:
        """Column mentions account/bank/acct and is not a money column."""
        lower = _check_name(column_name).lower()
        if not any(token in lower for token in self.tables.account_context_tokens):
            return False
        return not self.is_monetary(column_name)

    def classify(self, column_name: str) -> ColumnClassification:
        if self.is_monetary(column_name):
            return ColumnClassification(is_monetary=True, is_sensitive=False)
        if self.is_sensitive(column_name):
            return ColumnClassification(
                is_monetary=False,
                is_sensitive=True,
                implied_kind=self.implied_kind(column_name),
            )
        return ColumnClassification(is_monetary=False, is_sensitive=False)


def looks_monetary(text: str) -> bool:
    """Does the value itself look like an amount of money?

    Either a currency literal ($-prefixed, comma-grouped, two decimals), or
    a plain ASCII decimal (optional sign, thousands commas, no exponent)
    under one billion with at most two significant fractional digits.
    Whole numbers under a billion count as money.
    """
    candidate = text.strip()
    if CURRENCY_LITERAL_RE.match(candidate):
        return True
    match = _DECIMAL_TEXT_RE.match(candidate)
    if match is None:
        return False
    whole, fraction = match.group(1) or "", match.group(2) or ""
    if not whole and not fraction:
        return False
    # magnitude and precision read off the digits; no decimal arithmetic
    integer_digits = whole.replace(",", "").lstrip("0")
    return (
        len(integer_digits) <= _MONETARY_MAX_DIGITS
        and len(fraction.rstrip("0")) <= 2
    )


_default_classifier = ColumnClassifier()


def is_column_sensitive(column_name: str) -> bool:
    """Module-level shortcut using the default tables."""
    return _default_classifier.is_sensitive(column_name)
