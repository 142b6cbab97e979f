"""Redactor — the redaction policy applied to every value leaving the host.

Usage:
    from pii_guard import Redactor

    redactor = Redactor()        # reusable, thread-safe after init

    redactor.mask_value("123-45-6789", "ssn").masked     # "***-**-6789"
    redactor.mask_value("1042.50", "balance").masked     # "1042.50"

    result = redactor.filter_rows(rows)
    result.rows, result.masked_row_count

Precedence, first rule that decides wins:

    1. None / blank                     -> unchanged
    2. monetary column name             -> unchanged
    3. value shaped like money          -> unchanged
    4. sensitive column name            -> masked by the column's kind
    5. content rules (CONTENT_RULES)    -> masked by the matching kind
    6. nothing matched                  -> unchanged
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Callable, Iterable, Mapping

import structlog

from . import patterns
from .columns import ColumnClassifier, looks_monetary
from .masking import mask_as
from .types import EntityKind, RedactionOutcome, RowSetResult
from .vocabulary import DEFAULT_TABLES, ClassificationTables

logger = structlog.get_logger()


@dataclass(frozen=True, slots=True)
class ValueContext:
    """What a content rule may know about the value's column."""
    column_name: str
    account_context: bool = False   # name says account/bank/acct, not money


@dataclass(frozen=True, slots=True)
class ContentRule:
    """One step of the content-detection chain."""
    name: str
    kind: EntityKind
    matches: Callable[[str, ValueContext], bool]


def _text_only(detector: Callable[[str], bool]) -> Callable[[str, ValueContext], bool]:
    return lambda text, ctx: detector(text)


CONTENT_RULES: tuple[ContentRule, ...] = (
    ContentRule("email", EntityKind.EMAIL, _text_only(patterns.is_email)),
    ContentRule("phone", EntityKind.PHONE, _text_only(patterns.is_phone)),
    ContentRule("national_id", EntityKind.NATIONAL_ID, _text_only(patterns.is_national_id)),
    ContentRule("payment_card", EntityKind.PAYMENT_CARD, _text_only(patterns.is_payment_card)),
    ContentRule("iban", EntityKind.IBAN, _text_only(patterns.is_iban)),
    ContentRule("routing_number", EntityKind.ROUTING_NUMBER, _text_only(patterns.is_routing_number)),
    ContentRule(
        "bank_account",
        EntityKind.BANK_ACCOUNT,
        lambda text, ctx: patterns.is_bank_account_number(
            text, account_context=ctx.account_context
        ),
    ),
    ContentRule(
        "delimited_account", EntityKind.DELIMITED_ACCOUNT, _text_only(patterns.is_delimited_account)
    ),
)


@dataclass
class RedactorConfig:
    """Configuration for the Redactor."""
    tables: ClassificationTables = DEFAULT_TABLES
    use_presidio: bool = False        # append the NER rule after the fixed chain
    language: str = "en"
    score_threshold: float = 0.35     # minimum confidence for Presidio
    presidio_entities: list[str] | None = None  # None = defaults
    # Content-rule kinds to never apply (column-name masking still applies)
    skip_kinds: set[EntityKind] = field(default_factory=set)
    # Allow-list: values that should NEVER be masked
    allow_list: set[str] = field(default_factory=set)


def _as_text(value: Any) -> str:
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


class Redactor:
    """Column-aware, content-aware value masker."""

    def __init__(self, config: RedactorConfig | None = None) -> None:
        self.config = config or RedactorConfig()
        self.columns = ColumnClassifier(self.config.tables)
        self.rules = self._build_rules()

    def _build_rules(self) -> tuple[ContentRule, ...]:
        rules = [r for r in CONTENT_RULES if r.kind not in self.config.skip_kinds]
        if self.config.use_presidio:
            from .presidio_layer import has_entities
            cfg = self.config
            rules.append(ContentRule(
                "presidio",
                EntityKind.GENERIC,
                lambda text, ctx: has_entities(
                    text,
                    language=cfg.language,
                    entities=cfg.presidio_entities,
                    score_threshold=cfg.score_threshold,
                ),
            ))
        return tuple(rules)

    def mask_value(self, value: Any, column_name: str) -> RedactionOutcome:
        """Run one value through the precedence chain."""
        column = self.columns.classify(column_name)

        if value is None or isinstance(value, bool):
            return RedactionOutcome(value, value)
        text = _as_text(value)
        if not text.strip() or text in self.config.allow_list:
            return RedactionOutcome(value, value)

        if column.is_monetary:
            logger.debug("monetary_column_skipped", column=column_name)
            return RedactionOutcome(value, value)

        if looks_monetary(text):
            logger.debug("monetary_value_skipped", column=column_name)
            return RedactionOutcome(value, value)

        if column.is_sensitive:
            kind = column.implied_kind or EntityKind.GENERIC
            return self._outcome(value, text, kind, f"column:{kind.name.lower()}")

        # Dates only get masked when the column name asks for it (dob, ...)
        if isinstance(value, (date, time)):
            return RedactionOutcome(value, value)

        ctx = ValueContext(column_name, self.columns.has_account_context(column_name))
        for rule in self.rules:
            if rule.matches(text, ctx):
                return self._outcome(value, text, rule.kind, rule.name)

        return RedactionOutcome(value, value)

    @staticmethod
    def _outcome(value: Any, text: str, kind: EntityKind, rule: str) -> RedactionOutcome:
        masked = mask_as(kind, text)
        if masked == text:
            # already in masked form; hand back the original object untouched
            return RedactionOutcome(value, value, rule)
        return RedactionOutcome(value, masked, rule)

    def is_column_sensitive(self, column_name: str) -> bool:
        return self.columns.is_sensitive(column_name)

    def mask_row(self, row: Mapping[str, Any]) -> tuple[dict[str, Any], bool]:
        """Masked copy of the row, and whether any value changed."""
        out: dict[str, Any] = {}
        changed = False
        for column, value in row.items():
            outcome = self.mask_value(value, column)
            out[column] = outcome.masked
            if outcome.was_masked:
                changed = True
                logger.debug("column_masked", column=column, rule=outcome.rule)
        return out, changed

    def filter_row(self, row: Mapping[str, Any]) -> dict[str, Any]:
        """Return a new row with the same keys and masked values.

        Does NOT mutate the original.
        """
        return self.mask_row(row)[0]

    def filter_rows(self, rows: Iterable[Mapping[str, Any]]) -> RowSetResult:
        """Filter a row set, counting rows that had anything masked."""
        result = RowSetResult()
        for row in rows:
            filtered, changed = self.mask_row(row)
            result.rows.append(filtered)
            if changed:
                result.masked_row_count += 1

        if result.masked_row_count:
            logger.info(
                "rows_masked",
                masked_count=result.masked_row_count,
                total_count=result.total_row_count,
            )
        return result


_default_redactor = Redactor()


def mask_value(value: Any, column_name: str) -> RedactionOutcome:
    return _default_redactor.mask_value(value, column_name)


def filter_row(row: Mapping[str, Any]) -> dict[str, Any]:
    return _default_redactor.filter_row(row)


def filter_rows(rows: Iterable[Mapping[str, Any]]) -> RowSetResult:
    return _default_redactor.filter_rows(rows)
