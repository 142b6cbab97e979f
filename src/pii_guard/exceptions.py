"""Exceptions raised by pii-guard.

Everything inherits from PiiGuardError so a host can catch the whole
family with one except clause.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import SafetyVerdict


class PiiGuardError(Exception):
    """Base exception for all pii-guard errors."""


class InvalidArgumentError(PiiGuardError, ValueError):
    """A caller passed something that is not a column name or query string.

    This is a programming error on the caller's side.  Classification is
    computed fresh on every call, so there is nothing to retry or recover.
    """


class UnsafeQueryError(PiiGuardError):
    """Query failed the safety scan and must not reach the database.

    Attributes:
        verdict: The full SafetyVerdict, including every violation found.
    """

    def __init__(self, verdict: SafetyVerdict) -> None:
        self.verdict = verdict
        super().__init__(
            f"Query safety validation failed: {verdict.message}: "
            + "; ".join(verdict.violations)
        )

    @property
    def violations(self) -> tuple[str, ...]:
        return self.verdict.violations


class ConfigError(PiiGuardError):
    """Configuration could not be loaded or is malformed."""
