"""Canonical enumerations for matchers and silences."""

from __future__ import annotations

from enum import Enum

from src.shared.errors import MatcherSyntaxError


class MatchType(str, Enum):
    """Comparison operator of a matcher. The value is the operator token."""

    EQUAL = "="
    NOT_EQUAL = "!="
    REGEXP = "=~"
    NOT_REGEXP = "!~"

    @property
    def is_regex(self) -> bool:
        return self in (MatchType.REGEXP, MatchType.NOT_REGEXP)

    @property
    def is_negative(self) -> bool:
        return self in (MatchType.NOT_EQUAL, MatchType.NOT_REGEXP)

    @classmethod
    def from_symbol(cls, op: str) -> MatchType:
        try:
            return cls(op)
        except ValueError:
            raise MatcherSyntaxError("unknown match operator", op) from None


class SilenceState(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    EXPIRED = "expired"


# Sort rank of operators when names and values tie
MATCH_TYPE_ORDER: dict[MatchType, int] = {t: i for i, t in enumerate(MatchType)}
