"""Matcher data-class — one ``name <op> value`` rule over a label set."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import re2

from src.contracts.enums import MATCH_TYPE_ORDER, MatchType
from src.shared.errors import PatternError


def escape_value(value: str) -> str:
    """OpenMetrics escaping: ``\\`` → ``\\\\``, newline → ``\\n``, ``"`` → ``\\"``."""
    return value.replace("\\", "\\\\").replace("\n", "\\n").replace('"', '\\"')


@dataclass(frozen=True, slots=True)
class Matcher:
    """A single label comparison.

    Regex matchers compile ``^(?:value)$`` once with RE2, at construction, and
    are evaluated as a full-string match. Inline flags such as ``(?i)`` are
    valid inside the group, and character classes like ``\\d`` are ASCII
    only. An invalid pattern raises :class:`PatternError`, so a Matcher never
    exists with a stale or missing regex.
    """

    type: MatchType
    name: str
    value: str
    _regex: Any = field(init=False, default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Accept the bare operator token as well as the enum member
        object.__setattr__(self, "type", MatchType(self.type))
        if self.type.is_regex:
            try:
                compiled = re2.compile(f"^(?:{self.value})$")
            except re2.error as exc:
                raise PatternError(self.value, str(exc)) from exc
            object.__setattr__(self, "_regex", compiled)

    @property
    def regex(self) -> Any:
        return self._regex

    def matches(self, value: str) -> bool:
        """Whether *value* (a label value, ``""`` if absent) satisfies the rule."""
        if self._regex is not None:
            hit = self._regex.fullmatch(value) is not None
        else:
            hit = value == self.value
        return not hit if self.type.is_negative else hit

    def sort_key(self) -> tuple[str, str, int]:
        return (self.name, self.value, MATCH_TYPE_ORDER[self.type])

    # ── serialisation ────────────────────────────────────────────────────

    def render(self) -> str:
        """``name<op>"value"`` with the value escaped; parses back to an equal Matcher."""
        return f'{self.name}{self.type.value}"{escape_value(self.value)}"'

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, Any]:
        """Alertmanager v1 API shape."""
        return {
            "name": self.name,
            "value": self.value,
            "isRegex": self.type.is_regex,
            "isEqual": not self.type.is_negative,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Matcher:
        is_regex = bool(data.get("isRegex", False))
        is_equal = bool(data.get("isEqual", True))
        if is_regex:
            mtype = MatchType.REGEXP if is_equal else MatchType.NOT_REGEXP
        else:
            mtype = MatchType.EQUAL if is_equal else MatchType.NOT_EQUAL
        return cls(mtype, str(data["name"]), str(data.get("value", "")))


def render_matchers(matchers: list[Matcher]) -> str:
    """``{a="1",b!="2"}`` — matchers in list order."""
    return "{" + ",".join(m.render() for m in matchers) + "}"


def sort_matchers(matchers: list[Matcher]) -> list[Matcher]:
    """New list ordered by name, then value, then operator."""
    return sorted(matchers, key=Matcher.sort_key)
