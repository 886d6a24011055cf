"""Matcher evaluation against label sets.

A label set matches a matcher list when every matcher is satisfied (logical
AND).  A label missing from the set compares as the empty string, so
``env!="prod"`` matches an alert without an ``env`` label and ``env=~".+"``
does not.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from src.contracts.matcher import Matcher


def matches(matchers: Iterable[Matcher], labels: Mapping[str, str]) -> bool:
    """True iff every matcher matches *labels*; an empty list matches anything."""
    return all(m.matches(labels.get(m.name, "")) for m in matchers)


def filter_matching(
    matchers: Iterable[Matcher],
    label_sets: Iterable[Mapping[str, str]],
) -> list[Mapping[str, str]]:
    """Return the label sets that *matchers* select, in input order."""
    ms = list(matchers)
    return [labels for labels in label_sets if matches(ms, labels)]
