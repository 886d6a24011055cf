"""Label-set helpers: rendering, fingerprinting and ``name=value`` pairs.

The rendered form is what the alert source hands over for targeted silences;
it is itself a valid matcher list of equality matchers::

    {alertname="DiskFull", env="prod"}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from src.contracts.alert import CandidateAlert
from src.contracts.matcher import escape_value
from src.shared.errors import MatcherSyntaxError

# FNV-1a, 64 bit
_FNV_OFFSET = 14695981039346656037
_FNV_PRIME = 1099511628211
_MASK64 = (1 << 64) - 1
_SEPARATOR = 0xFF


def render_label_set(labels: Mapping[str, str]) -> str:
    """``{a="x", b="y"}`` with names sorted and values escaped."""
    pairs = [f'{name}="{escape_value(labels[name])}"' for name in sorted(labels)]
    return "{" + ", ".join(pairs) + "}"


def label_set_fingerprint(labels: Mapping[str, str]) -> str:
    """Stable identity of a label set as 16 lowercase hex digits.

    FNV-1a over ``name 0xFF value 0xFF`` for each label in name order, the
    same scheme Prometheus uses for alert fingerprints.
    """
    h = _FNV_OFFSET
    for name in sorted(labels):
        for chunk in (name.encode("utf-8"), labels[name].encode("utf-8")):
            for byte in chunk:
                h = ((h ^ byte) * _FNV_PRIME) & _MASK64
            h = ((h ^ _SEPARATOR) * _FNV_PRIME) & _MASK64
    return f"{h:016x}"


def candidate_from_labels(labels: Mapping[str, str]) -> CandidateAlert:
    """Build a :class:`CandidateAlert` from a raw label mapping."""
    return CandidateAlert(
        fingerprint=label_set_fingerprint(labels),
        labels=render_label_set(labels),
    )


def parse_label_pairs(items: Iterable[str]) -> dict[str, str]:
    """``["env=prod", "job=api"]`` → ``{"env": "prod", "job": "api"}``.

    Only the first ``=`` splits, so values may contain ``=``.  Later pairs
    override earlier ones.
    """
    labels: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise MatcherSyntaxError("expected name=value label", item)
        labels[name] = value
    return labels
