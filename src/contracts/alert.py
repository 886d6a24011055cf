"""Кандидат для таргетованого сайленсу — поточний алерт від джерела."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CandidateAlert:
    """A firing alert as reported by the alert source."""

    fingerprint: str  # 16 hex digits, e.g. "a3f1c09b4e7d2256"
    labels: str  # rendered label set, e.g. '{alertname="DiskFull", env="prod"}'
