"""Shared fixtures for Silencer tests."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import pytest

from src.contracts.alert import CandidateAlert
from src.contracts.enums import MatchType
from src.contracts.matcher import Matcher
from src.contracts.silence import Silence
from src.matchers.labels import candidate_from_labels

T0 = datetime(2026, 10, 18, 10, 0, 0, tzinfo=UTC)

# ── Helpers: build contracts with sensible defaults ─────────────────────


def ts_offset(seconds: float = 0, base: datetime = T0) -> datetime:
    """Return *base* shifted by *seconds*."""
    return base + timedelta(seconds=seconds)


def make_matcher(
    *,
    type: MatchType | str = MatchType.EQUAL,
    name: str = "alertname",
    value: str = "DiskFull",
) -> Matcher:
    return Matcher(MatchType(type), name, value)


def make_silence(
    *,
    matchers: Sequence[Matcher] | None = None,
    starts_at: datetime = T0,
    ends_at: datetime | None = T0 + timedelta(hours=2),
    id: str = "",
    created_by: str = "tester",
    comment: str = "test silence",
    as_of: datetime | None = T0,
) -> Silence:
    return Silence(
        matchers=tuple(matchers if matchers is not None else [make_matcher()]),
        starts_at=starts_at,
        ends_at=ends_at,
        id=id,
        updated_at=starts_at,
        created_by=created_by,
        comment=comment,
        as_of=as_of,
    )


def make_candidate(**labels: str) -> CandidateAlert:
    return candidate_from_labels(labels or {"alertname": "DiskFull"})


# ── Collaborator fakes ──────────────────────────────────────────────────


class FakeSource:
    def __init__(self, alerts: Sequence[CandidateAlert] = (), error: Exception | None = None):
        self.alerts = list(alerts)
        self.error = error
        self.calls = 0

    def list_current_alerts(self) -> list[CandidateAlert]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.alerts


class FakeSink:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.submitted: list[Silence] = []
        self.withdrawn: list[str] = []

    def submit(self, silence: Silence) -> None:
        if self.error is not None:
            raise self.error
        self.submitted.append(silence)

    def withdraw(self, silence_id: str) -> None:
        if self.error is not None:
            raise self.error
        self.withdrawn.append(silence_id)


# ── Fixtures ────────────────────────────────────────────────────────────


@pytest.fixture
def disk_alert() -> CandidateAlert:
    return make_candidate(alertname="DiskFull", env="prod", instance="db-01:9100")


@pytest.fixture
def cpu_alert() -> CandidateAlert:
    return make_candidate(alertname="HighCPU", env="stage", job="api")


@pytest.fixture
def sink() -> FakeSink:
    return FakeSink()
