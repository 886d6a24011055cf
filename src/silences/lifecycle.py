"""Silence lifecycle — derive pending / active / expired from the clock.

State model
───────────
  now <  starts_at              → pending
  starts_at <= now < ends_at    → active
  now >= ends_at                → expired

The state is a pure function of the time range and ``now``; a silence is
never moved between states by hand.  Expiring a silence early is the sink's
job (it sets ``ends_at`` to now upstream).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import replace
from datetime import UTC, datetime

from src.contracts.enums import SilenceState
from src.contracts.silence import Silence, compute_state
from src.matchers.evaluate import matches

__all__ = [
    "compute_state",
    "current_state",
    "is_resolved",
    "mutes",
    "refresh",
    "sort_by_end",
    "utcnow",
]


def utcnow() -> datetime:
    """Timezone-aware current time in UTC; the default clock."""
    return datetime.now(UTC)


def current_state(silence: Silence, now: datetime | None = None) -> SilenceState:
    """State of *silence* at *now*; an unset end time never expires."""
    if now is None:
        now = utcnow()
    return silence.state_at(now)


def refresh(silence: Silence, now: datetime | None = None) -> Silence:
    """Copy of *silence* with ``state`` recomputed for *now*."""
    if now is None:
        now = utcnow()
    if silence.state_at(now) is silence.state:
        return silence
    return replace(silence, as_of=now)


def is_resolved(silence: Silence, now: datetime | None = None) -> bool:
    """True once ``ends_at`` has passed. Unset ``ends_at`` is never resolved."""
    if silence.ends_at is None:
        return False
    if now is None:
        now = utcnow()
    return now >= silence.ends_at


def mutes(silence: Silence, labels: Mapping[str, str], now: datetime | None = None) -> bool:
    """Whether *silence* suppresses an alert carrying *labels* at *now*."""
    if current_state(silence, now) is not SilenceState.ACTIVE:
        return False
    return matches(silence.matchers, labels)


def sort_by_end(silences: Iterable[Silence]) -> list[Silence]:
    """Latest ``ends_at`` first; silences without an end time go last."""
    items = list(silences)
    ended = sorted(
        (s for s in items if s.ends_at is not None),
        key=lambda s: s.ends_at,
        reverse=True,
    )
    return ended + [s for s in items if s.ends_at is None]
