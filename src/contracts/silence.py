"""Silence data-class — a time-bounded suppression rule."""

from __future__ import annotations

from dataclasses import InitVar, dataclass, field
from datetime import UTC, datetime
from typing import Any

from src.contracts.enums import SilenceState
from src.contracts.matcher import Matcher

# How the Alertmanager API spells an unset timestamp
ZERO_TIME = "0001-01-01T00:00:00Z"


def format_ts(dt: datetime | None) -> str:
    """RFC 3339 UTC with a ``Z`` suffix; naive datetimes are taken as UTC."""
    if dt is None:
        return ZERO_TIME
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")


def compute_state(starts_at: datetime, ends_at: datetime, now: datetime) -> SilenceState:
    """State of a silence spanning ``[starts_at, ends_at)`` at *now*.

    Defined for any ordering of the three timestamps; with
    ``starts_at >= ends_at`` the silence is pending before the start and
    expired from then on.
    """
    if now < starts_at:
        return SilenceState.PENDING
    if now < ends_at:
        return SilenceState.ACTIVE
    return SilenceState.EXPIRED


@dataclass(frozen=True, slots=True)
class Silence:
    """Suppresses notifications for alerts whose labels match ``matchers``.

    Time range rules
    ────────────────
      ends_at must be after starts_at
      ends_at = None is the unset ("zero") end time of an uninitialised silence
      deleting a silence means setting ends_at to now, done by the sink

    ``state`` is not a constructor argument: it is derived from the time
    range at ``as_of`` (the wall clock when omitted).  Use
    ``src.silences.lifecycle.refresh`` to recompute it for a later time.
    """

    matchers: tuple[Matcher, ...]
    starts_at: datetime
    ends_at: datetime | None
    id: str = ""
    updated_at: datetime | None = None
    created_by: str = ""
    comment: str = ""
    state: SilenceState = field(init=False, default=SilenceState.PENDING)
    as_of: InitVar[datetime | None] = None

    def __post_init__(self, as_of: datetime | None) -> None:
        object.__setattr__(self, "matchers", tuple(self.matchers))
        if self.ends_at is not None and self.ends_at <= self.starts_at:
            raise ValueError(
                f"silence must end after it starts "
                f"(starts_at={format_ts(self.starts_at)}, ends_at={format_ts(self.ends_at)})"
            )
        object.__setattr__(self, "state", self.state_at(as_of))

    def state_at(self, now: datetime | None = None) -> SilenceState:
        """State at *now* (default: wall clock); an unset end never expires."""
        if now is None:
            now = datetime.now(UTC)
        if self.ends_at is None:
            return SilenceState.PENDING if now < self.starts_at else SilenceState.ACTIVE
        return compute_state(self.starts_at, self.ends_at, now)

    def to_dict(self, now: datetime | None = None) -> dict[str, Any]:
        """Alertmanager API payload; ``status`` is evaluated at *now*.

        Without *now* the stored ``state`` is used.
        """
        state = self.state if now is None else self.state_at(now)
        data: dict[str, Any] = {
            "id": self.id,
            "matchers": [m.to_dict() for m in self.matchers],
            "startsAt": format_ts(self.starts_at),
            "endsAt": format_ts(self.ends_at),
            "updatedAt": format_ts(self.updated_at),
            "createdBy": self.created_by,
            "status": {"state": state.value},
        }
        if self.comment:
            data["comment"] = self.comment
        return data
