"""Silence builders — blanket and fingerprint-targeted silences.

Both produce a Silence starting *now* and ending ``now + duration``, signed
with the author and comment from :class:`SilencerSettings`, with ``state``
already computed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from src.contracts.alert import CandidateAlert
from src.contracts.matcher import Matcher, render_matchers
from src.contracts.silence import Silence
from src.matchers.parser import parse_matchers
from src.shared.errors import NoAlertsError, NotFoundError
from src.shared.settings import SilencerSettings
from src.silences.lifecycle import utcnow

log = logging.getLogger(__name__)


def build_silence(
    matchers: Iterable[Matcher],
    duration: timedelta,
    *,
    now: datetime | None = None,
    settings: SilencerSettings | None = None,
    silence_id: str = "",
) -> Silence:
    """Silence over *matchers* for *duration* from *now*.

    Raises:
        ValueError: *duration* is not positive.
    """
    if duration <= timedelta(0):
        raise ValueError(f"silence duration must be positive, got {duration}")
    settings = settings or SilencerSettings()
    if now is None:
        now = utcnow()
    ends_at = now + duration

    return Silence(
        matchers=tuple(matchers),
        starts_at=now,
        ends_at=ends_at,
        id=silence_id,
        updated_at=now,
        created_by=settings.created_by,
        comment=settings.comment,
        as_of=now,
    )


def build_blanket_silence(
    duration: timedelta,
    *,
    now: datetime | None = None,
    settings: SilencerSettings | None = None,
) -> Silence:
    """Silence every alert with a non-empty ``alertname`` for *duration*.

    The silence carries the configured blanket id so that it can later be
    withdrawn by that id.
    """
    settings = settings or SilencerSettings()
    matchers = parse_matchers(settings.blanket_matcher)
    silence = build_silence(
        matchers,
        duration,
        now=now,
        settings=settings,
        silence_id=settings.blanket_silence_id,
    )
    log.debug("Built blanket silence %s until %s", render_matchers(matchers), silence.ends_at)
    return silence


def find_alert(fingerprint: str, candidates: Sequence[CandidateAlert]) -> CandidateAlert:
    """Return the candidate whose fingerprint equals *fingerprint*.

    Raises:
        NoAlertsError: *candidates* is empty.
        NotFoundError: no candidate has that fingerprint.
    """
    if not candidates:
        raise NoAlertsError()
    for alert in candidates:
        if alert.fingerprint == fingerprint:
            log.debug("Found alert %s: %s", fingerprint, alert.labels)
            return alert
    log.debug("No match for %s among %d alerts", fingerprint, len(candidates))
    raise NotFoundError(fingerprint)


def build_targeted_silence(
    fingerprint: str,
    duration: timedelta,
    candidates: Sequence[CandidateAlert],
    *,
    now: datetime | None = None,
    settings: SilencerSettings | None = None,
) -> Silence:
    """Silence exactly the label set of the alert identified by *fingerprint*.

    Raises:
        NoAlertsError: *candidates* is empty.
        NotFoundError: no candidate has that fingerprint.
        MatcherSyntaxError: the alert's label string does not parse.
    """
    alert = find_alert(fingerprint, candidates)
    matchers = parse_matchers(alert.labels)
    return build_silence(matchers, duration, now=now, settings=settings)
