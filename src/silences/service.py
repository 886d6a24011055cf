"""Silence service — wires builders to the alert source and silence sink.

Collaborators
─────────────
  AlertSource  — lists the currently firing alerts
  SilenceSink  — submits new silences and withdraws existing ones

Transport, retries and timeouts live in the collaborators.  Whatever they
raise reaches the caller as :class:`UpstreamError`; an ``UpstreamError`` they
raise themselves passes through untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from typing import Protocol, TypeVar

from src.contracts.alert import CandidateAlert
from src.contracts.silence import Silence
from src.shared.errors import UpstreamError
from src.shared.settings import SilencerSettings
from src.silences.builder import build_blanket_silence, build_targeted_silence, find_alert
from src.silences.lifecycle import utcnow

log = logging.getLogger(__name__)

T = TypeVar("T")


class AlertSource(Protocol):
    def list_current_alerts(self) -> Sequence[CandidateAlert]: ...


class SilenceSink(Protocol):
    def submit(self, silence: Silence) -> None: ...

    def withdraw(self, silence_id: str) -> None: ...


class SilenceService:
    """Operator-facing silence operations."""

    def __init__(
        self,
        source: AlertSource,
        sink: SilenceSink,
        settings: SilencerSettings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.source = source
        self.sink = sink
        self.settings = settings or SilencerSettings()
        self.clock = clock

    # ── Public API ───────────────────────────────────────────────────────

    def lookup_alert(self, fingerprint: str) -> CandidateAlert:
        """Current alert with *fingerprint* (NoAlertsError / NotFoundError otherwise)."""
        return find_alert(fingerprint, self._current_alerts())

    def silence_alert(self, fingerprint: str, duration: timedelta) -> Silence:
        """Silence the label set of one firing alert and submit it."""
        silence = build_targeted_silence(
            fingerprint,
            duration,
            self._current_alerts(),
            now=self.clock(),
            settings=self.settings,
        )
        self._submit(silence)
        return silence

    def silence_alert_preset(self, fingerprint: str, preset: str) -> Silence:
        """Like :meth:`silence_alert` with a named duration (``s2h``, ``s48h``, ``s2w``)."""
        return self.silence_alert(fingerprint, self.settings.preset_duration(preset))

    def silence_all(self, hours: int | None = None) -> Silence:
        """Submit a blanket silence; *hours* is clamped by the settings."""
        hours = self.settings.blanket_hours(hours)
        silence = build_blanket_silence(
            timedelta(hours=hours),
            now=self.clock(),
            settings=self.settings,
        )
        self._submit(silence)
        return silence

    def end_blanket_silence(self) -> None:
        """Withdraw the blanket silence created by :meth:`silence_all`."""
        silence_id = self.settings.blanket_silence_id
        self._call("withdraw silence", self.sink.withdraw, silence_id)
        log.info("Withdrew blanket silence %s", silence_id)

    # ── Collaborator calls ───────────────────────────────────────────────

    def _current_alerts(self) -> Sequence[CandidateAlert]:
        alerts = self._call("list alerts", self.source.list_current_alerts)
        log.debug("Alert source returned %d alerts", len(alerts))
        return alerts

    def _submit(self, silence: Silence) -> None:
        self._call("submit silence", self.sink.submit, silence)
        log.info(
            "Submitted silence (%d matchers) %s → %s",
            len(silence.matchers),
            silence.starts_at.isoformat(timespec="seconds"),
            silence.ends_at.isoformat(timespec="seconds") if silence.ends_at else "∞",
        )

    @staticmethod
    def _call(what: str, fn: Callable[..., T], *args: object) -> T:
        try:
            return fn(*args)
        except UpstreamError as exc:
            log.error("Failed to %s: %s", what, exc)
            raise
        except Exception as exc:
            log.error("Failed to %s: %s", what, exc)
            raise UpstreamError(f"failed to {what}: {exc}") from exc
