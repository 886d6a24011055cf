"""Tests for src.silences.builder — blanket and targeted silences."""

from __future__ import annotations

from datetime import timedelta

import pytest

from src.contracts.alert import CandidateAlert
from src.contracts.enums import MatchType, SilenceState
from src.contracts.matcher import Matcher
from src.matchers.evaluate import matches
from src.shared.errors import MatcherSyntaxError, NoAlertsError, NotFoundError
from src.shared.settings import SilencerSettings
from src.silences.builder import (
    build_blanket_silence,
    build_silence,
    build_targeted_silence,
    find_alert,
)
from tests.conftest import T0


class TestBuildSilence:
    def test_window_and_signature(self):
        s = build_silence([], timedelta(hours=2), now=T0)
        assert s.starts_at == T0
        assert s.ends_at == T0 + timedelta(hours=2)
        assert s.updated_at == T0
        assert s.state is SilenceState.ACTIVE
        assert s.created_by == "alertmanager-bot"
        assert s.comment == "Enacted by administrator command"
        assert s.id == ""

    @pytest.mark.parametrize("duration", [timedelta(0), timedelta(seconds=-1)])
    def test_non_positive_duration(self, duration):
        with pytest.raises(ValueError):
            build_silence([], duration, now=T0)

    def test_settings_signature(self):
        settings = SilencerSettings(created_by="oncall", comment="deploy")
        s = build_silence([], timedelta(minutes=5), now=T0, settings=settings)
        assert (s.created_by, s.comment) == ("oncall", "deploy")


class TestBuildBlanketSilence:
    def test_match_all_matcher(self):
        s = build_blanket_silence(timedelta(hours=8), now=T0)
        assert s.matchers == (Matcher(MatchType.REGEXP, "alertname", ".+"),)
        assert s.ends_at - s.starts_at == timedelta(hours=8)
        assert s.state is SilenceState.ACTIVE
        assert s.id == "SUPER_SILENCE"

    def test_matches_every_named_alert(self):
        s = build_blanket_silence(timedelta(hours=1), now=T0)
        assert matches(s.matchers, {"alertname": "DiskFull"})
        assert matches(s.matchers, {"alertname": "x", "env": "prod"})
        assert not matches(s.matchers, {"alertname": ""})
        assert not matches(s.matchers, {"env": "prod"})

    def test_configured_matcher_and_id(self):
        settings = SilencerSettings(blanket_matcher='env="stage"', blanket_silence_id="STAGE")
        s = build_blanket_silence(timedelta(hours=1), now=T0, settings=settings)
        assert s.matchers == (Matcher(MatchType.EQUAL, "env", "stage"),)
        assert s.id == "STAGE"


class TestFindAlert:
    def test_found(self, disk_alert, cpu_alert):
        assert find_alert(cpu_alert.fingerprint, [disk_alert, cpu_alert]) is cpu_alert

    def test_empty_list(self):
        with pytest.raises(NoAlertsError):
            find_alert("0000000000000000", [])

    def test_not_found(self, disk_alert):
        with pytest.raises(NotFoundError) as exc_info:
            find_alert("deadbeefdeadbeef", [disk_alert])
        assert exc_info.value.fingerprint == "deadbeefdeadbeef"
        assert not isinstance(exc_info.value, NoAlertsError)


class TestBuildTargetedSilence:
    def test_matchers_from_alert_labels(self, disk_alert, cpu_alert):
        s = build_targeted_silence(
            disk_alert.fingerprint, timedelta(hours=2), [cpu_alert, disk_alert], now=T0
        )
        assert [str(m) for m in s.matchers] == [
            'alertname="DiskFull"',
            'env="prod"',
            'instance="db-01:9100"',
        ]
        assert s.ends_at == T0 + timedelta(hours=2)
        assert s.state is SilenceState.ACTIVE
        assert s.id == ""

    def test_silence_matches_only_its_alert(self, disk_alert):
        s = build_targeted_silence(disk_alert.fingerprint, timedelta(hours=1), [disk_alert], now=T0)
        assert matches(s.matchers, {"alertname": "DiskFull", "env": "prod", "instance": "db-01:9100"})
        assert not matches(s.matchers, {"alertname": "DiskFull", "env": "stage", "instance": "db-01:9100"})

    def test_empty_candidates(self):
        with pytest.raises(NoAlertsError):
            build_targeted_silence("abc", timedelta(hours=1), [], now=T0)

    def test_unknown_fingerprint(self, disk_alert, cpu_alert):
        with pytest.raises(NotFoundError):
            build_targeted_silence("abc", timedelta(hours=1), [disk_alert, cpu_alert], now=T0)

    def test_unparseable_labels(self):
        broken = CandidateAlert(fingerprint="f00", labels='{alertname="a"b"}')
        with pytest.raises(MatcherSyntaxError):
            build_targeted_silence("f00", timedelta(hours=1), [broken], now=T0)
