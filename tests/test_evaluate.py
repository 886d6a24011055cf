"""Tests for src.matchers.evaluate — matcher lists against label sets."""

from __future__ import annotations

import pytest

from src.contracts.enums import MatchType
from src.matchers.evaluate import filter_matching, matches
from src.matchers.parser import parse_matcher, parse_matchers
from tests.conftest import make_matcher


class TestMatcherMatches:
    def test_equal(self):
        m = make_matcher(type=MatchType.EQUAL, name="env", value="prod")
        assert m.matches("prod")
        assert not m.matches("production")

    def test_not_equal(self):
        m = make_matcher(type=MatchType.NOT_EQUAL, name="env", value="prod")
        assert m.matches("stage")
        assert not m.matches("prod")

    @pytest.mark.parametrize("value, expected", [("500", True), ("599", True), ("50", False), ("5000", False)])
    def test_regex_is_anchored(self, value, expected):
        m = parse_matcher('statuscode=~"5.."')
        assert m.matches(value) is expected

    def test_regex_does_not_match_trailing_newline(self):
        m = parse_matcher('statuscode=~"5.."')
        assert not m.matches("500\n")

    def test_regex_alternation_anchored_as_group(self):
        m = parse_matcher('env=~"prod|stage"')
        assert m.matches("prod")
        assert m.matches("stage")
        assert not m.matches("production")
        assert not m.matches("pre-stage")

    def test_not_regexp(self):
        m = parse_matcher('env!~"prod|stage"')
        assert m.matches("dev")
        assert not m.matches("stage")

    def test_regex_value_literal_for_equal(self):
        m = make_matcher(type=MatchType.EQUAL, name="x", value="a.c")
        assert m.matches("a.c")
        assert not m.matches("abc")


class TestMatchesLabelSet:
    def test_empty_list_matches_anything(self):
        assert matches([], {})
        assert matches([], {"alertname": "X"})
        assert matches(parse_matchers("{}"), {"foo": "bar"})

    def test_all_matchers_must_match(self):
        ms = parse_matchers('{alertname="DiskFull", env=~"prod|stage"}')
        assert matches(ms, {"alertname": "DiskFull", "env": "prod", "extra": "1"})
        assert not matches(ms, {"alertname": "DiskFull", "env": "dev"})
        assert not matches(ms, {"alertname": "HighCPU", "env": "prod"})

    def test_missing_label_is_empty_string(self):
        assert matches(parse_matchers('env!="prod"'), {})
        assert matches(parse_matchers('env=""'), {})
        assert not matches(parse_matchers('env=~".+"'), {})
        assert matches(parse_matchers('env=~".*"'), {})

    def test_match_all_matcher(self):
        ms = parse_matchers('alertname=~".+"')
        assert matches(ms, {"alertname": "Anything"})
        assert not matches(ms, {"alertname": ""})
        assert not matches(ms, {"severity": "critical"})

    def test_matching_is_repeatable(self):
        ms = parse_matchers('alertname=~".+"')
        labels = {"alertname": "X"}
        assert [matches(ms, labels) for _ in range(3)] == [True, True, True]


class TestFilterMatching:
    def test_keeps_order_and_matching_sets(self):
        sets = [
            {"alertname": "A", "env": "prod"},
            {"alertname": "B", "env": "dev"},
            {"alertname": "C", "env": "prod"},
        ]
        result = filter_matching(parse_matchers("env=prod"), sets)
        assert [s["alertname"] for s in result] == ["A", "C"]

    def test_accepts_generator_of_matchers(self):
        ms = (m for m in parse_matchers("env=prod"))
        sets = [{"env": "prod"}, {"env": "prod"}]
        assert len(filter_matching(ms, sets)) == 2

    def test_empty_inputs(self):
        assert filter_matching([], []) == []
