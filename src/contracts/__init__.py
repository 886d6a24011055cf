"""Silencer contracts — data structures shared by all modules."""

from src.contracts.alert import CandidateAlert
from src.contracts.enums import MatchType, SilenceState
from src.contracts.matcher import Matcher, escape_value, render_matchers, sort_matchers
from src.contracts.silence import Silence

__all__ = [
    "CandidateAlert",
    "MatchType",
    "Matcher",
    "Silence",
    "SilenceState",
    "escape_value",
    "render_matchers",
    "sort_matchers",
]
