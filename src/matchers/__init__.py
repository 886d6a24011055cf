"""Matcher language engine.

Modules
───────
  parser    — matcher text → Matcher / list of Matchers
  evaluate  — Matcher list × label set → bool
  labels    — label-set rendering, fingerprints, name=value pairs
"""

from src.matchers.evaluate import filter_matching, matches
from src.matchers.labels import (
    candidate_from_labels,
    label_set_fingerprint,
    parse_label_pairs,
    render_label_set,
)
from src.matchers.parser import parse_matcher, parse_matchers, split_matchers, unescape_value

__all__ = [
    "candidate_from_labels",
    "filter_matching",
    "label_set_fingerprint",
    "matches",
    "parse_label_pairs",
    "parse_matcher",
    "parse_matchers",
    "render_label_set",
    "split_matchers",
    "unescape_value",
]
