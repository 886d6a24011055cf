"""Silence lifecycle model.

Modules
───────
  lifecycle — pending / active / expired from the clock, resolution, muting
  builder   — blanket and fingerprint-targeted silences
  service   — builders wired to the alert source and silence sink
  cli       — argparse entry-point for trying matchers and states
"""

from src.silences.builder import (
    build_blanket_silence,
    build_silence,
    build_targeted_silence,
    find_alert,
)
from src.silences.lifecycle import (
    compute_state,
    current_state,
    is_resolved,
    mutes,
    refresh,
    sort_by_end,
)
from src.silences.service import AlertSource, SilenceService, SilenceSink

__all__ = [
    "AlertSource",
    "SilenceService",
    "SilenceSink",
    "build_blanket_silence",
    "build_silence",
    "build_targeted_silence",
    "compute_state",
    "current_state",
    "find_alert",
    "is_resolved",
    "mutes",
    "refresh",
    "sort_by_end",
]
