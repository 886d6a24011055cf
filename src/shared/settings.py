"""Silencer settings — the explicit configuration object.

Loaded from ``config/silencer.yaml`` (see :func:`load_settings`) and passed
to builders and the service.  Missing keys keep the defaults below, so the
library is usable without any config file.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from src.shared.config_loader import load_yaml
from src.shared.errors import ConfigError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/silencer.yaml"

# (name, hours) pairs; a tuple keeps the settings object hashable
_DEFAULT_PRESETS: tuple[tuple[str, float], ...] = (("s2h", 2.0), ("s48h", 48.0), ("s2w", 336.0))


@dataclass(frozen=True, slots=True)
class SilencerSettings:
    """Who signs new silences and how blanket silences are bounded."""

    created_by: str = "alertmanager-bot"
    comment: str = "Enacted by administrator command"
    presets: tuple[tuple[str, float], ...] = _DEFAULT_PRESETS

    blanket_matcher: str = 'alertname=~".+"'
    blanket_silence_id: str = "SUPER_SILENCE"
    blanket_default_hours: int = 8
    blanket_min_hours: int = 1
    blanket_max_hours: int = 24

    def __post_init__(self) -> None:
        if self.blanket_min_hours > self.blanket_max_hours:
            raise ValueError(
                f"blanket min_hours ({self.blanket_min_hours}) "
                f"exceeds max_hours ({self.blanket_max_hours})"
            )
        if not self.blanket_min_hours <= self.blanket_default_hours <= self.blanket_max_hours:
            raise ValueError(
                f"blanket default_hours ({self.blanket_default_hours}) is outside "
                f"[{self.blanket_min_hours}, {self.blanket_max_hours}]"
            )

    def preset_duration(self, name: str) -> timedelta:
        """Duration of a quick-silence preset such as ``s2h``.

        Raises:
            KeyError: unknown preset name.
        """
        for preset, hours in self.presets:
            if preset == name:
                return timedelta(hours=hours)
        raise KeyError(f"unknown silence preset {name!r}")

    def blanket_hours(self, requested: int | None) -> int:
        """Clamp a requested blanket duration, falling back to the default."""
        if requested is None:
            return self.blanket_default_hours
        if not self.blanket_min_hours <= requested <= self.blanket_max_hours:
            log.warning(
                "Blanket duration %dh outside [%d, %d] — using %dh",
                requested,
                self.blanket_min_hours,
                self.blanket_max_hours,
                self.blanket_default_hours,
            )
            return self.blanket_default_hours
        return requested


def _section(cfg: dict[str, Any], name: str) -> dict[str, Any]:
    section = cfg.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"section {name!r} must be a mapping")
    return section


def settings_from_dict(cfg: dict[str, Any]) -> SilencerSettings:
    """Map the YAML layout onto :class:`SilencerSettings`."""
    base = SilencerSettings()
    sil = _section(cfg, "silences")
    blanket = _section(cfg, "blanket")

    overrides: dict[str, Any] = {}
    if "created_by" in sil:
        overrides["created_by"] = str(sil["created_by"])
    if "comment" in sil:
        overrides["comment"] = str(sil["comment"])
    if sil.get("presets"):
        if not isinstance(sil["presets"], dict):
            raise ValueError("silences.presets must be a mapping of name to hours")
        overrides["presets"] = tuple((str(k), float(v)) for k, v in sil["presets"].items())

    for key in ("matcher", "silence_id"):
        if key in blanket:
            overrides[f"blanket_{key}"] = str(blanket[key])
    for key in ("default_hours", "min_hours", "max_hours"):
        if key in blanket:
            overrides[f"blanket_{key}"] = int(blanket[key])

    return replace(base, **overrides)


def load_settings(path: str | Path | None = None) -> SilencerSettings:
    """Load settings from *path*; ``None`` means built-in defaults only.

    Raises:
        ConfigError: the file cannot be read or its settings are invalid.
    """
    if path is None:
        return SilencerSettings()
    try:
        settings = settings_from_dict(load_yaml(path))
    except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
        raise ConfigError(str(path), str(exc)) from exc
    log.info(
        "Loaded silencer settings from %s (%d presets, blanket %dh)",
        path,
        len(settings.presets),
        settings.blanket_default_hours,
    )
    return settings
