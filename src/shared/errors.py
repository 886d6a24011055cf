"""Error taxonomy shared by the matcher engine and the silence model."""

from __future__ import annotations


class SilencerError(Exception):
    """Base class for every error raised by this package."""


class MatcherSyntaxError(SilencerError, ValueError):
    """Matcher text does not follow the ``name<op>value`` syntax."""

    def __init__(self, reason: str, text: str = "") -> None:
        self.reason = reason
        self.text = text
        super().__init__(f"{reason}: {text}" if text else reason)


class PatternError(SilencerError, ValueError):
    """A regex matcher value is not a valid regular expression."""

    def __init__(self, pattern: str, cause: str) -> None:
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"invalid regex {pattern!r}: {cause}")


class NoAlertsError(SilencerError, LookupError):
    """The alert source returned no alerts at all."""

    def __init__(self) -> None:
        super().__init__("no alerts found right now")


class NotFoundError(SilencerError, LookupError):
    """No current alert has the requested fingerprint."""

    def __init__(self, fingerprint: str) -> None:
        self.fingerprint = fingerprint
        super().__init__(f"no alert matches fingerprint {fingerprint!r}")


class UpstreamError(SilencerError):
    """An alert source or silence sink failed."""


class ConfigError(SilencerError, ValueError):
    """A settings file cannot be loaded or holds invalid settings."""

    def __init__(self, path: str, cause: str) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"bad config {path}: {cause}")
