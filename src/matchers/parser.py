"""Matcher parser: matcher text → Matcher objects.

Syntax of one matcher (three tokens, whitespace around each is ignored):

  1. a label name           ``[a-zA-Z_:][a-zA-Z0-9_:]*``
  2. an operator            ``=``  ``!=``  ``=~``  ``!~``
  3. a UTF-8 value, optionally enclosed in double quotes

Inside the value OpenMetrics escapes apply: ``\\"`` for a double quote,
``\\n`` for a line feed, ``\\\\`` for a backslash.  A backslash in front of
any other character is kept literally.  An unescaped ``"`` may only be the
first or the last character of the value.

A matcher list is a comma-separated sequence of matchers, optionally wrapped
in ``{ }``; commas inside double-quoted parts do not separate matchers and a
trailing comma is tolerated::

    {foo = "bar", dings != "bums", }
    foo=bar,dings!=bums
    {quote="She said: \\"Hi, ladies! That's gender-neutral…\\""}
    statuscode=~"5.."
"""

from __future__ import annotations

import logging
import re

from src.contracts.enums import MatchType
from src.contracts.matcher import Matcher
from src.shared.errors import MatcherSyntaxError

log = logging.getLogger(__name__)

_WS = r"[ \t\n\f\r]*"  # ASCII whitespace only

# '=~' has to come before '=' because otherwise only the '=' is consumed
# and the '~' becomes part of the value.
_MATCHER_RE = re.compile(
    rf"^{_WS}([a-zA-Z_:][a-zA-Z0-9_:]*){_WS}(=~|=|!=|!~){_WS}(.*?){_WS}\Z",
    re.DOTALL,
)


# ── Input decoding ───────────────────────────────────────────────────────────


def _as_text(text: str | bytes) -> str:
    """Return *text* as ``str``, rejecting anything that is not valid UTF-8."""
    if isinstance(text, bytes):
        try:
            return text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MatcherSyntaxError(
                "matcher text not valid UTF-8", text.decode("utf-8", "backslashreplace")
            ) from exc
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        # lone surrogates, e.g. from os.fsdecode of undecodable bytes
        raise MatcherSyntaxError(
            "matcher text not valid UTF-8", text.encode("utf-8", "backslashreplace").decode()
        ) from exc
    return text


# ── Single matcher ───────────────────────────────────────────────────────────


def unescape_value(raw: str) -> str:
    """Undo OpenMetrics escaping of a (possibly quoted) matcher value.

    One leading ``"`` is dropped; a ``"`` as the last character is the closing
    quote and is dropped too.  Any other unescaped ``"`` is an error.
    """
    if raw.startswith('"'):
        raw = raw[1:]

    out: list[str] = []
    escaped = False
    last = len(raw) - 1

    for i, ch in enumerate(raw):
        if escaped:
            escaped = False
            if ch == "n":
                out.append("\n")
            elif ch in ('"', "\\"):
                out.append(ch)
            else:
                # spurious escape, keep the backslash
                out.append("\\")
                out.append(ch)
            continue

        if ch == "\\":
            if i < last:
                escaped = True
                continue
            out.append("\\")
        elif ch == '"':
            if i < last:
                raise MatcherSyntaxError("unescaped quote inside value", raw)
        else:
            out.append(ch)

    return "".join(out)


def parse_matcher(text: str | bytes) -> Matcher:
    """Parse one ``name<op>value`` matcher.

    Raises:
        MatcherSyntaxError: malformed text, bad quoting or invalid UTF-8.
        PatternError: the value of a regex matcher does not compile.
    """
    text = _as_text(text)
    m = _MATCHER_RE.match(text)
    if m is None:
        raise MatcherSyntaxError("malformed matcher", text)

    name, op, raw_value = m.groups()
    matcher = Matcher(MatchType.from_symbol(op), name, unescape_value(raw_value))
    log.debug("Parsed matcher %s from %r", matcher, text)
    return matcher


# ── Matcher lists ────────────────────────────────────────────────────────────


def split_matchers(text: str | bytes) -> list[str]:
    """Split a matcher list into its matcher tokens.

    Strips one optional leading ``{`` and one optional trailing ``}`` (each on
    its own, no pairing check), then splits on commas outside double-quoted
    parts.  A ``"`` preceded by an unescaped backslash does not open or close
    a quoted part.  Tokens ended by a comma are returned as-is, even when
    empty; the final token is stripped and dropped if nothing is left.
    """
    text = _as_text(text)
    if text.startswith("{"):
        text = text[1:]
    if text.endswith("}"):
        text = text[:-1]

    tokens: list[str] = []
    buf: list[str] = []
    inside_quotes = False
    escaped = False

    for ch in text:
        if ch == ",":
            if not inside_quotes:
                tokens.append("".join(buf))
                buf = []
                continue
        elif ch == '"':
            if not escaped:
                inside_quotes = not inside_quotes
            else:
                escaped = False
        elif ch == "\\":
            escaped = not escaped
        else:
            escaped = False
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        tokens.append(tail)
    return tokens


def parse_matchers(text: str | bytes) -> list[Matcher]:
    """Parse a comma-separated matcher list, keeping input order.

    ``""`` and ``"{}"`` give an empty list.  The first bad token aborts the
    whole parse with its error.
    """
    matchers = [parse_matcher(token) for token in split_matchers(text)]
    log.debug("Parsed %d matchers", len(matchers))
    return matchers
