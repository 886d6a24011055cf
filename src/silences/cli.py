"""Командний інтерфейс сайленсера: перевірка матчерів і стану сайленсів.

Приклади
--------
python -m src.silences parse '{foo="bar", dings!="bums"}'
python -m src.silences match 'statuscode=~"5.."' --label statuscode=503
python -m src.silences state --starts 2026-10-18T08:00:00Z --ends 2026-10-18T10:00:00Z
python -m src.silences blanket --hours 4
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import UTC, datetime, timedelta

from src.contracts.matcher import render_matchers
from src.matchers.evaluate import matches
from src.matchers.labels import parse_label_pairs
from src.matchers.parser import parse_matchers
from src.shared.errors import SilencerError
from src.shared.logger import setup_logging
from src.shared.settings import load_settings
from src.silences.builder import build_blanket_silence
from src.silences.lifecycle import compute_state

log = logging.getLogger(__name__)


def _iso(value: str) -> datetime:
    """Розбирає ISO-8601; час без зони вважається UTC."""
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO-8601 timestamp: {value!r}") from None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="silencer",
        description="Silencer -- parse label matchers, test them against labels, "
        "inspect silence state",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Path to silencer settings YAML (default: built-in settings)",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = p.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("parse", help="Parse a matcher list and print it normalised")
    sp.add_argument("matchers", help='Matcher list, e.g. \'{env="prod", job=~"api.*"}\'')

    sp = sub.add_parser("match", help="Check whether a label set matches a matcher list")
    sp.add_argument("matchers", help="Matcher list")
    sp.add_argument(
        "--label",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Label of the set to test; repeat for more labels",
    )

    sp = sub.add_parser("state", help="Print the state of a silence time range")
    sp.add_argument("--starts", type=_iso, required=True, help="starts_at, ISO-8601")
    sp.add_argument("--ends", type=_iso, required=True, help="ends_at, ISO-8601")
    sp.add_argument("--now", type=_iso, default=None, help="Evaluation time (default: now)")

    sp = sub.add_parser("blanket", help="Print the payload of a blanket silence")
    sp.add_argument(
        "--hours",
        type=int,
        default=None,
        help="Duration in hours; out-of-range values fall back to the default",
    )
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        if args.command == "parse":
            print(render_matchers(parse_matchers(args.matchers)))
            return 0

        if args.command == "match":
            labels = parse_label_pairs(args.label)
            hit = matches(parse_matchers(args.matchers), labels)
            print("match" if hit else "no match")
            return 0 if hit else 1

        if args.command == "state":
            now = args.now if args.now is not None else datetime.now(UTC)
            print(compute_state(args.starts, args.ends, now).value)
            return 0

        settings = load_settings(args.config)
        hours = settings.blanket_hours(args.hours)
        silence = build_blanket_silence(timedelta(hours=hours), settings=settings)
        print(json.dumps(silence.to_dict(), indent=2, ensure_ascii=False))
        return 0
    except SilencerError as exc:
        log.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
