"""Налаштування логування для CLI та сервісів сайленсера."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Налаштовує кореневий логер з лаконічним форматом.

    Args:
        level: Рівень логування (DEBUG, INFO, WARNING, ERROR).
            Невідоме значення трактується як INFO.
        stream: Куди писати записи (за замовчуванням stderr, щоб stdout
            лишався вільним для результату команди).
    """
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        stream=stream or sys.stderr,
        force=True,
    )
