"""Pure parsers for console input.

Each parser takes the raw line typed by the user and either returns a typed
value or raises :class:`~poised.errors.InputRejected` carrying the
diagnostic to show. Parsers never touch the console; retrying is the job of
:class:`poised.prompts.prompter.Prompter`.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from datetime import date
from typing import TypeVar

from poised.db.models import MAX_PROJECT_NUMBER
from poised.errors import InputRejected

T = TypeVar("T")
Parser = Callable[[str], T]

EMPTY_INPUT = "Please provide an input entry."
INVALID_INTEGER = "Invalid input! Please enter a valid integer."
INVALID_NUMBER = "Invalid input! Please enter a valid number."
NEGATIVE_AMOUNT = "Invalid input! Please enter an amount of zero or more."
INVALID_DATE = "Invalid input! Please enter a valid date in YYYY-MM-DD format."
INVALID_BOOLEAN = "Invalid input! Please enter 'true' (or 't') or 'false' (or 'f')."

_DIGITS = re.compile(r"[0-9]+")
_ISO_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

_TRUE_WORDS = frozenset({"true", "t"})
_FALSE_WORDS = frozenset({"false", "f"})


def parse_text(raw: str) -> str:
    """Accept any non-blank text; returns it trimmed."""
    text = raw.strip()
    if not text:
        raise InputRejected(EMPTY_INPUT)
    return text


def parse_optional_text(raw: str) -> str | None:
    """Accept anything; blank input means no value."""
    return raw.strip() or None


def parse_numeric_string(raw: str) -> str:
    """Accept a run of ASCII digits, kept as text.

    Used for telephone and ERF numbers where leading zeros matter.
    """
    text = raw.strip()
    if not _DIGITS.fullmatch(text):
        raise InputRejected(INVALID_INTEGER)
    return text


def parse_integer(raw: str) -> int:
    """Accept a run of ASCII digits as a non-negative integer."""
    return int(parse_numeric_string(raw))


def parse_project_number(raw: str) -> int:
    """Accept an integer that fits the database's 64-bit integer key."""
    value = parse_integer(raw)
    if value > MAX_PROJECT_NUMBER:
        raise InputRejected(INVALID_INTEGER)
    return value


def parse_decimal(raw: str) -> float:
    """Accept a finite floating-point number such as ``1500``, ``99.95`` or ``1e3``."""
    text = raw.strip()
    # float() tolerates digit separators; amounts typed at the prompt may not
    if "_" in text:
        raise InputRejected(INVALID_NUMBER)
    try:
        value = float(text)
    except ValueError:
        raise InputRejected(INVALID_NUMBER) from None
    if not math.isfinite(value):
        raise InputRejected(INVALID_NUMBER)
    return value


def parse_date(raw: str) -> date:
    """Accept a real calendar date written as YYYY-MM-DD."""
    match = _ISO_DATE.fullmatch(raw.strip())
    if match is None:
        raise InputRejected(INVALID_DATE)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise InputRejected(INVALID_DATE) from None


def parse_boolean(raw: str) -> bool:
    """Accept true/t or false/f in any letter case."""
    word = raw.strip().lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise InputRejected(INVALID_BOOLEAN)


def parse_amount(raw: str) -> float:
    """Accept a finite, non-negative amount of money."""
    value = parse_decimal(raw)
    if value < 0:
        raise InputRejected(NEGATIVE_AMOUNT)
    return value
