"""Blocking prompt loop that retries until a parser accepts the input."""

from __future__ import annotations

import datetime
from typing import TextIO, TypeVar

import structlog
from rich.console import Console

from poised.errors import InputRejected
from poised.prompts.parsers import (
    Parser,
    parse_amount,
    parse_boolean,
    parse_date,
    parse_decimal,
    parse_integer,
    parse_numeric_string,
    parse_optional_text,
    parse_project_number,
    parse_text,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Prompter:
    """Reads typed values from the console.

    Every ``ask`` call blocks until the user types something the parser
    accepts. A rejection prints the parser's diagnostic and prompts again;
    there is no retry limit. Reaching the end of the input stream raises
    ``EOFError``.

    Args:
        console: Console used for prompts and diagnostics
        stream: Read lines from this stream instead of stdin
    """

    def __init__(self, console: Console, stream: TextIO | None = None):
        self.console = console
        self.stream = stream

    def ask(self, prompt: str, parser: Parser[T]) -> T:
        while True:
            raw = self._read_line(prompt)
            try:
                return parser(raw)
            except InputRejected as e:
                logger.debug("prompt.rejected", prompt=prompt.strip(), reason=e.reason)
                self.console.print(e.reason, style="red", markup=False)

    def _read_line(self, prompt: str) -> str:
        raw = self.console.input(prompt, markup=False, stream=self.stream)
        # readline() returns "" only at end of stream; a blank line is "\n"
        if self.stream is not None and raw == "":
            raise EOFError("input stream exhausted")
        return raw

    def text(self, prompt: str) -> str:
        return self.ask(prompt, parse_text)

    def optional_text(self, prompt: str) -> str | None:
        return self.ask(prompt, parse_optional_text)

    def numeric_string(self, prompt: str) -> str:
        return self.ask(prompt, parse_numeric_string)

    def integer(self, prompt: str) -> int:
        return self.ask(prompt, parse_integer)

    def project_number(self, prompt: str) -> int:
        return self.ask(prompt, parse_project_number)

    def decimal(self, prompt: str) -> float:
        return self.ask(prompt, parse_decimal)

    def date(self, prompt: str) -> datetime.date:
        return self.ask(prompt, parse_date)

    def boolean(self, prompt: str) -> bool:
        return self.ask(prompt, parse_boolean)

    def amount(self, prompt: str) -> float:
        return self.ask(prompt, parse_amount)
