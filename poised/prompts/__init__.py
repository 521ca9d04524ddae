"""Validated console input."""

from poised.prompts.parsers import (
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
from poised.prompts.prompter import Prompter

__all__ = [
    "Prompter",
    "parse_amount",
    "parse_boolean",
    "parse_date",
    "parse_decimal",
    "parse_integer",
    "parse_numeric_string",
    "parse_optional_text",
    "parse_project_number",
    "parse_text",
]
