"""
FILE: taskboard/repl/parser.py
PURPOSE: Split a REPL line into command, arguments and board flags
EXPORTS:
  - ParseResult (dataclass for parsed commands)
  - parse_command(input_str) -> ParseResult
  - FLAG_ALIASES, VALUE_FLAGS
DEPENDENCIES:
  - shlex (quoted column names)
  - taskboard.core.exceptions (InvalidInputError)
NOTES:
  - Same flag spelling as the CLI: --onto 7, --onto=7, -o 7
  - A value flag without a value is an error, never a silent boolean
  - "-3" is an argument, not a flag
"""

import re
import shlex
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from ..core.exceptions import InvalidInputError

# Short flag -> long name
FLAG_ALIASES = {"o": "onto"}

# Flags that must be followed by a value
VALUE_FLAGS = {"onto"}

_FLAG = re.compile(r"^(--[A-Za-z][\w-]*|-[A-Za-z])(?:=(.*))?$")


@dataclass
class ParseResult:
    """
    One parsed REPL line.

    Attributes:
        command: Lowercased command name ("" for a blank line)
        args: Positional arguments (e.g. ["3", "In Progress"])
        flags: Long flag name -> value, or True for switches
        raw_input: The stripped input line
    """
    command: str
    args: List[str] = field(default_factory=list)
    flags: Dict[str, Union[str, bool]] = field(default_factory=dict)
    raw_input: str = ""

    def value(self, name: str) -> Optional[str]:
        """String value of a value flag, or None if it was not given."""
        value = self.flags.get(name)
        return value if isinstance(value, str) else None


def _flag_name(token: str) -> Optional[Tuple[str, Optional[str]]]:
    match = _FLAG.match(token)
    if match is None:
        return None
    flag, inline = match.groups()
    name = flag.lstrip("-")
    if not flag.startswith("--"):
        if name not in FLAG_ALIASES:
            raise InvalidInputError(f"Unknown flag '{flag}'")
        name = FLAG_ALIASES[name]
    return name, inline


def parse_command(input_str: str) -> ParseResult:
    """
    Parse REPL input into command, args, and flags.

    Examples:
        >>> parse_command('mv 3 "In Progress" -o 7')
        ParseResult(command="mv", args=["3", "In Progress"], flags={"onto": "7"})

    Raises:
        InvalidInputError: For an unknown short flag, or a value flag
            (--onto) with nothing after it
    """
    input_str = input_str.strip()
    if not input_str:
        return ParseResult(command="", raw_input=input_str)

    try:
        tokens = shlex.split(input_str)
    except ValueError:
        # Unclosed quote: keep the tokens as typed
        tokens = input_str.split()

    if not tokens:
        return ParseResult(command="", raw_input=input_str)

    result = ParseResult(command=tokens[0].lower(), raw_input=input_str)
    rest = iter(tokens[1:])
    for token in rest:
        parsed = _flag_name(token)
        if parsed is None:
            result.args.append(token)
            continue

        name, inline = parsed
        if name not in VALUE_FLAGS:
            result.flags[name] = inline if inline is not None else True
            continue

        if inline is None:
            inline = next(rest, None)
            if inline is None or _FLAG.match(inline):
                raise InvalidInputError(f"--{name} needs a task id")
        if not inline:
            raise InvalidInputError(f"--{name} needs a task id")
        result.flags[name] = inline

    return result
