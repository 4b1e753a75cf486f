from __future__ import annotations

"""
CLI Argument Interpretation.

Implements the POSIX cat command-line grammar: '-' names standard input,
the first '--' ends option parsing, '-u' (unbuffered) is accepted and
ignored since output is always written unbuffered, and any other
option-shaped token is rejected. argparse is not used because it cannot
express these rules (e.g. treating every later '--' as a literal name).
"""

import re
from typing import List, Sequence

from nodecat.domain.constants import END_OF_OPTIONS, PROG_NAME, STDIN_NAME

_UNBUFFERED_RE = re.compile(r"^-u+$")


class IllegalOptionError(ValueError):
    """Raised for an option-shaped argument the command does not support."""

    def __init__(self, option: str) -> None:
        super().__init__(f"illegal option -- {option}")
        self.option = option


def usage() -> str:
    """Return the usage line, newline-terminated."""
    return f"usage: {PROG_NAME} [-u] [file...]\n"


def parse_args(args: Sequence[str]) -> List[str]:
    """
    Extract the input names from command-line arguments.

    Args:
        args: Arguments after the program name.

    Returns:
        List[str]: Input names in order (possibly empty).

    Raises:
        IllegalOptionError: For an unsupported option before '--'.
    """
    names: List[str] = []
    options_ended = False

    for arg in args:
        if options_ended or arg == STDIN_NAME or not arg.startswith("-"):
            names.append(arg)
        elif arg == END_OF_OPTIONS:
            options_ended = True
        elif _UNBUFFERED_RE.match(arg):
            continue
        else:
            raise IllegalOptionError(arg)

    return names
