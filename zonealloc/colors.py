"""ANSI terminal colour sequences used in diagnostic output."""

from __future__ import annotations

from enum import Enum


class Color(str, Enum):
    """Foreground and background ANSI escape sequences."""

    BLACK = "\033[30m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    PURPLE = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    ORANGE = "\033[38;5;208m"
    PINK = "\033[38;5;13m"
    GREY = "\033[38;5;246m"

    BBLACK = "\033[40m"
    BRED = "\033[41m"
    BGREEN = "\033[42m"
    BYELLOW = "\033[43m"
    BBLUE = "\033[44m"
    BPURPLE = "\033[45m"
    BCYAN = "\033[46m"
    BWHITE = "\033[47m"
    BORANGE = "\033[48;5;208m"
    BPINK = "\033[48;5;13m"
    BGREY = "\033[48;5;246m"


END = "\033[0m"


def _resolve(color: Color | str) -> Color:
    if isinstance(color, Color):
        return color
    try:
        return Color[color.upper()]
    except KeyError:
        raise ValueError(f"unknown colour: {color!r}") from None


def colorize(text: str, color: Color | str) -> str:
    """Wrap ``text`` in the escape sequence for ``color`` and a reset.

    ``color`` is a :class:`Color` member or its name, case-insensitive.
    """
    return f"{_resolve(color).value}{text}{END}"