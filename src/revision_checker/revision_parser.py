"""
Parser for ``KEY = value`` assignments in the tracked revision file.

Grammar, applied line by line::

    line       := ws* identifier ws* "=" ws* value
    identifier := [A-Za-z0-9_.-]+
    value      := any characters up to end of line

A value is trimmed of surrounding whitespace and then of one layer of
matching ``"`` or ``'`` quotes.
"""

from dataclasses import dataclass

_IDENTIFIER_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.-"
)
_QUOTES = ("'", '"')
_BOM = "\ufeff"


@dataclass(frozen=True)
class Assignment:
    """A single ``identifier = value`` line."""

    key: str
    value: str
    line_number: int


def _skip_whitespace(line: str, pos: int) -> int:
    while pos < len(line) and line[pos] in " \t":
        pos += 1
    return pos


def unquote(raw: str) -> str:
    """Trim whitespace and strip one layer of matching quotes."""
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        value = value[1:-1]
    return value


def parse_assignment(line: str, line_number: int = 1) -> Assignment | None:
    """
    Tokenize one line into an assignment.

    Returns None for lines that are not of the form ``identifier = value``,
    including ``:=``/``?=`` style operators. A line with nothing after the
    ``=`` is an assignment with an empty value.
    """
    pos = _skip_whitespace(line, 0)

    start = pos
    while pos < len(line) and line[pos] in _IDENTIFIER_CHARS:
        pos += 1
    key = line[start:pos]
    if not key:
        return None

    pos = _skip_whitespace(line, pos)
    if pos >= len(line) or line[pos] != "=":
        return None
    pos += 1

    raw_value = line[_skip_whitespace(line, pos) :]
    return Assignment(key=key, value=unquote(raw_value), line_number=line_number)


def iter_assignments(content: str):
    """Yield every assignment in the content in document order."""
    content = content.removeprefix(_BOM)
    for line_number, line in enumerate(content.splitlines(), start=1):
        assignment = parse_assignment(line, line_number)
        if assignment is not None:
            yield assignment


def find_value(content: str, key: str) -> str | None:
    """
    Return the value of the first assignment to ``key``.

    Later assignments are never consulted, so an empty first value yields
    None even when the key is assigned again further down.
    """
    for assignment in iter_assignments(content):
        if assignment.key == key:
            return assignment.value or None
    return None
