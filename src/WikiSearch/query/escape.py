"""Escaping of index-server meta characters.

Grouping and quoting characters are passed to the index server as syntax when
they are balanced. Unbalanced ones would make the daemon reject the query, so
they are backslash-escaped into literal characters. Sequences the user already
escaped are left alone.
"""

from __future__ import annotations

from typing import Final, Mapping

BASE_ESCAPE: Final[str] = "/"

# close == "" means the character is its own counterpart and must come in pairs
DELIMITERS: Final[Mapping[str, str]] = {
    "(": ")",
    "[": "]",
    '"': "",
}

# Private use code points; they never reach the index server.
_PLACEHOLDERS: Final[Mapping[str, str]] = {
    "\\(": "\ue000",
    "\\)": "\ue001",
    "\\[": "\ue002",
    "\\]": "\ue003",
    '\\"': "\ue004",
}


def unbalanced_characters(clause: str) -> str:
    """Return the delimiter characters of `clause` that must be escaped.

    Each pair is judged on its own: an open/close pair is unbalanced when the
    counts differ, a self-closing delimiter when its count is odd.
    """
    marked = ""
    for open_char, close_char in DELIMITERS.items():
        open_count = clause.count(open_char)
        if close_char:
            if open_count != clause.count(close_char):
                marked += open_char + close_char
        elif open_count % 2 == 1:
            marked += open_char
    return marked


def escape_clause(clause: str) -> str:
    """Escape unbalanced delimiters and the base escape character.

    Args:
        clause: Search clause after directive rewriting.

    Returns:
        Clause safe to send to the index server.
    """
    protected = clause
    for escaped, placeholder in _PLACEHOLDERS.items():
        protected = protected.replace(escaped, placeholder)

    # Placeholders stay in place until after escaping, so a user-escaped
    # delimiter is neither counted nor escaped a second time.
    escape_chars = BASE_ESCAPE + unbalanced_characters(protected)
    protected = "".join(f"\\{char}" if char in escape_chars else char for char in protected)

    for escaped, placeholder in _PLACEHOLDERS.items():
        protected = protected.replace(placeholder, escaped)
    return protected
