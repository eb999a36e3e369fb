from __future__ import annotations

import re


def regex_term(text: str, wildcard: bool, *, word_breaks: bool = True) -> str:
    """Build a regex that finds a search term in result text.

    Args:
        text: Term to look for.
        wildcard: Whether the term was a prefix search; the end of the word is
            left open so the rest of the word is highlighted too.
        word_breaks: Whether the content language separates words with
            spaces. Languages without word breaks (e.g. Chinese) get no
            boundary checks.

    Returns:
        Regular expression source.
    """
    regex = re.escape(text)
    if not word_breaks:
        return regex
    if wildcard:
        return rf"\b{regex}"
    return rf"\b{regex}\b"
