"""Splitting a command line into tokens, keeping quoted strings together."""

from __future__ import annotations

_C_WHITESPACE = " \t\n\v\f\r"


def trim_whitespace(text: str) -> str:
    """Strip leading and trailing ASCII whitespace."""
    return text.strip(_C_WHITESPACE)


def _scan_token(text: str, start: int) -> int:
    """Return the index just past the token that begins at ``start``."""
    end = start
    if text[end] == '"':
        in_quotes = True
        end += 1
        while end < len(text) and (in_quotes or text[end] != " "):
            if text[end] == '"':
                in_quotes = not in_quotes
            end += 1
        return end
    space = text.find(" ", start)
    return len(text) if space == -1 else space


def tokenize(text: str | None) -> list[str]:
    """Split on spaces; a token opening with a quote runs until its quote closes."""
    if text is None:
        return []
    line = trim_whitespace(text)
    tokens: list[str] = []
    position = 0
    while position < len(line):
        if line[position] == " ":
            position += 1
            continue
        end = _scan_token(line, position)
        tokens.append(line[position:end])
        position = end
    return tokens