# src/tasknote/cli/tokenizer.py

from __future__ import annotations

QUOTE = '"'


def tokenize(line: str) -> list[str]:
    """
    Split a command line into tokens.

    Whitespace separates tokens except inside double quotes. Quote characters
    toggle quoting and are dropped. An unbalanced quote simply leaves quoting on
    until the end of the line.
    """
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False

    for ch in line:
        if ch == QUOTE:
            in_quotes = not in_quotes
            continue
        if ch.isspace() and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
            continue
        current.append(ch)

    if current:
        tokens.append("".join(current))
    return tokens
