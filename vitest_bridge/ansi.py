"""Removal of terminal colour escape sequences from captured output."""

import re

# Longest parameter lists first so a shorter pattern never eats a prefix.
SGR_PATTERNS = (
    re.compile(r"\x1b\[\d+;\d+;\d+;\d+;\d+m"),
    re.compile(r"\x1b\[\d+;\d+;\d+;\d+m"),
    re.compile(r"\x1b\[\d+;\d+;\d+m"),
    re.compile(r"\x1b\[\d+;\d+m"),
    re.compile(r"\x1b\[\d+m"),
)


def strip_ansi(text: str) -> str:
    """Strip SGR sequences with one to five numeric parameters.

    Removal is repeated until nothing matches, so sequences that only form
    once an inner one is removed are stripped as well.
    """
    while True:
        cleaned = text
        for pattern in SGR_PATTERNS:
            cleaned = pattern.sub("", cleaned)
        if cleaned == text:
            return cleaned
        text = cleaned
