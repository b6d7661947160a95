#!/usr/bin/env python3
"""
CLASHVIEW LEXER - Pair Splitter
-------------------------------
Decomposes the body of a flow record into raw (key, value) pairs.
Commas inside single- or double-quoted spans never split a pair.

Author: ClashView Team
Date: 2026-10-17
"""

from typing import List, Tuple

QUOTE_CHARS = ('"', "'")


def split_segments(body: str) -> List[str]:
    """Splits on commas that sit outside any open quote."""
    segments = []
    current = []
    open_quote = None
    for char in body:
        if open_quote:
            if char == open_quote:
                open_quote = None
        elif char in QUOTE_CHARS:
            open_quote = char
        elif char == ',':
            segments.append(''.join(current))
            current = []
            continue
        current.append(char)
    segments.append(''.join(current))
    return segments


def strip_quotes(value: str) -> str:
    """Removes exactly one matching layer of quotes. No unescaping."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARS:
        return value[1:-1]
    return value


def tokenize(body: str) -> List[Tuple[str, str]]:
    """
    Turns a record body into ordered (key, value) string pairs.
    Only the first colon separates key from value, so URLs survive.
    Segments without a colon are dropped.
    """
    pairs = []
    for segment in split_segments(body):
        key, sep, value = segment.partition(':')
        if not sep:
            continue
        pairs.append((key.strip(), value.strip()))
    return pairs
