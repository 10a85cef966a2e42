"""
Structural indexing: one forward pass recording where every token starts.

The scanners below are shared with the on-demand parser so that both phases
agree on where a string, number or literal ends.
"""

from __future__ import annotations

from typing import Final
from typing import TypeAlias

from ._profiling import ProfileContext

Offset: TypeAlias = int

QUOTE: Final = 0x22
BACKSLASH: Final = 0x5C
COMMA: Final = 0x2C
COLON: Final = 0x3A
MINUS: Final = 0x2D
PLUS: Final = 0x2B
DOT: Final = 0x2E
OPEN_BRACKET: Final = 0x5B
CLOSE_BRACKET: Final = 0x5D
OPEN_BRACE: Final = 0x7B
CLOSE_BRACE: Final = 0x7D

WHITESPACE: Final = frozenset(b" \t\n\r")
DIGITS: Final = frozenset(b"0123456789")
NUMBER_START: Final = DIGITS | {MINUS}
LITERAL_START: Final = frozenset(b"tfn")
EXPONENT: Final = frozenset(b"eE")

_SINGLE_BYTE_TOKENS: Final = frozenset(b"[]{}:")
_LITERAL_STOP: Final = WHITESPACE | frozenset(b",]}")


def scan_string(buf: bytes, start: Offset) -> Offset:
    """
    Returns the offset of the quote closing the string opened at ``start``.

    A backslash escapes the byte after it. An unterminated string ends at
    ``len(buf)``.
    """
    end = len(buf)
    i = start + 1
    escaped = False
    while i < end:
        byte = buf[i]
        if escaped:
            escaped = False
        elif byte == BACKSLASH:
            escaped = True
        elif byte == QUOTE:
            return i
        i += 1
    return end


def scan_number(buf: bytes, start: Offset) -> Offset:
    """
    Returns the offset just past the number starting at ``start``.

    Accepts an optional leading minus, digits with at most one decimal point,
    and an exponent once at least one mantissa digit has been seen.
    """
    end = len(buf)
    i = start
    if i < end and buf[i] == MINUS:
        i += 1

    seen_dot = False
    seen_digit = False
    while i < end:
        byte = buf[i]
        if byte in DIGITS:
            seen_digit = True
        elif byte == DOT and not seen_dot:
            seen_dot = True
        else:
            break
        i += 1

    if seen_digit and i < end and buf[i] in EXPONENT:
        i += 1
        if i < end and buf[i] in (PLUS, MINUS):
            i += 1
        while i < end and buf[i] in DIGITS:
            i += 1

    return i


def scan_literal(buf: bytes, start: Offset) -> Offset:
    """Returns the first offset after ``start`` that ends a bare literal."""
    end = len(buf)
    i = start + 1
    while i < end and buf[i] not in _LITERAL_STOP:
        i += 1
    return i


def skip_whitespace(buf: bytes, i: Offset) -> Offset:
    end = len(buf)
    while i < end and buf[i] in WHITESPACE:
        i += 1
    return i


def index_structural(
    buf: bytes, out: list[Offset] | None = None
) -> list[Offset]:
    """
    Records the offset of every structurally meaningful token in ``buf``.

    Quotes are recorded at both ends of a string, numbers and literals only
    at their first byte. Bytes that start no token are skipped silently.
    When ``out`` is given it is cleared and refilled so its storage can be
    reused across calls.
    """
    with ProfileContext("index_structural", len(buf)):
        offsets: list[Offset] = [] if out is None else out
        offsets.clear()
        record = offsets.append

        end = len(buf)
        i = 0
        while i < end:
            byte = buf[i]
            if byte == QUOTE:
                record(i)
                i = scan_string(buf, i)
                if i < end:
                    record(i)
                    i += 1
            elif byte in _SINGLE_BYTE_TOKENS:
                record(i)
                i += 1
            elif byte == COMMA:
                # Collapse "comma + padding" into the one comma offset
                record(i)
                i = skip_whitespace(buf, i + 1)
            elif byte in NUMBER_START:
                record(i)
                i = scan_number(buf, i)
            elif byte in LITERAL_START:
                record(i)
                i = scan_literal(buf, i)
            else:
                i += 1

        return offsets
