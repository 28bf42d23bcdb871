"""Seven-segment character set and a model of the display output port."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable

DIGIT_COUNT = 8


class Symbol(IntEnum):
    """Character codes understood by the seven-segment display."""

    CHAR_0 = 0
    CHAR_1 = 1
    CHAR_2 = 2
    CHAR_3 = 3
    CHAR_4 = 4
    CHAR_5 = 5
    CHAR_6 = 6
    CHAR_7 = 7
    CHAR_8 = 8
    CHAR_9 = 9
    CHAR_A = 10
    CHAR_B = 11
    CHAR_C = 12
    CHAR_D = 13
    CHAR_E = 14
    CHAR_F = 15
    CHAR_G = 16
    CHAR_H = 17
    CHAR_I = 18
    CHAR_J = 19
    CHAR_K = 20
    CHAR_L = 21
    CHAR_M = 22
    CHAR_N = 23
    CHAR_O = 24
    CHAR_P = 25
    CHAR_Q = 26
    CHAR_R = 27
    CHAR_S = 28
    CHAR_T = 29
    CHAR_U = 30
    CHAR_V = 31
    CHAR_W = 32
    CHAR_X = 33
    CHAR_Y = 34
    CHAR_Z = 35
    DOT = 36
    EQUAL = 37
    OVER = 38
    UNDER = 41
    DASH = 44
    SPACE = 45


# Lit segments per code (bit 0 = segment a ... bit 6 = segment g, bit 7 = dot).
_SEGMENTS = (
    0x3F, 0x06, 0x5B, 0x4F, 0x66, 0x6D, 0x7D,
    0x07, 0x7F, 0x6F, 0x77, 0x7C, 0x39, 0x5E,
    0x79, 0x71, 0x3D, 0x76, 0x06, 0x1E, 0x7A,
    0x38, 0x15, 0x54, 0x3F, 0x73, 0x67, 0x50,
    0x6D, 0x78, 0x3E, 0x62, 0x2A, 0x64, 0x6E,
    0x5B, 0x80, 0x48, 0x01, 0x02, 0x04, 0x08,
    0x10, 0x20, 0x40, 0x00,
)

_DOT_BIT = 1 << 7
_SELECT_MASK = 0xFF00

_PUNCTUATION = {
    " ": Symbol.SPACE,
    ".": Symbol.DOT,
    "=": Symbol.EQUAL,
    "-": Symbol.DASH,
    "_": Symbol.UNDER,
    "~": Symbol.OVER,
    "\u203e": Symbol.OVER,
}


def segment_pattern(code: int) -> int:
    """Return the common-anode output byte (segments active low) for a code."""
    if not 0 <= code < len(_SEGMENTS):
        raise ValueError(f"no seven-segment pattern for code {code}")
    return ~_SEGMENTS[code] & 0xFF


def encode_text(text: str) -> list[Symbol]:
    """Convert text to display codes; letters are case-insensitive."""
    codes: list[Symbol] = []
    for char in text:
        if char in _PUNCTUATION:
            codes.append(_PUNCTUATION[char])
        elif char.isascii() and char.isdigit():
            codes.append(Symbol(int(char)))
        elif char.isascii() and char.isalpha():
            codes.append(Symbol(Symbol.CHAR_A + ord(char.upper()) - ord("A")))
        else:
            raise ValueError(f"character {char!r} cannot be shown on the display")
    return codes


def _blank_digits() -> list[int]:
    return [segment_pattern(Symbol.SPACE)] * DIGIT_COUNT


@dataclass
class SegmentPort:
    """Output register driving eight multiplexed common-anode digits.

    The high byte holds the active-low digit selects, the low byte the
    active-low segments.  ``latched`` records what each digit shows.
    """

    odr: int = 0xFFFF
    latched: list[int] = field(default_factory=_blank_digits)

    def write_digit(self, digit: int, code: int, dot: bool = False) -> None:
        """Latch a character, with or without its dot, into one digit."""
        if not 0 <= digit < DIGIT_COUNT:
            raise ValueError(f"digit {digit} out of range 0..{DIGIT_COUNT - 1}")
        value = (_SELECT_MASK | segment_pattern(code)) & ~(1 << (digit + 8)) & 0xFFFF
        if dot:
            value &= ~_DOT_BIT
        self.latched[digit] = value & 0xFF
        self.odr = value | _SELECT_MASK

    def write_hex(self, value: int) -> None:
        """Show the eight hexadecimal nibbles of a value, lowest nibble on digit 0."""
        for digit in range(DIGIT_COUNT):
            self.write_digit(digit, (value >> (digit * 4)) & 0xF)

    def deselect_all(self) -> None:
        """Raise every digit select line."""
        self.odr |= _SELECT_MASK