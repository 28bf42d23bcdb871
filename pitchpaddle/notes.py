"""Note periods, durations and the mapping of pitch to display position."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

REST = 0
TONE_CLOCK_HZ = 125_000

_PITCH_CLASSES = ("C", "Cs_Db", "D", "Ds_Eb", "E", "F", "Fs_Gb", "G", "Gs_Ab", "A", "As_Bb", "B")

# Half-period counts of the tone clock for each octave, C through B.
_OCTAVE_PERIODS = {
    0: (3823, 3608, 3405, 3214, 3034, 2864, 2703, 2551, 2408, 2273, 2145, 2025),
    1: (1911, 1803, 1703, 1607, 1517, 1432, 1351, 1275, 1204, 1136, 1073, 1012),
    2: (956, 902, 851, 804, 758, 716, 676, 638, 602, 568, 536, 506),
    3: (478, 451, 426, 402, 379, 358, 338, 319, 301, 284, 268, 253),
    4: (239, 225, 213, 201, 190, 179, 169, 159, 150, 142, 134, 127),
    5: (119, 113, 106, 100, 95, 89, 84, 80, 75, 71, 67, 63),
    6: (60, 56, 53, 50, 47, 45, 42, 40, 38, 36, 34, 32),
}


def _build_names() -> dict[str, int]:
    names: dict[str, int] = {"rest": REST}
    for octave, periods in _OCTAVE_PERIODS.items():
        for pitch, period in zip(_PITCH_CLASSES, periods):
            if "_" in pitch:
                sharp, flat = pitch.split("_")
                names[f"{sharp}{octave}_{flat}{octave}"] = period
                names[f"{sharp}{octave}"] = period
                names[f"{flat}{octave}"] = period
                names[f"{sharp[0]}#{octave}"] = period
            else:
                names[f"{pitch}{octave}"] = period
    return names


NOTE_PERIODS = _build_names()

# Open intervals of note period mapped to display positions; the gaps
# between them (the boundary values themselves) have no position.
_BANDS = (
    (82, 97, 6),
    (97, 115, 5),
    (115, 135, 4),
    (135, 160, 3),
    (160, 195, 2),
    (195, 230, 1),
)


class Duration(IntEnum):
    """Divisor applied to the tempo to get a note's length in milliseconds."""

    WHOLE = 1
    HALF = 2
    QUARTER = 4
    EIGHTH = 8
    SIXTEENTH = 16
    THIRTY_SECOND = 32


def note_period(name: str) -> int:
    """Return the period for a note name such as 'A4', 'Fs5_Gb5', 'F#5' or 'rest'."""
    try:
        return NOTE_PERIODS[name]
    except KeyError:
        raise ValueError(f"unknown note name {name!r}") from None


def note_frequency(period: int) -> float:
    """Return the frequency in hertz produced by a half-period count."""
    if period <= 0:
        raise ValueError("a rest or non-positive period has no frequency")
    return TONE_CLOCK_HZ / (period * 2)


def display_for_note(note: int) -> int | None:
    """Return the display position (0-7) of a note, or None for rests and gaps."""
    if note <= 0:
        return None
    if note < 82:
        return 7
    if note > 230:
        return 0
    for low, high, position in _BANDS:
        if low < note < high:
            return position
    return None


@dataclass
class MusicNote:
    """One entry of a song: period, length divisor, tempo and trailing silence."""

    note: int
    size: int
    tempo: int
    space: int
    end: bool = False

    @property
    def is_rest(self) -> bool:
        return self.note == REST

    def duration(self) -> int:
        """Total length of the note in milliseconds."""
        return self.tempo // self.size

    def sounding_time(self) -> int:
        """Milliseconds the tone sounds before the trailing silence."""
        return self.duration() - self.space