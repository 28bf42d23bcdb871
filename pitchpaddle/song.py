"""The built-in song and tempo changes between rounds."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from .notes import Duration, MusicNote, note_period

DEFAULT_TEMPO = 1400
TEMPO_INCREMENT = 200
MINIMUM_TEMPO = 500
SONG_CAPACITY = 100

_Q = Duration.QUARTER
_E = Duration.EIGHTH
_S = Duration.SIXTEENTH

# (note name, length, trailing silence in ms)
_JEOPARDY = (
    ("A4", _Q, 10), ("D5", _Q, 10), ("A4", _Q, 10), ("D4", _Q, 10),
    ("A4", _Q, 10), ("D5", _Q, 10), ("A4", _Q, 10), ("rest", _Q, 10),
    ("A4", _Q, 10), ("D5", _Q, 10), ("A4", _Q, 10), ("D5", _Q, 10),
    ("Fs5_Gb5", _Q, 100), ("rest", _E, 10), ("E5", _E, 10), ("D5", _E, 10),
    ("Cs5_Db5", _E, 10), ("B4", _E, 10), ("As4_Bb4", _E, 10), ("A4", _Q, 10),
    ("D5", _Q, 10), ("A4", _Q, 10), ("Fs4_Gb4", _E, 10), ("G4", _E, 10),
    ("A4", _Q, 10), ("D5", _Q, 10), ("A4", _Q, 10), ("rest", _Q, 10),
    ("D5", _Q, 100), ("rest", _E, 10), ("B4", _E, 10), ("A4", _Q, 100),
    ("G4", _Q, 100), ("Fs4_Gb4", _Q, 100), ("E4", _Q, 100), ("D4", _Q, 100),
    ("rest", _Q, 10), ("C5", _Q, 10), ("F5", _Q, 10), ("C5", _Q, 10),
    ("F4", _E, 10), ("F4", _E, 10), ("C5", _Q, 10), ("F5", _Q, 10),
    ("C5", _Q, 10), ("rest", _Q, 10), ("C5", _Q, 10), ("F5", _Q, 10),
    ("C5", _Q, 10), ("F5", _Q, 10), ("A5", _Q, 0), ("A5", _E, 10),
    ("G5", _E, 10), ("F5", _E, 10), ("E5", _E, 10), ("D5", _E, 10),
    ("Cs5_Db5", _E, 10), ("C5", _Q, 10), ("F5", _Q, 10), ("C5", _Q, 10),
    ("A4", _E, 10), ("As4_Bb4", _E, 10), ("C5", _Q, 10), ("F5", _Q, 10),
    ("C5", _Q, 10), ("rest", _S, 10), ("C5", _S, 10), ("D5", _S, 10),
    ("E5", _S, 10), ("F5", _Q, 100), ("rest", _E, 10), ("D5", _E, 10),
    ("C5", _Q, 100), ("As4_Bb4", _Q, 100), ("A4", _Q, 100), ("rest", _Q, 100),
    ("G4", _Q, 100), ("rest", _Q, 100), ("F4", _Q, 100), ("rest", _Q, 10),
)


def jeopardy_song(tempo: int = DEFAULT_TEMPO) -> list[MusicNote]:
    """Return the game's song at the given tempo, its last note marked as the end."""
    last = len(_JEOPARDY) - 1
    return [
        MusicNote(note_period(name), size, tempo, space, end=position == last)
        for position, (name, size, space) in enumerate(_JEOPARDY)
    ]


def speed_up(
    song: Iterable[MusicNote],
    increment: int = TEMPO_INCREMENT,
    minimum: int = MINIMUM_TEMPO,
) -> list[MusicNote]:
    """Return a copy of the song with every note before the end marker faster.

    Each tempo drops by ``increment`` but not below ``minimum``; the end note
    and anything after it keep their tempo.
    """
    result: list[MusicNote] = []
    reached_end = False
    for note in song:
        reached_end = reached_end or note.end
        if reached_end:
            result.append(replace(note))
        else:
            result.append(replace(note, tempo=max(note.tempo - increment, minimum)))
    return result