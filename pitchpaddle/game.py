"""Game logic: paddle input, scoring against the song, display and message scrolling."""

from __future__ import annotations

from dataclasses import replace
from enum import IntEnum
from typing import Iterable

from .notes import MusicNote, display_for_note
from .segments import DIGIT_COUNT, SegmentPort, Symbol, encode_text
from .song import MINIMUM_TEMPO, SONG_CAPACITY, TEMPO_INCREMENT, jeopardy_song, speed_up

MAX_MISSES = 5
ADC_MAX = 4095
ADC_STEP = 512
MESSAGE_DELAY_MS = 200
VIBRATO_DEPTH = 1
VIBRATO_RATE = 40

_MARGIN = " " * 10

STARTUP_MESSAGE: tuple[Symbol, ...] = tuple(encode_text(f"{_MARGIN}PRESS B1 TO START{_MARGIN}"))

# Marker for each upcoming note, from the current one to three notes ahead.
_LOOKAHEAD_MARKERS = (Symbol.CHAR_D, Symbol.UNDER, Symbol.DASH, Symbol.OVER)

_LED_PINS = ("red", "blue", "green")


class GameState(IntEnum):
    """Phases of play."""

    IDLE = 0
    PLAYING = 1
    ROUND_OVER = 2
    GAME_OVER = 3


def result_message(score: int, game_over: bool) -> list[Symbol]:
    """Return the scrolling message shown at the end of a round or of the game."""
    heading = "GAME OVER SCORE " if game_over else "SCORE "
    digits = "".join(str((score // divisor) % 10) for divisor in (1000, 100, 10, 1))
    return encode_text(f"{_MARGIN}{heading}{digits}{_MARGIN}")


class Game:
    """State of one game session, driven by ticks and polling steps."""

    def __init__(
        self,
        song: Iterable[MusicNote] | None = None,
        max_misses: int = MAX_MISSES,
        tempo_increment: int = TEMPO_INCREMENT,
    ) -> None:
        notes = [replace(note) for note in (jeopardy_song() if song is None else song)]
        if not notes:
            raise ValueError("a song needs at least one note")
        if not any(note.end for note in notes):
            raise ValueError("a song needs a note marked as its end")
        self.song: list[MusicNote] = notes
        self.max_misses = max_misses
        self.tempo_increment = tempo_increment

        self.state = GameState.IDLE
        self.display: list[int] = [Symbol.SPACE] * DIGIT_COUNT
        self.port = SegmentPort()
        self.digit_select = 0

        self.adc_value = 0
        self.paddle_pos = 0
        self.score = 0
        self.miss_count = 0

        self.music_on = False
        self.speaker = False
        self.tone = 0
        self.count = 0
        self.index = 0
        self.save_note = self.song[0].note

        self.vibrato_depth = VIBRATO_DEPTH
        self.vibrato_rate = VIBRATO_RATE
        self.vibrato_count = 0

        self.animate_on = True
        self.message: list[int] = list(STARTUP_MESSAGE)
        self.message_offset = 0
        self.delay_msec = MESSAGE_DELAY_MS
        self.delay_counter = 0

        self.ramp = 0
        self.dim_enabled = False
        self.brightness = {colour: 0 for colour in _LED_PINS}
        self.leds = {colour: False for colour in _LED_PINS}

    def set_paddle(self, adc_value: int) -> int:
        """Take a 12-bit potentiometer reading and return the paddle position."""
        if not 0 <= adc_value <= ADC_MAX:
            raise ValueError(f"ADC reading {adc_value} out of range 0..{ADC_MAX}")
        self.adc_value = adc_value
        self.paddle_pos = adc_value // ADC_STEP
        return self.paddle_pos

    def press_button(self) -> bool:
        """Start a game from the idle screen; return whether a game started."""
        if self.state != GameState.IDLE:
            return False
        self.state = GameState.PLAYING
        self.animate_on = False
        self.music_on = True
        self.score = 0
        self.miss_count = 0
        self._clear_display()
        return True

    def update_display_buffer(self) -> None:
        """Mark the current note and the next three on their display positions."""
        self._clear_display()
        limit = min(SONG_CAPACITY - 1, len(self.song))
        for ahead in reversed(range(len(_LOOKAHEAD_MARKERS))):
            position = self.index + ahead
            if position >= limit or self.song[position].is_rest:
                continue
            digit = display_for_note(self.song[position].note)
            if digit is not None:
                self.display[digit] = _LOOKAHEAD_MARKERS[ahead]

    def finish_round(self) -> list[Symbol]:
        """Show the result of a finished round and move on; return the result message."""
        if self.state not in (GameState.ROUND_OVER, GameState.GAME_OVER):
            raise RuntimeError("no round has finished")
        self.music_on = False
        self.animate_on = True
        message = result_message(self.score, self.state == GameState.GAME_OVER)
        self._show_message(message)

        if self.state == GameState.ROUND_OVER:
            self.state = GameState.PLAYING
            self.animate_on = False
            self.music_on = True
            self.miss_count = 0
            self._clear_display()
        else:
            self.state = GameState.IDLE
            self._show_message(STARTUP_MESSAGE)
        return message

    def tone_tick(self) -> None:
        """Advance the tone timer: drive the speaker, judge notes and dim the LEDs."""
        self.tone += 1
        self.ramp = (self.ramp + 1) & 0xFF

        if self.music_on and self.state == GameState.PLAYING:
            self._advance_song()
        elif not self.music_on:
            self.tone = 0
            self.count = 0

        if self.dim_enabled:
            for colour in _LED_PINS:
                self.leds[colour] = self.brightness[colour] <= self.ramp

    def system_tick(self) -> None:
        """Advance the millisecond timer: note length, vibrato and message scrolling."""
        self.count += 1
        self.vibrato_count += 1

        if self.vibrato_count >= self.vibrato_rate:
            self.vibrato_count = 0
            current = self.song[self.index]
            if current.note > 0:
                current.note += self.vibrato_depth
                if current.note > self.save_note + self.vibrato_depth:
                    current.note = self.save_note - self.vibrato_depth

        if self.animate_on:
            self.delay_counter += 1
            if self.delay_counter > self.delay_msec:
                self.delay_counter = 0
                window = self.message[self.message_offset:self.message_offset + DIGIT_COUNT]
                for position, code in enumerate(window):
                    self.port.write_digit(DIGIT_COUNT - 1 - position, code)
                self.message_offset += 1
                if self.message_offset >= len(self.message) - DIGIT_COUNT:
                    self.message_offset = 0

    def multiplex_step(self) -> None:
        """Refresh the next digit of the display, with the paddle shown as a dot."""
        self.port.deselect_all()
        self.digit_select = (self.digit_select + 1) % DIGIT_COUNT
        playing = self.state == GameState.PLAYING
        dot = playing and self.digit_select == self.paddle_pos
        if not self.animate_on and playing:
            self.port.write_digit(self.digit_select, self.display[self.digit_select], dot)

    def step(self, adc_value: int, button_pressed: bool) -> list[Symbol] | None:
        """Run one pass of the polling loop; return the result message if a round ended."""
        self.set_paddle(adc_value)
        if button_pressed and self.state == GameState.IDLE:
            self.press_button()
        if self.state == GameState.PLAYING:
            self.update_display_buffer()
        message = None
        if self.state in (GameState.ROUND_OVER, GameState.GAME_OVER):
            message = self.finish_round()
        self.multiplex_step()
        return message

    def _clear_display(self) -> None:
        self.display = [Symbol.SPACE] * DIGIT_COUNT

    def _show_message(self, message: Iterable[int]) -> None:
        self.message = list(message)
        self.message_offset = 0

    def _advance_song(self) -> None:
        current = self.song[self.index]
        length = current.duration()
        if current.note > 0 and current.sounding_time() > self.count:
            if current.note <= self.tone:
                if display_for_note(current.note) == self.paddle_pos:
                    self.speaker = not self.speaker
                else:
                    self.speaker = False
                self.tone = 0
        elif length > self.count:
            self.tone = 0
            self.speaker = False
        elif length == self.count:
            self._end_note(current)

    def _end_note(self, current: MusicNote) -> None:
        self.speaker = False
        if not current.is_rest:
            if display_for_note(current.note) == self.paddle_pos:
                self.score += 1
                self.miss_count = 0
            else:
                self.miss_count += 1

        self.count = 0
        self.tone = 0

        if not current.end:
            self.index += 1
            self.save_note = self.song[self.index].note
        elif self.miss_count >= self.max_misses:
            self.state = GameState.GAME_OVER
        else:
            self.state = GameState.ROUND_OVER
            self.song = speed_up(self.song, self.tempo_increment, MINIMUM_TEMPO)
            self.save_note = self.song[0].note
            self.index = 0