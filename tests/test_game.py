import pytest

from pitchpaddle.game import (
    MAX_MISSES,
    STARTUP_MESSAGE,
    Game,
    GameState,
    result_message,
)
from pitchpaddle.notes import Duration, MusicNote, display_for_note, note_period
from pitchpaddle.segments import Symbol, encode_text, segment_pattern
from pitchpaddle.song import DEFAULT_TEMPO, TEMPO_INCREMENT, jeopardy_song

TEMPO = 400
SPACE_MS = 10


def two_note_song():
    return [
        MusicNote(note_period("A4"), Duration.QUARTER, TEMPO, SPACE_MS),
        MusicNote(note_period("rest"), Duration.QUARTER, TEMPO, SPACE_MS, end=True),
    ]


def a4_position():
    return display_for_note(note_period("A4"))


def play_round(game, limit=10_000):
    for _ in range(limit):
        game.system_tick()
        for _ in range(3):
            game.tone_tick()
        if game.state != GameState.PLAYING:
            return
    raise AssertionError("round did not finish")


def started_game(adc_value, **kwargs):
    game = Game(two_note_song(), **kwargs)
    game.press_button()
    game.set_paddle(adc_value)
    return game


def test_result_message_round():
    assert result_message(42, False) == encode_text(" " * 10 + "SCORE 0042" + " " * 10)


def test_result_message_game_over():
    assert result_message(7, True) == encode_text(" " * 10 + "GAME OVER SCORE 0007" + " " * 10)


def test_startup_message_text():
    assert list(STARTUP_MESSAGE) == encode_text(" " * 10 + "PRESS B1 TO START" + " " * 10)


@pytest.mark.parametrize("position", range(8))
def test_set_paddle_maps_adc_steps(position):
    game = Game()
    assert game.set_paddle(position * 512) == position
    assert game.paddle_pos == position


def test_set_paddle_full_scale():
    game = Game()
    assert game.set_paddle(4095) == 7


@pytest.mark.parametrize("reading", [-1, 4096])
def test_set_paddle_rejects_out_of_range(reading):
    with pytest.raises(ValueError):
        Game().set_paddle(reading)


def test_song_without_end_rejected():
    notes = [MusicNote(note_period("A4"), Duration.QUARTER, TEMPO, SPACE_MS)]
    with pytest.raises(ValueError):
        Game(notes)


def test_empty_song_rejected():
    with pytest.raises(ValueError):
        Game([])


def test_defaults():
    game = Game()
    assert game.state == GameState.IDLE
    assert game.animate_on
    assert not game.music_on
    assert game.max_misses == MAX_MISSES
    assert game.song == jeopardy_song()
    assert game.song[0].tempo == DEFAULT_TEMPO


def test_press_button_starts_game():
    game = Game()
    assert game.press_button() is True
    assert game.state == GameState.PLAYING
    assert game.music_on
    assert not game.animate_on
    assert game.display == [Symbol.SPACE] * 8


def test_press_button_ignored_while_playing():
    game = Game()
    game.press_button()
    game.score = 3
    assert game.press_button() is False
    assert game.score == 3


def test_update_display_buffer_marks_upcoming_notes():
    game = Game()
    game.press_button()
    game.update_display_buffer()
    assert game.display[display_for_note(note_period("A4"))] == Symbol.CHAR_D
    assert game.display[display_for_note(note_period("D5"))] == Symbol.UNDER
    assert game.display[display_for_note(note_period("D4"))] == Symbol.OVER
    assert sum(code != Symbol.SPACE for code in game.display) == 3


def test_miss_counts():
    game = started_game(((a4_position() + 1) % 8) * 512)
    play_round(game)
    assert game.state == GameState.ROUND_OVER
    assert game.score == 0
    assert game.miss_count == 1


def test_too_many_misses_ends_game():
    game = started_game(((a4_position() + 1) % 8) * 512, max_misses=1)
    play_round(game)
    assert game.state == GameState.GAME_OVER
    assert game.index == 1
    assert [note.tempo for note in game.song] == [TEMPO, TEMPO]


def test_finish_round_continues_play():
    game = started_game(a4_position() * 512)
    play_round(game)
    message = game.finish_round()
    assert message == result_message(1, False)
    assert game.message == message
    assert game.state == GameState.PLAYING
    assert game.music_on
    assert not game.animate_on
    assert game.display == [Symbol.SPACE] * 8


def test_finish_round_after_game_over_returns_to_idle():
    game = started_game(((a4_position() + 1) % 8) * 512, max_misses=1)
    play_round(game)
    message = game.finish_round()
    assert message == result_message(0, True)
    assert game.state == GameState.IDLE
    assert game.animate_on
    assert not game.music_on
    assert game.message == list(STARTUP_MESSAGE)


def test_finish_round_requires_finished_round():
    with pytest.raises(RuntimeError):
        Game().finish_round()


def test_speaker_toggles_when_paddle_on_note():
    game = started_game(a4_position() * 512)
    for _ in range(game.song[0].note):
        game.tone_tick()
    assert game.speaker is True
    assert game.tone == 0


def test_speaker_silent_when_paddle_off_note():
    game = started_game(((a4_position() + 1) % 8) * 512)
    for _ in range(game.song[0].note):
        game.tone_tick()
    assert game.speaker is False
    assert game.tone == 0


def test_tone_tick_with_music_off_resets_counters():
    game = Game()
    game.count = 17
    game.tone_tick()
    assert game.tone == 0
    assert game.count == 0


def test_vibrato_rises_then_wraps():
    game = Game()
    start = game.save_note
    for _ in range(game.vibrato_rate):
        game.system_tick()
    assert game.song[0].note == start + game.vibrato_depth
    for _ in range(game.vibrato_rate):
        game.system_tick()
    assert game.song[0].note == start - game.vibrato_depth


def test_vibrato_stays_within_depth():
    game = Game()
    start = game.save_note
    for _ in range(2000):
        game.system_tick()
        assert abs(game.song[0].note - start) <= game.vibrato_depth


def test_startup_message_scrolls():
    game = Game()
    for _ in range(11 * (game.delay_msec + 1)):
        game.system_tick()
    assert game.message_offset == 11
    shown = [game.port.latched[digit] for digit in reversed(range(8))]
    assert shown == [segment_pattern(code) for code in encode_text("PRESS B1")]


def test_scroll_offset_wraps():
    game = Game()
    for _ in range(60 * (game.delay_msec + 1)):
        game.system_tick()
        assert 0 <= game.message_offset < len(game.message) - 8


def test_multiplex_draws_display_with_paddle_dot():
    game = Game()
    game.press_button()
    game.set_paddle(2 * 512)
    game.update_display_buffer()
    for _ in range(8):
        game.multiplex_step()
    for digit in range(8):
        expected = segment_pattern(game.display[digit])
        if digit == 2:
            assert game.port.latched[digit] & 0x80 == 0
            assert game.port.latched[digit] | 0x80 == expected
        else:
            assert game.port.latched[digit] == expected


def test_multiplex_idle_leaves_digits_alone():
    game = Game()
    before = list(game.port.latched)
    for _ in range(8):
        game.multiplex_step()
    assert game.port.latched == before
    assert game.digit_select == 0


def test_step_starts_game_and_draws():
    game = Game()
    assert game.step(0, True) is None
    assert game.state == GameState.PLAYING
    assert Symbol.CHAR_D in game.display


def test_step_reports_finished_round():
    adc = a4_position() * 512
    game = started_game(adc)
    play_round(game)
    assert game.step(adc, False) == result_message(1, False)
    assert game.state == GameState.PLAYING


def test_led_dimming_follows_ramp():
    game = Game()
    game.dim_enabled = True
    game.brightness["red"] = 3
    game.tone_tick()
    assert game.leds["red"] is False
    game.tone_tick()
    game.tone_tick()
    assert game.leds["red"] is True
    assert game.leds["green"] is True