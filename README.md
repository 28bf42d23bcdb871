# pitchpaddle

A small rhythm game built around a model of an eight-digit seven-segment
display. A melody plays note by note. The pitch of each note maps to one
of the eight digits. The player moves a paddle, read from a 12-bit
analogue value (0–4095, one digit per 512 counts), under the digit where
the current note lands. A note scores when the paddle is under it as the
note ends. If the paddle is anywhere else, the note counts as a miss. A
hit resets the miss count, so the misses that count are consecutive ones.

The display buffer shows the current note and the three after it. The
current note is marked `d`, the next `_`, the one after `-`, and the
furthest an overline.

At the end of the song, the game checks the miss count:

- If it is below the limit (5 by default), the round is over. The game
  shows `SCORE nnnn`, makes every note faster by the tempo increment
  (200 by default, down to a floor of 500), and starts the song again.
- If it has reached the limit, the game shows `GAME OVER SCORE nnnn` and
  returns to the idle state with the scrolling `PRESS B1 TO START`
  message.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## The `pitchpaddle` command

```
pitchpaddle [--rounds N] [--paddle {track,fixed}] [--position 0-7]
```

This command plays the game unattended with a simulated player. It
prints one line per finished round, such as `Round 1: SCORE 0067`, and
then the number of simulated milliseconds. It stops early if the game
ends.

- `--rounds`: rounds to play (default 1, must be at least 1).
- `--paddle track`: the paddle follows the note now playing. This is the
  default.
- `--paddle fixed`: the paddle stays on the digit given by `--position`
  (default 0).

## Using the library

- `pitchpaddle.segments`: `Symbol` holds the display character codes.
  `segment_pattern(code)` gives the active-low segment byte for a code,
  and `encode_text(text)` turns letters, digits and ` .=-_~` into codes.
  `SegmentPort` models the output register. It has `write_digit`,
  `write_hex` and `deselect_all`, and records what each digit has
  latched.
- `pitchpaddle.notes`: `note_period(name)` accepts names such as `A4`,
  `Fs5_Gb5`, `F#5`, `Gb5` or `rest`. `note_frequency(period)` gives the
  pitch in hertz. `Duration` holds the note lengths. `MusicNote` has
  `duration()` and `sounding_time()`. `display_for_note(note)` returns
  the digit for a note, or `None` for a rest or a period that falls on a
  band boundary.
- `pitchpaddle.song`: `jeopardy_song(tempo)` returns the built-in melody.
  `speed_up(song, increment, minimum)` returns a faster copy of a song.
- `pitchpaddle.game`: `Game` is driven by three calls. `tone_tick()` runs
  the tone timer, which drives the speaker and judges notes.
  `system_tick()` runs the millisecond timer, which handles vibrato and
  message scrolling. `step(adc_value, button_pressed)` runs one pass of
  the polling loop and returns the result message when a round has just
  ended. `GameState` names the phases of play. `result_message(score,
  game_over)` builds the end-of-round text.
- `pitchpaddle.cli`: `render_digits(codes, dot_position)` renders a
  display buffer as text, with digit 7 on the left. `run_simulation`
  plays unattended rounds. `main` is the command.

Example:

```python
from pitchpaddle.game import Game, GameState
from pitchpaddle.song import jeopardy_song

game = Game(jeopardy_song(1400), 5, 200)
game.step(0, True)                 # press the start button
assert game.state == GameState.PLAYING
game.set_paddle(2048)              # paddle under digit 4
```

## What it does not do

The package is a model of the game, not a playable front end. It does
not read a keyboard or any other live input. It produces no sound: the
speaker is only the `Game.speaker` flag. It draws nothing on screen
while a game runs. The `pitchpaddle` command only plays with a simulated
paddle and prints each round's result.