"""Text rendering of the display and a command that plays the game unattended."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .game import ADC_STEP, Game, GameState
from .notes import display_for_note
from .segments import DIGIT_COUNT, Symbol

# Tone-timer ticks run between two millisecond ticks.  One is enough for the
# song to advance and be judged exactly as on the board.
TONE_TICKS_PER_MS = 1

PaddleStrategy = Callable[[Game], int]

_SPECIAL_CHARS = {
    Symbol.SPACE: " ",
    Symbol.DOT: ".",
    Symbol.EQUAL: "=",
    Symbol.OVER: "~",
    Symbol.UNDER: "_",
    Symbol.DASH: "-",
}


def _char_for(code: int) -> str:
    try:
        symbol = Symbol(code)
    except ValueError:
        raise ValueError(f"code {code} has no printable form") from None
    if symbol in _SPECIAL_CHARS:
        return _SPECIAL_CHARS[symbol]
    return symbol.name[-1]


def _symbols_text(codes: Sequence[int]) -> str:
    return "".join(_char_for(code) for code in codes)


def render_digits(codes: Sequence[int], dot_position: int | None = None) -> str:
    """Render a display buffer indexed by digit, digit 7 leftmost.

    A lit dot is shown as '.' right after the character of its digit.
    """
    if dot_position is not None and not 0 <= dot_position < len(codes):
        raise ValueError(f"dot position {dot_position} out of range 0..{len(codes) - 1}")
    parts = []
    for digit in reversed(range(len(codes))):
        parts.append(_char_for(codes[digit]))
        if digit == dot_position:
            parts.append(".")
    return "".join(parts)


def _track_note(game: Game) -> int:
    """Hold the paddle under the note now playing; stay put during rests."""
    position = display_for_note(game.save_note)
    if position is None:
        return game.adc_value
    return position * ADC_STEP + ADC_STEP // 2


def _fixed_position(position: int) -> PaddleStrategy:
    if not 0 <= position < DIGIT_COUNT:
        raise ValueError(f"paddle position {position} out of range 0..{DIGIT_COUNT - 1}")
    reading = position * ADC_STEP + ADC_STEP // 2
    return lambda game: reading


@dataclass
class SimulationResult:
    """Outcome of an unattended game: one message and score per finished round."""

    messages: list[str] = field(default_factory=list)
    scores: list[int] = field(default_factory=list)
    game_over: bool = False
    elapsed_ms: int = 0


def run_simulation(
    rounds: int = 1, paddle_strategy: PaddleStrategy | None = None
) -> SimulationResult:
    """Play up to ``rounds`` rounds, asking the strategy for a reading every millisecond.

    The strategy receives the game and returns a 12-bit potentiometer value.
    The run stops early when the game is over.
    """
    if rounds < 1:
        raise ValueError("at least one round must be played")
    strategy = paddle_strategy if paddle_strategy is not None else _track_note
    game = Game()
    result = SimulationResult()
    button = True
    while len(result.messages) < rounds:
        game.system_tick()
        for _ in range(TONE_TICKS_PER_MS):
            game.tone_tick()
        result.elapsed_ms += 1
        message = game.step(strategy(game), button)
        button = False
        if message is None:
            continue
        result.messages.append(_symbols_text(message))
        result.scores.append(game.score)
        if game.state == GameState.IDLE:
            result.game_over = True
            break
    return result


def main(argv: Sequence[str] | None = None) -> int:
    """Play the game with a simulated player and print each round's result."""
    parser = argparse.ArgumentParser(
        prog="pitchpaddle",
        description="Play the paddle game against its song with a simulated player.",
    )
    parser.add_argument("--rounds", type=int, default=1, help="rounds to play (default 1)")
    parser.add_argument(
        "--paddle",
        choices=("track", "fixed"),
        default="track",
        help="follow the notes or hold the paddle still (default track)",
    )
    parser.add_argument(
        "--position",
        type=int,
        choices=range(DIGIT_COUNT),
        default=0,
        help="paddle position for --paddle fixed (default 0)",
    )
    args = parser.parse_args(argv)
    if args.rounds < 1:
        parser.error("--rounds must be at least 1")

    strategy = _track_note if args.paddle == "track" else _fixed_position(args.position)
    result = run_simulation(args.rounds, strategy)
    for number, message in enumerate(result.messages, start=1):
        print(f"Round {number}: {message.strip()}")
    print(f"Played {result.elapsed_ms} ms")
    return 0