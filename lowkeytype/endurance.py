from __future__ import annotations
import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from lowkeytype.console import Color, Terminal
from lowkeytype.context import TrainerContext
from lowkeytype.difficulty import Difficulty, select_difficulty
from lowkeytype.errors import WordListError
from lowkeytype.profile import record_endurance_run
from lowkeytype.session import TypingResult, run_typing_session
from lowkeytype.words import build_text, sample_words

log = logging.getLogger(__name__)

ACCURACY_THRESHOLD = 85.0
WPM_THRESHOLD = 30.0
WORDS_PER_ROUND = 10

# ------------------------------
# Endurance run state
# ------------------------------

class StopReason(enum.Enum):
    ACCURACY = "accuracy"
    SPEED = "speed"
    CANCELLED = "cancelled"

@dataclass
class EnduranceRun:
    difficulty: Difficulty
    rounds_completed: int = 0
    total_words: int = 0
    current_accuracy: float = 100.0
    current_wpm: float = 100.0
    cancelled: bool = False
    stop_reason: Optional[StopReason] = None
    previous_high_score: Optional[int] = None
    rounds: List[TypingResult] = field(default_factory=list)

    @property
    def active(self) -> bool:
        return (self.current_accuracy >= ACCURACY_THRESHOLD
                and self.current_wpm >= WPM_THRESHOLD
                and not self.cancelled)

    @property
    def new_high_score(self) -> bool:
        return self.previous_high_score is not None

    def cancel(self):
        self.cancelled = True
        self.stop_reason = StopReason.CANCELLED

    def record_round(self, result: TypingResult):
        self.current_accuracy = result.accuracy
        self.current_wpm = result.wpm
        self.total_words += WORDS_PER_ROUND
        self.rounds_completed += 1
        self.rounds.append(result)
        if self.current_accuracy < ACCURACY_THRESHOLD:
            self.stop_reason = StopReason.ACCURACY
        elif self.current_wpm < WPM_THRESHOLD:
            self.stop_reason = StopReason.SPEED

# ------------------------------
# Controller
# ------------------------------

def _show_round_results(term: Terminal, run: EnduranceRun, result: TypingResult):
    term.say("", f"===== Round {run.rounds_completed} Results =====", color=Color.YELLOW)
    term.say(
        f"Time taken: {result.time_taken:.2f} seconds",
        f"Accuracy: {result.accuracy:.2f}%",
        f"WPM: {result.wpm:.2f}",
        f"Mistyped chars: {result.mistyped}",
        f"Missed chars: {result.missed}",
        f"Extra chars: {result.extra}",
    )
    if run.stop_reason is StopReason.ACCURACY:
        term.say("", f"Accuracy dropped below {ACCURACY_THRESHOLD:.1f}%. Endurance mode ended.", color=Color.RED)
    elif run.stop_reason is StopReason.SPEED:
        term.say("", f"WPM dropped below {WPM_THRESHOLD:.1f}. Endurance mode ended.", color=Color.RED)
    else:
        term.say("", "Both accuracy and WPM are above thresholds. Continue to next round.", color=Color.GREEN)

def run_endurance(ctx: TrainerContext, session_runner=run_typing_session) -> Optional[EnduranceRun]:
    """Play 10-word rounds until accuracy or speed drops below threshold, or ESC.

    Returns None when the word list for the starting tier is unavailable; the
    profile is left untouched in that case.
    """
    term = ctx.terminal
    term.clear_screen()
    term.say("===== Endurance Mode =====", color=Color.YELLOW)
    term.say(
        f"Keep typing until your accuracy falls below {ACCURACY_THRESHOLD:.1f}% "
        f"or WPM falls below {WPM_THRESHOLD:.1f}",
        "Press ESC at any time to end the test.",
        "",
    )

    difficulty = select_difficulty(ctx.profile)
    term.say(f"Starting with {difficulty.label} difficulty based on your profile.")
    try:
        pool = ctx.words.load(difficulty)
    except WordListError as e:
        log.warning("endurance mode refused: %s", e)
        term.say("Failed to load word list. Returning to main menu.", color=Color.RED)
        term.pause()
        return None

    run = EnduranceRun(difficulty)
    while run.active:
        text = build_text(sample_words(pool, WORDS_PER_ROUND, ctx.rng))
        term.say(
            "",
            f"===== Round {run.rounds_completed + 1} =====",
            f"Words completed so far: {run.total_words}",
            f"Current accuracy: {run.current_accuracy:.2f}%",
            f"Current WPM: {run.current_wpm:.2f}",
            "Press ESC at any time to end the test.",
            "",
        )
        term.show_target(text)
        outcome = session_runner(text, term, ctx.clock)

        if outcome.cancelled:
            term.say("", "Test canceled. Returning to main menu...", color=Color.YELLOW)
            run.cancel()
            break

        run.record_round(outcome.result)
        log.info("endurance round %d: %.1f%% at %.1f wpm", run.rounds_completed,
                 run.current_accuracy, run.current_wpm)
        _show_round_results(term, run, outcome.result)
        if run.active:
            term.pause("Press any key to start next round...")
            term.clear_screen()

    run.previous_high_score = record_endurance_run(ctx.profile, run.total_words, run.rounds_completed)
    ctx.store.save(ctx.profile)
    log.info("endurance finished after %d rounds (%s)", run.rounds_completed,
             run.stop_reason.value if run.stop_reason else "unknown")
    term.pause("Press any key to return to main menu...")
    return run
