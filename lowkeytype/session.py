from __future__ import annotations
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Set

from lowkeytype.console import KeyEvent, KeyKind, Terminal
from lowkeytype.scoring import (
    calculate_accuracy,
    classify_positions,
    keystroke_accuracy,
    words_per_minute,
)

log = logging.getLogger(__name__)

# ------------------------------
# Results
# ------------------------------

@dataclass(frozen=True)
class TypingResult:
    total_chars: int
    correct_chars: int
    mistyped: int
    missed: int
    extra: int
    accuracy: float
    position_accuracy: float
    mistake_positions: int
    wpm: float
    time_taken: float
    text: str

class SessionStatus(enum.Enum):
    RUNNING = "running"
    FINISHED = "finished"
    CANCELLED = "cancelled"

@dataclass(frozen=True)
class SessionOutcome:
    status: SessionStatus
    result: Optional[TypingResult] = None

    @property
    def cancelled(self) -> bool:
        return self.status is SessionStatus.CANCELLED

# ------------------------------
# Session state machine
# ------------------------------

@dataclass
class SessionState:
    target: str
    start_time: float
    typed: List[str] = field(default_factory=list)
    cursor: int = 0
    mistake_mask: Set[int] = field(default_factory=set)
    keystrokes: int = 0
    error_keystrokes: int = 0
    status: SessionStatus = SessionStatus.RUNNING

    def __post_init__(self):
        if not self.target:
            self.status = SessionStatus.FINISHED

    @property
    def typed_text(self) -> str:
        return "".join(self.typed)

    def correctness(self) -> List[bool]:
        return classify_positions(self.target, self.typed_text)

    def apply(self, event: KeyEvent) -> bool:
        """Feed one key event; return True if it changed what is on screen."""
        if self.status is not SessionStatus.RUNNING:
            return False
        if event.kind is KeyKind.CANCEL:
            self.status = SessionStatus.CANCELLED
            return False
        if event.kind is KeyKind.BACKSPACE:
            if self.cursor == 0:
                return False
            self.cursor -= 1
            del self.typed[self.cursor:]
            return True
        if event.kind is KeyKind.CHAR and self.cursor < len(self.target):
            self.typed.append(event.char)
            self.cursor += 1
            self.keystrokes += 1
            pos = self.cursor - 1
            if event.char != self.target[pos]:
                self.error_keystrokes += 1
                self.mistake_mask.add(pos)
            if self.cursor == len(self.target):
                self.status = SessionStatus.FINISHED
            return True
        return False

    def result(self, end_time: float) -> TypingResult:
        elapsed = end_time - self.start_time
        report = calculate_accuracy(self.target, self.typed_text)
        return TypingResult(
            total_chars=self.keystrokes,
            correct_chars=self.keystrokes - self.error_keystrokes,
            mistyped=report.mistyped,
            missed=report.missed,
            extra=report.extra,
            accuracy=keystroke_accuracy(self.keystrokes, self.error_keystrokes),
            position_accuracy=report.accuracy,
            mistake_positions=len(self.mistake_mask),
            wpm=words_per_minute(self.cursor, elapsed),
            time_taken=elapsed,
            text=self.target,
        )

def run_typing_session(target: str, terminal: Terminal, clock: Callable[[], float] = time.time) -> SessionOutcome:
    """Run one live typing session against ``target``.

    The clock starts when the loop is entered, not at the first keystroke.
    Cancelling returns an outcome without a result.
    """
    state = SessionState(target=target, start_time=clock())
    while state.status is SessionStatus.RUNNING:
        event = terminal.read_key()
        if state.apply(event):
            terminal.render_prefix(list(state.typed), target, state.correctness())

    if state.status is SessionStatus.CANCELLED:
        log.info("session cancelled at %d/%d chars", state.cursor, len(target))
        return SessionOutcome(SessionStatus.CANCELLED)

    result = state.result(clock())
    log.info("session finished: %.1f wpm, %.1f%% accuracy, %d keystrokes",
             result.wpm, result.accuracy, result.total_chars)
    return SessionOutcome(SessionStatus.FINISHED, result)
