from __future__ import annotations
from dataclasses import dataclass
from typing import List

# ------------------------------
# Position-based accuracy
# ------------------------------

@dataclass(frozen=True)
class AccuracyReport:
    correct: int
    mistyped: int
    missed: int
    extra: int
    accuracy: float

    @property
    def total_errors(self) -> int:
        return self.mistyped + self.missed + self.extra

def calculate_accuracy(target: str, typed: str) -> AccuracyReport:
    """Compare typed text to the target character by character.

    Shortfall counts as missed characters, overflow as extra ones. Accuracy is
    ``100 * (1 - errors / len(target))``, floored at 0; an empty target scores 0.
    """
    target_len = len(target)
    typed_len = len(typed)
    common = min(target_len, typed_len)

    correct = sum(1 for i in range(common) if typed[i] == target[i])
    mistyped = common - correct
    missed = target_len - typed_len if typed_len < target_len else 0
    extra = typed_len - target_len if typed_len > target_len else 0

    if target_len == 0:
        accuracy = 0.0
    else:
        errors = mistyped + missed + extra
        accuracy = max(0.0, 100.0 * (1.0 - errors / target_len))

    return AccuracyReport(correct, mistyped, missed, extra, accuracy)

def classify_positions(target: str, typed: str) -> List[bool]:
    # anything typed past the end of the target is wrong
    return [i < len(target) and ch == target[i] for i, ch in enumerate(typed)]

def keystroke_accuracy(keystrokes: int, error_keystrokes: int) -> float:
    if keystrokes == 0:
        return 0.0
    return 100.0 * (keystrokes - error_keystrokes) / keystrokes

def words_per_minute(chars: int, seconds: float) -> float:
    # 5 characters make one word
    if seconds <= 0:
        return 0.0
    return (chars / 5.0) / (seconds / 60.0)
