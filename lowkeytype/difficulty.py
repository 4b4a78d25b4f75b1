from __future__ import annotations
import enum

from lowkeytype.profile import UserProfile

HARD_THRESHOLD = 95.0
MEDIUM_THRESHOLD = HARD_THRESHOLD - 10

class Difficulty(enum.IntEnum):
    EASY = 1
    MEDIUM = 2
    HARD = 3

    @property
    def label(self) -> str:
        return {Difficulty.EASY: "LIGHT", Difficulty.MEDIUM: "MEDIUM", Difficulty.HARD: "HARD"}[self]

    @property
    def filename(self) -> str:
        return {Difficulty.EASY: "wordbaseL.txt", Difficulty.MEDIUM: "wordbaseM.txt", Difficulty.HARD: "wordbaseH.txt"}[self]

def historical_accuracy(profile: UserProfile) -> float:
    if profile.total_chars_typed > 0:
        return profile.total_correct_chars / profile.total_chars_typed * 100
    return profile.best_accuracy

def select_difficulty(profile: UserProfile) -> Difficulty:
    # better accuracy earns harder words
    accuracy = historical_accuracy(profile)
    if accuracy >= HARD_THRESHOLD:
        return Difficulty.HARD
    if accuracy >= MEDIUM_THRESHOLD:
        return Difficulty.MEDIUM
    return Difficulty.EASY
