from __future__ import annotations
import logging
from dataclasses import asdict, dataclass
from typing import Optional

log = logging.getLogger(__name__)

# ------------------------------
# User profile
# ------------------------------

@dataclass
class UserProfile:
    name: str
    best_wpm: float = 0.0
    best_accuracy: float = 0.0
    tests_completed: int = 0
    endurance_high_score: int = 0
    average_accuracy: float = 0.0
    total_chars_typed: int = 0
    total_correct_chars: int = 0

    def to_dict(self) -> dict:
        return asdict(self)

def sanitize_username(name: str) -> str:
    return "".join(ch for ch in name.strip() if ch.isalnum() or ch in ("_", "-"))

def record_speed_result(profile: UserProfile, result) -> dict:
    """Fold one finished raw-speed test into the profile.

    Returns the previous bests that were beaten, keyed by field name.
    """
    improved = {}
    if result.wpm > profile.best_wpm:
        improved["best_wpm"] = profile.best_wpm
        profile.best_wpm = result.wpm
    if result.accuracy > profile.best_accuracy:
        improved["best_accuracy"] = profile.best_accuracy
        profile.best_accuracy = result.accuracy

    profile.total_chars_typed += result.total_chars
    profile.total_correct_chars += result.correct_chars
    if profile.total_chars_typed > 0:
        profile.average_accuracy = profile.total_correct_chars / profile.total_chars_typed * 100
    profile.tests_completed += 1
    log.info("profile %s: speed test recorded (%d tests)", profile.name, profile.tests_completed)
    return improved

def record_endurance_run(profile: UserProfile, total_words: int, rounds_completed: int) -> Optional[int]:
    """Fold an endurance run into the profile; return the old high score if it was beaten."""
    previous = None
    if total_words > profile.endurance_high_score:
        previous = profile.endurance_high_score
        profile.endurance_high_score = total_words
    profile.tests_completed += rounds_completed
    log.info("profile %s: endurance run recorded (%d words, %d rounds)",
             profile.name, total_words, rounds_completed)
    return previous

# ------------------------------
# Skill assessment
# ------------------------------

def skill_rating(profile: UserProfile) -> float:
    normalized_wpm = profile.best_wpm / 200.0 * 100
    rating = normalized_wpm * 0.5 + profile.best_accuracy * 0.3 + profile.average_accuracy * 0.2
    return min(rating, 100.0)

def skill_level(profile: UserProfile) -> str:
    rating = skill_rating(profile)
    if rating >= 100:
        return "Expert"
    if rating > 80:
        return "Advanced"
    if rating > 60:
        return "Intermediate"
    return "Beginner"
