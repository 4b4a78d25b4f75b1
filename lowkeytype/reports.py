from __future__ import annotations
from typing import List, Optional

from lowkeytype.endurance import ACCURACY_THRESHOLD, WPM_THRESHOLD, EnduranceRun, StopReason
from lowkeytype.profile import UserProfile, skill_level
from lowkeytype.speed_test import SpeedTestRun
from lowkeytype.store import ProfileStore

LEADERBOARD_SIZE = 5

# ------------------------------
# Leaderboard
# ------------------------------

def rank_profiles(profiles: List[UserProfile]) -> List[UserProfile]:
    return sorted(profiles, key=lambda p: p.best_wpm, reverse=True)

def _row(rank: int, p: UserProfile) -> str:
    return (f"{rank:<4d} | {p.name:<20s} | {p.best_wpm:<6.2f} | {p.best_accuracy:<8.2f} | "
            f"{p.tests_completed:<5d} | {p.endurance_high_score:<5d}")

def leaderboard_lines(profiles: List[UserProfile], current: Optional[str] = None) -> List[str]:
    if not profiles:
        return ["No users found."]
    ranked = rank_profiles(profiles)
    lines = [
        "Rank | Username             | WPM    | Accuracy | Tests | Endurance",
        "-----|----------------------|--------|----------|-------|----------",
    ]
    for i, p in enumerate(ranked[:LEADERBOARD_SIZE]):
        lines.append(_row(i + 1, p))

    names = [p.name for p in ranked]
    if current in names:
        rank = names.index(current) + 1
        if rank > LEADERBOARD_SIZE:
            lines.append("...")
            lines.append(_row(rank, ranked[rank - 1]) + " (You)")
    return lines

def print_leaderboard(store: ProfileStore, current: Optional[str] = None):
    print("\n===== Leaderboard =====")
    for line in leaderboard_lines(store.all_profiles(), current):
        print(line)

# ------------------------------
# Profile card
# ------------------------------

def profile_lines(profile: UserProfile) -> List[str]:
    return [
        f"===== Profile: {profile.name} =====",
        f"Tests completed: {profile.tests_completed}",
        f"Best WPM: {profile.best_wpm:.2f}",
        f"Best accuracy: {profile.best_accuracy:.2f}%",
        f"Average accuracy: {profile.average_accuracy:.2f}%",
        f"Endurance high score: {profile.endurance_high_score} words",
        "",
        f"Skill assessment: {skill_level(profile)}",
    ]

def print_profile(profile: UserProfile):
    print()
    for line in profile_lines(profile):
        print(line)

# ------------------------------
# Mode summaries
# ------------------------------

def print_endurance_summary(run: EnduranceRun):
    print("\n===== Endurance Mode Complete =====")
    print(f"Starting difficulty   : {run.difficulty.label}")
    print(f"Total words completed : {run.total_words}")
    print(f"Rounds completed      : {run.rounds_completed}")
    print(f"Final accuracy        : {run.current_accuracy:.2f}%")
    print(f"Final WPM             : {run.current_wpm:.2f}")
    if run.stop_reason is StopReason.ACCURACY:
        print(f"Stopped: accuracy fell below {ACCURACY_THRESHOLD:.1f}%")
    elif run.stop_reason is StopReason.SPEED:
        print(f"Stopped: WPM fell below {WPM_THRESHOLD:.1f}")
    elif run.stop_reason is StopReason.CANCELLED:
        print("Stopped: cancelled")
    if run.new_high_score:
        print(f"New endurance high score! Previous: {run.previous_high_score} words")

def print_speed_summary(run: SpeedTestRun):
    if run.cancelled:
        print("\nTest cancelled. No stats were recorded.")
        return
    r = run.outcome.result
    print("\n===== Test Results =====")
    print(f"Words          : {run.word_count} ({run.difficulty.label})")
    print(f"Time taken     : {r.time_taken:.2f} seconds")
    print(f"Words per min  : {r.wpm:.2f}")
    print(f"Accuracy       : {r.accuracy:.2f}%")
    print(f"Keystrokes     : {r.total_chars} | Correct: {r.correct_chars}")
    print(f"Positions mistyped at least once: {r.mistake_positions}")
    if "best_wpm" in run.improved:
        print(f"\nNew personal best WPM: {r.wpm:.2f} (previous: {run.improved['best_wpm']:.2f})")
    if "best_accuracy" in run.improved:
        print(f"New personal best accuracy: {r.accuracy:.2f}% (previous: {run.improved['best_accuracy']:.2f}%)")

# ------------------------------
# Charts
# ------------------------------

def plot_charts(store: ProfileStore, prefix: str):
    import matplotlib.pyplot as plt
    profiles = rank_profiles(store.all_profiles())
    if not profiles:
        print("No profiles to plot.")
        return
    names = [p.name for p in profiles]

    plt.figure()
    plt.bar(names, [p.best_wpm for p in profiles], label="Best WPM")
    plt.axhline(WPM_THRESHOLD, linestyle="--", color="gray", label="Endurance floor")
    plt.title("Best WPM by user")
    plt.xlabel("User"); plt.ylabel("WPM"); plt.xticks(rotation=45, ha="right"); plt.legend()
    wpm_path = f"{prefix}_wpm.png"; plt.savefig(wpm_path, bbox_inches="tight"); plt.close()
    print(f"Saved {wpm_path}")

    plt.figure()
    plt.bar(names, [p.best_accuracy for p in profiles], label="Best accuracy (%)")
    plt.plot(names, [p.average_accuracy for p in profiles], marker="o", linestyle="", label="Average accuracy (%)")
    plt.axhline(ACCURACY_THRESHOLD, linestyle="--", color="gray", label="Endurance floor")
    plt.title("Accuracy (%) by user")
    plt.xlabel("User"); plt.ylabel("Accuracy (%)"); plt.ylim(0, 100); plt.xticks(rotation=45, ha="right"); plt.legend()
    acc_path = f"{prefix}_accuracy.png"; plt.savefig(acc_path, bbox_inches="tight"); plt.close()
    print(f"Saved {acc_path}")
