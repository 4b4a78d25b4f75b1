from __future__ import annotations
import argparse
import logging
import random
import sys
from pathlib import Path

from lowkeytype.context import TrainerContext
from lowkeytype.difficulty import Difficulty
from lowkeytype.endurance import run_endurance
from lowkeytype.errors import TrainerError
from lowkeytype.profile import sanitize_username
from lowkeytype.reports import (
    plot_charts,
    print_endurance_summary,
    print_leaderboard,
    print_profile,
    print_speed_summary,
)
from lowkeytype.speed_test import MAX_WORDS, MIN_WORDS, clamp, run_speed_test
from lowkeytype.store import DEFAULT_DB, ProfileStore, export_csv, export_json, import_legacy
from lowkeytype.words import DEFAULT_WORDS_DIR, WordLists

log = logging.getLogger(__name__)

DEFAULT_LOG = str(Path.home() / ".lowkeytype" / "lowkeytype.log")

# ------------------------------
# Logging
# ------------------------------

def setup_logging(log_file: str, verbose: bool = False) -> None:
    # curses owns the screen during sessions, so log to a file only
    Path(log_file).parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[logging.FileHandler(log_file, encoding="utf-8")],
    )

    def excepthook(exctype, value, tb):
        logging.exception("Unhandled exception", exc_info=(exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)
        sys.exit(1)

    sys.excepthook = excepthook

# ------------------------------
# Prompts
# ------------------------------

def get_valid_int(lo: int, hi: int, input_fn=input) -> int:
    while True:
        raw = input_fn().strip()
        if not raw:
            print(f"Please enter a number between {lo} and {hi}: ", end="")
        elif not (raw.isascii() and raw.isdigit()):
            print(f"Invalid input. Please enter a number between {lo} and {hi}: ", end="")
        elif not lo <= int(raw) <= hi:
            print(f"Number must be between {lo} and {hi}. Please try again: ", end="")
        else:
            return int(raw)

def prompt_username(input_fn=input) -> str:
    print("Enter your username (no spaces): ", end="")
    while True:
        name = sanitize_username(input_fn())
        if name:
            return name
        print("Invalid input. Please try again: ", end="")

def sign_in(store: ProfileStore, name: str):
    profile, created = store.get_or_create(name)
    if created:
        print(f"New user detected. Creating profile for {name}.")
    else:
        print(f"Welcome back, {profile.name}!")
        print(f"Best WPM: {profile.best_wpm:.2f} | Best Accuracy: {profile.best_accuracy:.2f}% "
              f"| Tests completed: {profile.tests_completed}")
        if profile.endurance_high_score > 0:
            print(f"Endurance Mode High Score: {profile.endurance_high_score} words")
    return profile

# ------------------------------
# Modes
# ------------------------------

def endurance_mode(ctx: TrainerContext):
    from lowkeytype.terminal import run_in_curses
    run = run_in_curses(lambda term: run_endurance(ctx.with_terminal(term)))
    if run is None:
        print("Endurance mode unavailable: no word list for your difficulty tier.")
        return None
    print_endurance_summary(run)
    return run

def speed_mode(ctx: TrainerContext, difficulty: Difficulty, word_count: int):
    from lowkeytype.terminal import run_in_curses
    run = run_in_curses(lambda term: run_speed_test(ctx.with_terminal(term), difficulty, word_count))
    if run is None:
        print(f"Raw speed mode unavailable: could not load {difficulty.filename}.")
        return None
    print_speed_summary(run)
    return run

def show_menu():
    print("\n===== Main Menu =====")
    print("1. Endurance Mode")
    print("2. Raw Speed Mode")
    print("3. Leaderboard")
    print("4. Profile")
    print("5. Exit")

def menu_loop(ctx: TrainerContext, input_fn=input):
    while True:
        show_menu()
        print("Enter your choice (1-5): ", end="")
        choice = get_valid_int(1, 5, input_fn)
        if choice == 1:
            endurance_mode(ctx)
        elif choice == 2:
            print("\n===== Raw Speed Mode =====")
            print("Choose difficulty:\n1. Light (easier words)\n2. Medium (average words)\n3. Hard (difficult words)")
            print("Choice: ", end="")
            difficulty = Difficulty(get_valid_int(1, 3, input_fn))
            print(f"How many words for the test? ({MIN_WORDS}-{MAX_WORDS}): ", end="")
            words = get_valid_int(MIN_WORDS, MAX_WORDS, input_fn)
            speed_mode(ctx, difficulty, words)
        elif choice == 3:
            print_leaderboard(ctx.store, ctx.profile.name)
        elif choice == 4:
            print_profile(ctx.profile)
        else:
            print("Saving user data and exiting. Goodbye!")
            ctx.store.save(ctx.profile)
            return

# ------------------------------
# Argparse / Main
# ------------------------------

def parse_args(argv=None):
    p = argparse.ArgumentParser(prog="lowkeytype", description="Terminal typing-speed trainer")
    p.add_argument("--db", type=str, default=DEFAULT_DB, help="SQLite profile database path")
    p.add_argument("--no-store", action="store_true", help="Keep profiles in memory only")
    p.add_argument("--words-dir", type=str, default=DEFAULT_WORDS_DIR,
                   help="Directory holding wordbaseL.txt, wordbaseM.txt and wordbaseH.txt")
    p.add_argument("--user", type=str, default=None, help="Username (skips the prompt)")
    p.add_argument("--mode", type=str, default="menu", choices=["menu", "endurance", "speed"],
                   help="Start straight into a mode instead of the menu")
    p.add_argument("--difficulty", type=int, default=1, choices=[1, 2, 3],
                   help="Raw speed word list: 1 light, 2 medium, 3 hard")
    p.add_argument("--words", type=int, default=25, help=f"Raw speed word count ({MIN_WORDS}-{MAX_WORDS})")
    p.add_argument("--seed", type=int, default=None, help="Seed the word sampler")
    p.add_argument("--report", action="store_true", help="Print the profile of --user and the leaderboard, then exit")
    p.add_argument("--leaderboard", action="store_true", help="Print the leaderboard and exit")
    p.add_argument("--export-json", type=str, default=None, help="Export all profiles to JSON at path, then exit")
    p.add_argument("--export-csv", type=str, default=None, help="Export all profiles to CSV at path, then exit")
    p.add_argument("--plot", type=str, default=None,
                   help="Save leaderboard charts with this path prefix (e.g., /tmp/lowkey), then exit")
    p.add_argument("--import-legacy", type=str, default=None, help="Import a legacy users.txt file, then exit")
    p.add_argument("--log-file", type=str, default=DEFAULT_LOG, help="Log file path")
    p.add_argument("--verbose", action="store_true", help="Log debug messages")
    return p.parse_args(argv)

def run(args, store: ProfileStore, input_fn=input) -> int:
    if args.import_legacy:
        count = import_legacy(store, args.import_legacy)
        print(f"Imported {count} user profiles from {args.import_legacy}."); return 0
    if args.export_json:
        export_json(store, args.export_json); return 0
    if args.export_csv:
        export_csv(store, args.export_csv); return 0
    if args.plot:
        plot_charts(store, args.plot); return 0
    if args.leaderboard:
        print_leaderboard(store, sanitize_username(args.user) if args.user else None); return 0
    if args.report:
        if args.user:
            profile = store.get(sanitize_username(args.user))
            if profile is None:
                print(f"No profile named {args.user}.")
            else:
                print_profile(profile)
        print_leaderboard(store, sanitize_username(args.user) if args.user else None)
        return 0

    name = sanitize_username(args.user) if args.user else prompt_username(input_fn)
    if not name:
        print("Username must contain letters, digits, '_' or '-'.", file=sys.stderr)
        return 2
    profile = sign_in(store, name)
    ctx = TrainerContext(store=store, profile=profile, words=WordLists(args.words_dir),
                         rng=random.Random(args.seed))

    if args.mode == "endurance":
        endurance_mode(ctx)
    elif args.mode == "speed":
        speed_mode(ctx, Difficulty(args.difficulty), clamp(args.words, MIN_WORDS, MAX_WORDS))
    else:
        menu_loop(ctx, input_fn)
    return 0

def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    try:
        with ProfileStore(args.db, persist=not args.no_store) as store:
            return run(args, store)
    except TrainerError as e:
        log.error("%s", e)
        print(f"Error: {e}", file=sys.stderr); return 1
    except (KeyboardInterrupt, EOFError):
        print("\nSession cancelled."); return 1

if __name__ == "__main__":
    sys.exit(main())
