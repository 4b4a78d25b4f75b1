from __future__ import annotations
import csv
import json
import logging
import sqlite3
from pathlib import Path
from typing import List, Optional

from lowkeytype.errors import StoreError
from lowkeytype.profile import UserProfile

log = logging.getLogger(__name__)

# ------------------------------
# Profile store (SQLite)
# ------------------------------

DEFAULT_DB = str(Path.home() / ".lowkeytype" / "profiles.db")

FIELDS = (
    "name",
    "best_wpm",
    "best_accuracy",
    "tests_completed",
    "endurance_high_score",
    "average_accuracy",
    "total_chars_typed",
    "total_correct_chars",
)

class ProfileStore:
    def __init__(self, db_path: str = DEFAULT_DB, persist: bool = True):
        self.db_path = db_path
        self.persist = persist
        try:
            if self.persist:
                Path(db_path).parent.mkdir(parents=True, exist_ok=True)
                self.conn = sqlite3.connect(db_path)
                self.conn.execute("PRAGMA journal_mode=WAL")
            else:
                self.conn = sqlite3.connect(":memory:")
            self._init_schema()
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"cannot open profile store {db_path}: {e}") from e
        log.debug("profile store opened at %s (persist=%s)", db_path, persist)

    def _init_schema(self):
        self.conn.execute('''
        CREATE TABLE IF NOT EXISTS users (
            name TEXT PRIMARY KEY,
            best_wpm REAL NOT NULL DEFAULT 0,
            best_accuracy REAL NOT NULL DEFAULT 0,
            tests_completed INTEGER NOT NULL DEFAULT 0,
            endurance_high_score INTEGER NOT NULL DEFAULT 0,
            average_accuracy REAL NOT NULL DEFAULT 0,
            total_chars_typed INTEGER NOT NULL DEFAULT 0,
            total_correct_chars INTEGER NOT NULL DEFAULT 0
        );
        ''')
        self.conn.commit()

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def get(self, name: str) -> Optional[UserProfile]:
        try:
            cur = self.conn.execute(f"SELECT {', '.join(FIELDS)} FROM users WHERE name = ?;", (name,))
            row = cur.fetchone()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        return UserProfile(*row) if row else None

    def get_or_create(self, name: str):
        """Return ``(profile, created)`` for ``name``, saving new profiles straight away."""
        profile = self.get(name)
        if profile is not None:
            return profile, False
        profile = UserProfile(name=name)
        self.save(profile)
        log.info("created profile %s", name)
        return profile, True

    def save(self, profile: UserProfile):
        values = tuple(getattr(profile, f) for f in FIELDS)
        try:
            self.conn.execute(f'''
            INSERT INTO users ({', '.join(FIELDS)})
            VALUES ({', '.join('?' for _ in FIELDS)})
            ON CONFLICT(name) DO UPDATE SET
              {', '.join(f"{f} = excluded.{f}" for f in FIELDS[1:])};
            ''', values)
            self.conn.commit()
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e
        log.info("saved profile %s", profile.name)

    def all_profiles(self) -> List[UserProfile]:
        try:
            cur = self.conn.execute(f"SELECT {', '.join(FIELDS)} FROM users ORDER BY name ASC;")
            return [UserProfile(*row) for row in cur.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(str(e)) from e

# ------------------------------
# Legacy users.txt import
# ------------------------------

def parse_legacy_line(line: str) -> Optional[UserProfile]:
    """Parse ``name bestWPM bestAcc tests endurance avgAcc totalChars totalCorrect``.

    Lines with fewer than four fields are skipped. Files written before the
    totals existed get them estimated from the test count and best accuracy.
    """
    parts = line.split()
    if len(parts) < 4:
        return None
    converters = (str, float, float, int, int, float, int, int)
    values = []
    try:
        for conv, raw in zip(converters, parts):
            values.append(conv(raw))
    except ValueError:
        return None
    profile = UserProfile(*values)

    if profile.total_chars_typed == 0 and profile.tests_completed > 0:
        profile.total_chars_typed = 200 * profile.tests_completed
        profile.total_correct_chars = int(profile.total_chars_typed * (profile.best_accuracy / 100.0))
        profile.average_accuracy = profile.best_accuracy * 0.9
    return profile

def import_legacy(store: ProfileStore, path: str) -> int:
    try:
        with open(path, "r", encoding="utf-8") as f:
            lines = f.readlines()
    except OSError as e:
        raise StoreError(f"cannot read legacy users file {path}: {e}") from e
    count = 0
    for line in lines:
        profile = parse_legacy_line(line)
        if profile is None:
            if line.strip():
                log.warning("skipping malformed legacy record: %r", line.strip())
            continue
        store.save(profile)
        count += 1
    log.info("imported %d legacy profiles from %s", count, path)
    return count

# ------------------------------
# Exports
# ------------------------------

def export_json(store: ProfileStore, path: str):
    data = {"users": [p.to_dict() for p in store.all_profiles()]}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    print(f"JSON exported -> {path}")

def export_csv(store: ProfileStore, path: str):
    profiles = store.all_profiles()
    if not profiles:
        print("No profiles to export.")
        return
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(FIELDS))
        w.writeheader()
        for p in profiles:
            w.writerow(p.to_dict())
    print(f"CSV exported -> {path}")
