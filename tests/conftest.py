from __future__ import annotations
import random
from typing import List

import pytest

from lowkeytype.console import Color, KeyEvent, KeyKind, Terminal
from lowkeytype.context import TrainerContext
from lowkeytype.profile import UserProfile
from lowkeytype.store import ProfileStore
from lowkeytype.words import WordLists

def keys_for(text: str) -> List[KeyEvent]:
    return [KeyEvent.typed(ch) for ch in text]

BACKSPACE = KeyEvent(KeyKind.BACKSPACE)
CANCEL = KeyEvent(KeyKind.CANCEL)

class ScriptedTerminal(Terminal):
    """Feeds queued key events and records what would have been drawn."""

    def __init__(self, keys=()):
        self.keys = list(keys)
        self.output: List[str] = []
        self.renders = []
        self.targets: List[str] = []
        self.pauses = 0
        self.clears = 0

    def queue(self, keys):
        self.keys.extend(keys)

    def read_key(self) -> KeyEvent:
        if not self.keys:
            raise AssertionError("key script exhausted")
        return self.keys.pop(0)

    def set_color(self, color: Color) -> None:
        pass

    def clear_screen(self) -> None:
        self.clears += 1

    def write(self, text: str) -> None:
        self.output.append(text)

    def render_prefix(self, typed, target, correctness) -> None:
        self.renders.append(("".join(typed), list(correctness)))

    def pause(self, prompt: str = "") -> None:
        self.pauses += 1
        self.output.append(prompt)

    def show_target(self, target: str) -> None:
        self.targets.append(target)

    @property
    def text(self) -> str:
        return "".join(self.output)

class StepClock:
    def __init__(self, step: float = 1.0, start: float = 1000.0):
        self.now = start
        self.step = step

    def __call__(self) -> float:
        t = self.now
        self.now += self.step
        return t

@pytest.fixture
def store(tmp_path):
    s = ProfileStore(str(tmp_path / "profiles.db"))
    yield s
    s.close()

@pytest.fixture
def words_dir(tmp_path):
    d = tmp_path / "words"
    d.mkdir()
    (d / "wordbaseL.txt").write_text(" ".join(f"w{i}" for i in range(40)), encoding="utf-8")
    (d / "wordbaseM.txt").write_text("alpha beta gamma delta", encoding="utf-8")
    return d

@pytest.fixture
def make_ctx(store, words_dir):
    def _make(profile=None, terminal=None, clock=None):
        profile = profile or UserProfile(name="tester")
        store.save(profile)
        return TrainerContext(
            store=store,
            profile=profile,
            words=WordLists(str(words_dir)),
            terminal=terminal or ScriptedTerminal(),
            rng=random.Random(7),
            clock=clock or StepClock(),
        )
    return _make
