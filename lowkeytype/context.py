from __future__ import annotations
import random
import time
from dataclasses import dataclass, field, replace
from typing import Callable, Optional

from lowkeytype.console import Terminal
from lowkeytype.profile import UserProfile
from lowkeytype.store import ProfileStore
from lowkeytype.words import WordLists

@dataclass
class TrainerContext:
    """Everything one signed-in user's sessions need, passed explicitly."""

    store: ProfileStore
    profile: UserProfile
    words: WordLists
    terminal: Optional[Terminal] = None
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], float] = time.time

    def with_terminal(self, terminal: Terminal) -> "TrainerContext":
        return replace(self, terminal=terminal)
