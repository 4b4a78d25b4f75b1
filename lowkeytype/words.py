from __future__ import annotations
import logging
import random
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from lowkeytype.difficulty import Difficulty
from lowkeytype.errors import WordListError

log = logging.getLogger(__name__)

DEFAULT_WORDS_DIR = str(Path(__file__).resolve().parent / "wordlists")

# ------------------------------
# Word lists
# ------------------------------

def load_words_from_file(path: str) -> List[str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = f.read()
    except OSError as e:
        raise WordListError(f"could not open {path}: {e}") from e
    words = content.split()
    if not words:
        raise WordListError(f"no words found in {path}")
    log.info("loaded %d words from %s", len(words), path)
    return words

class WordLists:
    """Difficulty-tiered word files in one directory, loaded on first use."""

    def __init__(self, directory: str = DEFAULT_WORDS_DIR):
        self.directory = Path(directory)
        self._cache: Dict[Difficulty, List[str]] = {}

    def path_for(self, difficulty: Difficulty) -> Path:
        return self.directory / difficulty.filename

    def load(self, difficulty: Difficulty) -> List[str]:
        if difficulty not in self._cache:
            self._cache[difficulty] = load_words_from_file(str(self.path_for(difficulty)))
        return self._cache[difficulty]

# ------------------------------
# Sampling
# ------------------------------

def sample_words(pool: Sequence[str], count: int, rng: Optional[random.Random] = None) -> List[str]:
    """Pick ``count`` words, without repeats when the pool is big enough."""
    rng = rng or random.Random()
    if not pool or count <= 0:
        return []
    if count <= len(pool):
        return rng.sample(list(pool), count)
    return rng.choices(list(pool), k=count)

def build_text(words: Sequence[str]) -> str:
    return " ".join(words)
