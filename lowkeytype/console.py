from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

# ------------------------------
# Key events
# ------------------------------

ESC = 27
BACKSPACE_CODES = (8, 127)

class KeyKind(enum.Enum):
    CHAR = "char"
    BACKSPACE = "backspace"
    CANCEL = "cancel"
    OTHER = "other"

@dataclass(frozen=True)
class KeyEvent:
    kind: KeyKind
    char: str = ""

    @classmethod
    def typed(cls, char: str) -> "KeyEvent":
        return cls(KeyKind.CHAR, char)

def classify_key(code: int, backspace_codes: Iterable[int] = BACKSPACE_CODES) -> KeyEvent:
    if code == ESC:
        return KeyEvent(KeyKind.CANCEL)
    if code in backspace_codes:
        return KeyEvent(KeyKind.BACKSPACE)
    if 32 <= code <= 126:
        return KeyEvent.typed(chr(code))
    return KeyEvent(KeyKind.OTHER)

# ------------------------------
# Terminal capabilities
# ------------------------------

class Color(enum.IntEnum):
    DEFAULT = 0
    GREEN = 1
    RED = 2
    YELLOW = 3
    CYAN = 4

class Terminal:
    """What the trainer needs from a screen and keyboard.

    Subclasses supply the primitives (``read_key``, ``set_color``,
    ``clear_screen``, ``console_width``, ``write``, ``render_prefix``); the
    prompts below are built on top of them.
    """

    def read_key(self) -> KeyEvent:
        raise NotImplementedError

    def set_color(self, color: Color) -> None:
        raise NotImplementedError

    def clear_screen(self) -> None:
        raise NotImplementedError

    def console_width(self) -> int:
        return 80

    def write(self, text: str) -> None:
        raise NotImplementedError

    def render_prefix(self, typed: Sequence[str], target: str, correctness: Sequence[bool]) -> None:
        raise NotImplementedError

    def say(self, *lines: str, color: Optional[Color] = None) -> None:
        if color is not None:
            self.set_color(color)
        for line in lines:
            self.write(line + "\n")
        if color is not None:
            self.set_color(Color.DEFAULT)

    def pause(self, prompt: str = "Press any key to continue...") -> None:
        self.write(prompt)
        self.read_key()
        self.write("\n")

    def show_target(self, target: str) -> None:
        self.say(target, "", color=Color.CYAN)
        self.pause("Press any key to start typing...")
        self.clear_screen()
        self.say(target, "", color=Color.CYAN)
        self.say("Begin typing:    Press ESC at anytime to Cancel")
