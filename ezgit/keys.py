from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .state import InputMode


class Action(Enum):
    QUIT = "quit"
    REFRESH = "refresh"
    NAVIGATE_UP = "navigate_up"
    NAVIGATE_DOWN = "navigate_down"
    NAVIGATE_LEFT = "navigate_left"
    NAVIGATE_RIGHT = "navigate_right"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    SELECT = "select"
    SWITCH_PANEL = "switch_panel"
    DESELECT = "deselect"
    COMMIT_WORK = "commit_work"
    CREATE_BRANCH = "create_branch"
    SHOW_KEY_GUIDE = "show_key_guide"
    MERGE_BRANCH = "merge_branch"
    BACKSPACE = "backspace"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class TextInput:
    character: str


AnyAction = Union[Action, TextInput]

COMMAND_KEYS = {
    "q": Action.QUIT,
    "r": Action.REFRESH,
    "up": Action.NAVIGATE_UP,
    "down": Action.NAVIGATE_DOWN,
    "left": Action.NAVIGATE_LEFT,
    "right": Action.NAVIGATE_RIGHT,
    "pageup": Action.PAGE_UP,
    "pagedown": Action.PAGE_DOWN,
    "enter": Action.SELECT,
    "tab": Action.SWITCH_PANEL,
    "escape": Action.DESELECT,
    "c": Action.COMMIT_WORK,
    "b": Action.CREATE_BRANCH,
    "g": Action.SHOW_KEY_GUIDE,
    "question_mark": Action.SHOW_KEY_GUIDE,
    "m": Action.MERGE_BRANCH,
}

TEXT_KEYS = {
    "backspace": Action.BACKSPACE,
    "enter": Action.CONFIRM,
    "escape": Action.CANCEL,
}

KEY_GUIDE = [
    ("↑/↓", "Move selection, or scroll commit details"),
    ("PgUp/PgDn", "Page through the focused list"),
    ("←/→", "Scroll the commit log horizontally"),
    ("Tab", "Switch between commit log and branches"),
    ("Enter", "Show commit details / check out branch / confirm"),
    ("Esc", "Go back / cancel"),
    ("r", "Refresh commit log and branches"),
    ("c", "Commit all changes and push"),
    ("b", "Create and switch to a new branch"),
    ("m", "Merge the current branch into main/master"),
    ("g, ?", "Show this guide"),
    ("q", "Quit"),
]


def decode_key(
    key: str, character: Optional[str], input_mode: InputMode
) -> Optional[AnyAction]:
    """Translate a terminal key into an abstract action for ``input_mode``."""
    if input_mode is InputMode.TEXT:
        if key in TEXT_KEYS:
            return TEXT_KEYS[key]
        if character and character.isprintable():
            return TextInput(character)
        return None
    return COMMAND_KEYS.get(key)
