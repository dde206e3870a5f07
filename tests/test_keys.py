import pytest

from ezgit.keys import KEY_GUIDE, Action, TextInput, decode_key
from ezgit.state import InputMode


@pytest.mark.parametrize(
    "key, expected",
    [
        ("q", Action.QUIT),
        ("r", Action.REFRESH),
        ("up", Action.NAVIGATE_UP),
        ("down", Action.NAVIGATE_DOWN),
        ("enter", Action.SELECT),
        ("tab", Action.SWITCH_PANEL),
        ("escape", Action.DESELECT),
        ("c", Action.COMMIT_WORK),
        ("question_mark", Action.SHOW_KEY_GUIDE),
        ("pagedown", Action.PAGE_DOWN),
    ],
)
def test_command_mode_keys(key, expected):
    assert decode_key(key, None, InputMode.COMMAND) is expected


def test_unknown_command_key_is_dropped():
    assert decode_key("z", "z", InputMode.COMMAND) is None


def test_text_mode_captures_characters():
    assert decode_key("q", "q", InputMode.TEXT) == TextInput("q")
    assert decode_key("space", " ", InputMode.TEXT) == TextInput(" ")
    assert decode_key("enter", "\r", InputMode.TEXT) is Action.CONFIRM
    assert decode_key("escape", "\x1b", InputMode.TEXT) is Action.CANCEL
    assert decode_key("backspace", "\x08", InputMode.TEXT) is Action.BACKSPACE
    assert decode_key("tab", "\t", InputMode.TEXT) is None
    assert decode_key("up", None, InputMode.TEXT) is None


def test_key_guide_lists_quit():
    assert ("q", "Quit") in KEY_GUIDE
