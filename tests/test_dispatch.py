"""Tests for key bindings."""

from sony_monitor_remote.dispatch import (
    resolve_action,
    get_help_text,
    ToggleAction,
    InfoButtonAction,
    KnobAdjustAction,
    QuitAction,
    KEY_BINDINGS,
)
from sony_monitor_remote.input_decoder import Key, ENTER, ARROW_UP, ARROW_DOWN, KnobChoice


def test_toggle_keys():
    """p and a toggle power and aspect."""
    assert resolve_action(Key("p")) == ToggleAction("POWER")
    assert resolve_action(Key("a")) == ToggleAction("ASPECT")
    assert resolve_action(Key("a")).build_frame().payload == b"STATset ASPECT TOGGLE"


def test_menu_navigation():
    """m, Enter and the arrows drive the menu."""
    assert resolve_action(Key("m")) == InfoButtonAction("MENU")
    assert resolve_action(ENTER) == InfoButtonAction("MENUENT")
    assert resolve_action(ARROW_UP) == InfoButtonAction("MENUUP")
    assert resolve_action(ARROW_DOWN).build_frame().payload == b"INFObutton MENUDOWN "


def test_digits_and_delete():
    """Digits and delete are info buttons."""
    assert resolve_action(Key("7")) == InfoButtonAction("NUM7")
    assert resolve_action(Key("d")) == InfoButtonAction("DELETE")
    assert resolve_action(Key("\x7f")) == InfoButtonAction("DELETE")


def test_knob_and_quit():
    """+/- adjust knobs and q quits."""
    assert resolve_action(Key("+")) == KnobAdjustAction(1)
    assert resolve_action(Key("-")) == KnobAdjustAction(-1)
    assert isinstance(resolve_action(Key("q")), QuitAction)


def test_unbound():
    """Unbound keys and knob choices have no action."""
    assert resolve_action(None) is None
    assert resolve_action(Key("z")) is None
    assert resolve_action(KnobChoice("p")) is None


def test_all_bindings_build_valid_frames():
    """Every toggle and button binding names a known operand."""
    for action in KEY_BINDINGS.values():
        if isinstance(action, (ToggleAction, InfoButtonAction)):
            frame = action.build_frame()
            assert frame.is_valid
            assert action.description


def test_help_text():
    """Help lists the main keys."""
    text = get_help_text()
    assert text.startswith("Supported keys:")
    assert "p - Power toggle" in text
    assert "a - Aspect ratio 16:9 toggle" in text
    assert "Arrow-up" in text
    assert "0-9 - Digit entry" in text
    assert "k - Select knob" in text
