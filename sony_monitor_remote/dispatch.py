# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Key bindings for the remote control.

Maps resolved input events to the actions they trigger. Events with no
binding are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass

from .internal_types import *
from .input_decoder import (
    InputEvent,
    Key,
    Enter,
    ArrowUp,
    ArrowDown,
    KNOB_SELECT_KEY,
  )
from .knob import KNOB_SELECT_KEYS
from .protocol import (
    CommandFrame,
    build_info_button_frame,
    build_status_toggle_frame,
    name_to_button_meta,
    INFO_BUTTON,
    STATUS_SET,
  )

QUIT_KEY = 'q'

@dataclass(frozen=True)
class ToggleAction:
    """Flip a device setting with a STATset frame."""
    name: str

    def build_frame(self) -> CommandFrame:
        return build_status_toggle_frame(self.name)

    @property
    def description(self) -> str:
        return f"{name_to_button_meta(STATUS_SET, self.name).description} toggle"

@dataclass(frozen=True)
class InfoButtonAction:
    """Press a menu, navigation, digit or delete button."""
    name: str

    def build_frame(self) -> CommandFrame:
        return build_info_button_frame(self.name)

    @property
    def description(self) -> str:
        return cast(str, name_to_button_meta(INFO_BUTTON, self.name).description)

@dataclass(frozen=True)
class KnobAdjustAction:
    """Turn the selected knob one tick."""
    direction: int

    @property
    def description(self) -> str:
        return "Turn selected knob " + ("clockwise" if self.direction > 0 else "counter-clockwise")

@dataclass(frozen=True)
class QuitAction:
    description: str = "Quit"

Action = Union[ToggleAction, InfoButtonAction, KnobAdjustAction, QuitAction]

KEY_BINDINGS: Dict[str, Action] = {
    'p': ToggleAction("POWER"),
    'a': ToggleAction("ASPECT"),
    'o': ToggleAction("MONO"),
    'x': ToggleAction("EXTSYNC"),
    'h': ToggleAction("HDELAY"),
    'v': ToggleAction("VDELAY"),
    'u': ToggleAction("UNDERSCAN"),
    'B': ToggleAction("BLUEONLY"),
    'R': ToggleAction("RCUTOFF"),
    'G': ToggleAction("GCUTOFF"),
    'C': ToggleAction("BCUTOFF"),
    'm': InfoButtonAction("MENU"),
    'd': InfoButtonAction("DELETE"),
    '\x7f': InfoButtonAction("DELETE"),
    **dict((str(i), InfoButtonAction(f"NUM{i}")) for i in range(10)),
    '+': KnobAdjustAction(1),
    '-': KnobAdjustAction(-1),
    QUIT_KEY: QuitAction(),
  }
"""Actions for ordinary keys."""

EVENT_BINDINGS: Dict[Type[Any], Action] = {
    Enter: InfoButtonAction("MENUENT"),
    ArrowUp: InfoButtonAction("MENUUP"),
    ArrowDown: InfoButtonAction("MENUDOWN"),
  }
"""Actions for the special keys."""

def resolve_action(event: Optional[InputEvent]) -> Optional[Action]:
    """Returns the action bound to an input event, or None if it is unbound."""
    if event is None:
        return None
    if isinstance(event, Key):
        return KEY_BINDINGS.get(event.char, None)
    return EVENT_BINDINGS.get(type(event), None)

def _key_label(char: str) -> str:
    if char == '\x7f':
        return "Delete"
    return char

def get_help_text() -> str:
    """Returns the key summary printed at startup."""
    lines: List[str] = ["Supported keys:"]
    for char, action in KEY_BINDINGS.items():
        if char.isdigit() and char != '0':
            continue
        if char == '0':
            lines.append("0-9 - Digit entry")
            continue
        lines.append(f"{_key_label(char)} - {action.description}")
    lines.append("Enter - Enter (menu)")
    lines.append("Arrow-up - Navigate up (menu)")
    lines.append("Arrow-down - Navigate down (menu)")
    knob_keys = "/".join(f"{char}={knob.name.lower()}" for char, knob in KNOB_SELECT_KEYS.items())
    lines.append(f"{KNOB_SELECT_KEY} - Select knob, then {knob_keys} (any other key deselects)")
    return "\n".join(lines) + "\n"
