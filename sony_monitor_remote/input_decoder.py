# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Keyboard input decoder.

Turns a stream of single bytes read from a raw, non-blocking terminal into
resolved input events. Decoding is a pure reducer,

    decode_byte(state, byte) -> (state, Optional[event])

with two layers of state:

  - The escape layer recognizes "ESC [ A" and "ESC [ B" (arrow up/down).
  - The outer mode layer implements knob selection: the "k" key arms
    KNOB_SELECT_PENDING, and the next resolved key is reported as a
    KnobChoice instead of an ordinary Key.

There is no timeout on a partially received escape sequence. If the rest of
the sequence has not arrived by the next poll, whatever byte arrives next is
treated as its continuation.
"""

from __future__ import annotations

from enum import Enum
from dataclasses import dataclass

from .internal_types import *

ESC = 0x1B
LEFT_BRACKET = 0x5B
NEWLINE = 0x0A
ARROW_UP_CODE = 0x41
ARROW_DOWN_CODE = 0x42

KNOB_SELECT_KEY = 'k'
"""Key that arms knob selection for the next keystroke."""

class EscapeState(Enum):
    NORMAL = "normal"
    AWAITING_BRACKET = "awaiting_bracket"
    AWAITING_DIRECTION = "awaiting_direction"

class InputMode(Enum):
    NORMAL = "normal"
    KNOB_SELECT_PENDING = "knob_select_pending"

@dataclass(frozen=True)
class InputState:
    """Complete decoder state between bytes."""
    escape: EscapeState = EscapeState.NORMAL
    mode: InputMode = InputMode.NORMAL

INITIAL_STATE = InputState()

@dataclass(frozen=True)
class Key:
    """A printable (or otherwise unremarkable) key."""
    char: str

@dataclass(frozen=True)
class Enter:
    pass

@dataclass(frozen=True)
class ArrowUp:
    pass

@dataclass(frozen=True)
class ArrowDown:
    pass

@dataclass(frozen=True)
class KnobSelectArmed:
    """The knob select key was pressed; the next key chooses a knob."""
    pass

@dataclass(frozen=True)
class KnobChoice:
    """The key pressed while knob selection was armed."""
    char: str

InputEvent = Union[Key, Enter, ArrowUp, ArrowDown, KnobSelectArmed, KnobChoice]

ENTER = Enter()
ARROW_UP = ArrowUp()
ARROW_DOWN = ArrowDown()
KNOB_SELECT_ARMED = KnobSelectArmed()

def decode_escape(escape: EscapeState, byte: int) -> Tuple[EscapeState, Optional[InputEvent]]:
    """Reducer for the escape layer alone. Emits Key, Enter, ArrowUp or ArrowDown."""
    if escape == EscapeState.AWAITING_BRACKET:
        if byte == LEFT_BRACKET:
            return EscapeState.AWAITING_DIRECTION, None
        # aborted sequence; the byte is swallowed
        return EscapeState.NORMAL, None

    if escape == EscapeState.AWAITING_DIRECTION:
        if byte == ARROW_UP_CODE:
            return EscapeState.NORMAL, ARROW_UP
        if byte == ARROW_DOWN_CODE:
            return EscapeState.NORMAL, ARROW_DOWN
        return EscapeState.NORMAL, None

    if byte == ESC:
        return EscapeState.AWAITING_BRACKET, None
    if byte == NEWLINE:
        return EscapeState.NORMAL, ENTER
    return EscapeState.NORMAL, Key(chr(byte))

def decode_byte(state: InputState, byte: Optional[int]) -> Tuple[InputState, Optional[InputEvent]]:
    """Feeds one byte (or None if no input was available) through the decoder.

    Returns the new state and the resolved event, if any.
    """
    if byte is None:
        return state, None

    escape, event = decode_escape(state.escape, byte)
    mode = state.mode
    if isinstance(event, Key):
        if mode == InputMode.KNOB_SELECT_PENDING:
            # consumes exactly one key, whatever it is
            mode = InputMode.NORMAL
            event = KnobChoice(event.char)
        elif event.char == KNOB_SELECT_KEY:
            mode = InputMode.KNOB_SELECT_PENDING
            event = KNOB_SELECT_ARMED
    return InputState(escape=escape, mode=mode), event

class InputDecoder:
    """Stateful wrapper around decode_byte()."""
    state: InputState

    def __init__(self, state: InputState=INITIAL_STATE):
        self.state = state

    @property
    def knob_select_pending(self) -> bool:
        return self.state.mode == InputMode.KNOB_SELECT_PENDING

    def feed(self, byte: Optional[int]) -> Optional[InputEvent]:
        self.state, event = decode_byte(self.state, byte)
        return event

    def feed_all(self, data: bytes) -> List[InputEvent]:
        """Feeds several bytes and returns all resolved events, in order."""
        result: List[InputEvent] = []
        for byte in data:
            event = self.feed(byte)
            if not event is None:
                result.append(event)
        return result

    def reset(self) -> None:
        self.state = INITIAL_STATE
