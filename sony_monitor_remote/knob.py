# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Knob controller.

The monitor has four emulated analog knobs that are turned with directional
pulses rather than set to absolute values. The controller remembers which
knob the +/- keys currently turn.
"""

from __future__ import annotations

from enum import Enum

from .internal_types import *
from .pkg_logging import logger
from .protocol import CommandFrame, build_knob_adjust_frame

class KnobSelection(Enum):
    """A knob, by its name on the wire."""
    NONE = None
    PHASE = "R PHASE"
    CHROMA = "R CHROMA"
    BRIGHTNESS = "R BRIGHTNESS"
    CONTRAST = "R CONTRAST"

    @property
    def label(self) -> str:
        return "-" if self is KnobSelection.NONE else self.name

KNOB_SELECT_KEYS: Dict[str, KnobSelection] = {
    'p': KnobSelection.PHASE,
    'c': KnobSelection.CHROMA,
    'b': KnobSelection.BRIGHTNESS,
    't': KnobSelection.CONTRAST,
  }
"""Keys that choose a knob while knob selection is armed."""

class KnobController:
    """Holds the current knob selection and builds adjustment frames.

    The selection persists until another choice is made.
    """
    selection: KnobSelection
    changed: bool
    """True if the selection changed since clear_changed() was last called."""

    def __init__(self, selection: KnobSelection=KnobSelection.NONE):
        self.selection = selection
        self.changed = False

    def choose(self, char: str) -> KnobSelection:
        """Applies the key pressed while knob selection was armed.

        A knob select key chooses that knob; any other key deselects.
        """
        new_selection = KNOB_SELECT_KEYS.get(char, KnobSelection.NONE)
        if new_selection != self.selection:
            logger.debug(f"Knob selection changed from {self.selection.label} to {new_selection.label}")
            self.selection = new_selection
            self.changed = True
        return self.selection

    def clear_changed(self) -> bool:
        """Returns the changed flag and clears it."""
        result = self.changed
        self.changed = False
        return result

    def adjust(self, direction: int, ticks: int=1) -> Optional[CommandFrame]:
        """Returns a frame that turns the selected knob, or None if no knob is selected."""
        if self.selection is KnobSelection.NONE:
            return None
        return build_knob_adjust_frame(self.selection.value, direction, ticks)

    def __str__(self) -> str:
        return f"KnobController({self.selection.label})"

    def __repr__(self) -> str:
        return str(self)
