# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Console status line.

The status line is rewritten in place with a carriage return; it never
scrolls. Help text is printed once, before the first status line.
"""

from __future__ import annotations

import sys

from .internal_types import *
from .knob import KnobSelection
from .protocol import MonitorStatus, get_all_status_flags

POWERED_OFF_LINE = "Monitor powered off"

def format_status_line(
        status: MonitorStatus,
        knob: KnobSelection=KnobSelection.NONE,
        knob_select_pending: bool=False,
      ) -> str:
    """Formats the status line for a powered-on monitor.

    Each named flag is shown as its label when set, or as dots of the same
    width when clear, so the line keeps a fixed layout.
    """
    fields: List[str] = []
    for meta in get_all_status_flags():
        if meta.name == "powered_on":
            continue
        fields.append(meta.label if meta.is_set(status.words) else "." * len(meta.label))
    knob_field = f"KNOB:{knob.label}"
    if knob_select_pending:
        knob_field += "?"
    return "ON " + " ".join(fields) + " " + knob_field

class StatusDisplay:
    """Writes the status line to a text stream."""
    stream: TextIO
    last_line: Optional[str] = None
    redraw_count: int = 0

    def __init__(self, stream: Optional[TextIO]=None):
        self.stream = sys.stdout if stream is None else stream

    def write_line(self, line: str) -> None:
        """Overwrites the current status line."""
        padding = ""
        if not self.last_line is None and len(self.last_line) > len(line):
            padding = " " * (len(self.last_line) - len(line))
        self.stream.write("\r" + line + padding)
        self.stream.flush()
        self.last_line = line
        self.redraw_count += 1

    def render_status(
            self,
            status: MonitorStatus,
            knob: KnobSelection=KnobSelection.NONE,
            knob_select_pending: bool=False,
          ) -> None:
        self.write_line(format_status_line(status, knob, knob_select_pending))

    def render_powered_off(self) -> None:
        self.write_line(POWERED_OFF_LINE)

    def print_text(self, text: str) -> None:
        """Prints static text, such as help, on lines of its own."""
        if not self.last_line is None:
            self.stream.write("\n")
            self.last_line = None
        self.stream.write(text)
        self.stream.flush()

    def finish(self) -> None:
        """Moves off the status line so later output starts on a fresh line."""
        if not self.last_line is None:
            self.stream.write("\n")
            self.stream.flush()
            self.last_line = None
