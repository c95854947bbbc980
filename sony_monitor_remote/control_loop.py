# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
The interactive remote control loop.

Each iteration:

  1. polls the keyboard for at most one byte (never blocks),
  2. sends the frame bound to any resolved key and reads its acknowledgment,
  3. polls the monitor status,
  4. redraws the status line if anything visible changed,
  5. sleeps for the poll interval.

The socket is the only blocking resource, and only one request is ever
outstanding.
"""

from __future__ import annotations

import sys
import time

from .internal_types import *
from .constants import POLL_INTERVAL, EXIT_OK
from .exceptions import SonyMonitorError
from .pkg_logging import logger
from .protocol import CommandFrame, MonitorStatus
from .client import SonyMonitorClient
from .input_decoder import (
    InputDecoder,
    InputEvent,
    KnobChoice,
    KnobSelectArmed,
  )
from .knob import KnobController
from .dispatch import (
    resolve_action,
    QuitAction,
    KnobAdjustAction,
  )
from .display import StatusDisplay

class Keyboard(Protocol):
    def read_byte(self) -> Optional[int]:
        """Returns the next input byte, or None if none is available."""
        ...

class ControlLoop:
    """Runs the remote control session. Owns the client, and closes it on exit."""

    client: SonyMonitorClient
    keyboard: Keyboard
    display: StatusDisplay
    poll_interval_secs: float
    decoder: InputDecoder
    knob: KnobController
    sleep: Callable[[float], None]

    last_status: Optional[MonitorStatus] = None
    """The last status rendered while powered on. None after power off."""

    rendered_knob_select_pending: bool = False
    """Whether the last rendered line showed the knob select marker."""

    powered_off_shown: bool = False
    quit_requested: bool = False

    def __init__(
            self,
            client: SonyMonitorClient,
            keyboard: Keyboard,
            display: Optional[StatusDisplay]=None,
            poll_interval_secs: float=POLL_INTERVAL,
            sleep: Optional[Callable[[float], None]]=None,
          ):
        self.client = client
        self.keyboard = keyboard
        self.display = StatusDisplay() if display is None else display
        self.poll_interval_secs = poll_interval_secs
        self.decoder = InputDecoder()
        self.knob = KnobController()
        self.sleep = time.sleep if sleep is None else sleep

    def handle_event(self, event: Optional[InputEvent]) -> Optional[CommandFrame]:
        """Applies an input event to the loop state.

        Returns the frame to send, if the event maps to one.
        """
        if event is None or isinstance(event, KnobSelectArmed):
            return None
        if isinstance(event, KnobChoice):
            self.knob.choose(event.char)
            return None
        action = resolve_action(event)
        if action is None:
            logger.debug(f"Ignoring unbound input {event}")
            return None
        if isinstance(action, QuitAction):
            self.quit_requested = True
            return None
        if isinstance(action, KnobAdjustAction):
            return self.knob.adjust(action.direction)
        return action.build_frame()

    def refresh(self, status: MonitorStatus) -> bool:
        """Redraws the status line if needed. Returns True if it was redrawn."""
        knob_changed = self.knob.clear_changed()
        if not status.is_powered_on:
            # nothing but the power bit is meaningful
            self.last_status = None
            if self.powered_off_shown:
                return False
            self.display.render_powered_off()
            self.powered_off_shown = True
            self.rendered_knob_select_pending = False
            return True

        knob_select_pending = self.decoder.knob_select_pending
        if (
                status != self.last_status or
                knob_select_pending or
                knob_select_pending != self.rendered_knob_select_pending or
                knob_changed
            ):
            self.display.render_status(status, self.knob.selection, knob_select_pending)
            self.last_status = status
            self.rendered_knob_select_pending = knob_select_pending
            self.powered_off_shown = False
            return True
        return False

    def step(self) -> bool:
        """Runs one iteration, without the trailing sleep.

        Returns False if the user asked to quit. Raises TransportError if the
        monitor cannot be reached.
        """
        event = self.decoder.feed(self.keyboard.read_byte())
        frame = self.handle_event(event)
        if self.quit_requested:
            return False
        if not frame is None:
            self.client.send_action(frame)
        status = self.client.poll_status()
        self.refresh(status)
        return True

    def run(self) -> int:
        """Runs until the user quits or the connection fails.

        Returns the process exit code.
        """
        try:
            while self.step():
                self.sleep(self.poll_interval_secs)
        except SonyMonitorError as e:
            self.display.finish()
            logger.debug(f"Control loop failed: {e!r}")
            print(f"Error: {e}", file=sys.stderr)
            return e.exit_code
        self.display.finish()
        return EXIT_OK

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType]
          ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"ControlLoop({self.client})"

    def __repr__(self) -> str:
        return str(self)
