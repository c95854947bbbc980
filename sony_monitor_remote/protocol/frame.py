# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

from ..internal_types import *
from ..exceptions import SonyMonitorError
from .constants import (
    FRAME_HEADER,
    HEADER_LENGTH,
    PAYLOAD_OFFSET,
    MAX_PAYLOAD_LENGTH,
    INFO_BUTTON,
    INFO_KNOB,
    STATUS_SET,
    TOGGLE,
    KNOB_SCALE,
    STATUS_POLL_PAYLOAD,
  )
from .button_meta import name_to_button_meta

class CommandFrame:
    """A single frame sent to (or received from) a Sony monitor.

    A frame is the fixed 12-byte header, a length byte, and an ASCII payload:

        03 0B 53 4F 4E 59 00 00 00 B0 00 00 <length> <payload>

    The payload is command text of the form "<category> <operand>", e.g.
    "STATset POWER TOGGLE" or "INFObutton MENU ".
    """
    raw_data: bytes

    def __init__(self, raw_data: bytes):
        self.raw_data = bytes(raw_data)

    @property
    def header(self) -> bytes:
        """Returns the 12-byte header"""
        return self.raw_data[:HEADER_LENGTH]

    @property
    def payload_length(self) -> int:
        """Returns the value of the length byte"""
        return self.raw_data[HEADER_LENGTH]

    @property
    def payload(self) -> bytes:
        """Returns the payload bytes following the length byte"""
        return self.raw_data[PAYLOAD_OFFSET:]

    @property
    def text(self) -> str:
        """Returns the payload as text, without any trailing NUL"""
        return self.payload.rstrip(b'\x00').decode('ascii')

    @property
    def category(self) -> str:
        """Returns the category token, e.g. "STATset" """
        return self.text.split(' ', 1)[0]

    @property
    def operand(self) -> str:
        """Returns everything after the category token and its separator"""
        parts = self.text.split(' ', 1)
        return parts[1] if len(parts) > 1 else ''

    def validate(self) -> None:
        """Raises SonyMonitorError if the frame is not well formed"""
        if len(self.raw_data) < PAYLOAD_OFFSET:
            raise SonyMonitorError(f"Frame too short ({len(self.raw_data)} bytes): {self}")
        if self.header != FRAME_HEADER:
            raise SonyMonitorError(f"Invalid frame header {self.header.hex(' ')}: {self}")
        if self.payload_length != len(self.payload):
            raise SonyMonitorError(
                f"Frame length byte {self.payload_length} does not match payload length {len(self.payload)}: {self}")
        try:
            self.payload.decode('ascii')
        except UnicodeDecodeError as e:
            raise SonyMonitorError(f"Frame payload is not ASCII: {self}") from e

    @property
    def is_valid(self) -> bool:
        try:
            self.validate()
        except SonyMonitorError:
            return False
        return True

    @classmethod
    def from_payload(cls, payload: Union[str, bytes]) -> Self:
        """Creates a frame around an ASCII payload"""
        if isinstance(payload, str):
            payload = payload.encode('ascii')
        if len(payload) > MAX_PAYLOAD_LENGTH:
            raise SonyMonitorError(f"Frame payload too long ({len(payload)} bytes): {payload!r}")
        return cls(FRAME_HEADER + bytes([len(payload)]) + payload)

    @classmethod
    def from_bytes(cls, raw_data: bytes) -> Self:
        """Creates a frame from received bytes, and validates it"""
        result = cls(raw_data)
        result.validate()
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CommandFrame):
            return NotImplemented
        return self.raw_data == other.raw_data

    def __hash__(self) -> int:
        return hash(self.raw_data)

    def __str__(self) -> str:
        return f"CommandFrame({self.payload!r}: [{self.raw_data.hex(' ')}])"

    def __repr__(self) -> str:
        return str(self)

def build_info_button_frame(button_name: str) -> CommandFrame:
    """Builds an INFObutton frame for a menu, navigation, digit or delete button."""
    meta = name_to_button_meta(INFO_BUTTON, button_name)
    return CommandFrame.from_payload(f"{INFO_BUTTON} {meta.name} ")

def build_status_toggle_frame(button_name: str) -> CommandFrame:
    """Builds a STATset frame that flips a device setting.

    The protocol has no way to set an absolute value for these settings.
    """
    meta = name_to_button_meta(STATUS_SET, button_name)
    return CommandFrame.from_payload(f"{STATUS_SET} {meta.name} {TOGGLE}")

def build_knob_adjust_frame(knob_name: str, direction: int, ticks: int=1) -> CommandFrame:
    """Builds an INFOknob frame that turns a knob.

    Args:
        knob_name: The knob as named on the wire, e.g. "R CONTRAST".
        direction: +1 for clockwise, -1 for counter-clockwise.
        ticks:     The number of detents to turn.
    """
    meta = name_to_button_meta(INFO_KNOB, knob_name)
    if direction not in (1, -1):
        raise SonyMonitorError(f"Knob direction must be +1 or -1, got {direction}")
    if ticks < 1:
        raise SonyMonitorError(f"Knob ticks must be positive, got {ticks}")
    return CommandFrame.from_payload(f"{INFO_KNOB} {meta.name} {KNOB_SCALE}/{direction}/{ticks}")

STATUS_POLL_FRAME = CommandFrame.from_payload(STATUS_POLL_PAYLOAD)

def build_status_poll_frame() -> CommandFrame:
    """Returns the constant frame that requests all five status words."""
    return STATUS_POLL_FRAME
