"""Tests for command frame building."""

import pytest

from sony_monitor_remote.exceptions import SonyMonitorError
from sony_monitor_remote.protocol import (
    CommandFrame,
    FRAME_HEADER,
    HEADER_LENGTH,
    STATUS_SET,
    build_info_button_frame,
    build_status_toggle_frame,
    build_knob_adjust_frame,
    build_status_poll_frame,
    get_category_names,
)


def test_header_constant():
    """The header is the fixed 12-byte SONY preamble."""
    assert FRAME_HEADER == b"\x03\x0bSONY\x00\x00\x00\xb0\x00\x00"
    assert HEADER_LENGTH == 12


def test_toggle_frame_bytes():
    """A power toggle matches the frame the monitor expects, byte for byte."""
    frame = build_status_toggle_frame("POWER")
    assert frame.raw_data == bytes([
        0x03, 0x0b, 0x53, 0x4f, 0x4e, 0x59, 0x00, 0x00, 0x00, 0xb0, 0x00, 0x00,
        0x14, 0x53, 0x54, 0x41, 0x54, 0x73, 0x65, 0x74, 0x20, 0x50, 0x4f, 0x57,
        0x45, 0x52, 0x20, 0x54, 0x4f, 0x47, 0x47, 0x4c, 0x45,
    ])


def test_toggle_frame_length_for_all_names():
    """Length byte is len(STATset)+len(name)+len(TOGGLE)+2 and the header never varies."""
    for name in get_category_names(STATUS_SET):
        frame = build_status_toggle_frame(name)
        assert frame.raw_data[:12] == FRAME_HEADER
        assert frame.payload_length == len("STATset") + len(name) + len("TOGGLE") + 2
        assert frame.payload_length == len(frame.payload)
        assert frame.payload == f"STATset {name} TOGGLE".encode("ascii")


def test_info_button_frames():
    """Info button payloads carry a trailing space."""
    menu = build_info_button_frame("MENU")
    assert menu.payload == b"INFObutton MENU "
    assert menu.payload_length == 0x10

    enter = build_info_button_frame("MENUENT")
    assert enter.payload == b"INFObutton MENUENT "
    assert enter.payload_length == 0x13

    down = build_info_button_frame("MENUDOWN")
    assert down.payload_length == 0x14
    assert down.category == "INFObutton"
    assert down.operand == "MENUDOWN "


def test_knob_adjust_frame():
    """Knob pulses are '96/<direction>/<ticks>'."""
    up = build_knob_adjust_frame("R CONTRAST", 1, 1)
    assert up.payload == b"INFOknob R CONTRAST 96/1/1"
    down = build_knob_adjust_frame("R PHASE", -1, 3)
    assert down.payload == b"INFOknob R PHASE 96/-1/3"
    assert down.operand == "R PHASE 96/-1/3"


def test_knob_adjust_invalid():
    """Bad knob names, directions and tick counts are rejected."""
    with pytest.raises(SonyMonitorError):
        build_knob_adjust_frame("R VOLUME", 1, 1)
    with pytest.raises(SonyMonitorError):
        build_knob_adjust_frame("R PHASE", 0, 1)
    with pytest.raises(SonyMonitorError):
        build_knob_adjust_frame("R PHASE", 1, 0)


def test_unknown_button_names():
    """Names not known for a category raise."""
    with pytest.raises(SonyMonitorError):
        build_status_toggle_frame("MENU")
    with pytest.raises(SonyMonitorError):
        build_info_button_frame("POWER")


def test_status_poll_frame():
    """The status poll is the constant 31-byte STATget CURRENT 5 frame."""
    frame = build_status_poll_frame()
    assert len(frame.raw_data) == 31
    assert frame.payload_length == 0x12
    assert frame.payload == b"STATget CURRENT 5\x00"
    assert frame.text == "STATget CURRENT 5"
    assert build_status_poll_frame() is frame


def test_from_bytes_validates():
    """Received frames must have the right header and length byte."""
    frame = build_info_button_frame("MENU")
    assert CommandFrame.from_bytes(frame.raw_data) == frame

    bad_header = bytearray(frame.raw_data)
    bad_header[2] = ord("X")
    with pytest.raises(SonyMonitorError):
        CommandFrame.from_bytes(bytes(bad_header))

    with pytest.raises(SonyMonitorError):
        CommandFrame.from_bytes(frame.raw_data[:-1])

    with pytest.raises(SonyMonitorError):
        CommandFrame.from_bytes(FRAME_HEADER)


def test_payload_too_long():
    """Payloads must fit the single length byte."""
    with pytest.raises(SonyMonitorError):
        CommandFrame.from_payload("x" * 256)
    assert CommandFrame.from_payload("x" * 255).payload_length == 255


def test_frame_repr():
    """Frame repr shows the payload and the hex bytes."""
    r = repr(build_info_button_frame("MENU"))
    assert "INFObutton MENU" in r
    assert "03 0b 53" in r
