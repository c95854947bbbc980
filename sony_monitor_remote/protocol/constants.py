# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Wire format constants for the Sony monitor control protocol.

Every frame, in either direction, has the layout:

    03 0B 'S' 'O' 'N' 'Y' 00 00 00 B0 00 00 <length> <payload...>

where <payload> is <length> bytes of ASCII command text.
"""

from __future__ import annotations

FRAME_HEADER = bytes([0x03, 0x0B, 0x53, 0x4F, 0x4E, 0x59, 0x00, 0x00, 0x00, 0xB0, 0x00, 0x00])
"""The fixed 12-byte header that begins every frame."""

HEADER_LENGTH = len(FRAME_HEADER)

LENGTH_BYTE_OFFSET = HEADER_LENGTH
"""Offset of the single payload length byte."""

PAYLOAD_OFFSET = HEADER_LENGTH + 1
"""Offset of the first payload byte."""

MAX_PAYLOAD_LENGTH = 255
"""The length byte limits payloads to 255 bytes."""

ACTION_REPLY_LENGTH = 13
"""Size of the acknowledgment the monitor sends for every button, toggle or knob frame."""

STATUS_REPLY_LENGTH = 53
"""Size of the reply the monitor sends for a status poll."""

STATUS_WORD_COUNT = 5
"""Number of 16-bit status words in a status reply."""

STATUS_DIGIT_BASE = 0x30
"""Each status nibble is sent as a single byte, offset by this value. Note that
   nibbles 0xA..0xF are sent as ':' .. '?', not as ASCII hex letters."""

STATUS_DIGITS_PER_WORD = 4

INFO_BUTTON = "INFObutton"
"""Category token for menu, navigation and digit entry buttons."""

INFO_KNOB = "INFOknob"
"""Category token for knob adjustment pulses."""

STATUS_SET = "STATset"
"""Category token for device setting changes."""

STATUS_GET = "STATget"
"""Category token for status queries."""

STATUS_RET = "STATret"
"""Category token of a status reply."""

TOGGLE = "TOGGLE"
"""Operand suffix of a STATset frame; device settings are only ever toggled."""

KNOB_SCALE = 96
"""First field of a knob operand, "96/<direction>/<ticks>"."""

STATUS_POLL_PAYLOAD = b"STATget CURRENT 5\x00"
"""Requests all five status words. The trailing NUL is counted by the length byte."""
