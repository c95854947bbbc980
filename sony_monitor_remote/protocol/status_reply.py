# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Layout of the fixed-size status reply.

A status reply is a normal frame carrying a 40-byte payload:

    <header> 0x28 "STATret CURRENT 1111 2222 3333 4444 5555"

where each of the five status words is four status digits. A status digit is
a nibble plus 0x30, most significant nibble first. Only the digit windows are
interpreted.
"""

from __future__ import annotations

from ..internal_types import *
from ..exceptions import MalformedReplyError
from .constants import (
    FRAME_HEADER,
    STATUS_REPLY_LENGTH,
    STATUS_WORD_COUNT,
    STATUS_DIGIT_BASE,
    STATUS_DIGITS_PER_WORD,
    STATUS_RET,
  )

STATUS_WORD_OFFSETS: Tuple[int, ...] = (29, 34, 39, 44, 49)
"""Byte offset of the first status digit of w1..w5 within the reply."""

STATUS_WORD_WINDOWS: Dict[int, slice] = dict(
    (i + 1, slice(offset, offset + STATUS_DIGITS_PER_WORD))
        for i, offset in enumerate(STATUS_WORD_OFFSETS)
  )
"""Map of status word number (1..5) to the byte window holding its digits."""

_REPLY_PREFIX = f"{STATUS_RET} CURRENT ".encode('ascii')

assert len(STATUS_WORD_WINDOWS) == STATUS_WORD_COUNT
assert STATUS_WORD_WINDOWS[STATUS_WORD_COUNT].stop == STATUS_REPLY_LENGTH

def decode_status_digits(digits: bytes) -> int:
    """Decodes four status digits into a 16-bit word.

    Raises MalformedReplyError if any digit is outside 0x30..0x3F.
    """
    result = 0
    for digit in digits:
        nibble = digit - STATUS_DIGIT_BASE
        if not 0 <= nibble <= 0xF:
            raise MalformedReplyError(f"Invalid status digit 0x{digit:02x} in {digits!r}")
        result = (result << 4) | nibble
    return result

def encode_status_digits(word: int) -> bytes:
    """Encodes a 16-bit word as four status digits."""
    if not 0 <= word <= 0xFFFF:
        raise ValueError(f"Status word out of range: {word}")
    return bytes(
        STATUS_DIGIT_BASE + ((word >> shift) & 0xF)
            for shift in (12, 8, 4, 0)
      )

def parse_status_reply(raw_data: bytes) -> StatusWords:
    """Decodes the five status words from a 53-byte status reply.

    Raises MalformedReplyError if the reply is not exactly 53 bytes or if
    any status digit is out of range.
    """
    if len(raw_data) != STATUS_REPLY_LENGTH:
        raise MalformedReplyError(
            f"Status reply must be {STATUS_REPLY_LENGTH} bytes, got {len(raw_data)}: {bytes(raw_data).hex(' ')}",
            raw_data=bytes(raw_data))
    try:
        words = tuple(
            decode_status_digits(raw_data[STATUS_WORD_WINDOWS[i]])
                for i in range(1, STATUS_WORD_COUNT + 1)
          )
    except MalformedReplyError as e:
        e.raw_data = bytes(raw_data)
        raise
    return cast(StatusWords, words)

def build_status_reply(words: Sequence[int]) -> bytes:
    """Builds the 53-byte status reply the monitor sends for the given words."""
    if len(words) != STATUS_WORD_COUNT:
        raise ValueError(f"Expected {STATUS_WORD_COUNT} status words, got {len(words)}")
    payload = _REPLY_PREFIX + b' '.join(encode_status_digits(word) for word in words)
    result = FRAME_HEADER + bytes([len(payload)]) + payload
    assert len(result) == STATUS_REPLY_LENGTH
    return result
