#!/usr/bin/env python3

"""
Sony monitor status word bit assignments.

A status poll returns five 16-bit words. Only w1, w3 and w4 have known bit
meanings; w2 and w5 are decoded but never interpreted. Bits without a name
here are preserved in the raw words.

There is no protocol implementation here; only metadata about the protocol.
"""
from __future__ import annotations

from ..internal_types import *

POWER_ON = 0x8000
ASPECT_16X9 = 0x0002
MONOCHROME = 0x0004
EXTERNAL_SYNC = 0x0008
H_DELAY = 0x0010
V_DELAY = 0x0020
UNDERSCAN = 0x0040

BLUE_ONLY = 0x0001
RED_CUTOFF = 0x0002
GREEN_CUTOFF = 0x0004
BLUE_CUTOFF = 0x0008

MANUAL_PHASE = 0x0001
MANUAL_CHROMA = 0x0002
MANUAL_BRIGHTNESS = 0x0004
MANUAL_CONTRAST = 0x0008

class StatusFlagMeta:
    """Metadata for a single named bit in a status word"""
    name: str
    """Python name of the flag, e.g. "aspect_16x9"."""

    word: int
    """Status word number, 1..5."""

    mask: int
    """Bit mask of the flag within the word."""

    toggle_name: Optional[str]
    """The STATset operand that toggles this flag, if any."""

    label: str
    """Short label used on the status line."""

    def __init__(self, name: str, word: int, mask: int, label: str, toggle_name: Optional[str]=None):
        self.name = name
        self.word = word
        self.mask = mask
        self.label = label
        self.toggle_name = toggle_name

    def is_set(self, words: Sequence[int]) -> bool:
        """Returns True iff the flag is set in a sequence of five status words"""
        return (words[self.word - 1] & self.mask) != 0

    def __str__(self) -> str:
        return f"StatusFlagMeta({self.name}: w{self.word} & 0x{self.mask:04x})"

    def __repr__(self) -> str:
        return str(self)

_F = StatusFlagMeta

# Order is the order flags appear on the status line.
_flag_metas: List[StatusFlagMeta] = [
    _F("powered_on", 1, POWER_ON, "PWR", "POWER"),
    _F("aspect_16x9", 1, ASPECT_16X9, "16:9", "ASPECT"),
    _F("monochrome", 1, MONOCHROME, "MONO", "MONO"),
    _F("external_sync", 1, EXTERNAL_SYNC, "EXT", "EXTSYNC"),
    _F("h_delay", 1, H_DELAY, "HDLY", "HDELAY"),
    _F("v_delay", 1, V_DELAY, "VDLY", "VDELAY"),
    _F("underscan", 1, UNDERSCAN, "USCAN", "UNDERSCAN"),
    _F("blue_only", 3, BLUE_ONLY, "BLUE", "BLUEONLY"),
    _F("red_cutoff", 3, RED_CUTOFF, "R-OFF", "RCUTOFF"),
    _F("green_cutoff", 3, GREEN_CUTOFF, "G-OFF", "GCUTOFF"),
    _F("blue_cutoff", 3, BLUE_CUTOFF, "B-OFF", "BCUTOFF"),
    _F("manual_phase", 4, MANUAL_PHASE, "M-PH", "MANPHASE"),
    _F("manual_chroma", 4, MANUAL_CHROMA, "M-CH", "MANCHROMA"),
    _F("manual_brightness", 4, MANUAL_BRIGHTNESS, "M-BR", "MANBRIGHT"),
    _F("manual_contrast", 4, MANUAL_CONTRAST, "M-CO", "MANCONTRAST"),
  ]

status_flag_metas: Dict[str, StatusFlagMeta] = {}
for _meta in _flag_metas:
    assert not _meta.name in status_flag_metas
    status_flag_metas[_meta.name] = _meta

def get_all_status_flags() -> List[StatusFlagMeta]:
    """Returns all named status flags, in display order"""
    return list(_flag_metas)

def is_powered_on(w1: int) -> bool:
    return (w1 & POWER_ON) != 0

def is_aspect_16x9(w1: int) -> bool:
    return (w1 & ASPECT_16X9) != 0

def is_monochrome(w1: int) -> bool:
    return (w1 & MONOCHROME) != 0

def is_external_sync(w1: int) -> bool:
    return (w1 & EXTERNAL_SYNC) != 0

def is_h_delay(w1: int) -> bool:
    return (w1 & H_DELAY) != 0

def is_v_delay(w1: int) -> bool:
    return (w1 & V_DELAY) != 0

def is_underscan(w1: int) -> bool:
    return (w1 & UNDERSCAN) != 0

def is_blue_only(w3: int) -> bool:
    return (w3 & BLUE_ONLY) != 0

def is_red_cutoff(w3: int) -> bool:
    return (w3 & RED_CUTOFF) != 0

def is_green_cutoff(w3: int) -> bool:
    return (w3 & GREEN_CUTOFF) != 0

def is_blue_cutoff(w3: int) -> bool:
    return (w3 & BLUE_CUTOFF) != 0

def is_manual_phase(w4: int) -> bool:
    return (w4 & MANUAL_PHASE) != 0

def is_manual_chroma(w4: int) -> bool:
    return (w4 & MANUAL_CHROMA) != 0

def is_manual_brightness(w4: int) -> bool:
    return (w4 & MANUAL_BRIGHTNESS) != 0

def is_manual_contrast(w4: int) -> bool:
    return (w4 & MANUAL_CONTRAST) != 0
