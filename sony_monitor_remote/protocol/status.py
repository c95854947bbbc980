# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

from ..internal_types import *
from .status_reply import parse_status_reply, build_status_reply
from .status_meta import (
    StatusFlagMeta,
    status_flag_metas,
    get_all_status_flags,
    is_powered_on,
    is_aspect_16x9,
    is_monochrome,
    is_external_sync,
    is_h_delay,
    is_v_delay,
    is_underscan,
    is_blue_only,
    is_red_cutoff,
    is_green_cutoff,
    is_blue_cutoff,
    is_manual_phase,
    is_manual_chroma,
    is_manual_brightness,
    is_manual_contrast,
  )

class MonitorStatus:
    """The decoded result of one status poll.

    Holds the five raw status words. Two statuses are equal iff all five words
    are equal, including bits that have no known meaning.
    """
    words: StatusWords

    def __init__(self, words: Sequence[int]):
        if len(words) != 5:
            raise ValueError(f"Expected 5 status words, got {len(words)}")
        self.words = cast(StatusWords, tuple(words))

    @classmethod
    def from_reply(cls, raw_data: bytes) -> Self:
        """Decodes a 53-byte status reply. Raises MalformedReplyError on a bad reply."""
        return cls(parse_status_reply(raw_data))

    def to_reply(self) -> bytes:
        """Encodes the status as the 53-byte reply the monitor would send"""
        return build_status_reply(self.words)

    @property
    def w1(self) -> int:
        return self.words[0]

    @property
    def w2(self) -> int:
        return self.words[1]

    @property
    def w3(self) -> int:
        return self.words[2]

    @property
    def w4(self) -> int:
        return self.words[3]

    @property
    def w5(self) -> int:
        return self.words[4]

    @property
    def is_powered_on(self) -> bool:
        """When False, every other flag is meaningless."""
        return is_powered_on(self.w1)

    @property
    def is_aspect_16x9(self) -> bool:
        return is_aspect_16x9(self.w1)

    @property
    def is_monochrome(self) -> bool:
        return is_monochrome(self.w1)

    @property
    def is_external_sync(self) -> bool:
        return is_external_sync(self.w1)

    @property
    def is_h_delay(self) -> bool:
        return is_h_delay(self.w1)

    @property
    def is_v_delay(self) -> bool:
        return is_v_delay(self.w1)

    @property
    def is_underscan(self) -> bool:
        return is_underscan(self.w1)

    @property
    def is_blue_only(self) -> bool:
        return is_blue_only(self.w3)

    @property
    def is_red_cutoff(self) -> bool:
        return is_red_cutoff(self.w3)

    @property
    def is_green_cutoff(self) -> bool:
        return is_green_cutoff(self.w3)

    @property
    def is_blue_cutoff(self) -> bool:
        return is_blue_cutoff(self.w3)

    @property
    def is_manual_phase(self) -> bool:
        return is_manual_phase(self.w4)

    @property
    def is_manual_chroma(self) -> bool:
        return is_manual_chroma(self.w4)

    @property
    def is_manual_brightness(self) -> bool:
        return is_manual_brightness(self.w4)

    @property
    def is_manual_contrast(self) -> bool:
        return is_manual_contrast(self.w4)

    def is_set(self, flag: Union[str, StatusFlagMeta]) -> bool:
        """Returns True iff a named flag is set"""
        if isinstance(flag, str):
            flag = status_flag_metas[flag]
        return flag.is_set(self.words)

    def active_flags(self) -> List[StatusFlagMeta]:
        """Returns the named flags that are set, in display order"""
        return [meta for meta in get_all_status_flags() if meta.is_set(self.words)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MonitorStatus):
            return NotImplemented
        return self.words == other.words

    def __hash__(self) -> int:
        return hash(self.words)

    def __str__(self) -> str:
        return "MonitorStatus(" + " ".join(f"{w:04x}" for w in self.words) + ")"

    def __repr__(self) -> str:
        return str(self)
