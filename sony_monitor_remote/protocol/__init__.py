# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Low-level protocol definitions for Sony monitors controlled over TCP/IP.

Frames are a fixed "SONY" header, a length byte, and ASCII command text.
"""

from .constants import (
    FRAME_HEADER,
    HEADER_LENGTH,
    MAX_PAYLOAD_LENGTH,
    ACTION_REPLY_LENGTH,
    STATUS_REPLY_LENGTH,
    STATUS_WORD_COUNT,
    INFO_BUTTON,
    INFO_KNOB,
    STATUS_SET,
    STATUS_GET,
  )

from .button_meta import (
    ButtonMeta,
    button_metas,
    get_category_names,
    name_to_button_meta,
  )

from .frame import (
    CommandFrame,
    build_info_button_frame,
    build_status_toggle_frame,
    build_knob_adjust_frame,
    build_status_poll_frame,
    STATUS_POLL_FRAME,
  )

from .status_reply import (
    STATUS_WORD_WINDOWS,
    parse_status_reply,
    build_status_reply,
  )

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

from .status import MonitorStatus
