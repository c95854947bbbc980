# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Package sony_monitor_remote provides a terminal remote control and an API for
controlling Sony monitors via their proprietary TCP/IP protocol.
"""

from .version import __version__

from .pkg_logging import logger

from .internal_types import Jsonable, JsonableDict, StatusWords

from .exceptions import (
    SonyMonitorError,
    SetupError,
    TransportError,
    MalformedReplyError,
  )

from .constants import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, POLL_INTERVAL

from .protocol import (
    CommandFrame,
    MonitorStatus,
    build_info_button_frame,
    build_status_toggle_frame,
    build_knob_adjust_frame,
    build_status_poll_frame,
    parse_status_reply,
    build_status_reply,
  )

from .client import (
    SonyMonitorClient,
    SonyMonitorClientTransport,
    TcpSonyMonitorClientTransport,
    SonyMonitorConnector,
    TcpSonyMonitorConnector,
    SonyMonitorClientConfig,
    sony_monitor_connect,
  )

from .input_decoder import InputDecoder, decode_byte
from .knob import KnobController, KnobSelection
from .control_loop import ControlLoop
