# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor client.

Sends button, setting and knob frames and polls status over a
SonyMonitorClientTransport.
"""

from __future__ import annotations

from ..internal_types import *
from ..constants import DEFAULT_PORT, DEFAULT_TIMEOUT
from ..pkg_logging import logger
from ..protocol import (
    CommandFrame,
    MonitorStatus,
    ACTION_REPLY_LENGTH,
    STATUS_REPLY_LENGTH,
    build_info_button_frame,
    build_status_toggle_frame,
    build_knob_adjust_frame,
    build_status_poll_frame,
  )

from .client_transport import SonyMonitorClientTransport
from .client_config import SonyMonitorClientConfig
from .connector import TcpSonyMonitorConnector
from .tcp_client_transport import TcpSonyMonitorClientTransport

class SonyMonitorClient:
    """Sony monitor client. Owns its transport and closes it on exit."""

    transport: SonyMonitorClientTransport

    def __init__(self, transport: SonyMonitorClientTransport):
        self.transport = transport

    def send_action(self, frame: CommandFrame) -> bytes:
        """Sends a button, setting or knob frame and reads its 13-byte acknowledgment.

        The acknowledgment carries nothing of interest; it is returned only for logging
        and tests.
        """
        logger.debug(f"{self}: Sending action {frame}")
        return self.transport.transact(frame, ACTION_REPLY_LENGTH)

    def poll_status(self) -> MonitorStatus:
        """Requests and decodes all five status words.

        Raises TransportError on a short reply and MalformedReplyError on a
        reply that cannot be decoded.
        """
        raw_reply = self.transport.transact(build_status_poll_frame(), STATUS_REPLY_LENGTH)
        try:
            return MonitorStatus.from_reply(raw_reply)
        except BaseException:
            self.transport.close()
            raise

    def toggle(self, name: str) -> bytes:
        """Toggles a device setting, e.g. "POWER"."""
        return self.send_action(build_status_toggle_frame(name))

    def press(self, name: str) -> bytes:
        """Presses an info button, e.g. "MENU"."""
        return self.send_action(build_info_button_frame(name))

    def turn_knob(self, knob_name: str, direction: int, ticks: int=1) -> bytes:
        """Turns a knob, e.g. "R CONTRAST", by ticks in direction +1 or -1."""
        return self.send_action(build_knob_adjust_frame(knob_name, direction, ticks))

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> Self:
        logger.debug(f"{self}: Entering context manager")
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType]
          ) -> None:
        logger.debug(f"{self}: Exiting context manager, exc={exc_val!r}")
        self.close()

    @classmethod
    def create(
            cls,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: float=DEFAULT_TIMEOUT,
          ) -> Self:
        """Connects to a monitor over TCP/IP. Raises SetupError on failure."""
        transport = TcpSonyMonitorClientTransport.create(
                host,
                port=port,
                timeout_secs=timeout_secs
              )
        try:
            self = cls(transport)
        except BaseException:
            transport.close()
            raise
        return self

    def __str__(self) -> str:
        return f"SonyMonitorClient({self.transport})"

    def __repr__(self) -> str:
        return str(self)

def sony_monitor_connect(
        host: Optional[str]=None,
        config: Optional[SonyMonitorClientConfig]=None
      ) -> SonyMonitorClient:
    """Create and connect a Sony monitor client from a configuration.

    Args:
        host: The hostname or IPV4 address of the monitor.
                may optionally be prefixed with "tcp://".
                May be suffixed with ":<port>" to specify a
                non-default port.
                If None, the host will be taken from the config.
        config: A SonyMonitorClientConfig object that specifies
                the default host, port, etc. to use.
                If None, a default config will be created.
    """
    connector = TcpSonyMonitorConnector(host=host, config=config)
    transport = connector.connect()
    try:
        client = SonyMonitorClient(transport)
    except BaseException:
        transport.close()
        raise
    return client
