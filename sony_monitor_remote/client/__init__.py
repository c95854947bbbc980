# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor TCP/IP client.
"""

from .client_transport import SonyMonitorClientTransport
from .tcp_client_transport import TcpSonyMonitorClientTransport
from .client_config import SonyMonitorClientConfig, parse_host_and_port
from .connector import SonyMonitorConnector, TcpSonyMonitorConnector
from .client_impl import (
    SonyMonitorClient,
    sony_monitor_connect,
  )
