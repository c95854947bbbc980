# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor client transport connectors.

A connector knows where a monitor is and how to reach it, and creates
connected transports on demand.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *
from .client_transport import SonyMonitorClientTransport
from .client_config import SonyMonitorClientConfig
from .tcp_client_transport import TcpSonyMonitorClientTransport

class SonyMonitorConnector(ABC):
    """Abstract base class for Sony monitor client transport connectors."""

    @abstractmethod
    def connect(self) -> SonyMonitorClientTransport:
        """Create and connect a client transport for the monitor associated
           with this connector.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

class TcpSonyMonitorConnector(SonyMonitorConnector):
    """Sony monitor TCP/IP client transport connector."""

    config: SonyMonitorClientConfig

    def __init__(
            self,
            host: Optional[str]=None,
            port: Optional[int]=None,
            timeout_secs: Optional[float] = None,
            config: Optional[SonyMonitorClientConfig]=None,
          ) -> None:
        """Creates a connector that can create transports to
           a Sony monitor that is reachable over TCP/IP.

              Args:
                host: The hostname or IPV4 address of the monitor.
                      may optionally be prefixed with "tcp://".
                      May be suffixed with ":<port>" to specify a
                      non-default port, which will override the port argument.
                      If None, the host will be taken from the config.
                port: The default TCP/IP port number to use. If None, the port
                      will be taken from the config.
                timeout_secs: The timeout for operations on the transport.
                        If None, the timeout will be taken from the config.
                config: A SonyMonitorClientConfig object that specifies
                        the default host, port, timeout, etc to use.
                        If None, a default config will be created.
        """
        super().__init__()
        self.config = SonyMonitorClientConfig(
            default_host=host,
            default_port=port,
            timeout_secs=timeout_secs,
            base_config=config
          )
        # validate the host specifier early
        self.config.host_and_port

    # @abstractmethod
    def connect(self) -> SonyMonitorClientTransport:
        """Create and connect a TCP/IP client transport.

        Raises SetupError if the socket cannot be created or connected.
        """
        host, port = self.config.host_and_port
        return TcpSonyMonitorClientTransport.create(
            host,
            port=port,
            timeout_secs=self.config.timeout_secs
          )

    def __str__(self) -> str:
        return f"TcpSonyMonitorConnector(host='{self.config.default_host}', port={self.config.default_port})"

    def __repr__(self) -> str:
        return str(self)
