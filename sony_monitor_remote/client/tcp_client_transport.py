# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor TCP/IP client transport.

Provides an implementation of SonyMonitorClientTransport over a blocking
TCP/IP socket.
"""

from __future__ import annotations

import socket

from ..internal_types import *
from ..exceptions import SetupError, TransportError
from ..constants import (
    DEFAULT_TIMEOUT,
    DEFAULT_PORT,
    EXIT_SOCKET_FAILURE,
    EXIT_CONNECT_FAILURE,
  )
from ..pkg_logging import logger
from ..protocol import CommandFrame

from .client_transport import SonyMonitorClientTransport

class TcpSonyMonitorClientTransport(SonyMonitorClientTransport):
    """Sony monitor TCP/IP client transport."""

    sock: Optional[socket.socket] = None
    host: str
    port: int
    timeout_secs: float
    closed: bool = False

    def __init__(
            self,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: float = DEFAULT_TIMEOUT
          ) -> None:
        """Initializes the transport. Does not connect.
        """
        super().__init__()
        self.host = host
        self.port = port
        self.timeout_secs = timeout_secs

    def _fail(self, exc: BaseException, message: str) -> TransportError:
        """Closes the transport and returns a TransportError to raise."""
        self.close()
        if isinstance(exc, TransportError):
            return exc
        result = TransportError(f"{self}: {message}: {exc}")
        result.__cause__ = exc
        return result

    def write_exactly(self, data: bytes) -> None:
        """Writes all of data to the monitor.

        On error, the transport will be closed, and no further interaction is possible.
        """
        if self.sock is None:
            raise TransportError(f"{self}: Not connected")
        try:
            logger.debug(f"Writing exactly {len(data)} bytes: {data.hex(' ')}")
            self.sock.sendall(data)
        except OSError as e:
            raise self._fail(e, "Send failed") from e

    def read_exactly(self, length: int) -> bytes:
        """Reads exactly length bytes from the monitor.

        A reply that ends early (the monitor closed the connection) is an error.
        On error, the transport will be closed, and no further interaction is possible.
        """
        if self.sock is None:
            raise TransportError(f"{self}: Not connected")
        data = bytearray()
        try:
            while len(data) < length:
                chunk = self.sock.recv(length - len(data))
                if len(chunk) == 0:
                    raise TransportError(
                        f"{self}: Connection closed by monitor after {len(data)} of {length} reply bytes: {data.hex(' ')}")
                data.extend(chunk)
        except OSError as e:
            raise self._fail(e, "Receive failed") from e
        except TransportError as e:
            raise self._fail(e, "Receive failed")
        logger.debug(f"Read exactly {len(data)} bytes: {data.hex(' ')}")
        return bytes(data)

    # @abstractmethod
    def transact(
            self,
            frame: CommandFrame,
            reply_length: int,
          ) -> bytes:
        """Sends a command frame and reads exactly reply_length bytes of reply."""
        self.write_exactly(frame.raw_data)
        return self.read_exactly(reply_length)

    # @abstractmethod
    def close(self) -> None:
        """Closes the socket. Has no effect if already closed."""
        if not self.closed:
            self.closed = True
            if self.sock is not None:
                logger.info(f"{self}: Closing connection")
                try:
                    self.sock.close()
                except OSError:
                    logger.debug("Exception while closing socket", exc_info=True)
                finally:
                    self.sock = None

    def connect(self) -> None:
        """Creates the socket and connects to the monitor.

        Raises SetupError with exit_code EXIT_SOCKET_FAILURE if the socket
        cannot be created, or EXIT_CONNECT_FAILURE if the connection fails.
        """
        assert self.sock is None and not self.closed
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as e:
            self.closed = True
            raise SetupError(f"Could not create socket: {e}", EXIT_SOCKET_FAILURE) from e
        try:
            sock.settimeout(self.timeout_secs)
            logger.debug(f"Connecting to monitor at {self.host}:{self.port}")
            sock.connect((self.host, self.port))
        except OSError as e:
            sock.close()
            self.closed = True
            raise SetupError(f"Could not connect to {self.host}:{self.port}: {e}", EXIT_CONNECT_FAILURE) from e
        self.sock = sock
        logger.info(f"{self}: Connected")

    @classmethod
    def create(
            cls,
            host: str,
            port: int=DEFAULT_PORT,
            timeout_secs: float=DEFAULT_TIMEOUT
          ) -> Self:
        """Creates and connects a transport to a Sony monitor that is
           reachable over TCP/IP.

              Args:
                host: The hostname or IPV4 address of the monitor.
                port: The TCP/IP port number to use.
                timeout_secs: The timeout for connecting and for each send or
                        receive on the transport.
        """
        transport = cls(host, port=port, timeout_secs=timeout_secs)
        transport.connect()
        return transport

    def __str__(self) -> str:
        return f"TcpSonyMonitorClientTransport({self.host}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
