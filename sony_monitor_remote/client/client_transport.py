# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor client abstract transport interface.

Provides a low-level abstract interface for sending command frames to a
Sony monitor and receiving its fixed-size replies. Does not provide any
higher-level abstractions such as status decoding.

The protocol is strictly half-duplex: one request is sent, then exactly one
reply of a known size is read before the next request. All operations block.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import CommandFrame


class SonyMonitorClientTransport(ABC):
    @abstractmethod
    def transact(
            self,
            frame: CommandFrame,
            reply_length: int,
          ) -> bytes:
        """Sends a command frame and reads exactly reply_length bytes of reply.

        Raises TransportError on any send or receive failure, including a
        short reply. After an error the transport is closed.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    @abstractmethod
    def close(self) -> None:
        """Closes the transport.

        Has no effect if the transport is already closed.

        Must be implemented by subclasses.
        """
        raise NotImplementedError()

    def __enter__(self) -> Self:
        """Enters a context that will close the transport on exit."""
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType],
          ) -> None:
        """Exits the context and closes the transport."""
        logger.debug(f"{self}: Exiting context, exc={exc!r}")
        self.close()
