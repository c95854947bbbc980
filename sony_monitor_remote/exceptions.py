#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Exceptions defined by this package"""

from typing import Optional

from .constants import EXIT_TRANSPORT_FAILURE

class SonyMonitorError(Exception):
    """Base class for all error exceptions defined by this package."""
    exit_code: int = EXIT_TRANSPORT_FAILURE
    """The process exit code used when this error ends a remote session."""

class SetupError(SonyMonitorError):
    """The connection to the monitor could not be established.

    exit_code distinguishes socket creation failures from connect failures.
    """

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code

class TransportError(SonyMonitorError):
    """A send or receive on an established connection failed or came up short.

    The transport is unusable after this error is raised.
    """
    pass

class MalformedReplyError(TransportError):
    """A status reply was not exactly the expected size, or contained a
       status digit outside the valid range."""

    def __init__(self, message: str, raw_data: Optional[bytes]=None):
        super().__init__(message)
        self.raw_data = raw_data
