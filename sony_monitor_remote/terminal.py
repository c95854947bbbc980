# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Raw keyboard access for the remote control.

Puts the terminal in unbuffered, unechoed mode and polls it for input with
a zero-timeout select, so the file descriptor itself stays blocking. The
original settings are restored on exit.
"""

from __future__ import annotations

import os
import sys
import select
import termios

from .internal_types import *
from .pkg_logging import logger

class RawTerminal:
    """A context manager giving non-blocking single-byte reads from a tty.

    Canonical mode and echo are turned off; signal keys such as Ctrl-C still work.
    """
    fd: int
    saved_attrs: Optional[List[Any]] = None

    def __init__(self, fd: Optional[int]=None):
        self.fd = sys.stdin.fileno() if fd is None else fd

    def open(self) -> None:
        if os.isatty(self.fd):
            self.saved_attrs = termios.tcgetattr(self.fd)
            attrs = termios.tcgetattr(self.fd)
            attrs[3] &= ~(termios.ICANON | termios.ECHO)
            attrs[6][termios.VMIN] = 1
            attrs[6][termios.VTIME] = 0
            termios.tcsetattr(self.fd, termios.TCSANOW, attrs)
        else:
            logger.debug(f"fd {self.fd} is not a tty; reading it as is")

    def restore(self) -> None:
        """Restores the original terminal settings. Safe to call more than once."""
        if self.saved_attrs is not None:
            termios.tcsetattr(self.fd, termios.TCSANOW, self.saved_attrs)
            self.saved_attrs = None

    def read_byte(self) -> Optional[int]:
        """Returns the next input byte, or None if no input is waiting."""
        readable, _, _ = select.select([self.fd], [], [], 0)
        if len(readable) == 0:
            return None
        data = os.read(self.fd, 1)
        if len(data) == 0:
            # end of input
            return None
        return data[0]

    def __enter__(self) -> Self:
        try:
            self.open()
        except BaseException:
            self.restore()
            raise
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc_val: Optional[BaseException],
            exc_tb: Optional[TracebackType]
          ) -> None:
        self.restore()
