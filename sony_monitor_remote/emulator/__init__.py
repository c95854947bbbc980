# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor emulator.

Provides a simple emulation of a Sony monitor on TCP/IP.
"""

from .emulator_impl import (
    MonitorEmulator,
    MonitorEmulatorState,
    ACTION_REPLY,
    DEFAULT_STATUS_WORDS,
  )
