# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""Constants used by sony_monitor_remote"""

DEFAULT_HOST = "192.168.0.1"
"""The factory default IP address of the monitor's control interface."""

DEFAULT_PORT = 53484
"""The listen port number used by the monitor for TCP/IP control."""

DEFAULT_TIMEOUT = 5.0
"""The default timeout for connecting and for each send/receive on the socket, in seconds."""

POLL_INTERVAL = 0.5
"""Seconds slept between control loop iterations. This is both the status polling
   cadence and the upper bound on keyboard input latency."""

EXIT_OK = 0
"""Process exit code after the user quits."""

EXIT_SOCKET_FAILURE = 1
"""Process exit code when a socket could not be created."""

EXIT_CONNECT_FAILURE = 2
"""Process exit code when the monitor could not be connected to."""

EXIT_TRANSPORT_FAILURE = 3
"""Process exit code when a send or receive fails during the control loop."""

EXIT_INTERRUPTED = 130
"""Process exit code when the session is interrupted with Ctrl-C (128 + SIGINT)."""
