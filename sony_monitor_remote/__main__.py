#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Command-line remote control for Sony monitors.
"""

from __future__ import annotations

import os
import sys
import logging
import argparse
import contextlib

from .internal_types import *
from .version import __version__ as pkg_version
from .constants import EXIT_OK, EXIT_INTERRUPTED, DEFAULT_PORT
from .exceptions import SonyMonitorError, SetupError
from .pkg_logging import logger
from .client import SonyMonitorClientConfig, sony_monitor_connect
from .control_loop import ControlLoop, Keyboard
from .display import StatusDisplay
from .dispatch import get_help_text
from .terminal import RawTerminal
from .emulator import MonitorEmulator

def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sony-monitor-remote",
        description="Remote control a Sony monitor over TCP/IP from the keyboard.")
    parser.add_argument('--version', action='version', version=f"%(prog)s {pkg_version}")
    parser.add_argument('--host', default=None,
        help="Monitor host name or IP address, optionally with ':<port>'. "
             "Default: $SONY_MONITOR_HOST or 192.168.0.1.")
    parser.add_argument('--port', type=int, default=None,
        help="Monitor TCP port. Default: $SONY_MONITOR_PORT or 53484.")
    parser.add_argument('--timeout', type=float, default=None,
        help="Timeout in seconds for connecting and for each send/receive.")
    parser.add_argument('--poll-interval', type=float, default=None,
        help="Seconds between status polls. Default: 0.5.")
    parser.add_argument('--config', default=None,
        help="JSON configuration file. Default: $SONY_MONITOR_CONFIG, if set.")
    parser.add_argument('--log-level', default='warning',
        choices=['debug', 'info', 'warning', 'error', 'critical'],
        help="Logging level for messages written to stderr. Default: warning.")
    parser.add_argument('--emulate', action='store_true',
        help="Start a local monitor emulator and connect to it.")
    return parser

def load_config(args: argparse.Namespace) -> SonyMonitorClientConfig:
    """Builds the client configuration from a config file and command line options."""
    base_config: Optional[SonyMonitorClientConfig] = None
    config_file: Optional[str] = args.config
    if config_file is None:
        config_file = os.environ.get('SONY_MONITOR_CONFIG')
    if config_file is not None and config_file != '':
        base_config = SonyMonitorClientConfig.from_file(config_file)
    return SonyMonitorClientConfig(
        default_host=args.host,
        default_port=args.port,
        timeout_secs=args.timeout,
        poll_interval_secs=args.poll_interval,
        base_config=base_config,
      )

def run_remote(
        config: SonyMonitorClientConfig,
        keyboard: Keyboard,
        display: Optional[StatusDisplay]=None,
      ) -> int:
    """Connects to the monitor and runs the control loop until the user quits.

    Returns the process exit code.
    """
    if display is None:
        display = StatusDisplay()
    host, port = config.host_and_port
    display.print_text(f"Connecting to monitor @ {host}:{port}\n")
    try:
        client = sony_monitor_connect(config=config)
    except SetupError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code
    with ControlLoop(client, keyboard, display, poll_interval_secs=config.poll_interval_secs) as loop:
        display.print_text("Connected, starting loop\n" + get_help_text())
        rc = loop.run()
    print("Closing connection, and exiting...", file=sys.stderr)
    return rc

def main(argv: Optional[Sequence[str]]=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr)

    try:
        config = load_config(args)
    except SonyMonitorError as e:
        parser.error(str(e))

    with contextlib.ExitStack() as stack:
        if args.emulate:
            emulator = MonitorEmulator(bind_addr='127.0.0.1', port=0)
            stack.enter_context(emulator)
            config = SonyMonitorClientConfig(
                default_host=f"127.0.0.1:{emulator.port}",
                base_config=config)
            logger.info(f"Started {emulator}")
        try:
            with RawTerminal() as terminal:
                return run_remote(config, terminal)
        except KeyboardInterrupt:
            print("Interrupted", file=sys.stderr)
            return EXIT_INTERRUPTED

def build_emulator_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sony-monitor-emulator",
        description="Emulate a Sony monitor control port on TCP/IP.")
    parser.add_argument('--bind', default='0.0.0.0',
        help="Address to listen on. Default: 0.0.0.0.")
    parser.add_argument('--port', type=int, default=DEFAULT_PORT,
        help=f"Port to listen on. Default: {DEFAULT_PORT}.")
    parser.add_argument('--log-level', default='info',
        choices=['debug', 'info', 'warning', 'error', 'critical'])
    return parser

def emulator_main(argv: Optional[Sequence[str]]=None) -> int:
    args = build_emulator_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr)
    emulator = MonitorEmulator(bind_addr=args.bind, port=args.port)
    logger.info(f"Emulator listening on {args.bind}:{args.port}")
    try:
        emulator.run()
    except KeyboardInterrupt:
        logger.info("Emulator stopped")
    return EXIT_OK

if __name__ == '__main__':
    sys.exit(main())
