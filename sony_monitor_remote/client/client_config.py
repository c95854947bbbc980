# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor client configuration.

Provides a general config object for connecting to a monitor and running the
remote control loop.
"""

from __future__ import annotations

import os
import json

from ..internal_types import *
from ..exceptions import SonyMonitorError
from ..constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    POLL_INTERVAL,
  )
from ..pkg_logging import logger

def parse_host_and_port(host: str, default_port: int) -> Tuple[str, int]:
    """Splits "host", "host:port", "tcp://host" or "tcp://host:port" into (host, port)."""
    if '://' in host:
        if not host.startswith('tcp://'):
            raise SonyMonitorError(f"Invalid host protocol specifier for TCP transport: '{host}'")
        host = host[len('tcp://'):]
    port = default_port
    if ':' in host:
        host, port_str = host.rsplit(':', 1)
        try:
            port = int(port_str)
        except ValueError as e:
            raise SonyMonitorError(f"Invalid port number in host specifier: '{port_str}'") from e
    if host == '':
        raise SonyMonitorError("Empty host name")
    return host, port

class SonyMonitorClientConfig:
    """Sony monitor client configuration."""
    default_host: str
    default_port: int
    timeout_secs: float
    poll_interval_secs: float

    def __init__(
            self,
            default_host: Optional[str]=None,
            *,
            default_port: Optional[int]=None,
            timeout_secs: Optional[float] = None,
            poll_interval_secs: Optional[float] = None,
            base_config: Optional[SonyMonitorClientConfig]=None
          ) -> None:
        """Creates a configuration for a Sony monitor client.

           Args:
             default_host: The hostname or IPV4 address of the monitor.
                   may optionally be prefixed with "tcp://".
                   May be suffixed with ":<port>" to specify a
                   non-default port, which will override the default_port argument.
                   If None, the default host will be taken from the
                     SONY_MONITOR_HOST environment variable, or DEFAULT_HOST.
             default_port: The default TCP/IP port number to use.
                    If None, the default port will be taken from SONY_MONITOR_PORT.
                    If that environment variable is not found, the default
                    monitor port (53484) will be used.
             timeout_secs:
                   The timeout for connecting and for each send or receive,
                   in seconds. If None, the timeout will be taken from the
                   SONY_MONITOR_TIMEOUT environment variable, or DEFAULT_TIMEOUT.
             poll_interval_secs:
                   Seconds between status polls. If None, taken from
                   SONY_MONITOR_POLL_INTERVAL, or POLL_INTERVAL.
             base_config:
                     An optional base configuration to use.
        """
        if base_config is None:
            self.init_from_defaults()
        else:
            self.init_from_base_config(base_config)

        if default_port is not None and default_port > 0:
            self.default_port = default_port

        if default_host is not None and default_host != '':
            self.default_host = default_host

        if timeout_secs is not None:
            self.timeout_secs = timeout_secs

        if poll_interval_secs is not None:
            self.poll_interval_secs = poll_interval_secs

        if self.timeout_secs <= 0:
            raise SonyMonitorError(f"Timeout must be positive: {self.timeout_secs}")
        if self.poll_interval_secs < 0:
            raise SonyMonitorError(f"Poll interval must not be negative: {self.poll_interval_secs}")

    def init_from_defaults(self) -> None:
        """Initializes the configuration from defaults."""
        default_host: Optional[str] = os.environ.get('SONY_MONITOR_HOST')
        if default_host is None or default_host == '':
            default_host = DEFAULT_HOST
        self.default_host = default_host
        default_port_str = os.environ.get('SONY_MONITOR_PORT')
        if default_port_str is None or default_port_str == '':
            self.default_port = DEFAULT_PORT
        else:
            self.default_port = int(default_port_str)
        timeout_str = os.environ.get('SONY_MONITOR_TIMEOUT')
        if timeout_str is None or timeout_str == '':
            self.timeout_secs = DEFAULT_TIMEOUT
        else:
            self.timeout_secs = float(timeout_str)
        poll_interval_str = os.environ.get('SONY_MONITOR_POLL_INTERVAL')
        if poll_interval_str is None or poll_interval_str == '':
            self.poll_interval_secs = POLL_INTERVAL
        else:
            self.poll_interval_secs = float(poll_interval_str)

    def init_from_base_config(self, base_config: SonyMonitorClientConfig) -> None:
        """Initializes the configuration from a base configuration."""
        self.default_host = base_config.default_host
        self.default_port = base_config.default_port
        self.timeout_secs = base_config.timeout_secs
        self.poll_interval_secs = base_config.poll_interval_secs

    @property
    def host_and_port(self) -> Tuple[str, int]:
        """The host and port to connect to, after applying any port in default_host."""
        return parse_host_and_port(self.default_host, self.default_port)

    @classmethod
    def from_jsonable(
            cls,
            jsonable: JsonableDict,
            base_config: Optional[SonyMonitorClientConfig]=None
          ) -> Self:
        """Creates a configuration from a JSON object with optional keys
           "host", "port", "timeout_secs" and "poll_interval_secs"."""
        unknown_keys = set(jsonable.keys()) - { "host", "port", "timeout_secs", "poll_interval_secs" }
        if len(unknown_keys) > 0:
            raise SonyMonitorError(f"Unknown configuration keys: {sorted(unknown_keys)}")
        host = jsonable.get("host", None)
        port = jsonable.get("port", None)
        timeout_secs = jsonable.get("timeout_secs", None)
        poll_interval_secs = jsonable.get("poll_interval_secs", None)
        return cls(
            default_host=None if host is None else str(host),
            default_port=None if port is None else int(cast(int, port)),
            timeout_secs=None if timeout_secs is None else float(cast(float, timeout_secs)),
            poll_interval_secs=None if poll_interval_secs is None else float(cast(float, poll_interval_secs)),
            base_config=base_config,
          )

    @classmethod
    def from_file(
            cls,
            pathname: str,
            base_config: Optional[SonyMonitorClientConfig]=None
          ) -> Self:
        """Creates a configuration from a JSON file."""
        logger.debug(f"Loading configuration from {pathname}")
        try:
            with open(pathname, "r") as f:
                raw_config = json.load(f)
        except (OSError, ValueError) as e:
            raise SonyMonitorError(f"Could not load configuration file {pathname}: {e}") from e
        if not isinstance(raw_config, dict):
            raise SonyMonitorError(f"Configuration file {pathname} must contain a JSON object")
        return cls.from_jsonable(raw_config, base_config=base_config)

    def to_jsonable(self) -> JsonableDict:
        return dict(
            host=self.default_host,
            port=self.default_port,
            timeout_secs=self.timeout_secs,
            poll_interval_secs=self.poll_interval_secs,
          )

    def __str__(self) -> str:
        return (
            f"SonyMonitorClientConfig("
            f"default_host={self.default_host}, "
            f"default_port={self.default_port}, "
            f"timeout_secs={self.timeout_secs!r}, "
            f"poll_interval_secs={self.poll_interval_secs!r})"
          )

    def __repr__(self) -> str:
        return str(self)
