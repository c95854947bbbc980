# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

"""
Sony monitor emulator.

Provides a simple emulation of a Sony monitor's control port on TCP/IP.
Serves one connection at a time.
"""

from __future__ import annotations

import socketserver
import threading

from ..internal_types import *
from ..pkg_logging import logger
from ..protocol import (
    CommandFrame,
    FRAME_HEADER,
    HEADER_LENGTH,
    INFO_BUTTON,
    INFO_KNOB,
    STATUS_SET,
    STATUS_GET,
    StatusFlagMeta,
    get_all_status_flags,
    build_status_reply,
    name_to_button_meta,
    is_powered_on,
  )
from ..protocol.constants import TOGGLE, KNOB_SCALE
from ..constants import DEFAULT_PORT
from ..exceptions import SonyMonitorError

ACTION_REPLY = FRAME_HEADER + b'\x00'
"""The 13-byte acknowledgment sent for every button, setting and knob frame."""

DEFAULT_STATUS_WORDS: StatusWords = (0x8000, 0x0000, 0x0000, 0x0000, 0x0000)
"""Powered on, everything else off."""

class MonitorEmulatorState:
    """The emulated monitor's settings, and its command handling."""
    words: List[int]
    knob_positions: Dict[str, int]
    button_presses: List[str]
    requests: List[CommandFrame]
    lock: threading.Lock

    def __init__(self, words: Optional[Sequence[int]]=None):
        self.words = list(DEFAULT_STATUS_WORDS if words is None else words)
        self.knob_positions = {}
        self.button_presses = []
        self.requests = []
        self.lock = threading.Lock()

    def toggle_flag(self, toggle_name: str) -> None:
        flags: List[StatusFlagMeta] = [meta for meta in get_all_status_flags() if meta.toggle_name == toggle_name]
        if len(flags) == 0:
            raise SonyMonitorError(f"Setting {toggle_name!r} has no status flag")
        if toggle_name != "POWER" and not is_powered_on(self.words[0]):
            logger.debug(f"Emulator: Ignoring {toggle_name} toggle while powered off")
            return
        for meta in flags:
            self.words[meta.word - 1] ^= meta.mask

    def handle_frame(self, frame: CommandFrame) -> bytes:
        """Handles a single request frame, and returns the reply bytes.

        Raises SonyMonitorError if the frame is not understood.
        """
        with self.lock:
            self.requests.append(frame)
            category = frame.category
            operand = frame.operand

            if category == STATUS_GET:
                return build_status_reply(self.words)

            if category == STATUS_SET:
                name, _, action = operand.rpartition(' ')
                if action != TOGGLE:
                    raise SonyMonitorError(f"Unsupported {STATUS_SET} action: {frame}")
                name_to_button_meta(STATUS_SET, name)
                self.toggle_flag(name)
                return ACTION_REPLY

            if category == INFO_BUTTON:
                name = operand.rstrip(' ')
                name_to_button_meta(INFO_BUTTON, name)
                self.button_presses.append(name)
                return ACTION_REPLY

            if category == INFO_KNOB:
                knob_name, _, pulse = operand.rpartition(' ')
                name_to_button_meta(INFO_KNOB, knob_name)
                try:
                    scale_str, direction_str, ticks_str = pulse.split('/')
                    scale, direction, ticks = int(scale_str), int(direction_str), int(ticks_str)
                except ValueError as e:
                    raise SonyMonitorError(f"Invalid knob pulse {pulse!r}: {frame}") from e
                if scale != KNOB_SCALE:
                    raise SonyMonitorError(f"Unexpected knob scale {scale}: {frame}")
                self.knob_positions[knob_name] = self.knob_positions.get(knob_name, 0) + direction * ticks
                return ACTION_REPLY

            raise SonyMonitorError(f"Unrecognized request: {frame}")

class _SessionHandler(socketserver.BaseRequestHandler):
    """Serves one client connection."""

    def _read_exactly(self, length: int) -> Optional[bytes]:
        data = bytearray()
        while len(data) < length:
            chunk = self.request.recv(length - len(data))
            if len(chunk) == 0:
                return None
            data.extend(chunk)
        return bytes(data)

    def handle(self) -> None:
        state: MonitorEmulatorState = cast(Any, self.server).state
        logger.debug(f"Emulator: Session started with {self.client_address}")
        try:
            while True:
                head = self._read_exactly(HEADER_LENGTH + 1)
                if head is None:
                    break
                payload = self._read_exactly(head[HEADER_LENGTH])
                if payload is None:
                    break
                frame = CommandFrame.from_bytes(head + payload)
                logger.debug(f"Emulator: Received {frame}")
                reply = state.handle_frame(frame)
                self.request.sendall(reply)
        except SonyMonitorError as e:
            logger.warning(f"Emulator: Closing session with {self.client_address}: {e}")
        except OSError as e:
            logger.debug(f"Emulator: Session with {self.client_address} failed: {e}")
        logger.debug(f"Emulator: Session ended with {self.client_address}")

class _EmulatorServer(socketserver.TCPServer):
    allow_reuse_address = True
    state: MonitorEmulatorState

class MonitorEmulator:
    """A Sony monitor control port emulator, served from a background thread."""
    state: MonitorEmulatorState
    bind_addr: str
    requested_port: int
    server: Optional[_EmulatorServer] = None
    server_thread: Optional[threading.Thread] = None

    def __init__(
            self,
            bind_addr: Optional[str]=None,
            port: int=DEFAULT_PORT,
            words: Optional[Sequence[int]]=None,
          ):
        """Creates an emulator. Pass port=0 to listen on any free port."""
        self.state = MonitorEmulatorState(words)
        self.bind_addr = '0.0.0.0' if bind_addr is None else bind_addr
        self.requested_port = port

    @property
    def port(self) -> int:
        """The port actually listened on."""
        if self.server is None:
            return self.requested_port
        return self.server.server_address[1]

    def bind(self) -> None:
        """Creates the listening socket."""
        assert self.server is None
        self.server = _EmulatorServer((self.bind_addr, self.requested_port), _SessionHandler)
        self.server.state = self.state
        logger.debug(f"Emulator: Listening on {self.bind_addr}:{self.port}")

    def start(self) -> None:
        """Starts serving from a background thread."""
        self.bind()
        assert self.server is not None
        self.server_thread = threading.Thread(
            target=self.server.serve_forever,
            name="sony-monitor-emulator",
            daemon=True)
        self.server_thread.start()

    def run(self) -> None:
        """Serves in the calling thread until interrupted."""
        self.bind()
        assert self.server is not None
        try:
            self.server.serve_forever()
        finally:
            self.server.server_close()
            self.server = None

    def close(self) -> None:
        """Stops serving and closes the listening socket."""
        if self.server is not None:
            if self.server_thread is not None:
                self.server.shutdown()
                self.server_thread.join()
                self.server_thread = None
            self.server.server_close()
            self.server = None

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(
            self,
            exc_type: Optional[Type[BaseException]],
            exc: Optional[BaseException],
            tb: Optional[TracebackType]
          ) -> None:
        self.close()

    def __str__(self) -> str:
        return f"MonitorEmulator({self.bind_addr}:{self.port})"

    def __repr__(self) -> str:
        return str(self)
