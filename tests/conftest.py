"""Shared fixtures: an in-process monitor and a scripted keyboard."""

from __future__ import annotations

import io
from typing import List, Optional, Sequence

import pytest

from sony_monitor_remote.client import SonyMonitorClient, SonyMonitorClientTransport
from sony_monitor_remote.display import StatusDisplay
from sony_monitor_remote.emulator import MonitorEmulatorState
from sony_monitor_remote.exceptions import TransportError
from sony_monitor_remote.protocol import CommandFrame


class FakeTransport(SonyMonitorClientTransport):
    """Answers frames from an emulated monitor without any sockets."""

    def __init__(self, state: MonitorEmulatorState):
        self.state = state
        self.sent: List[CommandFrame] = []
        self.closed = False
        self.fail_after: Optional[int] = None
        self.truncate_status = False

    def transact(self, frame: CommandFrame, reply_length: int) -> bytes:
        if self.closed:
            raise TransportError("closed")
        if self.fail_after is not None and len(self.sent) >= self.fail_after:
            self.close()
            raise TransportError("Send failed")
        self.sent.append(frame)
        reply = self.state.handle_frame(frame)
        assert len(reply) == reply_length
        if self.truncate_status and frame.category == "STATget":
            return reply[:-1]
        return reply

    def close(self) -> None:
        self.closed = True


class ScriptedKeyboard:
    """Returns one scripted byte per read, then None forever."""

    def __init__(self, data: bytes = b""):
        self.pending = list(data)

    def type(self, data: bytes) -> None:
        self.pending.extend(data)

    def read_byte(self) -> Optional[int]:
        if len(self.pending) == 0:
            return None
        return self.pending.pop(0)


@pytest.fixture
def monitor_state() -> MonitorEmulatorState:
    return MonitorEmulatorState()


@pytest.fixture
def fake_transport(monitor_state: MonitorEmulatorState) -> FakeTransport:
    return FakeTransport(monitor_state)


@pytest.fixture
def client(fake_transport: FakeTransport) -> SonyMonitorClient:
    return SonyMonitorClient(fake_transport)


@pytest.fixture
def keyboard() -> ScriptedKeyboard:
    return ScriptedKeyboard()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def display(output: io.StringIO) -> StatusDisplay:
    return StatusDisplay(output)
