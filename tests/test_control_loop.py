"""Tests for the remote control loop, driven without sockets or a terminal."""

import pytest

from sony_monitor_remote.control_loop import ControlLoop
from sony_monitor_remote.display import POWERED_OFF_LINE, format_status_line
from sony_monitor_remote.knob import KnobSelection
from sony_monitor_remote.protocol import MonitorStatus


def make_loop(client, keyboard, display):
    sleeps = []
    loop = ControlLoop(client, keyboard, display, poll_interval_secs=0.5, sleep=sleeps.append)
    return loop, sleeps


def test_idle_iteration_polls_status(client, keyboard, display, fake_transport):
    """With no input, each iteration sends exactly one status poll."""
    loop, _ = make_loop(client, keyboard, display)
    assert loop.step()
    assert loop.step()
    assert [f.category for f in fake_transport.sent] == ["STATget", "STATget"]


def test_first_poll_draws_then_quiet(client, keyboard, display, output):
    """The first status is drawn; an unchanged status is not redrawn."""
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    assert display.redraw_count == 1
    assert output.getvalue().startswith("\rON ")
    loop.step()
    loop.step()
    assert display.redraw_count == 1


def test_toggle_sends_action_then_poll(client, keyboard, display, fake_transport, monitor_state):
    """A bound key sends its frame, then the status poll, and redraws."""
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    keyboard.type(b"a")
    loop.step()
    assert [f.text for f in fake_transport.sent[1:]] == ["STATset ASPECT TOGGLE", "STATget CURRENT 5"]
    assert loop.last_status.is_aspect_16x9
    assert display.redraw_count == 2
    assert "16:9" in display.last_line


def test_unbound_key_still_polls(client, keyboard, display, fake_transport):
    """Unrecognized input is ignored but the poll still happens."""
    loop, _ = make_loop(client, keyboard, display)
    keyboard.type(b"z")
    assert loop.step()
    assert [f.category for f in fake_transport.sent] == ["STATget"]


def test_arrow_keys_over_several_iterations(client, keyboard, display, monitor_state):
    """An arrow sequence is read a byte per iteration and sent once complete."""
    loop, _ = make_loop(client, keyboard, display)
    keyboard.type(b"\x1b[B")
    for _ in range(3):
        loop.step()
    assert monitor_state.button_presses == ["MENUDOWN"]


def test_quit_key(client, keyboard, display, fake_transport):
    """q ends the loop without a further poll, and run() returns 0."""
    loop, sleeps = make_loop(client, keyboard, display)
    keyboard.type(b"mq")
    assert loop.run() == 0
    assert [f.text for f in fake_transport.sent] == ["INFObutton MENU ", "STATget CURRENT 5"]
    assert sleeps == [0.5]
    assert display.stream.getvalue().endswith("\n")


def test_knob_selection_and_adjust(client, keyboard, display, monitor_state):
    """k t selects contrast, + turns it."""
    loop, _ = make_loop(client, keyboard, display)
    keyboard.type(b"kt+")
    for _ in range(3):
        loop.step()
    assert loop.knob.selection == KnobSelection.CONTRAST
    assert monitor_state.knob_positions == {"R CONTRAST": 1}
    assert "KNOB:CONTRAST" in display.last_line


def test_knob_adjust_without_selection_sends_nothing(client, keyboard, display, fake_transport):
    """+ with no knob selected sends no frame."""
    loop, _ = make_loop(client, keyboard, display)
    keyboard.type(b"+")
    loop.step()
    assert [f.category for f in fake_transport.sent] == ["STATget"]


def test_knob_select_mode_redraws_every_iteration(client, keyboard, display):
    """While knob selection is armed the line is redrawn each poll."""
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    keyboard.type(b"k")
    loop.step()
    assert display.last_line.endswith("KNOB:-?")
    loop.step()
    loop.step()
    assert display.redraw_count == 4


def test_knob_change_forces_one_redraw(client, keyboard, display):
    """Choosing a knob redraws once, without any status change."""
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    keyboard.type(b"kp")
    loop.step()
    loop.step()
    count = display.redraw_count
    assert display.last_line.endswith("KNOB:PHASE")
    loop.step()
    assert display.redraw_count == count


def test_reselecting_same_knob_clears_pending_marker(client, keyboard, display):
    """Leaving select mode with the current knob redraws without the marker."""
    loop, _ = make_loop(client, keyboard, display)
    loop.knob.selection = KnobSelection.PHASE
    loop.step()
    keyboard.type(b"kp")
    for _ in range(3):
        loop.step()
    assert loop.knob.selection == KnobSelection.PHASE
    assert display.last_line.endswith("KNOB:PHASE")


def test_non_knob_key_with_no_selection_clears_pending_marker(client, keyboard, display):
    """Leaving select mode with no knob selected redraws without the marker."""
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    keyboard.type(b"kz")
    for _ in range(3):
        loop.step()
    assert loop.knob.selection == KnobSelection.NONE
    assert display.last_line.endswith("KNOB:-")
    count = display.redraw_count
    loop.step()
    assert display.redraw_count == count


def test_knob_select_quit_key_does_not_quit(client, keyboard, display):
    """q typed as a knob choice deselects instead of quitting."""
    loop, _ = make_loop(client, keyboard, display)
    keyboard.type(b"kq")
    assert loop.step()
    assert loop.step()
    assert loop.knob.selection == KnobSelection.NONE


def test_powered_off_renders_once(client, keyboard, display, monitor_state):
    """Power off shows the powered off line once and suppresses comparisons."""
    monitor_state.words = [0x0000, 0, 0, 0, 0]
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    assert display.last_line == POWERED_OFF_LINE
    monitor_state.words[1] = 0x1234
    loop.step()
    loop.step()
    assert display.redraw_count == 1
    assert loop.last_status is None


def test_power_on_redraws(client, keyboard, display, monitor_state):
    """Turning power back on redraws the full status line."""
    monitor_state.words = [0x0002, 0, 0, 0, 0]
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    keyboard.type(b"p")
    loop.step()
    assert loop.last_status == MonitorStatus([0x8002, 0, 0, 0, 0])
    assert display.last_line == format_status_line(loop.last_status)
    assert display.redraw_count == 2


def test_power_off_then_on_with_same_words_redraws(client, keyboard, display, monitor_state):
    """Snapshot is cleared on power off, so the next power on always redraws."""
    loop, _ = make_loop(client, keyboard, display)
    loop.step()
    keyboard.type(b"pp")
    loop.step()
    assert display.last_line == POWERED_OFF_LINE
    loop.step()
    assert display.last_line.startswith("ON ")
    assert display.redraw_count == 3


def test_send_failure_is_fatal(client, keyboard, display, fake_transport, capsys):
    """A transport failure ends the loop with exit code 3."""
    loop, _ = make_loop(client, keyboard, display)
    fake_transport.fail_after = 2
    assert loop.run() == 3
    assert "Send failed" in capsys.readouterr().err
    assert fake_transport.closed


def test_short_status_reply_is_fatal(client, keyboard, display, fake_transport):
    """A status reply of the wrong size ends the loop with exit code 3."""
    loop, _ = make_loop(client, keyboard, display)
    fake_transport.truncate_status = True
    assert loop.run() == 3
    assert fake_transport.closed


def test_context_manager_closes_client(client, keyboard, display, fake_transport):
    """Leaving the loop context closes the connection on every path."""
    with pytest.raises(RuntimeError):
        with ControlLoop(client, keyboard, display):
            raise RuntimeError("boom")
    assert fake_transport.closed
