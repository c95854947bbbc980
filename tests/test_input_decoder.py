"""Tests for the keyboard input decoder."""

from sony_monitor_remote.input_decoder import (
    InputDecoder,
    InputState,
    InputMode,
    EscapeState,
    INITIAL_STATE,
    Key,
    KnobChoice,
    KNOB_SELECT_ARMED,
    ENTER,
    ARROW_UP,
    ARROW_DOWN,
    decode_byte,
)


def test_arrow_up_sequence():
    """ESC [ A yields exactly one ArrowUp and returns to normal."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"\x1b\x5b\x41") == [ARROW_UP]
    assert decoder.state == INITIAL_STATE


def test_arrow_down_sequence():
    """ESC [ B yields exactly one ArrowDown."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"\x1b[B") == [ARROW_DOWN]
    assert decoder.state.escape == EscapeState.NORMAL


def test_double_escape_is_swallowed():
    """ESC ESC yields nothing and returns to normal."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"\x1b\x1b") == []
    assert decoder.state == INITIAL_STATE


def test_unknown_direction():
    """ESC [ C (arrow right) yields nothing."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"\x1b[C") == []
    assert decoder.state == INITIAL_STATE


def test_aborted_escape_swallows_next_byte():
    """The byte after a lone ESC is consumed, even a normal key."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"\x1bpa") == [Key("a")]


def test_escape_split_across_polls():
    """No timeout: an escape sequence may arrive over several polls."""
    decoder = InputDecoder()
    assert decoder.feed(0x1B) is None
    assert decoder.feed(None) is None
    assert decoder.state.escape == EscapeState.AWAITING_BRACKET
    assert decoder.feed(0x5B) is None
    assert decoder.feed(None) is None
    assert decoder.feed(0x41) == ARROW_UP


def test_newline_and_keys():
    """Newline is Enter, everything else is a Key."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"m\na+") == [Key("m"), ENTER, Key("a"), Key("+")]


def test_no_input():
    """None is 'no event', and leaves the state alone."""
    state = InputState(escape=EscapeState.AWAITING_DIRECTION, mode=InputMode.KNOB_SELECT_PENDING)
    assert decode_byte(state, None) == (state, None)


def test_knob_select_intercepts_next_key():
    """k arms knob selection, and the next key becomes a KnobChoice."""
    decoder = InputDecoder()
    assert decoder.feed(ord("k")) == KNOB_SELECT_ARMED
    assert decoder.knob_select_pending
    assert decoder.feed(ord("t")) == KnobChoice("t")
    assert not decoder.knob_select_pending
    assert decoder.feed(ord("t")) == Key("t")


def test_knob_select_toggles_off():
    """k k arms and then disarms with a non-knob choice."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"kk") == [KNOB_SELECT_ARMED, KnobChoice("k")]
    assert not decoder.knob_select_pending


def test_knob_select_consumes_quit_key():
    """While armed, even q is only a knob choice."""
    decoder = InputDecoder()
    assert decoder.feed_all(b"kq") == [KNOB_SELECT_ARMED, KnobChoice("q")]


def test_knob_select_ignores_special_keys():
    """Arrows and Enter pass through while armed; the next plain key is still intercepted."""
    decoder = InputDecoder()
    events = decoder.feed_all(b"k\x1b[A\np")
    assert events == [KNOB_SELECT_ARMED, ARROW_UP, ENTER, KnobChoice("p")]


def test_reducer_is_pure():
    """decode_byte never mutates its input state."""
    state = INITIAL_STATE
    new_state, event = decode_byte(state, 0x1B)
    assert state == INITIAL_STATE
    assert new_state.escape == EscapeState.AWAITING_BRACKET
    assert event is None
