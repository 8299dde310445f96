"""Tests for decode_line / classify."""

import pytest

from remotepipe.core import events
from remotepipe.core.decoder import classify, decode_line
from remotepipe.core.errors import DecodeError
from remotepipe.core.models.state import Button, Phase
from tests.helpers.helper_scaffold import record


class TestDecodeTable:
    @pytest.mark.parametrize(
        "line, button, phase",
        [
            ('{"type":"up","hold":false,"pressed":true}', Button.VOLUME_UP, Phase.PRESSED),
            ('{"type":"up","hold":true,"pressed":true}', Button.VOLUME_UP, Phase.HOLD_STARTED),
            ('{"type":"up","hold":true,"pressed":false}', Button.VOLUME_UP, Phase.HOLD_STOPPED),
            ('{"type":"down","hold":false,"pressed":true}', Button.VOLUME_DOWN, Phase.PRESSED),
            ('{"type":"down","hold":true,"pressed":true}', Button.VOLUME_DOWN, Phase.HOLD_STARTED),
            ('{"type":"down","hold":true,"pressed":false}', Button.VOLUME_DOWN, Phase.HOLD_STOPPED),
            ('{"type":"left","hold":false,"pressed":true}', Button.PREVIOUS, Phase.PRESSED),
            ('{"type":"left","hold":true,"pressed":true}', Button.PREVIOUS, Phase.HOLD_STARTED),
            ('{"type":"left","hold":true,"pressed":false}', Button.PREVIOUS, Phase.HOLD_STOPPED),
            ('{"type":"right","hold":false,"pressed":true}', Button.NEXT, Phase.PRESSED),
            ('{"type":"right","hold":true,"pressed":true}', Button.NEXT, Phase.HOLD_STARTED),
            ('{"type":"right","hold":true,"pressed":false}', Button.NEXT, Phase.HOLD_STOPPED),
            ('{"type":"play","hold":false,"pressed":true}', Button.PLAY_PAUSE, Phase.PRESSED),
            ('{"type":"sleep","hold":false,"pressed":true}', Button.PLAY_PAUSE, Phase.HELD),
            ('{"type":"menu","hold":false,"pressed":true}', Button.MENU, Phase.PRESSED),
            ('{"type":"menu","hold":true,"pressed":true}', Button.MENU, Phase.HELD),
            ('{"type":"ok","hold":false,"pressed":true}', Button.SELECT, Phase.PRESSED),
        ],
    )
    def test_helper_vocabulary(self, line, button, phase):
        event = decode_line(line)
        assert (event.button, event.phase) == (button, phase)
        assert event.raw_line == line

    def test_every_decoded_kind_is_supported(self):
        for token in ("up", "down", "left", "right", "play", "sleep", "menu", "ok"):
            for hold in (False, True):
                for pressed in (False, True):
                    button, phase = classify(token, hold, pressed)
                    assert phase in events.SUPPORTED_PHASES[button]

    def test_select_never_held(self):
        for hold in (False, True):
            for pressed in (False, True):
                assert decode_line(record("ok", hold, pressed)).phase is Phase.PRESSED

    def test_menu_hold_ignores_pressed(self):
        assert decode_line(record("menu", True, False)).phase is Phase.HELD

    def test_play_and_sleep_ignore_flags(self):
        assert decode_line(record("play", True, False)).kind == (Button.PLAY_PAUSE, Phase.PRESSED)
        assert decode_line(record("sleep", True, True)).kind == (Button.PLAY_PAUSE, Phase.HELD)


class TestDecodeLineShape:
    def test_trailing_newline_stripped_from_raw_line(self):
        event = decode_line('{"type":"up","hold":false,"pressed":true}\r\n')
        assert event.raw_line == '{"type":"up","hold":false,"pressed":true}'

    def test_whitespace_tolerated(self):
        event = decode_line('  { "type" : "left" , "hold" : true , "pressed" : false }  ')
        assert event.kind == (Button.PREVIOUS, Phase.HOLD_STOPPED)

    def test_origin_stamped(self):
        assert decode_line(record("ok"), origin="remote-7").origin == "remote-7"
        assert decode_line(record("ok")).origin is None

    @pytest.mark.parametrize(
        "line",
        [
            "",
            "\n",
            "garbage",
            "{}",
            '{"type":"up"}',
            '{"type":"up","hold":false}',
            '{"hold":false,"type":"up","pressed":true}',
            '{"type":"up","hold":false,"pressed":true,"extra":1}',
            '{"type":"up","hold":"false","pressed":true}',
            '{"type":"up","hold":0,"pressed":true}',
            '{"type":up,"hold":false,"pressed":true}',
            '{"type":"up","hold":false,"pressed":true',
            '[{"type":"up","hold":false,"pressed":true}]',
            '{"type":"up","hold":false,"pressed":true}{"type":"up","hold":false,"pressed":true}',
        ],
    )
    def test_malformed_lines_raise_decode_error(self, line):
        with pytest.raises(DecodeError):
            decode_line(line)

    @pytest.mark.parametrize("token", ["", "UP", "pause", "select", "volume_up"])
    def test_unknown_type_token(self, token):
        with pytest.raises(DecodeError, match="unknown type token"):
            decode_line(record(token))

    @pytest.mark.parametrize("value", [None, 42, b'{"type":"up","hold":false,"pressed":true}'])
    def test_non_text_input(self, value):
        with pytest.raises(DecodeError):
            decode_line(value)

    def test_decode_error_is_value_error(self):
        with pytest.raises(ValueError):
            decode_line("nope")

    def test_decode_error_keeps_line(self):
        with pytest.raises(DecodeError) as excinfo:
            decode_line(record("zzz"))
        assert excinfo.value.line == record("zzz")
