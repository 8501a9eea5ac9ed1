"""
test/test_keyboard.py
KeyboardInput - interactivity detection and key reads
"""
import io
import os
from unittest.mock import MagicMock, patch

import pytest

from schematalk.presenter import KeyboardInput
from schematalk.presenter.keyboard import KEY_LEFT, KEY_RIGHT, NEXT_KEYS, PREV_KEYS, QUIT_KEYS


class TestIsInteractive:
    def test_tty(self):
        stream = MagicMock()
        stream.isatty.return_value = True
        assert KeyboardInput(stream).is_interactive() is True

    def test_pipe(self):
        assert KeyboardInput(io.StringIO("")).is_interactive() is False

    def test_closed_stream(self):
        stream = io.StringIO("")
        stream.close()
        assert KeyboardInput(stream).is_interactive() is False


class TestReadKey:
    def test_arrow_arrives_whole(self):
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, KEY_RIGHT.encode())
            stream = MagicMock()
            stream.fileno.return_value = read_fd
            assert KeyboardInput(stream).read_key() == KEY_RIGHT
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_end_of_input(self):
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        try:
            stream = MagicMock()
            stream.fileno.return_value = read_fd
            assert KeyboardInput(stream).read_key() == ""
        finally:
            os.close(read_fd)


class TestKeyAlphabet:
    def test_sets_disjoint(self):
        assert not (QUIT_KEYS & NEXT_KEYS)
        assert not (NEXT_KEYS & PREV_KEYS)
        assert KEY_LEFT in PREV_KEYS


class TestRawMode:
    def test_restores_on_error(self):
        termios = pytest.importorskip("termios")
        stream = MagicMock()
        stream.fileno.return_value = 7
        attrs = [0, 0, 0, 0, 0, 0, [b"\x00"] * 32]

        with patch.object(termios, "tcgetattr", side_effect=lambda fd: [list(a) if isinstance(a, list) else a for a in attrs]), \
                patch.object(termios, "tcsetattr") as tcsetattr:
            with pytest.raises(RuntimeError):
                with KeyboardInput(stream).raw_mode():
                    raise RuntimeError("inside")

        assert tcsetattr.call_count == 2
        fd, when, restored = tcsetattr.call_args_list[-1].args
        assert fd == 7
        assert when == termios.TCSADRAIN
        assert restored == attrs
