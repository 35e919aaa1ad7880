"""Tests for key decoding, raw-mode reads, and cursor visibility."""

import os
import termios
from unittest import mock

import pytest

from conftest import make_console
from igs.tui import terminal
from igs.tui.terminal import KeyReader, decode_key, hidden_cursor


class TestDecodeKey:
    @pytest.mark.parametrize(
        "raw,token",
        [
            (b"j", "j"),
            (b"G", "G"),
            (b" ", " "),
            (b"\r", terminal.ENTER),
            (b"\n", terminal.ENTER),
            (b"\x03", terminal.CTRL_C),
            (b"\x1b", terminal.ESC),
            (b"", ""),
        ],
    )
    def test_tokens(self, raw, token):
        assert decode_key(raw) == token


@pytest.fixture
def pipe_reader():
    read_fd, write_fd = os.pipe()
    with mock.patch("igs.tui.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
        "igs.tui.terminal.tty.setraw"
    ) as setraw_mock, mock.patch("igs.tui.terminal.termios.tcsetattr") as setattr_mock:
        reader = KeyReader(read_fd)
        yield reader, write_fd, setraw_mock, setattr_mock
    os.close(read_fd)
    os.close(write_fd)


class TestKeyReader:
    def test_reads_single_key(self, pipe_reader):
        reader, write_fd, setraw_mock, setattr_mock = pipe_reader
        os.write(write_fd, b"k")
        assert reader.read_key() == "k"
        setraw_mock.assert_called_once_with(reader.fd, termios.TCSANOW)
        setattr_mock.assert_called_once_with(reader.fd, termios.TCSADRAIN, [0])

    def test_one_key_per_read(self, pipe_reader):
        reader, write_fd, _, _ = pipe_reader
        os.write(write_fd, b"jk")
        assert reader.read_key() == "j"
        assert reader.read_key() == "k"

    def test_arrow_keys(self, pipe_reader):
        reader, write_fd, _, _ = pipe_reader
        os.write(write_fd, b"\x1b[A\x1b[B")
        assert reader.read_key() == terminal.UP
        assert reader.read_key() == terminal.DOWN

    @pytest.mark.parametrize(
        "sequence",
        [b"\x1b[H", b"\x1b[F", b"\x1b[3~", b"\x1b[5~", b"\x1b[15~", b"\x1bOP", b"\x1b[1;5H"],
    )
    def test_other_sequences_are_unknown(self, pipe_reader, sequence):
        reader, write_fd, _, _ = pipe_reader
        os.write(write_fd, sequence + b"j")
        assert reader.read_key() == terminal.UNKNOWN
        # the whole sequence is consumed
        assert reader.read_key() == "j"

    def test_application_mode_arrows(self, pipe_reader):
        reader, write_fd, _, _ = pipe_reader
        os.write(write_fd, b"\x1bOA\x1bOB")
        assert reader.read_key() == terminal.UP
        assert reader.read_key() == terminal.DOWN

    def test_lone_escape(self, pipe_reader):
        reader, write_fd, _, _ = pipe_reader
        os.write(write_fd, b"\x1b")
        assert reader.read_key() == terminal.ESC

    def test_escape_followed_by_key_keeps_key(self, pipe_reader):
        reader, write_fd, _, _ = pipe_reader
        os.write(write_fd, b"\x1bq")
        assert reader.read_key() == terminal.ESC
        assert reader.read_key() == "q"

    def test_end_of_input(self):
        read_fd, write_fd = os.pipe()
        os.close(write_fd)
        with mock.patch("igs.tui.terminal.termios.tcgetattr", return_value=[0]), mock.patch(
            "igs.tui.terminal.tty.setraw"
        ), mock.patch("igs.tui.terminal.termios.tcsetattr"):
            assert KeyReader(read_fd).read_key() == ""
        os.close(read_fd)

    def test_terminal_restored_after_error(self):
        with mock.patch("igs.tui.terminal.termios.tcgetattr", return_value=[7]), mock.patch(
            "igs.tui.terminal.tty.setraw"
        ), mock.patch("igs.tui.terminal.termios.tcsetattr") as setattr_mock, mock.patch(
            "igs.tui.terminal.os.read", side_effect=OSError("boom")
        ):
            reader = KeyReader(0)
            with pytest.raises(OSError):
                reader.read_key()
        setattr_mock.assert_called_once_with(0, termios.TCSADRAIN, [7])


class TestHiddenCursor:
    def test_hides_then_shows(self, console_output):
        with hidden_cursor(make_console(console_output)):
            assert console_output.getvalue() == "\x1b[?25l"
        assert console_output.getvalue() == "\x1b[?25l\x1b[?25h"

    def test_shows_after_exception(self, console_output):
        with pytest.raises(RuntimeError):
            with hidden_cursor(make_console(console_output)):
                raise RuntimeError("boom")
        assert console_output.getvalue().endswith("\x1b[?25h")
