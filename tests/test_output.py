import io
import os
import stat

import pytest

from zonealloc.output import (
    create_log_file,
    put_char,
    put_endl,
    put_hex,
    put_nbr,
    put_str,
)


def _through_fd(tmp_path, action):
    path = tmp_path / "out.txt"
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        action(fd)
    finally:
        os.close(fd)
    return path.read_text()


def test_put_char_to_stream():
    buf = io.StringIO()
    put_char("x", buf)
    put_char("y", buf)
    assert buf.getvalue() == "xy"


def test_put_char_rejects_multiple_characters():
    with pytest.raises(ValueError):
        put_char("ab", io.StringIO())


def test_put_char_rejects_empty():
    with pytest.raises(ValueError):
        put_char("", io.StringIO())


def test_put_str_to_file_descriptor(tmp_path):
    assert _through_fd(tmp_path, lambda fd: put_str("hello world", fd)) == "hello world"


def test_put_str_none_writes_nothing():
    buf = io.StringIO()
    put_str(None, buf)
    assert buf.getvalue() == ""


def test_put_str_defaults_to_stdout(capsys):
    put_str("to stdout")
    assert capsys.readouterr().out == "to stdout"


def test_put_endl_appends_newline():
    buf = io.StringIO()
    put_endl("line", buf)
    assert buf.getvalue() == "line\n"


def test_put_endl_none_writes_newline_only():
    buf = io.StringIO()
    put_endl(None, buf)
    assert buf.getvalue() == "\n"


@pytest.mark.parametrize("n", [0, 7, 42, 1024, -5, 2**63])
def test_put_nbr_round_trips(n):
    buf = io.StringIO()
    put_nbr(n, buf)
    assert int(buf.getvalue()) == n


def test_put_nbr_int_min():
    buf = io.StringIO()
    put_nbr(-2147483648, buf)
    assert buf.getvalue() == "-2147483648"


def test_put_nbr_rejects_non_integer():
    with pytest.raises(TypeError):
        put_nbr(1.5, io.StringIO())


def test_put_nbr_rejects_bool():
    with pytest.raises(TypeError):
        put_nbr(True, io.StringIO())


@pytest.mark.parametrize("n", [0, 9, 10, 255, 4096, 0xDEADBEEF])
def test_put_hex_round_trips(n):
    buf = io.StringIO()
    put_hex(n, buf)
    text = buf.getvalue()
    assert text.startswith("0x")
    assert text[2:] == text[2:].upper()
    assert int(text, 16) == n


def test_put_hex_through_fd(tmp_path):
    text = _through_fd(tmp_path, lambda fd: put_hex(4096, fd))
    assert int(text, 16) == 4096


def test_create_log_file_creates_and_appends(tmp_path):
    path = tmp_path / "log"
    assert create_log_file(path, "first\n") is True
    assert create_log_file(path, "second\n") is True
    assert path.read_text() == "first\nsecond\n"


def test_create_log_file_permissions(tmp_path):
    path = tmp_path / "log"
    create_log_file(path, "data")
    mode = stat.S_IMODE(path.stat().st_mode)
    assert mode & (stat.S_IRWXG | stat.S_IRWXO) == 0
    assert mode & stat.S_IRUSR


def test_create_log_file_unopenable_returns_false(tmp_path):
    path = tmp_path / "missing_dir" / "log"
    assert create_log_file(path, "data") is False
    assert not path.exists()