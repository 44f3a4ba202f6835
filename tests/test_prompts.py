import io

import pytest

from tarman.output import Console
from tarman.prompts import Prompter


def make(text):
    out = io.StringIO()
    return Prompter(Console(out, False), io.StringIO(text)), out


def test_ask_int_in_range():
    prompter, out = make("5\n")
    assert prompter.ask_int("Pick", 1, 10) == 5
    assert ":: Pick [1, 10]:" in out.getvalue()


def test_ask_int_retries_on_garbage():
    prompter, out = make("abc\n3\n")
    assert prompter.ask_int("Pick", 1, 10) == 3
    assert "ERROR: I/O Error: invalid input" in out.getvalue()


def test_ask_int_retries_out_of_range():
    prompter, out = make("11\n4\n")
    assert prompter.ask_int("Pick", 1, 10) == 4
    assert "Range Error: value '11' is not valid for range [1, 10]" in out.getvalue()


def test_ask_int_unbounded():
    prompter, out = make("-99\n")
    assert prompter.ask_int("Pick", 0, 0) == -99
    assert ":: Pick:" in out.getvalue()
    assert "[" not in out.getvalue()


def test_ask_int_skips_blank_lines():
    prompter, _ = make("\n\n7\n")
    assert prompter.ask_int("Pick", 0, 9) == 7


def test_ask_int_eof():
    prompter, _ = make("")
    with pytest.raises(EOFError):
        prompter.ask_int("Pick", 1, 2)


@pytest.mark.parametrize(
    "text, expected",
    [("\n", True), ("y\n", True), ("Y\n", True), ("n\n", False), ("N\n", False)],
)
def test_ask_bool_answers(text, expected):
    prompter, out = make(text)
    assert prompter.ask_bool("Go?") is expected
    assert ":: Go? [Y/n]:" in out.getvalue()


def test_ask_bool_retries_on_other_input():
    prompter, out = make("x\nn\n")
    assert prompter.ask_bool("Go?") is False
    assert "Range Error: 'x'" in out.getvalue()


def test_ask_bool_eof():
    prompter, _ = make("")
    with pytest.raises(EOFError):
        prompter.ask_bool("Go?")


def test_ask_str_truncates():
    prompter, _ = make("hello world\n")
    assert prompter.ask_str("Say", 5) == "hello"


def test_ask_str_short_input():
    prompter, _ = make("hey\n")
    assert prompter.ask_str("Say", 10) == "hey"


def test_ask_line():
    prompter, out = make("some text\n")
    assert prompter.ask_line("Enter") == "some text"
    assert ":: Enter:" in out.getvalue()


def test_ask_line_empty():
    prompter, _ = make("\n")
    assert prompter.ask_line("Enter") == ""


def test_ask_line_eof():
    prompter, _ = make("")
    with pytest.raises(EOFError):
        prompter.ask_line("Enter")