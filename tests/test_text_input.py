import pytest

from reckon.tui.text_input import TextInput


def typed(field, text):
    for char in text:
        field.handle_key(char)
    return field


@pytest.fixture
def field():
    f = TextInput(prompt="", placeholder="", char_limit=0)
    f.focus()
    return f


def test_unfocused_ignores_keys():
    f = TextInput()
    assert f.handle_key("a") is False
    assert f.value == ""


def test_typing_and_backspace(field):
    typed(field, "abc")
    assert field.value == "abc"
    assert field.handle_key("backspace") is True
    assert field.value == "ab"
    assert field.cursor == 2


def test_space_key_inserts_space(field):
    typed(field, "a")
    field.handle_key("space")
    typed(field, "b")
    assert field.value == "a b"


def test_char_limit():
    f = TextInput(prompt="", placeholder="", char_limit=3)
    f.focus()
    typed(f, "abcdef")
    assert f.value == "abc"
    f.set_value("wxyz")
    assert f.value == "wxy"


def test_insert_at_cursor_and_kill_line(field):
    typed(field, "ac")
    field.handle_key("left")
    field.handle_key("b")
    assert field.value == "abc"
    field.handle_key("ctrl+u")
    assert field.value == "c"
    assert field.cursor == 0


def test_unknown_key_not_used(field):
    assert field.handle_key("ctrl+t") is False
    assert field.value == ""


def test_view_shows_placeholder_then_value():
    f = TextInput(prompt="Add win: ", placeholder="What did you accomplish?", char_limit=200)
    assert f.view() == "Add win: What did you accomplish?"
    f.focus()
    typed(f, "won")
    assert f.view() == "Add win: won"
    f.clear()
    assert f.value == ""
    assert f.view() == "Add win: What did you accomplish?"