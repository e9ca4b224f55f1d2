import pytest

from kelplsp.messages import (
    Expectation,
    ExpectationKind,
    ParseError,
    format_expected,
    generate_message_error,
)


def test_format_expected_empty():
    assert format_expected([]) == ""


def test_format_expected_one():
    assert format_expected(["x"]) == "expected x"


def test_format_expected_two():
    assert format_expected(["a", "b"]) == "expected a or b"


def test_format_expected_three():
    assert format_expected(["a", "b", "c"]) == "expected a, b, or c"


def test_format_expected_accepts_non_strings():
    result = format_expected([7, 8])
    assert "7" in result and "8" in result
    assert result.startswith("expected ")


@pytest.mark.parametrize(
    "kind, text",
    [
        (ExpectationKind.DIGIT, "digit"),
        (ExpectationKind.IDENTIFIER, "identifier"),
        (ExpectationKind.NEWLINE_WHITESPACE, "whitespace containing a newline"),
        (ExpectationKind.WHITESPACE, "whitespace"),
        (ExpectationKind.START_OF_FILE, "start of file"),
        (ExpectationKind.END_OF_FILE, "end of file"),
    ],
)
def test_fixed_descriptions(kind, text):
    assert Expectation(kind).describe() == text


def test_literal_is_double_quoted():
    described = Expectation.literal("fn").describe()
    assert described[0] == '"' and described[-1] == '"'
    assert described[1:-1] == "fn"


def test_char_is_single_quoted():
    described = Expectation.char("{").describe()
    assert described[0] == "'" and described[-1] == "'"
    assert described[1:-1] == "{"


def test_custom_is_verbatim():
    assert Expectation.custom("a statement").describe() == "a statement"


def test_char_requires_single_character():
    with pytest.raises(ValueError):
        Expectation.char("ab")


def test_valued_kind_requires_value():
    with pytest.raises(ValueError):
        Expectation(ExpectationKind.LITERAL)


def test_plain_kind_rejects_value():
    with pytest.raises(ValueError):
        Expectation(ExpectationKind.DIGIT, "1")


def test_messages_take_precedence_over_expectations():
    error = ParseError(
        start=0,
        end=1,
        messages=["m1", "m2"],
        expected=[Expectation(ExpectationKind.DIGIT)],
    )
    result = generate_message_error(error)
    assert result == format_expected(["m1", "m2"])
    assert "digit" not in result


def test_expectations_are_described():
    expected = [
        Expectation.literal("if"),
        Expectation(ExpectationKind.DIGIT),
        Expectation(ExpectationKind.END_OF_FILE),
    ]
    result = generate_message_error(ParseError(expected=expected))
    assert result == format_expected([e.describe() for e in expected])
    assert "digit" in result
    assert result.endswith("end of file")


def test_empty_error_gives_empty_message():
    assert generate_message_error(ParseError()) == ""