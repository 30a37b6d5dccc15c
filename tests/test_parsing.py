import pytest

from philo.parsing import (
    INT_MAX,
    ParseError,
    ParseFailure,
    Settings,
    parse_number,
    parse_settings,
)


@pytest.mark.parametrize(
    "text, expected",
    [("42", 42), ("  +7", 7), ("\t\n12abc", 12), ("0", 0), ("2147483647", INT_MAX)],
)
def test_parse_number_accepts(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize(
    "text, failure",
    [
        ("-5", ParseFailure.NEGATIVE),
        ("+-5", ParseFailure.NEGATIVE),
        ("abc", ParseFailure.NOT_DIGIT),
        ("", ParseFailure.NOT_DIGIT),
        ("++3", ParseFailure.NOT_DIGIT),
        ("2147483648", ParseFailure.MAX_INT),
    ],
)
def test_parse_number_rejects(text, failure):
    with pytest.raises(ParseError) as info:
        parse_number(text)
    assert info.value.failures == (failure,)


def test_parse_settings_without_meals():
    assert parse_settings(["5", "800", "200", "100"]) == Settings(5, 800, 200, 100, None)


def test_parse_settings_with_meals():
    settings = parse_settings(["3", "410", "200", "200", "7"])
    assert settings.meals == 7
    assert settings.count == 3


def test_parse_settings_collects_all_failures():
    with pytest.raises(ParseError) as info:
        parse_settings(["-1", "x", "200", "9999999999"])
    assert info.value.failures == (
        ParseFailure.NEGATIVE,
        ParseFailure.NOT_DIGIT,
        ParseFailure.MAX_INT,
    )


def test_parse_settings_meal_failure_reported_alone():
    with pytest.raises(ParseError) as info:
        parse_settings(["-1", "800", "200", "200", "abc"])
    assert info.value.failures == (ParseFailure.NOT_DIGIT,)


@pytest.mark.parametrize("args", [[], ["1", "2", "3"], ["1"] * 6])
def test_parse_settings_wrong_count(args):
    with pytest.raises(ValueError, match="invalid number of arguments"):
        parse_settings(args)