from datetime import datetime

import pytest

from wokkibot.validator import (
    AnswerValidator,
    calculate_similarity,
    clean_string,
    edit_distance,
    extract_number,
    parse_date,
)


@pytest.mark.parametrize(
    "correct, answer, expected",
    [
        ("Paris", "paris", True),
        ("Paris", "London", False),
        ("Albert Einstein", "einstein", True),
        ("Albert Einstein", "Albert Newton", False),
        ("July 20, 1969", "1969", True),
        ("July 20, 1969", "1970", False),
        ("42 meters", "42", True),
        ("Mississippi River", "Misisippi River", True),
        ("Mississippi River", "Missouri River", False),
        ("March 5, 1999", "March 1999", True),
        ("March 5, 1999", "April 1999", False),
    ],
)
def test_validate(correct, answer, expected):
    assert AnswerValidator(correct).validate(answer) is expected


def test_clean_string_strips_punctuation_and_case():
    assert clean_string("  Hello, World!  ") == "hello world"


def test_extract_number_returns_first_run():
    assert extract_number("abc 123 def 45") == "123"
    assert extract_number("no digits") == ""


def test_parse_date_iso():
    assert parse_date("2006-01-02") == datetime(2006, 1, 2)


def test_parse_date_day_and_year():
    assert parse_date("15/2006") == datetime(2006, 1, 15)


def test_parse_date_year_in_text():
    assert parse_date("in the year 1987 perhaps") == datetime(1987, 1, 1)


def test_parse_date_none():
    assert parse_date("not a date") is None


def test_edit_distance_identity_and_empty():
    assert edit_distance("abc", "abc") == 0
    assert edit_distance("", "abcd") == 4


def test_edit_distance_known_pair():
    assert edit_distance("kitten", "sitting") == 3


def test_edit_distance_symmetric():
    assert edit_distance("flaw", "lawn") == edit_distance("lawn", "flaw")


def test_similarity_bounds():
    assert calculate_similarity("abc", "abc") == 1.0
    assert calculate_similarity("", "") == 1.0
    value = calculate_similarity("abcdef", "abcxyz")
    assert 0.0 <= value < 1.0