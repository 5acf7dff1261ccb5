"""Lenient checking of typed trivia answers against the correct one."""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from typing import Optional, Union

_DATE_FORMATS = (
    (re.compile(r"[0-9]{4}"), "%Y"),
    (re.compile(r"[A-Za-z]+ [0-9]{4}"), "%B %Y"),
    (re.compile(r"[A-Za-z]+ [0-9]{4}"), "%b %Y"),
    (re.compile(r"[0-9]{1,2}/[0-9]{4}"), "%d/%Y"),
    (re.compile(r"[0-9]{2}/[0-9]{2}/[0-9]{4}"), "%m/%d/%Y"),
    (re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}"), "%Y-%m-%d"),
    (re.compile(r"[A-Za-z]+ [0-9]{1,2}, [0-9]{4}"), "%B %d, %Y"),
    (re.compile(r"[A-Za-z]+ [0-9]{1,2}, [0-9]{4}"), "%b %d, %Y"),
)
_YEAR_PATTERN = re.compile(r"\b(19|20)[0-9]{2}\b", re.ASCII)
_NUMBER_PATTERN = re.compile(r"[0-9]+")

SIMILARITY_THRESHOLD = 0.85
SHORT_ANSWER_LENGTH = 5


def clean_string(s: str) -> str:
    """Drop punctuation, lower-case and trim."""
    kept = "".join(ch for ch in s if not unicodedata.category(ch).startswith("P"))
    return kept.lower().strip()


def _contains_only_letters(s: str) -> bool:
    return all(ch.isalpha() or ch.isspace() for ch in s)


def _equal_fold(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def extract_number(s: str) -> str:
    """Return the first run of digits, or an empty string."""
    match = _NUMBER_PATTERN.search(s)
    return match.group(0) if match else ""


def parse_date(date: str) -> Optional[datetime]:
    """Read a date in one of several forms, falling back to a bare year."""
    for pattern, fmt in _DATE_FORMATS:
        if not pattern.fullmatch(date):
            continue
        try:
            return datetime.strptime(date, fmt)
        except ValueError:
            continue
    match = _YEAR_PATTERN.search(date)
    if match:
        return datetime(int(match.group(0)), 1, 1)
    return None


def _as_bytes(s: Union[str, bytes]) -> bytes:
    return s.encode("utf-8") if isinstance(s, str) else s


def edit_distance(s1: Union[str, bytes], s2: Union[str, bytes]) -> int:
    """Levenshtein distance between the UTF-8 encodings of two strings."""
    a, b = _as_bytes(s1), _as_bytes(s2)
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j], current[j - 1], previous[j - 1]))
        previous = current
    return previous[-1]


def calculate_similarity(s1: str, s2: str) -> float:
    """Similarity from 0 to 1, based on edit distance over the longer length."""
    if s1 == s2:
        return 1.0
    a, b = _as_bytes(s1), _as_bytes(s2)
    longer, shorter = (b, a) if len(a) < len(b) else (a, b)
    if not longer:
        return 1.0
    return (len(longer) - edit_distance(longer, shorter)) / len(longer)


class AnswerValidator:
    """Decides whether a user's answer is close enough to the correct one."""

    def __init__(self, correct_answer: str) -> None:
        self.correct_answer = correct_answer

    def validate(self, user_answer: str) -> bool:
        return (
            self._validate_date(user_answer)
            or self._validate_number(user_answer)
            or self._validate_name(user_answer)
            or self._validate_general(user_answer)
        )

    def _validate_name(self, user_answer: str) -> bool:
        user = clean_string(user_answer).split()
        correct = clean_string(self.correct_answer).split()

        if not _contains_only_letters(user_answer) or not _contains_only_letters(
            self.correct_answer
        ):
            return False

        if len(user) == 1:
            return any(_equal_fold(user[0], part) for part in correct)

        if len(user) != len(correct):
            return False
        return all(_equal_fold(u, c) for u, c in zip(user, correct))

    def _validate_date(self, user_answer: str) -> bool:
        user_date = parse_date(user_answer)
        correct_date = parse_date(self.correct_answer)
        if user_date is None or correct_date is None:
            return False
        if user_date.day == 1 and user_date.month == 1:
            return user_date.year == correct_date.year
        if user_date.day == 1:
            return (user_date.year, user_date.month) == (correct_date.year, correct_date.month)
        return user_date == correct_date

    def _validate_number(self, user_answer: str) -> bool:
        user_number = extract_number(clean_string(user_answer))
        correct_number = extract_number(clean_string(self.correct_answer))
        if not user_number or not correct_number:
            return False
        return user_number == correct_number

    def _validate_general(self, user_answer: str) -> bool:
        user = clean_string(user_answer)
        correct = clean_string(self.correct_answer)
        if len(correct.encode("utf-8")) <= SHORT_ANSWER_LENGTH:
            return _equal_fold(user, correct)
        return calculate_similarity(user, correct) >= SIMILARITY_THRESHOLD