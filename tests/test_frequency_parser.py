"""Tests for the free-text dose and frequency parser.

The parser must return None for anything it cannot read; the duration
estimator is the only place that decides what a missing value means.
"""

from __future__ import annotations

import pytest

from medtimeline.services.frequency_parser import parse_dose, parse_frequency, parse_prescription


# --- dose ---


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1 viên", 1.0),
        ("2 gói", 2.0),
        ("5ml", 5.0),
        ("1 ống", 1.0),
        ("2,5 ml", 2.5),
        ("1g", 1.0),
        ("Uống 2 viên", 2.0),
    ],
)
def test_parse_dose_unit_quantities(text: str, expected: float) -> None:
    assert parse_dose(text) == expected


def test_parse_dose_fraction_takes_precedence() -> None:
    """'1/2 viên' is half a tablet, not two tablets."""
    assert parse_dose("1/2 viên") == 0.5
    assert parse_dose("3/4") == 0.75


@pytest.mark.parametrize("text", ["10mg", "500 mg", "", None, "theo chỉ định", "1/0 viên"])
def test_parse_dose_unreadable_is_none(text) -> None:
    """Strengths and free text are not per-administration counts."""
    assert parse_dose(text) is None


# --- frequency ---


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2 lần/ngày", 2),
        ("ngày 3 lần", 3),
        ("Ngày 1 lần", 1),
        ("4 viên/ngày", 4),
        ("2 lần / 1 ngày", 2),
    ],
)
def test_parse_frequency_explicit_counts(text: str, expected: int) -> None:
    assert parse_frequency(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("sáng tối", 2),
        ("Sáng, trưa, chiều, tối", 4),
        ("Tối 1 viên", 1),
        ("tối, trước ngủ", 2),
        ("khuya", 1),
    ],
)
def test_parse_frequency_time_of_day(text: str, expected: int) -> None:
    """Frequency is the number of distinct time-of-day words."""
    assert parse_frequency(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("bid", 2),
        ("twice daily", 2),
        ("TDS", 3),
        ("once daily", 1),
        ("1-0-1", 2),
        ("1-1-1-1", 4),
        ("every 8 hours", 3),
        ("q6h", 4),
        ("8h-20h", 2),
    ],
)
def test_parse_frequency_shorthand(text: str, expected: int) -> None:
    assert parse_frequency(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("ngày 2 lần x 5 ngày", 2),
        ("Sáng 1 viên, dùng 10 ngày", 1),
        ("2 lần/ngày trong 7 ngày", 2),
        ("ngày uống 3 lần", 3),
    ],
)
def test_parse_frequency_ignores_course_length(text: str, expected: int) -> None:
    """'x 5 ngày' is how long the course runs, not doses per day."""
    assert parse_frequency(text) == expected


def test_parse_frequency_bare_day_count_is_unreadable() -> None:
    assert parse_frequency("dùng 10 ngày") is None


def test_parse_frequency_explicit_zero() -> None:
    """An explicit zero is returned as 0, distinct from 'unreadable'."""
    assert parse_frequency("0 lần/ngày") == 0


@pytest.mark.parametrize("text", ["", None, "khi đau", "theo chỉ định"])
def test_parse_frequency_unreadable_is_none(text) -> None:
    assert parse_frequency(text) is None


def test_parse_prescription_daily_dose() -> None:
    regimen = parse_prescription("1/2 viên", "sáng tối")
    assert regimen.dose_per_admin == 0.5
    assert regimen.frequency_per_day == 2
    assert regimen.daily_dose == 1.0


def test_parse_prescription_missing_half_has_no_daily_dose() -> None:
    regimen = parse_prescription("10mg", "2 lần/ngày")
    assert regimen.dose_per_admin is None
    assert regimen.daily_dose is None
