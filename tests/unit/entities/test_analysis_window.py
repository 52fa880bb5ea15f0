# tests/unit/entities/test_analysis_window.py

from datetime import date, datetime

import pytest

from market_sentiment.domain.errors import InvalidWindow
from market_sentiment.entities.analysis_window import AnalysisWindow


def test_last_n_days_includes_today():
    window = AnalysisWindow.last_n_days(7, date(2024, 1, 10))

    assert window.start == date(2024, 1, 3)
    assert window.end == date(2024, 1, 10)
    assert window.days_inclusive == 8
    assert window.days()[0] == date(2024, 1, 3)
    assert window.days()[-1] == date(2024, 1, 10)


def test_single_day_window():
    window = AnalysisWindow(date(2024, 2, 29), date(2024, 2, 29))

    assert window.days_inclusive == 1
    assert window.days() == [date(2024, 2, 29)]


def test_window_crossing_month_and_leap_day():
    window = AnalysisWindow(date(2024, 2, 27), date(2024, 3, 2))

    assert window.days() == [
        date(2024, 2, 27),
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
        date(2024, 3, 2),
    ]


def test_start_after_end_is_invalid():
    with pytest.raises(InvalidWindow):
        AnalysisWindow(date(2024, 1, 2), date(2024, 1, 1))


@pytest.mark.parametrize("days", [0, -3])
def test_non_positive_day_count_is_invalid(days):
    with pytest.raises(InvalidWindow):
        AnalysisWindow.last_n_days(days, date(2024, 1, 10))


def test_datetime_bounds_are_rejected():
    with pytest.raises(InvalidWindow):
        AnalysisWindow(datetime(2024, 1, 1, 10), date(2024, 1, 2))


def test_invalid_window_is_a_value_error():
    assert issubclass(InvalidWindow, ValueError)


def test_contains():
    window = AnalysisWindow(date(2024, 1, 1), date(2024, 1, 3))

    assert window.contains(date(2024, 1, 2))
    assert not window.contains(date(2024, 1, 4))
