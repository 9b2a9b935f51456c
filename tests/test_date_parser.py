"""Tests for date parsing and month arithmetic."""

import pytest
from datetime import date, datetime, timedelta

from pocketledger.utils.date_parser import end_of_month, first_day_next_month, parse_date, start_of_month

# A Saturday
TODAY = date(2024, 6, 15)


class TestParseDate:
    def test_absolute_formats(self):
        assert parse_date("2024-01-15") == date(2024, 1, 15)
        assert parse_date("January 15, 2024") == date(2024, 1, 15)
        assert parse_date("  2024-03-01 ") == date(2024, 3, 1)

    def test_simple_relative(self):
        assert parse_date("today", today=TODAY) == TODAY
        assert parse_date("Yesterday", today=TODAY) == date(2024, 6, 14)
        assert parse_date("tomorrow", today=TODAY) == date(2024, 6, 16)

    def test_relative_periods(self):
        assert parse_date("last month", today=TODAY) == date(2024, 5, 1)
        assert parse_date("this month", today=TODAY) == date(2024, 6, 1)
        assert parse_date("next month", today=TODAY) == date(2024, 7, 1)
        assert parse_date("last year", today=TODAY) == date(2023, 1, 1)
        assert parse_date("this week", today=TODAY) == date(2024, 6, 10)

    def test_last_month_in_january(self):
        assert parse_date("last month", today=date(2024, 1, 31)) == date(2023, 12, 1)

    def test_last_weekday(self):
        assert parse_date("last friday", today=TODAY) == date(2024, 6, 14)
        # Same weekday goes back a full week
        assert parse_date("last saturday", today=TODAY) == date(2024, 6, 8)

    def test_defaults_to_today(self):
        assert parse_date("today") == date.today()

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_date("not a date")


class TestMonthBounds:
    def test_start_of_month(self):
        assert start_of_month(date(2024, 6, 15)) == date(2024, 6, 1)
        assert start_of_month(datetime(2024, 6, 15, 10, 30)) == datetime(2024, 6, 1)

    def test_end_of_month_dates(self):
        assert end_of_month(date(2024, 2, 10)) == date(2024, 2, 29)
        assert end_of_month(date(2023, 2, 10)) == date(2023, 2, 28)
        assert end_of_month(date(2024, 12, 1)) == date(2024, 12, 31)

    def test_end_of_month_datetime_is_last_instant(self):
        end = end_of_month(datetime(2024, 6, 15, 10, 30))
        assert end == datetime(2024, 6, 30, 23, 59, 59, 999999)
        assert end + timedelta(microseconds=1) == datetime(2024, 7, 1)

    def test_first_day_next_month(self):
        assert first_day_next_month(date(2024, 12, 31)) == date(2025, 1, 1)
        assert first_day_next_month(datetime(2024, 6, 15, 10, 30)) == datetime(2024, 7, 1)
