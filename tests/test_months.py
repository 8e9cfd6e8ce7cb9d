"""Month key parsing and arithmetic."""
from datetime import date, datetime

import pytest

from fintrack.services.errors import InvalidMonthError
from fintrack.services.months import current_month, month_key, parse_month, shift_month


class TestParseMonth:
    @pytest.mark.parametrize(
        "raw",
        ["2026-03", "2026-03-01", "2026-03-17", "2026-3", "2026-03-01T00:00:00.000Z", "2026-03-31 23:59", "2026-03-02T08:00:00+02:00"],
    )
    def test_normalises_to_first_of_month(self, raw):
        assert parse_month(raw) == date(2026, 3, 1)

    def test_accepts_dates_and_datetimes(self):
        assert parse_month(date(2025, 12, 31)) == date(2025, 12, 1)
        assert parse_month(datetime(2025, 12, 31, 23, 59)) == date(2025, 12, 1)

    @pytest.mark.parametrize(
        "raw",
        ["", "March 2026", "2026-13-01", "2026-02-30", "26-03", None, 202603, "2026-09-01 garbage", "2026-09-01T"],
    )
    def test_rejects_malformed_months(self, raw):
        with pytest.raises(InvalidMonthError):
            parse_month(raw)


def test_month_key_is_first_of_month_string():
    assert month_key(date(2026, 7, 1)) == "2026-07-01"


class TestShiftMonth:
    def test_crosses_year_boundaries(self):
        assert shift_month(date(2026, 12, 1), 1) == date(2027, 1, 1)
        assert shift_month(date(2026, 1, 1), -1) == date(2025, 12, 1)

    def test_multiple_months(self):
        assert shift_month(date(2026, 5, 1), -17) == date(2024, 12, 1)


def test_current_month_uses_given_day():
    assert current_month(date(2026, 10, 19)) == date(2026, 10, 1)
