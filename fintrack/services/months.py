"""Month keys: every valuation is bucketed on the first day of its calendar month."""
import re
from datetime import date, datetime
from typing import Optional, Union

from fintrack.services.errors import InvalidMonthError

_MONTH_RE = re.compile(
    r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?$"
)


def parse_month(value: Union[str, date, datetime]) -> date:
    """Normalise `YYYY-MM`, `YYYY-MM-DD` (or a date) to the first of its month."""
    if isinstance(value, datetime):
        return date(value.year, value.month, 1)
    if isinstance(value, date):
        return date(value.year, value.month, 1)
    if not isinstance(value, str):
        raise InvalidMonthError(value)

    match = _MONTH_RE.match(value.strip())
    if not match:
        raise InvalidMonthError(value)
    year, month, day = match.groups()
    try:
        # validates the day too, so 2024-02-30 is rejected
        parsed = date(int(year), int(month), int(day or 1))
    except ValueError:
        raise InvalidMonthError(value) from None
    return date(parsed.year, parsed.month, 1)


def month_key(value: date) -> str:
    """`YYYY-MM-01` wire representation."""
    return f"{value.year:04d}-{value.month:02d}-01"


def shift_month(value: date, months: int) -> date:
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def current_month(today: Optional[date] = None) -> date:
    return parse_month(today or date.today())
