from datetime import date, datetime, timezone

from src.api.common.constants.months import MONTH_NAMES


def get_current_datetime() -> datetime:
    """Return current UTC datetime with timezone info."""
    dt = datetime.now(timezone.utc)
    # Microseconds are stripped for consistency in tests
    return dt.replace(microsecond=0)


def get_current_date() -> date:
    """Return today's local calendar date."""
    return date.today()


def get_month_name(target: date) -> str:
    """Get the Indonesian name of the month of the given date."""
    return MONTH_NAMES[target.month - 1]


def format_month_year(target: date) -> str:
    """Format a date as 'Oktober 2026', like the id-ID long month/year format."""
    return f"{get_month_name(target)} {target.year}"
