"""Date parsing utilities for query parameters."""
from datetime import date, datetime
from typing import Optional
from ledger.errors import InvalidParameterError


def parse_date(s: Optional[str], name: str = "date") -> Optional[date]:
    """
    Parse a query-string date into a calendar date.

    Supports:
    - ISO date: "2024-01-02"
    - ISO timestamp, time part ignored: "2024-01-02T09:10:00Z"

    Args:
        s: Raw parameter value, or None when the parameter was absent
        name: Parameter name used in the error message

    Returns:
        date object, or None when s is None or blank

    Raises:
        InvalidParameterError: If the value cannot be parsed
    """
    if s is None:
        return None

    s = s.strip()
    if not s:
        return None

    try:
        return date.fromisoformat(s)
    except ValueError:
        pass

    # Timestamps: convert trailing "Z" so fromisoformat accepts it
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass

    raise InvalidParameterError(
        f"Invalid {name}: {s!r}. Expected ISO format (e.g., '2024-01-02')"
    )


def require_date(s: Optional[str], name: str) -> date:
    """Parse a mandatory date parameter."""
    parsed = parse_date(s, name)
    if parsed is None:
        raise InvalidParameterError(f"{name} is required")
    return parsed
