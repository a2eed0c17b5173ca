"""Query parameter parsing."""
from typing import Optional, Set
from ledger.errors import InvalidParameterError

# Largest value SQLite can bind as an INTEGER.
SQLITE_MAX_INTEGER = 2 ** 63 - 1


def fits_sqlite_integer(value: int) -> bool:
    """True if value can be bound as a SQLite INTEGER."""
    return -SQLITE_MAX_INTEGER - 1 <= value <= SQLITE_MAX_INTEGER


def parse_positive_int(
    value: Optional[str],
    name: str,
    default: int,
    maximum: int = SQLITE_MAX_INTEGER,
) -> int:
    """
    Parse an integer parameter that must be between 1 and maximum.

    Args:
        value: Raw parameter value, or None when absent
        name: Parameter name used in the error message
        default: Value used when the parameter is absent
        maximum: Largest accepted value

    Returns:
        Parsed integer

    Raises:
        InvalidParameterError: If the value is not an integer or is out of range
    """
    if value is None:
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if parsed < 1:
        raise InvalidParameterError(f"{name} must be greater than or equal to 1")
    if parsed > maximum:
        raise InvalidParameterError(f"{name} must be less than or equal to {maximum}")
    return parsed


def parse_categories(value: Optional[str]) -> Set[str]:
    """Split a comma-separated category list into a set; blanks are dropped."""
    if not value:
        return set()
    return {part.strip() for part in value.split(",") if part.strip()}
