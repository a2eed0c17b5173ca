from .dates import parse_date, require_date
from .params import SQLITE_MAX_INTEGER, fits_sqlite_integer, parse_categories, parse_positive_int

__all__ = [
    "parse_date",
    "require_date",
    "SQLITE_MAX_INTEGER",
    "fits_sqlite_integer",
    "parse_categories",
    "parse_positive_int",
]
