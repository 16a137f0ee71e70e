"""
Input Normalization Utilities
=============================

Single source of truth for input normalization.
All parsing of query-string inputs happens here, nowhere else.

Usage:
    from utils.normalize import to_int, to_month, InvalidParameter

    @bp.route("/statistics")
    def statistics():
        month = to_month(request.args.get("month"))
        page = to_int(request.args.get("page"), default=1, min_value=1, field="page")

InvalidParameter propagates to the app-level error handler, which turns it
into a 400 envelope. Routes do not catch it.
"""

from typing import Optional, Sequence

from constants import MIN_MONTH, MAX_MONTH, MIN_YEAR, MAX_YEAR


class InvalidParameter(ValueError):
    """Raised when a request parameter is missing, malformed or out of range."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value

    @property
    def details(self) -> Optional[str]:
        if self.field is None:
            return None
        if self.received_value is None:
            return f"{self.field}: missing"
        return f"{self.field}: received {self.received_value!r}"


def to_int(
    value: Optional[str],
    *,
    default: Optional[int] = None,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    field: str = None
) -> Optional[int]:
    """
    Convert string to int, with explicit None handling and optional bounds.

    Args:
        value: Input string (typically from request.args.get())
        default: Value to return if input is None or empty
        min_value: Inclusive lower bound
        max_value: Inclusive upper bound
        field: Field name for error messages

    Returns:
        Parsed integer or default

    Raises:
        InvalidParameter: If value is not an integer or is out of bounds
    """
    if value is None or str(value).strip() == "":
        return default
    try:
        result = int(str(value).strip())
    except (ValueError, TypeError):
        raise InvalidParameter(
            f"Expected integer for {field or 'value'}, got: {value!r}",
            field=field,
            received_value=value
        )

    if min_value is not None and result < min_value:
        raise InvalidParameter(
            f"{field or 'value'} must be >= {min_value}, got: {result}",
            field=field,
            received_value=value
        )
    if max_value is not None and result > max_value:
        raise InvalidParameter(
            f"{field or 'value'} must be <= {max_value}, got: {result}",
            field=field,
            received_value=value
        )
    return result


def to_float(value: Optional[str], *, default: Optional[float] = None) -> Optional[float]:
    """
    Best-effort float parse. Returns default instead of raising.

    Used where a non-numeric input is legal (free-text search).
    """
    if value is None or str(value).strip() == "":
        return default
    try:
        result = float(str(value).strip())
    except (ValueError, TypeError):
        return default
    # float() accepts 'nan' and 'inf'; neither is a usable price
    if result != result or result in (float("inf"), float("-inf")):
        return default
    return result


def to_str(
    value: Optional[str],
    *,
    default: Optional[str] = None,
    strip: bool = True,
) -> Optional[str]:
    """
    Normalize string input, optionally stripping whitespace.

    Whitespace-only input is treated as empty.
    """
    if value is None or value == "":
        return default
    result = str(value)
    if strip:
        result = result.strip()
    if result == "":
        return default
    return result


def to_choice(
    value: Optional[str],
    choices: Sequence[str],
    *,
    default: Optional[str] = None,
    field: str = None
) -> Optional[str]:
    """
    Match input against a fixed set of string choices (case-insensitive).

    Raises:
        InvalidParameter: If value doesn't match any choice
    """
    if value is None or str(value).strip() == "":
        return default

    value_lower = str(value).strip().lower()
    for choice in choices:
        if choice.lower() == value_lower:
            return choice

    raise InvalidParameter(
        f"Expected one of {list(choices)}, got: {value!r}",
        field=field,
        received_value=value
    )


def to_month(value: Optional[str], *, field: str = "month") -> int:
    """
    Parse a required 1-based month number.

    Raises:
        InvalidParameter: If missing, non-numeric, or outside 1-12
    """
    if value is None or str(value).strip() == "":
        raise InvalidParameter(
            "Please provide a valid month (1-12)",
            field=field,
            received_value=None
        )
    return to_int(value, min_value=MIN_MONTH, max_value=MAX_MONTH, field=field)


def to_year(value: Optional[str], *, field: str = "year") -> Optional[int]:
    """Parse an optional four-digit year."""
    return to_int(value, default=None, min_value=MIN_YEAR, max_value=MAX_YEAR, field=field)
