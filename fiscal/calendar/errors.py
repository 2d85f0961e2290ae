from __future__ import annotations


class FiscalCalendarError(ValueError):
    """Base class for every error raised by the conversion engine."""

    kind = "fiscal_calendar_error"


class InvalidDirection(FiscalCalendarError):
    """`from`/`to` is unknown, or the pair is not a supported conversion."""

    kind = "invalid_direction"


class MalformedInput(FiscalCalendarError):
    """Input does not have the shape expected for its `from` type."""

    kind = "malformed_input"


class OutOfRange(FiscalCalendarError):
    """Parsed date or fiscal week lies outside the configured range."""

    kind = "out_of_range"


class NotConfigured(FiscalCalendarError):
    """A year inside the range has no offset entry. Configuration bug, not caller error."""

    kind = "not_configured"
