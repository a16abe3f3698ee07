"""Exceptions raised by the statistics engine.

Degenerate inputs (empty lists, zero variance, no losses) never raise; they
return the documented sentinel values. Only genuinely malformed calls do.
"""


class InvalidArgumentError(ValueError):
    """Base error for a malformed call into the statistics engine."""

    pass


class InvalidTimeframeError(InvalidArgumentError):
    """Timeframe is not one of 'day', 'week' or 'month'."""

    def __init__(self, timeframe: object):
        self.timeframe = timeframe
        super().__init__(f"Invalid timeframe: {timeframe!r} (expected 'day', 'week' or 'month')")


class InvalidTradeError(InvalidArgumentError):
    """Trade prices or quantity cannot produce a profit calculation."""

    pass
