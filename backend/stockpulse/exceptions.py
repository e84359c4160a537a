"""Domain errors raised by the scoring core and the market-data layer.

All errors derive from StockPulseError so the API can map them to HTTP
responses in one place. None of them are fatal to the application.
"""


class StockPulseError(Exception):
    """Base class for all StockPulse errors.

    Attributes:
        message: Short human-readable description shown to the user.
        symbol: The ticker involved, when there is one.
    """

    status_code = 500

    def __init__(self, message: str, *, symbol: str | None = None) -> None:
        self.message = message
        self.symbol = symbol
        super().__init__(message)


class InvalidSymbol(StockPulseError):
    """Raised for a malformed ticker, before any network call is made."""

    status_code = 400


class NotFound(StockPulseError):
    """Raised when the upstream source has no data for a well-formed symbol."""

    status_code = 404


class FetchFailed(StockPulseError):
    """Raised on a transport or parse failure talking to the market-data source."""

    status_code = 502


class InvalidBundle(StockPulseError):
    """Raised when a fundamentals bundle has the wrong categories or scores."""

    status_code = 422
