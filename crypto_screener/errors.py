class TickerFeedError(Exception):
    """Raised when the ticker API answers with a payload we cannot read."""
