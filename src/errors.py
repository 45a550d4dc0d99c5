"""Exception types raised by stores and scrapers."""


class StoreError(Exception):
    """Raised when a model store operation cannot be completed."""


class ScraperError(Exception):
    """Raised when a scraper cannot obtain observations from its source."""
