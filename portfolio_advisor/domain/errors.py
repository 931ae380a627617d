"""
Domain errors.

Only failures that must reach the caller are exceptions. Missing or bad
per-symbol data is reported through SeriesFetch statuses and
ExclusionReason values instead.
"""


class PortfolioAdvisorError(Exception):
    """Base class for advisor errors"""


class PrimaryIndicatorUnavailable(PortfolioAdvisorError):
    """The benchmark series could not be fetched; no regime can be computed"""

    def __init__(self, symbol: str, detail: str = ""):
        self.symbol = symbol
        self.detail = detail
        message = f"Benchmark data unavailable for {symbol}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
