from __future__ import annotations


class ChartDataError(ValueError):
    """Raised when sample input cannot be coerced into an ordered series."""
