from .daily import daily_click_samples
from .normalize import normalize_samples

__all__ = ["daily_click_samples", "normalize_samples"]
