"""Gerador do diário de classe."""

from .distribution import (
    DistributionError,
    distribute,
    is_holiday,
    parse_topics,
    weekday_index,
)

__all__ = [
    "DistributionError",
    "distribute",
    "is_holiday",
    "parse_topics",
    "weekday_index",
]
