"""Boletim: média ponderada e lançamento de notas."""

from .grading import (
    FillMode,
    GradeResult,
    ScoreValidationError,
    bulk_fill,
    class_averages,
    compute_average,
    format_score,
    normalize_score,
    parse_score,
    set_score,
)

__all__ = [
    "FillMode",
    "GradeResult",
    "ScoreValidationError",
    "bulk_fill",
    "class_averages",
    "compute_average",
    "format_score",
    "normalize_score",
    "parse_score",
    "set_score",
]
