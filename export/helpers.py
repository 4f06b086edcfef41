"""Funções auxiliares compartilhadas pelo relatório Excel e pela tela."""

from datetime import date

from config.defaults import WEEKDAY_NAMES
from gradebook.grading import GradeResult
from models.lesson import Lesson
from planner.distribution import weekday_index

# ─── Paleta de cores (RRGGBB, sem #) ──────────────────────────────────────────

COLORS: dict[str, str] = {
    "header":     "4472C4",
    "failing":    "FFCCCC",
    "passing":    "CCFFCC",
    "empty":      "FFF2B3",
}

# Média mínima para aprovação (apenas destaque visual)
PASSING_AVERAGE = 6.0


def today_str() -> str:
    """Data de hoje como DD/MM/AAAA."""
    return date.today().strftime("%d/%m/%Y")


def format_lesson_date(lesson: Lesson) -> str:
    """Data curta: "2024-03-04" → "04/03"."""
    d = lesson.day
    return f"{d.day:02d}/{d.month:02d}"


def lesson_weekday_name(lesson: Lesson) -> str:
    """Nome do dia da semana da aula ("Segunda", ...)."""
    return WEEKDAY_NAMES[weekday_index(lesson.day)]


def average_color(result: GradeResult) -> str:
    """Verde para média ≥ 6, vermelho abaixo."""
    return COLORS["passing"] if result.value >= PASSING_AVERAGE else COLORS["failing"]
