"""Cálculo da média ponderada e lançamento de notas.

Fórmula:
    média_mensal = (M1 + M2 + M3) / 3
    base         = (média_mensal + Pesquisa + 2 × Bimestral) / 4
    final        = base + Leitura (bônus), limitada a 10

Notas ficam guardadas como texto ("" = não lançada, separador decimal ".").
"""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel

from config.defaults import ASSESSMENTS, MAX_SCORE, MONTHLY_ASSESSMENTS
from models.class_group import ClassGroup, GradeMap

logger = logging.getLogger(__name__)


class ScoreValidationError(ValueError):
    """Nota fora de [0, 10] ou texto não numérico."""


class FillMode(str, Enum):
    FILL_EMPTY = "fill-empty"         # só alunos sem nota
    OVERWRITE_ALL = "overwrite-all"   # todos os alunos


class GradeResult(BaseModel):
    """Média final de um aluno: texto para exibição e valor numérico."""

    display: str   # "7,5"
    value: float


# ─── Conversão e validação ────────────────────────────────────────────────────

def parse_score(text: Optional[str]) -> float:
    """Converte a nota guardada em número; vazio ou inválido vale 0."""
    if not text:
        return 0.0
    try:
        value = float(text.strip().replace(",", "."))
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def normalize_score(text: str, allow_empty: bool = True) -> str:
    """Valida uma nota digitada e devolve o texto com ponto decimal.

    Aceita vírgula ou ponto. "" limpa a nota (se allow_empty).
    Levanta ScoreValidationError para texto não numérico ou fora de [0, 10].
    """
    cleaned = text.strip().replace(",", ".")
    if cleaned == "":
        if allow_empty:
            return ""
        raise ScoreValidationError("Informe uma nota entre 0 e 10.")
    try:
        value = float(cleaned)
    except ValueError:
        raise ScoreValidationError(f"Nota inválida: '{text}'")
    if not math.isfinite(value) or value < 0 or value > MAX_SCORE:
        raise ScoreValidationError(f"Nota fora do intervalo 0-10: '{text}'")
    return cleaned


def format_score(value: float) -> str:
    """Uma casa decimal com vírgula: 7.25 → "7,3"."""
    rounded = Decimal(repr(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return str(rounded).replace(".", ",")


# ─── Média ────────────────────────────────────────────────────────────────────

def compute_average(scores: Mapping[str, str]) -> GradeResult:
    """Calcula a média final de um aluno a partir das notas em texto."""
    monthly_avg = sum(parse_score(scores.get(a)) for a in MONTHLY_ASSESSMENTS) / 3
    research = parse_score(scores.get("res"))
    bimonthly = parse_score(scores.get("bi"))
    base = (monthly_avg + research + bimonthly * ASSESSMENTS["bi"]["weight"]) / 4

    final = base + parse_score(scores.get("read"))
    if final > MAX_SCORE:
        final = MAX_SCORE
    return GradeResult(display=format_score(final), value=final)


def class_averages(class_group: ClassGroup) -> dict[str, GradeResult]:
    """Média final de cada aluno da turma."""
    return {
        s.id: compute_average(class_group.grades.get(s.id, {}))
        for s in class_group.students
    }


# ─── Lançamento ───────────────────────────────────────────────────────────────

def set_score(grades: GradeMap, student_id: str, assessment_id: str, value: str) -> GradeMap:
    """Retorna um novo GradeMap com a nota lançada (valor já validado)."""
    if assessment_id not in ASSESSMENTS:
        raise KeyError(f"Avaliação desconhecida: {assessment_id}")
    updated = {sid: dict(scores) for sid, scores in grades.items()}
    updated.setdefault(student_id, {})[assessment_id] = value
    return updated


def bulk_fill(
    grades: GradeMap,
    student_ids: list[str],
    assessment_id: str,
    value: str,
    mode: FillMode = FillMode.FILL_EMPTY,
) -> tuple[GradeMap, int]:
    """Replica uma nota para todos os alunos numa avaliação.

    FILL_EMPTY pula alunos que já têm nota; OVERWRITE_ALL substitui tudo.
    O valor é validado uma vez antes de qualquer escrita.
    Retorna (novo GradeMap, quantidade de alunos alterados).
    """
    if assessment_id not in ASSESSMENTS:
        raise KeyError(f"Avaliação desconhecida: {assessment_id}")
    clean = normalize_score(value, allow_empty=False)
    mode = FillMode(mode)

    updated = {sid: dict(scores) for sid, scores in grades.items()}
    written = 0
    for sid in student_ids:
        current = updated.get(sid, {}).get(assessment_id, "")
        if mode == FillMode.FILL_EMPTY and current:
            continue
        updated.setdefault(sid, {})[assessment_id] = clean
        written += 1

    logger.info(f"Replicar nota {clean} em {assessment_id} ({mode.value}): {written} alunos")
    return updated, written
