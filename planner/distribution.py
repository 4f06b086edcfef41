"""Distribuição do conteúdo programático no calendário.

Percorre dia a dia o período letivo, pula os feriados fixos e gera, para cada
dia da semana configurado na grade horária, a quantidade de aulas indicada.
Cada aula consome o próximo tópico da lista; quando os tópicos acabam, as
aulas continuam sendo geradas com tópico e conteúdo vazios.
"""

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from models.lesson import Lesson

if TYPE_CHECKING:
    from store.ids import IdGenerator

logger = logging.getLogger(__name__)

MSG_NO_TOPICS = "Ops! Cole seu conteúdo programático na aba 'Planejamento'."
MSG_NO_SCHEDULE = "Configure a Grade Horária na aba 'Planejamento'."


class DistributionError(ValueError):
    """Pré-condição da distribuição não atendida (sem tópicos ou sem grade)."""


def parse_topics(planning_text: str) -> list[str]:
    """Um tópico por linha; linhas em branco são ignoradas."""
    return [line.strip() for line in planning_text.splitlines() if line.strip()]


def weekday_index(day: date) -> int:
    """Dia da semana com 0 = domingo ... 6 = sábado."""
    return (day.weekday() + 1) % 7


def is_holiday(day: date, holidays: Optional[Iterable[tuple[int, int]]] = None) -> bool:
    """True se (dia, mês) consta na tabela de feriados fixos."""
    if holidays is None:
        from config.defaults import FIXED_HOLIDAYS
        holidays = {(h.day, h.month) for h in FIXED_HOLIDAYS}
    elif not isinstance(holidays, (set, frozenset)):
        holidays = set(holidays)
    return (day.day, day.month) in holidays


def iter_days(start_date: date, end_date: date):
    """Todos os dias de start_date até end_date (inclusive)."""
    day = start_date
    while day <= end_date:
        yield day
        day += timedelta(days=1)


def distribute(
    topics: list[str],
    start_date: date,
    end_date: date,
    weekday_schedule: Mapping[int, int],
    class_id: str = "",
    id_generator: Optional["IdGenerator"] = None,
    holidays: Optional[Iterable[tuple[int, int]]] = None,
) -> list[Lesson]:
    """Gera a lista completa de aulas do período.

    weekday_schedule: {dia_da_semana (0 = domingo): aulas no dia}.
    Levanta DistributionError se não houver tópicos ou grade horária.
    Se start_date > end_date, retorna lista vazia.
    """
    if not topics:
        raise DistributionError(MSG_NO_TOPICS)
    active = {day: count for day, count in weekday_schedule.items() if count > 0}
    if not active:
        raise DistributionError(MSG_NO_SCHEDULE)

    if id_generator is None:
        from store.ids import UuidIdGenerator
        id_generator = UuidIdGenerator()
    if holidays is None:
        from config.defaults import FIXED_HOLIDAYS
        holiday_set = {(h.day, h.month) for h in FIXED_HOLIDAYS}
    else:
        holiday_set = set(holidays)

    lessons: list[Lesson] = []
    topic_index = 0
    skipped = 0

    for day in iter_days(start_date, end_date):
        count = active.get(weekday_index(day), 0)
        if count == 0:
            continue
        if is_holiday(day, holiday_set):
            skipped += 1
            continue
        iso = day.isoformat()
        for i in range(count):
            topic = topics[topic_index] if topic_index < len(topics) else ""
            lessons.append(Lesson(
                id=id_generator.new_id(),
                class_id=class_id,
                date=iso,
                topic=topic,
                content=topic,
                completed=False,
                lesson_index=i + 1,
            ))
            if topic:
                topic_index += 1

    logger.info(
        f"Distribuição: {len(lessons)} aulas, {min(topic_index, len(topics))}/"
        f"{len(topics)} tópicos usados, {skipped} feriados pulados"
    )
    if topic_index < len(topics):
        logger.warning(
            f"Distribuição: {len(topics) - topic_index} tópicos não couberam no período"
        )
    return lessons
