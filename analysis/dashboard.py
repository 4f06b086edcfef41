"""Indicadores do painel: totais, atividade por turma e busca."""

from pydantic import BaseModel

from models.class_group import ClassGroup


class ClassActivity(BaseModel):
    """Uma linha do gráfico "Atividade por Turma"."""

    class_id: str
    name: str
    subject: str
    students: int
    lessons: int
    filled_grades: int


class DashboardStats(BaseModel):
    """Resumo de todas as turmas da sessão."""

    total_students: int
    total_classes: int
    total_lessons: int
    filled_grades: int
    activity: list[ClassActivity]

    @property
    def is_empty(self) -> bool:
        return self.total_classes == 0


def compute_dashboard(classes: list[ClassGroup]) -> DashboardStats:
    activity = [
        ClassActivity(
            class_id=c.id,
            name=c.name,
            subject=c.subject,
            students=len(c.students),
            lessons=len(c.lessons),
            filled_grades=c.filled_grades,
        )
        for c in classes
    ]
    return DashboardStats(
        total_students=sum(a.students for a in activity),
        total_classes=len(classes),
        total_lessons=sum(a.lessons for a in activity),
        filled_grades=sum(a.filled_grades for a in activity),
        activity=activity,
    )


def filter_classes(classes: list[ClassGroup], term: str) -> list[ClassGroup]:
    """Busca por nome da turma ou disciplina, sem diferenciar maiúsculas."""
    needle = term.strip().casefold()
    if not needle:
        return list(classes)
    return [
        c for c in classes
        if needle in c.name.casefold() or needle in c.subject.casefold()
    ]


def greeting(hour: int) -> str:
    if hour < 12:
        return "Bom dia"
    if hour < 18:
        return "Boa tarde"
    return "Boa noite"
