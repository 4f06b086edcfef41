"""Montagem das tabelas exibidas no terminal.

As funções *_rows devolvem listas de células (testáveis sem terminal);
as funções *_table embrulham essas linhas em tabelas rich.
"""

from typing import Optional

from rich import box
from rich.table import Table

from analysis.dashboard import DashboardStats
from config.defaults import ASSESSMENTS, WEEKDAY_NAMES
from export.helpers import format_lesson_date, lesson_weekday_name
from gradebook.grading import class_averages
from models.class_group import ClassGroup


def roster_rows(cls: ClassGroup) -> list[list[str]]:
    """[nº, nome, matrícula] por aluno, na ordem da lista."""
    return [
        [str(idx), s.name, s.registration_number]
        for idx, s in enumerate(cls.students, 1)
    ]


def schedule_rows(cls: ClassGroup) -> list[list[str]]:
    """[dia, aulas] para cada dia da grade horária."""
    return [
        [WEEKDAY_NAMES[s.day_of_week], str(s.lessons_count)]
        for s in sorted(cls.schedule, key=lambda s: s.day_of_week)
    ]


def diary_rows(cls: ClassGroup, limit: Optional[int] = None) -> list[list[str]]:
    """[nº, data, dia, aula, tópico, conteúdo] por aula.

    O conteúdo é encurtado para caber na tela.
    """
    rows: list[list[str]] = []
    for idx, lesson in enumerate(cls.lessons, 1):
        content = lesson.content.replace("\n", " ")
        if len(content) > 60:
            content = content[:57] + "..."
        rows.append([
            str(idx),
            format_lesson_date(lesson),
            lesson_weekday_name(lesson),
            f"{lesson.lesson_index}ª",
            lesson.topic or "—",
            content,
        ])
        if limit is not None and len(rows) >= limit:
            break
    return rows


def gradebook_rows(cls: ClassGroup) -> list[list[str]]:
    """[nº, aluno, M1, M2, M3, Pesq, Bim, Leit, Média] com vírgula decimal."""
    averages = class_averages(cls)
    rows: list[list[str]] = []
    for idx, student in enumerate(cls.students, 1):
        scores = cls.grades.get(student.id, {})
        cells = [str(idx), student.name]
        for assessment_id in ASSESSMENTS:
            raw = scores.get(assessment_id, "")
            cells.append(raw.replace(".", ",") if raw else "-")
        cells.append(averages[student.id].display)
        rows.append(cells)
    return rows


# ─── Tabelas rich ─────────────────────────────────────────────────────────────

def dashboard_table(stats: DashboardStats) -> Table:
    table = Table(title="Atividade por Turma", box=box.ROUNDED)
    table.add_column("Turma", style="bold")
    table.add_column("Disciplina")
    table.add_column("Alunos", justify="right")
    table.add_column("Aulas", justify="right")
    table.add_column("Notas", justify="right")
    for a in stats.activity:
        table.add_row(a.name, a.subject, str(a.students), str(a.lessons), str(a.filled_grades))
    table.add_row(
        "[bold]Total[/bold]", "",
        f"[bold]{stats.total_students}[/bold]",
        f"[bold]{stats.total_lessons}[/bold]",
        f"[bold]{stats.filled_grades}[/bold]",
    )
    return table


def roster_table(cls: ClassGroup) -> Table:
    table = Table(title=f"Alunos - {cls.name}", box=box.ROUNDED)
    table.add_column("Nº", justify="right", style="dim")
    table.add_column("Nome", style="bold")
    table.add_column("Matrícula")
    for row in roster_rows(cls):
        table.add_row(*row)
    return table


def schedule_table(cls: ClassGroup) -> Table:
    table = Table(title="Grade Horária", box=box.SIMPLE)
    table.add_column("Dia", style="bold")
    table.add_column("Aulas", justify="right")
    for row in schedule_rows(cls):
        table.add_row(*row)
    return table


def diary_table(cls: ClassGroup, limit: Optional[int] = None) -> Table:
    table = Table(title=f"Diário - {cls.name} - {cls.subject}", box=box.ROUNDED)
    table.add_column("Nº", justify="right", style="dim")
    table.add_column("Data")
    table.add_column("Dia")
    table.add_column("Aula", justify="center")
    table.add_column("Tópico", style="bold")
    table.add_column("Conteúdo")
    for row in diary_rows(cls, limit):
        table.add_row(*row)
    return table


def gradebook_table(cls: ClassGroup) -> Table:
    table = Table(title=f"Notas - {cls.name} - {cls.subject}", box=box.ROUNDED)
    table.add_column("Nº", justify="right", style="dim")
    table.add_column("Aluno", style="bold")
    for meta in ASSESSMENTS.values():
        label = meta["short"] if meta["weight"] else f"{meta['short']} (+)"
        table.add_column(label, justify="right")
    table.add_column("Média", justify="right", style="bold cyan")
    for row in gradebook_rows(cls):
        table.add_row(*row)
    return table
