"""Modelo de turma com alunos, grade horária, aulas e notas (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, Field

from models.student import Student
from models.lesson import Lesson


# aluno → avaliação → nota em texto ("" = não lançada)
GradeMap = dict[str, dict[str, str]]


class ClassSchedule(BaseModel):
    """Quantidade de aulas num dia da semana."""

    day_of_week: int = Field(ge=0, le=6)   # 0 = domingo
    lessons_count: int = Field(gt=0)


class ClassGroup(BaseModel):
    """Uma turma: disciplina, alunos, grade horária, aulas e notas.

    A turma é dona exclusiva das listas; excluir a turma apaga tudo.
    """

    id: str
    teacher_id: str
    name: str                          # "6º Ano - Fundamental II - Turma A"
    subject: str                       # "Matemática"
    schedule: list[ClassSchedule] = []
    students: list[Student] = []
    planning_text: str = ""            # Conteúdo programático, um tópico por linha
    lessons: list[Lesson] = []
    grades: GradeMap = {}

    @property
    def weekly_schedule(self) -> dict[int, int]:
        """Grade horária como {dia_da_semana: aulas}."""
        return {s.day_of_week: s.lessons_count for s in self.schedule}

    @property
    def weekly_lessons(self) -> int:
        return sum(s.lessons_count for s in self.schedule)

    def get_student(self, student_id: str) -> Optional[Student]:
        return next((s for s in self.students if s.id == student_id), None)

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return next((l for l in self.lessons if l.id == lesson_id), None)

    def scores_for(self, student_id: str) -> dict[str, str]:
        """Notas de um aluno (dicionário vazio se nada foi lançado)."""
        return dict(self.grades.get(student_id, {}))

    @property
    def filled_grades(self) -> int:
        """Quantidade de notas guardadas no boletim da turma."""
        return sum(len(scores) for scores in self.grades.values())
