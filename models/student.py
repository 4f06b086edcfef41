"""Modelo de aluno (Pydantic v2)."""

from pydantic import BaseModel, field_validator


class Student(BaseModel):
    """Um aluno matriculado em exatamente uma turma."""

    id: str
    name: str
    registration_number: str   # Matrícula; unicidade não é verificada

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Nome do aluno não pode ficar em branco.")
        return v


def sort_students(students: list[Student]) -> list[Student]:
    """Ordena por nome (sem diferenciar maiúsculas)."""
    return sorted(students, key=lambda s: (s.name.casefold(), s.name))
