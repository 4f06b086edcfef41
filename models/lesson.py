"""Modelo de aula do diário de classe (Pydantic v2)."""

from datetime import date

from pydantic import BaseModel


class Lesson(BaseModel):
    """Uma aula com data, tópico e conteúdo.

    Várias aulas no mesmo dia são diferenciadas por lesson_index (1, 2, ...).
    """

    id: str
    class_id: str
    date: str              # ISO "YYYY-MM-DD"
    topic: str = ""
    content: str = ""
    completed: bool = False
    lesson_index: int = 1

    @property
    def day(self) -> date:
        return date.fromisoformat(self.date)
