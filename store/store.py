"""Store: contêiner explícito do estado da sessão (turmas e usuário logado).

Toda mutação substitui coleções inteiras (copy-on-write via model_copy); nada
é alterado no lugar, então quem guardou um AppState antigo continua vendo o
estado antigo. Exclusões são feitas em duas fases: request_delete_* devolve
um PendingDeletion e só confirm_delete() aplica a mudança.
"""

import logging
from datetime import date
from typing import TYPE_CHECKING, Literal, Mapping, Optional

from pydantic import BaseModel

from config.defaults import GRADE_OPTIONS, LETTER_OPTIONS, SINGLE_SECTION
from config.schema import Role
from gradebook.grading import (
    FillMode,
    GradeResult,
    ScoreValidationError,
    bulk_fill,
    class_averages,
    normalize_score,
    set_score,
)
from models.class_group import ClassGroup, ClassSchedule
from models.lesson import Lesson
from models.student import Student, sort_students
from models.user import User
from planner.distribution import distribute, parse_topics
from store.ids import IdGenerator, RegistrationNumberGenerator, UuidIdGenerator

if TYPE_CHECKING:
    from services.ai_suggestions import LessonSuggestionService

logger = logging.getLogger(__name__)


# ─── Erros ────────────────────────────────────────────────────────────────────

class ClassNotFoundError(LookupError):
    """Turma inexistente."""


class StudentNotFoundError(LookupError):
    """Aluno inexistente na turma."""


class LessonNotFoundError(LookupError):
    """Aula inexistente no diário da turma."""


class UnknownConfirmationError(LookupError):
    """Token de confirmação desconhecido ou já usado."""


class DiaryOverwriteError(Exception):
    """A turma já tem aulas e a sobrescrita não foi confirmada."""


class SuggestionInProgressError(Exception):
    """Já existe uma sugestão de IA em andamento para esta aula."""


# ─── Estado ───────────────────────────────────────────────────────────────────

class AppState(BaseModel):
    """Estado completo da sessão."""

    classes: list[ClassGroup] = []
    current_user: Optional[User] = None


class PendingDeletion(BaseModel):
    """Exclusão aguardando confirmação."""

    token: str
    kind: Literal["class", "student", "lesson"]
    class_id: str
    target_id: str
    message: str   # Pergunta mostrada ao usuário


class Store:
    """Dono do AppState; todas as operações de CRUD passam por aqui."""

    def __init__(
        self,
        state: Optional[AppState] = None,
        ids: Optional[IdGenerator] = None,
        registration: Optional[RegistrationNumberGenerator] = None,
        holidays: Optional[set[tuple[int, int]]] = None,
    ) -> None:
        self._state = state or AppState()
        self.ids = ids or UuidIdGenerator()
        self.registration = registration or RegistrationNumberGenerator()
        self.holidays = holidays
        self._pending: dict[str, PendingDeletion] = {}
        self._suggestions_running: set[str] = set()

    # ─── Leitura ───

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def classes(self) -> list[ClassGroup]:
        return list(self._state.classes)

    @property
    def current_user(self) -> Optional[User]:
        return self._state.current_user

    def get_class(self, class_id: str) -> ClassGroup:
        for c in self._state.classes:
            if c.id == class_id:
                return c
        raise ClassNotFoundError(f"Turma não encontrada: {class_id}")

    def _commit(self, **update) -> None:
        self._state = self._state.model_copy(update=update)

    def _replace_class(self, updated: ClassGroup) -> None:
        self._commit(classes=[
            updated if c.id == updated.id else c for c in self._state.classes
        ])

    # ─── Sessão ───

    def login(self, name: str, role: Role = Role.TEACHER) -> User:
        """Login só com nome (sem validação de credenciais)."""
        name = name.strip()
        if not name:
            raise ValueError("Informe seu nome para entrar.")
        user = User(id=self.ids.new_id(), name=name, role=Role(role))
        self._commit(current_user=user)
        logger.info(f"Login: {user.name} ({user.role.value})")
        return user

    def logout(self) -> None:
        self._commit(current_user=None)

    # ─── Turmas ───

    @staticmethod
    def compose_class_name(grade_option: str, letter: str) -> str:
        """'6º Ano - Fundamental II' + 'A' → '6º Ano - Fundamental II - Turma A'."""
        section = SINGLE_SECTION if letter == SINGLE_SECTION else f"Turma {letter}"
        return f"{grade_option} - {section}"

    def create_class(self, grade_option: str, letter: str, subject: str) -> ClassGroup:
        if grade_option not in GRADE_OPTIONS:
            raise ValueError(f"Série desconhecida: {grade_option}")
        if letter not in LETTER_OPTIONS:
            raise ValueError(f"Turma desconhecida: {letter}")
        subject = subject.strip()
        if not subject:
            raise ValueError("Informe a disciplina da turma.")

        user = self._state.current_user
        new_class = ClassGroup(
            id=self.ids.new_id(),
            teacher_id=user.id if user else "current",
            name=self.compose_class_name(grade_option, letter),
            subject=subject,
        )
        self._commit(classes=self._state.classes + [new_class])
        logger.info(f"Turma criada: {new_class.name} - {new_class.subject}")
        return new_class

    # ─── Alunos ───

    def add_student(
        self, class_id: str, name: str, registration_number: Optional[str] = None
    ) -> Student:
        """Adiciona um aluno; sem matrícula informada, gera uma aleatória."""
        cls = self.get_class(class_id)
        reg = (registration_number or "").strip() or self.registration.new_number()
        student = Student(id=self.ids.new_id(), name=name, registration_number=reg)
        self._replace_class(cls.model_copy(update={
            "students": sort_students(cls.students + [student]),
        }))
        return student

    def import_students(self, class_id: str, text: str) -> list[Student]:
        """Importação em lote: um nome por linha."""
        cls = self.get_class(class_id)
        new_students = [
            Student(
                id=self.ids.new_id(),
                name=line.strip(),
                registration_number=self.registration.new_number(),
            )
            for line in text.splitlines() if line.strip()
        ]
        if new_students:
            self._replace_class(cls.model_copy(update={
                "students": sort_students(cls.students + new_students),
            }))
        logger.info(f"{len(new_students)} alunos importados em {cls.name}")
        return new_students

    # ─── Exclusão em duas fases ───

    def _request(self, kind: str, class_id: str, target_id: str, message: str) -> PendingDeletion:
        pending = PendingDeletion(
            token=self.ids.new_id(), kind=kind,
            class_id=class_id, target_id=target_id, message=message,
        )
        self._pending[pending.token] = pending
        return pending

    def request_delete_class(self, class_id: str) -> PendingDeletion:
        cls = self.get_class(class_id)
        return self._request(
            "class", cls.id, cls.id,
            f"Tem certeza que deseja excluir a turma {cls.name} e todos os seus dados?",
        )

    def request_delete_student(self, class_id: str, student_id: str) -> PendingDeletion:
        cls = self.get_class(class_id)
        student = cls.get_student(student_id)
        if student is None:
            raise StudentNotFoundError(f"Aluno não encontrado: {student_id}")
        return self._request(
            "student", cls.id, student.id, f"Remover o aluno {student.name}?",
        )

    def request_delete_lesson(self, class_id: str, lesson_id: str) -> PendingDeletion:
        cls = self.get_class(class_id)
        if cls.get_lesson(lesson_id) is None:
            raise LessonNotFoundError(f"Aula não encontrada: {lesson_id}")
        return self._request(
            "lesson", cls.id, lesson_id, "Remover esta aula do diário?",
        )

    def pending_deletions(self) -> list[PendingDeletion]:
        return list(self._pending.values())

    def cancel_delete(self, token: str) -> None:
        if self._pending.pop(token, None) is None:
            raise UnknownConfirmationError(f"Confirmação desconhecida: {token}")

    def confirm_delete(self, token: str) -> None:
        """Aplica a exclusão pendente. O token só vale uma vez."""
        pending = self._pending.pop(token, None)
        if pending is None:
            raise UnknownConfirmationError(f"Confirmação desconhecida: {token}")

        if pending.kind == "class":
            # Alunos, aulas e notas pertencem à turma e somem junto
            before = len(self._state.classes)
            self._commit(classes=[
                c for c in self._state.classes if c.id != pending.class_id
            ])
            if len(self._state.classes) == before:
                raise ClassNotFoundError(f"Turma não encontrada: {pending.class_id}")
            logger.info(f"Turma excluída: {pending.class_id}")
            return

        cls = self.get_class(pending.class_id)
        if pending.kind == "student":
            grades = {sid: g for sid, g in cls.grades.items() if sid != pending.target_id}
            self._replace_class(cls.model_copy(update={
                "students": [s for s in cls.students if s.id != pending.target_id],
                "grades": grades,
            }))
        else:
            self._replace_class(cls.model_copy(update={
                "lessons": [l for l in cls.lessons if l.id != pending.target_id],
            }))
        logger.info(f"Excluído ({pending.kind}): {pending.target_id}")

    # ─── Planejamento e diário ───

    def save_planning(
        self, class_id: str, planning_text: str, weekly_schedule: Mapping[int, int]
    ) -> ClassGroup:
        """Guarda o conteúdo programático e a grade horária (zeros são descartados)."""
        cls = self.get_class(class_id)
        schedule = [
            ClassSchedule(day_of_week=day, lessons_count=count)
            for day, count in sorted(weekly_schedule.items()) if count > 0
        ]
        updated = cls.model_copy(update={
            "planning_text": planning_text,
            "schedule": schedule,
        })
        self._replace_class(updated)
        return updated

    def generate_diary(
        self, class_id: str, start_date: date, end_date: date, overwrite: bool = False
    ) -> list[Lesson]:
        """Gera o diário inteiro a partir do planejamento salvo.

        Substitui todas as aulas da turma. Se já houver aulas, exige
        overwrite=True (senão DiaryOverwriteError). Propaga DistributionError.
        """
        cls = self.get_class(class_id)
        if cls.lessons and not overwrite:
            raise DiaryOverwriteError(
                "Atenção: Já existem aulas geradas. Gerar novamente irá "
                "sobrescrever todo o diário atual."
            )
        lessons = distribute(
            parse_topics(cls.planning_text),
            start_date,
            end_date,
            cls.weekly_schedule,
            class_id=cls.id,
            id_generator=self.ids,
            holidays=self.holidays,
        )
        self._replace_class(cls.model_copy(update={"lessons": lessons}))
        return lessons

    def update_lesson(
        self,
        class_id: str,
        lesson_id: str,
        topic: Optional[str] = None,
        content: Optional[str] = None,
    ) -> Lesson:
        cls = self.get_class(class_id)
        lesson = cls.get_lesson(lesson_id)
        if lesson is None:
            raise LessonNotFoundError(f"Aula não encontrada: {lesson_id}")
        changes = {}
        if topic is not None:
            changes["topic"] = topic
        if content is not None:
            changes["content"] = content
        updated = lesson.model_copy(update=changes)
        self._replace_class(cls.model_copy(update={
            "lessons": [updated if l.id == lesson_id else l for l in cls.lessons],
        }))
        return updated

    # ─── Notas ───

    def set_score(self, class_id: str, student_id: str, assessment_id: str, value: str) -> bool:
        """Lança uma nota. Entrada inválida é ignorada em silêncio (retorna False)."""
        cls = self.get_class(class_id)
        if cls.get_student(student_id) is None:
            raise StudentNotFoundError(f"Aluno não encontrado: {student_id}")
        try:
            clean = normalize_score(value)
        except ScoreValidationError:
            logger.debug(f"Nota ignorada: {value!r} ({student_id}/{assessment_id})")
            return False
        self._replace_class(cls.model_copy(update={
            "grades": set_score(cls.grades, student_id, assessment_id, clean),
        }))
        return True

    def bulk_fill(
        self,
        class_id: str,
        assessment_id: str,
        value: str,
        mode: FillMode = FillMode.FILL_EMPTY,
    ) -> int:
        """Replica a nota para a turma; valor inválido levanta ScoreValidationError."""
        cls = self.get_class(class_id)
        grades, written = bulk_fill(
            cls.grades, [s.id for s in cls.students], assessment_id, value, mode,
        )
        self._replace_class(cls.model_copy(update={"grades": grades}))
        return written

    def averages(self, class_id: str) -> dict[str, GradeResult]:
        return class_averages(self.get_class(class_id))

    # ─── Sugestão de IA ───

    def is_suggestion_running(self, lesson_id: str) -> bool:
        return lesson_id in self._suggestions_running

    async def request_suggestion(
        self, class_id: str, lesson_id: str, service: "LessonSuggestionService"
    ) -> str:
        """Pede à IA o conteúdo de uma aula e grava o texto retornado.

        Só uma requisição por aula de cada vez; outras aulas não são bloqueadas.
        Se a aula sumir enquanto a resposta chega, o texto é descartado.
        """
        cls = self.get_class(class_id)
        lesson = cls.get_lesson(lesson_id)
        if lesson is None:
            raise LessonNotFoundError(f"Aula não encontrada: {lesson_id}")
        if not lesson.topic.strip():
            raise ValueError("A aula precisa de um tópico para a sugestão.")
        if lesson_id in self._suggestions_running:
            raise SuggestionInProgressError(f"Sugestão já em andamento: {lesson_id}")

        self._suggestions_running.add(lesson_id)
        try:
            suggestion = await service.suggest(cls.subject, lesson.topic, cls.name)
        finally:
            self._suggestions_running.discard(lesson_id)

        try:
            self.update_lesson(class_id, lesson_id, content=suggestion)
        except (ClassNotFoundError, LessonNotFoundError):
            logger.info(f"Sugestão descartada, aula {lesson_id} não existe mais")
        return suggestion
