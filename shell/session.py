"""Sessão interativa no terminal (menus rich).

Substitui a interface web: login, painel, turmas e alunos, diário e notas.
Coordenação entra em modo somente leitura: os menus de alteração não aparecem.
"""

import asyncio
import logging
from datetime import date, datetime
from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from analysis.dashboard import compute_dashboard, filter_classes, greeting
from config.defaults import ASSESSMENTS, GRADE_OPTIONS, LETTER_OPTIONS, SCHOOL_WEEKDAYS, WEEKDAY_NAMES
from config.schema import AppConfig, Role
from gradebook.grading import FillMode, ScoreValidationError
from models.class_group import ClassGroup
from planner.distribution import DistributionError
from services.ai_suggestions import LessonSuggestionService
from shell.render import (
    dashboard_table, diary_table, gradebook_table, roster_table, schedule_table,
)
from store.store import (
    DiaryOverwriteError,
    PendingDeletion,
    Store,
    SuggestionInProgressError,
)

logger = logging.getLogger(__name__)


def _success(console: Console, text: str) -> None:
    console.print(f"[green]✓[/green] {text}")


def _warn(console: Console, text: str) -> None:
    console.print(f"[yellow]⚠[/yellow]  {text}")


class InteractiveSession:
    """Loop de menus sobre um Store em memória."""

    def __init__(
        self,
        store: Store,
        config: AppConfig,
        service: Optional[LessonSuggestionService] = None,
        console: Optional[Console] = None,
    ) -> None:
        self.store = store
        self.config = config
        self.service = service or LessonSuggestionService(config.ai, school_name=config.school_name)
        self.console = console or Console()

    @property
    def read_only(self) -> bool:
        user = self.store.current_user
        return user is None or user.is_read_only

    # ─── Entrada ───

    def run(self) -> None:
        try:
            if self.store.current_user is None:
                self._login()
            self._main_menu()
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Sessão encerrada.[/yellow]")

    def _login(self) -> None:
        self.console.print(Panel(
            f"[bold]Bem-vindo[/bold]\nAcesse o portal do {self.config.school_name}",
            border_style="cyan",
        ))
        while True:
            name = Prompt.ask("Seu nome completo")
            if name.strip():
                break
        self.console.print("Perfil: [1] Professor  [2] Coordenação")
        role = Role.COORDINATOR if Prompt.ask("Perfil", default="1") == "2" else Role.TEACHER
        self.store.login(name, role)

    def _main_menu(self) -> None:
        while True:
            user = self.store.current_user
            self.console.print()
            self.console.print(Panel(
                f"[bold]{greeting(datetime.now().hour)}, {user.name}[/bold]"
                + ("  [dim](somente leitura)[/dim]" if self.read_only else ""),
                border_style="cyan",
            ))
            self.console.print("  [bold]1.[/bold] Painel")
            self.console.print("  [bold]2.[/bold] Turmas e alunos")
            self.console.print("  [bold]3.[/bold] Diário de classe")
            self.console.print("  [bold]4.[/bold] Notas")
            self.console.print("  [bold]0.[/bold] Sair")

            choice = Prompt.ask("\nOpção", default="1")
            if choice == "1":
                self._dashboard()
            elif choice == "2":
                self._classes_menu()
            elif choice == "3":
                self._diary_menu()
            elif choice == "4":
                self._grades_menu()
            elif choice == "0":
                self.store.logout()
                break
            else:
                self.console.print("[yellow]Opção inválida.[/yellow]")

    # ─── Auxiliares ───

    def _select_class(self) -> Optional[ClassGroup]:
        classes = self.store.classes
        if not classes:
            _warn(self.console, "Nenhuma turma cadastrada.")
            return None
        for idx, c in enumerate(classes, 1):
            self.console.print(f"  [bold]{idx}.[/bold] {c.name} - {c.subject}")
        idx = IntPrompt.ask("Turma", default=1)
        if not 1 <= idx <= len(classes):
            self.console.print("[yellow]Turma inválida.[/yellow]")
            return None
        return classes[idx - 1]

    def _confirm(self, pending: PendingDeletion) -> bool:
        if Confirm.ask(pending.message, default=False):
            self.store.confirm_delete(pending.token)
            return True
        self.store.cancel_delete(pending.token)
        return False

    def _ask_date(self, label: str, default: date) -> date:
        while True:
            raw = Prompt.ask(f"{label} (AAAA-MM-DD)", default=default.isoformat())
            try:
                return date.fromisoformat(raw)
            except ValueError:
                self.console.print("[yellow]Data inválida.[/yellow]")

    # ─── Painel ───

    def _dashboard(self) -> None:
        stats = compute_dashboard(self.store.classes)
        if stats.is_empty:
            self.console.print(Panel(
                "Comece cadastrando suas turmas e importando alunos para liberar "
                "as funções do diário.",
                border_style="yellow",
            ))
            return
        self.console.print(
            f"[bold]Alunos:[/bold] {stats.total_students} | "
            f"[bold]Turmas:[/bold] {stats.total_classes} | "
            f"[bold]Aulas:[/bold] {stats.total_lessons} | "
            f"[bold]Notas:[/bold] {stats.filled_grades}"
        )
        self.console.print(dashboard_table(stats))

        term = Prompt.ask("Buscar turma (Enter para voltar)", default="")
        if term:
            for c in filter_classes(self.store.classes, term):
                self.console.print(f"  • {c.name} - {c.subject}")

    # ─── Turmas e alunos ───

    def _classes_menu(self) -> None:
        while True:
            self.console.print("\n[1] Ver alunos", end="")
            if not self.read_only:
                self.console.print("  [2] Nova turma  [3] Novo aluno  [4] Importar lista"
                                   "  [5] Remover aluno  [6] Excluir turma", end="")
            self.console.print("  [0] Voltar")
            sub = Prompt.ask("Opção", default="0")
            if sub == "0":
                break
            if sub == "1":
                cls = self._select_class()
                if cls:
                    self.console.print(roster_table(cls))
            elif self.read_only:
                self.console.print("[yellow]Opção inválida.[/yellow]")
            elif sub == "2":
                self._create_class()
            elif sub == "3":
                cls = self._select_class()
                if cls:
                    name = Prompt.ask("Nome completo do aluno")
                    reg = Prompt.ask("Matrícula (Enter para gerar)", default="")
                    try:
                        student = self.store.add_student(cls.id, name, reg or None)
                    except ValueError as e:
                        _warn(self.console, str(e))
                        continue
                    _success(self.console, f"{student.name} ({student.registration_number}) adicionado.")
            elif sub == "4":
                cls = self._select_class()
                if cls:
                    self.console.print("[dim]Cole a lista de nomes (um por linha); linha vazia encerra.[/dim]")
                    lines = []
                    while True:
                        line = Prompt.ask("", default="")
                        if not line:
                            break
                        lines.append(line)
                    created = self.store.import_students(cls.id, "\n".join(lines))
                    _success(self.console, f"{len(created)} alunos importados com sucesso!")
            elif sub == "5":
                cls = self._select_class()
                if cls and cls.students:
                    self.console.print(roster_table(cls))
                    idx = IntPrompt.ask("Nº do aluno")
                    if 1 <= idx <= len(cls.students):
                        pending = self.store.request_delete_student(cls.id, cls.students[idx - 1].id)
                        if self._confirm(pending):
                            _success(self.console, "Aluno removido.")
            elif sub == "6":
                cls = self._select_class()
                if cls and self._confirm(self.store.request_delete_class(cls.id)):
                    _success(self.console, "Turma excluída.")
            else:
                self.console.print("[yellow]Opção inválida.[/yellow]")

    def _create_class(self) -> None:
        for idx, opt in enumerate(GRADE_OPTIONS, 1):
            self.console.print(f"  [bold]{idx}.[/bold] {opt}")
        g = IntPrompt.ask("Série", default=1)
        letter = Prompt.ask("Turma", choices=LETTER_OPTIONS, default="A")
        subject = Prompt.ask("Disciplina (ex: Filosofia, Física, Matemática)")
        if not 1 <= g <= len(GRADE_OPTIONS):
            self.console.print("[yellow]Série inválida.[/yellow]")
            return
        try:
            cls = self.store.create_class(GRADE_OPTIONS[g - 1], letter, subject)
        except ValueError as e:
            _warn(self.console, str(e))
            return
        _success(self.console, f"Turma criada: {cls.name} - {cls.subject}")

    # ─── Diário ───

    def _diary_menu(self) -> None:
        cls = self._select_class()
        if cls is None:
            return
        while True:
            cls = self.store.get_class(cls.id)
            self.console.print(f"\n[bold]{cls.name} - {cls.subject}[/bold]  "
                               f"({len(cls.lessons)} aulas)")
            self.console.print("[1] Ver planejamento  [2] Ver diário", end="")
            if not self.read_only:
                self.console.print("  [3] Editar planejamento  [4] Gerar diário"
                                   "  [5] Editar aula  [6] Sugestão IA  [7] Remover aula"
                                   "  [8] Exportar Excel", end="")
            self.console.print("  [0] Voltar")
            sub = Prompt.ask("Opção", default="0")
            if sub == "0":
                break
            if sub == "1":
                self.console.print(Panel(cls.planning_text or "[dim](vazio)[/dim]",
                                         title="Conteúdo programático"))
                self.console.print(schedule_table(cls))
            elif sub == "2":
                self.console.print(diary_table(cls))
            elif self.read_only:
                self.console.print("[yellow]Opção inválida.[/yellow]")
            elif sub == "3":
                self._edit_planning(cls)
            elif sub == "4":
                self._generate_diary(cls)
            elif sub in ("5", "6", "7"):
                lesson = self._select_lesson(cls)
                if lesson is None:
                    continue
                if sub == "5":
                    topic = Prompt.ask("Tópico", default=lesson.topic)
                    content = Prompt.ask("Conteúdo", default=lesson.content)
                    self.store.update_lesson(cls.id, lesson.id, topic=topic, content=content)
                    _success(self.console, "Aula atualizada.")
                elif sub == "6":
                    self._suggest(cls, lesson.id)
                else:
                    if self._confirm(self.store.request_delete_lesson(cls.id, lesson.id)):
                        _success(self.console, "Aula removida.")
            elif sub == "8":
                self._export(cls)
            else:
                self.console.print("[yellow]Opção inválida.[/yellow]")

    def _select_lesson(self, cls: ClassGroup):
        if not cls.lessons:
            _warn(self.console, "Nenhuma aula no diário.")
            return None
        self.console.print(diary_table(cls))
        idx = IntPrompt.ask("Nº da aula")
        if not 1 <= idx <= len(cls.lessons):
            self.console.print("[yellow]Aula inválida.[/yellow]")
            return None
        return cls.lessons[idx - 1]

    def _edit_planning(self, cls: ClassGroup) -> None:
        self.console.print("[dim]Cole aqui seu planejamento (um tópico por linha); "
                           "linha vazia encerra. Enter direto mantém o atual.[/dim]")
        lines = []
        while True:
            line = Prompt.ask("", default="")
            if not line:
                break
            lines.append(line)
        planning_text = "\n".join(lines) if lines else cls.planning_text

        current = cls.weekly_schedule
        schedule: dict[int, int] = {}
        for day in SCHOOL_WEEKDAYS:
            schedule[day] = max(0, IntPrompt.ask(
                f"Aulas na {WEEKDAY_NAMES[day]}", default=current.get(day, 0)))
        self.store.save_planning(cls.id, planning_text, schedule)
        _success(self.console, "Configuração salva.")

    def _generate_diary(self, cls: ClassGroup) -> None:
        default_start, default_end = self.config.planner.period_for(date.today().year)
        start = self._ask_date("Início", default_start)
        end = self._ask_date("Fim", default_end)
        overwrite = False
        if cls.lessons:
            overwrite = Confirm.ask(
                "Atenção: Já existem aulas geradas. Gerar novamente irá sobrescrever "
                "todo o diário atual. Continuar?", default=False)
            if not overwrite:
                return
        try:
            lessons = self.store.generate_diary(cls.id, start, end, overwrite=overwrite)
        except DistributionError as e:
            _warn(self.console, str(e))
            self._edit_planning(self.store.get_class(cls.id))
            return
        except DiaryOverwriteError as e:
            _warn(self.console, str(e))
            return
        _success(self.console, f"Diário gerado: {len(lessons)} aulas.")

    def _suggest(self, cls: ClassGroup, lesson_id: str) -> None:
        lesson = cls.get_lesson(lesson_id)
        if not lesson.topic.strip():
            _warn(self.console, "Informe o tópico da aula antes de pedir sugestão.")
            return
        self.console.print("[dim]Gerando...[/dim]")
        try:
            text = asyncio.run(self.store.request_suggestion(cls.id, lesson_id, self.service))
        except SuggestionInProgressError as e:
            _warn(self.console, str(e))
            return
        self.console.print(Panel(text, title=f"IA Sugerir - {lesson.topic}"))

    def _export(self, cls: ClassGroup) -> None:
        from pathlib import Path
        from export.excel_export import ExcelExporter

        default = f"output/{cls.subject.lower()}_{cls.id}.xlsx"
        path = Path(Prompt.ask("Arquivo", default=default))
        ExcelExporter(cls, school_name=self.config.school_name).export(path)
        _success(self.console, f"Relatório salvo: {path}")

    # ─── Notas ───

    def _grades_menu(self) -> None:
        cls = self._select_class()
        if cls is None:
            return
        assessment_ids = list(ASSESSMENTS)
        while True:
            cls = self.store.get_class(cls.id)
            self.console.print(gradebook_table(cls))
            if self.read_only:
                Prompt.ask("Enter para voltar", default="")
                break
            self.console.print("[1] Lançar nota  [2] Replicar nota  [0] Voltar")
            sub = Prompt.ask("Opção", default="0")
            if sub == "0":
                break
            if sub not in ("1", "2"):
                self.console.print("[yellow]Opção inválida.[/yellow]")
                continue
            assessment_id = Prompt.ask("Avaliação", choices=assessment_ids)
            if sub == "1":
                if not cls.students:
                    _warn(self.console, "Turma sem alunos.")
                    continue
                idx = IntPrompt.ask("Nº do aluno")
                if not 1 <= idx <= len(cls.students):
                    self.console.print("[yellow]Aluno inválido.[/yellow]")
                    continue
                value = Prompt.ask("Nota (0-10, vazio limpa)", default="")
                # Entrada inválida é simplesmente ignorada
                self.store.set_score(cls.id, cls.students[idx - 1].id, assessment_id, value)
            else:
                title = ASSESSMENTS[assessment_id]["title"]
                value = Prompt.ask(f"Nota para {title}", default="10")
                overwrite = Confirm.ask("Substituir notas já lançadas?", default=False)
                mode = FillMode.OVERWRITE_ALL if overwrite else FillMode.FILL_EMPTY
                try:
                    written = self.store.bulk_fill(cls.id, assessment_id, value, mode)
                except ScoreValidationError as e:
                    _warn(self.console, str(e))
                    continue
                _success(self.console, f"Nota aplicada a {written} alunos.")
