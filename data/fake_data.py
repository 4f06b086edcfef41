"""Gerador de dados de demonstração para o Sirius Edu.

Cria turmas com alunos, conteúdo programático, grade horária, diário gerado
e algumas notas lançadas, sempre pela API do Store. Com o mesmo seed o
resultado é reproduzível (ids sequenciais + matrículas com seed).

Situações incluídas de propósito:
  1. Turma com mais aulas do que tópicos → aulas no fim do ano sem tópico
  2. Notas parciais → parte dos alunos sem Bimestral (média baixa)
  3. Bônus de leitura que estoura 10 → média limitada a 10,0
"""

import random
from datetime import date
from typing import Optional

from config.defaults import ASSESSMENTS, GRADE_OPTIONS, LETTER_OPTIONS
from config.schema import AppConfig, PlannerConfig
from store.ids import RegistrationNumberGenerator, SequentialIdGenerator
from store.store import Store

# ─── Listas de nomes ──────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Ana", "Beatriz", "Bruno", "Caio", "Camila", "Daniel", "Eduarda", "Felipe",
    "Gabriel", "Giovana", "Heitor", "Isabela", "João", "Julia", "Lucas",
    "Larissa", "Mariana", "Matheus", "Nicole", "Pedro", "Rafaela", "Samuel",
    "Sofia", "Thiago", "Valentina", "Vitor", "Yasmin",
]

_LAST_NAMES = [
    "Silva", "Santos", "Oliveira", "Souza", "Rodrigues", "Ferreira", "Alves",
    "Pereira", "Lima", "Gomes", "Costa", "Ribeiro", "Martins", "Carvalho",
    "Almeida", "Lopes", "Soares", "Fernandes", "Vieira", "Barbosa",
]

# ─── Conteúdo programático por disciplina ─────────────────────────────────────

_SYLLABI: dict[str, list[str]] = {
    "Matemática": [
        "Conjuntos numéricos", "Operações com frações", "Potenciação",
        "Radiciação", "Expressões algébricas", "Equações do 1º grau",
        "Sistemas de equações", "Razão e proporção", "Porcentagem",
        "Ângulos e retas", "Triângulos", "Teorema de Pitágoras",
    ],
    "Português": [
        "Classes de palavras", "Substantivo e adjetivo", "Verbos: tempos e modos",
        "Concordância verbal", "Concordância nominal", "Crase",
        "Gêneros textuais", "Crônica", "Artigo de opinião", "Figuras de linguagem",
    ],
    "História": [
        "Grandes Navegações", "Brasil Colônia", "Ciclo do açúcar",
        "Ciclo do ouro", "Inconfidência Mineira", "Independência do Brasil",
        "Período Regencial", "Segundo Reinado",
    ],
    "Ciências": [
        "Célula", "Tecidos", "Sistema digestório", "Sistema respiratório",
        "Sistema circulatório", "Ecologia", "Cadeias alimentares",
    ],
}

# Grade horária padrão por disciplina: {dia (0 = domingo): aulas}
_SCHEDULES: dict[str, dict[int, int]] = {
    "Matemática": {1: 2, 3: 2, 5: 1},
    "Português":  {2: 2, 4: 2},
    "História":   {1: 1, 4: 1},
    "Ciências":   {3: 1, 5: 2},
}


class DemoDataGenerator:
    """Monta um Store completo de demonstração."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        seed: Optional[int] = None,
        students_per_class: int = 12,
    ) -> None:
        self.config = config
        self.rng = random.Random(seed)
        self.seed = seed
        self.students_per_class = students_per_class

    def _make_store(self) -> Store:
        holidays = self.config.planner.holiday_pairs if self.config else None
        return Store(
            ids=SequentialIdGenerator(prefix="demo"),
            registration=RegistrationNumberGenerator(seed=self.seed),
            holidays=holidays,
        )

    def _student_names(self) -> list[str]:
        names: list[str] = []
        while len(names) < self.students_per_class:
            name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
            if name not in names:
                names.append(name)
        return names

    def _random_score(self) -> str:
        """Nota entre 3,0 e 10,0 com uma casa decimal."""
        return f"{self.rng.randint(30, 100) / 10:.1f}"

    def _fill_grades(self, store: Store, class_id: str) -> None:
        cls = store.get_class(class_id)
        for student in cls.students:
            for assessment_id in ("m1", "m2", "m3", "res"):
                store.set_score(class_id, student.id, assessment_id, self._random_score())
            # Um terço dos alunos ainda sem prova bimestral
            if self.rng.random() > 1 / 3:
                store.set_score(class_id, student.id, "bi", self._random_score())
        # Bônus de leitura para o primeiro aluno (média acima de 10 é limitada)
        if cls.students:
            store.set_score(class_id, cls.students[0].id, "read", "5")

    # ─── Conjunto completo ───────────────────────────────────────────────────

    def generate(self, year: Optional[int] = None, login_name: str = "Professor(a) Demo") -> Store:
        year = year or date.today().year
        store = self._make_store()
        store.login(login_name)

        planner = self.config.planner if self.config is not None else PlannerConfig()
        start, end = planner.period_for(year)

        grade_options = self.rng.sample(GRADE_OPTIONS, k=len(_SYLLABI))
        for (subject, topics), grade_option in zip(_SYLLABI.items(), grade_options):
            letter = self.rng.choice(LETTER_OPTIONS)
            cls = store.create_class(grade_option, letter, subject)
            store.import_students(cls.id, "\n".join(self._student_names()))
            store.save_planning(cls.id, "\n".join(topics), _SCHEDULES[subject])
            store.generate_diary(cls.id, start, end)
            self._fill_grades(store, cls.id)

        return store

    # ─── Saída ────────────────────────────────────────────────────────────────

    def print_summary(self, store: Store) -> None:
        """Tabela rich com o resumo dos dados gerados."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Dados de demonstração", box=box.ROUNDED)
        table.add_column("Turma", style="bold cyan")
        table.add_column("Disciplina")
        table.add_column("Alunos", justify="right")
        table.add_column("Aulas", justify="right")
        table.add_column("Notas", justify="right")

        for c in store.classes:
            table.add_row(c.name, c.subject, str(len(c.students)),
                          str(len(c.lessons)), f"{c.filled_grades}/{len(c.students) * len(ASSESSMENTS)}")
        console.print(table)
