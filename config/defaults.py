from config.schema import (
    AIConfig,
    AppConfig,
    Holiday,
    PlannerConfig,
)


# ─── Feriados nacionais fixos (dia, mês) ──────────────────────────────────────
# Sem feriados móveis (Carnaval, Sexta-feira Santa, Corpus Christi).

FIXED_HOLIDAYS: list[Holiday] = [
    Holiday(day=1,  month=1,  name="Confraternização Universal"),
    Holiday(day=21, month=4,  name="Tiradentes"),
    Holiday(day=1,  month=5,  name="Dia do Trabalho"),
    Holiday(day=7,  month=9,  name="Independência do Brasil"),
    Holiday(day=12, month=10, name="Nossa Senhora Aparecida"),
    Holiday(day=2,  month=11, name="Finados"),
    Holiday(day=15, month=11, name="Proclamação da República"),
    Holiday(day=25, month=12, name="Natal"),
]

# ─── Avaliações do boletim ────────────────────────────────────────────────────
# id → metadados. weight 0 = bônus somado depois da média.

ASSESSMENTS: dict[str, dict] = {
    "m1":   {"group": "Mensal",    "title": "Mensal 1",   "short": "M1",   "weight": 1},
    "m2":   {"group": "Mensal",    "title": "Mensal 2",   "short": "M2",   "weight": 1},
    "m3":   {"group": "Mensal",    "title": "Mensal 3",   "short": "M3",   "weight": 1},
    "res":  {"group": "Trabalhos", "title": "Pesquisa",   "short": "Pesq", "weight": 1},
    "bi":   {"group": "Bimestral", "title": "Prova Bim.", "short": "Bim",  "weight": 2},
    "read": {"group": "Extras",    "title": "Leitura",    "short": "Leit", "weight": 0},
}

MONTHLY_ASSESSMENTS = ["m1", "m2", "m3"]

MAX_SCORE = 10.0

# ─── Turmas ───────────────────────────────────────────────────────────────────

GRADE_OPTIONS: list[str] = [
    "6º Ano - Fundamental II",
    "7º Ano - Fundamental II",
    "8º Ano - Fundamental II",
    "9º Ano - Fundamental II",
    "1ª Série - Ensino Médio",
    "2ª Série - Ensino Médio",
    "3ª Série - Ensino Médio",
]

SINGLE_SECTION = "Única"

LETTER_OPTIONS: list[str] = ["A", "B", "C", "D", "E", SINGLE_SECTION]

# Índice = dia da semana com 0 = domingo
WEEKDAY_NAMES: list[str] = [
    "Domingo", "Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sábado",
]

# Dias oferecidos na grade horária (segunda a sexta)
SCHOOL_WEEKDAYS: list[int] = [1, 2, 3, 4, 5]


def default_planner_config() -> PlannerConfig:
    """Período letivo de 01/02 a 15/12 com os feriados nacionais fixos."""
    return PlannerConfig(
        default_start="02-01",
        default_end="12-15",
        holidays=[h.model_copy() for h in FIXED_HOLIDAYS],
    )


def default_app_config() -> AppConfig:
    """Configuração completa padrão."""
    return AppConfig(
        school_name="Colégio Estrela Sirius",
        planner=default_planner_config(),
        ai=AIConfig(),
        log_level="WARNING",
    )
