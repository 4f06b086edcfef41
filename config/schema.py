from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional
from enum import Enum
from datetime import date


class Role(str, Enum):
    TEACHER = "TEACHER"
    COORDINATOR = "COORDINATOR"


# ─── FERIADOS ───

class Holiday(BaseModel):
    """Um feriado fixo, definido apenas por dia e mês (sem ano)."""
    # Dia do mês, 1-31
    day: int = Field(ge=1, le=31)
    # Mês, 1-12
    month: int = Field(ge=1, le=12)
    # Nome para exibição, p.ex. "Tiradentes"
    name: str = ""


# ─── PLANEJAMENTO (gerador do diário) ───

class PlannerConfig(BaseModel):
    """Configuração do gerador de diário.

    As datas padrão do período letivo são guardadas como "MM-DD" e
    combinadas com o ano corrente na hora de gerar o diário.
    """
    # Início padrão do período letivo ("MM-DD")
    default_start: str = Field("02-01",
        description="Início padrão do período letivo (MM-DD)")
    # Fim padrão do período letivo ("MM-DD")
    default_end: str = Field("12-15",
        description="Fim padrão do período letivo (MM-DD)")
    # Feriados fixos pulados pela distribuição (None = feriados nacionais)
    holidays: Optional[list[Holiday]] = Field(None,
        description="Feriados fixos (dia/mês) pulados na distribuição")

    @field_validator("default_start", "default_end")
    @classmethod
    def validate_month_day(cls, v: str) -> str:
        parts = v.split("-")
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Data '{v}' fora do formato MM-DD")
        month, day = int(parts[0]), int(parts[1])
        try:
            # Ano bissexto de referência: 02-29 é aceito
            date(2000, month, day)
        except ValueError:
            raise ValueError(f"Data '{v}' inválida")
        return f"{month:02d}-{day:02d}"

    def period_for(self, year: int) -> tuple[date, date]:
        """Período letivo padrão no ano dado (29/02 vira 28/02 fora de ano bissexto)."""
        def _on(month_day: str) -> date:
            month, day = (int(p) for p in month_day.split("-"))
            try:
                return date(year, month, day)
            except ValueError:
                return date(year, month, day - 1)
        return _on(self.default_start), _on(self.default_end)

    @property
    def holiday_pairs(self) -> set[tuple[int, int]]:
        """Conjunto de pares (dia, mês) para consulta rápida."""
        if self.holidays is None:
            from config.defaults import FIXED_HOLIDAYS
            return {(h.day, h.month) for h in FIXED_HOLIDAYS}
        return {(h.day, h.month) for h in self.holidays}


# ─── INTELIGÊNCIA ARTIFICIAL ───

class AIConfig(BaseModel):
    """Configuração do assistente de sugestões de aula."""
    # Modelo usado para gerar as sugestões
    model: str = Field("gemini-2.5-flash",
        description="Modelo de linguagem")
    # Endpoint compatível com a API da OpenAI
    base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta/openai/",
        description="Endpoint compatível com OpenAI")
    # Nome da variável de ambiente que guarda a chave
    api_key_env: str = Field("API_KEY",
        description="Variável de ambiente com a chave de API")


# ─── CONFIGURAÇÃO GERAL ───

class AppConfig(BaseModel):
    """Configuração geral da aplicação."""
    # Nome da escola exibido no painel
    school_name: str = Field("Colégio Estrela Sirius",
        description="Nome da escola")
    # Gerador do diário
    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    # Assistente de IA
    ai: AIConfig = Field(default_factory=AIConfig)
    # Nível de log (DEBUG, INFO, WARNING, ERROR)
    log_level: str = Field("WARNING",
        description="Nível de log")

    @model_validator(mode='after')
    def validate_log_level(self):
        level = self.log_level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Nível de log desconhecido: {self.log_level}")
        self.log_level = level
        return self
