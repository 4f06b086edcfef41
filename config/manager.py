"""Gerenciador de configuração: carregar, salvar e validar o arquivo YAML.

Usa ruamel.yaml para serializar com comentários.
"""

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap

from config.schema import AppConfig
from config.defaults import default_app_config

logger = logging.getLogger(__name__)

console = Console()
yaml = YAML()
yaml.default_flow_style = False
yaml.width = 120


# ─── CABEÇALHO E COMENTÁRIOS DO YAML ───

_YAML_HEADER = f"""\
# ============================================
# Sirius Edu - Configuração da aplicação
# Criado em: {date.today().isoformat()}
# ============================================
"""

_SECTION_COMMENTS = {
    "planner": (
        "Diário de classe",
        "Período letivo padrão (MM-DD) e feriados fixos (dia/mês).\n"
        "holidays: null = feriados nacionais fixos.",
    ),
    "ai": (
        "Assistente de IA",
        "A chave é lida da variável de ambiente indicada em api_key_env.",
    ),
    "log_level": (
        "Log",
        None,
    ),
}


class ConfigManager:
    CONFIG_DIR = Path("config")
    DEFAULT_CONFIG = CONFIG_DIR / "app_config.yaml"

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else self.DEFAULT_CONFIG

    def first_run_check(self) -> bool:
        """Retorna True se ainda não existe arquivo de configuração."""
        return not self.path.exists()

    # ─── Carregar ───

    def load(self) -> AppConfig:
        """Carrega a configuração do YAML, validada pelo Pydantic."""
        if not self.path.exists():
            raise FileNotFoundError(
                f"Arquivo de configuração não encontrado: {self.path}\n"
                f"Execute 'python main.py config init' para criá-lo."
            )
        with open(self.path, "r", encoding="utf-8") as f:
            raw = yaml.load(f)
        try:
            return AppConfig.model_validate(dict(raw or {}))
        except Exception as e:
            raise ValueError(
                f"Arquivo de configuração inválido: {self.path}\n"
                f"Erro do Pydantic: {e}"
            ) from e

    def load_or_default(self) -> AppConfig:
        """Como load(), mas usa a configuração padrão se não houver arquivo."""
        if self.first_run_check():
            logger.info(f"Sem {self.path}, usando configuração padrão")
            return default_app_config()
        return self.load()

    # ─── Salvar ───

    def save(self, config: AppConfig) -> None:
        """Salva a configuração em YAML com comentários."""
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = self._build_commented_yaml(config)

        with open(self.path, "w", encoding="utf-8") as f:
            f.write(_YAML_HEADER + "\n")
            yaml.dump(data, f)

        console.print(f"[green]✓[/green] Configuração salva: {self.path}")

    def _build_commented_yaml(self, config: AppConfig) -> CommentedMap:
        """Monta a estrutura YAML com comentários por seção."""
        raw = json.loads(config.model_dump_json())
        cm = CommentedMap(raw)

        for field, (label, comment) in _SECTION_COMMENTS.items():
            if field not in cm:
                continue
            cm.yaml_set_comment_before_after_key(
                field,
                before=f"\n─── {label} ───" + (f"\n{comment}" if comment else ""),
            )

        return cm
