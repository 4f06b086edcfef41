"""Sugestões de conteúdo de aula geradas por IA.

Uma única requisição por chamada, sem retry nem timeout próprio. Qualquer
falha vira um texto fixo de desculpas, que o diário grava como conteúdo.
"""

import logging
import os
from typing import Optional

from config.schema import AIConfig

logger = logging.getLogger(__name__)

MSG_NO_API_KEY = "Erro: Chave de API não configurada. Por favor, configure a API_KEY."
MSG_EMPTY_RESPONSE = "Não foi possível gerar sugestões no momento."
MSG_CONNECTION_ERROR = "Houve um erro ao conectar com a Inteligência Artificial."

_PROMPT_TEMPLATE = """\
Atue como um assistente pedagógico experiente para um professor do {school_name}.

Disciplina: {subject}
Nível: {class_level}
Tópico da Aula: {topic}

Gere um resumo estruturado para o diário de classe contendo:
1. Um objetivo claro de aprendizagem (1 frase).
2. Tópicos principais abordados (lista com bullets).
3. Uma sugestão de atividade prática rápida.

Mantenha o tom profissional, direto e em português do Brasil. Saída em Markdown.
"""


def build_prompt(subject: str, topic: str, class_level: str,
                 school_name: str = "Colégio Estrela Sirius") -> str:
    return _PROMPT_TEMPLATE.format(
        school_name=school_name,
        subject=subject,
        class_level=class_level,
        topic=topic,
    )


class LessonSuggestionService:
    """Cliente do modelo de linguagem (API compatível com OpenAI).

    client pode ser injetado (testes); senão é criado sob demanda a partir
    da chave na variável de ambiente configurada.
    """

    def __init__(
        self,
        config: Optional[AIConfig] = None,
        client=None,
        school_name: str = "Colégio Estrela Sirius",
    ) -> None:
        self.config = config or AIConfig()
        self.school_name = school_name
        self._client = client

    @property
    def api_key(self) -> str:
        return os.getenv(self.config.api_key_env, "").strip()

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self.api_key, base_url=self.config.base_url)
        return self._client

    async def suggest(self, subject: str, topic: str, class_level: str) -> str:
        """Retorna a sugestão em Markdown, ou um dos textos fixos de erro."""
        if not self.is_configured:
            return MSG_NO_API_KEY

        prompt = build_prompt(subject, topic, class_level, self.school_name)
        try:
            response = await self._get_client().chat.completions.create(
                model=self.config.model,
                messages=[{"role": "user", "content": prompt}],
            )
            text = response.choices[0].message.content if response.choices else None
        except Exception as e:
            logger.warning(f"Falha na API de IA: {e}")
            return MSG_CONNECTION_ERROR

        if not text or not text.strip():
            return MSG_EMPTY_RESPONSE
        return text.strip()
