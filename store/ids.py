"""Geradores de identificadores e de números de matrícula.

São injetados no Store para que testes possam usar sequências previsíveis.
"""

import itertools
import random
import uuid
from typing import Optional, Protocol


class IdGenerator(Protocol):
    def new_id(self) -> str: ...


class UuidIdGenerator:
    """Identificadores UUID4 em hexadecimal (padrão em produção)."""

    def new_id(self) -> str:
        return uuid.uuid4().hex


class SequentialIdGenerator:
    """Identificadores monotônicos "<prefix>1", "<prefix>2", ..."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def new_id(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


class RegistrationNumberGenerator:
    """Números de matrícula aleatórios de 5 dígitos (10000-99999).

    Com seed fixo a sequência é reproduzível. Unicidade não é garantida.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def new_number(self) -> str:
        return str(self.rng.randint(10000, 99999))
