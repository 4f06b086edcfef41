"""Modelo do usuário logado (Pydantic v2)."""

from pydantic import BaseModel

from config.schema import Role


class User(BaseModel):
    """Usuário da sessão. O login é só um nome livre, sem senha."""

    id: str
    name: str
    role: Role = Role.TEACHER

    @property
    def is_read_only(self) -> bool:
        """Coordenação apenas consulta turmas, diário e notas."""
        return self.role == Role.COORDINATOR
