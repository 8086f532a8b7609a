from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Admin:
    id: Optional[int]
    name: str
    email: str
    phone: Optional[str] = None
    access_level: Optional[int] = None
    role: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[str] = None


@dataclass(frozen=True)
class DirectoryEntry:
    """Linha da tela de usuários: alunos, motoristas e administradores juntos."""

    kind: str
    id: Optional[int]
    name: str
    email: str
    cpf: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[str] = None

    @property
    def kind_label(self) -> str:
        return {"aluno": "Aluno", "motorista": "Motorista", "admin": "Administrador"}.get(self.kind, self.kind)
