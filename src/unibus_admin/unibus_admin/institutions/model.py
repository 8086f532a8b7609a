from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Institution:
    """Instituição de ensino atendida pelo transporte."""

    id: Optional[int]
    nome: str
    cidade: str
    endereco: Optional[str] = None
    telefone: Optional[str] = None
    cep: Optional[str] = None
