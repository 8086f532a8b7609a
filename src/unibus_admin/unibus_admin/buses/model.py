from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Bus:
    id: Optional[int]
    placa: str
    modelo: str
    capacidade: int
    ano: int
    status: str
