from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

CONFIRMED = "Sim"
NOT_CONFIRMED = "Não"

_CONFIRMED_LABELS = {"sim", "s", "true", "1", "confirmado"}


@dataclass(frozen=True)
class Enrollment:
    """Vínculo aluno/rota (RotaAluno), com o ponto de embarque escolhido."""

    id: Optional[int]
    route_id: Optional[int]
    student_id: Optional[int]
    boarding_point_id: Optional[int] = None
    confirmed: Optional[str] = None
    student_name: Optional[str] = None
    route_destination: Optional[str] = None
    point_name: Optional[str] = None

    @property
    def is_confirmed(self) -> bool:
        return (self.confirmed or "").strip().lower() in _CONFIRMED_LABELS
