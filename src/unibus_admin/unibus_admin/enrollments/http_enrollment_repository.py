from __future__ import annotations

from typing import Any, List, Mapping, Optional

from ..backend.http_base import HttpResourceRepository, field, to_int, to_text
from .model import Enrollment


class HttpEnrollmentRepository(HttpResourceRepository[Enrollment]):
    endpoint = "/rotaaluno"
    field_map = {
        "route_id": "FkIdRota",
        "student_id": "FkIdAluno",
        "boarding_point_id": "FkIdPonto",
        "confirmed": "Confirmado",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Enrollment:
        return Enrollment(
            id=to_int(field(raw, "id")),
            route_id=to_int(field(raw, "fkIdRota")),
            student_id=to_int(field(raw, "fkIdAluno")),
            boarding_point_id=to_int(field(raw, "fkIdPonto")),
            confirmed=to_text(field(raw, "confirmado")),
            student_name=to_text(field(raw, "nomeAluno")),
            route_destination=to_text(field(raw, "destinoRota")),
            point_name=to_text(field(raw, "nomePonto")),
        )

    def by_route(self, route_id: int) -> List[Enrollment]:
        return self._many(self._client.get(f"{self.endpoint}/rota/{int(route_id)}"))

    def by_student(self, student_id: int) -> List[Enrollment]:
        return self._many(self._client.get(f"{self.endpoint}/aluno/{int(student_id)}"))

    def confirm(self, item_id: int) -> Optional[Enrollment]:
        return self._one(self._client.patch(f"{self.endpoint}/{int(item_id)}/confirmar"))

    def cancel(self, item_id: int) -> Optional[Enrollment]:
        return self._one(self._client.patch(f"{self.endpoint}/{int(item_id)}/cancelar"))
