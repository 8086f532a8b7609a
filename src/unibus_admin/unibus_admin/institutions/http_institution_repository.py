from __future__ import annotations

from typing import Any, Mapping

from ..backend.http_base import HttpResourceRepository, field, to_int, to_text
from .model import Institution


class HttpInstitutionRepository(HttpResourceRepository[Institution]):
    endpoint = "/instituicoes"
    field_map = {
        "nome": "Nome",
        "cidade": "Cidade",
        "endereco": "Endereco",
        "telefone": "Telefone",
        "cep": "Cep",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Institution:
        return Institution(
            id=to_int(field(raw, "id")),
            nome=str(field(raw, "nome", "")),
            cidade=str(field(raw, "cidade", "")),
            endereco=to_text(field(raw, "endereco")),
            telefone=to_text(field(raw, "telefone")),
            cep=to_text(field(raw, "cep")),
        )
