from __future__ import annotations

from typing import List, Optional

from ..backend.cache import QueryCache, invalidates
from ..common.validators import optional_text, require_non_empty
from ..core.exceptions import NotFoundError
from .model import Institution
from .repository import InstitutionRepository


class InstitutionService:
    def __init__(self, institutions: InstitutionRepository, cache: QueryCache):
        self._institutions = institutions
        self._cache = cache

    def list(self, nome: Optional[str] = None) -> List[Institution]:
        nome = optional_text(nome)
        return self._cache.fetch(("institutions", nome), lambda: list(self._institutions.list(nome=nome)))

    def get(self, institution_id: int) -> Institution:
        inst = self._cache.fetch(("institutions", int(institution_id)), lambda: self._institutions.get_by_id(institution_id))
        if not inst:
            raise NotFoundError("Instituição não encontrada")
        return inst

    @staticmethod
    def _payload(*, nome: str, cidade: str, endereco: str = "", telefone: str = "", cep: str = "") -> dict:
        return {
            "nome": require_non_empty(nome, "Nome"),
            "cidade": require_non_empty(cidade, "Cidade"),
            "endereco": optional_text(endereco),
            "telefone": optional_text(telefone),
            "cep": optional_text(cep),
        }

    @invalidates("institutions")
    def create(self, **form) -> Optional[Institution]:
        return self._institutions.create(self._payload(**form))

    @invalidates("institutions")
    def update(self, institution_id: int, **form) -> Optional[Institution]:
        return self._institutions.update(int(institution_id), self._payload(**form))

    @invalidates("institutions")
    def delete(self, institution_id: int) -> None:
        self._institutions.delete(int(institution_id))
