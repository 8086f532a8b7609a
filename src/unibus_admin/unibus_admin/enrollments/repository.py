from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Enrollment


class EnrollmentRepository(Protocol):
    def list(self) -> Sequence[Enrollment]:
        raise NotImplementedError

    def get_by_id(self, item_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def by_route(self, route_id: int) -> Sequence[Enrollment]:
        raise NotImplementedError

    def by_student(self, student_id: int) -> Sequence[Enrollment]:
        raise NotImplementedError

    def create(self, data: Mapping[str, Any]) -> Optional[Enrollment]:
        raise NotImplementedError

    def update(self, item_id: int, data: Mapping[str, Any]) -> Optional[Enrollment]:
        raise NotImplementedError

    def confirm(self, item_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def cancel(self, item_id: int) -> Optional[Enrollment]:
        raise NotImplementedError

    def delete(self, item_id: int) -> None:
        raise NotImplementedError
