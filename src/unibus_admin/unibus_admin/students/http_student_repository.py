from __future__ import annotations

from typing import Any, Mapping

from ..backend.http_base import HttpResourceRepository, field, to_enum, to_int, to_text
from ..core.enums import StudentShift
from .model import Student


class HttpStudentRepository(HttpResourceRepository[Student]):
    endpoint = "/students"
    field_map = {
        "name": "Name",
        "email": "Email",
        "phone": "Phone",
        "cpf": "Cpf",
        "address": "Address",
        "city": "City",
        "course": "Course",
        "shift": "Shift",
        "route": "Route",
        "enrollment_date": "EnrollmentDate",
        "status": "Status",
    }

    def _from_api(self, raw: Mapping[str, Any]) -> Student:
        return Student(
            id=to_int(field(raw, "id")),
            name=str(field(raw, "name", "")),
            email=str(field(raw, "email", "")),
            phone=to_text(field(raw, "phone")),
            cpf=to_text(field(raw, "cpf")),
            address=to_text(field(raw, "address")),
            city=to_text(field(raw, "city")),
            course=to_text(field(raw, "course")),
            shift=to_enum(StudentShift, field(raw, "shift")),
            route=to_text(field(raw, "route")),
            enrollment_date=to_text(field(raw, "enrollmentDate")),
            status=to_text(field(raw, "status")),
            payment_status=to_text(field(raw, "paymentStatus")),
            institution=to_text(field(raw, "institution")),
        )
