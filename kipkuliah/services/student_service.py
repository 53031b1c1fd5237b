"""Student ID verification use cases."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from kipkuliah.domain.records import STUDENTS, is_registered
from kipkuliah.domain.validation import require_text
from kipkuliah.repositories.fallback import FallbackResolver

MSG_REGISTERED = "Student ID terdaftar dalam program KIP Kuliah"
MSG_NOT_REGISTERED = "Student ID ditemukan tetapi tidak terdaftar dalam program KIP Kuliah"
MSG_NOT_FOUND = "Student ID tidak ditemukan dalam database"
NAME_PLACEHOLDER = "N/A"


@dataclass
class StudentLookup:
    exists: bool
    registered: bool
    message: str
    student_id: Optional[str] = None
    name: Optional[str] = None

    def as_dict(self) -> dict:
        if not self.exists:
            return {"exists": False, "registered": False, "message": self.message}
        return {
            "exists": True,
            "registered": self.registered,
            "studentId": self.student_id,
            "name": self.name,
            "message": self.message,
        }


class StudentService:
    """Looks up seeded students through the fallback resolver."""

    def __init__(self, resolver: FallbackResolver) -> None:
        self.resolver = resolver

    def lookup(self, student_id: str | None) -> StudentLookup:
        candidate = require_text(student_id, "Student ID is required")
        record = self.resolver.find_one(STUDENTS, {"studentId": candidate}).value
        if record is None:
            return StudentLookup(exists=False, registered=False, message=MSG_NOT_FOUND)
        registered = is_registered(record)
        return StudentLookup(
            exists=True,
            registered=registered,
            student_id=record["studentId"],
            name=record.get("name") or NAME_PLACEHOLDER,
            message=MSG_REGISTERED if registered else MSG_NOT_REGISTERED,
        )

    def list_registered(self) -> list[dict]:
        """Registered students only, reduced to their public fields."""
        students = self.resolver.find(STUDENTS).value
        return [
            {"studentId": student["studentId"], "name": student.get("name") or NAME_PLACEHOLDER}
            for student in students
            if is_registered(student)
        ]
