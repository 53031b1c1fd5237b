from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from kipkuliah.domain.validation import ValidationError
from kipkuliah.services.student_service import StudentService

router = APIRouter(prefix="/api/student", tags=["student"])
logger = logging.getLogger("kipkuliah.api")


def _get_student_service(request: Request) -> StudentService:
    svc = getattr(getattr(request.app, "state", None), "student_service", None)
    if not svc:
        raise RuntimeError("StudentService not configured")
    return svc


@router.get("")
def list_registered_students(request: Request):
    try:
        students = _get_student_service(request).list_registered()
    except Exception:
        logger.exception("Error fetching students")
        return JSONResponse(
            {"error": "Internal server error", "message": "Terjadi kesalahan saat mengambil data mahasiswa"},
            status_code=500,
        )
    return {"success": True, "count": len(students), "students": students}


@router.get("/{student_id}")
def get_student_status(student_id: str, request: Request):
    try:
        result = _get_student_service(request).lookup(student_id)
    except ValidationError as exc:
        return JSONResponse({"error": exc.error, "exists": False}, status_code=400)
    except Exception:
        logger.exception("Error checking student ID %r", student_id)
        return JSONResponse(
            {
                "error": "Internal server error",
                "exists": False,
                "message": "Terjadi kesalahan saat memeriksa Student ID",
            },
            status_code=500,
        )
    return result.as_dict()
