from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from kipkuliah.domain.validation import ValidationError
from kipkuliah.services.discussion_service import DiscussionNotFoundError, DiscussionService

router = APIRouter(prefix="/api/discussion", tags=["discussion"])
logger = logging.getLogger("kipkuliah.api")

NOT_FOUND_BODY = {"error": "Discussion not found", "message": "Diskusi tidak ditemukan"}


def _get_discussion_service(request: Request) -> DiscussionService:
    svc = getattr(getattr(request.app, "state", None), "discussion_service", None)
    if not svc:
        raise RuntimeError("DiscussionService not configured")
    return svc


def _server_error(message: str) -> JSONResponse:
    return JSONResponse({"error": "Internal server error", "message": message}, status_code=500)


def _as_object(payload: Any) -> dict:
    """JSON bodies that are not objects carry no fields."""
    return payload if isinstance(payload, dict) else {}


def _invalid(exc: ValidationError) -> JSONResponse:
    return JSONResponse({"error": exc.error, "message": exc.message}, status_code=400)


@router.get("")
def list_discussions(request: Request):
    try:
        discussions = _get_discussion_service(request).list_discussions()
    except Exception:
        logger.exception("Error fetching discussions")
        return _server_error("Terjadi kesalahan saat mengambil data diskusi")
    return {"success": True, "count": len(discussions), "discussions": discussions}


@router.post("")
def create_discussion(request: Request, payload: Any = Body(default=None)):
    payload = _as_object(payload)
    try:
        discussion = _get_discussion_service(request).create(
            name=payload.get("name"),
            email=payload.get("email"),
            question=payload.get("question"),
        )
    except ValidationError as exc:
        return _invalid(exc)
    except Exception:
        logger.exception("Error creating discussion")
        return _server_error("Terjadi kesalahan saat mengirim pertanyaan")
    return JSONResponse(
        jsonable_encoder(
            {"success": True, "message": "Pertanyaan berhasil dikirim", "discussion": discussion}
        ),
        status_code=201,
    )


@router.put("/{discussion_id}/answer")
def answer_discussion(discussion_id: str, request: Request, payload: Any = Body(default=None)):
    payload = _as_object(payload)
    try:
        _get_discussion_service(request).answer(discussion_id, payload.get("answer"))
    except ValidationError as exc:
        return _invalid(exc)
    except DiscussionNotFoundError:
        return JSONResponse(NOT_FOUND_BODY, status_code=404)
    except Exception:
        logger.exception("Error updating discussion %s", discussion_id)
        return _server_error("Terjadi kesalahan saat menambahkan jawaban")
    return {"success": True, "message": "Jawaban berhasil ditambahkan"}


@router.delete("/{discussion_id}")
def delete_discussion(discussion_id: str, request: Request):
    try:
        _get_discussion_service(request).delete(discussion_id)
    except DiscussionNotFoundError:
        return JSONResponse(NOT_FOUND_BODY, status_code=404)
    except Exception:
        logger.exception("Error deleting discussion %s", discussion_id)
        return _server_error("Terjadi kesalahan saat menghapus diskusi")
    return {"success": True, "message": "Diskusi berhasil dihapus"}
