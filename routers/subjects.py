from typing import Literal

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from schemas.common import not_found
from schemas.subjects import SubjectCreate
from services.record_store import subjects_store

router = APIRouter(prefix="/subjects", tags=["subjects"])


def _not_found():
    return JSONResponse(status_code=404, content=not_found("Subject not found"))


# ✅ [CREATE] 과목 정보 추가
@router.post("/")
async def create_subject(subject: SubjectCreate):
    created, = await subjects_store.insert([subject.model_dump()])
    return {
        "success": True,
        "data": created.model_dump(),
        "message": "Subject added successfully!"
    }


# ✅ [READ] 전체 과목 조회 (성적 화면 선택 목록은 order=subject_name)
@router.get("/")
async def read_subjects(order: Literal["id", "subject_name", "subject_code"] = "id"):
    records = await subjects_store.list_all(order)
    return {
        "success": True,
        "data": [r.model_dump() for r in records],
        "message": "Subjects fetched"
    }


# ✅ [READ] 특정 과목 조회
@router.get("/{subject_id}")
async def read_subject(subject_id: int):
    subject = await subjects_store.get(subject_id)
    if subject is None:
        return _not_found()
    return {"success": True, "data": subject.model_dump(), "message": "Subject fetched"}


# ✅ [UPDATE] 과목 정보 수정
@router.put("/{subject_id}")
async def update_subject(subject_id: int, updated: SubjectCreate):
    if await subjects_store.get(subject_id) is None:
        return _not_found()

    subject = await subjects_store.update(subject_id, updated.model_dump())
    return {
        "success": True,
        "data": subject.model_dump(),
        "message": "Subject updated successfully!"
    }


# ✅ [DELETE] 과목 삭제
@router.delete("/{subject_id}")
async def delete_subject(subject_id: int):
    if await subjects_store.get(subject_id) is None:
        return _not_found()

    await subjects_store.delete(subject_id)
    return {
        "success": True,
        "data": {"subject_id": subject_id},
        "message": "Subject deleted successfully!"
    }
