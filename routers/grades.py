from fastapi import APIRouter
from fastapi.responses import JSONResponse

from schemas.common import not_found
from schemas.grades import GradeBatchSave
from services.grade_book import grade_book
from services.record_store import subjects_store

router = APIRouter(prefix="/grades", tags=["grades"])


# ==========================================================
# [과목별 성적 입력 화면]
# ==========================================================

# ✅ [READ] 과목 성적표 (학생 성 오름차순, 평균/불합격 표시 포함)
@router.get("/subject/{subject_id}")
async def get_grade_sheet(subject_id: int):
    if await subjects_store.get(subject_id) is None:
        return JSONResponse(status_code=404, content=not_found("Subject not found"))

    rows = await grade_book.grade_sheet(subject_id)
    return {
        "success": True,
        "data": [r.model_dump() for r in rows],
        "message": f"Grades for subject {subject_id} fetched"
    }


# ✅ [UPSERT] 과목 성적 일괄 저장
# - 기존 행은 update, 없는 학생은 insert
# - 일부 실패 시 BatchSaveError → 전역 핸들러에서 502
@router.put("/subject/{subject_id}")
async def save_grades(subject_id: int, body: GradeBatchSave):
    if await subjects_store.get(subject_id) is None:
        return JSONResponse(status_code=404, content=not_found("Subject not found"))

    result = await grade_book.save_grades(subject_id, body.entries)
    return {
        "success": True,
        "data": result.model_dump(),
        "message": "All grades saved successfully!"
    }
