from fastapi import APIRouter
from fastapi.responses import JSONResponse

from schemas.common import not_found
from schemas.students import StudentCreate
from services.record_store import students_store

router = APIRouter(prefix="/students", tags=["students"])


def _not_found():
    return JSONResponse(status_code=404, content=not_found("Student not found"))


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학생 정보 추가
@router.post("/")
async def create_student(student: StudentCreate):
    created, = await students_store.insert([student.model_dump()])
    return {
        "success": True,
        "data": created.model_dump(),
        "message": "Student added successfully!"
    }


# ✅ [READ] 전체 학생 조회 (ID 순)
@router.get("/")
async def read_students():
    records = await students_store.list_all("id")
    return {
        "success": True,
        "data": [r.model_dump() for r in records],
        "message": "Students fetched"
    }


# ==========================================================
# [2단계] 동적 라우터 (개별 조회/수정/삭제)
# ==========================================================

# ✅ [READ] 특정 학생 상세 조회
@router.get("/{student_id}")
async def read_student(student_id: int):
    student = await students_store.get(student_id)
    if student is None:
        return _not_found()
    return {"success": True, "data": student.model_dump(), "message": "Student fetched"}


# ✅ [UPDATE] 특정 학생 정보 수정
@router.put("/{student_id}")
async def update_student(student_id: int, updated: StudentCreate):
    if await students_store.get(student_id) is None:
        return _not_found()

    student = await students_store.update(student_id, updated.model_dump())
    return {
        "success": True,
        "data": student.model_dump(),
        "message": "Student updated successfully!"
    }


# ✅ [DELETE] 특정 학생 삭제
@router.delete("/{student_id}")
async def delete_student(student_id: int):
    if await students_store.get(student_id) is None:
        return _not_found()

    await students_store.delete(student_id)
    return {
        "success": True,
        "data": {"student_id": student_id},
        "message": "Student deleted successfully!"
    }
