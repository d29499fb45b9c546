from fastapi import APIRouter

from schemas.reports import AnalysisResult
from services.student_analyzer import student_analyzer

router = APIRouter(prefix="/reports", tags=["AI grade analysis"])


# ✅ [AI] 과목 성적 분석 리포트 생성
# - 실패해도 200 + {"success": false, "error", "code"} (부분 리포트 없음)
@router.post("/analysis/{subject_id}", response_model=AnalysisResult)
async def generate_analysis(subject_id: int):
    return await student_analyzer.analyze_subject(subject_id)
