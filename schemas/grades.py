from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# 학기 점수: 1.0~5.0 (낮을수록 우수), None = 미입력
TermScore = Optional[float]


# ✅ 저장된 성적 행 (DB 스냅샷)
class Grade(BaseModel):
    id: int                                  # 성적 고유 ID
    student_id: int                          # 학생 ID
    subject_id: int                          # 과목 ID
    prelim: TermScore = None
    midterm: TermScore = None
    semifinal: TermScore = None
    final: TermScore = None

    model_config = ConfigDict(from_attributes=True)


# ✅ 입력용: 학생 한 명의 학기 점수
class GradeEntry(BaseModel):
    student_id: int
    prelim: TermScore = Field(None, ge=1.0, le=5.0)
    midterm: TermScore = Field(None, ge=1.0, le=5.0)
    semifinal: TermScore = Field(None, ge=1.0, le=5.0)
    final: TermScore = Field(None, ge=1.0, le=5.0)


# ✅ 입력용: 과목 단위 일괄 저장
class GradeBatchSave(BaseModel):
    entries: List[GradeEntry] = Field(default_factory=list)


# ✅ 출력용: 성적 입력 화면의 한 행
class GradeSheetRow(BaseModel):
    student_id: int
    student_number: str
    name: str
    grade_id: Optional[int] = None
    prelim: TermScore = None
    midterm: TermScore = None
    semifinal: TermScore = None
    final: TermScore = None
    average: Optional[float] = None
    failing: bool = False


class GradeSaveResult(BaseModel):
    updated: int = 0
    inserted: int = 0
