"""
schemas/reports.py

- 성적 분석 리포트(AnalysisReport) 및 구성 요소 스키마
- 화면(JSON 응답)과 PDF 렌더러가 공유하는 단일 데이터 계약
- JSON 키는 프론트엔드 계약에 맞춰 camelCase alias 사용 (입력은 두 형식 모두 허용)
"""

from datetime import datetime, timezone
from typing import Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SubjectSnapshot(_CamelModel):
    """리포트에 복사되는 과목 정보"""
    code: str
    name: str
    description: Optional[str] = None


class TermGrades(_CamelModel):
    prelim: Optional[float] = None
    midterm: Optional[float] = None
    semifinal: Optional[float] = None
    final: Optional[float] = None


class StudentGradeView(_CamelModel):
    """학생 1명의 과목 성적 + 평균 (평균 없음 = None, 0 아님)"""
    id: int
    student_number: str
    name: str
    grades: TermGrades = Field(default_factory=TermGrades)
    average: Optional[float] = None


class ClassSummary(_CamelModel):
    total_students: int = 0
    passed: int = 0
    failed: int = 0
    average_grade: str = "0.00"


class NarrativeResult(BaseModel):
    """AI 응답 계약: 정확히 두 개의 문자열 필드"""
    analysis: StrictStr
    recommendations: StrictStr

    model_config = ConfigDict(extra="forbid", frozen=True)


class AnalysisReport(_CamelModel):
    subject: SubjectSnapshot
    summary: ClassSummary
    analysis: str
    recommendations: str
    passed_students: Tuple[str, ...] = ()
    failed_students: Tuple[str, ...] = ()
    students_data: Tuple[StudentGradeView, ...] = ()
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


# =========================================================
# 분석 작업 결과 (성공/실패 태그)
# =========================================================

class AnalysisSuccess(_CamelModel):
    success: Literal[True] = True
    report: AnalysisReport


class AnalysisFailure(_CamelModel):
    success: Literal[False] = False
    error: str
    code: str


AnalysisResult = Union[AnalysisSuccess, AnalysisFailure]
