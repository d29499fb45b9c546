"""
services/student_analyzer.py

과목 단위 AI 성적 분석 (최상위 작업)

1) 과목 / 학생(성 오름차순) / 과목 성적을 동시에 조회
2) 학생별 평균 + 반 요약 집계
3) Gemini 서술 분석 (집계 완료 후 순차 호출)
4) 리포트 병합

어떤 단계가 실패하든 예외를 밖으로 던지지 않고 AnalysisFailure로 반환한다.
부분 리포트는 만들지 않는다.
"""

import asyncio
import logging
from typing import Optional

from schemas.reports import AnalysisFailure, AnalysisResult, AnalysisSuccess
from services.errors import GradePortalError, StoreError
from services.grade_aggregator import aggregate
from services.narrative_analyzer import NarrativeAnalyzer
from services.record_store import RecordStore, grades_store, students_store, subjects_store
from services.report_assembler import assemble_report, snapshot_subject

logger = logging.getLogger(__name__)


class StudentAnalyzer:
    def __init__(
        self,
        narrative: Optional[NarrativeAnalyzer] = None,
        subjects: RecordStore = subjects_store,
        students: RecordStore = students_store,
        grades: RecordStore = grades_store,
    ):
        self._narrative = narrative
        self.subjects = subjects
        self.students = students
        self.grades = grades

    @property
    def narrative(self) -> NarrativeAnalyzer:
        if self._narrative is None:
            self._narrative = NarrativeAnalyzer()
        return self._narrative

    async def analyze_subject(self, subject_id: int) -> AnalysisResult:
        try:
            subject, students, grades = await asyncio.gather(
                self.subjects.get(subject_id),
                self.students.list_all("last_name"),
                self.grades.list_by_filter("subject_id", subject_id),
            )
            if subject is None:
                raise StoreError("Subject not found")

            snapshot = snapshot_subject(subject)
            aggregation = aggregate(students, grades)
            narrative = await self.narrative.analyze(snapshot, aggregation.students)
            report = assemble_report(snapshot, aggregation.summary, narrative, aggregation.students)

        except GradePortalError as e:
            logger.error(f"Error in student analysis (subject_id={subject_id}): [{e.code}] {e}")
            return AnalysisFailure(error=str(e), code=e.code)
        except Exception as e:
            logger.exception(f"Unexpected error in student analysis (subject_id={subject_id})")
            return AnalysisFailure(error=str(e), code="INTERNAL_ERROR")

        logger.info(
            f"Analysis ready for {report.subject.code}: "
            f"{report.summary.passed} passed / {report.summary.failed} failed"
        )
        return AnalysisSuccess(report=report)


student_analyzer = StudentAnalyzer()
