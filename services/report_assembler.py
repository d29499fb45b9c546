from typing import Sequence

from schemas.reports import AnalysisReport, ClassSummary, NarrativeResult, StudentGradeView, SubjectSnapshot
from schemas.subjects import Subject
from services.grade_aggregator import split_by_result


def snapshot_subject(subject: Subject) -> SubjectSnapshot:
    return SubjectSnapshot(
        code=subject.subject_code,
        name=subject.subject_name,
        description=subject.description,
    )


def assemble_report(subject: SubjectSnapshot, summary: ClassSummary, narrative: NarrativeResult,
                    students: Sequence[StudentGradeView]) -> AnalysisReport:
    """집계 결과 + AI 서술을 하나의 불변 리포트로 병합 (I/O 없음)"""
    passed, failed = split_by_result(students)
    return AnalysisReport(
        subject=subject,
        summary=summary,
        analysis=narrative.analysis,
        recommendations=narrative.recommendations,
        passed_students=tuple(s.name for s in passed),
        failed_students=tuple(s.name for s in failed),
        students_data=tuple(students),
    )
