"""
services/grade_aggregator.py

학생 목록 + 과목 성적 행 → 학생별 평균 / 합격·불합격 분류 / 반 평균

- 점수 체계: 1.0 ~ 5.0, 낮을수록 우수. 평균 < 3.0 합격, >= 3.0 불합격 (3.00은 불합격)
- 입력은 모두 인자로 받는다 (DB 접근 없음)
- 평균이 없는 학생(입력된 학기 점수 0개)은 집계에서 빠지지만 학생 목록에는 남는다
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, NamedTuple, Optional, Sequence

from schemas.grades import Grade
from schemas.reports import ClassSummary, StudentGradeView, TermGrades
from schemas.students import Student

PASSING_THRESHOLD = 3.0
TERMS = ("prelim", "midterm", "semifinal", "final")

_CENT = Decimal("0.01")


class Aggregation(NamedTuple):
    students: List[StudentGradeView]
    summary: ClassSummary


def _round2(value: float) -> Decimal:
    # float의 10진 표현 기준 반올림 (2.875 → 2.88)
    return Decimal(repr(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


def term_values(grades: TermGrades) -> List[float]:
    """입력된 학기 점수만 순서대로 (0.0은 입력된 값으로 취급)"""
    values = (getattr(grades, term) for term in TERMS)
    return [v for v in values if v is not None]


def compute_average(values: Sequence[float]) -> Optional[float]:
    if not values:
        return None
    return float(_round2(sum(values) / len(values)))


def is_passing(average: float) -> bool:
    return average < PASSING_THRESHOLD


def format_average(values: Sequence[float]) -> str:
    """평균을 소수 둘째 자리 문자열로, 값이 없으면 "0.00" """
    if not values:
        return "0.00"
    return str(_round2(sum(values) / len(values)))


def _term_grades(record: Optional[Grade]) -> TermGrades:
    if record is None:
        return TermGrades()
    return TermGrades(**{term: getattr(record, term) for term in TERMS})


def build_student_views(students: Iterable[Student], grades: Iterable[Grade]) -> List[StudentGradeView]:
    by_student: Dict[int, Grade] = {}
    for record in grades:
        # 학생당 1행 (중복 시 첫 행 사용)
        by_student.setdefault(record.student_id, record)

    views = []
    for student in students:
        term_grades = _term_grades(by_student.get(student.id))
        views.append(StudentGradeView(
            id=student.id,
            student_number=student.student_number,
            name=f"{student.first_name} {student.last_name}",
            grades=term_grades,
            average=compute_average(term_values(term_grades)),
        ))
    return views


def split_by_result(views: Iterable[StudentGradeView]):
    """(합격, 불합격) 학생 목록. 평균 없는 학생은 제외"""
    graded = [v for v in views if v.average is not None]
    passed = [v for v in graded if is_passing(v.average)]
    failed = [v for v in graded if not is_passing(v.average)]
    return passed, failed


def summarize_class(views: Sequence[StudentGradeView]) -> ClassSummary:
    passed, failed = split_by_result(views)
    averages = [v.average for v in views if v.average is not None]
    return ClassSummary(
        total_students=len(averages),
        passed=len(passed),
        failed=len(failed),
        average_grade=format_average(averages),
    )


def aggregate(students: Iterable[Student], grades: Iterable[Grade]) -> Aggregation:
    views = build_student_views(students, grades)
    return Aggregation(students=views, summary=summarize_class(views))
