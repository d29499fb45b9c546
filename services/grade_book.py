"""
services/grade_book.py

과목별 성적 입력 화면 데이터 + 일괄 저장

저장 규칙 (학생-과목 쌍당 1행 유지)
- 기존 행이 있으면 update (동시 실행 후 함께 await)
- 없으면 모아서 한 번의 다중 insert
- 트랜잭션 없음: 일부 실패 시 성공한 쓰기는 그대로 두고 BatchSaveError 발생
"""

import asyncio
import logging
from typing import Dict, Iterable, List

from schemas.grades import Grade, GradeEntry, GradeSaveResult, GradeSheetRow
from services.errors import BatchSaveError, StoreError
from services.grade_aggregator import TERMS, build_student_views, is_passing
from services.record_store import RecordStore, grades_store, students_store

logger = logging.getLogger(__name__)


def _by_student(records: Iterable[Grade]) -> Dict[int, Grade]:
    mapping: Dict[int, Grade] = {}
    for record in records:
        mapping.setdefault(record.student_id, record)
    return mapping


class GradeBook:
    def __init__(self, students: RecordStore = students_store, grades: RecordStore = grades_store):
        self.students = students
        self.grades = grades

    async def grade_sheet(self, subject_id: int) -> List[GradeSheetRow]:
        students, records = await asyncio.gather(
            self.students.list_all("last_name"),
            self.grades.list_by_filter("subject_id", subject_id),
        )
        by_student = _by_student(records)

        rows = []
        for view in build_student_views(students, records):
            record = by_student.get(view.id)
            rows.append(GradeSheetRow(
                student_id=view.id,
                student_number=view.student_number,
                name=view.name,
                grade_id=record.id if record else None,
                **view.grades.model_dump(),
                average=view.average,
                failing=view.average is not None and not is_passing(view.average),
            ))
        return rows

    async def save_grades(self, subject_id: int, entries: Iterable[GradeEntry]) -> GradeSaveResult:
        students, records = await asyncio.gather(
            self.students.list_all("id"),
            self.grades.list_by_filter("subject_id", subject_id),
        )
        known = {s.id for s in students}
        existing = _by_student(records)

        # 같은 학생이 여러 번 오면 마지막 입력 사용
        latest: Dict[int, GradeEntry] = {}
        for entry in entries:
            if entry.student_id not in known:
                logger.warning(f"Skipping grades for unknown student_id={entry.student_id}")
                continue
            latest[entry.student_id] = entry

        update_ids, update_calls, insert_payloads = [], [], []
        for student_id, entry in latest.items():
            payload = {
                "student_id": student_id,
                "subject_id": subject_id,
                **{term: getattr(entry, term) for term in TERMS},
            }
            record = existing.get(student_id)
            if record is not None:
                update_ids.append(student_id)
                update_calls.append(self.grades.update(record.id, payload))
            else:
                insert_payloads.append(payload)

        failed: List[int] = []
        updated = 0
        if update_calls:
            results = await asyncio.gather(*update_calls, return_exceptions=True)
            for student_id, result in zip(update_ids, results):
                if isinstance(result, Exception):
                    logger.warning(f"Grade update failed for student_id={student_id}: {result}")
                    failed.append(student_id)
                elif isinstance(result, BaseException):
                    raise result
                else:
                    updated += 1

        inserted = 0
        if insert_payloads:
            try:
                created = await self.grades.insert(insert_payloads)
                inserted = len(created)
            except StoreError as e:
                logger.warning(f"Grade insert failed for {len(insert_payloads)} rows: {e}")
                failed.extend(p["student_id"] for p in insert_payloads)

        if failed:
            logger.error(f"Batch grade save for subject_id={subject_id} failed for students {failed}")
            raise BatchSaveError(failed_student_ids=failed)

        logger.info(f"Saved grades for subject_id={subject_id}: {updated} updated, {inserted} inserted")
        return GradeSaveResult(updated=updated, inserted=inserted)


grade_book = GradeBook()
