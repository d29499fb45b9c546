import asyncio
import csv
import sys

from schemas.students import StudentCreate
from services.record_store import students_store

CSV_PATH = "data/students.csv"  # ✅ 기본 파일 경로


def read_students(csv_path: str):
    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        return [
            StudentCreate(
                student_number=row["student_number"].strip(),   # 학번
                first_name=row["first_name"].strip(),           # 이름
                last_name=row["last_name"].strip(),             # 성
                course=row["course"].strip(),                   # 학과
                year_level=int(row["year_level"]),              # 학년
            ).model_dump()
            for row in reader
        ]


async def migrate_students(csv_path: str = CSV_PATH) -> int:
    rows = read_students(csv_path)
    if rows:
        await students_store.insert(rows)   # 한 번의 다중 insert
    return len(rows)


if __name__ == "__main__":
    count = asyncio.run(migrate_students(*sys.argv[1:2]))
    print(f"✅ 학생 CSV → DB 마이그레이션 완료 ({count}건)")
