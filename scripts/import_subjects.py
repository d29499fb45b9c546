import asyncio
import csv
import sys

from schemas.subjects import SubjectCreate
from services.record_store import subjects_store

CSV_PATH = "data/subjects.csv"  # ✅ 기본 파일 경로


def read_subjects(csv_path: str):
    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        return [
            SubjectCreate(
                subject_code=row["subject_code"].strip(),                # 과목 코드
                subject_name=row["subject_name"].strip(),                # 과목명
                instructor=row["instructor"].strip(),                    # 담당 교수
                description=(row.get("description") or "").strip() or None,
            ).model_dump()
            for row in reader
        ]


async def migrate_subjects(csv_path: str = CSV_PATH) -> int:
    rows = read_subjects(csv_path)
    if rows:
        await subjects_store.insert(rows)
    return len(rows)


if __name__ == "__main__":
    count = asyncio.run(migrate_subjects(*sys.argv[1:2]))
    print(f"✅ 과목 CSV → DB 마이그레이션 완료 ({count}건)")
