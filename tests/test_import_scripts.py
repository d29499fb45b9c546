"""
Tests for the CSV import scripts.
"""

import pytest

from scripts.import_students import migrate_students
from scripts.import_subjects import migrate_subjects
from services.record_store import students_store, subjects_store


class TestCsvImports:
    @pytest.mark.asyncio
    async def test_import_students(self, tmp_path):
        csv_path = tmp_path / "students.csv"
        csv_path.write_text(
            "student_number,first_name,last_name,course,year_level\n"
            "2024-0001, Ana ,Cruz,BSIT,1\n"
            "2024-0002,Ben,Reyes,BSCS,3\n",
            encoding="utf-8",
        )

        assert await migrate_students(str(csv_path)) == 2

        rows = await students_store.list_all("last_name")
        assert [(s.first_name, s.year_level) for s in rows] == [("Ana", 1), ("Ben", 3)]

    @pytest.mark.asyncio
    async def test_import_subjects_blank_description(self, tmp_path):
        csv_path = tmp_path / "subjects.csv"
        csv_path.write_text(
            "subject_code,subject_name,instructor,description\n"
            "CC101,Introduction to Computing,Prof. Santos,\n",
            encoding="utf-8",
        )

        assert await migrate_subjects(str(csv_path)) == 1

        subject, = await subjects_store.list_all()
        assert subject.description is None

    @pytest.mark.asyncio
    async def test_empty_file(self, tmp_path):
        csv_path = tmp_path / "students.csv"
        csv_path.write_text("student_number,first_name,last_name,course,year_level\n", encoding="utf-8")

        assert await migrate_students(str(csv_path)) == 0
