import os
import tempfile
from pathlib import Path

# 설정 객체가 import 시점에 생성되므로 환경변수를 먼저 지정
_TMP_DIR = tempfile.mkdtemp(prefix="grade-portal-tests-")
os.environ["DB_DSN"] = f"sqlite:///{Path(_TMP_DIR) / 'test.db'}"
os.environ.setdefault("GEMINI_API_KEY", "test-key")

import pytest

from database.db import Base, engine, init_db
from schemas.grades import Grade
from schemas.students import Student
from schemas.subjects import Subject


@pytest.fixture(autouse=True)
def fresh_db():
    """테스트마다 빈 테이블로 시작"""
    init_db()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def cruz():
    return Student(id=1, student_number="2024-0001", first_name="Ana", last_name="Cruz",
                   course="BSIT", year_level=1)


@pytest.fixture
def reyes():
    return Student(id=2, student_number="2024-0002", first_name="Ben", last_name="Reyes",
                   course="BSIT", year_level=1)


@pytest.fixture
def cc101():
    return Subject(id=10, subject_code="CC101", subject_name="Introduction to Computing",
                   instructor="Prof. Santos", description="Fundamentals of computing")


@pytest.fixture
def cc101_grades():
    return [
        Grade(id=100, student_id=1, subject_id=10, prelim=1.5, midterm=2.0, semifinal=1.0, final=1.5),
        Grade(id=101, student_id=2, subject_id=10, prelim=4.0, midterm=4.5),
    ]
