from sqlalchemy import Column, Integer, String
from database.db import Base

class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                    # 고유 학생 ID (Primary Key)
    student_number = Column(String(50), unique=True, nullable=False)     # 학번 (예: 2024-0001)
    first_name = Column(String(100), nullable=False)                     # 이름
    last_name = Column(String(100), nullable=False, index=True)          # 성 (정렬 기준)
    course = Column(String(100), nullable=False)                         # 학과/과정 (예: BSIT)
    year_level = Column(Integer, nullable=False)                         # 학년 (1~5)
