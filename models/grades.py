from sqlalchemy import Column, Integer, Float, UniqueConstraint
from database.db import Base

class Grade(Base):
    __tablename__ = "grades"  # 과목별 학기 성적 테이블 (학생-과목 쌍당 1행)
    __table_args__ = (
        UniqueConstraint("student_id", "subject_id", name="uq_grades_student_subject"),
    )

    id = Column(Integer, primary_key=True, index=True)          # 성적 고유 ID (Primary Key)
    student_id = Column(Integer, nullable=False, index=True)    # 학생 ID
    subject_id = Column(Integer, nullable=False, index=True)    # 과목 ID
    prelim = Column(Float)                                      # 예비고사 (1.0~5.0, 낮을수록 우수)
    midterm = Column(Float)                                     # 중간고사
    semifinal = Column(Float)                                   # 준기말고사
    final = Column(Float)                                       # 기말고사
