from sqlalchemy import Column, Integer, String, Text
from database.db import Base

class Subject(Base):
    __tablename__ = "subjects"  # 과목 정보 테이블

    id = Column(Integer, primary_key=True, index=True)         # 과목 고유 ID (Primary Key)
    subject_code = Column(String(20), nullable=False)         # 과목 코드 (예: CC101)
    subject_name = Column(String(150), nullable=False)        # 과목 이름
    instructor = Column(String(150), nullable=False)          # 담당 교수
    description = Column(Text)                                # 과목 설명 (선택)
