from pydantic import BaseModel, ConfigDict, Field

# ✅ 입력용 (POST/PUT 등) - 모든 필드 필수
class StudentCreate(BaseModel):
    student_number: str = Field(..., min_length=1)     # 학번
    first_name: str = Field(..., min_length=1)         # 이름
    last_name: str = Field(..., min_length=1)          # 성
    course: str = Field(..., min_length=1)             # 학과/과정
    year_level: int = Field(..., ge=1, le=5)           # 학년

# ✅ 전체 출력용 (GET, 상세조회 등)
class Student(StudentCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
