"""
services/record_store.py

레코드 저장소 게이트웨이 (students / subjects / grades)

- 테이블별 비동기 접근자: list_all / list_by_filter / get / insert / update / delete
- 호출마다 새 세션을 열고 워커 스레드에서 실행 → 동시에 await 해도 세션 공유 없음
- 반환값은 pydantic 스냅샷 (ORM 객체를 밖으로 내보내지 않음)
- 캐시 없음: 모든 조회는 DB로 간다
- SQLAlchemy 오류는 StoreError로 감싸서 올림
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Generic, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from database import db as database
from models.grades import Grade as GradeModel
from models.students import Student as StudentModel
from models.subjects import Subject as SubjectModel
from schemas.grades import Grade as GradeSchema
from schemas.students import Student as StudentSchema
from schemas.subjects import Subject as SubjectSchema
from services.errors import StoreError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class RecordStore(Generic[SchemaT]):
    """테이블 하나에 대한 얇은 CRUD 게이트웨이"""

    def __init__(self, model, schema: Type[SchemaT], session_factory: Optional[Callable[[], Session]] = None):
        self.model = model
        self.schema = schema
        self.table = model.__tablename__
        self._session_factory = session_factory

    # ===============================================================
    # 내부 공통
    # ===============================================================

    def _session(self) -> Session:
        factory = self._session_factory or database.SessionLocal
        return factory()

    def _column(self, name: str):
        if name not in self.model.__table__.columns:
            raise StoreError(f"Unknown column '{name}' on table '{self.table}'")
        return getattr(self.model, name)

    def _snapshot(self, row) -> SchemaT:
        return self.schema.model_validate(row)

    def _in_session(self, fn: Callable[[Session], Any]) -> Any:
        db = self._session()
        try:
            return fn(db)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"[{self.table}] store call failed: {e}")
            raise StoreError(f"{self.table}: {e.__class__.__name__}: {e}") from e
        finally:
            db.close()

    async def _run_blocking(self, fn: Callable[[Session], Any]) -> Any:
        """블로킹 DB 호출을 스레드 풀에서 실행"""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: self._in_session(fn))

    # ===============================================================
    # 조회
    # ===============================================================

    async def list_all(self, order_key: str = "id", ascending: bool = True) -> List[SchemaT]:
        column = self._column(order_key)
        order = column.asc() if ascending else column.desc()

        def _query(db: Session):
            rows = db.query(self.model).order_by(order, self.model.id).all()
            return [self._snapshot(r) for r in rows]

        return await self._run_blocking(_query)

    async def list_by_filter(self, field: str, value: Any) -> List[SchemaT]:
        column = self._column(field)

        def _query(db: Session):
            rows = db.query(self.model).filter(column == value).order_by(self.model.id).all()
            return [self._snapshot(r) for r in rows]

        return await self._run_blocking(_query)

    async def get(self, record_id: int) -> Optional[SchemaT]:
        def _query(db: Session):
            row = db.get(self.model, record_id)
            return self._snapshot(row) if row is not None else None

        return await self._run_blocking(_query)

    # ===============================================================
    # 쓰기
    # ===============================================================

    async def insert(self, records: Iterable[Dict[str, Any]]) -> List[SchemaT]:
        """여러 행을 한 번의 커밋으로 추가"""
        payloads = [dict(r) for r in records]
        for payload in payloads:
            for key in payload:
                self._column(key)

        def _write(db: Session):
            rows = [self.model(**p) for p in payloads]
            db.add_all(rows)
            db.commit()
            return [self._snapshot(r) for r in rows]

        return await self._run_blocking(_write)

    async def update(self, record_id: int, partial: Dict[str, Any]) -> SchemaT:
        for key in partial:
            self._column(key)

        def _write(db: Session):
            row = db.get(self.model, record_id)
            if row is None:
                raise StoreError(f"{self.table}: row {record_id} not found")
            for key, value in partial.items():
                setattr(row, key, value)
            db.commit()
            return self._snapshot(row)

        return await self._run_blocking(_write)

    async def delete(self, record_id: int) -> None:
        def _write(db: Session):
            row = db.get(self.model, record_id)
            if row is None:
                raise StoreError(f"{self.table}: row {record_id} not found")
            db.delete(row)
            db.commit()

        await self._run_blocking(_write)


# ✅ 테이블별 게이트웨이 인스턴스
students_store: RecordStore[StudentSchema] = RecordStore(StudentModel, StudentSchema)
subjects_store: RecordStore[SubjectSchema] = RecordStore(SubjectModel, SubjectSchema)
grades_store: RecordStore[GradeSchema] = RecordStore(GradeModel, GradeSchema)
