"""
session.py

데이터베이스 엔진 및 세션(Session) 관리 파일.

프로세스 전역 변수 대신 Database 인스턴스 하나가
Engine 과 SessionLocal(세션 팩토리)을 소유한다.

- open()   : 엔진 / 세션 팩토리 생성 (앱 lifespan 시작 시)
- close()  : 커넥션 풀 정리 (앱 lifespan 종료 시)
- session(): 요청 단위 세션 생성 (campus_club.core.deps.get_db)

설계 원칙:
- DB 연결 설정은 한 곳에서만 정의
- pool_pre_ping=True로 유휴 연결 오류 방지
- 테스트에서는 별도 Database 인스턴스를 주입 (campus_club.main.create_app)

관련 파일:
- campus_club.core.config   : DATABASE_URL 설정
- campus_club.core.deps     : get_db 의존성
- campus_club.main          : lifespan 에서 open / close

"""

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from campus_club.db.base import Base

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, url: str, **engine_kwargs):
        self.url = url
        self.engine_kwargs = engine_kwargs
        self.engine: Engine | None = None
        self.SessionLocal: sessionmaker | None = None

    @property
    def is_open(self) -> bool:
        return self.engine is not None

    def open(self) -> "Database":
        if self.engine is not None:
            return self

        self.engine = create_engine(self.url, pool_pre_ping=True, **self.engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        logger.info("Database engine opened (%s)", self.engine.url.render_as_string(hide_password=True))
        return self

    def close(self) -> None:
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self.SessionLocal = None
        logger.info("Database engine disposed")

    def session(self) -> Session:
        if self.SessionLocal is None:
            raise RuntimeError("Database is not open")
        return self.SessionLocal()

    def create_schema(self) -> None:
        # 모델 모듈 import -> Base.metadata 에 테이블 등록
        import campus_club.models  # noqa: F401

        if self.engine is None:
            raise RuntimeError("Database is not open")
        Base.metadata.create_all(bind=self.engine)
