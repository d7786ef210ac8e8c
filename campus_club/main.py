"""
main.py

FastAPI 애플리케이션 진입점(Entry Point).

서버 실행 시 가장 먼저 로드되며,
애플리케이션 전반의 설정과 라우터 등록을 담당한다.

주요 역할:
- create_app(): FastAPI 앱 인스턴스 조립 (테스트에서는 Database 주입)
- lifespan: DB 엔진 open / close, 시작 시 스키마 생성
- CORS 미들웨어, 공통 에러 핸들러, 업로드 정적 경로(/uploads) 설정
- 헬스 체크 및 DB 연결 상태 확인용 엔드포인트 제공

설계 원칙:
- 비즈니스 로직은 포함하지 않고 설정/조립 역할만 수행
- 실제 기능은 routers / services 계층에 위임
- DB 연결은 전역 변수가 아닌 app.state.database 하나로 관리

실행:
- uvicorn campus_club.main:app --reload

"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.orm import Session

from campus_club.core.config import settings
from campus_club.core.deps import get_db
from campus_club.core.errors import register_exception_handlers
from campus_club.core.logging import configure_logging
from campus_club.db.session import Database
from campus_club.routers import admin, announcements, auth, clubs, events, feedback, users

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database: Database = app.state.database

    # 외부에서 이미 열어 둔 Database(테스트)는 닫지 않는다
    owns_database = not database.is_open
    database.open()
    if settings.AUTO_CREATE_SCHEMA:
        database.create_schema()
    logger.info("Campus club backend started")

    yield

    if owns_database:
        database.close()
    logger.info("Campus club backend stopped")


def create_app(database: Database | None = None) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Campus Club Backend", lifespan=lifespan)
    app.state.database = database or Database(settings.DATABASE_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(clubs.router)
    app.include_router(events.router)
    app.include_router(announcements.router)
    app.include_router(feedback.router)
    app.include_router(admin.router)

    upload_root = Path(settings.UPLOAD_DIR)
    upload_root.mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=str(upload_root)), name="uploads")

    """
    서버 헬스 체크 엔드포인트

    - 애플리케이션 프로세스가 정상 동작 중인지 확인
    - 로드밸런서 / 배포 환경에서 서버 상태 확인 용도

    """
    @app.get("/api/health")
    def health():
        return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}

    """
    데이터베이스 연결 상태 확인 엔드포인트

    - 간단한 SELECT 1 쿼리를 통해 DB 연결 여부 확인
    - 서버는 살아 있으나 DB가 죽은 상황을 분리해서 감지 가능

    """
    @app.get("/api/db-ping")
    def db_ping(db: Session = Depends(get_db)):
        value = db.execute(text("SELECT 1")).scalar_one()
        return {"db": "ok", "value": value}

    return app


app = create_app()
