"""
config.py

애플리케이션 전역 설정(Configuration) 관리 파일.

.env 환경 변수들을 Pydantic BaseSettings로 로드하여
애플리케이션 전반에서 공통으로 사용하는 설정 값을 제공한다.

주요 설정 항목:
- 데이터베이스 연결 정보 (운영 / 테스트)
- JWT 시크릿 및 토큰 만료 정책
- CORS 허용 도메인 목록
- 포스터 업로드 경로 및 최대 파일 크기
- 피드백 수정 허용 시간
- 로그 레벨

설계 원칙:
- 모든 환경 변수는 이 파일을 통해서만 접근
- 설정 값은 런타임 중 변경되지 않는 불변 객체로 취급

관련 파일:
- campus_club.main            : CORS / 업로드 / 로깅 초기화
- campus_club.core.security   : JWT 시크릿 / 만료 설정 사용
- campus_club.db.session      : DATABASE_URL 사용

"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_URL: str
    TEST_DATABASE_URL: str | None = None

    # 시작 시 Base.metadata 기준으로 테이블 생성 (alembic 사용 시 False)
    AUTO_CREATE_SCHEMA: bool = True

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_DAYS: int = 7

    # CORS 허용 도메인 (프론트엔드 주소)
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]

    # 포스터 이미지 업로드
    UPLOAD_DIR: str = "uploads"
    MAX_FILE_SIZE: int = 5 * 1024 * 1024

    FEEDBACK_EDIT_WINDOW_HOURS: int = 24

    LOG_LEVEL: str = "INFO"


settings = Settings()
