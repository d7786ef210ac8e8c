"""
base.py

SQLAlchemy ORM Base 정의 파일.

모든 모델(User, Club, Event, Announcement, Feedback 등)은
이 Base를 상속하며, 테이블 메타데이터 / 시작 시 스키마 생성 /
Alembic 마이그레이션 모두 이 Base.metadata 를 기준으로 동작한다.

"""

from sqlalchemy.orm import declarative_base

# 모든 ORM 모델이 상속받는 Base 클래스
Base = declarative_base()
