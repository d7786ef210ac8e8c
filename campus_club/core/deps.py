"""
deps.py

FastAPI 의존성 모음 (DB 세션 + 인증 / 권한 가드).

요청 흐름:
  request -> get_current_user (토큰 검증 + 사용자 로드)
          -> require_role / require_club_ownership
          -> 핸들러

- get_current_user       : Bearer 토큰 검증 후 DB에서 사용자 로드
- require_role(*roles)   : 역할(Role) 제한
- require_club_ownership : 경로의 club_id 가 본인 담당 동아리인 CLUBHEAD 만 허용
- ensure_club_owner      : 위와 동일한 규칙 (body로 club_id 를 받는 핸들러용)

"""

import logging
from typing import Generator

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.orm import Session

from campus_club.core.errors import AuthenticationError, AuthorizationError
from campus_club.core.security import decode_access_token, ExpiredToken, InvalidToken
from campus_club.models.user import User, Role

logger = logging.getLogger(__name__)

# Swagger Authorize에서 "Bearer 토큰" 입력받는 스키마
bearer_scheme = HTTPBearer(auto_error=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def get_current_user(
    cred: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    if cred is None:
        raise AuthenticationError("Access token required")

    try:
        payload = decode_access_token(cred.credentials)
    except ExpiredToken:
        raise AuthenticationError("Token expired")
    except InvalidToken:
        raise AuthenticationError("Invalid token")

    user = db.scalar(select(User).where(User.id == payload["id"]))
    if not user:
        # 토큰은 유효하지만 사용자가 삭제된 경우
        logger.warning("Token for missing user id=%s", payload["id"])
        raise AuthenticationError("User not found")

    return user


def require_role(*roles: Role):
    allowed = set(roles)

    def _checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise AuthorizationError("Insufficient permissions")
        return current_user
    return _checker

get_current_student = require_role(Role.STUDENT)
get_current_clubhead = require_role(Role.CLUBHEAD)
get_current_admin = require_role(Role.ADMIN)


def ensure_club_owner(user: User, club_id: int, detail: str = "Not authorized for this club") -> None:
    if user.role != Role.CLUBHEAD:
        raise AuthorizationError("Club head access required")
    if user.club_id != club_id:
        raise AuthorizationError(detail)


def require_club_ownership(club_id: int, current_user: User = Depends(get_current_user)) -> User:
    ensure_club_owner(current_user, club_id)
    return current_user
