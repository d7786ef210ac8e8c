"""
security.py

비밀번호 해싱 및 JWT 토큰 발급/검증을 담당하는 보안 유틸리티 모음.

인증(auth) 로직에서 사용하는 저수준(low-level) 보안 기능만 제공하며,
라우터나 DB 접근 로직은 포함하지 않는다.

주요 기능:
- 비밀번호 해싱 및 검증 (bcrypt)
- Access Token 발급 (id / email / role 클레임 포함)
- Access Token 디코딩 및 검증 (만료 / 위조 구분)

설계 원칙:
- 토큰 검증 실패는 HTTP 와 무관한 예외(InvalidToken / ExpiredToken)로 표현
  -> HTTP 401 변환은 campus_club.core.deps 에서 수행
- 시간 기반(exp) 만료는 UTC 기준으로 처리

관련 파일:
- campus_club.core.config   : JWT 시크릿 키 및 만료 설정
- campus_club.core.deps     : 토큰을 실제로 검증하는 인증 의존성
- campus_club.routers.auth  : 회원가입 / 로그인 API

"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext

from campus_club.core.config import settings


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class InvalidToken(Exception):
    """서명 불일치, 형식 오류, 필수 클레임 누락"""


class ExpiredToken(InvalidToken):
    """exp 가 지난 토큰"""


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
Access Token 발급 함수

- claims: id / email / role (User 객체에서 추출)
- sub: 사용자 id 문자열
- exp: 만료 시각 (기본 ACCESS_TOKEN_EXPIRE_DAYS 일)

"""

def create_access_token(
    *, user_id: int, email: str, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS))
    payload = {
        "sub": str(user_id),
        "id": user_id,
        "email": email,
        "role": role,
        "type": "access",
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


"""
Access Token 디코딩 및 검증 함수

- 만료된 토큰      -> ExpiredToken
- 위조/형식 오류   -> InvalidToken
- access 타입이 아니거나 id 클레임이 없으면 InvalidToken

"""

def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError as e:
        raise ExpiredToken("Token expired") from e
    except JWTError as e:
        raise InvalidToken("Invalid token") from e

    if payload.get("type") != "access":
        raise InvalidToken("Not an access token")
    if not isinstance(payload.get("id"), int):
        raise InvalidToken("Missing id claim")

    return payload
