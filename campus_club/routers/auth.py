"""
auth.py

인증(Authentication) API 모음.

회원 가입, 로그인, 내 정보 조회를 담당한다.
JWT Access Token 하나만 사용하며, 토큰은 Authorization Header(Bearer)로 전달된다.

주요 기능:
- 회원 가입 (student / clubhead) + 즉시 토큰 발급
- 로그인 (이메일 또는 학번 + 비밀번호)
- 로그인 사용자 프로필 조회

설계 원칙:
- 이메일 / 학번 중복은 409 로 응답
- 중복 검사 후 INSERT 사이의 경쟁 상태는 DB unique 제약(IntegrityError)으로 처리
- 응답에 password_hash 는 절대 포함하지 않음

관련 파일:
- campus_club.core.security  : 비밀번호 해시 / JWT 생성
- campus_club.core.deps      : 인증 의존성(get_current_user)
- campus_club.schemas.auth   : 요청/응답 스키마

"""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from campus_club.core.deps import get_db, get_current_user
from campus_club.core.errors import AuthenticationError, ConflictError, InternalError
from campus_club.core.security import create_access_token, get_password_hash, verify_password
from campus_club.models.user import User, Role
from campus_club.schemas.auth import RegisterRequest, LoginRequest, UserOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def issue_token(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, role=user.role.value)


def _conflict_message(db: Session, data: RegisterRequest) -> str:
    # 동시 가입으로 INSERT 시점에 unique 제약이 걸린 경우, 실제로 겹친 컬럼을 알려준다
    if db.scalar(select(User.id).where(User.email == data.email)):
        return "User with this email already exists"
    if data.register_number and db.scalar(
        select(User.id).where(User.register_number == data.register_number)
    ):
        return "Register number already in use"
    return "User already exists"


"""
회원 가입 API

- 이메일 중복 시 409
- 학번(register_number) 중복 시 409
- 가입 즉시 토큰 발급 (201)

"""

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(data: RegisterRequest, db: Session = Depends(get_db)):
    exists = db.scalar(select(User.id).where(User.email == data.email))
    if exists:
        raise ConflictError("User with this email already exists")

    if data.register_number:
        taken = db.scalar(select(User.id).where(User.register_number == data.register_number))
        if taken:
            raise ConflictError("Register number already in use")

    user = User(
        email=data.email,
        password_hash=get_password_hash(data.password),
        role=Role(data.role),
        full_name=data.full_name,
        register_number=data.register_number,
        staff_id=data.staff_id,
        department=data.department,
        year=data.year,
        contact_number=data.contact_number,
    )

    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except IntegrityError:
        db.rollback()
        raise ConflictError(_conflict_message(db, data))
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed for %s", data.email)
        raise InternalError("Registration failed")

    logger.info("User registered id=%s role=%s", user.id, user.role.value)

    return {
        "success": True,
        "message": "User registered successfully",
        "user": UserOut.model_validate(user).model_dump(mode="json"),
        "token": issue_token(user),
    }


"""
로그인 API

- identifier: 이메일 또는 학번
- 사용자가 없거나 비밀번호가 틀리면 동일하게 401 (계정 존재 여부 노출 방지)

"""

@router.post("/login")
def login(data: LoginRequest, db: Session = Depends(get_db)):
    identifier = data.identifier.strip()
    user = db.scalar(
        select(User).where(
            or_(User.email == identifier.lower(), User.register_number == identifier)
        )
    )

    if not user or not verify_password(data.password, user.password_hash):
        logger.info("Failed login for identifier=%s", identifier)
        raise AuthenticationError("Invalid credentials")

    return {
        "success": True,
        "message": "Login successful",
        "user": UserOut.model_validate(user).model_dump(mode="json"),
        "token": issue_token(user),
    }


@router.get("/profile")
def profile(current_user: User = Depends(get_current_user)):
    return {
        "success": True,
        "user": UserOut.model_validate(current_user).model_dump(mode="json"),
    }
