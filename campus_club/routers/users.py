"""
users.py

사용자 정보 조회 / 수정 API 모음.

- 본인 프로필 부분 수정 (이름 / 학과 / 학년 / 연락처)
- 관리자용 전체 사용자 목록 (role 필터)
- 사용자 상세 조회 (관리자 또는 본인)

role 과 email 은 이 API로 변경할 수 없다.

"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from campus_club.core.deps import get_db, get_current_user, get_current_admin
from campus_club.core.errors import AuthorizationError, InternalError, NotFoundError, ValidationError
from campus_club.models.user import User, Role
from campus_club.schemas.auth import UserOut
from campus_club.schemas.user import EditProfileRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.patch("/me")
def edit_profile(
    data: EditProfileRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    # None 이 아닌 필드만 반영
    changes = data.model_dump(exclude_none=True)
    if not changes:
        raise ValidationError("No changes provided")

    for field, value in changes.items():
        setattr(current_user, field, value)

    try:
        db.commit()
        db.refresh(current_user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Profile update failed for user %s", current_user.id)
        raise InternalError("Failed to update profile")

    return {
        "success": True,
        "message": "Profile updated",
        "data": UserOut.model_validate(current_user).model_dump(mode="json"),
    }


# 전체 사용자 목록 (관리자 전용)
@router.get("")
def list_users(
    role: Role | None = None,
    db: Session = Depends(get_db),
    admin: User = Depends(get_current_admin),
):
    stmt = select(User).order_by(User.id)
    if role is not None:
        stmt = stmt.where(User.role == role)

    users = db.scalars(stmt).all()
    return {
        "success": True,
        "data": [UserOut.model_validate(u).model_dump(mode="json") for u in users],
    }


@router.get("/{user_id}")
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    if current_user.role != Role.ADMIN and current_user.id != user_id:
        raise AuthorizationError("Insufficient permissions")

    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")

    return {
        "success": True,
        "data": UserOut.model_validate(user).model_dump(mode="json"),
    }
