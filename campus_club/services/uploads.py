"""
services/uploads.py

공지 포스터 이미지 업로드 저장.

- jpeg / jpg / png / gif 만 허용 (확장자 + content-type 모두 검사)
- MAX_FILE_SIZE 초과 시 거부
- 파일명: poster-<epoch ms>-<난수><확장자>
- 반환 값은 정적 경로 URL (/uploads/<파일명>)
- 저장 실패 시 부분 파일 삭제, discard_poster 로 더 이상 쓰지 않는 포스터 정리

"""

import logging
import secrets
import time
from pathlib import Path

from fastapi import UploadFile

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif"}
ALLOWED_CONTENT_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif"}

_CHUNK_SIZE = 64 * 1024

logger = logging.getLogger(__name__)


class UploadRejected(ValueError):
    pass


def _poster_filename(original: str) -> str:
    ext = Path(original).suffix.lower()
    suffix = secrets.randbelow(10**9)
    return f"poster-{int(time.time() * 1000)}-{suffix}{ext}"


def save_poster(upload: UploadFile, *, upload_dir: str, max_size: int) -> str:
    ext = Path(upload.filename or "").suffix.lower()
    if ext not in ALLOWED_EXTENSIONS or (upload.content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise UploadRejected("Only image files are allowed!")

    target_dir = Path(upload_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = _poster_filename(upload.filename)
    target = target_dir / filename

    written = 0
    try:
        with open(target, "wb") as fh:
            while chunk := upload.file.read(_CHUNK_SIZE):
                written += len(chunk)
                if written > max_size:
                    raise UploadRejected("File too large")
                fh.write(chunk)
    except BaseException:
        # 크기 초과 / 디스크 오류 모두 부분 파일을 남기지 않는다
        target.unlink(missing_ok=True)
        raise

    return f"/uploads/{filename}"


def discard_poster(poster_url: str | None, *, upload_dir: str) -> None:
    """save_poster 가 반환한 URL 의 파일 삭제 (없으면 무시)"""
    if not poster_url or not poster_url.startswith("/uploads/"):
        return
    name = Path(poster_url).name
    try:
        (Path(upload_dir) / name).unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove poster file %s", name, exc_info=True)
