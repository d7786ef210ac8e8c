"""
logging.py

표준 logging 초기화.

- 애플리케이션 시작 시 한 번만 호출
- 각 모듈은 logging.getLogger(__name__) 으로 자신의 logger 사용

"""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    if root.handlers:
        # uvicorn 등이 이미 핸들러를 붙인 경우 레벨만 맞춘다
        root.setLevel(level.upper())
        return

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
