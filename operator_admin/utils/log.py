"""operator_admin 로깅 설정"""

import logging
import sys
from typing import Optional

from operator_admin.config import get_config

ROOT_LOGGER_NAME = "operator_admin"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None, format_string: str = DEFAULT_FORMAT) -> None:
    """
    operator_admin 로거에 콘솔 핸들러를 설정합니다.

    Args:
        level: 로그 레벨 (DEBUG, INFO, WARNING, ERROR). 없으면 설정 파일의 log_level을 사용합니다.
        format_string: 로그 포맷 문자열.
    """
    log_level = getattr(logging, (level or get_config().log_level).upper())

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter(format_string))
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """모듈 이름(__name__)으로 operator_admin 하위 로거를 반환합니다."""
    if name.startswith(ROOT_LOGGER_NAME):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
