"""
structlog 설정 모듈

LOG_LEVEL (debug/info/warning/error), LOG_FORMAT (console/json) 환경 변수로 제어합니다.
"""
import logging
import os

import structlog
from dotenv import load_dotenv

load_dotenv()

LOG_LEVEL = os.environ.get("LOG_LEVEL", "info")
LOG_FORMAT = os.environ.get("LOG_FORMAT", "console")


def setup_logging(level: str = LOG_LEVEL, fmt: str = LOG_FORMAT) -> None:
    """structlog 프로세서 구성"""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper()),
        ),
    )
