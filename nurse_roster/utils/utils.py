"""
공통 유틸리티 모듈
- 모듈별 로거 생성, 오류 기록, 실행 시간 측정
"""
from datetime import datetime
import json
import logging
import time
import traceback

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """
    모듈 이름으로 로거를 생성한다. 핸들러는 한 번만 붙인다.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger


def log_error(logger: logging.Logger, component: str, error: Exception, context: dict = None) -> dict:
    """
    오류 원인을 진단용 JSON 레코드로 기록한다. 사용자에게는 노출하지 않는다.
    """
    error_data = {
        "component": component,
        "error_type": type(error).__name__,
        "error_message": str(error),
        "cause": repr(error.__cause__) if error.__cause__ else None,
        "timestamp": datetime.now().isoformat(),
        "traceback": "".join(traceback.format_exception(type(error), error, error.__traceback__)),
        "context": context or {},
    }
    logger.error(f"오류 발생: {json.dumps(error_data, ensure_ascii=False)}")
    return error_data


class Timer:
    """코드 블록의 실행 시간을 측정하는 컨텍스트 매니저"""
    def __init__(self, description, logger: logging.Logger = None):
        self.description = description
        self.logger = logger or get_logger(__name__)

    def __enter__(self):
        self.start = time.time()
        self.logger.info(f"{self.description} 시작...")
        return self

    def __exit__(self, *args):
        self.end = time.time()
        self.duration = self.end - self.start
        self.logger.info(f"{self.description} 완료: {self.duration:.2f}초 소요")
