"""
오류 처리 및 로깅 유틸리티

콘솔 로그는 컬러로 표시하고, 로그 파일 경로가 주어지면 파일에도 기록합니다.
"""

import logging
import sys
import time
import functools
from pathlib import Path
from typing import Callable, Optional, Union

# ANSI 컬러 코드
COLORS = {
    'DEBUG': '\033[94m',  # 파란색
    'INFO': '\033[92m',   # 녹색
    'WARNING': '\033[93m', # 노란색
    'ERROR': '\033[91m',  # 빨간색
    'CRITICAL': '\033[41m\033[97m', # 배경 빨간색, 글자 흰색
    'RESET': '\033[0m'    # 리셋
}

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """컬러 로그 포매터"""

    def format(self, record):
        levelname = record.levelname
        message = super().format(record)

        if levelname in COLORS and sys.stderr.isatty():
            return f"{COLORS[levelname]}{message}{COLORS['RESET']}"
        return message


def get_logger(name: str) -> logging.Logger:
    """모듈별 로거 생성"""
    return logging.getLogger(name)


def setup_logger(
    name: str,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    로거 설정

    같은 이름으로 여러 번 호출해도 핸들러가 중복 추가되지 않습니다.

    Args:
        name: 로거 이름
        level: 로그 레벨
        log_file: 로그 파일 경로 (None이면 콘솔만 사용)

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not any(getattr(h, '_lotto_console', False) for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        console_handler._lotto_console = True
        logger.addHandler(console_handler)

    if log_file is not None:
        log_path = Path(log_file)
        already = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename).resolve() == log_path.resolve()
            for h in logger.handlers
        )
        if not already:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path, encoding='utf-8')
            file_handler.setFormatter(logging.Formatter(
                LOG_FORMAT + ' - [%(filename)s:%(lineno)d]',
                datefmt=DATE_FORMAT
            ))
            logger.addHandler(file_handler)

    return logger


def log_performance(func: Callable) -> Callable:
    """
    성능 측정 데코레이터

    실행 시간을 DEBUG 레벨로 기록하고, 예외가 발생하면 실패 시간을 남긴 뒤 다시 발생시킵니다.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = logging.getLogger(func.__module__)
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time = time.perf_counter() - start_time
            logger.error(
                f"함수 {func.__name__} 실행 실패: "
                f"시간={execution_time:.3f}초, "
                f"오류={str(e)}"
            )
            raise

        execution_time = time.perf_counter() - start_time
        logger.debug(f"Finished {func.__name__} in {execution_time:.4f} seconds")
        return result

    return wrapper
