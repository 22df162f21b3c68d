"""
Loguru 기반 로깅 시스템
파일/함수/라인 정보를 포함한 VSCode 클릭 가능 포맷
"""
import functools
import sys
import time
from pathlib import Path
from loguru import logger

# 기본 로거 제거 (중복 방지)
logger.remove()

# =============================================================================
# 포맷 설정
# =============================================================================

# 콘솔용 포맷 (컬러 + VSCode 클릭 가능 - file.path:line 형식)
CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <7}</level> | "
    "<cyan>{file.path}</cyan>:<cyan>{line}</cyan> in <cyan>{function}()</cyan> | "
    "<level>{message}</level>"
)

# 파일용 포맷 (플레인 텍스트 + VSCode 클릭 가능)
FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | "
    "{level: <7} | "
    "{file.path}:{line} in {function}() | "
    "{message}"
)

DEFAULT_CONSOLE_LEVEL = "INFO"

# =============================================================================
# 콘솔 로깅 설정
# =============================================================================

_console_handler_id = logger.add(
    sys.stderr,
    format=CONSOLE_FORMAT,
    level=DEFAULT_CONSOLE_LEVEL,
    colorize=True,
)


def set_console_level(level: str = DEFAULT_CONSOLE_LEVEL):
    """
    콘솔 로그 레벨 변경

    기존 콘솔 핸들러를 제거하고 새 레벨로 다시 등록합니다.

    Args:
        level: 로그 레벨 (DEBUG, INFO, WARNING ...)

    Returns:
        새 핸들러 ID
    """
    global _console_handler_id
    logger.remove(_console_handler_id)
    _console_handler_id = logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=level,
        colorize=True,
    )
    return _console_handler_id


# =============================================================================
# 파일 로깅 함수
# =============================================================================

def setup_file_logging(
    log_dir: str = "./logs",
    level: str = "DEBUG",
    rotation: str = "1 day",
    retention: str = "7 days"
):
    """
    파일 로깅 설정

    Args:
        log_dir: 로그 디렉토리 경로
        level: 로그 레벨
        rotation: 로테이션 주기
        retention: 보관 기간

    Returns:
        추가된 핸들러 ID
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    handler_id = logger.add(
        str(log_path / "{time:YYYY-MM-DD}_scan.log"),
        format=FILE_FORMAT,
        level=level,
        rotation=rotation,
        retention=retention,
        encoding="utf-8",
    )

    logger.info(f"파일 로깅 시작: {log_path}")
    return handler_id


# =============================================================================
# 단계 추적 컨텍스트 매니저
# =============================================================================

class LogStage:
    """
    단계 추적 컨텍스트 매니저 (소요 시간 포함)

    시작은 DEBUG, 완료는 SUCCESS 레벨로 기록합니다.
    파일 단위처럼 자주 반복되는 단계는 --verbose 없이 완료 로그만 보입니다.

    사용 예:
        with LogStage("호스트 변수 분석", file="sample.sqc"):
            # 작업 수행
            pass
    """

    def __init__(self, stage_name: str, **context):
        self.stage_name = stage_name
        self.context = context
        self.started = 0.0

    def _label(self) -> str:
        context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
        if context_str:
            return f"{self.stage_name} ({context_str})"
        return self.stage_name

    def __enter__(self):
        self.started = time.perf_counter()
        logger.debug(f"[시작] {self._label()}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        elapsed = time.perf_counter() - self.started
        if exc_type:
            logger.error(f"[실패] {self._label()}: {exc_val}")
        else:
            logger.success(f"[완료] {self._label()} {elapsed:.3f}s")
        return False


# =============================================================================
# 편의 함수
# =============================================================================

def log_step(step_name: str):
    """단계 로깅 데코레이터"""
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger.info(f"[단계] {step_name}")
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.error(f"[실패] {step_name}: {e}")
                raise
            logger.success(f"[완료] {step_name}")
            return result
        return wrapper
    return decorator


__all__ = [
    "logger",
    "set_console_level",
    "setup_file_logging",
    "LogStage",
    "log_step",
    "CONSOLE_FORMAT",
    "FILE_FORMAT",
]
