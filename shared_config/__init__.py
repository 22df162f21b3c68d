"""
shared_config 모듈
C 타입 키워드, Embedded SQL 마커, 로깅 설정 등을 중앙 관리합니다.
"""

from .type_mappings import (
    FUNCTION_TYPE_KEYWORDS,
    POINTER_MARKER,
    HOST_VARIABLE_TYPES,
    TYPE_CONTINUATION_WORDS,
    DECLARATION_QUALIFIERS,
    TAGGED_TYPES,
    CONTROL_KEYWORDS,
    is_type_keyword,
    is_type_like,
    can_name_function,
)

from .sql_mappings import (
    EXEC_SQL_KEYWORD,
    DECLARE_SECTION_BEGIN,
    DECLARE_SECTION_END,
    is_declare_begin,
    is_declare_end,
)

from .logger import (
    logger,
    set_console_level,
    setup_file_logging,
    LogStage,
    log_step,
)

__all__ = [
    # type_mappings
    "FUNCTION_TYPE_KEYWORDS",
    "POINTER_MARKER",
    "HOST_VARIABLE_TYPES",
    "TYPE_CONTINUATION_WORDS",
    "DECLARATION_QUALIFIERS",
    "TAGGED_TYPES",
    "CONTROL_KEYWORDS",
    "is_type_keyword",
    "is_type_like",
    "can_name_function",
    # sql_mappings
    "EXEC_SQL_KEYWORD",
    "DECLARE_SECTION_BEGIN",
    "DECLARE_SECTION_END",
    "is_declare_begin",
    "is_declare_end",
    # logger
    "logger",
    "set_console_level",
    "setup_file_logging",
    "LogStage",
    "log_step",
]
