"""
Embedded SQL 구문 매핑 설정
EXEC SQL 시작 키워드와 DECLARE SECTION 마커 패턴을 관리합니다.
"""
import re

# =============================================================================
# EXEC SQL 구문 시작 (대소문자 무시)
# =============================================================================
EXEC_SQL_KEYWORD = r'(?i:EXEC\s+SQL)\b'

# =============================================================================
# DECLARE SECTION 마커 (키워드 사이 공백 무시)
# =============================================================================
DECLARE_SECTION_BEGIN = re.compile(
    r'^EXEC\s+SQL\s+BEGIN\s+DECLARE\s+SECTION\s*;$',
    re.IGNORECASE
)
DECLARE_SECTION_END = re.compile(
    r'^EXEC\s+SQL\s+END\s+DECLARE\s+SECTION\s*;$',
    re.IGNORECASE
)


# =============================================================================
# 헬퍼 함수
# =============================================================================

def is_declare_begin(statement: str) -> bool:
    """BEGIN DECLARE SECTION 마커 구문인지 확인"""
    return bool(DECLARE_SECTION_BEGIN.match(statement.strip()))


def is_declare_end(statement: str) -> bool:
    """END DECLARE SECTION 마커 구문인지 확인"""
    return bool(DECLARE_SECTION_END.match(statement.strip()))
