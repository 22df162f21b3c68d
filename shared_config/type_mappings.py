"""
C 타입 키워드 설정
함수 경계 탐지와 호스트 변수 선언 인식에 쓰이는 키워드 테이블입니다.
새로운 키워드 추가/수정 시 이 파일만 수정하면 됩니다.
"""
from typing import Optional

# =============================================================================
# 함수 선언부에 올 수 있는 타입/저장 클래스 키워드
# =============================================================================
FUNCTION_TYPE_KEYWORDS = frozenset({
    "void", "int", "char", "float", "double", "long", "short",
    "unsigned", "signed", "struct", "enum", "static", "inline",
    "extern", "auto", "register", "const", "volatile",
})

# 포인터 반환 타입 표시 (int *foo(...))
POINTER_MARKER = "*"

# =============================================================================
# DECLARE SECTION 내부 호스트 변수 선언 타입
# =============================================================================
HOST_VARIABLE_TYPES = (
    "int", "char", "float", "double", "long", "short",
    "unsigned", "signed", "void", "struct", "enum",
)

# 선언 타입 뒤에 이어질 수 있는 추가 타입 단어 (unsigned long int 등)
TYPE_CONTINUATION_WORDS = frozenset({
    "int", "char", "float", "double", "long", "short",
    "unsigned", "signed", "const", "volatile",
})

# 선언 타입 앞에 올 수 있는 한정자 (const int, static char 등)
DECLARATION_QUALIFIERS = (
    "const", "volatile", "static", "extern", "register", "auto",
)

# 태그 이름이 뒤따르는 타입 (struct rec, enum color)
TAGGED_TYPES = frozenset({"struct", "enum"})

# =============================================================================
# 함수 이름 후보에서 제외할 제어 키워드
# =============================================================================
CONTROL_KEYWORDS = frozenset({
    "if", "for", "while", "switch", "return", "sizeof",
    "do", "else", "case", "goto",
})


# =============================================================================
# 헬퍼 함수
# =============================================================================

def is_type_keyword(token: str) -> bool:
    """함수 선언부 타입 키워드인지 확인"""
    return token in FUNCTION_TYPE_KEYWORDS


def is_type_like(token: Optional[str]) -> bool:
    """타입 키워드 또는 포인터 마커인지 확인"""
    if not token:
        return False
    return token == POINTER_MARKER or token in FUNCTION_TYPE_KEYWORDS


def can_name_function(token: str) -> bool:
    """함수 이름 후보가 될 수 있는 식별자인지 확인"""
    return token not in FUNCTION_TYPE_KEYWORDS and token not in CONTROL_KEYWORDS
