"""
호스트 변수 추출에 사용되는 정규식 패턴들을 정의한 모듈입니다.
C 코드 토큰화, EXEC SQL 내부 토큰화, DECLARE SECTION 선언문 인식 패턴을 포함합니다.
"""
import re
from typing import Iterable

from shared_config.sql_mappings import EXEC_SQL_KEYWORD
from shared_config.type_mappings import DECLARATION_QUALIFIERS, HOST_VARIABLE_TYPES

# C 코드 토큰 (함수 본문 순회용)
# 1. 전처리기 지시문: 줄 첫 # (앞 공백 허용) 부터 줄 끝까지, 역슬래시 줄 연속 포함
# 2. 라인 주석: // ... (줄 끝까지)
# 3. 블록 주석: /* ... */ (닫히지 않으면 끝까지)
# 4. 문자열: "..." (이스케이프 처리, 닫히지 않으면 끝까지)
# 5. 문자 리터럴: '...'
# 6. EXEC SQL 시작 키워드 (대소문자 무시)
# 7. 식별자 (EXEC SQL이 다른 식별자 일부로 매칭되지 않도록 통째로 소비)
# 8. 기타 한 글자
CODE_TOKEN_PATTERN = re.compile(
    r'(?P<preprocessor>(?m:^)[ \t]*#(?:\\[ \t]*\r?\n|[^\n])*)|'
    r'(?P<line_comment>//[^\n]*)|'
    r'(?P<block_comment>/\*[\s\S]*?(?:\*/|\Z))|'
    r'(?P<string>"(?:\\[\s\S]|[^"\\])*(?:"|\\?\Z))|'
    r"(?P<char>'(?:\\[\s\S]|[^'\\])*(?:'|\\?\Z))|"
    r'(?P<exec_sql>' + EXEC_SQL_KEYWORD + r')|'
    r'(?P<word>[A-Za-z_]\w*)|'
    r'(?P<other>[\s\S])'
)

# EXEC SQL 구문 내부 토큰
# SQL 문자열('' 이스케이프)과 SQL 주석 안의 콜론은 호스트 변수가 아님
SQL_TOKEN_PATTERN = re.compile(
    r"(?P<string>'(?:[^']|'')*(?:'|\Z))|"
    r'(?P<quoted>"[^"]*(?:"|\Z))|'
    r'(?P<comment_single>--[^\n]*)|'
    r'(?P<comment_multi>/\*[\s\S]*?(?:\*/|\Z))|'
    r'(?P<host_var>:(?P<name>[A-Za-z_][A-Za-z0-9_]*))|'
    r'(?P<other>[\s\S])'
)

# 인디케이터 변수 판별: 콜론 바로 앞이 호스트 변수(:var, :arr[i], :rec.field)로 끝나는지
# 예: :value:ind_value 의 ind_value
PRECEDING_HOST_VAR = re.compile(
    r':[A-Za-z_]\w*(?:\[[^\]]*\]|\.[A-Za-z_]\w*)*\Z'
)

# 호스트 변수 선언문 시작: [한정자...] TYPE (단어 경계)
# 예: int id / const int max_rows / static char buf
DECLARATION_HEAD = re.compile(
    r'\s*(?:(?:' + '|'.join(DECLARATION_QUALIFIERS) + r')\s+)*'
    r'(' + '|'.join(HOST_VARIABLE_TYPES) + r')\b'
)

# 선언자: [*...] NAME [ '[' BOUND ']' ]... [ '=' EXPR ]
DECLARATOR_PATTERN = re.compile(
    r'[\s*]*(?P<name>[A-Za-z_]\w*)\s*(?:\[[^\]]*\]\s*)*(?:=[\s\S]*)?\Z'
)

# 식별자
IDENTIFIER = re.compile(r'[A-Za-z_]\w*')


def build_word_pattern(names: Iterable[str]) -> re.Pattern:
    """
    선언된 이름들의 완전 단어 매칭 패턴을 만듭니다.

    더 긴 식별자의 일부와는 매칭되지 않습니다 (name 은 name_len 에 매칭 안 됨).
    긴 이름을 먼저 시도하도록 길이 역순으로 정렬합니다.
    """
    ordered = sorted(set(names), key=lambda n: (-len(n), n))
    alternation = '|'.join(re.escape(n) for n in ordered)
    return re.compile(r'(?<![A-Za-z0-9_])(?:' + alternation + r')(?![A-Za-z0-9_])')
