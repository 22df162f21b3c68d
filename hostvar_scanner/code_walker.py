"""
함수 본문 순회 모듈

함수 본문을 토큰 단위로 훑으며 주석, 문자열/문자 리터럴, EXEC SQL 구문 범위를 수집합니다.
주석이나 리터럴 안의 EXEC SQL은 구문으로 취급하지 않습니다.
전처리기 지시문 줄은 통째로 건너뜁니다 (#error don't 의 따옴표가 리터럴을 열지 않음).
"""
from dataclasses import dataclass, field
from typing import List

from shared_config.logger import logger

from .patterns import CODE_TOKEN_PATTERN
from .types import ExcludedRegion


@dataclass
class SqlStatement:
    """EXEC SQL ... ; 구문

    Attributes:
        start: 'EXEC' 시작 오프셋
        end: 종료 세미콜론 다음 오프셋
        text: 구문 전체 텍스트
    """
    start: int
    end: int
    text: str


@dataclass
class CodeLayout:
    """본문 순회 결과"""
    comments: List[ExcludedRegion] = field(default_factory=list)
    literals: List[ExcludedRegion] = field(default_factory=list)
    statements: List[SqlStatement] = field(default_factory=list)


def find_statement_end(text: str, start: int, end: int) -> int:
    """
    문자열 리터럴을 고려하여 구문 종료 세미콜론을 찾습니다.

    Returns:
        세미콜론 다음 오프셋, 없으면 -1
    """
    quote_char = None
    i = start
    while i < end:
        char = text[i]
        if quote_char:
            if char == '\\' and quote_char == '"':
                i += 1
            elif char == quote_char:
                quote_char = None
        elif char in ("'", '"'):
            quote_char = char
        elif char == ';':
            return i + 1
        i += 1
    return -1


def walk_code(text: str, start: int, end: int) -> CodeLayout:
    """
    text[start:end] 구간을 순회하며 주석/리터럴/SQL 구문 범위를 수집합니다.

    모든 오프셋은 text 기준 절대 오프셋입니다.
    종료 세미콜론이 없는 EXEC SQL은 구문으로 보지 않고 키워드 뒤부터 계속 순회합니다.
    전처리기 지시문은 주석도 리터럴도 아니므로 어느 목록에도 넣지 않습니다.
    """
    layout = CodeLayout()
    pos = start

    while pos < end:
        match = CODE_TOKEN_PATTERN.match(text, pos, end)
        kind = match.lastgroup

        if kind in ('line_comment', 'block_comment'):
            layout.comments.append(ExcludedRegion(match.start(), match.end()))
        elif kind in ('string', 'char'):
            layout.literals.append(ExcludedRegion(match.start(), match.end()))
        elif kind == 'exec_sql':
            stmt_end = find_statement_end(text, match.end(), end)
            if stmt_end == -1:
                logger.debug(f"종료되지 않은 EXEC SQL 무시 (offset={match.start()})")
            else:
                layout.statements.append(
                    SqlStatement(match.start(), stmt_end, text[match.start():stmt_end])
                )
                pos = stmt_end
                continue

        pos = match.end()

    return layout


def blank_out(text: str, start: int, end: int, regions: List[ExcludedRegion]) -> str:
    """
    text[start:end]를 복사하면서 regions 영역을 공백으로 치환합니다.

    줄바꿈은 유지하므로 반환 문자열의 인덱스 i는 원본 오프셋 start + i 에 대응합니다.
    """
    chars = list(text[start:end])
    for region in regions:
        lo = max(region.start, start)
        hi = min(region.end, end)
        for i in range(lo, hi):
            if chars[i - start] != '\n':
                chars[i - start] = ' '
    return ''.join(chars)
