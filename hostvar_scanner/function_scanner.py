"""
C/C++ 함수 경계를 찾는 단일 패스 스캐너 모듈입니다.

정규식 대신 명시적인 상태 레지스터와 중괄호/괄호 깊이 카운터로
소스 텍스트를 한 번만 훑으며 함수 정의 범위(FunctionScope)를 생성합니다.
문자열, 문자 리터럴, 주석, 전처리기 지시문 안의 중괄호는 구조에 영향을 주지 않습니다.

잘못된 입력(닫히지 않은 주석, 짝이 맞지 않는 중괄호 등)에서도 예외를 던지지 않고
그 지점 이후의 함수를 덜 찾는 것으로 끝납니다.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Iterator, List, Optional

from shared_config.logger import logger
from shared_config.type_mappings import (
    POINTER_MARKER,
    can_name_function,
    is_type_keyword,
    is_type_like,
)

from .regions import (
    HORIZONTAL_WHITESPACE,
    is_digit,
    is_ident_char,
    is_ident_start,
    is_whitespace,
)
from .types import BodyRange, FunctionScope


class ScannerState(Enum):
    """스캐너 상태"""
    DEFAULT = auto()
    IN_LINE_COMMENT = auto()
    IN_BLOCK_COMMENT = auto()
    IN_STRING = auto()
    IN_CHAR = auto()
    IN_PREPROCESSOR = auto()
    IN_CANDIDATE_DECLARATION = auto()


# 일반 코드로 해석되는 상태
CODE_STATES = (ScannerState.DEFAULT, ScannerState.IN_CANDIDATE_DECLARATION)


@dataclass
class _ScanState:
    """스캔 한 번 동안의 레지스터 (호출 간 공유하지 않음)"""
    pos: int = 0
    state: ScannerState = ScannerState.DEFAULT
    resume_state: ScannerState = ScannerState.DEFAULT
    brace_depth: int = 0
    paren_depth: int = 0

    # 룩백 버퍼
    last_identifier: str = ""
    last_identifier_adjacent: bool = False   # 직전 유의미 토큰이 식별자인지
    last_type_like: Optional[str] = None
    declaration_start: Optional[int] = None

    # 후보 함수
    candidate_name: str = ""
    candidate_start: int = -1
    in_function: bool = False
    body_start: int = -1

    def enter(self, state: ScannerState) -> None:
        """주석/리터럴/전처리기 상태로 진입 (복귀할 코드 상태 기억)"""
        self.resume_state = self.state
        self.state = state

    def leave(self) -> None:
        self.state = self.resume_state

    def clear_candidate(self) -> None:
        self.candidate_name = ""
        self.candidate_start = -1
        if self.state == ScannerState.IN_CANDIDATE_DECLARATION:
            self.state = ScannerState.DEFAULT

    def clear_declaration(self) -> None:
        self.last_type_like = None
        self.declaration_start = None
        self.last_identifier_adjacent = False


class FunctionScanner:
    """
    함수 경계 스캐너

    scan()은 호출마다 새 레지스터로 시작하는 제너레이터이므로
    같은 텍스트에 대해 다시 호출하면 같은 순서의 결과를 재현합니다.

    Example:
        scanner = FunctionScanner()
        for scope in scanner.scan(source):
            print(scope.name, scope.start, scope.end)
    """

    def scan(self, text: str) -> Iterator[FunctionScope]:
        """
        텍스트에서 함수 정의를 시작 오프셋 순서대로 하나씩 생성합니다.

        Args:
            text: C/C++ (Embedded SQL 포함) 소스 전체

        Yields:
            FunctionScope
        """
        st = _ScanState()
        length = len(text)

        while st.pos < length:
            ch = text[st.pos]

            if st.state in CODE_STATES:
                scope = self._step_code(text, st, ch)
                if scope is not None:
                    yield scope

            elif st.state == ScannerState.IN_LINE_COMMENT:
                if ch == '\n':
                    st.leave()
                st.pos += 1

            elif st.state == ScannerState.IN_BLOCK_COMMENT:
                if ch == '*' and text.startswith('/', st.pos + 1):
                    st.leave()
                    st.pos += 2
                else:
                    st.pos += 1

            elif st.state in (ScannerState.IN_STRING, ScannerState.IN_CHAR):
                quote = '"' if st.state == ScannerState.IN_STRING else "'"
                if ch == '\\':
                    # 이스케이프 문자는 다음 글자와 한 쌍으로 소비
                    st.pos += 2
                elif ch == quote:
                    st.leave()
                    st.pos += 1
                else:
                    st.pos += 1

            elif st.state == ScannerState.IN_PREPROCESSOR:
                if ch == '\n' and not self._continues_line(text, st.pos):
                    st.leave()
                st.pos += 1

        if st.in_function:
            logger.debug(f"닫히지 않은 함수 본문 무시: {st.candidate_name}")

    def find_all(self, text: str) -> List[FunctionScope]:
        """모든 함수 범위를 리스트로 반환"""
        return list(self.scan(text))

    # ------------------------------------------------------------------
    # 코드 상태 처리
    # ------------------------------------------------------------------

    def _step_code(self, text: str, st: _ScanState, ch: str) -> Optional[FunctionScope]:
        nxt = text[st.pos + 1] if st.pos + 1 < len(text) else ''

        if ch == '/' and nxt == '/':
            st.enter(ScannerState.IN_LINE_COMMENT)
            st.pos += 2
        elif ch == '/' and nxt == '*':
            st.enter(ScannerState.IN_BLOCK_COMMENT)
            st.pos += 2
        elif ch == '"':
            st.enter(ScannerState.IN_STRING)
            st.last_identifier_adjacent = False
            st.pos += 1
        elif ch == "'":
            st.enter(ScannerState.IN_CHAR)
            st.last_identifier_adjacent = False
            st.pos += 1
        elif ch == '#' and self._at_line_start(text, st.pos):
            st.enter(ScannerState.IN_PREPROCESSOR)
            st.pos += 1
        elif ch == '{':
            self._open_brace(st)
            st.pos += 1
        elif ch == '}':
            scope = self._close_brace(st)
            st.pos += 1
            return scope
        elif ch == '(':
            self._open_paren(st)
            st.pos += 1
        elif ch == ')':
            self._close_paren(text, st)
            st.pos += 1
        elif is_ident_start(ch):
            self._read_identifier(text, st)
        elif is_digit(ch):
            # 숫자 리터럴 (0x1F, 10UL 등)은 식별자가 아님
            while st.pos < len(text) and is_ident_char(text[st.pos]):
                st.pos += 1
            st.last_identifier_adjacent = False
        elif ch == '*':
            st.last_type_like = POINTER_MARKER
            st.last_identifier_adjacent = False
            self._mark_declaration_start(st, st.pos)
            st.pos += 1
        elif ch == ';':
            if not st.in_function:
                if st.candidate_name:
                    logger.debug(f"함수 선언(프로토타입) 후보 폐기: {st.candidate_name}")
                st.clear_candidate()
            st.clear_declaration()
            st.pos += 1
        elif is_whitespace(ch):
            st.pos += 1
        else:
            st.last_identifier_adjacent = False
            st.pos += 1
        return None

    def _open_brace(self, st: _ScanState) -> None:
        st.brace_depth += 1
        if (not st.in_function and st.paren_depth == 0
                and st.candidate_name and st.candidate_start >= 0):
            st.in_function = True
            st.body_start = st.pos + 1
            st.state = ScannerState.DEFAULT
        st.clear_declaration()

    def _close_brace(self, st: _ScanState) -> Optional[FunctionScope]:
        if st.brace_depth > 0:
            st.brace_depth -= 1
        st.clear_declaration()

        if not (st.in_function and st.brace_depth == 0):
            return None

        scope = FunctionScope(
            name=st.candidate_name,
            start=st.candidate_start,
            end=st.pos + 1,
            body=BodyRange(start=st.body_start, end=st.pos),
        )
        logger.debug(f"함수 발견: {scope.name} [{scope.start}, {scope.end})")

        st.in_function = False
        st.body_start = -1
        st.clear_candidate()
        return scope

    def _open_paren(self, st: _ScanState) -> None:
        at_top_level = (
            st.paren_depth == 0
            and st.brace_depth == 0
            and not st.in_function
            and st.state == ScannerState.DEFAULT
        )
        st.paren_depth += 1

        if (at_top_level
                and st.last_identifier_adjacent
                and can_name_function(st.last_identifier)
                and is_type_like(st.last_type_like)):
            st.candidate_name = st.last_identifier
            st.candidate_start = (
                st.declaration_start if st.declaration_start is not None else st.pos
            )
            st.state = ScannerState.IN_CANDIDATE_DECLARATION
        st.last_identifier_adjacent = False

    def _close_paren(self, text: str, st: _ScanState) -> None:
        if st.paren_depth > 0:
            st.paren_depth -= 1
        st.last_identifier_adjacent = False

        if st.paren_depth != 0:
            return

        if st.state != ScannerState.IN_CANDIDATE_DECLARATION:
            # 최상위의 후보 아닌 괄호 (세미콜론 없는 매크로 호출 등) 뒤에서 선언을 다시 시작
            if not st.in_function and st.brace_depth == 0:
                st.clear_declaration()
            return

        look = self._skip_trivia(text, st.pos + 1)
        if look >= len(text) or text[look] != '{':
            logger.debug(f"함수 정의가 아닌 후보 폐기: {st.candidate_name}")
            st.clear_candidate()
            st.clear_declaration()

    def _read_identifier(self, text: str, st: _ScanState) -> None:
        start = st.pos
        while st.pos < len(text) and is_ident_char(text[st.pos]):
            st.pos += 1
        token = text[start:st.pos]

        if is_type_keyword(token):
            st.last_type_like = token
        st.last_identifier = token
        st.last_identifier_adjacent = True
        self._mark_declaration_start(st, start)

    @staticmethod
    def _mark_declaration_start(st: _ScanState, offset: int) -> None:
        if st.declaration_start is None and st.brace_depth == 0 and st.paren_depth == 0:
            st.declaration_start = offset

    @staticmethod
    def _skip_trivia(text: str, pos: int) -> int:
        """공백과 주석을 건너뛴 다음 위치"""
        length = len(text)
        while pos < length:
            if is_whitespace(text[pos]):
                pos += 1
            elif text.startswith('//', pos):
                end = text.find('\n', pos)
                pos = length if end == -1 else end + 1
            elif text.startswith('/*', pos):
                end = text.find('*/', pos + 2)
                pos = length if end == -1 else end + 2
            else:
                break
        return pos

    @staticmethod
    def _at_line_start(text: str, pos: int) -> bool:
        """pos 앞에 같은 줄의 공백만 있는지 확인"""
        i = pos - 1
        while i >= 0 and text[i] in HORIZONTAL_WHITESPACE:
            i -= 1
        return i < 0 or text[i] == '\n'

    @staticmethod
    def _continues_line(text: str, newline_pos: int) -> bool:
        """줄의 마지막 공백 아닌 문자가 역슬래시(줄 연속)인지 확인"""
        i = newline_pos - 1
        while i >= 0 and text[i] in HORIZONTAL_WHITESPACE:
            i -= 1
        return i >= 0 and text[i] == '\\'


def scan_functions(text: str) -> Iterator[FunctionScope]:
    """FunctionScanner().scan(text) 편의 함수"""
    return FunctionScanner().scan(text)


def find_function_scopes(text: str) -> List[FunctionScope]:
    """텍스트의 모든 함수 범위를 리스트로 반환"""
    return FunctionScanner().find_all(text)
