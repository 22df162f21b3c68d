"""
Embedded SQL 호스트 변수 추출 모듈

함수 범위 하나에 대해 다음 네 단계를 수행합니다.

1. DECLARE SECTION 블록을 찾아 선언된 호스트 변수를 추출
2. EXEC SQL 구문 범위를 수집 (제외 구간 + 참조 검색 대상)
3. SQL 구문 안의 :name 참조 추출
4. 주석/리터럴/SQL 구문을 제외한 본문에서 선언된 이름의 일반 참조 추출

검증기가 아니라 최선 노력(best-effort) 주석기이므로
마커가 없거나 잘못된 입력이면 결과가 비어 있을 뿐 예외를 던지지 않습니다.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from shared_config.logger import logger
from shared_config.sql_mappings import is_declare_begin, is_declare_end
from shared_config.type_mappings import TAGGED_TYPES, TYPE_CONTINUATION_WORDS

from .code_walker import CodeLayout, SqlStatement, blank_out, walk_code
from .patterns import (
    DECLARATION_HEAD,
    DECLARATOR_PATTERN,
    IDENTIFIER,
    PRECEDING_HOST_VAR,
    SQL_TOKEN_PATTERN,
    build_word_pattern,
)
from .regions import ExclusionSet, is_whitespace
from .types import (
    BareReference,
    ExcludedRegion,
    FunctionAnnotations,
    FunctionScope,
    HostVariable,
    SqlReference,
)


@dataclass
class DeclareSection:
    """BEGIN/END DECLARE SECTION 마커 쌍"""
    begin: SqlStatement
    end: SqlStatement

    @property
    def span(self) -> ExcludedRegion:
        """BEGIN 마커 시작부터 END 마커 끝까지"""
        return ExcludedRegion(self.begin.start, self.end.end)

    @property
    def content_start(self) -> int:
        return self.begin.end

    @property
    def content_end(self) -> int:
        return self.end.start


class HostVariableExtractor:
    """
    함수 단위 호스트 변수 추출기

    Example:
        extractor = HostVariableExtractor()
        for scope in FunctionScanner().scan(source):
            result = extractor.extract(source, scope)
            for var in result.declared:
                print(var.name, var.type, var.declaration_pos)
    """

    def __init__(self, report_bare_references: bool = True):
        """
        Args:
            report_bare_references: False이면 4단계(일반 코드 참조)를 건너뜁니다.
        """
        self.report_bare_references = report_bare_references

    def extract(self, text: str, scope: FunctionScope) -> FunctionAnnotations:
        """
        함수 범위 하나에서 선언, SQL 참조, 일반 참조를 추출합니다.

        Args:
            text: 소스 전체
            scope: FunctionScanner가 만든 함수 범위

        Returns:
            FunctionAnnotations
        """
        layout = walk_code(text, scope.body.start, scope.body.end)

        # 1. DECLARE SECTION
        sections = self.find_declare_sections(layout.statements)
        declared = []
        for section in sections:
            declared.extend(self.parse_declarations(text, section, layout, scope.name))

        # 2. SQL 구문 범위 (DECLARE SECTION에 포함된 구문 제외)
        statements = self.claim_statements(layout.statements, sections)

        # 3. SQL 내부 :name 참조
        sql_references = self.find_sql_references(statements)

        # 4. 일반 코드 참조
        bare_references = []
        if self.report_bare_references and declared:
            excluded = self.build_exclusions(layout, statements, sections)
            bare_references = self.find_bare_references(
                text, scope, [v.name for v in declared], excluded
            )

        if declared or sql_references:
            logger.debug(
                f"{scope.name}: 선언 {len(declared)}개, SQL 참조 {len(sql_references)}개, "
                f"일반 참조 {len(bare_references)}개"
            )

        return FunctionAnnotations(
            declared=declared,
            sql_references=sql_references,
            bare_references=bare_references,
        )

    # ------------------------------------------------------------------
    # 1단계: DECLARE SECTION
    # ------------------------------------------------------------------

    def find_declare_sections(self, statements: List[SqlStatement]) -> List[DeclareSection]:
        """
        BEGIN/END 마커를 순서대로 짝짓습니다.

        첫 BEGIN은 그 뒤의 첫 END와 짝을 이룹니다 (중첩 미지원).
        짝이 없는 BEGIN은 섹션을 만들지 않습니다.
        """
        sections = []
        pending: Optional[SqlStatement] = None

        for statement in statements:
            if pending is None:
                if is_declare_begin(statement.text):
                    pending = statement
            elif is_declare_end(statement.text):
                sections.append(DeclareSection(begin=pending, end=statement))
                pending = None

        if pending is not None:
            logger.debug(f"짝이 없는 BEGIN DECLARE SECTION 무시 (offset={pending.start})")

        return sections

    def parse_declarations(
        self,
        text: str,
        section: DeclareSection,
        layout: CodeLayout,
        function_name: str
    ) -> List[HostVariable]:
        """
        섹션 내부의 변수 선언문에서 호스트 변수를 추출합니다.

        주석과 리터럴은 공백으로 치환한 뒤 분석하므로 오프셋은 그대로 유지됩니다.
        declaration_pos는 변수 이름의 절대 오프셋입니다.
        """
        base = section.content_start
        content = blank_out(
            text, base, section.content_end, layout.comments + layout.literals
        )

        variables = []
        for stmt_start, stmt_end in _split_statements(content):
            head = DECLARATION_HEAD.match(content, stmt_start, stmt_end)
            if not head:
                continue

            var_type = head.group(1)
            pos = _skip_type_prefix(content, head.end(), stmt_end, var_type)

            for decl_start, decl_end in _split_declarators(content, pos, stmt_end):
                match = DECLARATOR_PATTERN.match(content, decl_start, decl_end)
                if not match:
                    continue
                variables.append(HostVariable(
                    name=match.group('name'),
                    type=var_type,
                    declaration_pos=base + match.start('name'),
                    function_scope=function_name,
                ))

        return variables

    # ------------------------------------------------------------------
    # 2단계: SQL 구문 범위
    # ------------------------------------------------------------------

    @staticmethod
    def claim_statements(
        statements: List[SqlStatement],
        sections: List[DeclareSection]
    ) -> List[SqlStatement]:
        """DECLARE SECTION 범위에 포함되지 않은 SQL 구문만 반환"""
        spans = [section.span for section in sections]
        return [
            s for s in statements
            if not any(span.start <= s.start and s.end <= span.end for span in spans)
        ]

    @staticmethod
    def build_exclusions(
        layout: CodeLayout,
        statements: List[SqlStatement],
        sections: List[DeclareSection]
    ) -> ExclusionSet:
        """주석, 리터럴, SQL 구문, DECLARE SECTION 범위를 병합한 제외 집합"""
        regions = list(layout.comments)
        regions.extend(layout.literals)
        regions.extend(ExcludedRegion(s.start, s.end) for s in statements)
        regions.extend(section.span for section in sections)
        return ExclusionSet(regions)

    # ------------------------------------------------------------------
    # 3단계: SQL 내부 참조
    # ------------------------------------------------------------------

    def find_sql_references(self, statements: Iterable[SqlStatement]) -> List[SqlReference]:
        """
        SQL 구문 안의 :name 참조를 추출합니다.

        선언 여부와 상관없이 기록합니다. offset은 콜론 바로 다음 위치입니다.

        구문 안의 모든 콜론을 참조로 보지는 않습니다.
        SQL 문자열('...', "...")과 SQL 주석(--, /* */) 안의 콜론은 건너뛰므로
        WHERE s = ':x' 의 :x 는 참조가 아닙니다.
        """
        references = []
        for statement in statements:
            sql = statement.text
            for match in SQL_TOKEN_PATTERN.finditer(sql):
                if match.lastgroup != 'host_var':
                    continue
                colon = match.start()
                references.append(SqlReference(
                    offset=statement.start + match.start('name'),
                    length=len(match.group('name')),
                    name=match.group('name'),
                    is_indicator=bool(PRECEDING_HOST_VAR.search(sql, 0, colon)),
                ))
        return references

    # ------------------------------------------------------------------
    # 4단계: 일반 코드 참조
    # ------------------------------------------------------------------

    def find_bare_references(
        self,
        text: str,
        scope: FunctionScope,
        names: List[str],
        excluded: ExclusionSet
    ) -> List[BareReference]:
        """
        함수 본문에서 선언된 이름의 완전 단어 매칭을 찾습니다.

        시작 오프셋이 제외 구간 안에 있는 매칭은 버립니다.
        """
        if not names:
            return []

        pattern = build_word_pattern(names)
        references = []
        for match in pattern.finditer(text, scope.body.start, scope.body.end):
            if match.start() in excluded:
                continue
            references.append(BareReference(
                offset=match.start(),
                length=match.end() - match.start(),
                name=match.group(0),
            ))
        return references


# ============================================================================
# 선언문 분해 헬퍼
# ============================================================================

def _split_statements(content: str) -> List[Tuple[int, int]]:
    """중괄호 밖의 세미콜론 기준으로 (시작, 끝) 구간 분리 (세미콜론 제외)"""
    pieces = []
    depth = 0
    start = 0
    for i, char in enumerate(content):
        if char == '{':
            depth += 1
        elif char == '}':
            depth = max(0, depth - 1)
        elif char == ';' and depth == 0:
            pieces.append((start, i))
            start = i + 1
    return pieces


def _split_declarators(content: str, start: int, end: int) -> List[Tuple[int, int]]:
    """괄호/대괄호/중괄호 밖의 쉼표 기준으로 선언자 구간 분리"""
    pieces = []
    depth = 0
    piece_start = start
    for i in range(start, end):
        char = content[i]
        if char in '([{':
            depth += 1
        elif char in ')]}':
            depth = max(0, depth - 1)
        elif char == ',' and depth == 0:
            pieces.append((piece_start, i))
            piece_start = i + 1
    pieces.append((piece_start, end))
    return pieces


def _skip_type_prefix(content: str, pos: int, end: int, var_type: str) -> int:
    """
    선언 타입 뒤의 추가 타입 단어, struct/enum 태그와 본문을 건너뜁니다.

    예: unsigned long int x  ->  x 위치
        struct rec { int a; } r  ->  r 위치
    """
    pos = _skip_spaces(content, pos, end)

    if var_type in TAGGED_TYPES:
        match = IDENTIFIER.match(content, pos, end)
        if match:
            pos = _skip_spaces(content, match.end(), end)
        if pos < end and content[pos] == '{':
            pos = _skip_braces(content, pos, end)

    while True:
        pos = _skip_spaces(content, pos, end)
        match = IDENTIFIER.match(content, pos, end)
        if not match or match.group(0) not in TYPE_CONTINUATION_WORDS:
            return pos
        pos = match.end()


def _skip_spaces(content: str, pos: int, end: int) -> int:
    while pos < end and is_whitespace(content[pos]):
        pos += 1
    return pos


def _skip_braces(content: str, pos: int, end: int) -> int:
    depth = 0
    while pos < end:
        char = content[pos]
        if char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1
    return end


def find_host_variables(text: str, scope: FunctionScope) -> List[HostVariable]:
    """함수 범위에 선언된 호스트 변수 목록 (편의 함수)"""
    return HostVariableExtractor(report_bare_references=False).extract(text, scope).declared
