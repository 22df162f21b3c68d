"""
호스트 변수 스캐너에서 사용하는 타입 정의 모듈

FunctionScope, HostVariable, SqlReference 등의 데이터 클래스를 정의합니다.
모든 오프셋은 원본 텍스트(str)의 0-based 인덱스입니다.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class BodyRange:
    """함수 본문 범위 (중괄호 안쪽)

    Attributes:
        start: 여는 중괄호 바로 다음 오프셋
        end: 닫는 중괄호 오프셋
    """
    start: int
    end: int


@dataclass(frozen=True)
class FunctionScope:
    """함수 정의 하나의 범위

    Attributes:
        name: 함수 이름
        start: 선언 시작 오프셋 (반환 타입 첫 토큰, 포함)
        end: 닫는 중괄호 다음 오프셋 (미포함)
        body: 본문 범위
    """
    name: str
    start: int
    end: int
    body: BodyRange

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict:
        """딕셔너리로 변환 (JSON 저장용)"""
        return {
            "name": self.name,
            "start": self.start,
            "end": self.end,
            "length": self.length,
            "body_start": self.body.start,
            "body_end": self.body.end,
        }


@dataclass
class HostVariable:
    """DECLARE SECTION에 선언된 호스트 변수"""
    name: str
    type: str                 # int, char, struct ...
    declaration_pos: int      # 변수 이름의 절대 오프셋
    function_scope: str       # 소유 함수 이름

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type,
            "declaration_pos": self.declaration_pos,
            "function": self.function_scope,
        }


@dataclass
class SqlReference:
    """EXEC SQL 구문 안의 :name 참조

    offset은 콜론 바로 다음 위치입니다.
    """
    offset: int
    length: int
    name: str
    is_indicator: bool = False   # :var:ind 의 ind

    @property
    def end(self) -> int:
        return self.offset + self.length

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "offset": self.offset,
            "length": self.length,
            "is_indicator": self.is_indicator,
        }


@dataclass
class BareReference:
    """일반 C 코드에서의 호스트 변수 참조"""
    offset: int
    length: int
    name: str

    @property
    def end(self) -> int:
        return self.offset + self.length

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "offset": self.offset,
            "length": self.length,
        }


@dataclass(frozen=True)
class ExcludedRegion:
    """일반 코드로 취급하지 않을 반열린 구간 [start, end)"""
    start: int
    end: int

    def contains(self, offset: int) -> bool:
        return self.start <= offset < self.end


@dataclass
class FunctionAnnotations:
    """함수 하나에 대한 추출 결과"""
    declared: List[HostVariable] = field(default_factory=list)
    sql_references: List[SqlReference] = field(default_factory=list)
    bare_references: List[BareReference] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.declared or self.sql_references or self.bare_references)


class AnnotationKind(Enum):
    """주석(데코레이션) 종류"""
    DECLARATION = "declaration"
    SQL_REFERENCE = "sql_reference"
    BARE_REFERENCE = "bare_reference"


@dataclass
class Annotation:
    """표시 계층에 넘기는 (범위, 설명) 쌍"""
    start: int
    end: int
    kind: AnnotationKind
    name: str
    function: str
    label: str

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "kind": self.kind.value,
            "name": self.name,
            "function": self.function,
            "label": self.label,
        }
