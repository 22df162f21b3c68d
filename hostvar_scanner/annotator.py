"""
호스트 변수 주석기 모듈

FunctionScanner가 만든 함수 범위마다 HostVariableExtractor를 실행하고,
결과를 표시 계층이 소비할 (범위, 설명) 목록으로 변환합니다.
"""
from typing import Dict, List, Optional

from shared_config.logger import logger

from .config import ScannerConfig
from .function_scanner import FunctionScanner
from .host_vars import HostVariableExtractor
from .types import (
    Annotation,
    AnnotationKind,
    FunctionAnnotations,
    FunctionScope,
)


class HostVariableAnnotator:
    """
    스캐너와 추출기를 조합하는 생산자/소비자 파이프라인

    함수 범위 사이에 공유 상태가 없으므로 각 범위를 독립적으로 처리합니다.

    Example:
        annotator = HostVariableAnnotator()
        results = annotator.annotate(source)
        for annotation in annotator.flatten(results):
            print(annotation.start, annotation.end, annotation.label)
    """

    def __init__(self, config: Optional[ScannerConfig] = None):
        self.config = config or ScannerConfig()
        self.scanner = FunctionScanner()
        self.extractor = HostVariableExtractor(
            report_bare_references=self.config.REPORT_BARE_REFERENCES
        )

    def annotate(self, text: str) -> Dict[FunctionScope, FunctionAnnotations]:
        """
        텍스트의 모든 함수에 대해 호스트 변수 분석을 수행합니다.

        Returns:
            함수 범위 -> 추출 결과 (함수 시작 순서 유지)
        """
        results = {}
        for scope in self.scanner.scan(text):
            if scope.name in self.config.SKIP_FUNCTIONS:
                logger.debug(f"건너뛸 함수: {scope.name}")
                continue
            results[scope] = self.extractor.extract(text, scope)
        return results

    def flatten(self, results: Dict[FunctionScope, FunctionAnnotations]) -> List[Annotation]:
        """분석 결과를 시작 오프셋 순서의 Annotation 목록으로 변환"""
        return flatten_annotations(results)

    def annotate_flat(self, text: str) -> List[Annotation]:
        return self.flatten(self.annotate(text))


def flatten_annotations(results: Dict[FunctionScope, FunctionAnnotations]) -> List[Annotation]:
    """
    함수별 추출 결과를 (범위, 설명) 목록으로 펼칩니다.

    SQL/일반 참조가 선언된 이름이면 설명에 선언 타입을 붙입니다.
    """
    annotations = []

    for scope, result in results.items():
        declared_types = {}
        for var in result.declared:
            declared_types.setdefault(var.name, var.type)
            annotations.append(Annotation(
                start=var.declaration_pos,
                end=var.declaration_pos + len(var.name),
                kind=AnnotationKind.DECLARATION,
                name=var.name,
                function=scope.name,
                label=f"호스트 변수 선언: {var.name} ({var.type}) - {scope.name}",
            ))

        for ref in result.sql_references:
            prefix = "SQL 인디케이터 변수" if ref.is_indicator else "SQL 호스트 변수"
            annotations.append(Annotation(
                start=ref.offset,
                end=ref.end,
                kind=AnnotationKind.SQL_REFERENCE,
                name=ref.name,
                function=scope.name,
                label=_with_type(f"{prefix}: {ref.name}", declared_types.get(ref.name)),
            ))

        for ref in result.bare_references:
            annotations.append(Annotation(
                start=ref.offset,
                end=ref.end,
                kind=AnnotationKind.BARE_REFERENCE,
                name=ref.name,
                function=scope.name,
                label=_with_type(f"호스트 변수 참조: {ref.name}", declared_types.get(ref.name)),
            ))

    annotations.sort(key=lambda a: (a.start, a.end))
    return annotations


def _with_type(label: str, var_type: Optional[str]) -> str:
    if var_type:
        return f"{label} ({var_type})"
    return label


def annotate(text: str, config: Optional[ScannerConfig] = None) -> Dict[FunctionScope, FunctionAnnotations]:
    """HostVariableAnnotator(config).annotate(text) 편의 함수"""
    return HostVariableAnnotator(config).annotate(text)
