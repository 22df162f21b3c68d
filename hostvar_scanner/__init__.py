"""
hostvar_scanner - Embedded SQL 호스트 변수 스캐너 모듈

C/C++ 소스에서 함수 정의 경계를 찾고, 각 함수의 DECLARE SECTION에 선언된
호스트 변수와 그 사용 위치(:name 참조, 일반 코드 참조)를 추출합니다.

주요 클래스:
- FunctionScanner: 단일 패스 상태 기계 기반 함수 경계 스캐너
- HostVariableExtractor: 함수 단위 호스트 변수 추출기
- HostVariableAnnotator: 스캐너 + 추출기 조합, (범위, 설명) 목록 생성

주요 함수:
- process_directory: 디렉토리 내 모든 .sqc/.sqC/.sqx/.pc 파일 일괄 처리

Example:
    from hostvar_scanner import HostVariableAnnotator

    annotator = HostVariableAnnotator()
    results = annotator.annotate(source)
    for scope, result in results.items():
        print(scope.name, [v.name for v in result.declared])
"""

from .types import (
    Annotation,
    AnnotationKind,
    BareReference,
    BodyRange,
    ExcludedRegion,
    FunctionAnnotations,
    FunctionScope,
    HostVariable,
    SqlReference,
)
from .regions import ExclusionSet, merge_regions
from .function_scanner import (
    FunctionScanner,
    ScannerState,
    find_function_scopes,
    scan_functions,
)
from .host_vars import HostVariableExtractor, find_host_variables
from .annotator import HostVariableAnnotator, annotate, flatten_annotations
from .config import ScannerConfig, load_config
from .file_handler import process_directory, process_file

__all__ = [
    # 메인 클래스
    "FunctionScanner",
    "HostVariableExtractor",
    "HostVariableAnnotator",
    "ScannerConfig",

    # 함수
    "scan_functions",
    "find_function_scopes",
    "find_host_variables",
    "annotate",
    "flatten_annotations",
    "merge_regions",
    "load_config",
    "process_directory",
    "process_file",

    # 타입
    "ScannerState",
    "Annotation",
    "AnnotationKind",
    "BareReference",
    "BodyRange",
    "ExcludedRegion",
    "ExclusionSet",
    "FunctionAnnotations",
    "FunctionScope",
    "HostVariable",
    "SqlReference",
]
