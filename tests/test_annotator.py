"""
HostVariableAnnotator 테스트

스캐너와 추출기 조합, (범위, 설명) 목록 변환을 테스트합니다.
"""

import os
import sys

import pytest

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hostvar_scanner import (
    AnnotationKind,
    HostVariableAnnotator,
    ScannerConfig,
    annotate,
)


SAMPLE_PATH = os.path.join(os.path.dirname(__file__), "samples", "sample.sqc")


@pytest.fixture
def sample_source():
    with open(SAMPLE_PATH, "r", encoding="utf-8") as f:
        return f.read()


class TestAnnotate:
    """함수별 분석 결과 테스트"""

    def test_all_functions_in_order(self, sample_source):
        results = annotate(sample_source)
        assert [scope.name for scope in results] == ["test", "main", "select_by_id"]

    def test_function_without_sql(self, sample_source):
        results = annotate(sample_source)
        test_result = next(r for s, r in results.items() if s.name == "test")
        assert test_result.is_empty

    def test_skip_functions(self, sample_source):
        config = ScannerConfig(SKIP_FUNCTIONS=("main",))
        results = HostVariableAnnotator(config).annotate(sample_source)

        assert [scope.name for scope in results] == ["test", "select_by_id"]

    def test_bare_references_disabled(self, sample_source):
        config = ScannerConfig(REPORT_BARE_REFERENCES=False)
        results = HostVariableAnnotator(config).annotate(sample_source)

        assert all(r.bare_references == [] for r in results.values())
        assert sum(len(r.declared) for r in results.values()) == 6

    def test_no_functions(self):
        assert annotate("int x;\n#define Y 1\n") == {}


class TestFlatten:
    """Annotation 목록 변환 테스트"""

    def setup_method(self):
        self.annotator = HostVariableAnnotator()

    def test_sorted_by_start(self, sample_source):
        annotations = self.annotator.annotate_flat(sample_source)
        starts = [a.start for a in annotations]

        assert starts == sorted(starts)
        # 선언 6 + SQL 참조 4 + 일반 참조 3
        assert len(annotations) == 13

    def test_declaration_label(self, sample_source):
        annotations = self.annotator.annotate_flat(sample_source)
        first = annotations[0]

        assert first.kind == AnnotationKind.DECLARATION
        assert first.function == "main"
        assert first.label == "호스트 변수 선언: id (int) - main"
        assert sample_source[first.start:first.end] == "id"

    def test_sql_reference_labels(self, sample_source):
        annotations = self.annotator.annotate_flat(sample_source)
        labels = [
            a.label for a in annotations
            if a.kind == AnnotationKind.SQL_REFERENCE and a.function == "select_by_id"
        ]

        # id는 select_by_id에 선언되지 않았으므로 타입이 붙지 않음
        assert labels == ["SQL 호스트 변수: name (char)", "SQL 호스트 변수: id"]

    def test_bare_reference_label(self, sample_source):
        annotations = self.annotator.annotate_flat(sample_source)
        bare = [a for a in annotations if a.kind == AnnotationKind.BARE_REFERENCE]

        assert len(bare) == 3
        assert all(a.label == "호스트 변수 참조: name (char)" for a in bare)
        assert all(sample_source[a.start:a.end] == "name" for a in bare)

    def test_indicator_label(self):
        text = (
            "void f(void) {\n"
            "    EXEC SQL BEGIN DECLARE SECTION;\n"
            "    int val;\n"
            "    short val_ind;\n"
            "    EXEC SQL END DECLARE SECTION;\n"
            "    EXEC SQL SELECT a INTO :val:val_ind FROM t;\n"
            "}\n"
        )
        annotations = self.annotator.annotate_flat(text)
        sql = [a for a in annotations if a.kind == AnnotationKind.SQL_REFERENCE]

        assert [a.label for a in sql] == [
            "SQL 호스트 변수: val (int)",
            "SQL 인디케이터 변수: val_ind (short)",
        ]

    def test_to_dict(self, sample_source):
        item = self.annotator.annotate_flat(sample_source)[0].to_dict()

        assert item["kind"] == "declaration"
        assert item["name"] == "id"
        assert item["end"] - item["start"] == 2
