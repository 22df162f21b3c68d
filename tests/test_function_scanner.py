"""
FunctionScanner 테스트
"""
import os
import sys

import pytest

# 상위 디렉토리를 path에 추가
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from hostvar_scanner import FunctionScanner, find_function_scopes, scan_functions


SAMPLE_PATH = os.path.join(os.path.dirname(__file__), "samples", "sample.sqc")


@pytest.fixture
def sample_source():
    with open(SAMPLE_PATH, "r", encoding="utf-8") as f:
        return f.read()


class TestDefinitions:
    """함수 정의 인식 테스트"""

    def setup_method(self):
        self.scanner = FunctionScanner()

    def test_simple_definition(self):
        text = "int foo(int x) { return x; }"
        scopes = self.scanner.find_all(text)

        assert len(scopes) == 1
        scope = scopes[0]
        assert scope.name == "foo"
        assert scope.start == 0
        assert scope.end == len(text)
        assert scope.length == len(text)
        assert scope.body.start == text.index("{") + 1
        assert scope.body.end == text.rindex("}")

    def test_prototype_is_not_definition(self):
        assert self.scanner.find_all("int foo(int x);") == []

    def test_prototype_then_definition(self):
        text = "int foo(int x);\n\nint foo(int x) {\n    return x;\n}\n"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["foo"]
        assert scopes[0].start == text.index("int foo(int x) {")

    def test_bare_call_without_type_keyword(self):
        assert self.scanner.find_all("foo(x);") == []
        assert self.scanner.find_all("foo(x) { return; }") == []

    def test_pointer_return_type(self):
        text = "char *get_name(void) {\n    return 0;\n}\n"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["get_name"]
        assert scopes[0].start == 0

    def test_storage_class_and_struct_return(self):
        text = (
            "static int helper(void) { return 1; }\n"
            "struct point make_point(int x) { struct point p; p.x = x; return p; }\n"
        )
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["helper", "make_point"]
        assert scopes[1].start == text.index("struct point make_point")

    def test_declaration_start_skips_leading_comment(self):
        text = "/* helper */\nstatic int helper(void) {}\n"
        scope = self.scanner.find_all(text)[0]

        assert scope.start == text.index("static")

    def test_declaration_start_skips_macro_invocation(self):
        """세미콜론 없는 최상위 매크로 호출은 다음 함수 범위에 포함되지 않음"""
        text = "REGISTER_HANDLER(f)\nint f(void) { return 0; }\n"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["f"]
        assert scopes[0].start == text.index("int f")

    def test_typed_macro_invocation_before_definition(self):
        text = "int x = INIT(1)\nstatic void g(void) {}\n"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["g"]
        assert scopes[0].start == text.index("static")

    def test_initializer_call_is_not_candidate(self):
        text = "int x = compute(1);\nint main() { return x; }\n"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["main"]
        assert scopes[0].start == text.index("int main")

    def test_control_statements_do_not_split_body(self):
        text = (
            "int main() {\n"
            "    if (x) { y(); }\n"
            "    while (1) { break; }\n"
            "    return 0;\n"
            "}\n"
        )
        scopes = self.scanner.find_all(text)

        assert len(scopes) == 1
        assert scopes[0].end == text.rindex("}") + 1

    def test_comment_between_signature_and_body(self):
        text = "int f(void) /* entry */ {\n}\n"
        assert [s.name for s in self.scanner.find_all(text)] == ["f"]

    def test_nested_parameter_parentheses(self):
        text = "void run(int (*cb)(int), int n) { cb(n); }"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["run"]


class TestLexicalIsolation:
    """리터럴/주석/전처리기 안의 중괄호 테스트"""

    def setup_method(self):
        self.scanner = FunctionScanner()

    def test_braces_in_literals_and_comments(self):
        text = (
            "int f(void) {\n"
            "    char c = '{';\n"
            "    const char *s = \"}}\";\n"
            "    /* { */\n"
            "    // }\n"
            "    return 0;\n"
            "}\n"
            "int g(void) { return 1; }\n"
        )
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["f", "g"]
        assert scopes[0].end == text.index("}\nint g") + 1

    def test_escaped_quote_does_not_close_literal(self):
        text = "int f(void) { const char *s = \"a\\\"}\"; char q = '\\''; return 0; }"
        scopes = self.scanner.find_all(text)

        assert len(scopes) == 1
        assert scopes[0].end == len(text)

    def test_preprocessor_brace(self):
        text = "#define OPEN {\nint main(void) { return 0; }\n"
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["main"]

    def test_preprocessor_line_continuation(self):
        text = (
            "#define BLOCK(x) \\\n"
            "    { x; }\n"
            "int g() { }\n"
        )
        scopes = self.scanner.find_all(text)

        assert [s.name for s in scopes] == ["g"]
        assert scopes[0].start == text.index("int g")

    def test_indented_directive(self):
        text = "int f(void) {\n  #ifdef DEBUG\n  {\n  #endif\n  return 0;\n}\n"
        # 들여쓴 #ifdef/#endif 는 무시되고 단독 { 때문에 본문이 닫히지 않음
        scopes = self.scanner.find_all(text)
        assert scopes == []

    def test_hash_inside_line_is_not_directive(self):
        text = "int f(void) { int a = 1 # 2; return a; }"
        assert [s.name for s in self.scanner.find_all(text)] == ["f"]


class TestMalformedInput:
    """잘못된 입력 처리 테스트 (예외 없이 결과 감소)"""

    @pytest.mark.parametrize("text", [
        "",
        "   \n\t  ",
        "int f() { /* never closed",
        "int f() { \"never closed",
        "int f() { char c = '",
        "#define X \\",
        "int f(",
        "int f() {{{{{{",
        "}}}}",
        "int f() { \\",
    ])
    def test_no_exception(self, text):
        assert find_function_scopes(text) == []

    def test_stray_closing_brace_at_top_level(self):
        text = "}\nint f() { }\n"
        assert [s.name for s in find_function_scopes(text)] == ["f"]

    def test_deep_nesting(self):
        body = "{" * 500 + "}" * 500
        text = f"int deep(void) {body}"
        scopes = find_function_scopes(text)

        assert len(scopes) == 1
        assert scopes[0].end == len(text)


class TestSequenceProperties:
    """결과 순서와 불변식 테스트"""

    def test_sample_functions(self, sample_source):
        scopes = find_function_scopes(sample_source)

        assert [s.name for s in scopes] == ["test", "main", "select_by_id"]
        assert scopes[0].start == sample_source.index("int \ntest(")
        assert scopes[1].start == sample_source.index("int main()")
        assert scopes[2].start == sample_source.index("void select_by_id")

    def test_invariants(self, sample_source):
        scopes = find_function_scopes(sample_source)

        for scope in scopes:
            assert 0 <= scope.start < scope.body.start <= scope.body.end < scope.end
            assert scope.end <= len(sample_source)
            assert sample_source[scope.body.start - 1] == "{"
            assert sample_source[scope.end - 1] == "}"

        for prev, cur in zip(scopes, scopes[1:]):
            assert prev.end <= cur.start

    def test_idempotent(self, sample_source):
        scanner = FunctionScanner()
        assert list(scanner.scan(sample_source)) == list(scanner.scan(sample_source))

    def test_lazy_generator(self, sample_source):
        first = next(iter(scan_functions(sample_source)))
        assert first.name == "test"

    def test_scopes_are_hashable(self, sample_source):
        scopes = find_function_scopes(sample_source)
        assert len({scope: True for scope in scopes}) == 3
