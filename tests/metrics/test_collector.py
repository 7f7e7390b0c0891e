"""Tests for the function collector."""

from types import SimpleNamespace

import pytest

from cogmetrics.exceptions import ParsingError
from cogmetrics.metrics.collector import ANONYMOUS, collect_functions, count_lines


class TestCountLines:
    """Line counting over newline-delimited pieces."""

    def test_empty_text_is_one_line(self):
        assert count_lines("") == (1, 0)

    def test_blank_lines_are_not_counted(self):
        assert count_lines("a\n\n  \nb") == (4, 2)

    def test_trailing_newline_adds_empty_line(self):
        assert count_lines("a\nb\n") == (3, 2)

    def test_whitespace_only(self):
        assert count_lines(" \t \n") == (2, 0)


class TestNames:
    """Name resolution priority."""

    @pytest.mark.parametrize(
        "code, expected",
        [
            ("function named() {}", "named"),
            ("const foo = () => {};", "foo"),
            ("let foo = function () {};", "foo"),
            ("const foo = function inner() {};", "inner"),
            ("const foo = (() => {});", "foo"),
            ("({ foo() {} });", "foo"),
            ("({ bar: function () {} });", "bar"),
            ("({ bar: () => {} });", "bar"),
            ("class A { run() {} }", "run"),
            ("class A { get size() { return 1; } }", "size"),
            ("function* gen() { yield 1; }", "gen"),
            ("(function () {})();", ANONYMOUS),
            ("setTimeout(() => {});", ANONYMOUS),
            ("export default function () {}", ANONYMOUS),
            ('({ "quoted": () => {} });', ANONYMOUS),
        ],
    )
    def test_resolved_name(self, analyze, code, expected):
        assert analyze(code).functions[0].name == expected

    def test_destructuring_target_is_anonymous(self, analyze):
        assert analyze("const { a } = () => {};").functions[0].name == ANONYMOUS


class TestInventory:
    """Which functions are recorded, in which order."""

    def test_preorder_includes_nested(self, analyze):
        code = """
        function outer() {
          function first() {
            const deep = () => {};
          }
          const second = function () {};
        }
        function last() {}
        """
        assert [fn.name for fn in analyze(code).functions] == [
            "outer",
            "first",
            "deep",
            "second",
            "last",
        ]

    def test_class_methods(self, analyze):
        code = """
        class Queue {
          constructor() { this.items = []; }
          push(item) { this.items.push(item); }
          static create() { return new Queue(); }
        }
        """
        assert [fn.name for fn in analyze(code).functions] == ["constructor", "push", "create"]

    def test_no_functions(self, analyze):
        metrics = analyze("const x = 1;\nconsole.log(x);\n")
        assert metrics.functions == ()
        assert metrics.function_count == 0
        assert metrics.max_complexity == 0

    def test_function_keyword_is_not_a_function(self, analyze):
        metrics = analyze("function a() {}")
        assert metrics.function_count == 1
        assert [fn.name for fn in metrics.functions] == ["a"]

    def test_declaration_and_expression(self, analyze):
        code = "function a() {}\nconst b = function () {};\nfunction* gen() { yield 1; }"
        assert [fn.name for fn in analyze(code).functions] == ["a", "b", "gen"]


class TestLinesAndPositions:
    """File line counts, function NLOC and positions."""

    def test_file_line_counts(self, analyze):
        metrics = analyze("function a() {\n\n  return 1;\n}\n")
        assert metrics.total_lines == 5
        assert metrics.non_blank_lines == 3

    def test_function_nloc_skips_blank_lines(self, analyze):
        code = "// header\nfunction a() {\n\n  const x = 1;\n\n  return x;\n}\n"
        fn = analyze(code).functions[0]
        assert fn.nloc == 4
        assert (fn.start_line, fn.end_line) == (2, 7)

    def test_nloc_of_one_line_arrow(self, analyze):
        fn = analyze("const f = (x) => x * 2;").functions[0]
        assert fn.nloc == 1
        assert (fn.start_line, fn.end_line) == (1, 1)

    def test_multibyte_source(self, analyze):
        """Byte offsets and text slices stay aligned with non-ASCII text."""
        code = 'const s = "héllo wörld";\nfunction greet() {\n  return "ßüñ";\n}\n'
        fn = analyze(code).functions[0]
        assert fn.name == "greet"
        assert fn.nloc == 3


class TestMalformedTree:
    """Trees that cannot be walked surface as ParsingError."""

    def test_broken_tree_raises(self):
        tree = SimpleNamespace(root_node=None)
        with pytest.raises(ParsingError):
            collect_functions(tree, "function f() {}", "broken.js")
