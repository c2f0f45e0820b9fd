"""Tests for render helpers and TypeScript formatter"""

from slice2ts.generators.render import format_typescript, render, render_blocks, render_value


class TestRender:
    """Test suite for render helpers"""

    def test_render_skips_empty_parts(self):
        """Test empty and None parts are dropped"""
        assert render("a", "", None, "b") == "a\nb"

    def test_render_single_line_list(self):
        """Test single-line list elements are joined by newlines"""
        assert render_value(["a;", "b;"]) == "a;\nb;"

    def test_render_multiline_list(self):
        """Test multiline list elements are separated by blank lines"""
        assert render_value(["a {\n}", "b;"]) == "a {\n}\n\nb;"

    def test_render_blocks(self):
        """Test blocks are separated by blank lines"""
        assert render_blocks("a", "", ["b"]) == "a\n\nb"


class TestFormatTypescript:
    """Test suite for format_typescript"""

    def test_indents_by_brace_depth(self):
        """Test nested blocks are indented by two spaces"""
        text = 'namespace Foo {\nclass A {\nx: number;\n}\n}'
        assert format_typescript(text) == (
            'namespace Foo {\n'
            '  class A {\n'
            '    x: number;\n'
            '  }\n'
            '}\n'
        )

    def test_doc_comment_braces_not_counted(self):
        """Test braces inside doc comments do not change indentation"""
        text = 'namespace Foo {\n/**\n * Uses { braces\n */\nconst x: number;\n}'
        assert format_typescript(text) == (
            'namespace Foo {\n'
            '  /**\n'
            '   * Uses { braces\n'
            '   */\n'
            '  const x: number;\n'
            '}\n'
        )

    def test_collapses_blank_lines(self):
        """Test runs of blank lines collapse and edge blank lines drop"""
        text = 'a {\n\n\nb;\n\n\n\nc;\n\n}\n\n\n'
        assert format_typescript(text) == 'a {\n  b;\n\n  c;\n}\n'

    def test_single_line_block(self):
        """Test a block opened and closed on one line keeps depth"""
        assert format_typescript('export namespace Foo {}\nx;') == 'export namespace Foo {}\nx;\n'
