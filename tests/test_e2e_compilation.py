"""
End-to-end compilation tests

Tests the full pipeline: Markdown source -> document tree -> scripts and
components resolved -> JavaScript module text

Validates that complete documents with scripts, components and embedded
expressions compile to the expected module structure.
"""

import pytest
from pathlib import Path
import tempfile

from overmark.config import AppSettings
from overmark.lib.compiler import Compiler, markdown_compile, module_load
from overmark.lib.errors import (
    CompileError,
    ExpressionSyntaxError,
    StructuralError,
    UnsupportedNodeError,
)
from overmark.models.document import Component


class TestBasicCompilation:
    """Test plain Markdown documents"""

    def test_heading(self):
        """A heading compiles to one el() call"""
        code = markdown_compile("# Hi", AppSettings())

        assert code == (
            'import {el} from "overture/dom";\n'
            'export default function draw(ctx) {\n'
            '  return [\n'
            '    el("h1", {}, ["Hi"])\n'
            '  ];\n'
            '}\n'
        )

    def test_empty_document(self):
        """An empty document still exports draw"""
        code = markdown_compile("", AppSettings())

        assert code == (
            'import {el} from "overture/dom";\n'
            'export default function draw(ctx) {\n'
            '  return [];\n'
            '}\n'
        )

    def test_deterministic(self):
        """Compiling twice gives identical text"""
        source = "# A\n\n- one\n- two\n\n<div class=\"x\">{ctx.n}</div>\n"

        assert markdown_compile(source, AppSettings()) == markdown_compile(source, AppSettings())

    def test_html_escapes_in_text(self):
        """Markdown entities end up as plain characters"""
        code = markdown_compile("a &amp; b < c", AppSettings())

        assert 'el("p", {}, ["a & b < c"])' in code


class TestExpressions:
    """Test embedded {expression} handling"""

    def test_expression_unquoted(self):
        """<div>{1+1}</div> emits the expression itself"""
        code = markdown_compile("<div>{1+1}</div>", AppSettings())

        assert 'el("div", {}, [1+1])' in code
        assert '"1+1"' not in code

    def test_text_concatenation(self):
        """Text around an expression is joined at runtime"""
        code = markdown_compile("Hello {ctx.name}!", AppSettings())

        assert '["Hello ", ctx.name, "!"].join("")' in code

    def test_attribute_expression(self):
        """Attribute values may embed an expression"""
        code = markdown_compile('<a href="/users/{ctx.id}">profile</a>', AppSettings())

        assert 'href: ["/users/", ctx.id].join("")' in code

    def test_attribute_expression_only(self):
        """An attribute that is exactly {expr} is converted to a string"""
        code = markdown_compile('<div title="{ctx.n}"></div>', AppSettings())

        assert 'title: [ctx.n].join("")' in code

    def test_text_expression_only(self):
        """Text that is exactly {expr} keeps the value itself"""
        code = markdown_compile('<div>{ctx.items}</div>', AppSettings())

        assert 'el("div", {}, [ctx.items])' in code

    def test_class_list(self):
        """class becomes a space-joined className"""
        code = markdown_compile('<span class="a  b">x</span>', AppSettings())

        assert '{className: "a b"}' in code

    def test_unbalanced_braces_literal(self):
        """Unbalanced braces are plain text"""
        code = markdown_compile("a{b", AppSettings())

        assert 'el("p", {}, ["a{b"])' in code

    def test_malformed_expression(self):
        """Broken code in braces fails the whole document"""
        with pytest.raises(ExpressionSyntaxError):
            markdown_compile("Total: {1 +}", AppSettings())


class TestScripts:
    """Test <script> block extraction"""

    def test_statements_hoisted(self):
        """Script statements precede the draw function"""
        source = "<script>\nconst greeting = 'hi';\n</script>\n\n# {greeting}\n"
        code = markdown_compile(source, AppSettings())

        assert "const greeting = 'hi';" in code
        assert code.index("const greeting") < code.index("export default function draw")
        assert 'el("h1", {}, [greeting])' in code
        assert "<script" not in code

    def test_two_module_scripts(self):
        """Blocks keep document order and el is imported once"""
        source = (
            "<script type=\"module\">\n"
            "import {Foo} from './foo.js';\n"
            "</script>\n"
            "\n"
            "<script type=\"module\">\n"
            "import {el, Bar} from 'overture/dom';\n"
            "const x = 1;\n"
            "</script>\n"
        )
        compiler = Compiler(source, AppSettings())
        code = compiler.compile()

        assert code.index("./foo.js") < code.index("overture/dom") < code.index("const x = 1;")
        assert code.count("overture/dom") == 1
        bindings = [
            specifier.local
            for declaration in compiler.program.imports_get()
            for specifier in declaration.specifiers
        ]
        assert bindings.count("el") == 1

    def test_same_module_imported_once(self):
        """Imports of one module from two scripts share a statement"""
        source = (
            "<script type=\"module\">\n"
            "import {A} from './ui.js';\n"
            "</script>\n"
            "\n"
            "<script type=\"module\">\n"
            "import {B} from './ui.js';\n"
            "</script>\n"
        )
        compiler = Compiler(source, AppSettings())
        code = compiler.compile()

        assert code.count('"./ui.js"') + code.count("'./ui.js'") == 1
        assert 'import {A, B} from "./ui.js";' in code
        assert compiler.registry.get("a") == "A"
        assert compiler.registry.get("b") == "B"

    def test_exported_object_terminated(self):
        """A statement ending in an object literal cannot run into the next"""
        source = (
            "<script type=\"module\">\n"
            "export const o = {a: 1}\n"
            "</script>\n"
            "\n"
            "<script type=\"module\">\n"
            "(function () {})();\n"
            "</script>\n"
        )
        code = markdown_compile(source, AppSettings())

        assert "export const o = {a: 1};\n(function () {})();\n" in code

    def test_el_added_to_existing_import(self):
        """An existing import from the element module is extended"""
        source = "<script type=\"module\">\nimport {View} from 'overture/dom';\n</script>\n"
        code = markdown_compile(source, AppSettings())

        assert code.startswith('import {View, el} from "overture/dom";\n')

    def test_import_requires_module_type(self):
        """import in a plain script is a syntax error"""
        source = "<script>\nimport {Foo} from './foo.js';\n</script>\n"

        with pytest.raises(ExpressionSyntaxError):
            markdown_compile(source, AppSettings())

    def test_nested_script(self):
        """A script inside a script is rejected"""
        source = "<script type=\"module\">\n<script>const a = 1;</script>\n</script>\n"

        with pytest.raises(StructuralError):
            markdown_compile(source, AppSettings())

    def test_script_markup_in_string(self):
        """A string holding script markup is not a nested script"""
        source = "<script>\nconst s = \"<script>\";\n</script>\n"
        code = markdown_compile(source, AppSettings())

        assert 'const s = "<script>";' in code

    def test_script_below_top_level(self):
        """Scripts inside other elements are rejected"""
        source = "<div>\n<script>const a = 1;</script>\n</div>\n"

        with pytest.raises(StructuralError):
            markdown_compile(source, AppSettings())


class TestComponents:
    """Test component resolution"""

    def test_imported_component(self):
        """<foo attr="1"> with Foo imported constructs Foo"""
        source = (
            "<script type=\"module\">\n"
            "import {Foo} from './foo.js';\n"
            "</script>\n"
            "\n"
            "<foo attr=\"1\"></foo>\n"
        )
        compiler = Compiler(source, AppSettings())
        code = compiler.compile()

        assert 'new Foo({attr: "1"})' in code
        assert 'el("foo"' not in code
        assert compiler.registry.get("foo") == "Foo"
        assert isinstance(compiler.tree.children[-1].children[0], Component)

    def test_unimported_tag_stays_element(self):
        """Without an import the tag is an element"""
        code = markdown_compile("<foo attr=\"1\"></foo>", AppSettings())

        assert 'el("foo", {attr: "1"}, [])' in code
        assert "new Foo" not in code

    def test_standard_tag_not_promoted(self):
        """Importing Button does not change <button>"""
        source = (
            "<script type=\"module\">\n"
            "import {Button} from './button.js';\n"
            "</script>\n"
            "\n"
            "<button>Go</button>\n"
        )
        code = markdown_compile(source, AppSettings())

        assert 'el("button", {}, ["Go"])' in code
        assert "new Button" not in code


class TestComments:
    """Test HTML comment handling"""

    def test_comment_rejected(self):
        """Comments cannot be lowered by default"""
        with pytest.raises(UnsupportedNodeError):
            markdown_compile("<!-- draft -->\n\n# Title", AppSettings())

    def test_comment_stripped(self):
        """strip_comments drops them instead"""
        code = markdown_compile("<!-- draft -->\n\n# Title", AppSettings(strip_comments=True))

        assert "draft" not in code
        assert 'el("h1", {}, ["Title"])' in code


class TestModuleLoad:
    """Test the bundler load hook"""

    def test_non_markdown_declined(self):
        """Other file types are left to other loaders"""
        assert module_load("app.js", AppSettings()) is None
        assert module_load(Path("styles.css"), AppSettings()) is None

    def test_markdown_compiled(self):
        """Markdown files are read and compiled"""
        with tempfile.TemporaryDirectory() as tmpdir:
            page = Path(tmpdir) / "page.md"
            page.write_text("# Page\n", encoding="utf-8")

            code = module_load(page, AppSettings())

            assert code is not None
            assert 'el("h1", {}, ["Page"])' in code

    def test_errors_propagate(self):
        """Compile errors reach the caller"""
        with tempfile.TemporaryDirectory() as tmpdir:
            page = Path(tmpdir) / "broken.md"
            page.write_text("{1 +}\n", encoding="utf-8")

            with pytest.raises(CompileError):
                module_load(page, AppSettings())


class TestCompilerStats:
    """Test compilation summaries"""

    def test_stats(self):
        """Counts statements, imports and component names"""
        source = (
            "<script type=\"module\">\n"
            "import {Foo, Bar} from './ui.js';\n"
            "const n = 2;\n"
            "</script>\n"
        )
        compiler = Compiler(source, AppSettings())
        compiler.compile()

        assert compiler.stats_get() == {'statements': 4, 'imports': 2, 'components': 2}
