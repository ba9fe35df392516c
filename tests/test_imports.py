"""
Import registry tests

Tests component name registration from import bindings and wiring of the
element primitive import.
"""

from overmark.config import AppSettings
from overmark.lib.emitter import module_generate
from overmark.lib.imports import ImportRegistry, elementImport_ensure, imports_merge
from overmark.lib.javascript import MODE_MODULE, ScriptParser
from overmark.models.program import ImportDeclaration, ImportSpecifier, Program, Statement


def program_make(text):
    return ScriptParser().program_parse(text, MODE_MODULE, Program())


def el_count(program):
    """Count bindings of the element primitive across all imports"""
    return sum(
        1
        for declaration in program.imports_get()
        for specifier in declaration.specifiers
        if specifier.local == "el"
    )


class TestImportRegistry:
    """Test lowercase tag name resolution"""

    def test_capitalized_names_registered(self):
        """Capitalized local bindings are registered by lowercase name"""
        registry = ImportRegistry.program_scan(
            program_make("import {DatePicker, helper} from 'overture/views';")
        )

        assert registry.get("datepicker") == "DatePicker"
        assert "datepicker" in registry
        assert registry.get("helper") is None
        assert len(registry) == 1

    def test_lookup_ignores_case(self):
        """Tags resolve whatever their case"""
        registry = ImportRegistry.program_scan(program_make("import {Foo} from './foo.js';"))

        assert registry.get("FOO") == "Foo"

    def test_default_and_aliased_bindings(self):
        """The local name is what gets registered"""
        registry = ImportRegistry.program_scan(
            program_make("import Card, {x as Panel} from './ui.js';")
        )

        assert registry.get("card") == "Card"
        assert registry.get("panel") == "Panel"
        assert len(registry) == 2

    def test_namespace_binding(self):
        """Capitalized namespace bindings are registered too"""
        registry = ImportRegistry.program_scan(program_make("import * as Views from './views.js';"))

        assert registry.get("views") == "Views"

    def test_later_import_wins(self):
        """Colliding lowercase names resolve to the last import"""
        registry = ImportRegistry.program_scan(
            program_make("import {FOO} from './a.js';\nimport {Foo} from './b.js';")
        )

        assert registry.get("foo") == "Foo"
        assert len(registry) == 1

    def test_empty_program(self):
        """No imports, no components"""
        assert len(ImportRegistry.program_scan(Program())) == 0


class TestElementImport:
    """Test that the element primitive is imported exactly once"""

    def test_prepended_when_missing(self):
        """A new import goes before all other statements"""
        program = Program(body=[Statement(source="const a = 1;", kind="lexical_declaration")])
        declaration = elementImport_ensure(program)

        assert program.body[0] is declaration
        assert declaration.source == "overture/dom"
        assert declaration.specifiers == [ImportSpecifier(kind="named", local="el", imported="el")]

    def test_existing_binding_reused(self):
        """An import that already binds el is left untouched"""
        program = program_make("import {el, View} from 'overture/dom';")
        raw = program.body[0].raw
        elementImport_ensure(program)

        assert len(program.body) == 1
        assert program.body[0].raw == raw
        assert el_count(program) == 1

    def test_added_to_existing_import(self):
        """el joins the first import from the element module"""
        program = program_make(
            "import {View} from 'overture/dom';\nimport {Text} from 'overture/dom';"
        )
        declaration = elementImport_ensure(program)

        assert declaration is program.body[0]
        assert declaration.raw is None
        assert el_count(program) == 1
        assert module_generate(program).startswith('import {View, el} from "overture/dom";\n')

    def test_later_import_with_binding(self):
        """el bound in any import from the module counts"""
        program = program_make(
            "import {View} from 'overture/dom';\nimport {el} from 'overture/dom';"
        )
        elementImport_ensure(program)

        assert el_count(program) == 1
        assert program.body[0].raw is not None

    def test_aliased_binding_not_reused(self):
        """el imported under another name does not bind el"""
        program = program_make("import {el as make} from 'overture/dom';")
        declaration = elementImport_ensure(program)

        assert declaration.named_has("el", local="el")
        assert declaration.named_has("el", local="make")

    def test_namespace_import_skipped(self):
        """Namespace imports cannot take named bindings"""
        program = program_make("import * as dom from 'overture/dom';")
        declaration = elementImport_ensure(program)

        assert program.body[0] is declaration
        assert len(program.imports_get()) == 2
        assert program.body[1].namespace_has()

    def test_custom_element_module(self):
        """The primitive's module comes from settings"""
        settings = AppSettings(element_module="my/dom", element_factory="h")
        program = Program()
        elementImport_ensure(program, settings)

        assert program.body == [
            ImportDeclaration(
                source="my/dom",
                specifiers=[ImportSpecifier(kind="named", local="h", imported="h")],
            )
        ]


class TestImportMerge:
    """Test folding of imports from one module"""

    def test_named_bindings_merged(self):
        """Two imports of one module become one statement"""
        program = program_make(
            "import {A} from './ui.js';\nconst n = 1;\nimport {B} from './ui.js';"
        )

        assert imports_merge(program) == 1
        assert module_generate(program) == 'import {A, B} from "./ui.js";\nconst n = 1;\n'

    def test_identical_import_dropped(self):
        """Repeated bindings add nothing, so the first statement prints as written"""
        program = program_make("import {A} from './ui.js';\nimport {A} from './ui.js';")

        assert imports_merge(program) == 1
        assert module_generate(program) == "import {A} from './ui.js';\n"

    def test_default_joins_named(self):
        """A later default binding is printed first"""
        program = program_make("import {A} from './ui.js';\nimport UI from './ui.js';")
        imports_merge(program)

        assert module_generate(program) == 'import UI, {A} from "./ui.js";\n'

    def test_namespace_and_named_kept_apart(self):
        """import * as ns cannot share a statement with named bindings"""
        program = program_make("import * as ui from './ui.js';\nimport {A} from './ui.js';")

        assert imports_merge(program) == 0
        assert len(program.imports_get()) == 2

    def test_other_modules_untouched(self):
        """Only imports of the same module are merged"""
        program = program_make("import {A} from './a.js';\nimport {B} from './b.js';")

        assert imports_merge(program) == 0
        assert [d.source for d in program.imports_get()] == ["./a.js", "./b.js"]
