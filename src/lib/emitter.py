"""
Module emitter

Prints an output module as JavaScript source. The printer is deterministic:
the same tree always prints to the same text.

Layout rules:
    - imports untouched by the compiler are printed as written; imports the
      compiler created or extended are re-printed from their bindings
    - statements from <script> blocks are printed as written, terminated
      with ";" when they could run into the next statement
    - arrays and objects holding only identifiers, strings and embedded
      expressions stay on one line; others get one entry per line
    - strings use double quotes with JSON escaping
"""

import json
import re
from typing import List

from ..config import appsettings, AppSettings
from ..models.program import (
    ArrayExpression,
    CallExpression,
    ExportDefaultDeclaration,
    Expression,
    FunctionDeclaration,
    Identifier,
    ImportDeclaration,
    MemberExpression,
    NewExpression,
    ObjectExpression,
    Program,
    SourceExpression,
    Statement,
    StringLiteral,
    TopLevel,
)


IDENTIFIER = re.compile(r'^[A-Za-z_$][A-Za-z0-9_$]*$')

# Declarations ending in their body; a following "(" cannot continue them
BODY_DECLARATIONS = frozenset({
    'function_declaration',
    'generator_function_declaration',
    'class_declaration',
})

EXPORTED_DECLARATION = re.compile(r'^export\s+(default\s+)?(async\s+)?(function|class)\b')


def string_quote(value: str) -> str:
    """Quote a string as a JavaScript double-quoted literal"""
    return json.dumps(value, ensure_ascii=False)


class ModuleEmitter:
    """
    Output module printer

    Attributes:
        settings: Indentation width
    """

    def __init__(self, settings: AppSettings = appsettings) -> None:
        self.settings = settings

    def module_generate(self, program: Program) -> str:
        """
        Print a whole module

        Args:
            program: Finished output module

        Returns:
            JavaScript source ending with a newline
        """
        return '\n'.join(self.topLevel_print(node) for node in program.body) + '\n'

    def topLevel_print(self, node: TopLevel) -> str:
        if isinstance(node, ImportDeclaration):
            if node.raw is not None:
                return self.statement_terminate(node.raw, 'import_statement')
            return self.import_print(node)
        if isinstance(node, Statement):
            return self.statement_terminate(node.source, node.kind)
        if isinstance(node, ExportDefaultDeclaration):
            return f"export default {self.function_print(node.declaration, 0)}"
        raise TypeError(f"Cannot print top-level node {type(node).__name__}")

    def statement_terminate(self, source: str, kind: str) -> str:
        """
        Print a statement so the next line cannot continue it

        Everything except a function or class declaration gets a ";" when
        it lacks one; a trailing "}" may close an object literal as well as
        a block.

            export const o = {a: 1}     ->  export const o = {a: 1};
            export function f() {}      ->  export function f() {}
        """
        source = source.strip()
        if source.endswith(';'):
            return source
        if source.endswith('}'):
            if kind in BODY_DECLARATIONS:
                return source
            if kind == 'export_statement' and EXPORTED_DECLARATION.match(source):
                return source
        return source + ';'

    def import_print(self, node: ImportDeclaration) -> str:
        """
        Print an import declaration from its bindings

        Example:
            import Foo, {el, bar as Baz} from "overture/dom";
        """
        source = string_quote(node.source)
        if not node.specifiers:
            return f"import {source};"

        # Default binding always leads the clause
        clause = [s.local for s in node.specifiers if s.kind == 'default']
        clause += [f"* as {s.local}" for s in node.specifiers if s.kind == 'namespace']
        named: List[str] = []
        for specifier in node.specifiers:
            if specifier.kind in ('default', 'namespace'):
                continue
            if specifier.imported is None or specifier.imported == specifier.local:
                named.append(specifier.local)
            else:
                imported = specifier.imported
                if not IDENTIFIER.match(imported):
                    imported = string_quote(imported)
                named.append(f"{imported} as {specifier.local}")
        if named:
            clause.append("{" + ", ".join(named) + "}")
        return f"import {', '.join(clause)} from {source};"

    def function_print(self, node: FunctionDeclaration, depth: int) -> str:
        inner = self.settings.indent_make(depth + 1)
        lines = [f"function {node.name}({', '.join(node.params)}) {{"]
        for statement in node.body:
            lines.append(f"{inner}return {self.expression_print(statement.argument, depth + 1)};")
        lines.append(f"{self.settings.indent_make(depth)}}}")
        return '\n'.join(lines)

    def simple_is(self, node: Expression) -> bool:
        return isinstance(node, (Identifier, StringLiteral, SourceExpression))

    def expression_print(self, node: Expression, depth: int) -> str:
        """
        Print an expression at a nesting depth

        Args:
            node: Expression node
            depth: Indentation depth of the line the expression starts on

        Returns:
            Source text; multi-line values are indented relative to depth
        """
        if isinstance(node, Identifier):
            return node.name
        if isinstance(node, StringLiteral):
            return string_quote(node.value)
        if isinstance(node, SourceExpression):
            if node.kind == 'sequence_expression':
                return f"({node.source})"
            return node.source
        if isinstance(node, MemberExpression):
            return f"{self.expression_print(node.object, depth)}.{node.property}"
        if isinstance(node, CallExpression):
            return f"{self.expression_print(node.callee, depth)}({self.arguments_print(node.arguments, depth)})"
        if isinstance(node, NewExpression):
            return f"new {self.expression_print(node.callee, depth)}({self.arguments_print(node.arguments, depth)})"
        if isinstance(node, ArrayExpression):
            items = [self.expression_print(e, depth + 1) for e in node.elements]
            return self.items_print(items, all(self.simple_is(e) for e in node.elements), depth, '[', ']')
        if isinstance(node, ObjectExpression):
            items = [
                f"{self.key_print(key)}: {self.expression_print(value, depth + 1)}"
                for key, value in node.properties
            ]
            simple = all(self.simple_is(value) for _, value in node.properties)
            return self.items_print(items, simple, depth, '{', '}')
        raise TypeError(f"Cannot print expression {type(node).__name__}")

    def arguments_print(self, arguments: List[Expression], depth: int) -> str:
        return ', '.join(self.expression_print(argument, depth) for argument in arguments)

    def items_print(self, items: List[str], simple: bool, depth: int, opening: str, closing: str) -> str:
        if not items:
            return opening + closing
        if simple:
            return opening + ', '.join(items) + closing
        inner = self.settings.indent_make(depth + 1)
        body = ',\n'.join(inner + item for item in items)
        return f"{opening}\n{body}\n{self.settings.indent_make(depth)}{closing}"

    def key_print(self, key: str) -> str:
        return key if IDENTIFIER.match(key) else string_quote(key)


def module_generate(program: Program, settings: AppSettings = appsettings) -> str:
    """Print a module with the given settings (see ModuleEmitter)"""
    return ModuleEmitter(settings).module_generate(program)
