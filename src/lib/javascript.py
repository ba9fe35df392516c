"""
Embedded JavaScript parser

Validates the code found in <script> blocks and {...} expressions with the
tree-sitter JavaScript grammar and converts it into output-module nodes.
Code is never re-printed from the syntax tree: statements and expressions
keep their original text, and only import declarations are decomposed into
structured bindings.

Two program modes are supported:

    script - plain statements; top-level import/export is a syntax error
    module - ES module statements, including import declarations

Any syntax error (an ERROR or MISSING node anywhere in the tree) is fatal
and raised as ExpressionSyntaxError.
"""

from typing import List, Optional, Pattern, Tuple

import tree_sitter_javascript
from tree_sitter import Language, Node as SyntaxNode, Parser

from ..models.program import (
    ImportDeclaration,
    ImportSpecifier,
    Program,
    SourceExpression,
    Statement,
)
from .errors import ExpressionSyntaxError
from .log import LOG


JAVASCRIPT = Language(tree_sitter_javascript.language())

MODE_SCRIPT = 'script'
MODE_MODULE = 'module'

# Top-level nodes with no output counterpart
SKIPPED_NODES = frozenset({'comment', 'hash_bang_line'})

# Nodes whose text is data, not code
LITERAL_NODES = frozenset({'string', 'template_string', 'regex', 'comment'})


class ScriptParser:
    """
    tree-sitter backed parser for embedded code

    One instance per compilation; tree-sitter parsers are not shared between
    documents.
    """

    def __init__(self) -> None:
        self.parser = Parser(JAVASCRIPT)

    def tree_parse(self, text: str) -> Tuple[bytes, SyntaxNode]:
        """
        Parse text and reject it if the tree contains errors

        Args:
            text: JavaScript source

        Returns:
            Encoded source and the tree's root node

        Raises:
            ExpressionSyntaxError: On any syntax error or JSX construct
        """
        data = text.encode('utf-8')
        root = self.parser.parse(data).root_node
        if root.has_error:
            bad = self.errorNode_find(root) or root
            row, column = bad.start_point
            reason = f"Missing '{bad.type}'" if bad.is_missing else "Unexpected token"
            raise ExpressionSyntaxError(
                f"{reason} in embedded JavaScript", snippet=text, line=row + 1, column=column
            )
        jsx = self.nodeType_find(root, 'jsx_')
        if jsx is not None:
            row, column = jsx.start_point
            raise ExpressionSyntaxError(
                "JSX is not supported in embedded JavaScript",
                snippet=text, line=row + 1, column=column,
            )
        return data, root

    def errorNode_find(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        """Depth-first search for the first ERROR or MISSING node"""
        if node.type == 'ERROR' or node.is_missing:
            return node
        for child in node.children:
            if child.has_error or child.is_missing:
                found = self.errorNode_find(child)
                if found is not None:
                    return found
        return None

    def nodeType_find(self, node: SyntaxNode, prefix: str) -> Optional[SyntaxNode]:
        if node.type.startswith(prefix):
            return node
        for child in node.named_children:
            found = self.nodeType_find(child, prefix)
            if found is not None:
                return found
        return None

    def literalRanges_get(self, data: bytes) -> List[Tuple[int, int]]:
        """
        Byte ranges of string, template, regex and comment nodes

        Parses without rejecting errors, so ranges are available for code
        that does not parse.
        """
        ranges = []
        stack = [self.parser.parse(data).root_node]
        while stack:
            node = stack.pop()
            if node.type in LITERAL_NODES:
                ranges.append((node.start_byte, node.end_byte))
                continue
            stack.extend(node.children)
        return ranges

    def code_search(self, text: str, pattern: Pattern[bytes]) -> Optional[int]:
        """
        Find a pattern in code, ignoring literals and comments

        Args:
            text: JavaScript source
            pattern: Compiled bytes pattern

        Returns:
            Character offset of the first match outside string, template,
            regex and comment nodes, or None

        Example:
            >>> pattern = re.compile(rb'<script', re.IGNORECASE)
            >>> ScriptParser().code_search('const s = "<script>";', pattern) is None
            True
        """
        data = text.encode('utf-8')
        ranges = self.literalRanges_get(data)
        for match in pattern.finditer(data):
            if not any(start <= match.start() < end for start, end in ranges):
                return len(data[:match.start()].decode('utf-8', errors='ignore'))
        return None

    def program_parse(self, text: str, mode: str, program: Program) -> Program:
        """
        Parse top-level statements and append them to a program

        Calling this repeatedly with the same program accumulates statements
        in call order, so several <script> blocks share one module body.

        Args:
            text: Script source
            mode: "script" or "module"
            program: Output module to append to

        Returns:
            The same program, for chaining

        Raises:
            ExpressionSyntaxError: On malformed code, or import/export in
                                   script mode
        """
        data, root = self.tree_parse(text)
        added = 0
        for node in root.named_children:
            if node.type in SKIPPED_NODES:
                continue
            if node.type in ('import_statement', 'export_statement') and mode != MODE_MODULE:
                row, column = node.start_point
                raise ExpressionSyntaxError(
                    "'import' and 'export' may appear only in module scripts "
                    "(add type=\"module\" to the <script> tag)",
                    snippet=text, line=row + 1, column=column,
                )
            if node.type == 'import_statement':
                program.body.append(self.import_read(node, data))
            else:
                program.body.append(Statement(source=self.text_get(node, data), kind=node.type))
            added += 1
        LOG(f"Parsed {added} top-level statements ({mode} mode)", level=3)
        return program

    def expression_parse(self, text: str) -> SourceExpression:
        """
        Parse a standalone expression

        The text is wrapped in parentheses, so object literals and sequence
        expressions parse as expressions. The parenthesized expression must
        cover the whole input: "1)(2" is rejected.

        Args:
            text: Expression source (without surrounding braces)

        Returns:
            SourceExpression with the original text and its node type

        Example:
            >>> ScriptParser().expression_parse("1+1")
            SourceExpression(source='1+1', kind='binary_expression')
        """
        # Newline before ")" so a trailing line comment cannot swallow it
        wrapped = f"({text}\n)"
        try:
            data, root = self.tree_parse(wrapped)
        except ExpressionSyntaxError as e:
            column = e.column
            if e.line == 1 and column:
                column -= 1
            raise ExpressionSyntaxError(
                f"Malformed embedded expression: {e.message}",
                snippet=text, line=e.line, column=column,
            ) from e

        statements = [n for n in root.named_children if n.type not in SKIPPED_NODES]
        group = None
        if len(statements) == 1 and statements[0].type == 'expression_statement':
            inner = [n for n in statements[0].named_children if n.type != 'comment']
            if len(inner) == 1 and inner[0].type == 'parenthesized_expression':
                group = inner[0]
        if group is None or group.start_byte != 0 or group.end_byte != len(data):
            raise ExpressionSyntaxError("Embedded code is not a single expression", snippet=text)

        expressions = [n for n in group.named_children if n.type != 'comment']
        if len(expressions) != 1:
            raise ExpressionSyntaxError("Embedded code is not a single expression", snippet=text)
        expression = expressions[0]
        return SourceExpression(source=self.text_get(expression, data), kind=expression.type)

    def import_read(self, node: SyntaxNode, data: bytes) -> ImportDeclaration:
        """
        Decompose an import statement into its bindings

        Handles default, namespace and named bindings and bare imports:

            import Foo, {bar as Baz} from "./x.js";
              -> default Foo, named bar as Baz
            import * as dom from "overture/dom";
              -> namespace dom
            import "./styles.js";
              -> no specifiers
        """
        source_node = node.child_by_field_name('source')
        declaration = ImportDeclaration(
            source=self.stringValue_get(source_node, data) if source_node else '',
            raw=self.text_get(node, data),
        )
        for clause in node.named_children:
            if clause.type != 'import_clause':
                continue
            for part in clause.named_children:
                if part.type == 'identifier':
                    declaration.specifiers.append(
                        ImportSpecifier(kind='default', local=self.text_get(part, data))
                    )
                elif part.type == 'namespace_import':
                    names = [n for n in part.named_children if n.type == 'identifier']
                    if names:
                        declaration.specifiers.append(
                            ImportSpecifier(kind='namespace', local=self.text_get(names[0], data))
                        )
                elif part.type == 'named_imports':
                    declaration.specifiers.extend(self.namedImports_read(part, data))
        return declaration

    def namedImports_read(self, node: SyntaxNode, data: bytes) -> List[ImportSpecifier]:
        specifiers = []
        for specifier in node.named_children:
            if specifier.type != 'import_specifier':
                continue
            name = specifier.child_by_field_name('name')
            alias = specifier.child_by_field_name('alias')
            if name is None:
                continue
            if name.type == 'string':
                imported = self.stringValue_get(name, data)
            else:
                imported = self.text_get(name, data)
            local = self.text_get(alias, data) if alias is not None else imported
            specifiers.append(ImportSpecifier(kind='named', local=local, imported=imported))
        return specifiers

    def text_get(self, node: SyntaxNode, data: bytes) -> str:
        return data[node.start_byte:node.end_byte].decode('utf-8')

    def stringValue_get(self, node: SyntaxNode, data: bytes) -> str:
        """Value of a string literal node (quotes removed)"""
        return self.text_get(node, data)[1:-1]
