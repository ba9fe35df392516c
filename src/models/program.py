"""
Output module models

A small ESTree-shaped syntax tree for the generated JavaScript module.

Code written by the document author (embedded <script> blocks and {...}
expressions) is carried verbatim: the parser validates it and records its
source text, and the emitter prints that text unchanged. Only import
declarations are kept in structured form, because the compiler needs to
inspect their bindings and may extend their specifier lists.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass
class Identifier:
    name: str


@dataclass
class StringLiteral:
    value: str


@dataclass
class SourceExpression:
    """
    Expression parsed from document source

    Attributes:
        source: Expression text exactly as written (e.g., "1+1")
        kind: Parser node type (e.g., "binary_expression", "identifier")
    """
    source: str
    kind: str


@dataclass
class ArrayExpression:
    elements: List["Expression"] = field(default_factory=list)


@dataclass
class ObjectExpression:
    """Object literal; properties keep insertion order"""
    properties: List[Tuple[str, "Expression"]] = field(default_factory=list)


@dataclass
class MemberExpression:
    object: "Expression"
    property: str


@dataclass
class CallExpression:
    callee: "Expression"
    arguments: List["Expression"] = field(default_factory=list)


@dataclass
class NewExpression:
    callee: "Expression"
    arguments: List["Expression"] = field(default_factory=list)


Expression = Union[
    Identifier,
    StringLiteral,
    SourceExpression,
    ArrayExpression,
    ObjectExpression,
    MemberExpression,
    CallExpression,
    NewExpression,
]


@dataclass
class ImportSpecifier:
    """
    One binding of an import declaration

    Attributes:
        kind: "default", "namespace" or "named"
        local: Name bound in the importing module
        imported: Exported name for "named" specifiers (equals local
                  unless aliased); None otherwise
    """
    kind: str
    local: str
    imported: Optional[str] = None


@dataclass
class ImportDeclaration:
    """
    import ... from "source";

    Attributes:
        source: Module specifier string value
        specifiers: Bindings in declaration order (empty for bare imports)
        raw: Original statement text; cleared when the declaration is
             modified so the emitter re-prints it
    """
    source: str
    specifiers: List[ImportSpecifier] = field(default_factory=list)
    raw: Optional[str] = None

    def namespace_has(self) -> bool:
        """Check for an `* as name` binding (which cannot take named specifiers)"""
        return any(s.kind == "namespace" for s in self.specifiers)

    def named_has(self, imported: str, local: Optional[str] = None) -> bool:
        """Check for a named specifier, optionally bound to a given local name"""
        for specifier in self.specifiers:
            if specifier.kind != "named" or specifier.imported != imported:
                continue
            if local is None or specifier.local == local:
                return True
        return False

    def named_add(self, name: str) -> None:
        """Append a named specifier and mark the declaration for re-printing"""
        self.specifiers.append(ImportSpecifier(kind="named", local=name, imported=name))
        self.raw = None


@dataclass
class Statement:
    """Top-level statement from an embedded script, kept as written"""
    source: str
    kind: str


@dataclass
class ReturnStatement:
    argument: Expression


@dataclass
class FunctionDeclaration:
    name: str
    params: List[str] = field(default_factory=list)
    body: List[ReturnStatement] = field(default_factory=list)


@dataclass
class ExportDefaultDeclaration:
    declaration: FunctionDeclaration


TopLevel = Union[ImportDeclaration, Statement, ExportDefaultDeclaration]


@dataclass
class Program:
    """
    The output module: ordered top-level statements

    Built front-to-back by the script extractor, given its element import by
    the import registry and finished by appending the draw function.
    """
    body: List[TopLevel] = field(default_factory=list)

    def imports_get(self) -> List[ImportDeclaration]:
        """All top-level import declarations, in module order"""
        return [node for node in self.body if isinstance(node, ImportDeclaration)]
