"""
Draw synthesizer

Lowers a classified document tree into the module's draw function:

    export default function draw(ctx) {
      return [
        el("h1", {}, ["Hello ", ctx.name]),
        new DatePicker({value: "today"})
      ];
    }

Node lowering:
    Root      -> exported draw function returning an array of its children
    Element   -> el(tagName, {properties}, [children])
    Component -> new Name({properties}); children are not passed on
    Text      -> string literal, embedded expression, or ["a", x].join("")

Text nodes consisting of exactly one newline are formatting artifacts of
the Markdown renderer and are dropped before lowering a node's children.
"""

from typing import Callable, Dict, List, Type

from ..config import appsettings, AppSettings
from ..models.document import Component, Element, Node, Root, Text
from ..models.program import (
    ArrayExpression,
    CallExpression,
    ExportDefaultDeclaration,
    Expression,
    FunctionDeclaration,
    Identifier,
    NewExpression,
    ObjectExpression,
    ReturnStatement,
    StringLiteral,
)
from .errors import StructuralError, UnsupportedNodeError
from .expressions import properties_lower, value_lower
from .javascript import ScriptParser
from .log import LOG
from .normalize import tree_serialize


class DrawSynthesizer:
    """
    Recursive tree -> draw function lowering

    Attributes:
        parser: Parser for embedded expressions
        settings: Primitive, draw function and parameter names
        handlers: Lowering function per node class
    """

    def __init__(self, parser: ScriptParser, settings: AppSettings = appsettings) -> None:
        self.parser = parser
        self.settings = settings
        self.handlers: Dict[Type, Callable[[Node, List[Expression]], Expression]] = {
            Element: self.element_lower,
            Component: self.component_lower,
        }

    def draw_synthesize(self, root: Root) -> ExportDefaultDeclaration:
        """
        Lower a classified tree into the exported draw function

        Args:
            root: Tree after script extraction and classification

        Returns:
            export default function draw(ctx) { return [...]; }

        Raises:
            StructuralError: If a script element is still in the tree
            UnsupportedNodeError: If a node has no lowering (e.g. a comment)
            ExpressionSyntaxError: If an embedded expression is malformed
        """
        children = self.children_lower(root)
        function = FunctionDeclaration(
            name=self.settings.draw_function,
            params=[self.settings.context_param],
            body=[ReturnStatement(ArrayExpression(children))],
        )
        LOG(f"Synthesized {self.settings.draw_function}() with {len(children)} top-level nodes", level=2)
        return ExportDefaultDeclaration(function)

    def children_lower(self, node: Node) -> List[Expression]:
        return [
            self.node_lower(child)
            for child in node.children
            if not (isinstance(child, Text) and child.value == '\n')
        ]

    def node_lower(self, node: Node) -> Expression:
        if isinstance(node, Text):
            return value_lower(node.value, self.parser)

        if isinstance(node, Element) and node.tag_name == self.settings.script_tag:
            raise StructuralError(
                f"Nested <{self.settings.script_tag}> tags are not supported",
                snippet=tree_serialize(node),
            )

        handler = self.handlers.get(type(node))
        if handler is None:
            raise UnsupportedNodeError(
                f"Cannot lower {type(node).__name__} node into the draw function",
                snippet=tree_serialize(node),
            )
        return handler(node, self.children_lower(node))

    def element_lower(self, node: Element, children: List[Expression]) -> Expression:
        return CallExpression(
            Identifier(self.settings.element_factory),
            [
                StringLiteral(node.tag_name),
                self.object_build(node),
                ArrayExpression(children),
            ],
        )

    def component_lower(self, node: Component, children: List[Expression]) -> Expression:
        if children:
            LOG(f"Warning: children of <{node.tag_name}> are ignored", level=2)
        return NewExpression(Identifier(node.tag_name), [self.object_build(node)])

    def object_build(self, node: Node) -> ObjectExpression:
        lowered = properties_lower(node.properties, self.parser)
        return ObjectExpression(list(lowered.items()))
