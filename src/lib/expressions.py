"""
Expression splitter and property lowering

Text and attribute values may embed one JavaScript expression in braces:

    Hello {ctx.user.name}!    ->  ["Hello ", <ctx.user.name>, "!"]
    class="item {ctx.kind}"   ->  ["item ", <ctx.kind>]

Only the first balanced span of a value is recognized; braces after it are
literal text. A value whose braces never balance has no span and is used as
literal text. Code inside a span that does not parse is a fatal error.
"""

from typing import Dict, List, Optional, Tuple, Union

from ..models.document import PropertyValue
from ..models.program import (
    ArrayExpression,
    CallExpression,
    Expression,
    MemberExpression,
    SourceExpression,
    StringLiteral,
)
from .javascript import ScriptParser


Segment = Union[str, SourceExpression]


def expression_find(value: str) -> Optional[Tuple[int, int]]:
    """
    Locate the first balanced {...} span

    Depth goes up on every "{" and down on every "}". The span runs from the
    brace that took depth from 0 to 1 to the brace that brings it back to 0.

    Args:
        value: Raw text or attribute value

    Returns:
        (start, end) positions of the opening and closing braces, or None

    Example:
        >>> expression_find("a{b{c}}d")
        (1, 6)
        >>> expression_find("a{b") is None
        True
    """
    depth = 0
    start = 0
    for pos, char in enumerate(value):
        if char == '{':
            if depth == 0:
                start = pos
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return start, pos
    return None


def expression_split(value: str, parser: ScriptParser) -> List[Segment]:
    """
    Split a value into literal and expression segments

    Args:
        value: Raw text or attribute value
        parser: Parser for the embedded expression

    Returns:
        [value] when there is no span; otherwise the non-empty literal
        prefix, the parsed expression and the non-empty literal suffix

    Raises:
        ExpressionSyntaxError: If the code inside the span is malformed

    Example:
        "a{1+1}b" -> ["a", SourceExpression("1+1"), "b"]
        "{x}"     -> [SourceExpression("x")]
        "plain"   -> ["plain"]
    """
    span = expression_find(value)
    if span is None:
        return [value]

    start, end = span
    segments: List[Segment] = []
    if start > 0:
        segments.append(value[:start])
    segments.append(parser.expression_parse(value[start + 1:end]))
    if end + 1 < len(value):
        segments.append(value[end + 1:])
    return segments


def segment_lower(segment: Segment) -> Expression:
    if isinstance(segment, str):
        return StringLiteral(segment)
    return segment


def segments_lower(segments: List[Segment], stringify: bool = False) -> Expression:
    """
    Lower split segments to one output expression

    A single literal segment becomes a string literal. Several segments are
    concatenated at runtime: ["a", x, "b"].join("").

    Args:
        segments: Result of expression_split()
        stringify: Join a lone expression too ([x].join("")), so the
                   result is always a string; used for attribute values

    Returns:
        Output expression
    """
    if len(segments) == 1 and (isinstance(segments[0], str) or not stringify):
        return segment_lower(segments[0])
    return CallExpression(
        MemberExpression(ArrayExpression([segment_lower(s) for s in segments]), 'join'),
        [StringLiteral('')],
    )


def value_lower(value: str, parser: ScriptParser, stringify: bool = False) -> Expression:
    """Split and lower a text or attribute value"""
    return segments_lower(expression_split(value, parser), stringify=stringify)


def properties_lower(
    properties: Dict[str, PropertyValue], parser: ScriptParser
) -> Dict[str, Expression]:
    """
    Lower element properties to object-literal entries

    Token lists (className) are joined with single spaces before splitting.
    Values holding an expression always lower to a join, so attributes are
    strings even when the value is exactly {expr}.

    Args:
        properties: Element or component properties
        parser: Parser for embedded expressions

    Returns:
        Property name -> output expression, in the original order
    """
    lowered: Dict[str, Expression] = {}
    for name, value in properties.items():
        if isinstance(value, list):
            value = ' '.join(value)
        lowered[name] = value_lower(value, parser, stringify=True)
    return lowered
