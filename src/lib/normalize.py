"""
Raw HTML normalizer

The Markdown parser leaves embedded HTML as opaque Raw fragments, often
split across several nodes (an opening tag in one fragment, its closing tag
in another). The normalizer serializes the whole tree back to HTML with the
fragments spliced in verbatim and re-parses it, so the result contains only
Element, Text and Comment nodes.

This is the "unsafe" mode: documents are trusted input and raw HTML is
never sanitized.

Attribute names are converted to DOM property names on the way in:

    class="a b"      -> className: ["a", "b"]
    for="x"          -> htmlFor: "x"
    data-user-id="1" -> dataUserId: "1"
    tabindex="0"     -> tabIndex: "0"
"""

import re
from html import escape
from html.parser import HTMLParser
from typing import Dict, List, Optional, Tuple, Union

from ..models.document import (
    Comment,
    Component,
    Element,
    Node,
    PropertyValue,
    Raw,
    Root,
    Text,
)
from ..models.tags import LIST_PROPERTIES, PROPERTY_NAMES, VOID_TAGS
from .errors import UnsupportedNodeError
from .log import LOG


ATTRIBUTE_NAMES: Dict[str, str] = {prop: attr for attr, prop in PROPERTY_NAMES.items()}


def property_name(attribute: str) -> str:
    """
    Convert an HTML attribute name to its DOM property name

    Args:
        attribute: Lowercase attribute name

    Returns:
        Property name (e.g., "class" -> "className", "data-foo-bar" -> "dataFooBar")
    """
    if attribute in PROPERTY_NAMES:
        return PROPERTY_NAMES[attribute]
    if attribute.startswith(('data-', 'aria-')) and len(attribute) > 5:
        head, *rest = attribute.split('-')
        return head + ''.join(part[:1].upper() + part[1:] for part in rest)
    return attribute


def attribute_name(prop: str) -> str:
    """Inverse of property_name()"""
    if prop in ATTRIBUTE_NAMES:
        return ATTRIBUTE_NAMES[prop]
    match = re.match(r'^(data|aria)([A-Z].*)$', prop)
    if match:
        rest = re.sub(r'([A-Z])', lambda m: '-' + m.group(1).lower(), match.group(2))
        return match.group(1) + rest
    return prop


def properties_from(attrs: List[Tuple[str, Optional[str]]]) -> Dict[str, PropertyValue]:
    """
    Build element properties from parsed attributes

    Valueless attributes get "", list properties are split on whitespace and
    the first occurrence of a repeated attribute wins.
    """
    properties: Dict[str, PropertyValue] = {}
    for attribute, value in attrs:
        name = property_name(attribute)
        if name in properties:
            continue
        value = value or ''
        properties[name] = value.split() if name in LIST_PROPERTIES else value
    return properties


class DocumentTreeBuilder(HTMLParser):
    """
    HTML tree builder over html.parser

    Keeps a stack of open elements. Void elements and self-closed tags
    (<x/>) are never pushed; an end tag pops back to the nearest open element
    with that name, and end tags with no open match are ignored.
    <script> and <style> content arrives as raw text.
    """

    def __init__(self, strip_comments: bool = False) -> None:
        super().__init__(convert_charrefs=True)
        self.strip_comments = strip_comments
        self.root = Root()
        self.stack: List[Union[Root, Element]] = [self.root]

    def node_append(self, node: Node) -> None:
        self.stack[-1].children.append(node)

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        element = Element(tag, properties_from(attrs))
        self.node_append(element)
        if tag not in VOID_TAGS:
            self.stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.node_append(Element(tag, properties_from(attrs)))

    def handle_endtag(self, tag: str) -> None:
        for depth in range(len(self.stack) - 1, 0, -1):
            node = self.stack[depth]
            if isinstance(node, Element) and node.tag_name == tag:
                del self.stack[depth:]
                return
        LOG(f"Ignoring unmatched end tag </{tag}>", level=3)

    def handle_data(self, data: str) -> None:
        siblings = self.stack[-1].children
        if siblings and isinstance(siblings[-1], Text):
            siblings[-1].value += data
        else:
            siblings.append(Text(data))

    def handle_comment(self, data: str) -> None:
        if not self.strip_comments:
            self.node_append(Comment(data))

    def tree_build(self, markup: str) -> Root:
        self.feed(markup)
        self.close()
        return self.root


def tree_serialize(node: Node) -> str:
    """
    Serialize a document tree to HTML

    Text is escaped, Raw fragments are emitted verbatim. Component nodes are
    written with their tag name, like elements.

    Args:
        node: Tree or subtree to serialize

    Returns:
        HTML markup
    """
    if isinstance(node, Text):
        return escape(node.value, quote=False)
    if isinstance(node, Raw):
        return node.value
    if isinstance(node, Comment):
        return f"<!--{node.value}-->"
    if isinstance(node, Root):
        return ''.join(tree_serialize(child) for child in node.children)

    if not isinstance(node, (Element, Component)):
        raise UnsupportedNodeError(f"Cannot serialize {type(node).__name__} node")
    attributes = []
    for prop, value in node.properties.items():
        if isinstance(value, list):
            value = ' '.join(value)
        attributes.append(f' {attribute_name(prop)}="{escape(value, quote=True)}"')
    opening = f"<{node.tag_name}{''.join(attributes)}>"
    if node.tag_name in VOID_TAGS:
        return opening
    inner = ''.join(tree_serialize(child) for child in node.children)
    return f"{opening}{inner}</{node.tag_name}>"


def tree_normalize(root: Root, strip_comments: bool = False) -> Root:
    """
    Resolve Raw fragments into real nodes

    Args:
        root: Tree from the Markdown parser
        strip_comments: Drop HTML comments instead of keeping Comment nodes

    Returns:
        New tree containing only Element, Text and Comment nodes
    """
    markup = tree_serialize(root)
    LOG(f"Re-parsing {len(markup)} characters of HTML", level=3)
    return DocumentTreeBuilder(strip_comments=strip_comments).tree_build(markup)
