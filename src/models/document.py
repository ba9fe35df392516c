"""
Document tree models

Generic node tree produced by the Markdown parser and the raw-HTML
normalizer, and consumed by the script extractor, classifier and draw
synthesizer.

Node kinds:
    Root      - exactly one per document
    Element   - plain markup element (tag name, properties, children)
    Component - element resolved to an imported component class
    Text      - literal text
    Raw       - opaque HTML fragment awaiting normalization
    Comment   - HTML comment
"""

from dataclasses import dataclass, field
from typing import Dict, List, Union


PropertyValue = Union[str, List[str]]


@dataclass
class Text:
    """Literal text content"""
    value: str


@dataclass
class Raw:
    """
    Opaque HTML fragment left by the Markdown parser

    Only exists between parsing and normalization; the normalizer splices the
    fragment back into the document and re-parses it as real nodes.
    """
    value: str


@dataclass
class Comment:
    """HTML comment (<!-- value -->)"""
    value: str


@dataclass
class Element:
    """
    Plain markup element

    Attributes:
        tag_name: Lowercase tag name (e.g., "div", "my-widget")
        properties: Property name to value, using DOM property spelling
                    (e.g., {"className": ["a", "b"], "href": "/x"})
        children: Ordered child nodes
    """
    tag_name: str
    properties: Dict[str, PropertyValue] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)


@dataclass
class Component:
    """
    Element resolved to an imported component

    Same shape as Element, but tag_name holds the imported identifier
    (e.g., "DatePicker") instead of a markup tag. Produced only by the
    node classifier.
    """
    tag_name: str
    properties: Dict[str, PropertyValue] = field(default_factory=dict)
    children: List["Node"] = field(default_factory=list)


@dataclass
class Root:
    """Document root"""
    children: List["Node"] = field(default_factory=list)


Node = Union[Root, Element, Component, Text, Raw, Comment]
