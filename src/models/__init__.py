"""
Models package for overmark

Contains data structures and type definitions for the compilation pipeline.
"""

from .state import ProgramState, pipeline
from .document import Root, Element, Component, Text, Raw, Comment, Node
from .program import Program, ImportDeclaration, ImportSpecifier, SourceExpression
from .tags import STANDARD_TAGS, VOID_TAGS

__all__ = [
    "ProgramState",
    "pipeline",
    "Root",
    "Element",
    "Component",
    "Text",
    "Raw",
    "Comment",
    "Node",
    "Program",
    "ImportDeclaration",
    "ImportSpecifier",
    "SourceExpression",
    "STANDARD_TAGS",
    "VOID_TAGS",
]
