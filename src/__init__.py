"""
overmark - Markdown to Overture draw-module compiler

Turns Markdown pages with embedded components and expressions into
JavaScript modules for the Overture UI runtime.
"""

__version__ = "1.0.0"

from .lib import (
    Compiler,
    markdown_compile,
    module_load,
    CompileError,
    StructuralError,
    ExpressionSyntaxError,
    UnsupportedNodeError,
    LOG,
    state_connectToLogger,
)

__all__ = [
    "Compiler",
    "markdown_compile",
    "module_load",
    "CompileError",
    "StructuralError",
    "ExpressionSyntaxError",
    "UnsupportedNodeError",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
