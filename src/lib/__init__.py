"""
overmark - Markdown to Overture draw-module compiler

Compiles Markdown documents with embedded HTML, <script> blocks and {...}
expressions into JavaScript modules exporting a draw(ctx) function.
"""

__version__ = "1.0.0"

from .compiler import Compiler, markdown_compile, module_load
from .errors import CompileError, StructuralError, ExpressionSyntaxError, UnsupportedNodeError
from .log import LOG, state_connectToLogger

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
