"""
Compilation errors

Every error is fatal for the document being compiled; nothing is recovered
inside the library. The CLI reports the message and moves on to the next
document.
"""

from typing import Optional


class CompileError(Exception):
    """
    Base class for overmark compilation failures

    Attributes:
        message: Human-readable description
        snippet: Offending source text, if known
        line: One-based line within snippet, if known
        column: Zero-based column within that line, if known
    """

    def __init__(
        self,
        message: str,
        snippet: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> None:
        self.message = message
        self.snippet = snippet
        self.line = line
        self.column = column
        super().__init__(self.report_format())

    def report_format(self) -> str:
        """
        Format the error with source context

        Example output:
            Unexpected token in embedded expression
            Line 1, column 2
            Context: 1 +* 2
                       ^
        """
        if self.snippet is None:
            return self.message

        parts = [self.message]
        context = self.snippet
        if self.line is not None:
            lines = self.snippet.splitlines() or [""]
            index = min(max(self.line - 1, 0), len(lines) - 1)
            context = lines[index]
            parts.append(f"Line {self.line}, column {self.column or 0}")
        parts.append(f"Context: {context}")
        if self.line is not None and self.column is not None:
            parts.append(f"         {' ' * self.column}^")
        return "\n".join(parts)


class StructuralError(CompileError):
    """Document structure the compiler cannot lower (e.g. nested <script>)"""


class ExpressionSyntaxError(CompileError):
    """Malformed JavaScript in a {...} expression or a <script> block"""


class UnsupportedNodeError(CompileError):
    """A document node kind with no lowering reached the synthesizer"""
