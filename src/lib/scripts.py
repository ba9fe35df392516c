"""
Script extractor

Pulls the top-level <script> blocks out of a normalized document tree and
parses them, in document order, into the shared output module. All blocks
of a document share one program scope: their statements are concatenated,
not wrapped in separate modules.

    <script type="module">import {Foo} from './foo.js';</script>
    # Title
    <script>const n = 1;</script>

produces a program body of [import {Foo} ..., const n = 1;] and a tree that
only holds the heading.
"""

import re
from typing import List

from ..config import appsettings, AppSettings
from ..models.document import Element, Node, Root, Text
from ..models.program import Program
from .errors import StructuralError
from .javascript import MODE_MODULE, MODE_SCRIPT, ScriptParser
from .log import LOG
from .normalize import tree_serialize


class ScriptExtractor:
    """
    Extracts embedded-code blocks into an output module

    Attributes:
        program: Output module receiving the parsed statements
        parser: Embedded-code parser
        settings: Script tag name and module-mode type value
        count: Number of blocks extracted so far
    """

    def __init__(
        self,
        program: Program,
        parser: ScriptParser,
        settings: AppSettings = appsettings,
    ) -> None:
        self.program = program
        self.parser = parser
        self.settings = settings
        self.count = 0
        tag = re.escape(settings.script_tag.encode('utf-8'))
        self.nested_pattern = re.compile(rb'<' + tag + rb'[\s>/]', re.IGNORECASE)

    def scripts_extract(self, root: Root) -> Root:
        """
        Extract every top-level script block

        Only immediate children of the root are considered. A script element
        deeper in the tree is left in place and rejected later by the draw
        synthesizer.

        Args:
            root: Normalized document tree

        Returns:
            New root without the extracted script elements

        Raises:
            StructuralError: If a script block contains another script block
            ExpressionSyntaxError: If a script block is malformed
        """
        kept: List[Node] = []
        for child in root.children:
            if self.script_is(child):
                self.script_extract(child)
                continue
            kept.append(child)
        LOG(f"Extracted {self.count} script blocks", level=2)
        return Root(children=kept)

    def script_is(self, node: Node) -> bool:
        return isinstance(node, Element) and node.tag_name == self.settings.script_tag

    def mode_get(self, element: Element) -> str:
        """Program mode declared by the element's type attribute"""
        declared = element.properties.get('type', MODE_SCRIPT)
        if isinstance(declared, list):
            declared = ' '.join(declared)
        return MODE_MODULE if declared.strip() == self.settings.module_mode else MODE_SCRIPT

    def script_extract(self, element: Element) -> None:
        """
        Parse one script block into the program

        The HTML parser reads script content as raw text, so an inner
        <script> tag arrives as text. It is only treated as nesting when it
        appears in code; inside a string, template, regex or comment it is
        data.
        """
        mode = self.mode_get(element)
        for child in element.children:
            if not isinstance(child, Text):
                raise StructuralError(
                    f"Nested <{self.settings.script_tag}> tags are not supported",
                    snippet=tree_serialize(child),
                )
            offset = self.parser.code_search(child.value, self.nested_pattern)
            if offset is not None:
                line = child.value.count('\n', 0, offset) + 1
                column = offset - (child.value.rfind('\n', 0, offset) + 1)
                raise StructuralError(
                    f"Nested <{self.settings.script_tag}> tags are not supported",
                    snippet=child.value, line=line, column=column,
                )
            self.parser.program_parse(child.value, mode, self.program)
        self.count += 1
