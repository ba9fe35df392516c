"""
Markdown document parser

Turns CommonMark source into a generic document tree (Root / Element /
Text / Raw). Raw HTML is not interpreted here: html_block and html_inline
tokens become opaque Raw fragments that the HTML normalizer re-parses
together with the rest of the tree.

Block elements follow the usual Markdown-to-HTML mapping:

    paragraph     -> <p>          (unwrapped inside tight lists)
    heading       -> <h1>..<h6>
    blockquote    -> <blockquote>
    bullet_list   -> <ul>, ordered_list -> <ol start=N>, list_item -> <li>
    fence         -> <pre><code class="language-X">
    code_block    -> <pre><code>
    hr            -> <hr>

Sibling blocks are separated by single "\\n" text nodes, the same layout
markdown-it's HTML renderer produces.

Example:
    >>> root = MarkdownParser("# Hi\\n\\nThere").parse()
    >>> [type(n).__name__ for n in root.children]
    ['Element', 'Text', 'Element']
"""

from typing import Callable, Dict, List

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from ..models.document import Element, Node, Raw, Root, Text
from .log import LOG


Handler = Callable[[SyntaxTreeNode], List[Node]]


class MarkdownParser:
    """
    CommonMark parser producing a document tree

    Uses markdown-it-py's token stream, viewed as a SyntaxTreeNode tree, and
    a table of per-node-type handlers.
    """

    def __init__(self, source: str) -> None:
        """
        Initialize parser with source text

        Args:
            source: Markdown document text
        """
        self.source = source
        self.md = MarkdownIt("commonmark", {"html": True})
        self.handlers: Dict[str, Handler] = {
            'paragraph': self.paragraph_convert,
            'heading': self.heading_convert,
            'blockquote': self.blockquote_convert,
            'bullet_list': self.list_convert,
            'ordered_list': self.list_convert,
            'list_item': self.listItem_convert,
            'fence': self.fence_convert,
            'code_block': self.fence_convert,
            'hr': lambda node: [Element('hr')],
            'html_block': lambda node: [Raw(node.content.rstrip('\n'))],
            'html_inline': lambda node: [Raw(node.content)],
            'inline': self.children_convert,
            'text': lambda node: [Text(node.content)],
            'softbreak': lambda node: [Text('\n')],
            'hardbreak': lambda node: [Element('br'), Text('\n')],
            'em': self.inline_convert,
            'strong': self.inline_convert,
            'code_inline': lambda node: [Element('code', {}, [Text(node.content)])],
            'link': self.link_convert,
            'image': self.image_convert,
        }

    def parse(self) -> Root:
        """
        Parse source text into a document tree

        Returns:
            Root node; empty for empty or whitespace-only source
        """
        tokens = self.md.parse(self.source)
        tree = SyntaxTreeNode(tokens)
        root = Root(children=self.blocks_join(tree.children))
        LOG(f"Parsed {len(tree.children)} top-level Markdown blocks", level=3)
        return root

    def node_convert(self, node: SyntaxTreeNode) -> List[Node]:
        """Convert one Markdown node into zero or more document nodes"""
        handler = self.handlers.get(node.type)
        if handler is None:
            LOG(f"Warning: Unknown Markdown node '{node.type}', keeping its children", level=2)
            return self.children_convert(node)
        return handler(node)

    def children_convert(self, node: SyntaxTreeNode) -> List[Node]:
        converted: List[Node] = []
        for child in node.children:
            converted.extend(self.node_convert(child))
        return converted

    def blocks_join(self, blocks: List[SyntaxTreeNode]) -> List[Node]:
        """
        Convert sibling blocks, separating them with newline text nodes

        Args:
            blocks: Block-level Markdown nodes

        Returns:
            Converted nodes with Text("\\n") between consecutive blocks
        """
        joined: List[Node] = []
        for index, block in enumerate(blocks):
            if index:
                joined.append(Text('\n'))
            joined.extend(self.node_convert(block))
        return joined

    def paragraph_convert(self, node: SyntaxTreeNode) -> List[Node]:
        # Paragraphs of tight lists are hidden: their content goes straight into the <li>
        if node.hidden:
            return self.children_convert(node)
        return [Element('p', {}, self.children_convert(node))]

    def heading_convert(self, node: SyntaxTreeNode) -> List[Node]:
        return [Element(node.tag, {}, self.children_convert(node))]

    def blockquote_convert(self, node: SyntaxTreeNode) -> List[Node]:
        children = [Text('\n'), *self.blocks_join(node.children), Text('\n')]
        return [Element('blockquote', {}, children)]

    def list_convert(self, node: SyntaxTreeNode) -> List[Node]:
        properties = {}
        start = node.attrs.get('start')
        if node.type == 'ordered_list' and start is not None and int(start) != 1:
            properties['start'] = str(start)
        children = [Text('\n'), *self.blocks_join(node.children), Text('\n')]
        return [Element(node.tag, properties, children)]

    def listItem_convert(self, node: SyntaxTreeNode) -> List[Node]:
        """
        Convert a list item

        Tight items render their text inline (<li>text</li>); loose items and
        items ending in a nested block get newline padding, matching the
        markdown-it renderer.
        """
        children = self.blocks_join(node.children)
        blocks = node.children
        if blocks and not self.blockHidden_is(blocks[0]):
            children.insert(0, Text('\n'))
        if blocks and not self.blockHidden_is(blocks[-1]):
            children.append(Text('\n'))
        return [Element('li', {}, children)]

    def blockHidden_is(self, node: SyntaxTreeNode) -> bool:
        return node.type == 'paragraph' and bool(node.hidden)

    def fence_convert(self, node: SyntaxTreeNode) -> List[Node]:
        """Convert fenced and indented code blocks to <pre><code>"""
        properties = {}
        info = (node.info or '').strip() if node.type == 'fence' else ''
        if info:
            properties['class'] = f"language-{info.split()[0]}"
        code = Element('code', properties, [Text(node.content)])
        return [Element('pre', {}, [code])]

    def inline_convert(self, node: SyntaxTreeNode) -> List[Node]:
        return [Element(node.tag, {}, self.children_convert(node))]

    def link_convert(self, node: SyntaxTreeNode) -> List[Node]:
        properties = {'href': str(node.attrs.get('href', ''))}
        title = node.attrs.get('title')
        if title:
            properties['title'] = str(title)
        return [Element('a', properties, self.children_convert(node))]

    def image_convert(self, node: SyntaxTreeNode) -> List[Node]:
        properties = {
            'src': str(node.attrs.get('src', '')),
            'alt': node.content,
        }
        title = node.attrs.get('title')
        if title:
            properties['title'] = str(title)
        return [Element('img', properties)]


def markdown_parse(source: str) -> Root:
    """
    Parse Markdown source into a document tree

    Args:
        source: Markdown document text

    Returns:
        Root node with Element, Text and Raw descendants
    """
    return MarkdownParser(source).parse()
