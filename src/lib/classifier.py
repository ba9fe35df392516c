"""
Node classifier

Rewrites elements that name an imported component into Component nodes.
Standard HTML tags are never rewritten, even when a component with the same
lowercase name is imported. Unknown non-standard tags that match no import
stay plain elements and are emitted with their tag name unchanged.

Classification builds a new tree rather than editing nodes in place, and
only ever turns Element into Component, so running it again on its own
output changes nothing.
"""

from typing import FrozenSet

from ..models.document import Component, Element, Node, Root
from ..models.tags import STANDARD_TAGS
from .imports import ImportRegistry
from .log import LOG


class NodeClassifier:
    """
    Element -> Component rewrite pass

    Attributes:
        registry: Tag name resolution table
        standard_tags: Tags that always stay plain elements
        promoted: Number of elements rewritten by the last classify call
    """

    def __init__(
        self, registry: ImportRegistry, standard_tags: FrozenSet[str] = STANDARD_TAGS
    ) -> None:
        self.registry = registry
        self.standard_tags = standard_tags
        self.promoted = 0

    def tree_classify(self, root: Root) -> Root:
        """
        Classify every element of a tree

        Args:
            root: Document tree after script extraction

        Returns:
            New tree with matching elements replaced by Component nodes
        """
        self.promoted = 0
        classified = Root(children=[self.node_classify(child) for child in root.children])
        LOG(f"Classified {self.promoted} elements as components", level=2)
        return classified

    def node_classify(self, node: Node) -> Node:
        if not isinstance(node, (Element, Component)):
            return node

        children = [self.node_classify(child) for child in node.children]
        if isinstance(node, Component):
            return Component(node.tag_name, dict(node.properties), children)

        name = None
        if node.tag_name not in self.standard_tags:
            name = self.registry.get(node.tag_name)
        if name is None:
            return Element(node.tag_name, dict(node.properties), children)

        LOG(f"Classified <{node.tag_name}> as {name}", level=3)
        self.promoted += 1
        return Component(name, dict(node.properties), children)


def nodes_classify(root: Root, registry: ImportRegistry) -> Root:
    """Classify a tree against a registry (see NodeClassifier)"""
    return NodeClassifier(registry).tree_classify(root)
