"""
Node classifier tests

Tests promotion of elements to components, standard tag protection and
idempotence.
"""

from overmark.lib.classifier import NodeClassifier, nodes_classify
from overmark.lib.imports import ImportRegistry
from overmark.models.document import Component, Element, Root, Text
from overmark.models.program import ImportSpecifier


def registry_make(*names):
    registry = ImportRegistry()
    for name in names:
        registry.specifier_register(ImportSpecifier(kind="named", local=name, imported=name))
    return registry


class TestClassification:
    """Test Element -> Component rewriting"""

    def test_imported_tag_promoted(self):
        """A tag matching an import becomes a component"""
        root = Root([Element("datepicker", {"value": "today"})])
        classified = nodes_classify(root, registry_make("DatePicker"))

        assert classified.children == [Component("DatePicker", {"value": "today"})]

    def test_nested_promotion(self):
        """Components are found at any depth"""
        root = Root([Element("div", {}, [Element("p", {}, [Element("foo")])])])
        classified = nodes_classify(root, registry_make("Foo"))

        assert classified.children[0].children[0].children[0] == Component("Foo")

    def test_standard_tag_protected(self):
        """Standard HTML tags stay elements even if imported"""
        root = Root([Element("button", {}, [Text("Go")])])
        classified = nodes_classify(root, registry_make("Button"))

        assert classified.children == [Element("button", {}, [Text("Go")])]

    def test_unknown_tag_kept(self):
        """Non-standard tags without an import stay elements"""
        root = Root([Element("my-widget")])
        classified = nodes_classify(root, registry_make("Foo"))

        assert classified.children == [Element("my-widget")]

    def test_promotion_count(self):
        """The classifier counts rewritten elements"""
        classifier = NodeClassifier(registry_make("Foo", "Bar"))
        classifier.tree_classify(Root([Element("foo"), Element("bar"), Element("p")]))

        assert classifier.promoted == 2


class TestClassifierInvariants:
    """Test purity and idempotence"""

    def test_input_not_modified(self):
        """Classification builds a new tree"""
        root = Root([Element("foo", {"a": "1"})])
        nodes_classify(root, registry_make("Foo"))

        assert root.children == [Element("foo", {"a": "1"})]

    def test_idempotent(self):
        """Classifying twice gives the same tree"""
        registry = registry_make("Foo", "Button")
        root = Root([
            Element("foo", {}, [Text("x")]),
            Element("button"),
            Element("section", {}, [Element("foo")]),
        ])
        once = nodes_classify(root, registry)

        assert nodes_classify(once, registry) == once
