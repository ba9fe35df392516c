"""
Compiler for Markdown documents to Overture draw modules

Runs the full pipeline for one document:

    Markdown source
      -> document tree            (MarkdownParser)
      -> normalized tree          (tree_normalize: raw HTML re-parsed)
      -> tree without scripts     (ScriptExtractor, statements -> Program)
      -> table + merged imports   (ImportRegistry, imports_merge)
      -> element import           (elementImport_ensure)
      -> classified tree          (NodeClassifier)
      -> draw function            (DrawSynthesizer, appended to Program)
      -> JavaScript module text   (ModuleEmitter)

Every structure is created per compilation; a Compiler instance compiles
exactly one document and shares nothing with other instances.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..config import appsettings, AppSettings
from ..models.document import Root
from ..models.program import Program
from .classifier import NodeClassifier
from .emitter import ModuleEmitter
from .imports import ImportRegistry, elementImport_ensure, imports_merge
from .javascript import ScriptParser
from .log import LOG
from .markdown import MarkdownParser
from .normalize import tree_normalize
from .scripts import ScriptExtractor
from .synthesizer import DrawSynthesizer


class Compiler:
    """
    Compiles one Markdown document to a JavaScript module

    Responsibilities:
    - Parse Markdown and normalize embedded HTML
    - Collect <script> blocks into the output module
    - Wire the element import and resolve component tags
    - Synthesize and print the draw function

    Attributes:
        source: Markdown document text
        settings: Runtime contract and output settings
        program: Output module being built
        registry: Component resolution table (after compile())
        tree: Final classified tree (after compile())
    """

    def __init__(self, source: str, settings: AppSettings = appsettings, name: str = "<string>") -> None:
        """
        Initialize compiler

        Args:
            source: Markdown document text
            settings: Settings to compile with (default: environment settings)
            name: Document name used in log messages
        """
        self.source = source
        self.settings = settings
        self.name = name
        self.parser = ScriptParser()
        self.program = Program()
        self.registry: Optional[ImportRegistry] = None
        self.tree: Optional[Root] = None

    def tree_build(self) -> Root:
        """Parse the document and resolve its raw HTML"""
        document = MarkdownParser(self.source).parse()
        return tree_normalize(document, strip_comments=self.settings.strip_comments)

    def compile(self) -> str:
        """
        Compile the document

        Returns:
            Generated JavaScript module text

        Raises:
            CompileError: On any structural, syntax or unsupported-node error;
                          no partial output is produced
        """
        LOG(f"Compiling {self.name}", level=2)

        tree = self.tree_build()

        extractor = ScriptExtractor(self.program, self.parser, self.settings)
        tree = extractor.scripts_extract(tree)

        # Registry sees bindings in source order, before merging
        self.registry = ImportRegistry.program_scan(self.program)
        imports_merge(self.program)
        elementImport_ensure(self.program, self.settings)

        tree = NodeClassifier(self.registry).tree_classify(tree)
        self.tree = tree

        draw = DrawSynthesizer(self.parser, self.settings).draw_synthesize(tree)
        self.program.body.append(draw)

        code = ModuleEmitter(self.settings).module_generate(self.program)
        LOG(f"Generated {len(code)} characters for {self.name}", level=2)
        return code

    def stats_get(self) -> Dict[str, Any]:
        """Summary of the last compilation, for reporting"""
        return {
            'statements': len(self.program.body),
            'imports': len(self.program.imports_get()),
            'components': len(self.registry) if self.registry is not None else 0,
        }


def markdown_compile(source: str, settings: AppSettings = appsettings) -> str:
    """
    Compile Markdown source to a JavaScript module

    Args:
        source: Markdown document text
        settings: Settings to compile with

    Returns:
        Generated module text

    Example:
        >>> print(markdown_compile("# Hi"))
        import {el} from "overture/dom";
        export default function draw(ctx) {
          return [
            el("h1", {}, ["Hi"])
          ];
        }
    """
    return Compiler(source, settings).compile()


def module_load(path: Union[str, Path], settings: AppSettings = appsettings) -> Optional[str]:
    """
    Bundler load hook

    Args:
        path: Module path requested by the bundler

    Returns:
        None for paths that are not Markdown documents, otherwise the
        compiled module text
    """
    path = Path(path)
    if not settings.sourcePath_matches(path.name):
        return None
    source = path.read_text(encoding='utf-8')
    return Compiler(source, settings, name=str(path)).compile()
