"""
Import registry

Maps tag names to imported component classes. HTML parsing lowercases tag
names, so a document tag <datepicker> cannot be matched to DatePicker
directly; instead every capitalized binding imported by the document's
scripts is registered under its lowercase form:

    import {DatePicker} from 'overture/views';  ->  'datepicker' -> 'DatePicker'

The convention is a heuristic: a component class and any other capitalized
import with the same lowercase spelling are indistinguishable. When two
imports collide, the later one wins.

The module also folds imports of the same source into one statement and
guarantees the output module imports the element primitive (el from
overture/dom) exactly once.
"""

import re
from typing import Dict, List, Optional

from ..config import appsettings, AppSettings
from ..models.program import ImportDeclaration, ImportSpecifier, Program
from .log import LOG


CAPITALIZED = re.compile(r'^[A-Z]')


class ImportRegistry:
    """
    Lowercase tag name -> imported identifier

    Built once per compilation from the output module and read-only after
    that; pass it explicitly to the node classifier.
    """

    def __init__(self) -> None:
        self.table: Dict[str, str] = {}

    @classmethod
    def program_scan(cls, program: Program) -> "ImportRegistry":
        """
        Build a registry from a program's top-level imports

        Args:
            program: Output module after script extraction

        Returns:
            Registry with one entry per capitalized local binding
        """
        registry = cls()
        for declaration in program.imports_get():
            for specifier in declaration.specifiers:
                registry.specifier_register(specifier)
        LOG(f"Registered {len(registry)} component names", level=2)
        return registry

    def specifier_register(self, specifier: ImportSpecifier) -> None:
        name = specifier.local
        if not CAPITALIZED.match(name):
            return
        self.table[name.lower()] = name

    def get(self, tag_name: str) -> Optional[str]:
        """
        Resolve a tag name to an imported identifier

        Args:
            tag_name: Tag as it appears in the document (any case)

        Returns:
            Identifier, or None if no capitalized import matches
        """
        return self.table.get(tag_name.lower())

    def __contains__(self, tag_name: str) -> bool:
        return tag_name.lower() in self.table

    def __len__(self) -> int:
        return len(self.table)


def declarations_mergeable(first: ImportDeclaration, second: ImportDeclaration) -> bool:
    """
    Check whether two imports from one module fit in a single statement

    One statement holds at most one default binding and at most one
    namespace binding, and a namespace binding cannot sit next to named
    bindings.
    """
    combined = first.specifiers + [s for s in second.specifiers if s not in first.specifiers]
    defaults = {s.local for s in combined if s.kind == 'default'}
    namespaces = {s.local for s in combined if s.kind == 'namespace'}
    named = any(s.kind == 'named' for s in combined)
    return len(defaults) <= 1 and len(namespaces) <= 1 and not (namespaces and named)


def imports_merge(program: Program) -> int:
    """
    Fold imports of the same module into the first one

    Imports are hoisted, so moving a binding to an earlier statement does
    not change the module. The only pair left as two statements is a
    namespace binding next to named bindings, which one statement cannot
    express.

        import {A} from './ui.js';       ->  import {A, B} from "./ui.js";
        const n = 1;                         const n = 1;
        import {B} from './ui.js';

    Args:
        program: Output module after script extraction

    Returns:
        Number of import statements removed
    """
    seen: Dict[str, List[ImportDeclaration]] = {}
    body = []
    merged = 0
    for node in program.body:
        if isinstance(node, ImportDeclaration):
            target = next(
                (d for d in seen.get(node.source, []) if declarations_mergeable(d, node)), None
            )
            if target is not None:
                added = [s for s in node.specifiers if s not in target.specifiers]
                if added:
                    target.specifiers.extend(added)
                    target.raw = None
                merged += 1
                continue
            seen.setdefault(node.source, []).append(node)
        body.append(node)
    program.body = body
    if merged:
        LOG(f"Merged {merged} import statements into earlier imports of the same module", level=3)
    return merged


def elementImport_ensure(program: Program, settings: AppSettings = appsettings) -> ImportDeclaration:
    """
    Make sure the program imports the element primitive

    If an import from the element module already exists, the primitive is
    added to its named specifiers unless it is already bound under its own
    name. Namespace imports (import * as dom) cannot take named specifiers
    and are skipped. Without a usable import, a new declaration is
    prepended to the module body.

    Args:
        program: Output module
        settings: Element module and primitive name

    Returns:
        The declaration that now imports the primitive
    """
    module = settings.element_module
    factory = settings.element_factory

    candidates = [
        declaration for declaration in program.imports_get()
        if declaration.source == module and not declaration.namespace_has()
    ]
    for declaration in candidates:
        if declaration.named_has(factory, local=factory):
            return declaration
    if candidates:
        LOG(f"Adding {factory} to existing import from '{module}'", level=3)
        candidates[0].named_add(factory)
        return candidates[0]

    declaration = ImportDeclaration(
        source=module,
        specifiers=[ImportSpecifier(kind='named', local=factory, imported=factory)],
    )
    program.body.insert(0, declaration)
    LOG(f"Prepended import of {factory} from '{module}'", level=3)
    return declaration
