#!/usr/bin/env python3
"""
overmark - Markdown to Overture draw-module compiler

Compiles Markdown pages into JavaScript modules for the Overture UI
runtime. Each page becomes a module exporting draw(ctx), which builds the
page's element tree when called.

Markup features:
    - Plain Markdown and inline HTML become el(tag, props, children) calls
    - <script type="module"> blocks become the module's own statements
    - Tags matching an imported capitalized name become `new Component({...})`
    - {expression} in text or attribute values is evaluated at draw time

Usage:
    overmark inputdir/ outputdir/ --inputFile page.md

    Without --inputFile, every document matching --pattern below inputdir
    is compiled; output keeps the relative path with a .js suffix.

Examples:
    # Single document
    overmark docs/ build/ --inputFile guide.md

    # Whole tree, verbose
    overmark docs/ build/ --pattern '**/*.md' -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import Compiler, CompileError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
  overmark
  --------
  Markdown to Overture draw modules
"""

# Define CLI arguments
parser = ArgumentParser(
    description="overmark - compile Markdown pages to Overture draw modules",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile",
    default="",
    type=str,
    help="Single Markdown file to compile (relative to inputdir); default: all files matching --pattern",
)

parser.add_argument(
    "--pattern",
    default="**/*.md",
    type=str,
    help="Glob (relative to inputdir) selecting documents when --inputFile is not given",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the compiled modules",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve all file paths.

    Resolves the documents to compile and creates the output directory.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - inputSourceFiles: Documents to compile
            - moduleOutputdir: Created output directory path
            - envOK: True if environment is valid

    Exits:
        1 if the input file does not exist or no documents were found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputFile:
        input_file = state.inputdir / state.inputFile
        if not input_file.is_file():
            print(f"Error: Input file not found: {input_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.inputSourceFiles = [input_file]
    else:
        state.inputSourceFiles = sorted(
            path for path in state.inputdir.glob(state.pattern)
            if path.is_file() and appsettings.sourcePath_matches(path.name)
        )

    if not state.inputSourceFiles:
        print(f"Error: No documents matching '{state.pattern}' in {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Found {len(state.inputSourceFiles)} document(s)", level=2)

    state.moduleOutputdir = state.outputdir / state.outputSubdir
    state.moduleOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.moduleOutputdir}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read every document to compile.

    Args:
        inputstate: Program state with inputSourceFiles set

    Returns:
        ProgramState with added field:
            - sources: Document text keyed by input path

    Exits:
        1 if a file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source files...", level=1)

    sources = {}
    for path in state.inputSourceFiles:
        try:
            sources[path] = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error reading input file {path}: {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Read {len(sources[path])} characters from {path.name}", level=2)

    state.sources = sources
    return state


def outputPath_make(state: ProgramState, source_path: Path) -> Path:
    """Output module path: same relative location, output suffix"""
    relative = source_path.relative_to(state.inputdir)
    return state.moduleOutputdir / relative.with_suffix(appsettings.output_suffix)


def code_highlight(code: str) -> str:
    """Colorize generated JavaScript for terminal display"""
    from pygments import highlight
    from pygments.lexers import JavascriptLexer
    from pygments.formatters import TerminalFormatter

    return highlight(code, JavascriptLexer(), TerminalFormatter())


def module_compile(inputstate: ProgramState) -> ProgramState:
    """
    Compile every document to a JavaScript module.

    A document that fails to compile is reported and skipped; the remaining
    documents are still compiled.

    Args:
        inputstate: Program state with sources

    Returns:
        ProgramState with added field:
            - compileResult: Dict containing:
                - written: List[str] of generated module paths
                - failed: Dict[str, str] of input path -> error message
    """

    state = inputstate.copy()

    LOG("Compiling documents...", level=1)

    written = []
    failed = {}
    for source_path, source in (state.sources or {}).items():
        compiler = Compiler(source, appsettings, name=str(source_path))
        try:
            code = compiler.compile()
        except CompileError as e:
            print(f"Compilation error in {source_path}:\n{e}", file=sys.stderr)
            failed[str(source_path)] = str(e)
            continue

        output_path = outputPath_make(state, source_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(code, encoding="utf-8")
        written.append(str(output_path))

        stats = compiler.stats_get()
        LOG(
            f"Wrote {output_path} ({stats['statements']} statements, "
            f"{stats['components']} component names)",
            level=2,
        )
        if state.verbosity >= 3:
            LOG("\n" + code_highlight(code), level=3)

    state.compileResult = {"written": written, "failed": failed}
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results to user.

    Args:
        inputstate: Program state with compileResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if compileResult is missing or any document failed
    """
    state: ProgramState = inputstate.copy()
    if state.compileResult is None:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    written = state.compileResult["written"]
    failed = state.compileResult["failed"]

    LOG(f"\n✓ Compiled {len(written)} module(s)", level=1)
    for path in written:
        LOG(f"  {path}", level=2)

    if failed:
        print(f"Error: {len(failed)} document(s) failed to compile", file=sys.stderr)
        for path in failed:
            print(f"  {path}", file=sys.stderr)
        sys.exit(1)
    return state


@chris_plugin(
    parser=parser,
    title="overmark - Markdown to Overture draw modules",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile Markdown documents to draw modules.

    Orchestrates the full compilation pipeline:
        1. env_check: Resolve documents and output directory
        2. source_read: Read every document
        3. module_compile: Compile each document to a module
        4. results_report: Display results, fail if any document failed

    Args:
        options: CLI arguments from argparse
        inputdir: Directory containing Markdown documents
        outputdir: Directory where modules will be written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )
    if appsettings.debug_mode:
        state.verbosity = max(state.verbosity, 3)

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, module_compile, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
