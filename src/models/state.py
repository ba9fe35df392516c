"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, pattern, outputSubdir
        - env_check: inputSourceFiles, moduleOutputdir, envOK
        - source_read: sources
        - module_compile: compileResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing source .md files
        outputdir: Base output directory for compiled modules
        verbosity: Logging verbosity level (1-3)
        inputFile: Single input file (relative to inputdir); empty means
                   every file matching pattern
        pattern: Glob used to find documents when inputFile is empty
        outputSubdir: Subdirectory within outputdir for output
        envOK: Environment validation passed
        inputSourceFiles: Resolved paths of documents to compile
        moduleOutputdir: Final output directory (outputdir + outputSubdir)
        sources: Document text keyed by input path
        compileResult: Compilation results (written, failed, modules)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    pattern: str = field(default="**/*.md")
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFiles: List[Path] = field(default_factory=list)
    moduleOutputdir: Path = field(default=Path("/"))
    sources: Optional[Dict[Path, str]] = field(default=None)
    compileResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the compilation pipeline.

        Args:
            options: Parsed CLI arguments (inputFile, pattern, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Unknown CLI options (e.g. chris_plugin's own flags) are ignored
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            module_compile,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
