"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the CLI pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the conversion progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, expectedFile,
          urlBase, imgBase
        - env_check: inputSourceFile, expectedSourceFile, htmlOutputFile, envOK
        - source_read: markupSource
        - markup_parse: parseResult
        - html_write: matchesExpected
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the Creole source file
        outputdir: Directory the HTML output is written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Creole source filename (relative to inputdir)
        expectedFile: Optional expected HTML filename (relative to inputdir)
        urlBase: Base URL for wiki links
        imgBase: Base URL for images
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the Creole source file
        expectedSourceFile: Resolved path to the expected HTML, if any
        htmlOutputFile: Path the rendered HTML is written to
        markupSource: Creole text read from inputSourceFile
        parseResult: ParseResult returned by the parser
        matchesExpected: Comparison outcome, None when nothing to compare
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    expectedFile: Optional[str] = field(default=None)
    urlBase: str = field(default="")
    imgBase: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    expectedSourceFile: Optional[Path] = field(default=None)
    htmlOutputFile: Path = field(default=Path("/"))
    markupSource: Optional[str] = field(default=None)
    parseResult: Optional[Any] = field(default=None)  # ParseResult at runtime
    matchesExpected: Optional[bool] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (inputFile, expectedFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep CLI options that ProgramState knows about
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

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            markup_parse,
            html_write,
            results_report
        )

    This is equivalent to:
        results_report(html_write(markup_parse(source_read(env_check(initial_state)))))
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
