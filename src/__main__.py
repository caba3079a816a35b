#!/usr/bin/env python3
"""
wikicreole - WikiCreole to HTML converter

Command line driver: converts one Creole text file into an HTML fragment
and optionally compares the result against an expected-output fixture.

As with the rest of this codebase, the ChRIS "plugin" pattern is used as a
general purpose CLI framework.

Usage:
    wikicreole inputdir/ outputdir/ --inputFile page.txt

    The rendered HTML is written to outputdir/page.html.

Examples:
    # Basic conversion
    wikicreole . output/ --inputFile CreoleTestInput.txt

    # Wiki links and images under a site prefix
    wikicreole . output/ --inputFile page.txt --urlBase /wiki/ --imgBase /wiki/images/

    # Compare against a fixture, exit 1 on mismatch
    wikicreole . output/ --inputFile CreoleTestInput.txt --expectedFile CreoleTestExpected.html
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import Parser, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
            _ _    _                    _
 __      __(_) | _(_) ___ _ __ ___  ___ | | ___
 \ \ /\ / /| | |/ / |/ __| '__/ _ \/ _ \| |/ _ \
  \ V  V / | |   <| | (__| | |  __/ (_) | |  __/
   \_/\_/  |_|_|\_\_|\___|_|  \___|\___/|_|\___|

  WikiCreole to HTML converter
"""

# Define CLI arguments
parser = ArgumentParser(
    description="wikicreole - convert WikiCreole markup to HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input Creole file (relative to inputdir)"
)

parser.add_argument(
    "--expectedFile",
    default=None,
    type=str,
    help="Expected HTML output (relative to inputdir) to compare the result against",
)

parser.add_argument(
    "--urlBase", default="", type=str, help="Base URL prepended to wiki page links"
)

parser.add_argument(
    "--imgBase", default="", type=str, help="Base URL prepended to image sources"
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

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the Creole input file
            - expectedSourceFile: Resolved path to the expected HTML, if given
            - htmlOutputFile: Path the HTML will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input or expected file is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    if state.expectedFile:
        expected_file = state.inputdir / state.expectedFile
        if not expected_file.exists():
            print(f"Error: Expected file not found: {expected_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.expectedSourceFile = expected_file
        LOG(f"Expected file: {expected_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.htmlOutputFile = state.outputdir / f"{input_file.stem}.html"
    LOG(f"Output file: {state.htmlOutputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the Creole source file.

    Returns:
        ProgramState with added field:
            - markupSource: Text of the input file

    Exits:
        1 if the file cannot be read
    """

    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.markupSource = state.inputSourceFile.read_text(encoding="utf-8")
        LOG(f"Read {len(state.markupSource)} characters from {state.inputSourceFile.name}", level=2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def markup_parse(inputstate: ProgramState) -> ProgramState:
    """
    Convert the Creole source to HTML.

    Returns:
        ProgramState with added field:
            - parseResult: ParseResult with HTML and warnings

    Exits:
        1 if the parser options are invalid
    """

    state = inputstate.copy()

    LOG("Parsing markup...", level=1)

    try:
        creole_parser = Parser(url_base=state.urlBase, img_base=state.imgBase)
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)

    state.parseResult = creole_parser.document_parse(state.markupSource or "")
    LOG(f"Produced {len(state.parseResult.html)} characters of HTML", level=2)
    return state


def html_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the HTML and compare it with the expected output, if any.

    Returns:
        ProgramState with added field:
            - matchesExpected: Comparison outcome, None without a fixture

    Exits:
        1 if the output cannot be written
    """

    state = inputstate.copy()

    try:
        state.htmlOutputFile.write_text(state.parseResult.html, encoding="utf-8")
        LOG(f"Wrote {state.htmlOutputFile}", level=2)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    if state.expectedSourceFile:
        expected = state.expectedSourceFile.read_text(encoding="utf-8")
        state.matchesExpected = state.parseResult.html == expected

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display conversion results to user.

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if the output does not match the expected fixture
    """
    state: ProgramState = inputstate.copy()

    if state.verbosity >= 1:
        LOG(f"  Output: {state.htmlOutputFile}", level=1)
        LOG(f"  Warnings: {len(state.parseResult.warnings)}", level=1)

    if state.matchesExpected is False:
        print("Output differs from expected file", file=sys.stderr)
        sys.exit(1)
    if state.matchesExpected:
        LOG("✓ Output matches expected file", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="wikicreole - WikiCreole to HTML converter",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - convert a Creole file to HTML.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. source_read: Read the Creole file
        3. markup_parse: Convert to HTML
        4. html_write: Write output, compare with fixture
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, markup_parse, html_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
