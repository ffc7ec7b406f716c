"""
Command line driver: counts the trigrams of the given files (or of standard input) and prints the most frequent ones.
"""
import logging
import sys
import typing
from pathlib import Path

import typer

from corpus import DEFAULT_ENCODINGS, MISSING, TrigramCorpus
from ranking import REPORT_SIZE

logger = logging.getLogger(__name__)

RUN_ALL_TESTS = "RunAllTests"
TESTS_DIR = Path(__file__).resolve().parent / "tests"

app = typer.Typer(
    name="trigram-freq",
    help="Report the most frequent three word sequences of text files or standard input.",
    add_completion=False,
)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def run_all_tests() -> int:
    """
    Runs the pytest suite next to this file instead of analysing any text
    :return: exit code of pytest
    """
    try:
        import pytest
    except ImportError:
        typer.echo(f"pytest is required for {RUN_ALL_TESTS}, install the 'test' extra")
        return 1

    exit_code = int(pytest.main(["-q", str(TESTS_DIR)]))
    if exit_code == 0:
        typer.echo("All tests passed!")
    return exit_code


def analyse(files: typing.List[str], top: int, encodings: typing.List[str]) -> TrigramCorpus:
    """
    Counts all sources and prints diagnostics for skipped files followed by the report
    :param files: file paths, an empty list reads standard input
    :param top: number of report lines
    :param encodings: encodings to try for every file
    :return: the filled corpus
    """
    corpus = TrigramCorpus(encodings=encodings)
    corpus.set_report_size(top)

    if files:
        corpus.add_files(files)
    else:
        corpus.add_stream(sys.stdin.buffer)

    for path, reason in corpus.get_skipped_files():
        if reason == MISSING:
            typer.echo(f"Could not find file: {path}!")
        else:
            typer.echo(f"Could not decode file: {path}!")

    logger.debug("Counted %d trigrams (%d distinct) from %d sources",
                 corpus.get_trigram_total(), len(corpus.get_table()), len(corpus.get_sources()))

    for line in corpus.report_lines():
        typer.echo(line)
    return corpus


@app.command()
def main(
        files: typing.Annotated[
            typing.Optional[typing.List[str]],
            typer.Argument(help=f"Text files to analyse. Reads standard input if omitted. "
                                f"A single '{RUN_ALL_TESTS}' runs the test suite. "
                                f"Put -- before paths that start with '-'.",
                           show_default=False),
        ] = None,
        top: typing.Annotated[
            int,
            typer.Option("--top", "-n", min=1, max=REPORT_SIZE, help="Number of trigrams to report."),
        ] = REPORT_SIZE,
        encoding: typing.Annotated[
            typing.Optional[typing.List[str]],
            typer.Option("--encoding", "-e", help="Encoding to try for files, repeat for fallbacks.",
                         show_default=", ".join(DEFAULT_ENCODINGS)),
        ] = None,
        verbose: typing.Annotated[
            bool,
            typer.Option("--verbose", "-v", help="Log debug output to stderr."),
        ] = False,
) -> None:
    """
    Main function used for counting the trigrams of all inputs and printing the ranked report
    """
    setup_logging(verbose)
    files = files or []

    if files == [RUN_ALL_TESTS]:
        raise typer.Exit(code=run_all_tests())

    analyse(files, top, encoding or list(DEFAULT_ENCODINGS))


def run() -> None:
    app()


if __name__ == '__main__':
    run()
