"""
Command-line interface for way matching.

    way-match pair    --description DESC [--vocabulary VOCAB] --query Q [--threshold T]
    way-match score   --corpus FILE --query Q [--threshold T]
    way-match suggest --file FILE [--min-freq N]

Exit codes:
    0  match found / rows printed / vocabulary gaps found
    1  no result (no match, empty corpus, vocabulary already complete)
    2  usage, input or format error
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

import click
from pydantic import ValidationError

from . import __version__
from .bm25 import Stemmer
from .config import MatchSettings, load_env_files
from .corpus_loader import load_corpus
from .errors import WayMatchError
from .logging_config import setup_logging
from .matching import MatchStatus, match_pair, rank_corpus
from .suggest import SuggestStatus, analyze_file

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_ERROR = 2

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class CliState:
    stemmer: Stemmer


def _settings(**overrides) -> MatchSettings:
    try:
        return MatchSettings.from_env(**overrides)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise click.UsageError(f"invalid settings: {problems}")


def _fail(ctx: click.Context, error: WayMatchError) -> None:
    logger.debug(f"{type(error).__name__}: {error.message}")
    click.echo(f"error: {error.message}", err=True)
    ctx.exit(EXIT_ERROR)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, prog_name="way-match")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Console log level (default: LOG_LEVEL env or WARNING)",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write detailed logs to this file")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str], log_file: Optional[str]):
    """BM25 matcher for ways (named workflow profiles)."""
    load_env_files()
    level_name = (log_level or os.getenv("LOG_LEVEL") or "WARNING").upper()
    setup_logging(console_level=getattr(logging, level_name, logging.WARNING), log_file=log_file)

    # One stemmer per process, released when the command context closes
    stemmer = ctx.with_resource(Stemmer())
    ctx.obj = CliState(stemmer=stemmer)


@cli.command()
@click.option("--description", required=True, help="Way description text")
@click.option("--vocabulary", default="", help="Space-separated domain keywords")
@click.option("--query", required=True, help="User prompt to match against")
@click.option("--threshold", type=float, default=None, help="Minimum score to match (default: 2.0)")
@click.option("--k1", type=float, default=None, help="BM25 k1 parameter (default: 1.2)")
@click.option("--b", "b", type=float, default=None, help="BM25 b parameter (default: 0.75)")
@click.pass_context
def pair(ctx: click.Context, description, vocabulary, query, threshold, k1, b):
    """Score one description + vocabulary against a query.

    Exit 0 if score >= threshold, 1 otherwise.
    """
    settings = _settings(threshold=threshold, k1=k1, b=b)
    result = match_pair(description, vocabulary, query, ctx.obj.stemmer, settings)

    click.echo(result.diagnostic(), err=True)
    ctx.exit(EXIT_OK if result.status is MatchStatus.MATCH else EXIT_NO_RESULT)


@cli.command()
@click.option("--corpus", "corpus_path", required=True, help="Path to JSONL corpus file")
@click.option("--query", required=True, help="User prompt to match against")
@click.option("--threshold", type=float, default=None, help="Default minimum score (default: 2.0)")
@click.option("--k1", type=float, default=None, help="BM25 k1 parameter (default: 1.2)")
@click.option("--b", "b", type=float, default=None, help="BM25 b parameter (default: 0.75)")
@click.pass_context
def score(ctx: click.Context, corpus_path, query, threshold, k1, b):
    """Rank every way in a JSONL corpus against a query.

    Output: id<TAB>score<TAB>description, best first, above threshold only.
    """
    settings = _settings(threshold=threshold, k1=k1, b=b)
    try:
        corpus = load_corpus(corpus_path, ctx.obj.stemmer, settings)
    except WayMatchError as e:
        _fail(ctx, e)

    result = rank_corpus(corpus, query, ctx.obj.stemmer, settings)

    if result.status is MatchStatus.EMPTY_CORPUS:
        click.echo("error: empty corpus", err=True)
        ctx.exit(EXIT_NO_RESULT)

    for row in result.rows:
        click.echo(row.format())

    if result.status is MatchStatus.NO_MATCH:
        click.echo("no matches above threshold", err=True)
        ctx.exit(EXIT_NO_RESULT)
    ctx.exit(EXIT_OK)


@cli.command()
@click.option("--file", "file_path", required=True, help="Path to way.md file")
@click.option("--min-freq", type=int, default=None, help="Minimum term frequency for suggestions (default: 2)")
@click.pass_context
def suggest(ctx: click.Context, file_path, min_freq):
    """Suggest vocabulary additions for a way file.

    Output sections: GAPS, COVERAGE, UNUSED, VOCABULARY (tab-delimited).
    Exit 0 if gaps found, 1 if the vocabulary is complete.
    """
    settings = _settings(min_freq=min_freq)
    try:
        report = analyze_file(file_path, ctx.obj.stemmer, settings=settings)
    except WayMatchError as e:
        _fail(ctx, e)

    for line in report.format_lines():
        click.echo(line)
    click.echo(report.summary(), err=True)

    ctx.exit(EXIT_OK if report.status is SuggestStatus.GAPS_FOUND else EXIT_NO_RESULT)


def main():
    cli(prog_name="way-match")


if __name__ == "__main__":
    main()
