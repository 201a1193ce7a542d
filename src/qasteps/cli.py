from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import orjson
import typer

from .config import Settings
from .errors import KeywordTableError, StepSourceError
from .logging import set_parse_context, setup_logging
from .parser import StepParser, lint_actions
from .types import KeywordTable, ParsedAction

app = typer.Typer(no_args_is_help=True)


def main() -> None:
    app()


def _read_steps(text: Optional[str], file: Optional[Path]) -> str:
    if file is not None:
        try:
            return file.read_text(encoding="utf-8")
        except OSError as exc:
            raise StepSourceError(f"Cannot read steps from {file}: {exc}") from exc
    if text is not None:
        return text
    if not sys.stdin.isatty():
        return sys.stdin.read()
    raise StepSourceError("Provide step text, --file, or pipe steps on stdin")


def _build_parser(settings: Settings, keywords: Optional[Path], workers: Optional[int]) -> StepParser:
    table = KeywordTable.load(keywords) if keywords is not None else settings.keyword_table()
    return StepParser(table=table, workers=workers or settings.parse_workers)


def _prepare(
    text: Optional[str],
    file: Optional[Path],
    keywords: Optional[Path],
    workers: Optional[int],
) -> tuple[str, StepParser]:
    settings = Settings.from_env()
    settings.ensure_directories()
    setup_logging(settings.log_level, settings.log_dir / "qasteps.log")
    set_parse_context(source=str(file) if file is not None else "inline")
    try:
        raw = _read_steps(text, file)
        parser = _build_parser(settings, keywords, workers)
    except (StepSourceError, KeywordTableError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    return raw, parser


def _dump(payload: object) -> str:
    return orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode()


def _echo_actions(actions: list[ParsedAction]) -> None:
    for index, action in enumerate(actions, start=1):
        typer.echo(f"  #{index} {action.summary()}")
        typer.echo(f"     Step: {action.raw}")


@app.command()
def parse(
    text: Optional[str] = typer.Argument(None, help="Step text; one instruction per line"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read steps from a file"),
    keywords: Optional[Path] = typer.Option(None, help="JSON keyword table overriding the defaults"),
    workers: Optional[int] = typer.Option(None, min=1, help="Parse steps on this many threads"),
    as_json: bool = typer.Option(False, "--json", help="Print parsed actions as JSON"),
) -> None:
    """Parse QA steps into structured browser actions."""

    raw, parser = _prepare(text, file, keywords, workers)
    actions = parser.parse(raw)
    if as_json:
        typer.echo(_dump([action.to_dict() for action in actions]))
        return
    typer.echo(f"Parsed steps: {len(actions)}")
    _echo_actions(actions)


@app.command()
def lint(
    text: Optional[str] = typer.Argument(None, help="Step text; one instruction per line"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read steps from a file"),
    keywords: Optional[Path] = typer.Option(None, help="JSON keyword table overriding the defaults"),
    as_json: bool = typer.Option(False, "--json", help="Print problems as JSON"),
) -> None:
    """Check QA steps for actions the executor could not run."""

    raw, parser = _prepare(text, file, keywords, None)
    problems = lint_actions(parser.parse(raw))
    if as_json:
        typer.echo(_dump([problem.model_dump() for problem in problems]))
    elif not problems:
        typer.echo("No problems found")
    else:
        typer.echo(f"Problems found: {len(problems)}")
        for problem in problems:
            typer.echo(f"  {problem.error}")
            if problem.suggestion:
                typer.echo(f"     Suggestion: {problem.suggestion}")
    if problems:
        raise typer.Exit(code=1)
