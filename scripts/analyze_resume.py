#!/usr/bin/env python3
"""
Resume Analysis CLI

Compares a resume against a job description using the configured analysis
endpoint and prints the markdown report.

Commands:
    analyze - Submit a resume and job description for analysis
    extract - Print the text extracted from a PDF or DOCX resume
    events  - Show recent session events

Examples:\n

    analyze_resume.py analyze --resume cv.pdf --job-file job.txt

    analyze_resume.py analyze --resume-text "$(cat cv.txt)" --job-description "Python dev" --strategy json

    analyze_resume.py analyze --resume cv.docx --job-file job.txt --output report.md

    analyze_resume.py extract cv.pdf

    analyze_resume.py events -n 20
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from resume_improver.contexts.analysis import AnalysisClient, AnalysisSession, get_request_builder
from resume_improver.contexts.analysis.logger import setup_analysis_logger
from resume_improver.contexts.intake import BinaryFile, extract_text
from resume_improver.exceptions import ConfigurationError, ResumeImproverError
from resume_improver.utils.event_logging import get_recent_events
from resume_improver.utils.settings import load_settings
from resume_improver.utils.timestamp import format_timestamp, now

load_dotenv()


app = typer.Typer(
    help="Compare a resume against a job description with the analysis endpoint",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _fail(message: str) -> None:
    typer.secho(f"Error: {message}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


async def _run_session(session: AnalysisSession, resume_file: Optional[Path]) -> None:
    if resume_file is not None:
        error = await session.attach_resume_file(BinaryFile.from_path(resume_file))
        if error:
            _fail(error)
    await session.submit()


@app.command("analyze")
def analyze_command(
    resume_file: Annotated[
        Optional[Path],
        typer.Option("--resume", "-r", help="Resume file (PDF or DOCX)", exists=True, dir_okay=False),
    ] = None,
    resume_text: Annotated[
        Optional[str],
        typer.Option("--resume-text", help="Resume pasted as text (json strategy only)"),
    ] = None,
    job_description: Annotated[
        Optional[str],
        typer.Option("--job-description", "-j", help="Job description text"),
    ] = None,
    job_file: Annotated[
        Optional[Path],
        typer.Option("--job-file", "-f", help="File containing the job description", exists=True, dir_okay=False),
    ] = None,
    strategy: Annotated[
        Optional[str],
        typer.Option("--strategy", "-s", help="Request strategy: 'multipart' or 'json'"),
    ] = None,
    endpoint: Annotated[
        Optional[str],
        typer.Option("--endpoint", "-e", help="Analysis endpoint URL"),
    ] = None,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML settings file"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Also save the report as markdown"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging on the console"),
    ] = False,
):
    """
    Submit a resume and job description for analysis.

    Provide exactly one of --resume / --resume-text and one of
    --job-description / --job-file. The report is printed to stdout as
    markdown; logs go to stderr and the session log directory.

    Examples:\n

        $ analyze_resume.py analyze -r cv.pdf -f job.txt

        $ analyze_resume.py analyze -r cv.pdf -f job.txt --strategy json -o report.md
    """
    if (resume_file is None) == (resume_text is None):
        _fail("Provide exactly one of --resume or --resume-text")
    if (job_description is None) == (job_file is None):
        _fail("Provide exactly one of --job-description or --job-file")

    try:
        settings = load_settings(config_file, endpoint=endpoint, strategy=strategy)
    except ConfigurationError as e:
        _fail(e.message)

    log_dir = Path(settings.logs_path) / f"analyze_{now()}"
    log_file = setup_analysis_logger(log_dir, settings.endpoint, settings.strategy, verbose=verbose)

    session = AnalysisSession(
        builder=get_request_builder(settings.request_strategy, settings.endpoint),
        client=AnalysisClient(timeout=settings.timeout),
        events_file=settings.events_path,
    )
    session.set_job_description(job_file.read_text(encoding="utf-8") if job_file else job_description)
    if resume_text is not None:
        session.set_resume_text(resume_text)

    typer.secho(f"\nAnalyzing with {settings.endpoint} ({settings.strategy})", fg=typer.colors.BLUE, bold=True, err=True)
    asyncio.run(_run_session(session, resume_file))

    state = session.state
    if state.result is None:
        _fail(
            "Nothing was submitted. Pasted text needs the json strategy; "
            "both resume and job description must be non-empty."
        )

    typer.echo(state.result.text)
    if output and state.result.ok:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(state.result.text, encoding="utf-8")
        typer.echo(f"  Saved: {output}", err=True)

    typer.echo(f"  Log: {log_file}", err=True)
    raise typer.Exit(code=0 if state.result.ok else 1)


@app.command("extract")
def extract_command(
    resume_file: Annotated[
        Path,
        typer.Argument(help="Resume file (PDF or DOCX)", exists=True, dir_okay=False),
    ],
):
    """
    Print the text extracted from a resume file.

    Shows exactly what the json strategy would send as resumeText.

    Examples:\n

        $ analyze_resume.py extract cv.pdf
    """
    try:
        text = asyncio.run(extract_text(BinaryFile.from_path(resume_file)))
    except ResumeImproverError as e:
        _fail(e.message)

    if not text.strip():
        typer.secho("No text found (scanned or image-only document?)", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    typer.echo(text)


@app.command("events")
def events_command(
    n: Annotated[int, typer.Option("-n", help="Number of events to show", min=1)] = 10,
    event_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Only show this event type (e.g., 'state_change')"),
    ] = None,
):
    """
    Show recent session events from SESSION_EVENTS_FILE.

    Examples:\n

        $ analyze_resume.py events -n 20 --type input_rejected
    """
    try:
        settings = load_settings()
    except ConfigurationError as e:
        _fail(e.message)

    if settings.events_path is None:
        _fail("SESSION_EVENTS_FILE is not set")

    events = get_recent_events(settings.events_path, n=n, event_type=event_type)
    if not events:
        typer.echo("No events recorded.")
        raise typer.Exit()

    for event in events:
        details = {
            k: v
            for k, v in event.items()
            if k not in ("timestamp", "event_type", "request_id", "source")
        }
        detail_text = ", ".join(f"{k}={v}" for k, v in details.items())
        typer.echo(
            f"{format_timestamp(event.get('timestamp', ''))}  #{event.get('request_id')}  "
            f"{str(event.get('event_type')):<15} {detail_text}"
        )


if __name__ == "__main__":
    app()
