#!/usr/bin/env python3
"""
Resume Rendering CLI

Renders a resume file (YAML or JSON) to HTML or PDF and validates exported PDFs.

Commands:
    html     - Compose the self-contained HTML document
    pdf      - Compose and export to PDF through headless Chromium
    validate - Check an exported PDF (signature, page count, expected text)

Examples:\n

    render_resume.py html data/resume.yaml                  # HTML to outs/resume.html

    render_resume.py pdf data/resume.json -o outs/cv.pdf    # Export a PDF

    render_resume.py pdf --example                          # Export the bundled example

    render_resume.py validate outs/cv.pdf --expect "Ada Lovelace"
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from omegaconf import OmegaConf
from typing_extensions import Annotated

from atsresume.contexts.rendering import DocumentExporter, ExportFailedError, validate_pdf
from atsresume.contexts.rendering.logger import setup_rendering_logger
from atsresume.contexts.templating.logger import setup_templating_logger
from atsresume.contexts.templating import (
    InputMalformedError,
    ResumeData,
    TemplateMismatchError,
    build_html,
    load_example_resume,
)
from atsresume.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("ATSRESUME_LOGS_PATH", "outs/logs"))
OUTPUT_PATH = Path(os.getenv("ATSRESUME_OUTPUT_PATH", "outs"))


app = typer.Typer(
    help="Render structured resumes to HTML and PDF",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_resume(resume_file: Optional[Path], example: bool) -> ResumeData:
    if example:
        return load_example_resume()
    if resume_file is None:
        typer.secho("Error: provide a resume file or --example\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    if not resume_file.exists():
        typer.secho(f"Error: file not found: {resume_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    data = OmegaConf.to_container(OmegaConf.load(resume_file), resolve=True)
    return ResumeData.from_dict(data)


def _compose(resume_file: Optional[Path], example: bool) -> tuple:
    try:
        resume = _load_resume(resume_file, example)
        return resume, build_html(resume)
    except (InputMalformedError, TemplateMismatchError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("html")
def html_command(
    resume_file: Annotated[
        Optional[Path], typer.Argument(help="Resume file (.yaml or .json)")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Output HTML path")
    ] = None,
    example: Annotated[
        bool, typer.Option("--example", help="Use the bundled example resume")
    ] = False,
):
    """
    Compose a resume into a self-contained HTML document.

    Examples:\n

        $ render_resume.py html data/resume.yaml

        $ render_resume.py html --example -o outs/example.html
    """
    log_dir = LOGS_PATH / f"template_{now()}"
    setup_templating_logger(log_dir)

    resume, html = _compose(resume_file, example)

    output = output or OUTPUT_PATH / "resume.html"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")

    typer.secho(f"\n✓ HTML written for {resume.name or 'unnamed resume'}", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  HTML: {output} ({len(html)} chars)\n")


@app.command("pdf")
def pdf_command(
    resume_file: Annotated[
        Optional[Path], typer.Argument(help="Resume file (.yaml or .json)")
    ] = None,
    output: Annotated[
        Optional[Path], typer.Option("--output", "-o", help="Output PDF path")
    ] = None,
    example: Annotated[
        bool, typer.Option("--example", help="Use the bundled example resume")
    ] = False,
    wait_until: Annotated[
        str,
        typer.Option(
            "--wait-until",
            help="Content-ready signal: 'networkidle' (waits for late resources) or 'load'",
        ),
    ] = "networkidle",
    timeout_s: Annotated[
        Optional[float],
        typer.Option("--timeout", "-t", help="Deadline for the export in seconds", min=1),
    ] = None,
):
    """
    Export a resume to PDF through headless Chromium.

    Examples:\n

        $ render_resume.py pdf data/resume.json -o outs/cv.pdf

        $ render_resume.py pdf --example --wait-until load
    """
    log_dir = LOGS_PATH / f"render_{now()}"
    setup_rendering_logger(log_dir)

    resume, html = _compose(resume_file, example)

    typer.secho(f"\nExporting: {resume.name or 'unnamed resume'}", fg=typer.colors.BLUE, bold=True)

    try:
        exporter = DocumentExporter(max_concurrent=1, wait_until=wait_until)
        pdf = asyncio.run(exporter.export(html, timeout_s=timeout_s))
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except ExportFailedError as e:
        typer.secho("✗ Export failed", fg=typer.colors.RED, bold=True)
        typer.secho(f"  {e}", fg=typer.colors.RED)
        typer.echo(f"  Log: {log_dir / 'render.log'}\n")
        raise typer.Exit(code=1)

    output = output or OUTPUT_PATH / "cv.pdf"
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(pdf)

    typer.secho("✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {output} ({len(pdf)} bytes)")
    typer.echo(f"  Log: {log_dir / 'render.log'}\n")


@app.command("validate")
def validate_command(
    pdf_file: Annotated[Path, typer.Argument(help="Exported PDF")],
    expect: Annotated[
        Optional[str], typer.Option("--expect", "-e", help="Text that must appear in the PDF")
    ] = None,
):
    """
    Validate an exported PDF.

    Examples:\n

        $ render_resume.py validate outs/cv.pdf --expect "Ada Lovelace"
    """
    if not pdf_file.exists():
        typer.secho(f"Error: file not found: {pdf_file}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    result = validate_pdf(pdf_file.read_bytes(), expected_text=expect)

    if result.is_valid:
        typer.secho("\n✓ Validation passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("\n✗ Validation failed", fg=typer.colors.RED, bold=True)
        for issue in result.issues:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)
    typer.echo(f"  Page count: {result.page_count}\n")

    raise typer.Exit(code=0 if result.is_valid else 1)


if __name__ == "__main__":
    app()
