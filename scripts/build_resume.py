#!/usr/bin/env python3
"""
Resume Build CLI

Generates the resume PDF(s) and the static website from YAML resume data.

Commands:
    pdf     - Generate one PDF per language (or only --lang)
    website - Generate the static website for every language
    all     - Website first, then PDFs (so PDFs survive the output clearing)
    serve   - Serve the output directory over HTTP

Examples:\n

    build_resume.py pdf                        # All languages

    build_resume.py pdf --lang es              # Spanish only

    build_resume.py --output-dir site all      # Website + PDFs into site/

    build_resume.py serve --port 8000          # Preview the generated site
"""

import functools
import http.server
import os
from pathlib import Path
from typing import List

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.publishing import generate_multi_language_website
from vitae.contexts.publishing.logger import setup_publishing_logger
from vitae.contexts.rendering.logger import setup_rendering_logger
from vitae.contexts.rendering.pdf_generator import RenderResult, generate_multi_language_pdf
from vitae.contexts.templating.exceptions import TemplateError
from vitae.utils import get_lang, now
from vitae.utils.logger import BuildProvenance

load_dotenv()
PROJECT_ROOT = Path(os.getenv("PROJECT_ROOT", Path(__file__).resolve().parents[1]))
DATA_PATH = Path(os.getenv("DATA_PATH", PROJECT_ROOT / "data"))
OUTPUT_PATH = Path(os.getenv("OUTPUT_PATH", PROJECT_ROOT / "public"))
LOGS_PATH = Path(os.getenv("LOGS_PATH", PROJECT_ROOT / "outs" / "logs"))
DEFAULT_THEME = os.getenv("VITAE_THEME", "default")

# Failures reported as a clean CLI error instead of a traceback
EXPECTED_ERRORS = (TemplateError, FileNotFoundError, NotADirectoryError, OSError, ValueError)


def display_path(path: Path) -> str:
    """Return path relative to PROJECT_ROOT for cleaner display."""
    try:
        return str(path.resolve().relative_to(PROJECT_ROOT.resolve()))
    except ValueError:
        return str(path)


app = typer.Typer(
    help="Generate resume PDFs and a static website from YAML resume data",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    data_dir: Annotated[
        Path, typer.Option("--data-dir", "-d", help="Resume data directory")
    ] = DATA_PATH,
    output_dir: Annotated[
        Path, typer.Option("--output-dir", "-o", help="Output directory")
    ] = OUTPUT_PATH,
):
    """Show help by default when no command is provided."""
    ctx.obj = {"data_dir": data_dir, "output_dir": output_dir}
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _report_pdfs(results: List[RenderResult]) -> None:
    for result in results:
        typer.secho(
            f"✓ {display_path(result.pdf_path)} ({result.page_count} pages)",
            fg=typer.colors.GREEN,
        )
        if result.layout.overflowing_rows:
            typer.secho(
                f"  {len(result.layout.overflowing_rows)} rows overflow their declared height",
                fg=typer.colors.YELLOW,
            )


def _fail(error: Exception) -> None:
    typer.secho(f"Error: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


def _build_pdfs(data_dir: Path, output_dir: Path, lang: str, theme: str) -> None:
    provenance = BuildProvenance(theme, data_dir, output_dir, lang)
    log_file = setup_rendering_logger(LOGS_PATH / f"render_{now()}", provenance)
    typer.secho("\nGenerating PDF", fg=typer.colors.BLUE, bold=True)
    try:
        results = generate_multi_language_pdf(data_dir, output_dir, lang, theme)
    except EXPECTED_ERRORS as e:
        _fail(e)
    _report_pdfs(results)
    typer.echo(f"  Log: {display_path(log_file)}")


def _build_website(data_dir: Path, output_dir: Path, theme: str) -> None:
    provenance = BuildProvenance(theme, data_dir, output_dir)
    log_file = setup_publishing_logger(LOGS_PATH / f"publish_{now()}", provenance)
    typer.secho("\nGenerating website", fg=typer.colors.BLUE, bold=True)
    try:
        index_paths = generate_multi_language_website(data_dir, output_dir, theme)
    except EXPECTED_ERRORS as e:
        _fail(e)
    for index_path in index_paths:
        typer.secho(f"✓ {display_path(index_path)}", fg=typer.colors.GREEN)
    typer.echo(f"  Log: {display_path(log_file)}")


@app.command("pdf")
def pdf_command(
    ctx: typer.Context,
    lang: Annotated[
        str,
        typer.Option("--lang", "-l", help="Only render this language (e.g. es, es_ES.UTF-8)"),
    ] = "",
    theme: Annotated[str, typer.Option("--theme", "-t", help="Theme name")] = DEFAULT_THEME,
):
    """
    Generate resume PDFs.

    Examples:\n

        $ build_resume.py pdf                   # Every detected language

        $ build_resume.py pdf --lang es         # Spanish only
    """
    lang = get_lang(lang) if lang else ""
    _build_pdfs(ctx.obj["data_dir"], ctx.obj["output_dir"], lang, theme)


@app.command("website")
def website_command(
    ctx: typer.Context,
    theme: Annotated[str, typer.Option("--theme", "-t", help="Theme name")] = DEFAULT_THEME,
):
    """Generate the static website (clears the output directory first)."""
    _build_website(ctx.obj["data_dir"], ctx.obj["output_dir"], theme)


@app.command("all")
def all_command(
    ctx: typer.Context,
    theme: Annotated[str, typer.Option("--theme", "-t", help="Theme name")] = DEFAULT_THEME,
):
    """Generate the website, then every PDF into its assets."""
    _build_website(ctx.obj["data_dir"], ctx.obj["output_dir"], theme)
    _build_pdfs(ctx.obj["data_dir"], ctx.obj["output_dir"], "", theme)


@app.command("serve")
def serve_command(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", help="Host to bind")] = "localhost",
    port: Annotated[int, typer.Option("--port", "-p", help="Port to serve on")] = 8080,
):
    """Serve the generated website for local preview."""
    output_dir: Path = ctx.obj["output_dir"]
    if not (output_dir / "index.html").is_file():
        typer.secho(
            f"No website found in {display_path(output_dir)}; run 'website' or 'all' first.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1)

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(output_dir))
    typer.secho(f"Serving {display_path(output_dir)} at http://{host}:{port}", fg=typer.colors.BLUE)
    with http.server.ThreadingHTTPServer((host, port), handler) as server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            typer.echo("\nStopped.")


if __name__ == "__main__":
    app()
