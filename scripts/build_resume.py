#!/usr/bin/env python3
"""
Resume Build CLI

Builds the resume website and ATS-optimized PDF from the JSON data file.

Commands:
    build - Full build: static assets, website, print template and PDF
    pdf   - Generate only the PDF
    watch - Build, then rebuild on changes while serving dist/

Examples:\n

    build_resume.py build                                    # Full build

    build_resume.py pdf                                      # PDF from data file

    build_resume.py pdf --html dist/resume-template.html     # PDF from existing template

    build_resume.py watch --port 3000                        # Watch and serve on :3000
"""

import asyncio
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from vitae.contexts.building import (
    BuildCoordinator,
    BuildPaths,
    FileWatcher,
    PreviewServer,
    build_pdf_only,
    build_site,
    default_watch_patterns,
)
from vitae.contexts.building.logger import setup_build_logger
from vitae.contexts.building.preview_server import PREVIEW_PORT
from vitae.contexts.building.watcher import WATCH_INTERVAL_S
from vitae.exceptions import VitaeError
from vitae.utils.timestamp import format_elapsed, now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def display_path(path: Path, root: Path) -> str:
    """Return path relative to the project root for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(root))
    except ValueError:
        return str(path)


def _start_session(command: str, project_root: Optional[Path], verbose: bool = False) -> BuildPaths:
    paths = BuildPaths.from_env(project_root)
    log_dir = LOGS_PATH if LOGS_PATH.is_absolute() else paths.project_root / LOGS_PATH
    setup_build_logger(
        log_dir=log_dir / f"{command}_{now()}",
        data_file=paths.data_file,
        dist_dir=paths.dist_dir,
        command=command,
        verbose=verbose,
    )
    return paths


def _fail(error: Exception) -> None:
    typer.secho(f"\n✗ {type(error).__name__}: {error}\n", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


ProjectRootOption = Annotated[
    Optional[Path],
    typer.Option(
        "--project-root",
        "-r",
        help="Project root containing data/ and static assets (default: PROJECT_ROOT or cwd)",
        file_okay=False,
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show DEBUG log lines on the console"),
]


app = typer.Typer(
    help="Build the resume website and ATS-optimized PDF from resume data",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(project_root: ProjectRootOption = None, verbose: VerboseOption = False):
    """
    Run the full build.

    Copies static assets, renders index.html, resume-template.html and
    site.webmanifest, then prints the PDF into dist/generated-pdf/.

    Examples:\n

        $ build_resume.py build

        $ build_resume.py build --project-root ~/site --verbose
    """
    paths = _start_session("build", project_root, verbose)
    typer.secho("\nBuilding resume site and PDF", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"Data: {display_path(paths.data_file, paths.project_root)}")
    typer.echo("")

    try:
        result = asyncio.run(build_site(paths))
    except (VitaeError, OSError) as e:
        _fail(e)

    typer.echo("")
    typer.secho(
        f"✓ Build completed in {format_elapsed(result.time_s)}", fg=typer.colors.GREEN, bold=True
    )
    typer.echo(f"  Website: {display_path(result.website_path, paths.project_root)}")
    typer.echo(f"  PDF template: {display_path(result.print_path, paths.project_root)}")
    typer.echo(f"  PDF: {display_path(result.pdf.pdf_path, paths.project_root)}")
    if result.pdf.page_count is not None:
        typer.echo(f"  Pages: {result.pdf.page_count}")
    typer.echo("")
    raise typer.Exit(code=0)


@app.command("pdf")
def pdf_command(
    html: Annotated[
        Optional[Path],
        typer.Option(
            "--html",
            help="Print this HTML file instead of regenerating the template from data",
            dir_okay=False,
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="PDF output path (default: dist/generated-pdf/<Name>_Resume.pdf)",
            dir_okay=False,
        ),
    ] = None,
    project_root: ProjectRootOption = None,
    verbose: VerboseOption = False,
):
    """
    Generate only the PDF.

    Examples:\n

        $ build_resume.py pdf

        $ build_resume.py pdf --html dist/resume-template.html -o resume.pdf
    """
    paths = _start_session("pdf", project_root, verbose)
    typer.secho("\nGenerating PDF", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        result = asyncio.run(build_pdf_only(paths, html_path=html, output_path=output))
    except (VitaeError, OSError) as e:
        _fail(e)

    typer.echo("")
    typer.secho("✓ PDF generated", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {display_path(result.pdf_path, paths.project_root)}")
    typer.echo(f"  Size: {result.size_kb} KB")
    typer.echo("")
    raise typer.Exit(code=0)


async def _watch(paths: BuildPaths, port: int, serve: bool, interval: float) -> None:
    coordinator = BuildCoordinator(lambda: build_site(paths))
    watcher = FileWatcher(
        default_watch_patterns(paths.project_root, paths.data_file),
        on_change=lambda changed: coordinator.trigger(),
        interval_s=interval,
        exclude=[paths.dist_dir],
    )
    server = PreviewServer(paths.dist_dir, port=port) if serve else None

    coordinator.trigger()
    await coordinator.wait_until_idle()

    try:
        if server:
            url = server.start()
            typer.secho(f"\nServing {url}", fg=typer.colors.GREEN, bold=True)
        typer.echo("Watching for changes (Ctrl+C to stop)\n")
        await watcher.run()
    finally:
        coordinator.cancel_follow_up()
        if server:
            server.stop()


@app.command("watch")
def watch_command(
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Preview server port", min=0, max=65535),
    ] = PREVIEW_PORT,
    no_serve: Annotated[
        bool,
        typer.Option("--no-serve", help="Rebuild on changes without serving dist/"),
    ] = False,
    interval: Annotated[
        float,
        typer.Option("--interval", "-i", help="Seconds between change scans", min=0.05),
    ] = WATCH_INTERVAL_S,
    project_root: ProjectRootOption = None,
    verbose: VerboseOption = False,
):
    """
    Build, then rebuild whenever data, templates or sources change.

    Builds never overlap: changes saved during a build collapse into a single
    follow-up build. Failed builds are logged and watching continues.

    Examples:\n

        $ build_resume.py watch

        $ build_resume.py watch --no-serve --interval 1
    """
    paths = _start_session("watch", project_root, verbose)
    typer.secho("\nWatch mode", fg=typer.colors.BLUE, bold=True)

    try:
        asyncio.run(_watch(paths, port=port, serve=not no_serve, interval=interval))
    except KeyboardInterrupt:
        typer.echo("\nStopping watcher...")
    except OSError as e:
        _fail(e)

    raise typer.Exit(code=0)


if __name__ == "__main__":
    app()
