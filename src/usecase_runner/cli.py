"""Command-line interface for the usecase runner.

Build tools call ``usecase-runner run <manifest>``; the other commands are
for inspecting what a run would see.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.theme import Theme

from . import __version__
from .config import apply_overrides, load_manifest, log_level
from .errors import ConfigurationError, ExecutionFailure, UsecaseRunnerError
from .models import InvocationResult, Scope
from .utils.logger import setup_logging

custom_theme = Theme({
    "info": "cyan",
    "warning": "yellow",
    "error": "red bold",
    "success": "green bold",
    "muted": "dim",
})

console = Console(theme=custom_theme)
app = typer.Typer(
    name="usecase-runner",
    help="Run a rewrite use case over a project using its own resolved dependencies",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[info]usecase-runner[/info] v{__version__}")
        raise typer.Exit()


@app.callback()
def default_command(
    version: Optional[bool] = typer.Option(
        None,
        "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Run rewrite use cases from a build."""


def _load_context(manifest: str, **overrides):
    try:
        return apply_overrides(load_manifest(Path(manifest)), **overrides)
    except ConfigurationError as e:
        console.print(f"[error]Configuration error:[/error] {e}")
        raise typer.Exit(1)


@app.command()
def run(
    manifest: str = typer.Argument(
        ...,
        help="Path to the YAML build manifest",
    ),
    usecase: Optional[str] = typer.Option(
        None,
        "--usecase", "-u",
        help="Fully qualified use case class (overrides the manifest)",
    ),
    engine: Optional[str] = typer.Option(
        None,
        "--engine", "-e",
        help="Rewrite engine entry point (overrides the manifest)",
    ),
    skip: Optional[bool] = typer.Option(
        None,
        "--skip/--no-skip",
        help="Skip the run entirely",
    ),
    level: Optional[str] = typer.Option(
        None,
        "--log-level", "-l",
        help="Log level (default: USECASE_RUNNER_LOG_LEVEL or INFO)",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Suppress progress and result output",
    ),
) -> None:
    """Run a use case over the project described by MANIFEST.

    Examples:
        usecase-runner run build/usecase.yaml
        usecase-runner run build/usecase.yaml -u my_refactors.RenameLogger
    """
    from .orchestrator import RefactorInvocation

    setup_logging(level=(level or log_level()).upper())
    context = _load_context(manifest, usecase=usecase, engine=engine, skip=skip)

    try:
        if quiet:
            result = RefactorInvocation(context=context).execute()
        else:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console,
            ) as progress:
                task = progress.add_task("Running use case...", total=6)

                def on_progress(message: str, current: int, total: int) -> None:
                    progress.update(task, completed=current, description=message)

                result = RefactorInvocation(context=context, on_progress=on_progress).execute()
    except ExecutionFailure as e:
        _show_failure(e)
        raise typer.Exit(1)

    if not quiet:
        _show_result(result)


@app.command()
def classpath(
    manifest: str = typer.Argument(
        ...,
        help="Path to the YAML build manifest",
    ),
    scope: str = typer.Option(
        Scope.TEST.value,
        "--scope", "-s",
        help="Dependency scope to resolve",
    ),
) -> None:
    """Show the classpath a run would hand to the engine.

    Nothing is imported; entries under the build directory are shown as removed.
    """
    from .classpath import ArtifactClasspathResolver, partition, unique_entries

    context = _load_context(manifest)
    selected = Scope.parse(scope)
    if selected is None:
        console.print(f"[error]Unknown scope:[/error] {scope}")
        raise typer.Exit(1)

    locations = ArtifactClasspathResolver().resolve(context.artifacts, selected)
    candidates = unique_entries([*locations, *context.classpath_elements])
    kept, removed = partition(candidates, context.build_directory)

    table = Table(title=f"Classpath ({selected.value})", show_header=True, header_style="bold cyan")
    table.add_column("Entry")
    table.add_column("Status", style="dim")

    for entry in candidates:
        status = "[warning]removed[/warning]" if entry in removed else "[success]kept[/success]"
        table.add_row(entry, status)

    console.print(table)
    console.print(f"[muted]{len(kept)} kept, {len(removed)} removed (build directory: {context.build_directory})[/muted]")


@app.command()
def strategies(
    manifest: str = typer.Argument(
        ...,
        help="Path to the YAML build manifest",
    ),
) -> None:
    """List use cases registered as entry points on the project's test dependencies."""
    from .classpath import ArtifactClasspathResolver, ClassRealm, RuntimeClasspathInjector
    from .strategy import StrategyRegistry

    context = _load_context(manifest)
    realm = ClassRealm()
    try:
        RuntimeClasspathInjector(realm).inject(
            ArtifactClasspathResolver().resolve(context.artifacts, context.scope)
        )
    except UsecaseRunnerError as e:
        console.print(f"[error]Error:[/error] {e}")
        raise typer.Exit(1)

    registry = StrategyRegistry(realm)
    registry.scan()
    names = registry.names()

    if not names:
        console.print("[warning]No registered use cases found[/warning]")
        return

    table = Table(title="Registered Use Cases", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Target", style="dim")

    for name in names:
        table.add_row(name, registry.get(name).target)

    console.print(table)


def _show_failure(error: ExecutionFailure) -> None:
    """Display a failed invocation."""
    body = f"[error]{error.message}[/error]"
    if error.cause is not None:
        body += f"\n[muted]Caused by {type(error.cause).__name__}[/muted]"
    console.print(Panel(body, title=f"FAILED at {error.stage}", border_style="error"))


def _show_result(result: InvocationResult) -> None:
    """Display invocation result in a formatted table."""
    if result.skipped:
        console.print("[muted]Skipped (skip flag is set)[/muted]")
        return

    console.print()
    console.print(Panel("[success]SUCCESS[/success]", title="Use Case Result", border_style="success"))

    table = Table(title="Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="dim")
    table.add_column("Value")

    table.add_row("Use case", result.usecase or "")
    table.add_row("Stage", result.stage.value)
    table.add_row("Injected locations", str(len(result.injected)))
    table.add_row("Classpath entries", str(len(result.classpath)))
    table.add_row("Removed entries", str(len(result.removed)))

    console.print(table)


def main() -> None:
    """Entry point for the CLI."""
    load_dotenv()
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[warning]Interrupted by user[/warning]")
        sys.exit(130)
    except Exception as e:
        console.print(f"[error]Unexpected error:[/error] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
