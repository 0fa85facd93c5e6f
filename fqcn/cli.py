"""fqcn CLI - Resolve PSR-4 namespaces to directories and constructs."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click

from fqcn.composer.prefix_map import ComposerPrefixMap
from fqcn.config import DEFAULT_EXTENSIONS, DiscoveryConfig, DiscoveryResult
from fqcn.errors import FqcnError
from fqcn.introspection import StaticIntrospector
from fqcn.namespace import Psr4Namespace
from fqcn.output import write_output
from fqcn.pipeline import run_pipeline
from fqcn.resolution.paths import resolve_directories


def _configure_logging(verbose: bool) -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
def cli() -> None:
    """fqcn - Find the classes, interfaces and traits behind a PSR-4 namespace."""
    pass


def _project_options(fn):
    fn = click.option("--no-vendor", is_flag=True, help="Ignore vendor/composer/installed.json")(fn)
    fn = click.option("--no-dev", is_flag=True, help="Ignore autoload-dev prefixes")(fn)
    fn = click.option(
        "-p", "--project", "project",
        default=".", type=click.Path(exists=True, file_okay=False),
        help="Composer project root (directory holding composer.json)",
    )(fn)
    return fn


@cli.command("dirs")
@click.argument("namespace")
@_project_options
@click.option("--json", "as_json", is_flag=True, help="Print the directories as JSON")
def dirs_cmd(namespace: str, project: str, no_dev: bool, no_vendor: bool, as_json: bool) -> None:
    """List the directories a namespace resolves to."""
    _configure_logging(False)
    try:
        provider = ComposerPrefixMap(project, not no_dev, not no_vendor)
        directories = resolve_directories(Psr4Namespace(namespace), provider.get_prefixes_psr4())
    except FqcnError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(directories, indent=2))
    else:
        for directory in directories:
            click.echo(directory)


def _run_with_progress(config: DiscoveryConfig, provider, introspector) -> DiscoveryResult:
    """Run the pipeline with Rich progress display."""
    from rich.console import Console
    from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
    from rich.table import Table

    console = Console()

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Initialising...", total=None)

        def on_phase(name, label):
            progress.update(task, description=label)

        result = run_pipeline(config, provider, introspector, progress_callback=on_phase)

    title = f"Constructs in {config.namespace}"
    if config.instance_of:
        title += f" extending {config.instance_of}"
    table = Table(title=title, show_edge=False)
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    table.add_column("File")

    for construct in result.constructs:
        table.add_row(construct["name"], construct.get("kind") or "", construct.get("file") or "")

    console.print(table)

    if config.verbose:
        timing_table = Table(title="Phase Timings", show_edge=False)
        timing_table.add_column("Phase", style="bold")
        timing_table.add_column("Time (ms)", justify="right")
        for phase, seconds in result.metadata.get("phase_timings", {}).items():
            timing_table.add_row(phase, f"{seconds * 1000:.1f}")
        console.print(timing_table)

    return result


@cli.command("classes")
@click.argument("namespace")
@_project_options
@click.option("-i", "--instance-of", default=None, help="Only constructs extending or implementing this type")
@click.option("--ext", "extensions", multiple=True, help="Source file extension (repeatable, default .php)")
@click.option("-o", "--output", "output_path", default=None, help="Output JSON file path")
@click.option("--json", "as_json", is_flag=True, help="Print the construct names as JSON")
@click.option("--verbose", is_flag=True, help="Show debug logging and per-phase timings")
@click.option("--quiet", is_flag=True, help="Suppress all output except errors")
def classes_cmd(
    namespace: str,
    project: str,
    no_dev: bool,
    no_vendor: bool,
    instance_of: str | None,
    extensions: tuple[str, ...],
    output_path: str | None,
    as_json: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Find the classes, interfaces, traits and enums declared under a namespace."""
    _configure_logging(verbose)

    config = DiscoveryConfig(
        project_root=str(Path(project).resolve()),
        namespace=namespace,
        instance_of=instance_of,
        extensions=[e if e.startswith(".") else f".{e}" for e in extensions] or list(DEFAULT_EXTENSIONS),
        include_dev=not no_dev,
        include_vendor=not no_vendor,
        output_path=output_path,
        verbose=verbose,
        quiet=quiet,
    )

    try:
        provider = ComposerPrefixMap(config.project_root, config.include_dev, config.include_vendor)
        introspector = StaticIntrospector(provider, config.extensions)
        if quiet or as_json:
            result = run_pipeline(config, provider, introspector)
        else:
            result = _run_with_progress(config, provider, introspector)
    except FqcnError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps([c["name"] for c in result.constructs], indent=2))

    if output_path:
        write_output(result, output_path)
        if not quiet and not as_json:
            from rich.console import Console
            Console().print(f"[green]Output written to:[/green] {output_path}")


if __name__ == "__main__":
    cli()
