"""
Command-line interface for the import graph.

Provides commands for building dependency graphs and querying
ancestors, descendants, cycles and build order.
"""

import json
import re
import sys
from pathlib import Path

import click

from importgraph import __version__
from importgraph.utils.logging_config import setup_logging


def graph_options(func):
    """Attach the options shared by every graph-building command."""
    options = [
        click.option(
            "--load-path", "-l",
            "load_paths",
            multiple=True,
            type=click.Path(file_okay=False),
            help="Directory to resolve references from (repeatable)"
        ),
        click.option(
            "--extension", "-e",
            "extensions",
            multiple=True,
            help="Accepted file extension, in order of preference (repeatable)"
        ),
        click.option(
            "--prefix",
            "extension_prefixes",
            multiple=True,
            help="Only scan files named *<prefix>.<extension> (repeatable)"
        ),
        click.option(
            "--pattern", "-p",
            type=click.Choice(["js", "es6", "scss", "commonjs"]),
            help="Reference syntax to extract"
        ),
        click.option(
            "--custom-pattern",
            help="Custom regular expression; its last group holds the quoted references"
        ),
        click.option(
            "--include",
            multiple=True,
            help="Only keep files whose path contains this text (repeatable)"
        ),
        click.option(
            "--exclude",
            multiple=True,
            help="Never expand files whose path contains this text (repeatable)"
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build(ctx, entry, load_paths, extensions, extension_prefixes, pattern,
           custom_pattern, include, exclude):
    """Apply command-line overrides to the configuration and build the graph."""
    from importgraph.core.config import Config, GraphOptions
    from importgraph.engine import ImportGraphEngine

    config = Config.get()
    current = config.graph

    dependency_pattern = current.dependency_pattern
    if custom_pattern:
        try:
            dependency_pattern = re.compile(custom_pattern)
        except re.error as e:
            raise click.BadParameter(str(e), param_hint="--custom-pattern")
    elif pattern:
        dependency_pattern = pattern

    config.graph = GraphOptions(
        load_paths=list(load_paths) or current.load_paths,
        extensions=list(extensions) or current.extensions,
        extension_prefixes=list(extension_prefixes) or current.extension_prefixes,
        dependency_pattern=dependency_pattern,
        include=list(include) or current.include,
        exclude=list(exclude) or current.exclude,
        relative_parents=current.relative_parents,
    )

    try:
        return ImportGraphEngine(config).build(entry)
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        if ctx.obj.get("verbose"):
            import traceback
            traceback.print_exc()
        sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose output"
)
@click.option(
    "--log-file",
    type=click.Path(),
    help="Path to log file"
)
@click.option(
    "--config", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON configuration file"
)
@click.pass_context
def cli(ctx, verbose, log_file, config_path):
    """
    Import Graph

    Build file dependency graphs from import statements and walk
    their ancestors and descendants.
    """
    from importgraph.core.config import Config

    ctx.ensure_object(dict)

    if config_path:
        config = Config.load_from_file(config_path)
    else:
        config = Config.load_from_env()

    verbose = verbose or config.verbose
    ctx.obj["verbose"] = verbose

    log_level = "DEBUG" if verbose else config.log_level
    log_file = log_file or config.log_file
    try:
        setup_logging(level=log_level, log_file=Path(log_file) if log_file else None)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("entry")
@graph_options
@click.option(
    "--format", "-f",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format"
)
@click.pass_context
def graph(ctx, entry, format, **options):
    """
    Build the dependency graph of ENTRY.

    ENTRY can be a file, a directory or a glob pattern.

    Examples:

        importgraph graph ./src -e js -e jsx

        importgraph graph "styles/**/*.scss" -p scss -f json
    """
    dependency_graph = _build(ctx, entry, **options)

    if format == "json":
        click.echo(json.dumps(dependency_graph.to_dict(), indent=2))
        return

    for node in dependency_graph:
        if not node.processed:
            continue
        click.echo(node.path)
        for child in node.children:
            click.echo(f"  -> {child}")

    stats = dependency_graph.get_statistics()
    click.echo("=" * 60)
    click.echo(f"Files: {stats['node_count']}  Edges: {stats['edge_count']}")


@cli.command()
@click.argument("entry")
@click.argument("file")
@graph_options
@click.pass_context
def ancestors(ctx, entry, file, **options):
    """List every file that transitively imports FILE."""
    dependency_graph = _build(ctx, entry, **options)
    _walk(dependency_graph.visit_ancestors, file)


@cli.command()
@click.argument("entry")
@click.argument("file")
@graph_options
@click.pass_context
def descendants(ctx, entry, file, **options):
    """List every file that FILE transitively imports."""
    dependency_graph = _build(ctx, entry, **options)
    _walk(dependency_graph.visit_descendants, file)


def _walk(visit, file):
    from importgraph.core.exceptions import NodeNotFoundError

    try:
        visit(file, click.echo)
    except NodeNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("entry")
@graph_options
@click.option(
    "--fail-on-cycles",
    is_flag=True,
    help="Exit with status 1 when a cycle is found"
)
@click.pass_context
def cycles(ctx, entry, fail_on_cycles, **options):
    """
    List import cycles in the graph of ENTRY.

    With --fail-on-cycles the command works as a lint check for CI.
    """
    dependency_graph = _build(ctx, entry, **options)
    found = dependency_graph.find_cycles()

    if not found:
        click.echo("No cycles found")
        return

    for cycle in found:
        click.echo(" -> ".join(cycle + cycle[:1]))
    if fail_on_cycles:
        sys.exit(1)


@cli.command()
@click.argument("entry")
@graph_options
@click.pass_context
def order(ctx, entry, **options):
    """Print files so that dependencies come before their dependents."""
    from importgraph.core.exceptions import CyclicDependencyError

    dependency_graph = _build(ctx, entry, **options)
    try:
        for path in dependency_graph.build_order():
            click.echo(path)
    except CyclicDependencyError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output", "-o",
    type=click.Path(),
    default="importgraph.json",
    help="Output path for configuration file"
)
def init(output):
    """
    Initialize configuration file.

    Creates a default configuration file that can be customized.
    """
    from importgraph.core.config import Config

    Config.save_to_file(output)
    click.echo(f"Configuration saved to: {output}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
