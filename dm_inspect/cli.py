"""Click CLI with list, diagnose, and serve subcommands."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from dm_inspect import __version__
from dm_inspect.errors import InvalidFilterError, SnapshotError
from dm_inspect.matcher import (
    Matcher,
    parse_id_filter,
    parse_service_filter,
    split_list,
    split_patterns,
)
from dm_inspect.models import ReportOptions
from dm_inspect.registry import StaticRegistry, load_snapshot
from dm_inspect.service import diagnose, list_and_filter

_SNAPSHOT = click.argument(
    "snapshot",
    envvar="DM_INSPECT_SNAPSHOT",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


def _load(snapshot: Path) -> StaticRegistry:
    try:
        return load_snapshot(snapshot)
    except SnapshotError as e:
        raise click.ClickException(str(e))


def _echo_lines(lines: list[str]) -> None:
    for line in lines:
        click.echo(line)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Log resolver progress to stderr")
def cli(verbose: bool):
    """dm-inspect: list registry components and find why they are down."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command(name="list")
@_SNAPSHOT
@click.option("--nodeps", "-nd", is_flag=True, help="Hide component dependencies")
@click.option("--compact", "-cp", is_flag=True, envvar="DM_INSPECT_COMPACT", help="Use the compact form")
@click.option("--notavail", "-na", is_flag=True, help="Only show unavailable components and dependencies")
@click.option("--stats", "-st", is_flag=True, help="Show component statistics")
@click.option("--wtf", is_flag=True, help="Find the root failures instead of listing")
@click.option("--services", "-s", envvar="DM_INSPECT_SERVICES",
              help="Service property filter, e.g. 'objectClass=*.Store region=eu'")
@click.option("--components", "-c", envvar="DM_INSPECT_COMPONENTS",
              help="Regexes on implementation class names (comma separated, '!' negates)")
@click.option("--component-ids", "--cid", "-ci", default="", help="Component ids to show (comma separated)")
@click.option("--bundle-ids", "--bid", "-bi", "-b", default="",
              help="Bundle ids or symbolic names to show (comma separated)")
def list_components(
    snapshot: Path,
    nodeps: bool,
    compact: bool,
    notavail: bool,
    stats: bool,
    wtf: bool,
    services: str | None,
    components: str | None,
    component_ids: str,
    bundle_ids: str,
):
    """List components of a registry snapshot."""
    try:
        options = ReportOptions(
            compact=compact,
            hide_deps=nodeps,
            not_available_only=notavail,
            stats=stats,
            id_filter=parse_id_filter(component_ids),
            service_filter=services,
            name_patterns=split_patterns(components),
            unit_filter=split_list(bundle_ids),
        )
        # reject bad filters before producing any output
        Matcher(service_predicate=parse_service_filter(services), name_patterns=options.name_patterns)
    except InvalidFilterError as e:
        raise click.UsageError(str(e))

    registry = _load(snapshot)
    if wtf:
        _echo_lines(diagnose(registry))
        return
    _echo_lines(list_and_filter(registry, options))


@cli.command(name="diagnose")
@_SNAPSHOT
def diagnose_command(snapshot: Path):
    """Find the root causes of unregistered components."""
    _echo_lines(diagnose(_load(snapshot)))


@cli.command()
@_SNAPSHOT
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(snapshot: Path, port: int, host: str):
    """Serve a read-only web view of the snapshot."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the web view. "
            "Install with: pip install 'dm-inspect[web]'"
        )

    from dm_inspect.web import create_app

    registry = _load(snapshot)
    click.echo(f"Serving {snapshot} at http://{host}:{port}")
    uvicorn.run(create_app(registry), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
