"""
classjars — CLI entrypoint.

Usage:
    python -m classjars.main --help
    python -m classjars.main libraries app
    python -m classjars.main stale com.example.Foo out/Foo.class
    python -m classjars.main build mark
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from classjars import __version__
from classjars.core.observability.logging_config import setup_from_env


@click.group()
@click.version_option(version=__version__, prog_name="classjars")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to classjars.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """classjars — library jars and class staleness for Blaze projects."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    from classjars.core.config.loader import find_project_file, project_root
    from classjars.core.context import set_project_root as _set_ctx_root
    _cfg = ctx.obj["config_path"] or find_project_file()
    _set_ctx_root(project_root(_cfg) if _cfg else Path.cwd())

    setup_from_env(debug=debug, verbose=verbose, quiet=quiet)

    if debug:
        ctx.call_on_close(_log_metrics)


def _log_metrics() -> None:
    from classjars.core.observability.metrics import metrics

    logging.getLogger("classjars.metrics").debug("Metrics: %s", json.dumps(metrics.snapshot()))


@cli.command()
@click.argument("module")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def libraries(ctx: click.Context, module: str, as_json: bool) -> None:
    """List the external library jars of MODULE."""
    from classjars.core.use_cases.libraries import get_libraries

    result = get_libraries(module, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    if not result.snapshot_available and not ctx.obj.get("quiet"):
        click.secho("⚠️  No synced target map — run a sync first.", fg="yellow", err=True)

    for jar in result.jars:
        click.echo(str(jar))


@cli.command()
@click.argument("fqcn")
@click.argument("class_file")
@click.option(
    "--unsaved",
    "unsaved",
    multiple=True,
    type=click.Path(),
    help="Source file with unsaved editor changes (repeatable).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def stale(
    ctx: click.Context,
    fqcn: str,
    class_file: str,
    unsaved: tuple[str, ...],
    as_json: bool,
) -> None:
    """Check whether CLASS_FILE is out of date for class FQCN.

    CLASS_FILE may point inside a jar: /path/lib.jar!/com/example/Foo.class
    """
    from classjars.core.use_cases.stale import check_stale

    result = check_stale(fqcn, class_file, unsaved=unsaved, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert result.verdict is not None
    if result.stale:
        click.secho("stale", fg="yellow", nl=False)
    else:
        click.secho("fresh", fg="green", nl=False)
    if ctx.obj.get("quiet"):
        click.echo()
    else:
        click.echo(f"  ({result.verdict.reason})")


@cli.group()
def build() -> None:
    """Manual build bookkeeping."""


@build.command("mark")
@click.option("--at", "at", type=float, default=None, help="POSIX timestamp (default: now).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def build_mark(ctx: click.Context, at: float | None, as_json: bool) -> None:
    """Record that a build was triggered by hand."""
    from classjars.core.use_cases.stale import mark_build

    result = mark_build(when=at, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"🔨 Build recorded for {result.project}", fg="green")
    if not ctx.obj.get("quiet"):
        click.echo(f"   timestamp: {result.timestamp}")


@cli.group()
def config() -> None:
    """Project configuration commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, as_json: bool) -> None:
    """Validate classjars.yml configuration."""
    from classjars.core.use_cases.config_check import check_config

    result = check_config(config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.project is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        click.echo(f"   Project: {result.project.name}")
        click.echo(f"   Sync mode: {result.project.sync_mode.value}")
        click.echo(f"   Modules: {len(result.project.modules)}")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
