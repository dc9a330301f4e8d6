"""
Command-line interface for checking components.

Loads one component, validates it against the lifecycle contract and reports
the outcome. Exit codes: 0 on success, 1 when the component fails a check,
2 on configuration errors.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import MODULE_ENV_VAR, ComponentSettings
from .core import ComponentShape
from .errors import ConfigurationError
from .logging import setup_logging
from .runner import CheckReport, ComponentChecker

console = Console()

EXIT_OK = 0
EXIT_COMPONENT_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


def parse_props(values: tuple[str, ...]) -> dict[str, Any]:
    """Parse ``KEY=VALUE`` pairs, reading each value as a YAML scalar."""
    props: dict[str, Any] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got {item!r}", param_hint="--prop")
        try:
            props[key] = yaml.safe_load(raw)
        except yaml.YAMLError:
            props[key] = raw
    return props


def build_settings(**overrides: Any) -> ComponentSettings:
    """Settings from the environment with command-line overrides applied."""
    provided = {key: value for key, value in overrides.items() if value is not None}
    # module is read from aliased environment variables, which would outrank
    # a keyword passed by field name
    module = provided.pop("module", None)
    try:
        settings = ComponentSettings(**provided)
    except ValidationError as e:
        raise ConfigurationError(f"invalid settings: {e}", cause=e) from e
    if module is not None:
        settings = settings.model_copy(update={"module": module})
    return settings


def render_report(report: CheckReport) -> None:
    if report.success:
        console.print(f"[bold green]OK[/bold green] {report.name}")

        table = Table(title=f"Component {report.name}", show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Reference", report.reference)
        table.add_row("Shape", report.shape.value if report.shape else "-")
        table.add_row("Fields", ", ".join(report.fields) or "-")
        table.add_row("Duration", f"{report.duration_ms:.1f}ms")
        console.print(table)
        return

    error = report.error
    lines = [
        f"[bold]{type(error).__name__}[/bold]: {error}",
        f"Reference: {report.reference}",
        f"Component: {report.name}",
    ]
    if error is not None and error.cause is not None:
        lines.append(f"Cause: {error.cause!r}")
    console.print(Panel("\n".join(lines), title="Component check failed", border_style="red"))


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def cli(ctx, verbose):
    """Component convention checker.

    Loads a component module, constructs it as a class or a factory and
    validates its lifecycle contract.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("reference", required=False)
@click.option(
    "--search-path",
    "-s",
    "search_paths",
    multiple=True,
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    help="Directory searched for component modules (can specify multiple)",
)
@click.option(
    "--shape",
    type=click.Choice([shape.value for shape in ComponentShape]),
    help="Construction shape; classified from the export when omitted",
)
@click.option("--prop", "-p", "props", multiple=True, help="Component prop as KEY=VALUE")
@click.option(
    "--props-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with component props",
)
@click.option("--timeout", type=float, help="Upper bound in seconds for each lifecycle hook")
@click.option("--probe-prefix", help="Name prefix of components whose start/end are exercised")
@click.option("--no-probe", is_flag=True, help="Never exercise start/end")
@click.option("--log-level", help="Log level, or OFF [default: LOG_LEVEL or INFO]")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    help="Log output format [default: LOG_FORMAT or text]",
)
@click.option("--json", "json_output", is_flag=True, help="Print the report as JSON")
@click.pass_context
def check(
    ctx,
    reference: str | None,
    search_paths: tuple[Path, ...],
    shape: str | None,
    props: tuple[str, ...],
    props_file: Path | None,
    timeout: float | None,
    probe_prefix: str | None,
    no_probe: bool,
    log_level: str | None,
    log_format: str | None,
    json_output: bool,
):
    """Load and validate the component named by REFERENCE.

    REFERENCE defaults to the componentModule (or COMPONENT_MODULE)
    environment variable.
    """
    verbose = (ctx.obj or {}).get("verbose", False)
    root_logger = logging.getLogger()
    previous_level = root_logger.level
    handler = setup_logging(
        component_name=reference or "-",
        log_level="DEBUG" if verbose else log_level,
        enable_json=None if log_format is None else log_format == "json",
        stream=sys.stderr,
    )

    try:
        try:
            settings = build_settings(
                module=reference,
                search_paths=[str(p) for p in search_paths] or None,
                shape=shape,
                props=parse_props(props) or None,
                props_file=props_file,
                hook_timeout=timeout,
                probe_prefix="" if no_probe else probe_prefix,
            )
            module_reference = settings.require_module()
            checker = ComponentChecker.from_settings(settings)
        except ConfigurationError as e:
            console.print(f"[bold red]Configuration error:[/bold red] {e}")
            if not reference:
                console.print(f"Set {MODULE_ENV_VAR} or pass a REFERENCE argument.")
            ctx.exit(EXIT_CONFIGURATION_ERROR)

        report = asyncio.run(checker.check(module_reference, settings.shape))
    finally:
        root_logger.removeHandler(handler)
        root_logger.setLevel(previous_level)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        render_report(report)

    ctx.exit(EXIT_OK if report.success else EXIT_COMPONENT_FAILED)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
