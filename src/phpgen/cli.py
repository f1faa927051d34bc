"""Command-line interface for phpgen."""

import logging
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from phpgen import __version__
from phpgen.config import (
    DEFAULT_CONFIG,
    PhpgenConfig,
    get_home_config_path,
    get_local_config_path,
    load_config,
    save_config,
)
from phpgen.console import console
from phpgen.errors import PhpgenError
from phpgen.models import ArgumentSpec
from phpgen.template import (
    ConfigFileEditor,
    TemplateUnit,
    build_function_unit,
    load_unit_from_yaml,
)

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _resolve_output_dir(ctx: click.Context, output_dir: Path | None) -> Path:
    """Use --output-dir (or PHPGEN_OUTPUT_DIR) when set, else the config value."""
    config: PhpgenConfig = ctx.obj
    if output_dir is not None:
        return output_dir
    return Path(config.output_dir or ".")


def _write_unit(ctx: click.Context, unit: TemplateUnit, target: Path, force: bool) -> None:
    """Save a generated unit, refusing to replace an existing file unless allowed."""
    config: PhpgenConfig = ctx.obj
    if target.exists() and not (force or config.overwrite):
        console.print(
            f"[red]{escape(str(target))} already exists.[/red] Use --force to overwrite."
        )
        raise SystemExit(1)

    try:
        written = unit.save(target)
    except PhpgenError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    console.print(
        f"[green]✓[/green] Wrote {escape(str(target))} [dim]({written} bytes)[/dim]"
    )


def _parse_argument(raw: str) -> ArgumentSpec:
    """Parse `TYPE:NAME` or `NAME` into an ArgumentSpec."""
    type_hint, sep, name = raw.rpartition(":")
    if not sep:
        return ArgumentSpec(name=raw.lstrip("$"))
    return ArgumentSpec(name=name.lstrip("$"), type_hint=type_hint or None)


def version_callback(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    """Print version and exit."""
    if not value or ctx.resilient_parsing:
        return
    console.print(f"phpgen [bold cyan]{__version__}[/bold cyan]")
    ctx.exit()


output_dir_option = click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="PHPGEN_OUTPUT_DIR",
    help="Directory to write generated files to.",
)
force_option = click.option(
    "--force", "-f", is_flag=True, help="Overwrite existing files."
)


@click.group(invoke_without_command=True)
@click.option(
    "--version",
    is_flag=True,
    callback=version_callback,
    expose_value=False,
    is_eager=True,
    help="Show version and exit.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """phpgen - generate PHP classes, functions and config files."""
    config = load_config()
    _setup_logging("DEBUG" if verbose else (config.log_level or "WARNING"))
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        console.print("[bold]phpgen[/bold] - PHP source generator")
        console.print("\nRun [cyan]phpgen --help[/cyan] for available commands.")


@main.command("class")
@click.argument(
    "description", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@output_dir_option
@click.option("--stdout", "to_stdout", is_flag=True, help="Print instead of saving.")
@force_option
@click.pass_context
def class_(
    ctx: click.Context,
    description: Path,
    output_dir: Path | None,
    to_stdout: bool,
    force: bool,
) -> None:
    """Generate a PHP class from a YAML DESCRIPTION file."""
    config: PhpgenConfig = ctx.obj
    try:
        unit = load_unit_from_yaml(description)
    except PhpgenError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    if unit.namespace is None and config.namespace:
        unit = unit.with_namespace(config.namespace)

    try:
        unit = unit.generate()
    except PhpgenError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    if to_stdout:
        click.echo(unit.generated_text, nl=False)
        return

    if not unit.class_name:
        console.print("[red]Class description has no 'name'.[/red]")
        raise SystemExit(1)

    target = _resolve_output_dir(ctx, output_dir) / f"{unit.class_name}.php"
    logger.debug("Generating class %s into %s", unit.class_name, target)
    _write_unit(ctx, unit, target, force)


@main.command("function")
@click.argument("name")
@click.option(
    "--arg",
    "-a",
    "args",
    multiple=True,
    help="Argument as TYPE:NAME or NAME. Repeatable.",
)
@click.option("--return", "return_type", help="Return type.")
@click.option("--body", default="//", help="Function body.")
@output_dir_option
@force_option
@click.pass_context
def function_(
    ctx: click.Context,
    name: str,
    args: tuple[str, ...],
    return_type: str | None,
    body: str,
    output_dir: Path | None,
    force: bool,
) -> None:
    """Generate a guarded global PHP function NAME."""
    arguments = tuple(_parse_argument(raw) for raw in args)
    unit = build_function_unit(name, arguments, return_type, body)
    target = _resolve_output_dir(ctx, output_dir) / f"{name}.php"
    _write_unit(ctx, unit, target, force)


@main.command("config-file")
@click.argument("path", type=click.Path(dir_okay=False, path_type=Path))
@force_option
@click.pass_context
def config_file(ctx: click.Context, path: Path, force: bool) -> None:
    """Create an empty PHP config file at PATH."""
    unit = ConfigFileEditor(path).generate()
    _write_unit(ctx, unit, path, force)


@main.command("add-section")
@click.argument(
    "path", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.argument("section")
@click.argument("data", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def add_section(path: Path, section: str, data: Path) -> None:
    """Add SECTION to the PHP config file at PATH, using values from DATA (YAML)."""
    try:
        with data.open(encoding="utf-8") as f:
            values = yaml.safe_load(f)
    except yaml.YAMLError as e:
        console.print(f"[red]Invalid YAML in {escape(str(data))}: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    if values is None:
        values = {}
    if not isinstance(values, dict):
        console.print(f"[red]{escape(str(data))} must contain a mapping.[/red]")
        raise SystemExit(1)

    try:
        unit = ConfigFileEditor(path).create_section(section, values)
        written = unit.save(path)
    except PhpgenError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise SystemExit(1) from None

    console.print(
        f"[green]✓[/green] Added section [cyan]{escape(section)}[/cyan] "
        f"to {escape(str(path))} "
        f"[dim]({written} bytes)[/dim]"
    )


@main.command()
@click.option(
    "--global",
    "-g",
    "global_config",
    is_flag=True,
    help="Write the global config (~/.phpgen/config.yaml) instead of the local one.",
)
def init(global_config: bool) -> None:
    """Write a config file with the default settings."""
    path = get_home_config_path() if global_config else get_local_config_path()
    if path.exists():
        console.print(f"[yellow]Config already exists: {escape(str(path))}[/yellow]")
        return
    save_config(DEFAULT_CONFIG, path)
    console.print(f"[green]✓[/green] Created {escape(str(path))}")


@main.command("show-config")
@click.pass_context
def show_config(ctx: click.Context) -> None:
    """Show the effective configuration."""
    config: PhpgenConfig = ctx.obj
    console.print("[bold]Effective configuration:[/bold]")
    for key, value in config.to_dict().items():
        console.print(f"  {key}: [cyan]{escape(str(value))}[/cyan]", highlight=False)
