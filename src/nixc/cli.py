"""nixc command-line entry point."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path

import click

from nixc import __version__
from nixc.config import find_config, load_config
from nixc.errors import CompileError, DiagnosticRenderer
from nixc.formatter import FormatError, ValueFormatter
from nixc.parser import parse
from nixc.values import AttrSet, LetIn, List, Null, Value

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(__version__, prog_name="nixc")
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--format", "as_source", is_flag=True, help="Print the value as nixc source.")
@click.option("--color/--no-color", default=None, help="Color diagnostics (default: from nixc.toml).")
@click.option("-v", "--verbose", is_flag=True, help="Log lexer and parser activity.")
def main(file: Path, as_source: bool, color: bool | None, verbose: bool) -> None:
    """Parse a nixc value file and print the resulting tree."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config_path = find_config(file.parent)
    try:
        config = load_config(config_path)
    except (OSError, tomllib.TOMLDecodeError) as e:
        click.echo(f"error: cannot load {config_path}: {e}", err=True)
        raise SystemExit(1)
    if color is None:
        color = config.diagnostics.color

    try:
        source = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        click.echo(f"error: cannot read {file}: {e}", err=True)
        raise SystemExit(1)

    logger.debug("read %d characters from %s", len(source), file)

    try:
        value = parse(source, str(file))
    except CompileError as e:
        renderer = DiagnosticRenderer(color=color)
        for diag in e.diagnostics:
            click.echo(renderer.render(diag), err=True, color=color)
        raise SystemExit(1)

    if as_source:
        try:
            click.echo(ValueFormatter().format(value))
        except FormatError as e:
            click.echo(f"error: {e}", err=True)
            raise SystemExit(1)
        return

    _dump_value(value, 0)


def _dump_value(value: Value, depth: int, label: str = "") -> None:
    """Print a readable, indented dump of a value tree."""
    indent = "  " * depth
    name = type(value).__name__

    if isinstance(value, Null):
        click.echo(f"{indent}{label}{name}")
    elif isinstance(value, List):
        if value.items:
            click.echo(f"{indent}{label}{name}")
            for item in value.items:
                _dump_value(item, depth + 1)
        else:
            click.echo(f"{indent}{label}{name}: []")
    elif isinstance(value, AttrSet):
        if value.bindings:
            click.echo(f"{indent}{label}{name}")
            for key, v in value.bindings.items():
                _dump_value(v, depth + 1, f"{key} = ")
        else:
            click.echo(f"{indent}{label}{name}: {{}}")
    elif isinstance(value, LetIn):
        click.echo(f"{indent}{label}{name}")
        for key, v in value.bindings.items():
            _dump_value(v, depth + 1, f"{key} = ")
        _dump_value(value.body, depth + 1, "in ")
    else:
        click.echo(f"{indent}{label}{name}: {value.value!r}")
