import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Annotated

import typer

from .config import LOG_LEVELS, AppConfig
from .frontier import select_largest
from .render import display
from .tree import build_trees

DISTRIBUTION_NAME: str = "sizetree"
LOG_FORMAT: str = "%(levelname)s | %(message)s"


def installed_version() -> str:
    try:
        return version(distribution_name=DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown (package not installed)"


app: typer.Typer = typer.Typer(
    help=f"sizetree — show the largest files and directories as a tree\n\nVersion: {installed_version()}",
)


def print_version(is_version: bool) -> None:
    """
    Callback for the global --version / -V option.

    Returns immediately unless the flag was given, in which case the
    installed version is printed and the program stops.
    """
    if not is_version:
        return

    typer.echo(installed_version())
    raise typer.Exit()


def configure_logging(level: int) -> None:
    logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT, force=True)
    logging.getLogger(DISTRIBUTION_NAME).setLevel(level)


def load_config(ctx: typer.Context, config_path: Path | None) -> AppConfig:
    """Load the config file and set up logging from it, exiting on a bad file."""
    try:
        cfg: AppConfig = AppConfig.load(config_path)
    except (FileNotFoundError, TypeError, ValueError) as e:
        typer.echo(e, err=True)
        raise typer.Exit(code=1)

    verbose: bool = bool(ctx.obj and ctx.obj.get("verbose"))
    configure_logging(logging.DEBUG if verbose else LOG_LEVELS[cfg.log_level])

    return cfg


ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", help="YAML config file (default: ./sizetree.yaml when present)."),
]


@app.command()
def scan(
    ctx: typer.Context,
    paths: Annotated[list[str] | None, typer.Argument(help="Paths to measure (default: .).")] = None,
    number_of_lines: Annotated[
        int | None,
        typer.Option("--number-of-lines", "-n", min=0, help="Number of entries to show below the top line."),
    ] = None,
    no_color: Annotated[bool, typer.Option("--no-color", help="Disable colored output.")] = False,
    config_path: ConfigOption = None,
) -> None:
    """Measure the given paths and print the largest entries as a tree."""
    cfg: AppConfig = load_config(ctx, config_path)

    if number_of_lines is not None:
        cfg.number_of_lines = number_of_lines
    if no_color:
        cfg.color = False

    permissions, arena, roots = build_trees(paths or ["."])
    selected: list[int] = select_largest(arena, roots, cfg.number_of_lines)
    display(permissions, arena, selected, color=cfg.color)


@app.command(name="config")
def config_cmd(ctx: typer.Context, config_path: ConfigOption = None) -> None:
    """Print the effective configuration."""
    cfg: AppConfig = load_config(ctx, config_path)
    typer.echo(cfg.dump(), nl=False)


@app.command(name="version")
def version_cmd() -> None:
    """Print the installed version of sizetree."""
    print_version(True)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug details to stderr.")] = False,
    _version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=print_version,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """
    Global options for sizetree. All subcommands run after this callback
    unless --version is used.
    """
    ctx.obj = {"verbose": verbose}


if __name__ == "__main__":
    app()
