"""debsrc command line interface."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .constants import DEFAULT_ARCH
from .exceptions import DebsrcError
from .models import Dsc, parse_dsc_file
from .order import order_dsc_for_build

logger = logging.getLogger(__name__)

cli = typer.Typer(help="Inspect, order and relocate Debian source packages.", no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)


def _load(path: Path) -> Dsc:
    try:
        return parse_dsc_file(path)
    except OSError as e:
        err_console.print(f"Cannot read {path}: {e}", style="red", markup=False)
        raise typer.Exit(1) from e
    except DebsrcError as e:
        err_console.print(f"{path}: {e}", style="red", markup=False)
        raise typer.Exit(1) from e


def _fail(e: Exception) -> typer.Exit:
    err_console.print(f"{e}", style="red", markup=False)
    return typer.Exit(1)


@cli.command()
def order(
    files: list[Path] = typer.Argument(..., help=".dsc files to order"),
    arch: str = typer.Option(DEFAULT_ARCH, "--arch", "-a", help="Target architecture"),
):
    """Print the sources in an order they can be built in."""
    dscs = [_load(path) for path in files]
    try:
        ordered = order_dsc_for_build(dscs, arch)
    except (DebsrcError, ValueError) as e:
        raise _fail(e) from e

    for dsc in ordered:
        typer.echo(f"{dsc.source}\t{dsc.version}\t{dsc.filename}")


@cli.command()
def show(file: Path = typer.Argument(..., help=".dsc file to display")):
    """Show a .dsc's metadata and the files it references."""
    dsc = _load(file)

    info = Table(show_header=False, box=None)
    info.add_column(style="bold")
    info.add_column()
    info.add_row("Source", dsc.source)
    info.add_row("Version", str(dsc.version))
    info.add_row("Format", dsc.format or "-")
    info.add_row("Binary", ", ".join(dsc.binaries) or "-")
    info.add_row("Architecture", " ".join(str(a) for a in dsc.architectures) or "-")
    info.add_row("Arch: all", "yes" if dsc.has_arch_all() else "no")
    info.add_row("Maintainers", "\n".join(dsc.maintainers()))
    info.add_row("Homepage", dsc.homepage or "-")
    info.add_row("Build-Depends", Text(str(dsc.build_depends) or "-"))
    info.add_row("Build-Depends-Arch", Text(str(dsc.build_depends_arch) or "-"))
    info.add_row("Build-Depends-Indep", Text(str(dsc.build_depends_indep) or "-"))
    console.print(info)

    files = Table(title="Files")
    files.add_column("Filename")
    files.add_column("Size", justify="right")
    files.add_column("MD5")
    for entry in dsc.files:
        files.add_row(entry.filename, entry.size.human_readable(), entry.hash)
    console.print(files)


@cli.command()
def copy(
    file: Path = typer.Argument(..., help=".dsc file to copy"),
    dest: Path = typer.Argument(..., help="Destination directory"),
):
    """Copy a .dsc and its files into a directory, the .dsc last."""
    dsc = _load(file)
    try:
        dsc.copy(dest)
    except DebsrcError as e:
        raise _fail(e) from e
    typer.echo(f"Copied {dsc.source} to {dsc.filename}")


@cli.command()
def move(
    file: Path = typer.Argument(..., help=".dsc file to move"),
    dest: Path = typer.Argument(..., help="Destination directory"),
):
    """Move a .dsc and its files into a directory, the .dsc last."""
    dsc = _load(file)
    try:
        dsc.move(dest)
    except DebsrcError as e:
        raise _fail(e) from e
    typer.echo(f"Moved {dsc.source} to {dsc.filename}")


@cli.command()
def remove(file: Path = typer.Argument(..., help=".dsc file to remove")):
    """Remove a .dsc's files and then the .dsc itself."""
    dsc = _load(file)
    try:
        dsc.remove()
    except DebsrcError as e:
        raise _fail(e) from e
    typer.echo(f"Removed {dsc.source}")


def main() -> None:
    """Main entry point for the debsrc CLI."""
    cli()


if __name__ == "__main__":
    main()
