"""Command line interface for dotin."""

from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .core.config import Config, is_valid_group_name
from .core.errors import DotinError
from .core.importer import ImportManager
from .core.logging import console, setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="dotin")
@click.option("--debug", is_flag=True, help="Show debug output")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    help="Also write a detailed log to this file",
)
def cli(debug: bool, log_file: Optional[str]) -> None:
    """Dotfiles import tool.

    Moves configuration files out of your home directory into a group
    folder of your dotfiles repository, keeping their relative paths.

    Run 'dotin COMMAND --help' for more information on a specific command.
    """
    setup_logging(debug=debug, log_file=log_file)


@cli.command(name="import")
@click.argument("files", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option("--group", "-g", help="Group folder to import into (defaults to default_group)")
@click.option(
    "--dotfiles-dir",
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    help="Dotfiles repository root (defaults to dotfiles_dir from the config)",
)
@click.option(
    "--home-dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    help="Home directory the files must live in (defaults to home_dir from the config)",
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Configuration file to use instead of ~/.config/dotin/config.yaml",
)
@click.option(
    "--dry-run", is_flag=True, help="Show what would be moved without making any changes"
)
def import_command(
    files: Tuple[Path, ...],
    group: Optional[str],
    dotfiles_dir: Optional[Path],
    home_dir: Optional[Path],
    config_file: Optional[Path],
    dry_run: bool,
) -> None:
    """Import files from the home directory into a dotfiles group.

    FILES are the files or directories to import. Each one is moved to the
    same path relative to the home directory, inside the group folder.

    Nothing is moved unless every file passes the checks: files must live in
    the home directory, destinations must not exist yet and everything must
    stay on one filesystem. Files already inside the dotfiles repository are
    skipped.

    Examples:

      # Move ~/.bashrc and ~/.config/fish into ~/dotfiles/shell
      dotin import ~/.bashrc ~/.config/fish --group shell

      # Show what would be moved without making changes
      dotin import ~/.gitconfig --group git --dry-run
    """
    try:
        config = Config()
        config.load_config(config_file)
        if dotfiles_dir is not None:
            config.dotfiles_dir = dotfiles_dir.resolve()
        if home_dir is not None:
            config.home_dir = home_dir.resolve()

        errors = config.validate()
        if errors:
            for error in errors:
                console.print(f"[red]Config error: {error}")
            raise click.Abort()

        group = group or config.default_group
        if not group:
            raise click.UsageError("No group given and no default_group configured")
        if not is_valid_group_name(group):
            raise click.BadParameter(
                f"{group!r} must be a plain folder name", param_hint="'--group'"
            )

        group_dir = config.group_dir(group)
        console.print(f"[bold]Importing into group '{group}' at {group_dir}")

        manager = ImportManager(console)
        result = manager.run(config.home_dir, group_dir, list(files), dry_run=dry_run)
    except DotinError as e:
        console.print(f"[red]Error: {e}")
        raise click.Abort()

    if result.dry_run:
        console.print("[blue]Dry run, no changes were made")
    elif result.moved:
        console.print(f"[green]Imported {len(result.moved)} files into '{group}'")


def main() -> None:
    """Entry point for the dotin CLI."""
    cli()


if __name__ == "__main__":
    main()
