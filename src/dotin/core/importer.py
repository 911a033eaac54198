"""Import files from the home directory into a dotfiles group folder.

Importing relocates each selected file to the mirrored path inside a group
folder of the dotfiles repository, e.g. ``~/.config/nvim/init.lua`` imported
into group ``editor`` ends up at ``<dotfiles>/editor/.config/nvim/init.lua``.

The whole batch is validated before anything on disk changes:

1. Resolve every input path (all-or-nothing).
2. Classify each file: skip it, warn about it, plan its move or reject it.
3. Reject planned destinations that already exist.
4. Find the intermediate directories that have to be created.
5. Create the group folder and the intermediate directories.
6. Make sure every move stays on the same filesystem.
7. Rename the files, in the order they were given.

There is no rollback. Directories created and files moved before a failure in
steps 5 or 7 stay where they are.

Example:
    ```python
    from pathlib import Path
    from dotin.core.importer import import_files

    result = import_files(
        home_dir=Path.home(),
        group_dir=Path.home() / "dotfiles" / "shell",
        files=[Path("~/.bashrc").expanduser()],
    )
    print(f"Moved {len(result.moved)} files")
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple, Union

from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from .errors import (
    CrossFilesystemMoveError,
    DestinationCollisionError,
    DirectoryCreationError,
    MoveError,
    ObstructedDirectoryError,
    OutOfScopeFileError,
    ResolutionError,
)
from .utils import are_in_the_same_filesystem, create_folder_at, dedup_nested

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class ResolvedFile:
    """An input path together with its canonical location."""

    original_path: Path
    canonical_path: Path
    is_symlink: bool


@dataclass(frozen=True)
class PlannedMove:
    """A validated rename from the home directory into the group folder."""

    source_path: Path
    destination_path: Path


@dataclass(frozen=True)
class SkippedFile:
    """A file left untouched because it already lives in the dotfiles root."""

    path: Path
    reason: str
    symlink_target: Optional[Path] = None


@dataclass
class ImportResult:
    """Outcome of an import.

    Attributes:
        moved: Moves performed, or planned when ``dry_run`` is set.
        skipped: Files left in place because they are already managed.
        symlink_warnings: Symlinks that were imported as-is.
        created_directories: Intermediate directories created (or to create).
        dry_run: Whether the filesystem was left untouched.
    """

    moved: List[PlannedMove] = field(default_factory=list)
    skipped: List[SkippedFile] = field(default_factory=list)
    symlink_warnings: List[Path] = field(default_factory=list)
    created_directories: List[Path] = field(default_factory=list)
    dry_run: bool = False


class ImportManager:
    """Moves files from a home directory into a dotfiles group folder.

    Attributes:
        console (Console): Rich console used for progress reports.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def resolve(self, files: Sequence[PathLike]) -> List[ResolvedFile]:
        """Canonicalize every input path.

        Raises:
            ResolutionError: If any path does not exist or cannot be resolved.
                Nothing is returned for the other paths in that case.
        """
        resolved = []
        for file in files:
            path = Path(file)
            try:
                canonical = path.resolve(strict=True)
            except (OSError, RuntimeError) as e:
                raise ResolutionError(path, str(e)) from e
            resolved.append(ResolvedFile(path, canonical, path.is_symlink()))
        return resolved

    def classify(
        self, resolved: Sequence[ResolvedFile], home_dir: Path, group_dir: Path
    ) -> Tuple[List[PlannedMove], List[SkippedFile], List[Path]]:
        """Decide what happens to each file.

        Files already inside the dotfiles root are skipped. Symlinks pointing
        outside of it are imported as-is, with a warning. Everything else
        must live inside ``home_dir``.

        Returns:
            Tuple of (planned moves, skipped files, symlinks warned about).

        Raises:
            OutOfScopeFileError: On the first file outside of ``home_dir``.
        """
        dotfiles_dir = group_dir.parent
        moves: List[PlannedMove] = []
        skipped: List[SkippedFile] = []
        warnings: List[Path] = []
        seen: Set[Path] = set()

        for file in resolved:
            path = file.original_path
            canonical = file.canonical_path

            if canonical.is_relative_to(dotfiles_dir):
                if file.is_symlink:
                    target = canonical.relative_to(dotfiles_dir)
                    self.console.print(
                        f"[yellow]Skipping {path}, it's already a symlink, and it points to "
                        f"{target}, which is inside of the dotfiles directory."
                    )
                    skipped.append(SkippedFile(path, "symlink into dotfiles", target))
                else:
                    self.console.print(
                        f"[yellow]Skipping {path} because it lives inside of the dotfiles directory"
                    )
                    skipped.append(SkippedFile(path, "inside dotfiles"))
                continue

            if file.is_symlink:
                self.console.print(
                    f"[yellow]Warning: {path} is a symlink itself, it will be moved as-is. "
                    "If that's not what you meant, handle it manually."
                )
                warnings.append(path)

            if canonical == home_dir or not canonical.is_relative_to(home_dir):
                raise OutOfScopeFileError(path, home_dir)

            # The entry itself, without following a final symlink
            entry = path.absolute().parent.resolve() / path.name
            if entry in seen:
                logger.debug("Ignoring duplicate entry %s", path)
                continue
            seen.add(entry)

            destination = group_dir / canonical.relative_to(home_dir)
            moves.append(PlannedMove(path, destination))

        return moves, skipped, warnings

    def check_collisions(self, moves: Sequence[PlannedMove]) -> None:
        """Refuse to overwrite anything at a planned destination.

        Symlinks count as existing entries, dangling ones included. Two
        sources planned onto the same destination collide as well.
        """
        destinations: Set[Path] = set()
        for move in moves:
            destination = move.destination_path
            if destination in destinations:
                raise DestinationCollisionError(destination)
            if destination.is_symlink() or destination.exists():
                raise DestinationCollisionError(destination)
            destinations.add(destination)

    def find_intermediate_directories(
        self, moves: Sequence[PlannedMove], group_dir: Path
    ) -> List[Path]:
        """Collect the missing parent directories of the planned destinations.

        Returns:
            Sorted list of directories to create, without nested duplicates.

        Raises:
            ObstructedDirectoryError: If a non-directory sits where one of
                the destination's ancestors should be.
        """
        directories: List[Path] = []
        for move in moves:
            parent = move.destination_path.parent
            if parent.exists():
                if not parent.is_dir():
                    raise ObstructedDirectoryError(parent)
                continue
            if parent == group_dir:
                continue

            ancestor = parent.parent
            while not ancestor.exists() and ancestor != ancestor.parent:
                ancestor = ancestor.parent
            if not ancestor.is_dir():
                raise ObstructedDirectoryError(ancestor)

            directories.append(parent)

        dedup_nested(directories)
        directories.sort()
        return directories

    def create_directories(self, group_dir: Path, directories: Sequence[Path]) -> None:
        """Create the group folder, then every intermediate directory.

        Raises:
            DirectoryCreationError: On the first directory that can't be made.
                Directories created before it are kept.
        """
        try:
            create_folder_at(group_dir)
        except OSError as e:
            raise DirectoryCreationError(group_dir, str(e)) from e

        if not directories:
            return

        self.console.print(
            f"[bold]Will create {len(directories)} intermediate directories:"
        )
        self.console.print(self._directory_tree(group_dir, directories))

        for directory in directories:
            try:
                create_folder_at(directory)
            except OSError as e:
                raise DirectoryCreationError(directory, str(e)) from e
            logger.debug("Created %s", directory)

        self.console.print("[green]Done.")
        self.console.print()

    def check_filesystems(self, moves: Sequence[PlannedMove]) -> None:
        """Make sure each move can be done with a plain rename."""
        for move in moves:
            parent = move.destination_path.parent
            try:
                same = are_in_the_same_filesystem(move.source_path, parent)
            except OSError as e:
                raise ResolutionError(Path(e.filename or parent), e.strerror or str(e)) from e
            if not same:
                raise CrossFilesystemMoveError(move.source_path, parent)

    def execute(self, moves: Sequence[PlannedMove]) -> None:
        """Rename the files in planned order, stopping at the first failure."""
        for move in moves:
            try:
                move.source_path.rename(move.destination_path)
            except OSError as e:
                raise MoveError(move.source_path, move.destination_path, str(e)) from e
            logger.debug("Moved %s -> %s", move.source_path, move.destination_path)

    def run(
        self,
        home_dir: PathLike,
        group_dir: PathLike,
        files: Sequence[PathLike],
        dry_run: bool = False,
    ) -> ImportResult:
        """Import ``files`` into ``group_dir``.

        Args:
            home_dir: Directory the files have to live in.
            group_dir: Group folder to import into. Its parent is the
                dotfiles root.
            files: Paths to import, relative ones are taken from the current
                working directory. Must not be empty.
            dry_run: If True, only report what would be done.

        Returns:
            ImportResult: What was skipped, created and moved.

        Raises:
            ValueError: If ``files`` is empty.
            DotinError: If any check fails. See ``dotin.core.errors``.
        """
        if not files:
            raise ValueError("The list of files to import cannot be empty")

        home_dir = Path(home_dir).resolve()
        group_dir = Path(group_dir).resolve()
        logger.debug("Importing %d paths from %s into %s", len(files), home_dir, group_dir)

        resolved = self.resolve(files)
        moves, skipped, warnings = self.classify(resolved, home_dir, group_dir)
        result = ImportResult(skipped=skipped, symlink_warnings=warnings, dry_run=dry_run)

        if not moves:
            self.console.print("No files to move.")
            if not dry_run:
                self.create_directories(group_dir, [])
            return result

        self.check_collisions(moves)
        directories = self.find_intermediate_directories(moves, group_dir)
        result.created_directories = list(directories)

        if dry_run:
            if directories:
                self.console.print(
                    f"[blue]Would create {len(directories)} intermediate directories:"
                )
                self.console.print(self._directory_tree(group_dir, directories))
            self.console.print(f"[blue]Would move {len(moves)} files:")
            self.console.print(self._moves_table(moves))
            result.moved = list(moves)
            return result

        self.create_directories(group_dir, directories)
        self.check_filesystems(moves)

        self.console.print(f"[bold]Will move {len(moves)} files:")
        self.console.print(self._moves_table(moves))
        self.execute(moves)
        self.console.print("[green]Done.")

        result.moved = list(moves)
        return result

    def _directory_tree(self, group_dir: Path, directories: Sequence[Path]) -> Tree:
        tree = Tree(f"[bold magenta]{group_dir}[/]")
        for directory in directories:
            tree.add(f"[bold blue]{directory.relative_to(group_dir)}[/]")
        return tree

    def _moves_table(self, moves: Sequence[PlannedMove]) -> Table:
        table = Table()
        table.add_column("Source", style="cyan")
        table.add_column("Destination", style="green")
        for move in moves:
            table.add_row(str(move.source_path), str(move.destination_path))
        return table


def import_files(
    home_dir: PathLike,
    group_dir: PathLike,
    files: Sequence[PathLike],
    console: Optional[Console] = None,
    dry_run: bool = False,
) -> ImportResult:
    """Import ``files`` from ``home_dir`` into ``group_dir``.

    Shortcut for ``ImportManager(console).run(...)``.
    """
    return ImportManager(console).run(home_dir, group_dir, files, dry_run=dry_run)
