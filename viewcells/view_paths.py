"""View path resolution for cell classes.

A cell's templates are looked up in its own directory first, then in the
directory of each ancestor cell, then in ``shared``. Every cell root (the
application root, then overlay roots) is searched with that list of
subdirectories before the bare root itself, which also makes namespaced
names such as ``layouts/standard.html`` resolvable.
"""

import os
import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from viewcells.logging_config import get_logger, log_with_context

logger = get_logger(__name__)

NAME_SUFFIX = "_cell"
SHARED_DIR = "shared"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def underscore(name: str) -> str:
    """Convert a CamelCase class name to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def cell_name_for(cell_class: type) -> str:
    """Directory name of a cell class: its snake_case name without the cell suffix.

    Example:
        cell_name_for(MainMenuCell) == "main_menu"
    """
    name = underscore(cell_class.__name__)
    if name.endswith(NAME_SUFFIX) and name != NAME_SUFFIX:
        name = name[: -len(NAME_SUFFIX)]
    return name


class ViewPathResolver:
    """Computes and caches template search paths per cell class.

    Both caches live for the lifetime of the resolver. Concurrent first
    population only recomputes identical values, so no locking is done.
    """

    def __init__(self, roots: Iterable[str | os.PathLike[str]], base_class: type):
        """Initialize the resolver.

        Args:
            roots: Cell roots in precedence order (application root first)
            base_class: Abstract root cell type; it and its ancestors contribute no directory
        """
        self.roots: tuple[str, ...] = tuple(str(Path(root)) for root in roots)
        self.base_class = base_class
        self._subdirectories: dict[type, tuple[str, ...]] = {}
        self._candidates: dict[tuple[str, ...], tuple[str, ...]] = {}

    def subdirectories_for(self, cell_class: type) -> tuple[str, ...]:
        """Subdirectories to search for a cell class, most derived first, ``shared`` last."""
        subdirs = self._subdirectories.get(cell_class)
        if subdirs is None:
            subdirs = tuple(self._ancestor_segments(cell_class)) + (SHARED_DIR,)
            self._subdirectories[cell_class] = subdirs
            log_with_context(
                logger,
                "debug",
                "Resolved cell subdirectories",
                cell_class=cell_class.__name__,
                subdirectories=list(subdirs),
                event_type="view_paths_resolved",
            )
        return subdirs

    def candidate_paths_for(self, subdirectories: Sequence[str]) -> tuple[str, ...]:
        """Search path list: each root joined with every subdirectory, then the bare root."""
        key = tuple(subdirectories)
        paths = self._candidates.get(key)
        if paths is None:
            collected: list[str] = []
            for root in self.roots:
                collected.extend(os.path.join(root, subdir) for subdir in key)
                collected.append(root)
            paths = tuple(collected)
            self._candidates[key] = paths
        return paths

    def search_paths_for(self, cell_class: type) -> tuple[str, ...]:
        return self.candidate_paths_for(self.subdirectories_for(cell_class))

    def preload(self, cell_classes: Iterable[type]) -> None:
        """Compute search paths for the given classes ahead of the first render."""
        for cell_class in cell_classes:
            self.search_paths_for(cell_class)

    def _ancestor_segments(self, cell_class: type) -> list[str]:
        if not issubclass(cell_class, self.base_class):
            raise TypeError(f"{cell_class!r} is not a subclass of {self.base_class.__name__}")

        segments: list[str] = []
        for klass in cell_class.__mro__:
            if klass is self.base_class:
                break
            # Mixins outside the cell hierarchy have no view directory
            if not issubclass(klass, self.base_class):
                continue
            segment = cell_name_for(klass)
            if segment not in segments:
                segments.append(segment)
        return segments
