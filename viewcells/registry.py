"""Registry mapping cell names to cell classes."""

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, overload

from viewcells.exceptions import CellNotFoundError
from viewcells.logging_config import get_logger, log_with_context
from viewcells.view_paths import cell_name_for

if TYPE_CHECKING:
    from viewcells.base import Cell


logger = get_logger(__name__)


class CellRegistry:
    """Explicit name -> class lookup used to create cells by name."""

    def __init__(self):
        self._cells: dict[str, type["Cell"]] = {}

    @overload
    def register(self, cell_class: type["Cell"], *, name: str | None = None) -> type["Cell"]: ...

    @overload
    def register(
        self, cell_class: None = None, *, name: str | None = None
    ) -> Callable[[type["Cell"]], type["Cell"]]: ...

    def register(self, cell_class=None, *, name=None):
        """Register a cell class, directly or as a class decorator.

        Args:
            cell_class: Cell class to register
            name: Lookup name (defaults to the class's cell name, e.g. "main_menu")

        Returns:
            The class, or a decorator when called without one
        """
        if cell_class is None:
            return lambda klass: self.register(klass, name=name)

        if not isinstance(cell_class, type):
            raise TypeError(f"Only classes can be registered as cells, got {cell_class!r}")

        key = name or cell_name_for(cell_class)
        self._cells[key] = cell_class
        log_with_context(
            logger,
            "debug",
            "Cell registered",
            cell_name=key,
            cell_class=cell_class.__name__,
            event_type="cell_registered",
        )
        return cell_class

    def unregister(self, name: str) -> None:
        self._cells.pop(str(name), None)

    def lookup(self, name: str) -> type["Cell"]:
        """Find the class registered under a cell name.

        Raises:
            CellNotFoundError: If nothing is registered under the name
        """
        try:
            return self._cells[str(name)]
        except KeyError:
            raise CellNotFoundError(str(name)) from None

    def classes(self) -> list[type["Cell"]]:
        return list(self._cells.values())

    def __contains__(self, name: object) -> bool:
        return str(name) in self._cells

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)


# Global registry instance
registry = CellRegistry()


def register(cell_class=None, *, name: str | None = None):
    """Register a cell class in the global registry."""
    return registry.register(cell_class, name=name)
