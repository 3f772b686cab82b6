"""viewcells: reusable, cacheable view components for server-side rendering"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("viewcells")
except PackageNotFoundError:
    __version__ = "dev"

CELL_DIR = "app/cells"

from viewcells.base import Cell  # noqa: E402
from viewcells.compatibility import LegacyCellMixin  # noqa: E402
from viewcells.controller import HostContext  # noqa: E402
from viewcells.registry import CellRegistry, register, registry  # noqa: E402
from viewcells.renderer import CellRenderer, get_cell_renderer  # noqa: E402

__all__ = [
    "CELL_DIR",
    "Cell",
    "CellRegistry",
    "CellRenderer",
    "HostContext",
    "LegacyCellMixin",
    "__version__",
    "get_cell_renderer",
    "register",
    "registry",
]
