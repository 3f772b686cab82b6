"""Entry point for creating and rendering cells by name."""

from collections.abc import Mapping
from typing import Any

from viewcells.base import Cell
from viewcells.cache import get_fragment_store
from viewcells.caching import CachingDecorator
from viewcells.config import Settings, get_settings
from viewcells.logging_config import get_logger, log_with_context
from viewcells.protocols import FragmentStoreProtocol, HostContextProtocol, TemplateEngineProtocol
from viewcells.registry import CellRegistry
from viewcells.registry import registry as default_registry
from viewcells.view_paths import ViewPathResolver
from viewcells.views.template_engine import Jinja2TemplateEngine

logger = get_logger(__name__)


class CellRenderer:
    """Creates cells by name and renders their states.

    Holds everything a render needs: settings, the cell registry, the
    template engine, the view path resolver and the fragment store.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: CellRegistry | None = None,
        engine: TemplateEngineProtocol | None = None,
        resolver: ViewPathResolver | None = None,
        fragment_store: FragmentStoreProtocol | None = None,
    ):
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else default_registry
        self.engine = engine or Jinja2TemplateEngine()
        self.resolver = resolver or ViewPathResolver(self.settings.cell_roots, base_class=Cell)
        self.fragment_store = fragment_store if fragment_store is not None else get_fragment_store()

    @property
    def store_options(self) -> dict[str, Any]:
        if self.settings.cache_expires_in is None:
            return {}
        return {"expires_in": self.settings.cache_expires_in}

    def preload(self) -> None:
        """Compute view paths for every registered cell class."""
        classes = self.registry.classes()
        self.resolver.preload(classes)
        log_with_context(
            logger,
            "info",
            "Cell view paths preloaded",
            count=len(classes),
            event_type="view_paths_preloaded",
        )

    def create_cell(self, controller: HostContextProtocol, name: str, params: Mapping[str, Any] | None = None) -> Cell:
        """Create an instance of the cell registered as ``name``.

        Raises:
            CellNotFoundError: If no cell is registered under the name
        """
        cell_class = self.registry.lookup(str(name))
        return cell_class(controller, str(name), params or {}, renderer=self)

    def caching_for(self, cell: Cell) -> CachingDecorator:
        return CachingDecorator(
            cell,
            self.fragment_store,
            enabled=self.settings.perform_caching,
            store_options=self.store_options,
        )

    def render_cell(
        self,
        controller: HostContextProtocol,
        name: str,
        state: str,
        params: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Create a cell and render one of its states, through the fragment cache."""
        cell = self.create_cell(controller, name, params)
        return self.caching_for(cell).render_state(str(state))


# Default renderer (built on first use from the global settings)
_renderer_instance: CellRenderer | None = None


def get_cell_renderer() -> CellRenderer:
    """Get the process-wide default CellRenderer."""
    global _renderer_instance
    if _renderer_instance is None:
        _renderer_instance = CellRenderer()
    return _renderer_instance
