"""Wiring cells into a FastAPI application."""

from fastapi import FastAPI

from viewcells.logging_config import get_logger, log_with_context, setup_logging
from viewcells.middleware.error_handlers import register_error_handlers
from viewcells.renderer import CellRenderer

logger = get_logger(__name__)


def install_cells(
    app: FastAPI,
    renderer: CellRenderer | None = None,
    configure_logging: bool = False,
) -> CellRenderer:
    """Attach a cell renderer to the app and register cell error handlers.

    Args:
        app: FastAPI application instance
        renderer: Renderer to share (defaults to a new one built from settings)
        configure_logging: Set up JSON logging at the configured log level

    Returns:
        The installed renderer
    """
    renderer = renderer or CellRenderer()
    if configure_logging:
        setup_logging(renderer.settings.log_level)
    renderer.preload()
    app.state.cell_renderer = renderer
    register_error_handlers(app)

    log_with_context(
        logger,
        "info",
        "Cells installed",
        environment=renderer.settings.environment,
        perform_caching=renderer.settings.perform_caching,
        cell_roots=list(renderer.resolver.roots),
        event_type="cells_installed",
    )
    return renderer
