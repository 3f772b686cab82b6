"""FastAPI dependencies for dependency injection."""

from fastapi import Request

from viewcells.controller import HostContext
from viewcells.renderer import CellRenderer


async def get_cell_renderer_dependency(request: Request) -> CellRenderer:
    """
    Get the shared cell renderer from app state.

    Args:
        request: The FastAPI request object.

    Returns:
        The CellRenderer installed by install_cells().

    Raises:
        RuntimeError: If install_cells() was not called for the app.
    """
    renderer: CellRenderer | None = getattr(request.app.state, "cell_renderer", None)

    if renderer is None:
        raise RuntimeError("Cell renderer not initialized. Call install_cells(app) first.")

    return renderer


async def get_host_context(request: Request) -> HostContext:
    """
    Build the host context cells are rendered with.

    Args:
        request: The FastAPI request object.

    Returns:
        HostContext wrapping the request's parameters and session.
    """
    return HostContext.from_request(request)
