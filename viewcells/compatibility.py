"""Backwards compatibility for cells written against the old state contract.

Old cells returned their content from the state method instead of calling
``render(text=...)``. Mix this in to keep such a cell working unchanged::

    class MyOldCell(LegacyCellMixin, Cell):
        def show(self):
            return "<p>content</p>"
"""

from typing import Any

from viewcells.models import RenderDirective


class LegacyCellMixin:
    """Treats a non-None state return value as text output when render was not called."""

    _render_directive: RenderDirective | None
    _state_return_value: Any

    def render_to_string(self, state: str, directive: RenderDirective | None = None) -> str | None:
        if directive is None and self._render_directive is None and self._state_return_value is not None:
            directive = RenderDirective.for_text(str(self._state_return_value))
        return super().render_to_string(state, directive)  # type: ignore[misc]
