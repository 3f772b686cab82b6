"""Cell base class.

A cell is a lightweight controller for a fragment of a page: it is created
with a parameter mapping, runs a *state* method that assigns variables, and
renders the view belonging to that state.

A typical render cycle, ``renderer.render_cell(controller, "blog", "newest_article", params)``:

- an instance of ``BlogCell`` is created with the given parameters
- the state method ``newest_article`` is executed and assigns attributes
- if the state called ``render(text=...)``, that string is the output
- otherwise the state view is searched, usually ``app/cells/blog/newest_article.html``
- after the view has been found, it is rendered and returned

State methods usually just assign attributes and return, letting the cell
render the view named after the state.

Cells are autonomous: the controller's parameters are not directly available
to the cell or its views. Whatever a cell needs is passed in explicitly and
is available as ``params``.

Cells form a class hierarchy. A subclass inherits its parent's states and,
whenever a view is looked up, its parent's views: the subclass directory is
searched first, then the parent's, up to ``Cell`` itself, then ``shared``.

    class MenuCell(Cell):
        def show(self): ...
        def edit(self): ...

    class MainMenuCell(MenuCell):
        pass

With ``menu/show.html``, ``menu/edit.html`` and ``main_menu/show.html``,
rendering ``main_menu#show`` uses ``main_menu/show.html`` while
``main_menu#edit`` falls back to ``menu/edit.html``.
"""

import os
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

from markupsafe import Markup

from viewcells.exceptions import DoubleRenderError, UnknownStateError
from viewcells.logging_config import get_logger, log_with_context
from viewcells.models import DirectiveKind, RenderDirective
from viewcells.view_paths import cell_name_for
from viewcells.views.template_renderer import MissingTemplatePolicy, TemplateRenderer

if TYPE_CHECKING:
    from viewcells.renderer import CellRenderer


logger = get_logger(__name__)

CacheRule = bool | str | Callable[[Mapping[str, Any]], Any]


class Cell:
    """Base class of all cells."""

    # state name -> cache rule, see caches()
    cache_states: ClassVar[dict[str, CacheRule]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        # Each subclass starts from a copy of its parent's declarations
        cls.cache_states = dict(cls.cache_states)

    def __init__(
        self,
        controller: Any,
        cell_name: str | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        renderer: "CellRenderer | None" = None,
    ):
        self.controller = controller
        self.state_name: str | None = None
        self._cell_name = cell_name or self.default_cell_name()
        self._opts: Mapping[str, Any] = MappingProxyType(dict(options or {}))
        self._renderer = renderer
        self._render_directive: RenderDirective | None = None
        self._state_return_value: Any = None
        self._views: dict[str, TemplateRenderer] = {}

    @classmethod
    def default_cell_name(cls) -> str:
        """Name of this cell class, e.g. ``UserCell`` -> ``"user"``."""
        return cell_name_for(cls)

    @classmethod
    def caches(cls, *states: str, condition: CacheRule | None = None) -> None:
        """Declare states whose output may be cached.

        Args:
            *states: State names; ``"all"`` covers every state, ``"none"`` disables caching
            condition: True/False, a callable taking the params, or the name of a
                cell method taking the params
        """
        for state in states:
            cls.cache_states[str(state)] = condition if condition is not None else True

    @property
    def cell_name(self) -> str:
        return self._cell_name

    @property
    def renderer(self) -> "CellRenderer":
        if self._renderer is None:
            from viewcells.renderer import get_cell_renderer

            self._renderer = get_cell_renderer()
        return self._renderer

    @property
    def params(self) -> Mapping[str, Any]:
        """The parameters passed to this cell."""
        return self._opts

    @property
    def controller_params(self) -> Mapping[str, Any]:
        """Read-only view of the host request's parameters.

        Couples the cell to the request it is rendered for, which defeats caching.
        """
        return MappingProxyType(dict(getattr(self.controller, "params", None) or {}))

    @property
    def session(self) -> Any:
        """The host session. Couples the cell to the current user."""
        return getattr(self.controller, "session", None)

    @property
    def request(self) -> Any:
        """The host request object. Couples the cell to the current request."""
        return getattr(self.controller, "request", None)

    def render(self, **options: Any) -> None:
        """Decide what the current state outputs.

        With no options the state view is rendered. Valid options:

        - ``state``: render the view of another state, without executing it
        - ``text``: use a string as the content of the cell
        - ``nothing``: when True the cell renders None, so callers can chain
          cells: ``render_cell("article", "recent") or render_cell("blog_post", "recent")``
        - ``layout``: True places the content into ``<cell_name>/layout``; a
          name places it into ``layouts/<name>``
        - ``locals``: extra variables for the view

        Raises:
            DoubleRenderError: If render or redirect_to already ran in this state
        """
        if self._render_directive is not None:
            raise DoubleRenderError(details={"cell_name": self.cell_name, "state": self.state_name})
        self._render_directive = RenderDirective.from_options(options)

    def redirect_to(self, *arguments: str, **options: Any) -> None:
        """Use another state's output as the output of this state.

        Another state of this cell::

            self.redirect_to("alternate_state", some="option")

        Or a state of another cell altogether::

            self.redirect_to("another_cell", "some_state", some="option")

        The target state is executed, unlike ``render(state=...)``.
        """
        if len(arguments) not in (1, 2):
            raise TypeError("redirect_to expects (state) or (cell_name, state)")
        if self._render_directive is not None:
            raise DoubleRenderError(details={"cell_name": self.cell_name, "state": self.state_name})

        cell_name, state = (self.cell_name, arguments[0]) if len(arguments) == 1 else arguments
        content = self.render_cell(cell_name, state, {**self.params, **options})
        self._render_directive = RenderDirective.suppressed() if content is None else RenderDirective.for_text(content)

    def render_cell(self, name: str, state: str, params: Mapping[str, Any] | None = None) -> str | None:
        """Render a state of another (or the same) cell for the same host context."""
        return self.renderer.render_cell(self.controller, name, state, params)

    def view_for_state(self, state: str) -> str | None:
        """Hook for cells that pick their view file dynamically.

        A returned template path is used as is: absolute paths are loaded
        directly, the ancestor directory chain is not consulted.
        """
        return None

    def render_state(self, state: str) -> str | None:
        """Execute a state method and render its output."""
        state = str(state)
        self.state_name = state
        self._render_directive = None
        self._state_return_value = None
        method = self._state_method(state)

        log_with_context(
            logger,
            "debug",
            "Rendering cell state",
            cell_name=self.cell_name,
            state=state,
            event_type="cell_render_state",
        )
        self._state_return_value = method()

        return self.render_to_string(state)

    def render_to_string(self, state: str, directive: RenderDirective | None = None) -> str | None:
        """Resolve a render directive into output for the given state."""
        if directive is None:
            directive = self._render_directive or RenderDirective()

        if directive.kind is DirectiveKind.LAYOUT:
            return self.render_layout(directive.layout, state, directive.inner)
        if directive.kind is DirectiveKind.TEXT:
            return directive.text
        if directive.kind is DirectiveKind.STATE:
            return self.render_view_for_state(directive.state, directive.options)
        if directive.kind is DirectiveKind.NOTHING:
            return None

        view = self.view_for_state(state)
        if view:
            return self.render_view_for_state(view, directive.options, literal=True)
        return self.render_view_for_state(state, directive.options)

    def render_view_for_state(
        self,
        state: str,
        options: Mapping[str, Any] | None = None,
        literal: bool = False,
    ) -> str | None:
        """Render the view belonging to a state.

        Can be called from other states as well, when two states share a view.
        """
        template = state if literal else self.template_file(state)
        return self.action_view_template(state).render_state_view(template, state, options)

    def render_layout(self, layout: str | bool | None, state: str, inner: RenderDirective | None = None) -> str:
        content = self.render_to_string(state, inner or RenderDirective())
        view = self.action_view_template(state)
        view.assign("content_for_layout", Markup(content or ""))

        template = f"{self.cell_name}/layout" if layout is True else f"layouts/{layout}"
        return view.render(self.template_file(template))

    def action_view_template(self, state: str) -> TemplateRenderer:
        """The rendering context for a state, created on first use."""
        view = self._views.get(state)
        if view is None:
            renderer = self.renderer
            view = TemplateRenderer(
                self,
                renderer.engine,
                renderer.resolver.search_paths_for(type(self)),
                policy=MissingTemplatePolicy.for_environment(renderer.settings.environment),
            )
            self._views[state] = view
        return view

    def template_file(self, name: str) -> str:
        if os.path.splitext(name)[1]:
            return name
        return f"{name}{self.renderer.settings.template_extension}"

    def published_variables(self) -> dict[str, Any]:
        """Attributes assigned by the cell that its views can use."""
        ignored = self.ivars_to_ignore()
        return {name: value for name, value in vars(self).items() if not name.startswith("_") and name not in ignored}

    def ivars_to_ignore(self) -> frozenset[str]:
        """Public attributes that are not copied into views."""
        return frozenset({"controller"})

    def _state_method(self, state: str) -> Callable[[], Any]:
        if state.startswith("_") or hasattr(Cell, state):
            raise UnknownStateError(self.cell_name, state)
        method = getattr(self, state, None)
        if method is None or not callable(method):
            raise UnknownStateError(self.cell_name, state)
        return method
