"""Per-state rendering context for cell views."""

from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING, Any

from markupsafe import Markup

from viewcells.exceptions import MissingTemplateError
from viewcells.logging_config import get_logger, log_with_context
from viewcells.protocols import TemplateEngineProtocol

if TYPE_CHECKING:
    from viewcells.base import Cell


logger = get_logger(__name__)


class MissingTemplatePolicy(str, Enum):
    """What a missing state view turns into, per environment."""

    DIAGNOSTIC = "diagnostic"
    RAISE = "raise"
    WARN = "warn"

    @classmethod
    def for_environment(cls, environment: str) -> "MissingTemplatePolicy":
        if environment == "development":
            return cls.DIAGNOSTIC
        if environment == "test":
            return cls.RAISE
        return cls.WARN


class TemplateRenderer:
    """Rendering context bound to one state of one cell instance.

    Published cell variables are copied once, when the renderer is created.
    Re-rendering through the same renderer (e.g. a layout wrapping the state
    view) sees the same variables plus whatever was assigned since.
    """

    def __init__(
        self,
        cell: "Cell",
        engine: TemplateEngineProtocol,
        search_paths: tuple[str, ...],
        policy: MissingTemplatePolicy = MissingTemplatePolicy.RAISE,
    ):
        self.cell = cell
        self.engine = engine
        self.search_paths = search_paths
        self.policy = policy
        self.assigns: dict[str, Any] = dict(cell.published_variables())

    @property
    def params(self) -> Mapping[str, Any]:
        return self.cell.params

    @property
    def session(self) -> Any:
        return self.cell.session

    @property
    def controller_params(self) -> Mapping[str, Any]:
        return self.cell.controller_params

    @property
    def request(self) -> Any:
        return self.cell.request

    def assign(self, name: str, value: Any) -> None:
        self.assigns[name] = value

    def render_cell(self, name: str, state: str, **params: Any) -> Markup:
        """Embed another cell in this view."""
        return Markup(self.cell.render_cell(name, state, params) or "")

    def context(self, local_assigns: Mapping[str, Any] | None = None) -> dict[str, Any]:
        context = dict(self.assigns)
        context.update(
            cell=self.cell,
            params=self.params,
            session=self.session,
            controller_params=self.controller_params,
            request=self.request,
            render_cell=self.render_cell,
        )
        if local_assigns:
            context.update(local_assigns)
        return context

    def render(self, template_name: str, options: Mapping[str, Any] | None = None) -> str:
        """Render a template against this renderer's search paths.

        Raises:
            MissingTemplateError: If no search path holds the template
        """
        options = options or {}
        return self.engine.render_file(
            template_name,
            self.context(options.get("locals")),
            self.search_paths,
        )

    def render_state_view(
        self,
        template_name: str,
        state: str,
        options: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Render a state view, applying the missing template policy."""
        try:
            return self.render(template_name, options)
        except MissingTemplateError as e:
            message = f"ATTENTION: cell view for {self.cell.cell_name}#{state} is not readable/existing."

            if self.policy is MissingTemplatePolicy.RAISE:
                raise
            if self.policy is MissingTemplatePolicy.DIAGNOSTIC:
                return message

            log_with_context(
                logger,
                "warning",
                message,
                cell_name=self.cell.cell_name,
                state=state,
                template=e.template,
                event_type="cell_view_missing",
            )
            return None
