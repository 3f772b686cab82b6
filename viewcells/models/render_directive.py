"""Pydantic model for the output decision a state makes."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Render options that select a directive; everything else is passed through to the view.
CONTROL_OPTIONS = frozenset({"layout", "text", "state", "nothing"})


class DirectiveKind(str, Enum):
    """What a state decided to output."""

    DEFAULT = "default"
    TEXT = "text"
    STATE = "state"
    NOTHING = "nothing"
    LAYOUT = "layout"


class RenderDirective(BaseModel):
    """The single render decision of one state invocation.

    Layout directives wrap an inner directive describing the content
    placed into the layout.
    """

    model_config = ConfigDict(frozen=True)

    kind: DirectiveKind = Field(default=DirectiveKind.DEFAULT, description="Directive variant")
    text: str | None = Field(default=None, description="Literal output for TEXT")
    state: str | None = Field(default=None, description="State whose view is rendered for STATE")
    layout: str | bool | None = Field(default=None, description="Layout name, or True for the cell's own layout")
    inner: "RenderDirective | None" = Field(default=None, description="Directive rendered inside a LAYOUT")
    options: dict[str, Any] = Field(default_factory=dict, description="Pass-through view options (e.g. locals)")

    @classmethod
    def from_options(cls, options: dict[str, Any] | None = None) -> "RenderDirective":
        """Build a directive from keyword render options.

        Dispatch order: layout, text, state, nothing, default.
        """
        options = dict(options or {})
        view_options = {k: v for k, v in options.items() if k not in CONTROL_OPTIONS}

        layout = options.pop("layout", None)
        if layout:
            return cls(
                kind=DirectiveKind.LAYOUT,
                layout=layout if layout is True else str(layout),
                inner=cls.from_options(options),
                options=view_options,
            )
        if options.get("text") is not None:
            return cls(kind=DirectiveKind.TEXT, text=str(options["text"]), options=view_options)
        if options.get("state"):
            return cls(kind=DirectiveKind.STATE, state=str(options["state"]), options=view_options)
        if options.get("nothing"):
            return cls(kind=DirectiveKind.NOTHING, options=view_options)
        return cls(options=view_options)

    @classmethod
    def for_text(cls, text: str) -> "RenderDirective":
        return cls(kind=DirectiveKind.TEXT, text=text)

    @classmethod
    def suppressed(cls) -> "RenderDirective":
        return cls(kind=DirectiveKind.NOTHING)


RenderDirective.model_rebuild()
