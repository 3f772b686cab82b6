"""viewcells models"""

from viewcells.models.render_directive import CONTROL_OPTIONS, DirectiveKind, RenderDirective

__all__ = [
    "CONTROL_OPTIONS",
    "DirectiveKind",
    "RenderDirective",
]
