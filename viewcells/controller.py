"""Host context handed to cells in place of a framework controller."""

from collections.abc import Mapping, MutableMapping
from typing import Any

from fastapi import Request


class HostContext:
    """Request-scoped values a cell may reach through its controller.

    Cells treat this as opaque; only ``params``, ``session`` and ``request``
    are read.
    """

    def __init__(
        self,
        params: Mapping[str, Any] | None = None,
        session: MutableMapping[str, Any] | None = None,
        request: Any = None,
    ):
        self.params = dict(params or {})
        self.session = session if session is not None else {}
        self.request = request

    @classmethod
    def from_request(cls, request: Request) -> "HostContext":
        """Build a host context from a FastAPI/Starlette request.

        Path parameters take precedence over query parameters. The session is
        only available when a SessionMiddleware is installed.
        """
        params: dict[str, Any] = dict(request.query_params)
        params.update(request.path_params)
        session = request.session if "session" in request.scope else {}
        return cls(params=params, session=session, request=request)
