"""Protocol definitions for the collaborators of the render pipeline."""

from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any, Protocol


class TemplateEngineProtocol(Protocol):
    """Protocol for template engines.

    The engine renders a file found on an ordered list of search paths.
    """

    def render_file(self, path: str, context: Mapping[str, Any], search_paths: Sequence[str] = ()) -> str:
        """Render a template file.

        Args:
            path: Template name relative to the search paths, or an absolute path
            context: Template variables
            search_paths: Directories searched in order

        Returns:
            Rendered content

        Raises:
            MissingTemplateError: If the template does not exist
        """
        ...


class FragmentStoreProtocol(Protocol):
    """Protocol for fragment caches.

    Entry lifetime (expiry, eviction) is entirely up to the store.
    """

    def read(self, key: str) -> str | None:
        """Return the stored fragment, or None."""
        ...

    def write(self, key: str, content: str, **options: Any) -> None:
        """Store a fragment; options (e.g. expires_in) are store specific."""
        ...


class HostContextProtocol(Protocol):
    """Request-scoped context supplied by the host framework."""

    params: Mapping[str, Any]
    session: MutableMapping[str, Any]
    request: Any
