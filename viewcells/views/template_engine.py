"""Jinja2 adapter for the template engine contract."""

import os
from collections.abc import Mapping, Sequence
from typing import Any

from jinja2 import Environment, FileSystemLoader, TemplateNotFound

from viewcells.exceptions import MissingTemplateError
from viewcells.logging_config import get_logger, log_with_context

logger = get_logger(__name__)


class Jinja2TemplateEngine:
    """Renders template files found on a list of search paths.

    One Jinja2 environment is kept per distinct search path list, so compiled
    templates are reused across renders of the same cell class.
    """

    def __init__(self, autoescape: bool = True, **environment_options: Any):
        self.autoescape = autoescape
        self.environment_options = environment_options
        self._environments: dict[tuple[str, ...], Environment] = {}

    def environment_for(self, search_paths: Sequence[str]) -> Environment:
        key = tuple(search_paths)
        env = self._environments.get(key)
        if env is None:
            env = Environment(
                loader=FileSystemLoader(list(key)),
                autoescape=self.autoescape,
                **self.environment_options,
            )
            self._environments[key] = env
        return env

    def render_file(self, path: str, context: Mapping[str, Any], search_paths: Sequence[str] = ()) -> str:
        """Render a template file.

        Args:
            path: Template name relative to the search paths, or an absolute file path
            context: Template variables
            search_paths: Directories searched in order

        Returns:
            Rendered template

        Raises:
            MissingTemplateError: If no search path holds the template
        """
        if os.path.isabs(path):
            search_paths = (os.path.dirname(path),)
            name = os.path.basename(path)
        else:
            name = path.replace(os.sep, "/")

        env = self.environment_for(search_paths)
        try:
            template = env.get_template(name)
        except TemplateNotFound as e:
            log_with_context(
                logger,
                "debug",
                "Template not found",
                template=path,
                search_paths=list(search_paths),
                event_type="template_not_found",
            )
            raise MissingTemplateError(path, search_paths) from e

        return template.render(dict(context))
