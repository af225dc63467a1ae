"""Jinja2 rendering of catalog expressions.

Catalog replacement texts and destination paths are small Jinja2 templates
(``"device-{{ device_name }}"``) evaluated against the fields of
:class:`~devicegen.scaffolder.models.DerivedNames`.  Match texts and the
template payload itself are never passed through Jinja2: payload files are
rewritten with literal substitution only.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from .errors import CatalogError


class TemplateRenderer:
    """Renders catalog expressions with a derived-names context.

    Undefined variables are errors so that a typo in the catalog is reported
    instead of silently rendering an empty string.
    """

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self._cache: dict[str, Any] = {}

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Raises:
            CatalogError: The expression is malformed or references an
                unknown name.
        """
        template = self._cache.get(template_string)
        try:
            if template is None:
                template = self.env.from_string(template_string)
                self._cache[template_string] = template
            return template.render(**context)
        except TemplateError as exc:
            raise CatalogError(f"Cannot render {template_string!r}: {exc}") from exc

    def render_path(self, template_string: str, context: dict[str, Any]) -> PurePosixPath:
        """Render a ``/``-separated relative path expression.

        Raises:
            CatalogError: The rendered path is absolute or escapes its root.
        """
        rendered = PurePosixPath(self.render_string(template_string, context))
        if rendered.is_absolute() or ".." in rendered.parts or not rendered.parts:
            raise CatalogError(f"Path {template_string!r} must be a relative path inside the service root")
        return rendered
