"""Template registry for page rendering.

The registry is built once at startup by :func:`load_templates` and handed to
the application factory. Every required template is compiled up front, so a
missing or broken template stops the process before it starts serving.
"""

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from fastapi import Request
from fastapi.responses import PlainTextResponse, Response
from fastapi.templating import Jinja2Templates
from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from tinywiki.core.errors import TemplateSetupError
from tinywiki.core.routing import root_path

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

# Logical view name -> template file
TEMPLATE_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "view": "view.html",
        "edit": "edit.html",
        "index": "index.html",
    }
)


class TemplateRegistry:
    """Immutable set of compiled templates keyed by logical view name."""

    def __init__(self, templates: Jinja2Templates, names: Mapping[str, str]):
        self._templates = templates
        self._names = MappingProxyType(dict(names))

    @property
    def names(self) -> Mapping[str, str]:
        """Logical view names and the files they map to."""
        return self._names

    @property
    def env(self) -> Environment:
        return self._templates.env

    def render(self, request: Request, name: str, **context: Any) -> Response:
        """Render a logical view.

        Templates receive ``root``, the mount prefix for building links. A
        rendering failure becomes a 500 response carrying the error text.
        """
        context.setdefault("root", root_path(request))
        try:
            return self._templates.TemplateResponse(
                request, self._names[name], context
            )
        except TemplateError as exc:
            logger.exception("Failed to render template %r", name)
            return PlainTextResponse(str(exc), status_code=500)


def load_templates(
    directory: Path | None = None,
    app_title: str = "TinyWiki",
) -> TemplateRegistry:
    """Build the template registry from ``directory``.

    Raises:
        TemplateSetupError: if a required template is missing or does not
            compile.
    """
    directory = Path(directory) if directory is not None else DEFAULT_TEMPLATES_DIR
    if not directory.is_dir():
        raise TemplateSetupError(f"template directory not found: {directory}")

    # Escaping is forced on for every template, whatever its file extension.
    env = Environment(
        loader=FileSystemLoader(str(directory)),
        autoescape=True,
        undefined=StrictUndefined,
    )
    env.globals["app_title"] = app_title

    for name, filename in TEMPLATE_NAMES.items():
        try:
            env.get_template(filename)
        except TemplateError as exc:
            raise TemplateSetupError(
                f"cannot load {name!r} template {filename} from {directory}: {exc}"
            ) from exc

    logger.debug("Loaded %d templates from %s", len(TEMPLATE_NAMES), directory)
    return TemplateRegistry(Jinja2Templates(env=env), TEMPLATE_NAMES)
