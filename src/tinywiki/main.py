"""TinyWiki FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from tinywiki.config import Settings, settings
from tinywiki.core.errors import StorageError
from tinywiki.core.models import Page
from tinywiki.core.routing import ALL_METHODS, make_handler, root_path
from tinywiki.core.storage import FileStorage, Storage
from tinywiki.core.templates import TemplateRegistry, load_templates

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: announce where pages live."""
    logger.info("%s serving pages from %s", app.title, app.state.settings.data_dir)
    yield


def build_router(
    storage: Storage,
    templates: TemplateRegistry,
    front_page: str = "FrontPage",
) -> APIRouter:
    """Create the wiki routes bound to a store and a template registry."""
    router = APIRouter()

    async def view_page(request: Request, title: str) -> Response:
        """View a wiki page."""
        try:
            page = await storage.load(title)
        except StorageError as exc:
            # Page doesn't exist (or can't be read) - redirect to edit to create it
            logger.debug("Page %s unavailable (%s), redirecting to editor", title, exc)
            return RedirectResponse(url=f"{root_path(request)}/edit/{title}", status_code=302)

        return templates.render(request, "view", page=page)

    async def edit_page(request: Request, title: str) -> Response:
        """Edit page form."""
        try:
            page = await storage.load(title)
        except StorageError:
            # New page
            page = Page(title=title, body=b"", exists=False)

        return templates.render(request, "edit", page=page)

    async def save_page(request: Request, title: str) -> Response:
        """Save page content."""
        form = await request.form()
        body = form.get("body", "")
        if not isinstance(body, str):
            body = ""

        try:
            await storage.save(title, body.encode("utf-8"))
        except StorageError as exc:
            logger.error("Failed to save page %s: %s", title, exc)
            return PlainTextResponse(str(exc), status_code=500)

        return RedirectResponse(url=f"{root_path(request)}/view/{title}", status_code=302)

    async def front(request: Request) -> Response:
        """Home page - redirect to the front page."""
        return RedirectResponse(url=f"{root_path(request)}/view/{front_page}", status_code=302)

    async def index(request: Request) -> Response:
        """List all pages."""
        titles = await storage.list_titles()
        return templates.render(request, "index", titles=titles)

    router.add_api_route(
        "/view/{title}", make_handler(view_page), methods=ALL_METHODS, response_class=HTMLResponse
    )
    router.add_api_route(
        "/edit/{title}", make_handler(edit_page), methods=ALL_METHODS, response_class=HTMLResponse
    )
    router.add_api_route(
        "/save/{title}",
        make_handler(save_page, methods=["POST"]),
        methods=ALL_METHODS,
        response_class=HTMLResponse,
    )
    router.add_api_route("/", front, methods=["GET"])
    router.add_api_route("/index", index, methods=["GET"], response_class=HTMLResponse)
    return router


def create_app(
    config: Settings | None = None,
    storage: Storage | None = None,
    templates: TemplateRegistry | None = None,
) -> FastAPI:
    """Build the application.

    Missing collaborators are created from ``config``. Raises
    ``TemplateSetupError`` or ``StorageError`` when initialization fails.
    """
    config = config or settings
    if templates is None:
        templates = load_templates(config.templates_dir, app_title=config.app_title)
    if storage is None:
        storage = FileStorage(config.data_dir)

    app = FastAPI(
        title=config.app_title,
        debug=config.debug,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.include_router(build_router(storage, templates, front_page=config.front_page))
    return app
