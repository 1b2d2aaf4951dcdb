"""FastAPI application serving the documentation page."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse

from config import SiteSettings, load_settings
from observability import setup_logging
from .composer import PageComposer

__version__ = "0.1.0"

logger = logging.getLogger(__name__)


def create_app(settings: Optional[SiteSettings] = None,
               configure_logging: bool = False) -> FastAPI:
    """Build the application.

    Args:
        settings: Site settings; loaded from YAML and environment when omitted
        configure_logging: Install the console/file log handlers
    """
    settings = settings or load_settings()

    if configure_logging:
        setup_logging(
            level=settings.log_level,
            service_name="docsite",
            log_file=settings.log_file,
            use_json=settings.log_json,
        )

    app = FastAPI(title=settings.site_title, version=__version__,
                  docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.composer = PageComposer(settings)

    # Plain ``def`` so Starlette runs the blocking read in its threadpool
    @app.get("/", response_class=HTMLResponse)
    def documentation_page(request: Request):
        """Render docs/main.md, or the fallback view when it cannot be loaded."""
        outcome = request.app.state.composer.render()
        return HTMLResponse(content=outcome.html)

    @app.get("/health")
    async def health():
        """Liveness check."""
        return {"status": "ok"}

    logger.info(
        f"Documentation site ready: docs_path={settings.docs_path} "
        f"mode={settings.render_mode.value} environment={settings.environment}"
    )
    return app


app = create_app(configure_logging=True)
