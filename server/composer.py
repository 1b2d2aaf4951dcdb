"""Page composition for the documentation site.

Runs locate -> read -> render for one request and wraps the result in the
page shell, or in the fallback error view when any stage fails.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

import jinja2

from config import RenderMode, SiteSettings
from observability import get_structured_logger
from pipelines import (
    DocumentError,
    RenderedContent,
    build_markdown,
    read_document,
    render_markdown,
    render_verbatim,
    resolve_document_path
)

struct_logger = get_structured_logger(__name__, component="page_composer")

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

ERROR_TITLE = "Error Loading Content"
BASE_ERROR_MESSAGE = "Unable to load the documentation content."
KIND_MESSAGES = {
    "not_found": "The documentation file could not be found.",
    "read_failure": "The documentation file could not be read.",
    "compile_failure": "The documentation file could not be compiled.",
}


class RenderState(str, Enum):
    """Per-render pipeline states."""
    START = "start"
    LOCATING = "locating"
    READING = "reading"
    RENDERING = "rendering"
    DONE_OK = "done_ok"
    DONE_ERROR = "done_error"


@dataclass
class ErrorDiagnostic:
    """What went wrong during a failed render."""
    kind: str
    stage: str
    message: str
    detail: str
    path: str
    line: Optional[int] = None

    @classmethod
    def from_error(cls, error: DocumentError) -> 'ErrorDiagnostic':
        kind_message = KIND_MESSAGES.get(error.kind, "")
        return cls(
            kind=error.kind,
            stage=error.stage,
            message=f"{BASE_ERROR_MESSAGE} {kind_message}".strip(),
            detail=error.detail,
            path=error.path,
            line=getattr(error, "line", None),
        )


@dataclass
class RenderOutcome:
    """Final page plus the trail that produced it."""
    html: str
    path: str
    states: List[RenderState] = field(default_factory=list)
    content: Optional[RenderedContent] = None
    diagnostic: Optional[ErrorDiagnostic] = None

    @property
    def state(self) -> RenderState:
        return self.states[-1]

    @property
    def ok(self) -> bool:
        return self.state == RenderState.DONE_OK


class PageComposer:
    """Compose the documentation page for a single request."""

    def __init__(self, settings: Optional[SiteSettings] = None,
                 templates_dir: Optional[Path] = None):
        self.settings = settings or SiteSettings()
        self.templates = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(templates_dir or TEMPLATES_DIR)),
            autoescape=jinja2.select_autoescape(["html"]),
            keep_trailing_newline=True,
        )
        if self.settings.render_mode == RenderMode.COMPILED:
            # Fail at startup rather than on every request for a bad extension list
            build_markdown(self.settings.markdown_extensions)

    def render(self, cwd: Optional[str] = None) -> RenderOutcome:
        """Render the page; document failures become the fallback view."""
        states = [RenderState.START, RenderState.LOCATING]
        path = resolve_document_path(cwd, self.settings.docs_path)

        try:
            states.append(RenderState.READING)
            raw = read_document(path, check_exists=self.settings.check_exists)

            states.append(RenderState.RENDERING)
            if self.settings.render_mode == RenderMode.VERBATIM:
                content = render_verbatim(raw.text)
            else:
                content = render_markdown(raw.text, path, self.settings.markdown_extensions)
        except DocumentError as e:
            states.append(RenderState.DONE_ERROR)
            diagnostic = ErrorDiagnostic.from_error(e)
            struct_logger.error(
                f"Failed to render documentation from {path} ({e.kind}): {e.detail}",
                stage=e.stage,
                kind=e.kind,
                path=path,
            )
            return RenderOutcome(
                html=self._error_page(diagnostic),
                path=path,
                states=states,
                diagnostic=diagnostic,
            )

        states.append(RenderState.DONE_OK)
        struct_logger.info(
            "Rendered documentation page",
            path=path,
            bytes=raw.byte_length,
            mode=self.settings.render_mode.value,
        )
        return RenderOutcome(
            html=self._document_page(content),
            path=path,
            states=states,
            content=content,
        )

    def _document_page(self, content: RenderedContent) -> str:
        template = self.templates.get_template("document.html")
        return template.render(
            lang=self.settings.lang,
            page_title=content.title or self.settings.site_title,
            description=content.metadata.get("description") or self.settings.site_description,
            body=content.html,
        )

    def _error_page(self, diagnostic: ErrorDiagnostic) -> str:
        template = self.templates.get_template("error.html")
        return template.render(
            lang=self.settings.lang,
            page_title=self.settings.site_title,
            description=self.settings.site_description,
            error_title=ERROR_TITLE,
            message=diagnostic.message,
            detail=diagnostic.detail if self.settings.is_development else None,
            path=diagnostic.path if self.settings.show_path else None,
        )
