"""Markdown compilation with YAML front-matter and markup balance checks."""

import re
from html import unescape
from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Any, Dict, List, Optional, Sequence, Tuple

import markdown
import yaml
from markupsafe import escape

from .errors import DocumentCompileError

DEFAULT_EXTENSIONS = ("fenced_code", "tables", "toc")

_FRONT_MATTER_OPEN = re.compile(r"\A(?:\ufeff)?---[ \t]*\r?\n")
_FRONT_MATTER_CLOSE = re.compile(r"^---[ \t]*\r?$\n?", re.MULTILINE)

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Elements whose end tag HTML lets authors omit, and the open elements a new
# start tag closes implicitly.
OPTIONAL_END_ELEMENTS = frozenset({
    "li", "p", "dt", "dd", "tr", "td", "th", "thead", "tbody", "tfoot",
    "option", "optgroup", "colgroup", "rt", "rp",
})
IMPLICITLY_CLOSED_BY = {
    "li": {"li"},
    "dt": {"dt", "dd"},
    "dd": {"dt", "dd"},
    "tr": {"tr", "td", "th"},
    "td": {"td", "th"},
    "th": {"td", "th"},
    "tbody": {"thead", "tbody", "tr", "td", "th"},
    "tfoot": {"thead", "tbody", "tr", "td", "th"},
    "option": {"option"},
    "optgroup": {"option", "optgroup"},
    "rt": {"rt", "rp"},
    "rp": {"rt", "rp"},
}


@dataclass
class RenderedContent:
    """Page-ready output of one render."""
    html: str
    metadata: Dict[str, Any] = field(default_factory=dict)
    title: Optional[str] = None


def split_front_matter(text: str, path: str = "") -> Tuple[Dict[str, Any], str]:
    """Separate a leading YAML front-matter block from the markdown body.

    Text without an opening ``---`` line, or whose opening line is never
    matched by a closing one, is returned unchanged with empty metadata;
    a lone leading ``---`` is a thematic break.

    Raises:
        DocumentCompileError: A closed block is not valid YAML or does
            not hold a mapping
    """
    opening = _FRONT_MATTER_OPEN.match(text)
    if not opening:
        return {}, text

    closing = _FRONT_MATTER_CLOSE.search(text, opening.end())
    if not closing:
        return {}, text

    block = text[opening.end():closing.start()]
    try:
        metadata = yaml.safe_load(block)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # +1 for the opening delimiter, +1 for 1-based lines
            line = mark.line + 2
        raise DocumentCompileError("Front-matter is not valid YAML", path, detail=str(e), line=line) from e

    if metadata is None:
        metadata = {}
    if not isinstance(metadata, dict):
        raise DocumentCompileError(
            "Front-matter must be a mapping of keys to values",
            path,
            detail=f"got {type(metadata).__name__}",
            line=2,
        )

    return metadata, text[closing.end():]


class _MarkupBalanceChecker(HTMLParser):
    """Track open elements and fail on the first unbalanced tag."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.open_tags: List[Tuple[str, int]] = []
        self.problem: Optional[str] = None

    def _close_implied(self, closable) -> None:
        while self.open_tags and self.open_tags[-1][0] in closable:
            self.open_tags.pop()

    def handle_starttag(self, tag, attrs):
        if tag in IMPLICITLY_CLOSED_BY:
            self._close_implied(IMPLICITLY_CLOSED_BY[tag])
        if tag not in VOID_ELEMENTS:
            self.open_tags.append((tag, self.getpos()[0]))

    def handle_endtag(self, tag):
        if self.problem or tag in VOID_ELEMENTS:
            return
        # </ul> ends any <li> left open inside it
        while self.open_tags and self.open_tags[-1][0] != tag \
                and self.open_tags[-1][0] in OPTIONAL_END_ELEMENTS:
            self.open_tags.pop()
        if not self.open_tags:
            self.problem = f"Unexpected closing tag </{tag}>"
            return
        expected, _ = self.open_tags[-1]
        if expected != tag:
            self.problem = f"Expected closing tag </{expected}> but found </{tag}>"
            return
        self.open_tags.pop()

    def finish(self) -> Optional[str]:
        self.close()
        if self.problem:
            return self.problem
        unclosed = [tag for tag, _ in self.open_tags if tag not in OPTIONAL_END_ELEMENTS]
        if unclosed:
            return f"Unclosed tag <{unclosed[-1]}>"
        return None


def check_markup_balance(html: str) -> Optional[str]:
    """Return a description of the first unbalanced tag in ``html``, if any.

    End tags HTML allows to be omitted (``</li>``, ``</p>``, ``</td>`` ...)
    are implied rather than reported.
    """
    checker = _MarkupBalanceChecker()
    checker.feed(html)
    return checker.finish()


class _FirstHeadingParser(HTMLParser):
    """Collect the text of the first ``<h1>``."""

    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.depth = 0
        self.done = False
        self.parts: List[str] = []

    def handle_starttag(self, tag, attrs):
        if tag == "h1" and not self.done:
            self.depth += 1

    def handle_endtag(self, tag):
        if tag == "h1" and self.depth:
            self.depth -= 1
            self.done = True

    def handle_data(self, data):
        if self.depth and not self.done:
            self.parts.append(data)


def _first_toc_heading(tokens) -> Optional[str]:
    for token in tokens:
        if token.get("level") == 1:
            return unescape(token.get("name", ""))
        found = _first_toc_heading(token.get("children", []))
        if found:
            return found
    return None


def _extract_title(metadata: Dict[str, Any], converter: markdown.Markdown, html: str) -> Optional[str]:
    title = metadata.get("title")
    if title is not None and str(title).strip():
        return str(title).strip()

    heading = _first_toc_heading(getattr(converter, "toc_tokens", None) or [])
    if not heading:
        parser = _FirstHeadingParser()
        parser.feed(html)
        parser.close()
        heading = "".join(parser.parts)
    return heading.strip() or None


def build_markdown(extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> markdown.Markdown:
    """Create a fresh converter; raises if an extension cannot be loaded."""
    return markdown.Markdown(extensions=list(extensions), output_format="html")


def render_markdown(text: str, path: str = "",
                    extensions: Sequence[str] = DEFAULT_EXTENSIONS) -> RenderedContent:
    """Compile markdown source, including optional front-matter, to HTML.

    Raises:
        DocumentCompileError: Malformed front-matter or unbalanced embedded markup
    """
    metadata, body = split_front_matter(text, path)

    converter = build_markdown(extensions)
    html = converter.convert(body)

    problem = check_markup_balance(html)
    if problem:
        raise DocumentCompileError("Embedded markup is not balanced", path, detail=problem)

    return RenderedContent(html=html, metadata=metadata, title=_extract_title(metadata, converter, html))


def render_verbatim(text: str) -> RenderedContent:
    """Show the source text as-is inside a preformatted block."""
    return RenderedContent(html=f"<pre>{escape(text)}</pre>")
