from __future__ import annotations

from jinja2 import Environment, FileSystemLoader, select_autoescape

from vitae.config import OWNER_NAME, TEMPLATES_DIR
from vitae.dom import Document, DocumentError

LAYOUT_NAME = "layout.html"

CV_SHELL = "cv.html"
PORTFOLIO_OVERVIEW_SHELL = "portfolio_overview.html"
PORTFOLIO_DETAIL_SHELL = "portfolio_detail.html"


class PageError(Exception):
    pass


def _load_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def load_shell(template_name: str, **context) -> Document:
    """Render a page shell (a well-formed ``<body>``) into a Document with empty mount nodes."""
    env = _load_env()
    markup = env.get_template(template_name).render(owner=OWNER_NAME, **context)
    try:
        return Document.from_markup(markup, title=OWNER_NAME)
    except DocumentError as exc:
        raise PageError(f"Page shell {template_name} is not well-formed: {exc}") from exc


def render_page(doc: Document, stylesheets=("/css/style.css",), scripts=("/js/animations.js",)) -> str:
    env = _load_env()
    template = env.get_template(LAYOUT_NAME)
    return template.render(
        lang=doc.lang,
        title=doc.title,
        meta=doc.meta,
        stylesheets=stylesheets,
        scripts=scripts,
        body=doc.body_html(),
    )
