"""Portfolio render engine.

Serves two mutually exclusive page targets, detected by mount node:
``#portfolio-overview`` (card grid) and ``#portfolio-detail`` (one case study,
slug taken from the mount's ``data-slug``). Both are fully rebuilt on every
language switch.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Any, Iterable, Mapping, Optional

from bs4 import Tag

from vitae.blocks import render_block, render_disclaimer
from vitae.config import FILTER_BAR_MIN_PROJECTS, OWNER_NAME, PORTFOLIO_DATA_PATH, SUPPORTED_LANGS
from vitae.content import ContentFetchError, ContentStore
from vitae.dom import Document, add_class, clear, el, set_text
from vitae.i18n import get_translation, is_supported, localize, resolve_initial_language
from vitae.signals import rendered
from vitae.state import AppState, read_preference, write_preference

PAGE = "portfolio"

OVERVIEW_ID = "portfolio-overview"
DETAIL_ID = "portfolio-detail"
TOPBAR_PLACEHOLDER_ID = "portfolio-topbar-placeholder"

META_FIELDS = ("year", "duration", "client", "role")

_SCHEME_RE = re.compile(r"^https?://")


def _t(lang: str, key: str) -> str:
    return get_translation(lang, "portfolio", key)


def _projects(data: Optional[Mapping[str, Any]]):
    value = (data or {}).get("projects")
    return value if isinstance(value, (list, tuple)) else ()


def _tags(project: Mapping[str, Any]):
    value = project.get("tags")
    return value if isinstance(value, (list, tuple)) else ()


def find_project(data: Optional[Mapping[str, Any]], slug: Optional[str]) -> Optional[Mapping[str, Any]]:
    for project in _projects(data):
        if project.get("slug") == slug:
            return project
    return None


# ── Shared chrome ────────────────────────────────────────────────────────────

def build_lang_toggle(lang: str) -> Tag:
    wrap = el("form", "portfolio-topbar__lang", method="post", role="group",
              aria_label=_t(lang, "lang_group_label"))
    for index, code in enumerate(SUPPORTED_LANGS):
        if index > 0:
            wrap.append(el("span", "portfolio-topbar__lang-sep", "|", aria_hidden="true"))
        wrap.append(el(
            "button",
            "portfolio-topbar__lang-btn",
            code.upper(),
            type="submit",
            name="lang",
            value=code,
            data_lang=code,
            aria_pressed="true" if code == lang else "false",
            aria_label=get_translation(code, "toggle", "inactive"),
        ))
    return wrap


def build_topbar(lang: str, detail: bool = False) -> Tag:
    nav = el("nav", "portfolio-topbar case-study-topbar" if detail else "portfolio-topbar",
             role="navigation", aria_label=_t(lang, "nav_label"))
    back = el("a", "portfolio-topbar__back", href="/portfolio/" if detail else "/")
    back.append(el("span", text="←", aria_hidden="true"))
    back.append("\u00a0" + (_t(lang, "back_portfolio") if detail else OWNER_NAME))
    nav.append(back)
    nav.append(build_lang_toggle(lang))
    return nav


def build_footer() -> Tag:
    footer = el("footer", "site-footer")
    footer.append(el("span", text=f"© {date.today().year} {OWNER_NAME}"))
    footer.append(el("span", "site-footer__sep", "·"))
    footer.append(el("a", text="Impressum", href="/impressum.html"))
    footer.append(el("span", "site-footer__sep", "·"))
    footer.append(el("a", text="Datenschutz", href="/datenschutz.html"))
    return footer


# ── Overview ─────────────────────────────────────────────────────────────────

def build_filter_bar(projects: Iterable[Mapping[str, Any]], lang: str) -> Tag:
    """Tag toggle buttons. Pressed state only; no filtering is wired up yet."""
    bar = el("div", "portfolio-filter portfolio-filter--visible", role="group",
             aria_label=_t(lang, "filter_label"))
    seen = []
    for project in projects:
        for tag in _tags(project):
            if tag not in seen:
                seen.append(tag)
    for tag in seen:
        bar.append(el("button", "portfolio-filter__btn", tag, type="button", aria_pressed="false"))
    return bar


def build_project_card(project: Mapping[str, Any], lang: str) -> Tag:
    card = el("a", "portfolio-card", href=f"/portfolio/{project.get('slug')}/", data_reveal="")
    if project.get("confidential"):
        add_class(card, "portfolio-card--confidential")
    if project.get("wip"):
        add_class(card, "portfolio-card--wip")

    meta = el("div", "portfolio-card__meta")
    meta.append(el("span", "portfolio-card__year", localize(project.get("year"), lang)))
    # wip wins over confidential when both are set
    if project.get("wip"):
        meta.append(el("span", "portfolio-card__type portfolio-card__type--wip", _t(lang, "wip")))
    elif project.get("confidential"):
        meta.append(el("span", "portfolio-card__type", _t(lang, "confidential")))
    card.append(meta)

    card.append(el("h2", "portfolio-card__title", localize(project.get("title"), lang)))
    card.append(el("p", "portfolio-card__teaser", localize(project.get("teaser"), lang)))

    tags = _tags(project)
    if tags:
        ul = el("ul", "portfolio-card__tags")
        for tag in tags:
            ul.append(el("li", "portfolio-card__tag", tag))
        card.append(ul)

    cta = el("span", "portfolio-card__cta")
    cta.append(el("span", text=_t(lang, "cta")))
    cta.append(el("span", "portfolio-card__cta-arrow", "→"))
    card.append(cta)
    return card


def render_overview(doc: Document, state: AppState) -> bool:
    container = doc.get_element_by_id(OVERVIEW_ID)
    if container is None:
        return False
    clear(container)
    lang = state.lang

    sub = doc.get_element_by_id("portfolio-header-sub")
    if sub is not None:
        set_text(sub, _t(lang, "header_sub"))

    projects = _projects(state.data)
    if len(projects) > FILTER_BAR_MIN_PROJECTS:
        container.append(build_filter_bar(projects, lang))

    grid = el("div", "portfolio-grid")
    inner = el("div", "portfolio-grid__list")
    for project in projects:
        inner.append(build_project_card(project, lang))
    grid.append(inner)
    container.append(grid)
    return True


# ── Detail ───────────────────────────────────────────────────────────────────

def build_case_study_header(project: Mapping[str, Any], lang: str) -> Tag:
    header = el("header", "case-study-header")
    inner = el("div", "case-study-header__inner container")

    inner.append(el("p", "case-study-header__label", "Portfolio"))
    if project.get("wip"):
        inner.append(el("span", "case-study-header__wip-badge", _t(lang, "wip_badge")))
    inner.append(el("h1", "case-study-header__title", localize(project.get("title"), lang)))

    meta = el("dl", "case-study-header__meta")
    for key in META_FIELDS:
        value = localize(project.get(key), lang)
        if not value:
            continue
        item = el("div", "case-study-header__meta-item")
        item.append(el("dt", "case-study-header__meta-label", _t(lang, key)))
        item.append(el("dd", "case-study-header__meta-value", value))
        meta.append(item)
    inner.append(meta)

    tags = _tags(project)
    if tags:
        ul = el("ul", "case-study-header__tags")
        for tag in tags:
            ul.append(el("li", "case-study-header__tag", tag))
        inner.append(ul)

    url = project.get("url")
    if url:
        inner.append(el("a", "case-study-header__url", _SCHEME_RE.sub("", url) + " ↗",
                        href=url, target="_blank", rel="noopener noreferrer"))

    header.append(inner)
    return header


def _reveal_block(content: Tag) -> Tag:
    wrapper = el("div", "case-study__block", data_reveal="")
    wrapper.append(content)
    return wrapper


def render_detail(doc: Document, state: AppState, slug: Optional[str]) -> bool:
    """Render one case study; an unknown slug leaves the page untouched."""
    container = doc.get_element_by_id(DETAIL_ID)
    project = find_project(state.data, slug)
    if project is None or container is None:
        return False
    lang = state.lang

    doc.title = f"{localize(project.get('title'), lang)} {_t(lang, 'title_suffix')}"
    clear(container)
    container.append(build_topbar(lang, detail=True))

    main = el("main", "case-study-main", id="main")
    main.append(build_case_study_header(project, lang))

    body = el("div", "case-study-body")
    body_inner = el("div", "container")
    sections = project.get("sections")
    for block in sections if isinstance(sections, (list, tuple)) else ():
        content = render_block(block, lang)
        if content is not None:
            body_inner.append(_reveal_block(content))

    if project.get("confidential"):
        body_inner.append(_reveal_block(render_disclaimer(lang)))

    body.append(body_inner)
    main.append(body)
    container.append(main)
    container.append(build_footer())
    return True


# ── Engine ───────────────────────────────────────────────────────────────────

class PortfolioEngine:
    """Owns the portfolio page state and its bootstrap / language-switch lifecycle."""

    def __init__(self, document: Document, store: ContentStore, storage=None,
                 data_path: str = PORTFOLIO_DATA_PATH):
        self.document = document
        self.store = store
        self.storage = storage
        self.data_path = data_path
        self.state = AppState()
        self.detail_found: Optional[bool] = None

    @property
    def slug(self) -> Optional[str]:
        detail = self.document.get_element_by_id(DETAIL_ID)
        return detail.get("data-slug") if detail is not None else None

    def _render(self) -> None:
        if self.document.get_element_by_id(OVERVIEW_ID) is not None:
            render_overview(self.document, self.state)
        if self.document.get_element_by_id(DETAIL_ID) is not None:
            self.detail_found = render_detail(self.document, self.state, self.slug)
            if not self.detail_found:
                logging.warning(f"[portfolio] No case study for slug {self.slug!r}")

    def bootstrap(self, query_lang: Optional[str] = None, browser_lang: Optional[str] = None) -> bool:
        self.state.lang = resolve_initial_language(query_lang, read_preference(self.storage), browser_lang)
        self.document.lang = self.state.lang

        try:
            self.state.data = self.store.fetch(self.data_path)
        except ContentFetchError as exc:
            logging.error(f"[portfolio] Failed to load portfolio data: {exc}")
            return False

        placeholder = self.document.get_element_by_id(TOPBAR_PLACEHOLDER_ID)
        if placeholder is not None and self.document.get_element_by_id(OVERVIEW_ID) is not None:
            self.document.replace(placeholder, build_topbar(self.state.lang))

        self._render()
        rendered.send(self, page=PAGE, lang=self.state.lang)
        return True

    def set_language(self, lang: str) -> None:
        if not is_supported(lang):
            return
        self.state.lang = lang
        write_preference(self.storage, lang)
        self.document.lang = lang

        for button in self.document.select_class("portfolio-topbar__lang-btn"):
            button["aria-pressed"] = "true" if button.get("data-lang") == lang else "false"

        if self.state.data is not None:
            self._render()
            rendered.send(self, page=PAGE, lang=lang)
