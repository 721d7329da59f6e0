"""CV render engine.

Maps the CV record plus the active language onto the CV page document. Every
section renderer clears its mount node and rebuilds it from scratch, so a
language switch is a full, idempotent re-render of already-loaded data.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from bs4 import Tag

from vitae.config import CV_DATA_PATH, OWNER_NAME
from vitae.content import ContentFetchError, ContentStore
from vitae.dom import Document, append, clear, el, set_text, text_list
from vitae.i18n import (
    PERIOD_SEPARATOR,
    format_period,
    get_translation,
    is_supported,
    localize,
    localize_list,
    resolve_initial_language,
)
from vitae.signals import lang_changed, rendered
from vitae.state import AppState, read_preference, write_preference

PAGE = "cv"

SKILL_TRACK = "cv-skill__bar-track"
SKILL_FILL = "cv-skill__bar-fill"
LANG_TRACK = "cv-lang__bar-track"
LANG_FILL = "cv-lang__bar-fill"


def _num(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value if value is not None else 0)


def _items(record: Optional[Mapping[str, Any]], key: str):
    value = (record or {}).get(key)
    return value if isinstance(value, (list, tuple)) else ()


def _mount(doc: Document, element_id: str) -> Optional[Tag]:
    node = doc.get_element_by_id(element_id)
    if node is not None:
        clear(node)
    return node


def build_meter(level: Any, maximum: Any, label: str, lang: str, track_class: str, fill_class: str) -> Tag:
    """Proficiency meter. The fill starts at zero; its target sits in ``data-level``."""
    of = get_translation(lang, "common", "of")
    track = el(
        "div",
        track_class,
        role="meter",
        aria_valuenow=_num(level),
        aria_valuemin="0",
        aria_valuemax=_num(maximum),
        aria_label=f"{label}: {_num(level)} {of} {_num(maximum)}",
    )
    fill = el("div", fill_class, data_level=_num(level), style="--bar-fill: 0")
    track.append(fill)
    return track


def render_contact(doc: Document, state: AppState) -> None:
    meta = (state.data or {}).get("meta") or {}
    lang = state.lang

    identity = _mount(doc, "cv-identity")
    if identity is not None:
        identity.append(el("h1", "cv-header__name", meta.get("name") or OWNER_NAME))
        title = localize(meta.get("title"), lang)
        if title:
            identity.append(el("p", "cv-header__title", title))

    contact = _mount(doc, "cv-contact")
    if contact is None:
        return

    items = (
        ("✉", meta.get("email"), f"mailto:{meta.get('email')}", get_translation(lang, "cv", "email_label")),
        ("🌐", meta.get("website"), f"https://{meta.get('website')}", get_translation(lang, "cv", "website_label")),
    )
    for icon, text, href, label in items:
        if not text:
            continue
        li = el("li", "cv-header__contact-item")
        li.append(el("span", text=icon, aria_hidden="true"))
        li.append(el("a", text=text, href=href, aria_label=f"{label}: {text}"))
        contact.append(li)


def render_summary(doc: Document, state: AppState) -> None:
    node = doc.get_element_by_id("cv-summary")
    if node is not None:
        set_text(node, localize((state.data or {}).get("summary"), state.lang))


def _build_role(role: Mapping[str, Any], lang: str) -> Tag:
    role_div = el("div", "cv-timeline__role")
    header = el("div", "cv-timeline__role-header")
    header.append(el("span", "cv-timeline__role-title", localize(role.get("title"), lang)))
    header.append(el("span", "cv-timeline__role-period", format_period(role.get("start"), role.get("end"), lang)))
    role_div.append(header)
    append(role_div, text_list(localize_list(role.get("description"), lang), "cv-timeline__desc"))
    return role_div


def _build_job(job: Mapping[str, Any], lang: str) -> Tag:
    entry = el("article", "cv-timeline__entry")

    company = el("div", "cv-timeline__company")
    name = el("span", "cv-timeline__company-name")
    if job.get("companyUrl"):
        name.append(el("a", text=job.get("company"), href=job["companyUrl"],
                       target="_blank", rel="noopener noreferrer"))
    else:
        set_text(name, job.get("company"))
    company.append(name)
    company.append(el("span", "cv-timeline__period", format_period(job.get("start"), job.get("end"), lang)))
    entry.append(company)

    # Organization-level narrative sits between the company header and the roles.
    append(entry, text_list(localize_list(job.get("description"), lang), "cv-timeline__desc"))

    roles = el("div", "cv-timeline__roles")
    for role in _items(job, "roles"):
        roles.append(_build_role(role, lang))
    entry.append(roles)

    tags = _items(job, "tags")
    if tags:
        tags_div = el("div", "cv-timeline__tags")
        for tag in tags:
            tags_div.append(el("span", "cv-timeline__tag", tag))
        entry.append(tags_div)
    return entry


def render_experience(doc: Document, state: AppState) -> None:
    container = _mount(doc, "cv-experience")
    if container is None:
        return
    for job in _items(state.data, "experience"):
        container.append(_build_job(job, state.lang))


def render_education(doc: Document, state: AppState) -> None:
    container = _mount(doc, "cv-education")
    if container is None:
        return
    lang = state.lang
    for edu in _items(state.data, "education"):
        entry = el("article", "cv-timeline__entry")
        entry.append(el("span", "cv-timeline__period", format_period(edu.get("start"), edu.get("end"), lang)))
        entry.append(el("p", "cv-timeline__degree", localize(edu.get("degree"), lang)))
        entry.append(el("p", "cv-timeline__institution", localize(edu.get("institution"), lang)))
        if edu.get("grade"):
            grade = get_translation(lang, "common", "grade")
            entry.append(el("p", "cv-timeline__grade", f"{grade}: {edu['grade']}"))
        focus = localize(edu.get("focus"), lang)
        if focus:
            entry.append(el("p", "cv-timeline__focus", focus))
        container.append(entry)


def _skill_group(title: str) -> Tag:
    group = el("div", "cv-skills__group")
    group.append(el("p", "cv-skills__group-title", title))
    return group


def _skill_row(skill: Mapping[str, Any], lang: str) -> Tag:
    name = localize(skill.get("name"), lang)
    row = el("div", "cv-skill")
    row.append(el("span", "cv-skill__name", name))
    row.append(build_meter(skill.get("level"), skill.get("max"), name, lang, SKILL_TRACK, SKILL_FILL))
    return row


def render_skills(doc: Document, state: AppState) -> None:
    container = _mount(doc, "cv-skills")
    if container is None:
        return
    lang = state.lang
    skills = (state.data or {}).get("skills") or {}

    for key in ("specialized", "tools"):
        group = _skill_group(get_translation(lang, "skills", key))
        for skill in _items(skills, key):
            group.append(_skill_row(skill, lang))
        container.append(group)

    misc = _skill_group(get_translation(lang, "skills", "misc"))
    tags = el("div", "cv-skills__misc")
    for item in localize_list(skills.get("misc"), lang):
        tags.append(el("span", "cv-skills__misc-tag", item))
    misc.append(tags)
    container.append(misc)


def render_languages(doc: Document, state: AppState) -> None:
    container = _mount(doc, "cv-languages")
    if container is None:
        return
    lang = state.lang
    for language in _items(state.data, "languages"):
        name = localize(language.get("name"), lang)
        row = el("div", "cv-language")
        header = el("div", "cv-language__header")
        header.append(el("span", "cv-language__name", name))
        header.append(el("span", "cv-language__label", localize(language.get("label"), lang)))
        row.append(header)
        row.append(build_meter(language.get("level"), language.get("max"), name, lang, LANG_TRACK, LANG_FILL))
        container.append(row)


def render_certifications(doc: Document, state: AppState) -> None:
    container = _mount(doc, "cv-certs")
    if container is None:
        return
    for cert in _items(state.data, "certifications"):
        li = el("li", "cv-cert")
        li.append(el("p", "cv-cert__title", localize(cert.get("title"), state.lang)))
        li.append(el("p", "cv-cert__issuer", localize(cert.get("issuer"), state.lang)))
        container.append(li)


def _project_period(project: Mapping[str, Any], lang: str) -> str:
    start, end = project.get("start"), project.get("end")
    if end:
        return f"{start}{PERIOD_SEPARATOR}{end}"
    return f"{get_translation(lang, 'common', 'since')} {start}"


def render_projects(doc: Document, state: AppState) -> None:
    container = _mount(doc, "cv-projects")
    if container is None:
        return
    lang = state.lang
    for project in _items(state.data, "projects"):
        div = el("div", "cv-project")
        div.append(el("h3", "cv-project__title", localize(project.get("title"), lang)))
        if project.get("start"):
            div.append(el("p", "cv-project__period", _project_period(project, lang)))
        div.append(el("p", "cv-project__desc", localize(project.get("description"), lang)))

        links = _items(project, "links")
        if links:
            links_div = el("div", "cv-project__links")
            for link in links:
                links_div.append(el("a", "cv-project__link", localize(link.get("label"), lang),
                                    href=link.get("url"), target="_blank", rel="noopener noreferrer"))
            div.append(links_div)
        container.append(div)


def update_page_metadata(doc: Document, state: AppState) -> None:
    """Section headings, document title, meta description and the PDF link."""
    lang = state.lang
    for node in doc.select_attr("data-i18n"):
        label = get_translation(lang, "sections", node.get("data-i18n"))
        if label:
            set_text(node, label)

    doc.title = get_translation(lang, "cv", "title")
    doc.meta["description"] = get_translation(lang, "cv", "description")

    for link in doc.select_class("cv-topbar__download"):
        link["href"] = f"/export/cv.pdf?lang={lang}"
        link["aria-label"] = get_translation(lang, "cv", "download_label")


SECTION_RENDERERS = (
    render_contact,
    render_summary,
    render_experience,
    render_education,
    render_skills,
    render_languages,
    render_certifications,
    render_projects,
    update_page_metadata,
)


def render_all(doc: Document, state: AppState) -> None:
    """Full re-render of every CV section; no incremental diffing."""
    for renderer in SECTION_RENDERERS:
        renderer(doc, state)


def update_toggle(doc: Document, lang: str) -> None:
    for button in doc.select_class("cv-lang-toggle__btn"):
        button_lang = button.get("data-lang")
        pressed = button_lang == lang
        button["aria-pressed"] = "true" if pressed else "false"
        button["aria-label"] = get_translation(button_lang, "toggle", "active" if pressed else "inactive")


class CVEngine:
    """Owns the CV page state and its bootstrap / language-switch lifecycle."""

    def __init__(self, document: Document, store: ContentStore, storage=None, data_path: str = CV_DATA_PATH):
        self.document = document
        self.store = store
        self.storage = storage
        self.data_path = data_path
        self.state = AppState()

    def bootstrap(self, query_lang: Optional[str] = None, browser_lang: Optional[str] = None) -> bool:
        """Resolve the language, paint it, then load and render the CV record.

        Returns False when the record could not be loaded; the page then carries
        a localized inline error instead of content.
        """
        self.state.lang = resolve_initial_language(query_lang, read_preference(self.storage), browser_lang)
        self.document.lang = self.state.lang
        update_toggle(self.document, self.state.lang)

        try:
            self.state.data = self.store.fetch(self.data_path)
        except ContentFetchError as exc:
            logging.error(f"[cv] {exc}")
            self._show_load_error()
            return False

        render_all(self.document, self.state)
        rendered.send(self, page=PAGE, lang=self.state.lang)
        return True

    def _show_load_error(self) -> None:
        main = self.document.get_element_by_id("main")
        if main is None:
            return
        message = el("p", "cv-load-error", get_translation(self.state.lang, "cv", "load_error"))
        self.document.prepend(main, message)

    def set_language(self, lang: str) -> None:
        if not is_supported(lang):
            return
        self.state.lang = lang
        write_preference(self.storage, lang)
        self.document.lang = lang
        update_toggle(self.document, lang)

        if self.state.data is not None:
            render_all(self.document, self.state)
            rendered.send(self, page=PAGE, lang=lang)

        lang_changed.send(self, lang=lang)
