"""Case-study content blocks.

Each renderer receives only its own block payload and the active language and
returns an element (or None, which callers drop). ``render_block`` dispatches
on ``block["type"]``; unknown types render to nothing.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Mapping, Optional

from bs4 import Tag

from vitae.dom import append, el
from vitae.i18n import get_translation, localize
from vitae.icons import icon, image_placeholder

BlockRenderer = Callable[[Mapping[str, Any], str], Optional[Tag]]

_NUMERIC_RE = re.compile(r"^\d+$")


def _label(lang: str, key: str) -> str:
    return get_translation(lang, "portfolio", key)


def _entries(block: Mapping[str, Any], key: str):
    value = block.get(key)
    return value if isinstance(value, (list, tuple)) else ()


def _labelled(label: str, content: Tag) -> Tag:
    container = el("div")
    container.append(el("p", "cs-section-label", label))
    container.append(content)
    return container


def render_stat_bar(block: Mapping[str, Any], lang: str) -> Tag:
    wrap = el("div", "cs-stat-bar")
    for stat in _entries(block, "stats"):
        item = el("div", "cs-stat")
        item.append(el("span", "cs-stat__value", localize(stat.get("value"), lang)))
        item.append(el("span", "cs-stat__label", localize(stat.get("label"), lang)))
        wrap.append(item)
    return wrap


def render_text(block: Mapping[str, Any], lang: str) -> Tag:
    return el("p", "cs-text", localize(block.get("content"), lang))


def render_insight(block: Mapping[str, Any], lang: str) -> Tag:
    wrap = el("aside", "cs-insight")
    wrap.append(el("p", "cs-insight__text", localize(block.get("content"), lang)))
    return wrap


def render_timeline(block: Mapping[str, Any], lang: str) -> Tag:
    timeline = el("div", "cs-timeline")
    for phase in _entries(block, "phases"):
        wip = phase.get("wip") is True
        entry = el("div", "cs-timeline__phase-entry cs-timeline__phase-entry--wip" if wip
                   else "cs-timeline__phase-entry")

        raw = localize(phase.get("phase"), lang)
        entry.append(el("p", "cs-timeline__phase-num", f"Phase {raw}" if _NUMERIC_RE.match(raw) else raw))
        if wip:
            entry.append(el("span", "cs-timeline__phase-wip-badge", _label(lang, "wip")))
        entry.append(el("h3", "cs-timeline__phase-title", localize(phase.get("title"), lang)))
        entry.append(el("p", "cs-timeline__phase-desc", localize(phase.get("description"), lang)))
        timeline.append(entry)
    return _labelled(_label(lang, "process"), timeline)


def render_method_grid(block: Mapping[str, Any], lang: str) -> Tag:
    grid = el("div", "cs-method-grid")
    for method in _entries(block, "methods"):
        card = el("div", "cs-method")
        card.append(append(el("div", "cs-method__icon"), icon(method.get("icon"))))
        card.append(el("h3", "cs-method__title", localize(method.get("title"), lang)))
        card.append(el("p", "cs-method__desc", localize(method.get("description"), lang)))
        grid.append(card)
    return _labelled(_label(lang, "methods"), grid)


def render_visual_slots(block: Mapping[str, Any], lang: str) -> Tag:
    grid = el("div", "cs-visual-slots")
    for slot in _entries(block, "slots"):
        item = el("div", "cs-visual-slot")
        item.append(append(el("div", "cs-visual-slot__area"), image_placeholder()))
        item.append(el("p", "cs-visual-slot__caption", localize(slot.get("caption"), lang)))
        grid.append(item)
    return _labelled(_label(lang, "visuals"), grid)


def render_key_takeaways(block: Mapping[str, Any], lang: str) -> Tag:
    grid = el("div", "cs-key-takeaways")
    for takeaway in _entries(block, "takeaways"):
        card = el("div", "cs-key-takeaway")
        card.append(el("h3", "cs-key-takeaway__title", localize(takeaway.get("title"), lang)))
        card.append(el("p", "cs-key-takeaway__desc", localize(takeaway.get("description"), lang)))
        grid.append(card)
    return _labelled(_label(lang, "key_takeaways"), grid)


def render_challenge_approach_outcome(block: Mapping[str, Any], lang: str) -> Tag:
    wrap = el("div", "cs-outcome")
    for key in ("challenge", "approach", "outcome"):
        if not block.get(key):
            continue
        item = el("div", "cs-outcome__item")
        item.append(el("p", "cs-outcome__label", _label(lang, key)))
        item.append(el("p", "cs-outcome__text", localize(block.get(key), lang)))
        wrap.append(item)
    return wrap


def render_disclaimer(lang: str) -> Tag:
    """Confidentiality notice appended to every confidential case study."""
    wrap = el("aside", "cs-disclaimer")
    wrap.append(el("p", "cs-disclaimer__label", _label(lang, "confidential")))
    wrap.append(el("p", "cs-disclaimer__text", _label(lang, "disclaimer")))
    return wrap


BLOCK_RENDERERS: Dict[str, BlockRenderer] = {
    "stat_bar": render_stat_bar,
    "text": render_text,
    "insight": render_insight,
    "timeline": render_timeline,
    "method_grid": render_method_grid,
    "visual_slots": render_visual_slots,
    "key_takeaways": render_key_takeaways,
    "challenge_approach_outcome": render_challenge_approach_outcome,
}


def render_block(block: Any, lang: str) -> Optional[Tag]:
    if not isinstance(block, Mapping):
        return None
    block_type = block.get("type")
    renderer = BLOCK_RENDERERS.get(block_type) if isinstance(block_type, str) else None
    if renderer is None:
        return None
    return renderer(block, lang)
