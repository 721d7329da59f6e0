"""Inline method icons for ``method_grid`` blocks (24x24, stroke: currentColor)."""

from __future__ import annotations

from typing import Optional

from bs4 import Tag

from vitae.dom import parse_markup

_SVG_OPEN = (
    '<svg width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="1.5" stroke-linecap="round" stroke-linejoin="round" aria-hidden="true">'
)

_ICON_PATHS = {
    "cards": '<rect x="3" y="9" width="13" height="10" rx="1"/>'
             '<path d="M7 9V7a1 1 0 0 1 1-1h12a1 1 0 0 1 1 1v10a1 1 0 0 1-1 1h-3"/>',
    "layers": '<polygon points="12 2 2 7 12 12 22 7 12 2"/>'
              '<polyline points="2 17 12 22 22 17"/><polyline points="2 12 12 17 22 12"/>',
    "tree": '<circle cx="12" cy="4" r="2"/><circle cx="5" cy="19" r="2"/>'
            '<circle cx="12" cy="19" r="2"/><circle cx="19" cy="19" r="2"/>'
            '<line x1="12" y1="6" x2="12" y2="13"/><line x1="12" y1="13" x2="5" y2="17"/>'
            '<line x1="12" y1="13" x2="12" y2="17"/><line x1="12" y1="13" x2="19" y2="17"/>',
    "network": '<circle cx="12" cy="12" r="3"/><circle cx="4" cy="5" r="2"/>'
               '<circle cx="20" cy="5" r="2"/><circle cx="4" cy="19" r="2"/><circle cx="20" cy="19" r="2"/>'
               '<line x1="9.5" y1="10.5" x2="5.5" y2="6.5"/><line x1="14.5" y1="10.5" x2="18.5" y2="6.5"/>'
               '<line x1="9.5" y1="13.5" x2="5.5" y2="17.5"/><line x1="14.5" y1="13.5" x2="18.5" y2="17.5"/>',
    "ai": '<path d="M12 2l1.5 8.5L22 12l-8.5 1.5L12 22l-1.5-8.5L2 12l8.5-1.5Z"/>',
    "database": '<ellipse cx="12" cy="5" rx="9" ry="3"/><path d="M21 12c0 1.66-4 3-9 3s-9-1.34-9-3"/>'
                '<path d="M3 5v14c0 1.66 4 3 9 3s9-1.34 9-3V5"/>',
    "code": '<polyline points="16 18 22 12 16 6"/><polyline points="8 6 2 12 8 18"/>'
            '<line x1="14" y1="4" x2="10" y2="20"/>',
    "research": '<circle cx="11" cy="11" r="8"/><line x1="21" y1="21" x2="16.65" y2="16.65"/>',
    "chart": '<line x1="18" y1="20" x2="18" y2="10"/><line x1="12" y1="20" x2="12" y2="4"/>'
             '<line x1="6" y1="20" x2="6" y2="14"/><line x1="3" y1="20" x2="21" y2="20"/>',
    "eye": '<path d="M1 12s4-8 11-8 11 8 11 8-4 8-11 8-11-8-11-8z"/><circle cx="12" cy="12" r="3"/>',
    "split": '<line x1="6" y1="3" x2="6" y2="15"/><circle cx="18" cy="6" r="3"/>'
             '<circle cx="6" cy="18" r="3"/><path d="M18 9a9 9 0 0 1-9 9"/>',
    "shield": '<path d="M12 22s8-4 8-10V5l-8-3-8 3v7c0 6 8 10 8 10z"/>',
    "balance": '<line x1="12" y1="3" x2="12" y2="21"/><path d="M3 7h2c2 0 5-1 7-2 2 1 5 2 7 2h2"/>'
               '<path d="M7 21h10"/><path d="M16 7l3 9c-.87.65-1.92 1-3 1s-2.13-.35-3-1l3-9z"/>'
               '<path d="M8 7l-3 9c.87.65 1.92 1 3 1s2.13-.35 3-1L8 7z"/>',
    "cart": '<circle cx="9" cy="21" r="1"/><circle cx="20" cy="21" r="1"/>'
            '<path d="M1 1h4l2.68 13.39a2 2 0 0 0 2 1.61h9.72a2 2 0 0 0 2-1.61L23 6H6"/>',
    "refresh": '<polyline points="23 4 23 10 17 10"/><polyline points="1 20 1 14 7 14"/>'
               '<path d="M3.51 9a9 9 0 0 1 14.85-3.36L23 10M1 14l4.64 4.36A9 9 0 0 0 20.49 15"/>',
    "users": '<path d="M17 21v-2a4 4 0 0 0-4-4H5a4 4 0 0 0-4 4v2"/><circle cx="9" cy="7" r="4"/>'
             '<path d="M23 21v-2a4 4 0 0 0-3-3.87"/><path d="M16 3.13a4 4 0 0 1 0 7.75"/>',
    "grid": '<rect x="3" y="3" width="7" height="7"/><rect x="14" y="3" width="7" height="7"/>'
            '<rect x="3" y="14" width="7" height="7"/><rect x="14" y="14" width="7" height="7"/>',
}

ICONS = {name: f"{_SVG_OPEN}{paths}</svg>" for name, paths in _ICON_PATHS.items()}

IMAGE_PLACEHOLDER = (
    '<svg width="32" height="32" viewBox="0 0 24 24" fill="none" stroke="currentColor" '
    'stroke-width="1" stroke-linecap="round" stroke-linejoin="round" aria-hidden="true" '
    'class="cs-visual-slot__icon"><rect x="3" y="3" width="18" height="18" rx="2"/>'
    '<circle cx="8.5" cy="8.5" r="1.5"/><polyline points="21 15 16 10 5 21"/></svg>'
)


def icon(name: object) -> Optional[Tag]:
    """Fresh SVG element for a known identifier; unknown identifiers give None."""
    markup = ICONS.get(name) if isinstance(name, str) else None
    return parse_markup(markup) if markup else None


def image_placeholder() -> Tag:
    return parse_markup(IMAGE_PLACEHOLDER)
