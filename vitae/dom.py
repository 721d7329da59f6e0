"""DOM helpers shared by the CV and portfolio render engines.

Nodes are BeautifulSoup ``Tag`` objects. A ``Document`` wraps the parsed page
body plus the head values the engines touch (language, title, meta tags).
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from bs4 import BeautifulSoup, Tag

from vitae.config import DEFAULT_LANG

PARSER = "html.parser"

# Detached tags are created through this soup; they can be moved into any document.
_factory = BeautifulSoup("", PARSER)


class DocumentError(Exception):
    pass


def el(tag: str, class_name: Optional[str] = None, text: Optional[str] = None, **attrs: str) -> Tag:
    """Create an element with an optional class and text content.

    Keyword attributes use ``_`` for ``-`` (``aria_label`` -> ``aria-label``);
    ``None`` values are skipped.
    """
    values = {"class": class_name} if class_name else {}
    for key, value in attrs.items():
        if value is not None:
            values[key.rstrip("_").replace("_", "-")] = str(value)
    node = _factory.new_tag(tag, attrs=values)
    if text is not None and text != "":
        node.string = str(text)
    return node


def append(parent: Tag, *children: Optional[Tag]) -> Tag:
    """Append children, silently dropping ``None``."""
    for child in children:
        if child is not None:
            parent.append(child)
    return parent


def children(node: Tag) -> List[Tag]:
    """Direct element children, whitespace text skipped."""
    return node.find_all(True, recursive=False)


def clear(node: Tag) -> None:
    """Remove all children and text, keeping the node's own attributes."""
    node.clear()


def set_text(node: Tag, text: Optional[str]) -> None:
    node.clear()
    if text:
        node.string = str(text)


def text_content(node: Tag) -> str:
    return node.get_text()


def text_list(items: Iterable[str], class_name: str) -> Optional[Tag]:
    """Bullet list of plain strings; ``None`` when there is nothing to list."""
    items = [item for item in items if item]
    if not items:
        return None
    ul = el("ul", class_name)
    for item in items:
        ul.append(el("li", text=item))
    return ul


def classes(node: Tag) -> List[str]:
    value = node.get("class") or []
    return value.split() if isinstance(value, str) else list(value)


def has_class(node: Tag, class_name: str) -> bool:
    return class_name in classes(node)


def add_class(node: Tag, class_name: str) -> None:
    current = classes(node)
    if class_name not in current:
        node["class"] = current + [class_name]


def remove_class(node: Tag, class_name: str) -> None:
    current = [c for c in classes(node) if c != class_name]
    if current:
        node["class"] = current
    elif node.has_attr("class"):
        del node["class"]


def set_style_property(node: Tag, name: str, value: object) -> None:
    """Set one CSS custom property in the inline style, keeping the others."""
    declarations = {}
    for part in (node.get("style") or "").split(";"):
        if ":" in part:
            key, _, val = part.partition(":")
            declarations[key.strip()] = val.strip()
    declarations[name] = str(value)
    node["style"] = "; ".join(f"{k}: {v}" for k, v in declarations.items())


def get_style_property(node: Tag, name: str) -> Optional[str]:
    for part in (node.get("style") or "").split(";"):
        key, _, val = part.partition(":")
        if key.strip() == name:
            return val.strip()
    return None


def parse_markup(markup: str) -> Tag:
    """Parse a markup snippet (inline SVG) and return its first element, detached."""
    node = BeautifulSoup(markup.strip(), PARSER).find(True)
    if node is None:
        raise DocumentError(f"No element in markup: {markup[:40]!r}")
    return node.extract()


def to_html(node: Tag) -> str:
    return str(node)


class Document:
    """Page body tree plus the head values a render engine may change."""

    def __init__(self, body: Tag, lang: str = DEFAULT_LANG, title: str = "",
                 meta: Optional[Dict[str, str]] = None):
        self.body = body
        self.lang = lang
        self.title = title
        self.meta: Dict[str, str] = dict(meta or {})

    @classmethod
    def from_markup(cls, markup: str, **kwargs) -> "Document":
        body = BeautifulSoup(markup, PARSER).body
        if body is None:
            raise DocumentError("Page markup has no <body> element")
        return cls(body, **kwargs)

    def get_element_by_id(self, element_id: str) -> Optional[Tag]:
        return self.body.find(id=element_id)

    def select(self, selector: str) -> List[Tag]:
        return self.body.select(selector)

    def select_class(self, *class_names: str) -> List[Tag]:
        return self.select(", ".join(f".{name}" for name in class_names))

    def select_attr(self, attr: str) -> List[Tag]:
        return self.select(f"[{attr}]")

    def replace(self, old: Tag, new: Tag) -> None:
        if old.parent is None:
            raise DocumentError("Cannot replace a node that is not attached to the document")
        old.replace_with(new)

    def prepend(self, parent: Tag, child: Tag) -> None:
        parent.insert(0, child)

    def body_html(self) -> str:
        return to_html(self.body)
