"""Reveal and meter-fill controller.

Listens to the render signals of one engine and drives the two DOM contracts
the engines expose: ``data-reveal`` targets become ``is-visible``, and meter
fills move from ``--bar-fill: 0`` to their ``data-level``.

Timing is simulated: ``intersect`` stands in for an element scrolling into
view and ``advance`` moves the clock forward. Pending timed work is cancelled
when a newer render or language change supersedes it. A served page hands the
armed (not yet intersected) state to ``site/js/animations.js``, which observes
the same contracts in the browser.
"""

from __future__ import annotations

from typing import Callable, List, Tuple

from bs4 import Tag

from vitae.config import BAR_STAGGER_MS, LANG_TRANSITION_MS
from vitae.cv import LANG_FILL, SKILL_FILL
from vitae.dom import Document, add_class, has_class, remove_class, set_style_property
from vitae.signals import lang_changed, rendered

BAR_CONTAINER_IDS = ("cv-skills", "cv-languages")
BAR_SELECTOR = f".{SKILL_FILL}, .{LANG_FILL}"

FILL = "fill"
TRANSITION = "transition"


def fill_bar(bar: Tag) -> None:
    set_style_property(bar, "--bar-fill", bar.get("data-level", "0"))


def force_final_state(doc: Document) -> None:
    """Fill every meter and reveal every target at once (print, no motion)."""
    for bar in doc.select(BAR_SELECTOR):
        fill_bar(bar)
    for target in doc.select_attr("data-reveal"):
        add_class(target, "is-visible")


def _contains(nodes: List[Tag], node: Tag) -> bool:
    return any(candidate is node for candidate in nodes)


def _without(nodes: List[Tag], node: Tag) -> List[Tag]:
    return [candidate for candidate in nodes if candidate is not node]


class RevealController:
    def __init__(self, prefers_motion: bool = True):
        self.prefers_motion = prefers_motion
        self.bars_animated = False
        self.clock_ms = 0
        self.pending: List[Tuple[int, str, Callable[[], None]]] = []
        self.observed: List[Tag] = []
        self.observed_bars: List[Tag] = []

    def attach(self, engine) -> "RevealController":
        # Strong references: the subscription lives until detach().
        rendered.connect(self.on_rendered, sender=engine, weak=False)
        lang_changed.connect(self.on_lang_changed, sender=engine, weak=False)
        return self

    def detach(self, engine) -> None:
        rendered.disconnect(self.on_rendered, sender=engine)
        lang_changed.disconnect(self.on_lang_changed, sender=engine)

    # ── scheduling ───────────────────────────────────────────────────────────

    def schedule(self, delay_ms: int, kind: str, action: Callable[[], None]) -> None:
        self.pending.append((self.clock_ms + delay_ms, kind, action))

    def cancel(self, kind: str) -> None:
        self.pending = [task for task in self.pending if task[1] != kind]

    def advance(self, ms: int) -> None:
        self.clock_ms += ms
        due = sorted((task for task in self.pending if task[0] <= self.clock_ms), key=lambda task: task[0])
        self.pending = [task for task in self.pending if task[0] > self.clock_ms]
        for _, _, action in due:
            action()

    def settle(self) -> None:
        """Run every pending task now, as if all timers had elapsed."""
        if self.pending:
            self.advance(max(task[0] for task in self.pending) - self.clock_ms)

    # ── signal handlers ──────────────────────────────────────────────────────

    def on_rendered(self, sender, page: str = "", **kwargs) -> None:
        doc = sender.document
        self.cancel(FILL)
        if not self.prefers_motion:
            force_final_state(doc)
            self.observed, self.observed_bars = [], []
            return
        self._arm_reveal(doc)
        if page == "cv":
            self._arm_bars(doc)

    def on_lang_changed(self, sender, lang: str = "", **kwargs) -> None:
        if not self.prefers_motion:
            return
        main = sender.document.get_element_by_id("main")
        if main is None:
            return
        self.cancel(TRANSITION)
        add_class(main, "lang-transition")
        self.schedule(LANG_TRANSITION_MS, TRANSITION, lambda: remove_class(main, "lang-transition"))

    def _arm_reveal(self, doc: Document) -> None:
        targets = doc.select_attr("data-reveal")
        self.observed = [target for target in targets if not has_class(target, "is-visible")]

    def _arm_bars(self, doc: Document) -> None:
        containers = [doc.get_element_by_id(i) for i in BAR_CONTAINER_IDS]
        containers = [c for c in containers if c is not None]
        if not containers:
            return

        # Re-render after the first activation: fill at once.
        if self.bars_animated:
            for container in containers:
                for bar in container.select(BAR_SELECTOR):
                    fill_bar(bar)
            self.observed_bars = []
            return

        self.bars_animated = True
        self.observed_bars = containers

    def intersect(self, element: Tag) -> None:
        """An observed element entered the viewport."""
        if _contains(self.observed, element):
            add_class(element, "is-visible")
            self.observed = _without(self.observed, element)
        if _contains(self.observed_bars, element):
            for index, bar in enumerate(element.select(BAR_SELECTOR)):
                self.schedule(index * BAR_STAGGER_MS, FILL, lambda bar=bar: fill_bar(bar))
            self.observed_bars = _without(self.observed_bars, element)
