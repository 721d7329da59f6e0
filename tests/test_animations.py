import gc

import pytest

from vitae.animations import FILL, TRANSITION, RevealController, force_final_state
from vitae.cv import LANG_FILL, SKILL_FILL, CVEngine, render_all
from vitae.dom import get_style_property, has_class
from vitae.portfolio import PortfolioEngine
from vitae.state import AppState, MemoryStorage


def _fills(doc):
    return [get_style_property(bar, "--bar-fill") for bar in doc.select_class(SKILL_FILL, LANG_FILL)]


@pytest.fixture
def cv_engine(cv_doc, store):
    return CVEngine(cv_doc, store, MemoryStorage())


def test_reduced_motion_shows_final_state(cv_engine):
    RevealController(prefers_motion=False).attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")

    doc = cv_engine.document
    assert _fills(doc) == ["5", "4", "4"]
    assert all(has_class(target, "is-visible") for target in doc.select_attr("data-reveal"))


def test_reduced_motion_skips_lang_transition(cv_engine):
    controller = RevealController(prefers_motion=False).attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    cv_engine.set_language("en")

    assert not has_class(cv_engine.document.get_element_by_id("main"), "lang-transition")
    assert controller.pending == []


def test_first_activation_waits_for_viewport(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    doc = cv_engine.document

    assert _fills(doc) == ["0", "0", "0"]
    assert not any(has_class(target, "is-visible") for target in doc.select_attr("data-reveal"))
    assert controller.bars_animated is True
    assert len(controller.observed_bars) == 2


def test_reveal_on_intersection(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    header = cv_engine.document.select_class("cv-header")[0]

    controller.intersect(header)
    assert has_class(header, "is-visible")
    assert all(node is not header for node in controller.observed)

    # Already revealed targets are not observed again after a re-render.
    cv_engine.set_language("en")
    assert all(node is not header for node in controller.observed)


def test_bars_fill_with_stagger(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    doc = cv_engine.document

    controller.intersect(doc.get_element_by_id("cv-skills"))
    controller.advance(0)
    assert _fills(doc) == ["5", "0", "0"]
    controller.advance(79)
    assert _fills(doc) == ["5", "0", "0"]
    controller.advance(1)
    assert _fills(doc) == ["5", "4", "0"]

    controller.intersect(doc.get_element_by_id("cv-languages"))
    controller.advance(0)
    assert _fills(doc) == ["5", "4", "4"]
    assert controller.observed_bars == []


def test_rerender_after_activation_fills_at_once(cv_engine):
    RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    cv_engine.set_language("en")
    assert _fills(cv_engine.document) == ["5", "4", "4"]


def test_language_switch_cancels_pending_fills(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    controller.intersect(cv_engine.document.get_element_by_id("cv-skills"))
    assert [task[1] for task in controller.pending] == [FILL, FILL]

    cv_engine.set_language("en")
    assert [task[1] for task in controller.pending] == [TRANSITION]


def test_lang_transition_class_is_removed_after_delay(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    main = cv_engine.document.get_element_by_id("main")

    cv_engine.set_language("en")
    assert has_class(main, "lang-transition")
    controller.advance(299)
    assert has_class(main, "lang-transition")
    controller.advance(1)
    assert not has_class(main, "lang-transition")


def test_rapid_switches_keep_one_transition(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    main = cv_engine.document.get_element_by_id("main")

    cv_engine.set_language("en")
    controller.advance(200)
    cv_engine.set_language("de")
    assert len(controller.pending) == 1

    controller.advance(100)
    assert has_class(main, "lang-transition")
    controller.advance(200)
    assert not has_class(main, "lang-transition")


def test_settle_runs_pending_transition(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    main = cv_engine.document.get_element_by_id("main")

    cv_engine.set_language("en")
    controller.settle()
    assert not has_class(main, "lang-transition")
    assert controller.pending == []
    assert controller.clock_ms == 300


def test_settle_without_pending_work_keeps_clock(cv_engine):
    controller = RevealController().attach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    controller.settle()
    assert controller.clock_ms == 0


def test_unreferenced_controller_keeps_listening(cv_engine):
    RevealController(prefers_motion=False).attach(cv_engine)
    gc.collect()
    cv_engine.bootstrap(query_lang="de")
    assert _fills(cv_engine.document) == ["5", "4", "4"]


def test_detach_stops_listening(cv_engine):
    controller = RevealController().attach(cv_engine)
    controller.detach(cv_engine)
    cv_engine.bootstrap(query_lang="de")
    assert controller.observed == []
    assert controller.bars_animated is False


def test_portfolio_render_arms_reveal_only(overview_doc, store):
    engine = PortfolioEngine(overview_doc, store, MemoryStorage())
    controller = RevealController().attach(engine)
    engine.bootstrap(query_lang="de")

    cards = overview_doc.select_class("portfolio-card")
    assert all(any(node is card for node in controller.observed) for card in cards)
    assert controller.bars_animated is False

    controller.intersect(cards[0])
    assert has_class(cards[0], "is-visible")


def test_force_final_state(cv_doc, cv_data):
    render_all(cv_doc, AppState(data=cv_data, lang="de"))
    force_final_state(cv_doc)
    assert _fills(cv_doc) == ["5", "4", "4"]
    assert all(has_class(t, "is-visible") for t in cv_doc.select_attr("data-reveal"))
