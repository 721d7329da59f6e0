import copy
import json
import sys
from pathlib import Path

import pytest

# Ensure repo root is importable so `import vitae...` and `import api` work regardless of pytest import mode.
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from vitae.content import ContentStore  # noqa: E402
from vitae.pages import CV_SHELL, PORTFOLIO_DETAIL_SHELL, PORTFOLIO_OVERVIEW_SHELL, load_shell  # noqa: E402


CV_DATA = {
    "meta": {"name": "Mathis Thomsen", "email": "hello@example.com", "website": "example.com"},
    "summary": {"de": "Zusammenfassung", "en": "Summary"},
    "experience": [
        {
            "company": "Sedo",
            "companyUrl": "https://sedo.com",
            "start": "2019-04",
            "description": {"de": ["Plattform verantwortet"], "en": ["Owned the platform"]},
            "roles": [
                {
                    "title": {"de": "Designer", "en": "Designer"},
                    "start": "2019-04",
                    "description": {"de": ["Komponenten gebaut"], "en": ["Built components"]},
                }
            ],
            "tags": ["Figma", "Research"],
        },
        {
            "company": "VR-NetWorld",
            "start": "2014-08",
            "end": "2019-03",
            "roles": [{"title": {"de": "Webdesigner", "en": "Web Designer"}, "start": "2014-08", "end": "2019-03"}],
        },
    ],
    "education": [
        {
            "institution": "Hochschule Bonn-Rhein-Sieg",
            "degree": {"de": "B.Sc. Wirtschaftsinformatik", "en": "B.Sc. Business Informatics"},
            "start": "2010",
            "end": "2014",
            "grade": "1,9",
        }
    ],
    "skills": {
        "specialized": [{"name": {"de": "Informationsarchitektur", "en": "Information Architecture"}, "level": 5, "max": 5}],
        "tools": [{"name": "Figma", "level": 4, "max": 5}],
        "misc": {"de": ["Moderation"], "en": ["Facilitation"]},
    },
    "languages": [
        {"name": {"de": "Englisch", "en": "English"}, "label": {"de": "Fließend", "en": "Fluent"}, "level": 4, "max": 5}
    ],
    "certifications": [{"title": {"de": "Zertifikat", "en": "Certificate"}, "issuer": "UXQB"}],
    "projects": [
        {
            "title": {"de": "Visitenkarte", "en": "Business card"},
            "start": "2024",
            "description": {"de": "Website", "en": "Website"},
            "links": [{"label": "example.com", "url": "https://example.com"}],
        }
    ],
}


def make_case_study(slug, **overrides):
    project = {
        "slug": slug,
        "title": {"de": f"Projekt {slug}", "en": f"Project {slug}"},
        "teaser": {"de": "Kurzbeschreibung", "en": "Teaser"},
        "year": 2024,
        "tags": ["UX"],
        "sections": [],
    }
    project.update(overrides)
    return project


PORTFOLIO_DATA = {
    "projects": [
        make_case_study(
            "alpha",
            client="ACME",
            confidential=True,
            tags=["UX", "Research"],
            sections=[
                {"type": "text", "content": {"de": "Text", "en": "Text"}},
                {"type": "hologram", "payload": 1},
                {"type": "insight", "content": {"de": "Einsicht", "en": "Insight"}},
            ],
        ),
        make_case_study("beta", wip=True, url="https://example.com/beta"),
    ]
}


@pytest.fixture
def cv_data():
    return copy.deepcopy(CV_DATA)


@pytest.fixture
def portfolio_data():
    return copy.deepcopy(PORTFOLIO_DATA)


@pytest.fixture
def site_root(tmp_path, cv_data, portfolio_data):
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "cv.json").write_text(json.dumps(cv_data), encoding="utf-8")
    (data_dir / "portfolio.json").write_text(json.dumps(portfolio_data), encoding="utf-8")
    (tmp_path / "index.html").write_text("<!DOCTYPE html><title>Card</title>", encoding="utf-8")
    return tmp_path


@pytest.fixture
def store(site_root):
    return ContentStore(site_root)


@pytest.fixture
def empty_store(tmp_path):
    return ContentStore(tmp_path / "nothing-here")


@pytest.fixture
def cv_doc():
    return load_shell(CV_SHELL)


@pytest.fixture
def overview_doc():
    return load_shell(PORTFOLIO_OVERVIEW_SHELL)


@pytest.fixture
def make_detail_doc():
    return lambda slug: load_shell(PORTFOLIO_DETAIL_SHELL, slug=slug)


@pytest.fixture
def make_project():
    return make_case_study
