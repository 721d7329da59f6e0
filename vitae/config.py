"""
Site configuration: centralized constants, paths, and export timeouts.

Every env lookup and page constant used by the site lives here.
- Hard limits are NOT configurable (language set, storage key, paper format).
- Paths, owner identity and timeouts CAN be overridden via env vars.
- Defaults are production-ready.

Environment vars (optional overrides):
  VITAE_SITE_ROOT=<path>
  VITAE_TEMPLATES_DIR=<path>
  VITAE_OWNER_NAME=<str>
  VITAE_EXPORT_BASE_URL=<url>
  VITAE_PDF_NAV_TIMEOUT_MS=<int>
  VITAE_PDF_RENDER_TIMEOUT_MS=<int>
  VITAE_PDF_VALIDATE_PAGES=0/1 (also false/no/off, true/yes/on)
  VITAE_LOG_LEVEL=<str>
  PORT=<int>
"""

import os
from pathlib import Path


REPO_ROOT = Path(__file__).resolve().parents[1]


# ============================================================================
# HARD LIMITS (non-configurable)
# ============================================================================

SUPPORTED_LANGS: tuple = ("de", "en")
DEFAULT_LANG: str = "de"

# Persisted-preference key, shared by the CV and portfolio pages.
STORAGE_KEY: str = "cv-lang"

# Content documents, addressed by absolute site path.
CV_DATA_PATH: str = "/data/cv.json"
PORTFOLIO_DATA_PATH: str = "/data/portfolio.json"

# Overview shows the tag filter bar only above this many projects.
FILTER_BAR_MIN_PROJECTS: int = 4

# Staggered bar fill delay per meter (ms) and language transition length (ms).
BAR_STAGGER_MS: int = 80
LANG_TRANSITION_MS: int = 300

# PDF snapshot geometry.
PDF_FORMAT: str = "A4"
PDF_MARGIN: str = "15mm"

# Element whose presence means the CV engine finished its first render.
CV_READY_SELECTOR: str = ".cv-header__name"


# ============================================================================
# SETTINGS (configurable via env vars, but with sensible defaults)
# ============================================================================

_TRUTHY = {"1", "true", "yes", "on"}


def _env(env_key: str) -> str:
    return str(os.environ.get(env_key) or "").strip()


def _get_bool_config(env_key: str, default: bool) -> bool:
    """Boolean env flag: 1/true/yes/on enable it, any other value disables it; unset keeps the default."""
    val = _env(env_key)
    if not val:
        return default
    return val.lower() in _TRUTHY


def _get_int_config(env_key: str, default: int, min_val: int = None) -> int:
    """Int env setting clamped to ``min_val``; unparsable values keep the default."""
    val = _env(env_key)
    if not val:
        return default
    try:
        result = int(val)
    except ValueError:
        return default
    return result if min_val is None else max(result, min_val)


def _get_str_config(env_key: str, default: str) -> str:
    return _env(env_key) or default


# Paths
SITE_ROOT: Path = Path(_get_str_config("VITAE_SITE_ROOT", str(REPO_ROOT / "site")))
TEMPLATES_DIR: Path = Path(_get_str_config("VITAE_TEMPLATES_DIR", str(REPO_ROOT / "templates" / "html")))

# Identity
OWNER_NAME: str = _get_str_config("VITAE_OWNER_NAME", "Mathis Thomsen")

# Server
PORT: int = _get_int_config("PORT", 3000, min_val=1)
LOG_LEVEL: str = _get_str_config("VITAE_LOG_LEVEL", "INFO").upper()

# PDF export. Empty base URL means "the host the export request came in on".
EXPORT_BASE_URL: str = _get_str_config("VITAE_EXPORT_BASE_URL", "")
PDF_NAV_TIMEOUT_MS: int = _get_int_config("VITAE_PDF_NAV_TIMEOUT_MS", 30000, min_val=1000)
PDF_RENDER_TIMEOUT_MS: int = _get_int_config("VITAE_PDF_RENDER_TIMEOUT_MS", 10000, min_val=500)
PDF_VALIDATE_PAGES: bool = _get_bool_config("VITAE_PDF_VALIDATE_PAGES", True)


def export_filename(lang: str) -> str:
    """Deterministic download name for the CV snapshot, e.g. CV_Mathis_Thomsen_DE.pdf."""
    owner = "_".join(OWNER_NAME.split())
    return f"CV_{owner}_{lang.upper()}.pdf"
