"""
Flask companion server for the CV and portfolio site.

Serves the rendered CV and portfolio pages, the static site (content documents
included), and renders the CV to PDF through a headless browser.
"""

import io
import logging
import os

from flask import Flask, Response, jsonify, make_response, request, send_file
from flask_cors import CORS
from werkzeug.security import safe_join

from vitae.animations import RevealController
from vitae.config import EXPORT_BASE_URL, LOG_LEVEL, PORT, SITE_ROOT, export_filename
from vitae.content import ContentStore
from vitae.cv import CVEngine
from vitae.export import BrowserUnavailable, capture_cv_pdf, export_lang
from vitae.pages import CV_SHELL, PORTFOLIO_DETAIL_SHELL, PORTFOLIO_OVERVIEW_SHELL, load_shell, render_page
from vitae.portfolio import PortfolioEngine
from vitae.state import CookieStorage

app = Flask(__name__)
app.config["SITE_ROOT"] = str(SITE_ROOT)
app.config["EXPORT_BASE_URL"] = EXPORT_BASE_URL
CORS(app, resources={r"/data/*": {"origins": "*"}}, send_wildcard=True)  # Content documents are public


def _text(body: str, status: int) -> Response:
    return Response(body, status=status, mimetype="text/plain")


def _prefers_reduced_motion() -> bool:
    return request.headers.get("Sec-CH-Prefers-Reduced-Motion", "").strip().lower() == "reduce"


def _serve_page(doc, engine_cls):
    """Bootstrap a render engine for one page load, apply a toggle POST, and respond."""
    storage = CookieStorage(request.cookies)
    engine = engine_cls(doc, ContentStore(app.config["SITE_ROOT"]), storage)
    reveal = RevealController(prefers_motion=not _prefers_reduced_motion()).attach(engine)
    try:
        engine.bootstrap(query_lang=request.args.get("lang"), browser_lang=request.accept_languages.best)
        if request.method == "POST":
            engine.set_language(request.form.get("lang", ""))
        # Timed work cannot outlive the response; the page leaves in its settled state.
        reveal.settle()
    finally:
        reveal.detach(engine)

    status = 404 if getattr(engine, "detail_found", None) is False else 200
    response = make_response(render_page(doc), status)
    response.headers["Accept-CH"] = "Sec-CH-Prefers-Reduced-Motion"
    response.headers["Vary"] = "Cookie, Accept-Language, Sec-CH-Prefers-Reduced-Motion"
    storage.apply(response)
    return response


@app.route("/health", methods=["GET"])
def health():
    return jsonify({"status": "healthy"})


@app.route("/cv/", methods=["GET", "POST"])
def cv_page():
    return _serve_page(load_shell(CV_SHELL), CVEngine)


@app.route("/portfolio/", methods=["GET", "POST"])
def portfolio_overview():
    return _serve_page(load_shell(PORTFOLIO_OVERVIEW_SHELL), PortfolioEngine)


@app.route("/portfolio/<slug>/", methods=["GET", "POST"])
def portfolio_detail(slug):
    return _serve_page(load_shell(PORTFOLIO_DETAIL_SHELL, slug=slug), PortfolioEngine)


@app.route("/export/cv.pdf", methods=["GET"])
def export_cv_pdf():
    """
    Render the CV page to an A4 PDF.

    Query:
    - lang: de | en (anything else falls back to de)
    """
    lang = export_lang(request.args.get("lang"))
    base_url = app.config["EXPORT_BASE_URL"] or request.host_url

    try:
        pdf_bytes = capture_cv_pdf(base_url, lang)
    except BrowserUnavailable as e:
        logging.error(f"[export] Headless browser unavailable: {e}")
        return _text(str(e), 503)
    except Exception as e:
        logging.error(f"[export] PDF generation failed: {e}")
        return _text(f"PDF generation failed: {e}", 500)

    return send_file(
        io.BytesIO(pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=export_filename(lang),
    )


@app.route("/", defaults={"filename": ""}, methods=["GET"])
@app.route("/<path:filename>", methods=["GET"])
def static_file(filename):
    if filename == "" or filename.endswith("/"):
        filename += "index.html"

    path = safe_join(app.config["SITE_ROOT"], filename)
    if path is None:
        return _text("Forbidden", 403)
    if not os.path.isfile(path):
        return _text("Not found", 404)
    try:
        return send_file(path)
    except OSError as e:
        logging.error(f"Static file read failed for {filename}: {e}")
        return _text("Internal server error", 500)


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(message)s")
    logging.info(f"Site:  http://localhost:{PORT}")
    logging.info(f"CV:    http://localhost:{PORT}/cv/")
    logging.info(f"PDF:   http://localhost:{PORT}/export/cv.pdf?lang=de")
    app.run(host="0.0.0.0", port=PORT, threaded=True)
