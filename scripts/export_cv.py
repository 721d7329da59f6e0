#!/usr/bin/env python3
"""
export_cv.py

Render the CV to PDF from a running site server, without going through the
/export/cv.pdf endpoint.

Usage:
  python scripts/export_cv.py [--base-url http://localhost:3000] [--lang de|en] [--out DIR]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO))

from vitae.config import PORT, export_filename
from vitae.export import capture_cv_pdf, export_lang


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Export the CV page to PDF.")
    parser.add_argument("--base-url", default=f"http://localhost:{PORT}")
    parser.add_argument("--lang", action="append", choices=["de", "en"],
                        help="Language to export; repeat for several. Default: de and en.")
    parser.add_argument("--out", default=str(REPO / "tmp"), help="Output directory.")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    failures = 0
    for lang in args.lang or ["de", "en"]:
        lang = export_lang(lang)
        try:
            pdf = capture_cv_pdf(args.base_url, lang)
        except Exception as e:
            logging.error(f"{lang}: {e}")
            failures += 1
            continue
        target = out_dir / export_filename(lang)
        target.write_bytes(pdf)
        print(f"Wrote: {target}")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
