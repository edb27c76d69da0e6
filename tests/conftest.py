# tests/conftest.py
from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest


# ---------- import helpers ----------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from logging_setup import LOGGER_NAME  # noqa: E402

MIRROR_SUBDIR = "www.miracles-of-quran.com"

HTTRACK_INDEX = """<html><head><title>Local index - HTTrack Website Copier</title></head>
<body>
<!-- Mirror and index made by HTTrack Website Copier/3.49-2 -->
<a href="www.miracles-of-quran.com/index.html">Miracles of the Quran</a>
<a href="hts-log.txt">log</a>
</body></html>
"""

HOMEPAGE = """<html><head><title>Miracles of the Quran</title>
<link rel="stylesheet" href="../css/style.css">
</head>
<body><a href="../pages/about.html">About</a></body></html>
"""


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


# ---------- common fixtures ----------
@pytest.fixture
def mirror_root(tmp_path: Path) -> Path:
    """
    Typical HTTrack output:

        site/index.html                       (HTTrack navigation page)
        site/hts-cache/...
        site/www.miracles-of-quran.com/index.html
        site/www.miracles-of-quran.com/css/style.css
        site/www.miracles-of-quran.com/pages/about.html
    """
    root = tmp_path / "site"
    write(root / "index.html", HTTRACK_INDEX)
    write(root / "hts-cache" / "new.html", "<p>cache</p>")
    inner = root / MIRROR_SUBDIR
    write(inner / "index.html", HOMEPAGE)
    write(inner / "css" / "style.css", "body { color: black; }")
    write(inner / "pages" / "about.html", '<a href="../index.html">Home</a>')
    return root


@pytest.fixture
def mirror_log(caplog):
    """caplog wired to the project logger (propagate=False once setup_logging ran)."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(caplog.handler)
    try:
        with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
            yield caplog
    finally:
        logger.removeHandler(caplog.handler)
