"""Remove the Simple/Intermediate/Advanced footer section from mirrored pages.

The footer is matched with a non-greedy regex from the marked ``<section>`` to
the first ``</section>`` after it, so a nested section inside the footer would
cut the removal short. The Google Translate widget that lives in the footer is
moved to a compact block just before ``</body>``.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Tuple

from logging_setup import get_logger
from models import BatchStats
from utils.fs import atomic_write, read_text
from utils.scanner import collect_html_files

# --- Tunables ---------------------------------------------------------------
FOOTER_MARKER = "cid-tJkSLE66e9"
BODY_CLOSE = "</body>"
DEFAULT_PROGRESS_EVERY = 100

_footer_re = re.compile(rf"<section[^>]*{re.escape(FOOTER_MARKER)}[^>]*>[\s\S]*?</section>")
_widget_re = re.compile(
    r'<div id="google_translate_element"></div>[\s\S]*?<script src=".*?translate_a/element.*?</script>'
)

_WIDGET_PREFIX = """
<div style="text-align: center; padding: 8px; background: #f8f9fa; font-size: 0;">
  <div style="display: inline-block; transform: scale(0.75); transform-origin: center;">
    """

_WIDGET_SUFFIX = """
  </div>
</div>
<style>
  /* Force smaller Google Translate styling */
  #google_translate_element {
    zoom: 0.75 !important;
    -moz-transform: scale(0.75) !important;
    -webkit-transform: scale(0.75) !important;
    transform: scale(0.75) !important;
    font-size: 11px !important;
    line-height: 1.2 !important;
  }

  #google_translate_element * {
    font-size: 11px !important;
    max-height: 24px !important;
  }

  #google_translate_element .goog-te-combo {
    font-size: 10px !important;
    padding: 1px 3px !important;
    height: 20px !important;
    border: 1px solid #ccc !important;
  }

  #google_translate_element .goog-logo-link {
    font-size: 9px !important;
  }

  #google_translate_element img {
    max-height: 12px !important;
    max-width: 40px !important;
    vertical-align: middle !important;
  }

  /* Hide Google branding if too large */
  .goog-logo-link img {
    display: none !important;
  }

  /* Delay styling to override Google's scripts */
  .goog-te-gadget {
    font-size: 0 !important;
  }

  .goog-te-gadget > span {
    font-size: 10px !important;
  }
</style>
<script>
  // Apply styling after Google Translate loads
  setTimeout(function() {
    const googleElements = document.querySelectorAll('#google_translate_element, #google_translate_element *');
    googleElements.forEach(el => {
      if (el.tagName === 'SELECT') {
        el.style.fontSize = '10px';
        el.style.height = '20px';
        el.style.padding = '1px 3px';
      }
      if (el.tagName === 'IMG') {
        el.style.maxHeight = '12px';
        el.style.maxWidth = '40px';
      }
    });
  }, 2000);
</script>
</body>"""


def extract_translate_widget(html: str) -> Optional[str]:
    match = _widget_re.search(html)
    return match.group(0) if match else None


def strip_footer_section(html: str) -> str:
    if FOOTER_MARKER not in html:
        return html
    return _footer_re.sub("", html)


def wrap_translate_widget(widget: str) -> str:
    """Compact, centered wrapper for the widget; ends with the closing body tag."""
    return _WIDGET_PREFIX + widget + _WIDGET_SUFFIX


def remove_footer_section(html: str) -> Tuple[str, bool]:
    """
    Drop the marked footer section and re-home the translate widget.

    Returns (new_html, changed). changed is False when no footer was removed,
    in which case new_html is the input unchanged.
    """
    widget = extract_translate_widget(html)
    stripped = strip_footer_section(html)
    if stripped == html:
        return html, False

    if widget and BODY_CLOSE in stripped:
        # a copy outside the footer would otherwise show up twice
        stripped = stripped.replace(widget, "", 1)
        stripped = stripped.replace(BODY_CLOSE, wrap_translate_widget(widget), 1)
    return stripped, True


def remove_footer_from_file(path: Path, *, dry_run: bool = False) -> bool:
    """Rewrite one file in place; True when the footer was removed."""
    original = read_text(path)
    updated, changed = remove_footer_section(original)
    if changed and not dry_run:
        atomic_write(path, updated)
    return changed


def _log_progress(log, *, current: int, total: int, progress_every: int) -> None:
    if progress_every <= 0:
        return
    if current % progress_every == 0:
        log.info("Processing %d/%d files", current, total)


def remove_footers(
    root: Path,
    *,
    dry_run: bool = False,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
) -> BatchStats:
    """Remove the footer from every HTML file under root. Per-file errors are logged and counted."""
    log = get_logger(step="footer", site=root.name)
    stats = BatchStats()
    html_files = collect_html_files(root)
    total = len(html_files)
    log.info("Processing %d files (marker=%s)", total, FOOTER_MARKER)

    for idx, html_path in enumerate(html_files):
        _log_progress(log, current=idx, total=total, progress_every=progress_every)
        stats.scanned += 1
        try:
            if remove_footer_from_file(html_path, dry_run=dry_run):
                stats.changed += 1
                log.debug("Removed footer from %s", html_path)
        except (OSError, UnicodeDecodeError) as exc:
            stats.failed += 1
            log.error("Error processing %s err=%s", html_path.name, exc)

    log.info(
        "footer removal complete dry_run=%s processed=%d cleaned=%d errors=%d",
        dry_run,
        stats.processed,
        stats.changed,
        stats.failed,
    )
    return stats


__all__ = [
    "FOOTER_MARKER",
    "extract_translate_widget",
    "remove_footer_from_file",
    "remove_footer_section",
    "remove_footers",
    "strip_footer_section",
    "wrap_translate_widget",
]
