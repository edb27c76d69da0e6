"""Flatten an HTTrack mirror whose pages landed one level below the site root.

HTTrack writes its own navigation ``index.html`` at the project root and puts
the downloaded site inside a domain-named folder next to it. The helpers here
pick the real homepage, move the folder's contents up and merge any
directories that already exist at the root.
"""
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup

from logging_setup import get_logger
from models import IndexConflict, IndexKind, RestructureReport
from utils.fs import read_text, remove_path

# --- Tunables ---------------------------------------------------------------
DEFAULT_MIRROR_SUBDIR = "www.miracles-of-quran.com"
INDEX_NAME = "index.html"
TOOL_INDEX_BACKUP = "httrack-index.html"
ORIGINAL_INDEX_BACKUP = "original-index.html"
TOOL_MARKERS = ("httrack", "mirror", "hts-log.txt")
COMMON_ASSET_DIRS = ("css", "js", "images", "assets")
PREVIEW_CHARS = 100
LISTING_PREVIEW = 10


def extract_title(html: str) -> str:
    soup = BeautifulSoup(html, "html.parser")
    if soup.title is not None:
        title = soup.title.get_text(strip=True)
        if title:
            return title
    return "No title found"


def _mentions_tool(html: str) -> bool:
    lowered = html.lower()
    return any(marker in lowered for marker in TOOL_MARKERS)


def classify_index(html: str) -> IndexKind:
    """
    Classify an index.html by content.

    - "tool-generated": mentions HTTrack, "mirror" or the hts-log.txt file
    - "real-homepage": no tool markers and a non-empty <title>
    - "undetermined": anything else (empty or title-less pages)
    """
    if _mentions_tool(html):
        return "tool-generated"
    if extract_title(html) != "No title found":
        return "real-homepage"
    return "undetermined"


def analyze_structure(root: Path, subdir_name: str = DEFAULT_MIRROR_SUBDIR) -> bool:
    """Log what the mirror looks like; return True when the nested subdirectory exists."""
    log = get_logger(step="analyze", site=root.name)
    subdir = root / subdir_name
    outer_index = root / INDEX_NAME
    inner_index = subdir / INDEX_NAME

    if outer_index.is_file() and inner_index.is_file():
        log.warning("Found two index.html files: outside=%s inside=%s", outer_index, inner_index)
        try:
            for label, path in (("Outside", outer_index), ("Inside", inner_index)):
                html = read_text(path)
                log.info(
                    "%s index.html title=%r size=%d httrack_refs=%s",
                    label,
                    extract_title(html),
                    len(html),
                    "httrack" in html.lower(),
                )
        except (OSError, UnicodeDecodeError) as exc:
            log.warning("Could not read index files for analysis err=%s", exc)

    if not subdir.is_dir():
        log.error("%s subdirectory not found", subdir_name)
        try:
            log.info("Current contents: %s", sorted(p.name for p in root.iterdir()))
        except OSError as exc:
            log.warning("Could not list %s err=%s", root, exc)
        return False

    log.info("Found %s subdirectory", subdir_name)
    contents = sorted(p.name for p in subdir.iterdir())
    preview = ", ".join(contents[:LISTING_PREVIEW])
    if len(contents) > LISTING_PREVIEW:
        preview += "..."
    log.info("Contents: %s", preview)
    for name in COMMON_ASSET_DIRS:
        if name in contents:
            log.info("Found %s directory", name)
    return True


def resolve_index_conflict(root: Path, subdir: Path) -> Optional[IndexConflict]:
    """
    Pick the real homepage when both root/index.html and subdir/index.html exist.

    The outer file is always backed up (httrack-index.html when it carries the
    mirror's markers, original-index.html otherwise) and the inner file becomes
    the root index. Without markers the choice is a guess, so the result is
    flagged for manual review.
    """
    log = get_logger(step="restructure", site=root.name)
    outer_index = root / INDEX_NAME
    inner_index = subdir / INDEX_NAME
    if not (outer_index.is_file() and inner_index.is_file()):
        return None

    log.info("Found two index.html files - handling conflict")
    outer_html = read_text(outer_index)
    inner_html = read_text(inner_index)
    outer_kind = classify_index(outer_html)
    inner_kind = classify_index(inner_html)

    if outer_kind == "tool-generated":
        log.info("Outside index.html is HTTrack's navigation page; inside is the website homepage")
        backup = root / TOOL_INDEX_BACKUP
        needs_review = False
    else:
        log.warning(
            "Cannot determine which index.html is which - manual review needed "
            "outside_kind=%s inside_kind=%s outside_head=%r inside_head=%r",
            outer_kind,
            inner_kind,
            outer_html[:PREVIEW_CHARS],
            inner_html[:PREVIEW_CHARS],
        )
        backup = root / ORIGINAL_INDEX_BACKUP
        needs_review = True

    _rename(outer_index, backup)
    log.info("Renamed outside index.html to %s", backup.name)
    try:
        _rename(inner_index, outer_index)
    except OSError:
        # put the outer page back so the root never ends up without an index
        _rename(backup, outer_index)
        raise
    log.info("Moved inside index.html to root")

    return IndexConflict(
        outer_path=outer_index,
        inner_path=inner_index,
        outer_kind=outer_kind,
        inner_kind=inner_kind,
        backup_path=backup,
        needs_review=needs_review,
    )


def _rename(src: Path, dest: Path) -> None:
    src.replace(dest)


def _move(src: Path, dest: Path) -> None:
    shutil.move(str(src), str(dest))


def merge_directories(src: Path, dest: Path) -> None:
    """Move src's children into dest; files from src replace same-named entries in dest."""
    for child in sorted(src.iterdir(), key=lambda p: p.name):
        target = dest / child.name
        if target.exists() or target.is_symlink():
            if child.is_dir() and target.is_dir():
                merge_directories(child, target)
                continue
            remove_path(target)
        _move(child, target)

    try:
        src.rmdir()
    except OSError as exc:
        log = get_logger(step="restructure", site=dest.name)
        log.debug("Left %s in place err=%s", src, exc)


def move_and_fix_structure(
    root: Path,
    subdir_name: str = DEFAULT_MIRROR_SUBDIR,
) -> Optional[RestructureReport]:
    """
    Move everything from root/subdir_name up into root.

    Returns None when the subdirectory does not exist. Failures on a single
    entry are logged and recorded in the report; the rest still moves.
    """
    log = get_logger(step="restructure", site=root.name)
    subdir = root / subdir_name
    if not subdir.is_dir():
        log.error("Subdirectory %s not found, nothing to move", subdir_name)
        return None

    log.info("Moving files from %s to root", subdir_name)
    report = RestructureReport()

    index_handled = False
    try:
        report.conflict = resolve_index_conflict(root, subdir)
        index_handled = report.conflict is not None
    except (OSError, UnicodeDecodeError) as exc:
        # leave the inner index in place so it cannot clobber the outer one
        log.error("Error resolving index.html conflict err=%s", exc)
        report.failed.append(INDEX_NAME)
        index_handled = True

    for entry in sorted(subdir.iterdir(), key=lambda p: p.name):
        if index_handled and entry.name == INDEX_NAME:
            continue
        dest = root / entry.name
        try:
            if dest.exists() or dest.is_symlink():
                log.info("%s already exists at root, merging", entry.name)
                if entry.is_dir() and dest.is_dir():
                    merge_directories(entry, dest)
                else:
                    remove_path(dest)
                    _move(entry, dest)
                report.merged.append(entry.name)
            else:
                _move(entry, dest)
                log.debug("Moved %s to root", entry.name)
                report.moved.append(entry.name)
        except OSError as exc:
            log.error("Error moving %s err=%s", entry.name, exc)
            report.failed.append(entry.name)

    if any(subdir.iterdir()):
        log.warning("Could not remove %s (not empty)", subdir_name)
    else:
        subdir.rmdir()
        report.subdir_removed = True
        log.info("Removed empty subdirectory %s", subdir_name)

    log.info(
        "restructure complete moved=%d merged=%d failed=%d",
        len(report.moved),
        len(report.merged),
        len(report.failed),
    )
    return report


__all__ = [
    "DEFAULT_MIRROR_SUBDIR",
    "ORIGINAL_INDEX_BACKUP",
    "TOOL_INDEX_BACKUP",
    "analyze_structure",
    "classify_index",
    "extract_title",
    "merge_directories",
    "move_and_fix_structure",
    "resolve_index_conflict",
]
