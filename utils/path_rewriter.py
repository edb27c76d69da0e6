"""Rewrite relative and domain-prefixed paths after a mirror has been flattened.

The rewrite is purely textual: ``../`` tokens anywhere in the document are
adjusted for the file's depth, including ones inside comments, scripts and
prose. Root-level files get every ``../`` turned into ``./``; deeper files only
have lone tokens expanded.
"""
from __future__ import annotations

import re
from pathlib import Path

from logging_setup import get_logger
from models import BatchStats
from utils.fs import atomic_write, read_text, safe_relpath
from utils.mirror_restructure import DEFAULT_MIRROR_SUBDIR
from utils.scanner import collect_html_files

PARENT_TOKEN = "../"
CURRENT_TOKEN = "./"

_PARENT_RE = re.compile(r"\.\./")
# A "../" that is not part of a longer "../../" chain. Chains are what this
# module writes for deeper files, so leaving them alone keeps a second run a no-op.
_LONE_PARENT_RE = re.compile(r"(?<!\.\./)(?<!\.)\.\./(?!\.\./)")


def path_depth(path: Path, root: Path) -> int:
    """Number of directories between root and the file (0 for root/index.html)."""
    return len(safe_relpath(path, root).split("/")) - 1


def _parent_replacement(depth: int) -> str:
    if depth <= 0:
        return CURRENT_TOKEN
    if depth == 1:
        return PARENT_TOKEN
    return PARENT_TOKEN * depth


def rewrite_relative_paths(text: str, depth: int) -> str:
    replacement = _parent_replacement(depth)
    if replacement == PARENT_TOKEN:
        return text
    if replacement == CURRENT_TOKEN:
        return _PARENT_RE.sub(CURRENT_TOKEN, text)
    return _LONE_PARENT_RE.sub(replacement, text)


def rewrite_domain_paths(text: str, subdir_name: str = DEFAULT_MIRROR_SUBDIR) -> str:
    """Point references to the old domain folder at the new root."""
    domain = re.escape(subdir_name)
    text = re.sub(rf"[\"']/{domain}/", '"/', text)
    text = re.sub(rf"[\"']{domain}/", '"./', text)
    text = re.sub(rf'href="{domain}/', 'href="./', text)
    text = re.sub(rf'src="{domain}/', 'src="./', text)
    return text


def fix_paths_in_html(
    path: Path,
    root: Path,
    *,
    subdir_name: str = DEFAULT_MIRROR_SUBDIR,
    dry_run: bool = False,
    log=None,
) -> bool:
    """Rewrite one file in place; True when its content changed."""
    log = log or get_logger(step="rewrite", site=root.name)
    original = read_text(path)
    depth = path_depth(path, root)
    log.debug("Processing %s (depth: %d)", safe_relpath(path, root), depth)

    updated = rewrite_relative_paths(original, depth)
    updated = rewrite_domain_paths(updated, subdir_name)

    if updated == original:
        log.debug("No changes needed for %s", path.name)
        return False

    if not dry_run:
        atomic_write(path, updated)
    log.info("Fixed paths in %s", safe_relpath(path, root))
    return True


def fix_paths(
    root: Path,
    *,
    subdir_name: str = DEFAULT_MIRROR_SUBDIR,
    dry_run: bool = False,
) -> BatchStats:
    """Fix paths in every HTML file under root. Per-file errors are logged and counted."""
    log = get_logger(step="rewrite", site=root.name)
    stats = BatchStats()
    html_files = collect_html_files(root)
    log.info("Found %d HTML files to process", len(html_files))

    for html_path in html_files:
        stats.scanned += 1
        try:
            if fix_paths_in_html(html_path, root, subdir_name=subdir_name, dry_run=dry_run, log=log):
                stats.changed += 1
        except (OSError, UnicodeDecodeError) as exc:
            stats.failed += 1
            log.error("Error processing %s err=%s", html_path, exc)

    log.info("path fixing complete dry_run=%s %s", dry_run, stats.to_dict())
    return stats


__all__ = [
    "fix_paths",
    "fix_paths_in_html",
    "path_depth",
    "rewrite_domain_paths",
    "rewrite_relative_paths",
]
