from __future__ import annotations

import pytest

from scripts.fix_mirror_paths import main as fix_main
from scripts.remove_footer_section import main as footer_main
from tests.conftest import HOMEPAGE, MIRROR_SUBDIR, write
from utils.footer_remover import FOOTER_MARKER
from utils.mirror_restructure import TOOL_INDEX_BACKUP


def test_fix_mirror_paths_end_to_end(mirror_root):
    rc = fix_main([str(mirror_root)])

    assert rc == 0
    assert not (mirror_root / MIRROR_SUBDIR).exists()
    assert (mirror_root / TOOL_INDEX_BACKUP).exists()
    index = (mirror_root / "index.html").read_text(encoding="utf-8")
    assert 'href="./css/style.css"' in index
    assert 'href="./pages/about.html"' in index
    # depth 1 keeps a single parent token
    assert '<a href="../index.html">' in (mirror_root / "pages" / "about.html").read_text(encoding="utf-8")
    # the cache dir is never rewritten
    assert (mirror_root / "hts-cache" / "new.html").read_text(encoding="utf-8") == "<p>cache</p>"


def test_fix_mirror_paths_missing_subdir_stops(tmp_path):
    root = tmp_path / "site"
    write(root / "index.html", HOMEPAGE)

    rc = fix_main([str(root)])

    assert rc == 0
    assert (root / "index.html").read_text(encoding="utf-8") == HOMEPAGE


def test_fix_mirror_paths_rewrite_only(tmp_path):
    root = tmp_path / "site"
    write(root / "index.html", HOMEPAGE)

    rc = fix_main([str(root), "--rewrite-only"])

    assert rc == 0
    assert 'href="./css/style.css"' in (root / "index.html").read_text(encoding="utf-8")


def test_fix_mirror_paths_dry_run_touches_nothing(mirror_root):
    before = (mirror_root / "index.html").read_text(encoding="utf-8")

    rc = fix_main([str(mirror_root), "--dry-run"])

    assert rc == 0
    assert (mirror_root / MIRROR_SUBDIR).is_dir()
    assert (mirror_root / "index.html").read_text(encoding="utf-8") == before


def test_fix_mirror_paths_help_explains_dry_run(capsys):
    with pytest.raises(SystemExit) as excinfo:
        fix_main(["--help"])

    assert excinfo.value.code == 0
    out = " ".join(capsys.readouterr().out.split())
    assert "Implies" in out
    assert "nested layout" in out


def test_fix_mirror_paths_root_from_env(mirror_root, monkeypatch):
    monkeypatch.setenv("MIRROR_SITE_ROOT", str(mirror_root))

    rc = fix_main([])

    assert rc == 0
    assert not (mirror_root / MIRROR_SUBDIR).exists()


def test_fix_mirror_paths_bad_root(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        fix_main([str(tmp_path / "missing")])

    assert excinfo.value.code == 2


def test_remove_footer_cli(tmp_path):
    page = write(
        tmp_path / "index.html",
        f'<body><section class="{FOOTER_MARKER}"><p>footer</p></section></body>',
    )

    rc = footer_main([str(tmp_path), "--progress-every", "0"])

    assert rc == 0
    assert page.read_text(encoding="utf-8") == "<body></body>"


def test_remove_footer_cli_errors_still_succeed(tmp_path):
    (tmp_path / "bad.html").write_bytes(b"\xff\xfe bad")

    assert footer_main([str(tmp_path)]) == 0


def test_remove_footer_cli_bad_root(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        footer_main([str(tmp_path / "nope")])

    assert excinfo.value.code == 2
