import logging

import pytest

from webjson.core.errors import OutputDirectoryError
from webjson.core.models import BuildReport, SiteConfig
from webjson.core.settings import SiteLayout
from webjson.rendering.walker import EntryKind, build_site, classify, copy_asset

from .conftest import OUTPUT, SOURCE


@pytest.mark.parametrize(
    "name, is_dir, expected",
    [
        ("index.json", False, EntryKind.PAGE),
        ("style.css", False, EntryKind.ASSET),
        ("data.json.bak", False, EntryKind.ASSET),
        ("_notes.json", False, EntryKind.PAGE),
        ("blog", True, EntryKind.DIRECTORY),
        ("_templates", True, EntryKind.EXCLUDED),
        ("_drafts", True, EntryKind.EXCLUDED),
    ],
)
def test_classify(config, name, is_dir, expected):
    assert classify(SOURCE / name, is_dir, config) is expected


def test_build_site_mirrors_tree(config, make_site):
    provider = make_site(
        {
            "_templates/base.html": "<title>[{title}]</title>[@nav@]",
            "_includes/nav.html": '<a href="[{relative_path}]index.html">home</a>',
            "index.json": '{"template": "base", "title": "Home"}',
            "css/site.css": "body {}",
            "img/logo.png": b"\x89PNG\r\n\x1a\n\x00\xff",
            "blog/post.json": '{"template": "base", "title": "Post"}',
        }
    )

    report = build_site(config, provider)

    assert provider.read_text(OUTPUT / "index.html") == (
        '<title>Home</title><a href="./index.html">home</a>'
    )
    assert provider.read_text(OUTPUT / "blog" / "post.html") == (
        '<title>Post</title><a href="../index.html">home</a>'
    )
    assert provider.read_text(OUTPUT / "css" / "site.css") == "body {}"
    assert provider.read_bytes(OUTPUT / "img" / "logo.png") == (
        b"\x89PNG\r\n\x1a\n\x00\xff"
    )
    assert not provider.is_dir(OUTPUT / "_templates")
    assert not provider.is_dir(OUTPUT / "_includes")
    assert report == BuildReport(
        directories=4, pages_rendered=2, pages_skipped=0, files_copied=2, failures=0
    )


def test_build_site_scenario_d_skips_underscore_directories(config, make_site):
    provider = make_site(
        {
            "_templates/base.html": "x",
            "_drafts/secret.json": '{"template": "base"}',
            "_drafts/notes.txt": "draft",
            "page.json": '{"template": "base"}',
        }
    )

    build_site(config, provider)

    assert provider.is_file(OUTPUT / "page.html")
    assert not provider.is_dir(OUTPUT / "_drafts")
    assert not any("_drafts" in str(path) for path in provider.files if OUTPUT in path.parents)


def test_build_site_continues_after_page_problems(config, make_site, caplog):
    provider = make_site(
        {
            "_templates/base.html": "[{title}]",
            "a.json": "{broken",
            "b.json": '{"title": "no template"}',
            "c.json": '{"template": "nope"}',
            "d.json": '{"template": "base", "title": "D"}',
        }
    )

    with caplog.at_level(logging.WARNING):
        report = build_site(config, provider)

    assert provider.read_text(OUTPUT / "d.html") == "D"
    assert report.pages_rendered == 1
    assert report.pages_skipped == 3
    assert "Template not found: nope" in caplog.text


def test_build_site_directory_failure_is_fatal(config, make_site):
    provider = make_site(
        {
            "a.txt": "a",
            "sub/b.txt": "b",
        },
        deny_writes=[OUTPUT / "sub"],
    )

    with pytest.raises(OutputDirectoryError):
        build_site(config, provider)

    assert provider.read_text(OUTPUT / "a.txt") == "a"


def test_copy_asset_failure_is_reported(config, make_site, caplog):
    provider = make_site({"a.txt": "a"}, deny_writes=[OUTPUT / "a.txt"])
    report = BuildReport()

    with caplog.at_level(logging.ERROR):
        output = copy_asset(SOURCE / "a.txt", config, provider, report)

    assert output is None
    assert report.failures == 1
    assert "Failed to copy file: a.txt" in caplog.text


def test_copy_asset_overwrites_existing(config, make_site):
    provider = make_site({"a.txt": "new"})
    provider.make_dirs(OUTPUT)
    provider.write_text(OUTPUT / "a.txt", "old")

    assert copy_asset(SOURCE / "a.txt", config, provider) == OUTPUT / "a.txt"
    assert provider.read_text(OUTPUT / "a.txt") == "new"


def test_build_site_skips_output_nested_in_source(make_site):
    config = SiteConfig(source_root=SOURCE, output_root=SOURCE / "public")
    provider = make_site(
        {
            "a.txt": "a",
            "public/a.txt": "stale",
        }
    )

    report = build_site(config, provider)

    assert provider.read_text(SOURCE / "public" / "a.txt") == "a"
    assert not provider.is_dir(SOURCE / "public" / "public")
    assert report.files_copied == 1


def test_build_site_honours_custom_layout(make_site):
    layout = SiteLayout(templates_dir="_layouts", page_extension=".page")
    config = SiteConfig(source_root=SOURCE, output_root=OUTPUT, layout=layout)
    provider = make_site(
        {
            "_layouts/base.html": "<b>[{title}]</b>",
            "index.page": '{"template": "base", "title": "Hi"}',
            "data.json": "{}",
        }
    )

    build_site(config, provider)

    assert provider.read_text(OUTPUT / "index.html") == "<b>Hi</b>"
    assert provider.read_text(OUTPUT / "data.json") == "{}"


def test_build_site_continues_past_unreadable_directory(config, make_site, caplog):
    provider = make_site(
        {
            "locked/a.txt": "a",
            "open/b.txt": "b",
        },
        deny_reads=[SOURCE / "locked"],
    )

    with caplog.at_level(logging.ERROR):
        report = build_site(config, provider)

    assert provider.read_text(OUTPUT / "open" / "b.txt") == "b"
    assert not provider.is_file(OUTPUT / "locked" / "a.txt")
    assert report.failures == 1
    assert "Failed to read directory: locked" in caplog.text
