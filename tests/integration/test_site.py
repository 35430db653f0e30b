"""Integration tests for the static site facade."""
import os
from pathlib import Path

import pytest

from serve_static.config.loader import Config
from serve_static.security.errors import InvalidRoot, NullByte, SymlinkTraversal
from serve_static import site as site_module
from serve_static.site import StaticSite, create_site, strip_query


@pytest.fixture
def site(sample_config):
    return create_site(sample_config)


def test_create_site(sample_config, site_root):
    site = create_site(sample_config)
    assert isinstance(site, StaticSite)
    assert site.root == Path(site_root)
    assert site.config.allow_symlinks is False


def test_create_site_bad_config(temp_dir, caplog):
    with pytest.raises(FileNotFoundError):
        create_site(os.path.join(temp_dir, "missing.yaml"))
    assert "Failed to load configuration" in caplog.text


def test_strip_query():
    assert strip_query("/a.txt?x=1#frag") == "/a.txt"
    assert strip_query("/a.txt#frag?x") == "/a.txt"
    assert strip_query("/a%3Fb.txt") == "/a%3Fb.txt"


def test_resolve_strips_query_and_fragment(site, site_root):
    path = site.resolve("/index.html?v=3#top")
    assert path == Path(os.path.realpath(site_root)) / "index.html"


def test_resolve_errors_propagate(site):
    with pytest.raises(NullByte):
        site.resolve("/x%00")


def test_symlink_escape_through_site(site, site_root, outside_dir, make_symlink):
    make_symlink(outside_dir, os.path.join(site_root, "evil"))
    with pytest.raises(SymlinkTraversal):
        site.resolve("/evil/secret.txt")
    with pytest.raises(SymlinkTraversal):
        site.resolve("/evil/missing.txt?download=1")


def test_allow_symlinks_from_config(sample_config, site_root, outside_dir, make_symlink):
    make_symlink(outside_dir, os.path.join(site_root, "shared"))
    config = Config(sample_config)
    config.allow_symlinks = True
    site = StaticSite(config)
    path = site.resolve("/shared/secret.txt")
    assert path == Path(os.path.realpath(site_root)) / "shared" / "secret.txt"


def test_describe_file(site):
    info = site.describe(site.resolve("/index.html"))
    assert info['mime'] == "text/html"
    assert info['size'] == len("<html>")
    assert info['etag'].startswith('W/"')
    assert info['etag'].endswith('-6"')


def test_describe_missing_and_directory(site):
    assert site.describe(site.resolve("/missing.html")) is None
    assert site.describe(site.resolve("/assets")) is None


def test_listing(site):
    entries = site.listing("/")
    assert [e.name for e in entries] == ["assets", "index.html"]
    assert [e.name for e in site.listing("/assets?sort=name")] == ["images"]


def test_listing_not_a_directory(site):
    assert site.listing("/index.html") is None
    assert site.listing("/missing/") is None


def test_listing_disabled(sample_config):
    config = Config(sample_config)
    config.listing_enabled = False
    assert StaticSite(config).listing("/") is None


def test_missing_root(sample_config, site_root):
    config = Config(sample_config)
    config.root_path = os.path.join(site_root, "gone")
    site = StaticSite(config)
    with pytest.raises(InvalidRoot) as exc_info:
        site.resolve("/index.html")
    assert exc_info.value.status == 500
    assert "gone" not in str(exc_info.value.to_dict())


@pytest.mark.parametrize("allow_symlinks", [False, True])
def test_describe_path_under_a_file(sample_config, allow_symlinks):
    """A path that treats a regular file as a directory describes as missing."""
    config = Config(sample_config)
    config.allow_symlinks = allow_symlinks
    site = StaticSite(config)
    assert site.describe(site.resolve("/index.html/child")) is None


def test_listing_unreadable_directory(site, monkeypatch, caplog):
    """A directory that cannot be opened is logged and not listed."""
    def refuse(directory, show_hidden=False):
        raise PermissionError(13, "Permission denied", str(directory))

    monkeypatch.setattr(site_module, "scan_entries", refuse)
    assert site.listing("/assets") is None
    assert "Cannot list directory" in caplog.text
