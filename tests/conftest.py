import os
from datetime import datetime, timezone

import pytest

from console import Console
from site_content import ContentItem, Layout, Site

SITE_URL = "https://example.com"


def set_mtime(path, when):
    stamp = when.timestamp()
    os.utime(path, (stamp, stamp))


@pytest.fixture
def console():
    return Console(quiet=True)


@pytest.fixture
def write_file(tmp_path):
    """Create a file under tmp_path, optionally with a given mtime."""
    def _write(rel_path, text="<html></html>", mtime=None):
        path = tmp_path / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        if mtime is not None:
            set_mtime(path, mtime)
        return str(path)
    return _write


@pytest.fixture
def make_post():
    def _post(slug, date, **data):
        return ContentItem('post', f"/_posts/{date:%Y-%m-%d}-{slug}.html",
                           f"/{date:%Y/%m/%d}/{slug}.html", data=data, date=date)
    return _post


@pytest.fixture
def make_page(write_file):
    def _page(path, mtime=None, **data):
        source = write_file(path.lstrip('/'), mtime=mtime or datetime(2019, 5, 1, tzinfo=timezone.utc))
        return ContentItem('page', path, path, data=data, source_path=source)
    return _page


@pytest.fixture
def make_site(tmp_path):
    def _site(posts=(), pages=(), layouts=None, sitemap=None, **config):
        site_config = {'url': SITE_URL, 'baseurl': ''}
        site_config.update(config)
        if sitemap is not None:
            site_config['sitemap'] = sitemap
        return Site(str(tmp_path), str(tmp_path / '_site'), config=site_config,
                    posts=posts, pages=pages, layouts=layouts or {})
    return _site


@pytest.fixture
def make_layout(write_file):
    def _layout(name, parent=None, mtime=None):
        source = write_file(f"_layouts/{name}.html", mtime=mtime)
        return Layout(name, source, parent)
    return _layout
