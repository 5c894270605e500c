from datetime import datetime, timezone

import pytest

from sitemap_dates import DateResolver
from sitemap_entries import EntryBuilder, SitemapEntry
from sitemap_config import load_config

SITE = {'url': "https://example.com", 'baseurl': ''}


@pytest.fixture
def builder(console):
    def _builder(**sitemap):
        site_config = dict(SITE, sitemap=sitemap)
        config = load_config(site_config)
        return EntryBuilder(config, site_config, DateResolver(config, console=console), console)
    return _builder


def test_post_entry(builder, make_post):
    post = make_post("hello", datetime(2020, 1, 1, tzinfo=timezone.utc))
    entry, latest = builder().build(post, 'posts')
    assert entry == SitemapEntry(
        loc="https://example.com/2020/01/01/hello.html",
        lastmod="2020-01-01T00:00:00+00:00",
    )
    assert latest == datetime(2020, 1, 1, tzinfo=timezone.utc)


def test_frequency_is_lowercased(builder, make_page):
    page = make_page("/about.html", change_frequency="Daily")
    entry, _ = builder().build(page, 'pages')
    assert entry.changefreq == "daily"


def test_out_of_range_priority_is_left_out(builder, make_page, console):
    page = make_page("/about.html", priority="1.5")
    entry, _ = builder().build(page, 'pages')
    assert entry.priority is None
    assert console.warnings == ["Invalid priority in /about.html: 1.5"]


def test_invalid_frequency_is_left_out(builder, make_page, console):
    page = make_page("/about.html", change_frequency="sometimes")
    entry, _ = builder(frequency={'pages': 'weekly'}).build(page, 'pages')
    assert entry.changefreq is None
    assert console.warnings == ["Invalid change frequency in /about.html: sometimes"]


def test_category_defaults(builder, make_page, make_post):
    b = builder(frequency={'posts': 'never', 'pages': 'monthly', 'index': 'daily'},
                priority={'posts': '0.8', 'pages': 0.5, 'index': '1.0'})
    post = make_post("hello", datetime(2020, 1, 1, tzinfo=timezone.utc))
    about = make_page("/about.html")
    home = make_page("/index.html")

    assert b.build(post, 'posts')[0][2:] == ("never", "0.8")
    assert b.build(about, 'pages')[0][2:] == ("monthly", "0.5")
    assert b.build(home, 'index')[0][2:] == ("daily", "1.0")


def test_item_values_win_over_defaults(builder, make_page):
    page = make_page("/about.html", change_frequency="yearly", priority="0.1")
    entry, _ = builder(frequency={'pages': 'daily'}, priority={'pages': '0.9'}).build(page, 'pages')
    assert (entry.changefreq, entry.priority) == ("yearly", "0.1")


def test_invalid_defaults_are_reported(builder, make_page, console):
    entry, _ = builder(frequency={'pages': 'often'}, priority={'pages': 'high'}).build(make_page("/a.html"), 'pages')
    assert entry.changefreq is None
    assert entry.priority is None
    assert console.warnings == [
        "Invalid change frequency in configuration: often",
        "Invalid priority in configuration: high",
    ]


def test_custom_metadata_keys(builder, make_page):
    page = make_page("/about.html", freq="hourly", weight="0.4", change_frequency="never", priority="0.9")
    entry, _ = builder(change_frequency_name="freq", priority_name="weight").build(page, 'pages')
    assert (entry.changefreq, entry.priority) == ("hourly", "0.4")


def test_no_optional_fields(builder, make_page):
    entry, latest = builder().build(make_page("/index.html"), 'index')
    assert entry == SitemapEntry(loc="https://example.com/")
    assert latest is None


def test_relative_location_is_reported(console, make_page):
    site_config = {}
    config = load_config(site_config)
    b = EntryBuilder(config, site_config, DateResolver(config), console)
    entry, _ = b.build(make_page("/about.html"), 'pages')
    assert entry.loc == "/about.html"
    assert "not an absolute URL" in console.warnings[0]


@pytest.mark.parametrize("raw", ["1e-1", "0.0_1"])
def test_non_decimal_priority_is_left_out(builder, make_page, console, raw):
    page = make_page("/about.html", priority=raw)
    entry, _ = builder().build(page, 'pages')
    assert entry.priority is None
    assert console.warnings == [f"Invalid priority in /about.html: {raw}"]


def test_numeric_priority_default_is_written_as_decimal(builder, make_post):
    post = make_post("hello", datetime(2020, 1, 1, tzinfo=timezone.utc))
    entry, _ = builder(priority={'posts': 1}).build(post, 'posts')
    assert entry.priority == "1.0"
