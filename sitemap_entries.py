from collections import namedtuple

from sitemap_dates import format_lastmod
from sitemap_urls import base_url, is_absolute, resolve_location
from sitemap_validators import format_priority, normalize_frequency, valid_frequency, valid_priority

SitemapEntry = namedtuple('SitemapEntry', ['loc', 'lastmod', 'changefreq', 'priority'], defaults=(None, None, None))


class EntryBuilder:
    """Builds one <url> entry: location, last modified, change frequency and priority.

    Frequency and priority come from the item's own metadata first, then
    from the configured default of its category ('posts', 'pages' or
    'index'). A value that doesn't pass validation is reported and left out.
    """

    def __init__(self, config, site_config, resolver, console=None):
        self.config = config
        self.site_config = site_config or {}
        self.resolver = resolver
        self.console = console
        self.base = base_url(self.site_config)

    def warn(self, msg):
        if self.console:
            self.console.warn(msg)

    def build(self, item, category, latest=None):
        """Returns the entry and the updated newest date of the site."""
        loc = self.fill_location(item)
        lastmod, latest = self.fill_last_modified(item, category, latest)
        return SitemapEntry(
            loc=loc,
            lastmod=format_lastmod(lastmod) if lastmod else None,
            changefreq=self.fill_change_frequency(item, self.config.default_frequency(category)),
            priority=self.fill_priority(item, self.config.default_priority(category)),
        ), latest

    def fill_location(self, item):
        loc = resolve_location(self.base, item, self.config, self.site_config)
        if not is_absolute(loc):
            self.warn(f"Location of {item.name} is not an absolute URL: '{loc}' (check 'url' in the site config)")
        return loc

    def fill_last_modified(self, item, category, latest):
        if category == 'posts':
            return self.resolver.resolve_post(item, latest)
        if category == 'index':
            return self.resolver.resolve_index(item, latest)
        return self.resolver.resolve_page(item, latest)

    def fill_change_frequency(self, item, default_freq):
        raw = item.get(self.config.change_frequency_name)
        if raw is not None:
            if valid_frequency(raw):
                return normalize_frequency(raw)
            self.warn(f"Invalid change frequency in {item.name}: {raw}")
            return None
        if default_freq is not None:
            if valid_frequency(default_freq):
                return normalize_frequency(default_freq)
            self.warn(f"Invalid change frequency in configuration: {default_freq}")
        return None

    def fill_priority(self, item, default_prio):
        raw = item.get(self.config.priority_name)
        if raw is not None:
            if valid_priority(raw):
                return format_priority(raw)
            self.warn(f"Invalid priority in {item.name}: {raw}")
            return None
        if default_prio is not None:
            if valid_priority(default_prio):
                return format_priority(default_prio)
            self.warn(f"Invalid priority in configuration: {default_prio}")
        return None
