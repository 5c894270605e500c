import json
import os
import re
from datetime import timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

OFFSET_RE = re.compile(r'^([+-])(\d{1,2}):?(\d{2})?$')

# Config defaults
SITEMAP_FILE_NAME = "/sitemap.xml"
EXCLUDE = ["/atom.xml", "/feed.xml", "/feed/index.xml"]
INCLUDE_POSTS = ["/index.html"]
LASTMOD_NAME = "lastmod"
CHANGE_FREQUENCY_NAME = "change_frequency"
PRIORITY_NAME = "priority"
LAYOUT_NAME = "layout"
INDEX_NAME = "index.html"

CATEGORIES = ("posts", "pages", "index")

SITE_CONFIG_FILE = "_config.json"

OPTION_TYPES = {
    'filename': str,
    'lastmod_name': str,
    'change_frequency_name': str,
    'priority_name': str,
    'layout_name': str,
    'index_name': str,
    'inherit_layouts': bool,
    'latest_from_pages': bool,
}


class SitemapConfig:
    """Resolved sitemap options for one run."""

    def __init__(self, **options):
        self.filename = options.get('filename', SITEMAP_FILE_NAME)
        self.exclude = list(options.get('exclude', EXCLUDE))
        self.include_posts = list(options.get('include_posts', INCLUDE_POSTS))
        self.lastmod_name = options.get('lastmod_name', LASTMOD_NAME)
        self.change_frequency_name = options.get('change_frequency_name', CHANGE_FREQUENCY_NAME)
        self.priority_name = options.get('priority_name', PRIORITY_NAME)
        self.layout_name = options.get('layout_name', LAYOUT_NAME)
        self.index_name = options.get('index_name', INDEX_NAME)
        self.inherit_layouts = options.get('inherit_layouts', True)
        self.latest_from_pages = options.get('latest_from_pages', True)
        self.timezone = options.get('timezone', timezone.utc)
        self.frequency = dict.fromkeys(CATEGORIES)
        self.frequency.update(options.get('frequency') or {})
        self.priority = dict.fromkeys(CATEGORIES)
        self.priority.update(options.get('priority') or {})

    def default_frequency(self, category):
        return self.frequency.get(category)

    def default_priority(self, category):
        return self.priority.get(category)


def as_list(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def parse_timezone(value):
    """Accepts a tzinfo, a UTC offset like "+02:00" or an IANA name."""
    if value is None:
        return timezone.utc
    if isinstance(value, tzinfo):
        return value
    if not isinstance(value, str):
        raise ValueError(f"not a timezone: {value!r}")
    text = value.strip()
    if text.upper() in ("UTC", "Z"):
        return timezone.utc
    m = OFFSET_RE.match(text)
    if m:
        sign = -1 if m.group(1) == "-" else 1
        return timezone(sign * timedelta(hours=int(m.group(2)), minutes=int(m.group(3) or 0)))
    return ZoneInfo(text)


def site_timezone(site_config, console=None):
    """Timezone for dates without an offset; UTC when it can't be read."""
    sitemap_config = site_config.get('sitemap') or {}
    if not isinstance(sitemap_config, dict):
        sitemap_config = {}
    value = sitemap_config.get('timezone') or site_config.get('timezone')
    try:
        return parse_timezone(value)
    except (ValueError, OSError, ZoneInfoNotFoundError):
        if console:
            console.warn(f"Invalid timezone in configuration: {value}, using UTC")
        return timezone.utc


def category_table(sitemap_config, key, console=None):
    table = sitemap_config.get(key)
    if table is None:
        return {}
    if not isinstance(table, dict):
        if console:
            console.warn(f"Invalid '{key}' in configuration, expected posts/pages/index values: {table}")
        return {}
    return table


def load_config(site_config, console=None):
    """Merge the `sitemap` section of the site config over the defaults.

    Every key falls back on its own, a missing section is fine. Values that
    can't be used are reported and replaced by their default.
    """
    site_config = site_config or {}
    sitemap_config = site_config.get('sitemap') or {}
    if not isinstance(sitemap_config, dict):
        if console:
            console.warn(f"Invalid 'sitemap' section in configuration: {sitemap_config}")
        sitemap_config = {}

    options = {}
    for key, kind in OPTION_TYPES.items():
        value = sitemap_config.get(key)
        if value is None:
            continue
        if isinstance(value, kind):
            options[key] = value
        elif console:
            console.warn(f"Invalid '{key}' in configuration, using the default: {value}")
    for key in ('exclude', 'include_posts'):
        if sitemap_config.get(key) is None:
            continue
        patterns = as_list(sitemap_config[key])
        for pattern in patterns:
            if not isinstance(pattern, str) and console:
                console.warn(f"Ignoring invalid pattern in '{key}': {pattern}")
        options[key] = [p for p in patterns if isinstance(p, str)]

    options['frequency'] = category_table(sitemap_config, 'frequency', console)
    options['priority'] = category_table(sitemap_config, 'priority', console)
    options['timezone'] = site_timezone(site_config, console)

    return SitemapConfig(**options)


def read_site_config(source):
    """Read `_config.json` from the site directory (empty if there is none)."""
    path = os.path.join(source, SITE_CONFIG_FILE)
    if not os.path.isfile(path):
        return {}
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
