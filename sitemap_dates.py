import os
from datetime import date, datetime, timezone

DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S %z",  # Jekyll style: 2021-01-01 10:00:00 +0200
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
]


def to_datetime(value, tz=None):
    """Turn a metadata value into an aware datetime, or None.

    Accepts datetime and date objects and ISO 8601 strings. Values without an
    offset are taken to be in `tz` (UTC when not given).
    """
    tz = tz or timezone.utc
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        parsed = parse_date_string(value.strip())
        if parsed is None:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def parse_date_string(text):
    if not text:
        return None
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso_text)
    except ValueError:
        pass
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def file_mtime(path, tz=None):
    return datetime.fromtimestamp(os.path.getmtime(path), tz=tz or timezone.utc)


def format_lastmod(value):
    """YYYY-MM-DDThh:mm:ss+hh:mm"""
    return value.isoformat(timespec="seconds")


def advance(latest, value):
    """Running maximum of the dates seen so far; the first date seeds it."""
    if value is None:
        return latest
    if latest is None or value > latest:
        return value
    return latest


class DateResolver:
    """Works out the lastmod of posts, pages and index pages.

    The newest date of the site is not kept here: it is passed in as
    `latest` and handed back updated, together with the item's date.
    """

    def __init__(self, config, layouts=None, console=None):
        self.config = config
        self.layouts = layouts or {}
        self.console = console

    def warn(self, msg):
        if self.console:
            self.console.warn(msg)

    def explicit_lastmod(self, item):
        raw = item.get(self.config.lastmod_name)
        if raw is None:
            return None
        value = to_datetime(raw, self.config.timezone)
        if value is None:
            self.warn(f"Invalid last modified date in {item.name}: {raw}")
        return value

    def resolve_post(self, item, latest):
        value = self.explicit_lastmod(item)
        if value is None:
            value = to_datetime(item.date, self.config.timezone)
        return value, advance(latest, value)

    def resolve_page(self, item, latest):
        value = self.explicit_lastmod(item)
        if value is None:
            value = file_mtime(item.source_path, self.config.timezone)
            if self.config.inherit_layouts:
                value = self.walk_layouts(item, value)
        if self.config.latest_from_pages:
            latest = advance(latest, value)
        return value, latest

    def resolve_index(self, item, latest):
        value = self.explicit_lastmod(item)
        if value is None:
            # No date at all when nothing has been seen yet
            return latest, latest
        if self.config.latest_from_pages:
            latest = advance(latest, value)
        return value, latest

    def walk_layouts(self, item, value):
        """Move the date forward to the newest layout the page is built from."""
        name = item.get_string(self.config.layout_name)
        visited = set()
        while name:
            if name in visited:
                self.warn(f"Layout loop in {item.name} at '{name}', using {format_lastmod(value)}")
                break
            visited.add(name)

            layout = self.layouts.get(name)
            if layout is None:
                break
            if layout.source_path and os.path.isfile(layout.source_path):
                layout_date = file_mtime(layout.source_path, self.config.timezone)
                if layout_date > value:
                    value = layout_date
            name = layout.parent
        return value
