import re

ABSOLUTE_URL_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.-]*://[^/]+')


def base_url(site_config):
    return f"{site_config.get('url') or ''}{site_config.get('baseurl') or ''}"


def strip_index(location, index_name):
    # e.g. https://example.com/blog/index.html -> https://example.com/blog/
    if index_name and location.endswith('/' + index_name):
        return location[:-len(index_name)]
    return location


def resolve_location(base, item, config, site_config=None):
    """Absolute URL of a post or a page."""
    if item.kind != 'page':
        return f"{base}{item.url}"

    site_config = site_config or {}
    category_path = site_config.get('category_path')
    # Category listings are generated, their url doesn't follow the source path
    if category_path and item.path.lstrip('/').startswith(category_path.lstrip('/')):
        location = f"{base}/{item.path.lstrip('/')}"
    else:
        location = f"{base}{item.url}"
    return strip_index(location, config.index_name)


def is_absolute(location):
    return bool(location) and bool(ABSOLUTE_URL_RE.match(location))
