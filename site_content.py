import os
import glob
import json
import re
from bs4 import BeautifulSoup

from sitemap_dates import to_datetime
from sitemap_config import read_site_config, site_timezone

POSTS_DIR = '_posts'
LAYOUTS_DIR = '_layouts'
POST_NAME_RE = re.compile(r'^(\d{4}-\d{2}-\d{2})-(.+)\.html$')


class ContentItem:
    """A post or a page as handed over by the content store.

    `data` is the free-form metadata of the item (front matter / meta tags),
    read through `get_string` / `get_date` with the configured key names.
    """

    def __init__(self, kind, path, url, data=None, date=None, source_path=None):
        self.kind = kind  # 'post' or 'page'
        self.path = path  # logical source path, e.g. /blog/index.html
        self.url = url
        self.data = dict(data or {})
        self.date = date
        self.source_path = source_path

    @property
    def name(self):
        return self.path

    def get(self, key):
        value = self.data.get(key)
        if value is None or value == "":
            return None
        return value

    def get_string(self, key):
        value = self.get(key)
        return None if value is None else str(value).strip()

    def get_date(self, key, tz=None):
        return to_datetime(self.get(key), tz)

    def __repr__(self):
        return f"ContentItem({self.kind!r}, {self.path!r})"


class Layout:
    def __init__(self, name, source_path=None, parent=None):
        self.name = name
        self.source_path = source_path
        self.parent = parent or None


class SitemapFile:
    """Marker for the generated sitemap in the site's static files.

    The build tool's clean pass keeps every file listed in
    `site.static_files`; the sitemap is already written, so `write` does
    nothing.
    """

    def __init__(self, site, base, dir, name):
        self.site = site
        self.base = base
        self.dir = dir
        self.name = name.lstrip('/')

    def destination(self, dest):
        return os.path.join(dest, self.dir.strip('/'), self.name)

    def write(self, dest):
        return True


class Site:
    def __init__(self, source, dest, config=None, posts=None, pages=None, layouts=None):
        self.source = source
        self.dest = dest
        self.config = config or {}
        self.posts = list(posts or [])
        self.pages = list(pages or [])
        self.layouts = dict(layouts or {})
        self.static_files = []

    def keep(self, static_file):
        self.static_files.append(static_file)

    def kept_paths(self):
        return [f.destination(self.dest) for f in self.static_files]


# --- Reading a site directory ---

def read_html(path):
    with open(path, 'r', encoding='utf-8') as f:
        return BeautifulSoup(f, 'html.parser')


def read_meta(soup):
    """Collect <meta name=... content=...> tags into a metadata dict."""
    data = {}
    for tag in soup.find_all('meta', attrs={'name': True}):
        content = tag.get('content')
        if content is not None:
            data[tag['name'].strip()] = content.strip()
    return data


def read_date_published(soup):
    for schema_tag in soup.find_all('script', type='application/ld+json'):
        try:
            data = json.loads(schema_tag.string or '')
        except ValueError:
            continue
        if isinstance(data, dict) and data.get('datePublished'):
            return data['datePublished']
    return None


def page_url(rel_path):
    # e.g. about.html -> /about.html, blog/index.html -> /blog/index.html
    return '/' + rel_path.replace(os.sep, '/')


def read_posts(source, console=None, tz=None):
    posts = []
    for file_path in sorted(glob.glob(os.path.join(source, POSTS_DIR, '*.html'))):
        filename = os.path.basename(file_path)
        try:
            soup = read_html(file_path)
        except (OSError, UnicodeDecodeError) as e:
            if console:
                console.warn(f"Could not read post {filename}: {e}")
            continue

        data = read_meta(soup)
        m = POST_NAME_RE.match(filename)
        raw_date = m.group(1) if m else read_date_published(soup)
        slug = m.group(2) if m else filename[:-len('.html')]
        date = to_datetime(raw_date, tz)

        year, month, day = (date.strftime('%Y'), date.strftime('%m'), date.strftime('%d')) if date else ('', '', '')
        url = '/' + '/'.join(p for p in (year, month, day, slug) if p) + '.html'
        posts.append(ContentItem('post', f"/{POSTS_DIR}/{filename}", data.get('permalink') or url,
                                 data=data, date=date, source_path=file_path))
    return posts


def read_layouts(source, console=None):
    layouts = {}
    for file_path in sorted(glob.glob(os.path.join(source, LAYOUTS_DIR, '*.html'))):
        name = os.path.splitext(os.path.basename(file_path))[0]
        parent = None
        try:
            parent = read_meta(read_html(file_path)).get('layout')
        except (OSError, UnicodeDecodeError) as e:
            if console:
                console.warn(f"Could not read layout {name}: {e}")
        layouts[name] = Layout(name, file_path, parent)
    return layouts


def read_pages(source, console=None):
    pages = []
    all_html = sorted(glob.glob(os.path.join(source, '**/*.html'), recursive=True))
    for file_path in all_html:
        rel_path = os.path.relpath(file_path, source)
        # Skip _posts, _layouts, _site and hidden folders
        if any(part.startswith(('_', '.')) for part in rel_path.split(os.sep)[:-1]):
            continue
        try:
            data = read_meta(read_html(file_path))
        except (OSError, UnicodeDecodeError) as e:
            if console:
                console.warn(f"Could not read page {rel_path}: {e}")
            continue
        url = page_url(rel_path)
        pages.append(ContentItem('page', url, data.get('permalink') or url,
                                 data=data, source_path=file_path))
    return pages


def read_site(source, dest=None, console=None):
    """Build a Site from a source directory laid out like a Jekyll site."""
    config = read_site_config(source)
    tz = site_timezone(config, console)
    return Site(
        source,
        dest or os.path.join(source, '_site'),
        config=config,
        posts=read_posts(source, console, tz),
        pages=read_pages(source, console),
        layouts=read_layouts(source, console),
    )
