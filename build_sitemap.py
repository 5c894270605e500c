import os
import sys
import tempfile
from collections import namedtuple

from console import Console
from site_content import SitemapFile, read_site
from sitemap_dates import DateResolver
from sitemap_entries import EntryBuilder
from sitemap_filters import is_excluded, is_index_like
from sitemap_xml import serialize
from sitemap_config import load_config

BuildResult = namedtuple('BuildResult', ['path', 'document', 'count', 'error'])


class SitemapWriteError(OSError):
    """The sitemap could not be written to the destination directory."""


class SitemapBuilder:
    """Goes through posts and pages and generates the sitemap.xml file."""

    def __init__(self, site, console=None):
        self.site = site
        self.console = console or Console()
        self.config = None
        self.entries = []
        self.latest_date = None

    def run(self):
        self.console.info("🚀 Generating sitemap...")
        try:
            document = self.generate()
        except SitemapWriteError as e:
            self.console.error(str(e))
            return BuildResult(None, None, len(self.entries), str(e))

        path = self.destination()
        self.console.success(f"Sitemap generated with {len(self.entries)} URLs: {path}")
        return BuildResult(path, document, len(self.entries), None)

    def generate(self):
        document = self.build_document()
        self.write(document)
        # Keep the sitemap.xml file from being cleaned by the site build
        self.site.keep(SitemapFile(self.site, self.site.dest, "/", self.config.filename))
        return document

    def build_document(self):
        self.collect()
        return serialize(self.entries)

    def collect(self):
        """Build the entries: all posts first, then all pages."""
        self.config = load_config(self.site.config, self.console)
        resolver = DateResolver(self.config, self.site.layouts, self.console)
        self.entry_builder = EntryBuilder(self.config, self.site.config, resolver, self.console)
        self.entries = []

        latest = None
        latest = self.fill_posts(latest)
        latest = self.fill_pages(latest)
        self.latest_date = latest
        return self.entries

    def fill_posts(self, latest):
        self.console.info(f"Phase 1: {len(self.site.posts)} posts...")
        for post in self.site.posts:
            # Only process non-excluded posts
            if is_excluded(post.path, self.config.exclude):
                continue
            entry, latest = self.entry_builder.build(post, 'posts', latest)
            self.entries.append(entry)
        return latest

    def fill_pages(self, latest):
        self.console.info(f"Phase 2: {len(self.site.pages)} pages...")
        for page in self.site.pages:
            if is_excluded(page.path, self.config.exclude):
                continue
            if not page.source_path or not os.path.isfile(page.source_path):
                self.console.info(f"Skipping {page.name}: source file not found")
                continue

            category = 'index' if is_index_like(page.path, self.config.include_posts) else 'pages'
            try:
                entry, latest = self.entry_builder.build(page, category, latest)
            except OSError as e:
                # Source file went away between the check and the stat
                self.console.warn(f"Skipping {page.name}: {e}")
                continue
            self.entries.append(entry)
        return latest

    def destination(self):
        return os.path.join(self.site.dest, self.config.filename.lstrip('/'))

    def write(self, document):
        """Write to a temporary file next to the sitemap, then move it in place.

        Either the whole new document is published or the old file is left
        as it was.
        """
        path = self.destination()
        directory = os.path.dirname(path)
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.sitemap-', suffix='.tmp', dir=directory)
        except OSError as e:
            raise SitemapWriteError(f"Cannot create {path}: {e}") from e

        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(document)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise SitemapWriteError(f"Cannot write {path}: {e}") from e
        return path


def main():
    console = Console()
    site = read_site(os.getcwd(), console=console)
    result = SitemapBuilder(site, console).run()
    return 0 if result.error is None else 1


if __name__ == "__main__":
    sys.exit(main())
