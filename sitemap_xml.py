import xml.etree.ElementTree as ET

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{SITEMAP_NS} {SITEMAP_NS}/sitemap.xsd"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
INDENT = "    "


def build_urlset(entries):
    urlset = ET.Element("urlset")
    urlset.set("xmlns", SITEMAP_NS)
    urlset.set("xmlns:xsi", XSI_NS)
    urlset.set("xsi:schemaLocation", SCHEMA_LOCATION)

    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.loc
        if entry.lastmod:
            ET.SubElement(url, "lastmod").text = entry.lastmod
        if entry.changefreq:
            ET.SubElement(url, "changefreq").text = entry.changefreq
        if entry.priority is not None:
            ET.SubElement(url, "priority").text = str(entry.priority)
    return urlset


def serialize(entries):
    """Pretty-printed sitemap document as UTF-8 bytes."""
    urlset = build_urlset(entries)
    ET.indent(urlset, space=INDENT)
    body = ET.tostring(urlset, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n".encode("utf-8")
