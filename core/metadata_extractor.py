#!/usr/bin/env python3
"""
Metadata Extraction Utilities

Pulls the page title, Open Graph properties and the description meta tag out
of raw markup. Extraction is best-effort: missing tags come back as empty
strings and no input makes it raise.
"""

import re
from dataclasses import dataclass

# Applied in order, &amp; first
HTML_ENTITIES = (
    ('&amp;', '&'),
    ('&lt;', '<'),
    ('&gt;', '>'),
    ('&quot;', '"'),
    ('&#39;', "'"),
    ('&#x27;', "'"),
    ('&#x2F;', '/'),
    ('&mdash;', '—'),
    ('&ndash;', '–'),
    ('&hellip;', '…'),
)

TITLE_PATTERN = re.compile(r'<title[^>]*>([^<]*)</title>', re.IGNORECASE)


@dataclass(frozen=True)
class MetadataBundle:
    """Link-preview metadata scraped from one page"""
    title: str = ''
    og_title: str = ''
    og_description: str = ''
    og_site_name: str = ''
    og_image: str = ''
    description: str = ''


def decode_entities(text: str) -> str:
    """
    Decode the fixed set of HTML entities we care about

    Args:
        text: Raw attribute or element text

    Returns:
        Text with known entities replaced. Unknown entities are left untouched.

    Examples:
        >>> decode_entities("Tom &amp; Jerry&#39;s show")
        "Tom & Jerry's show"
    """
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def _meta_patterns(name: str):
    escaped = re.escape(name)
    return (
        re.compile(
            rf'<meta\s+(?:property|name)=["\']{escaped}["\']\s+content=["\']([^"\']*)["\']',
            re.IGNORECASE,
        ),
        re.compile(
            rf'<meta\s+content=["\']([^"\']*)["\']\s+(?:property|name)=["\']{escaped}["\']',
            re.IGNORECASE,
        ),
    )


def extract_meta(html: str, name: str) -> str:
    """
    Extract a meta tag's content by property or name attribute

    Both attribute orders are accepted (property before content and the reverse).

    Args:
        html: Raw markup
        name: Property/name value, e.g. 'og:title' or 'description'

    Returns:
        Decoded content, or '' when the tag is absent
    """
    for pattern in _meta_patterns(name):
        match = pattern.search(html)
        if match:
            return decode_entities(match.group(1))
    return ''


def extract_title(html: str) -> str:
    """Extract the text of the <title> element"""
    match = TITLE_PATTERN.search(html)
    return decode_entities(match.group(1).strip()) if match else ''


def extract_metadata(html: str) -> MetadataBundle:
    """
    Extract title, Open Graph and description metadata from markup

    Args:
        html: Raw page markup

    Returns:
        MetadataBundle with empty strings for anything missing
    """
    html = html or ''
    return MetadataBundle(
        title=extract_title(html),
        og_title=extract_meta(html, 'og:title'),
        og_description=extract_meta(html, 'og:description'),
        og_site_name=extract_meta(html, 'og:site_name'),
        og_image=extract_meta(html, 'og:image'),
        description=extract_meta(html, 'description'),
    )
