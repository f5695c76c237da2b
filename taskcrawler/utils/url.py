"""
URL Utilities for the Task Crawler

Resolution of hrefs found in markup, same-site checks and the file names
used for archived pages.
"""

import re
from typing import Optional
from urllib.parse import quote, urljoin, urlparse

_SCHEME_PATTERN = re.compile(r'^https?://', re.IGNORECASE)
_UNSAFE_NAME_CHARS = re.compile(r'[^a-zA-Z0-9_-]+')
_SKIP_PREFIXES = ('#', 'mailto:', 'tel:', 'javascript:')


def absolutize(href: str, origin: str, base: Optional[str] = None) -> str:
    """
    Turn an href into an absolute URL

    Absolute http(s) URLs are returned as-is, root-relative paths are joined
    to ``origin`` and anything else resolves against ``base`` (the page the
    href was found on), falling back to ``origin``.
    """
    href = href.strip()
    if _SCHEME_PATTERN.match(href):
        return href
    if href.startswith('/') and not href.startswith('//'):
        return origin.rstrip('/') + href
    return urljoin(base or origin + '/', href)


def is_followable(href: str) -> bool:
    """False for empty hrefs, in-page anchors and non-HTTP schemes"""
    href = (href or '').strip()
    return bool(href) and not href.lower().startswith(_SKIP_PREFIXES)


def is_same_site(url: str, origin: str) -> bool:
    """Whether an absolute URL lives on the origin's host"""
    return urlparse(url).netloc.lower() == urlparse(origin).netloc.lower()


def archive_file_name(url: str, fallback: str = "index") -> str:
    """
    Derive an archive file name from the URL path

    The path is percent-encoded first so non-ASCII slugs keep distinct names.
    Runs of characters outside ``[a-zA-Z0-9_-]`` then collapse to one
    underscore and leading/trailing underscores are trimmed.
    """
    path = quote(urlparse(url).path, safe='/%')
    safe = _UNSAFE_NAME_CHARS.sub('_', path).strip('_')
    return f"{safe or fallback}.html"
