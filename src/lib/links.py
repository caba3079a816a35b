"""
Link, image and URL resolution

Turns [[target|text]] link tags, {{source|alt}} image tags and bare URLs in
running text into HTML.

Link rendering goes through the LinkRenderer capability: a format string
from the options and a caller supplied function both end up as an object
with render(url, text) -> str.
"""

import html
import re
from typing import Any, Callable, Optional, Protocol

from ..models.options import ParserOptions

# Scheme allow-list, or a hostname-ish token ending in a short TLD and '/'.
# The last character excludes punctuation likely to end a sentence.
URL_PATTERN = (
    r'(?:(?:https?|ftps?|sftp|news|mailto|irc|cvs|svn|git|bzr)://'
    r'|[a-zA-Z0-9.\-]+\.[a-z]{2,4}/)'
    r'[^\s{}<>"`]+'
    r'(?:\([^\s{}<>"`]*\)|[^\s`!?.()\[\]{};:\'",<>])'
)

URL_REGEX = re.compile(URL_PATTERN)
FREE_URL_REGEX = re.compile(r'(?<=\s)' + URL_PATTERN)
LINK_TAG_REGEX = re.compile(r'(?<!~)\[\[(.+?)\]\]')
IMAGE_TAG_REGEX = re.compile(r'(?<!~)\{\{(.+?)\}\}')

# Characters removed from page slugs
SLUG_SPECIAL_CHARS = '`#%^&*=[]{}|\\\'"<>/?'
_SLUG_TABLE = str.maketrans('', '', SLUG_SPECIAL_CHARS)


class LinkRenderer(Protocol):
    """Capability that turns a URL and its display text into HTML"""

    def render(self, url: str, text: str) -> str:
        ...


class FormatLinkRenderer:
    """LinkRenderer backed by a str.format template over {url} and {text}"""

    def __init__(self, template: str) -> None:
        self.template = template

    def render(self, url: str, text: str) -> str:
        return self.template.format(url=url, text=text)


class CallableLinkRenderer:
    """LinkRenderer backed by a caller supplied function (url, text) -> str"""

    def __init__(self, func: Callable[[str, str], str]) -> None:
        self.func = func

    def render(self, url: str, text: str) -> str:
        return str(self.func(url, text))


def renderer_make(value: Any) -> LinkRenderer:
    """
    Adapt an option value to the LinkRenderer capability

    Args:
        value: Format template or callable

    Raises:
        TypeError: If value is neither
    """
    if isinstance(value, str):
        return FormatLinkRenderer(value)
    if callable(value):
        return CallableLinkRenderer(value)
    raise TypeError(f"Link format must be a string or callable, not {type(value).__name__}")


def slug_make(target: str) -> str:
    """
    Normalize a wiki page title into a URL slug

    Example:
        >>> slug_make('User&#039;s Guide?')
        'Users-Guide'
    """
    slug = html.unescape(target)
    slug = slug.replace(' ', '-')
    return slug.translate(_SLUG_TABLE)


def url_is(target: str) -> bool:
    """True when target starts with something the URL grammar accepts"""
    return URL_REGEX.match(target) is not None


def pipedTarget_split(inner: str) -> Optional[tuple[str, str]]:
    """
    Split 'target|text' tag contents

    Returns (target, text) with text empty when there is no '|', or None when
    there is more than one '|' and the tag cannot be interpreted.
    """
    if '|' not in inner:
        return inner, ''
    parts = inner.split('|')
    if len(parts) != 2:
        return None
    return parts[0], parts[1]


class LinkResolver:
    """
    Renders link tags, image tags and free URLs for one set of options

    Attributes:
        options: ParserOptions the resolver reads bases and templates from
    """

    def __init__(self, options: ParserOptions) -> None:
        self.options = options

    def page_exists(self, slug: str) -> bool:
        """
        Ask the page-existence predicate about a slug

        Without a catalog every page is treated as existing.
        """
        pages = self.options.existing_pages
        if pages is None:
            return True
        if callable(pages):
            return bool(pages(slug))
        return slug in pages

    def linkTag_render(self, match: re.Match[str]) -> str:
        """Render one [[target]] or [[target|text]] match"""
        split = pipedTarget_split(match.group(1))
        if split is None:
            return match.group(0)
        target, text = split
        if not text:
            text = target

        if url_is(target):
            return renderer_make(self.options.external_link_format).render(target, text)

        slug = slug_make(target)
        url = self.options.url_base + slug
        if self.page_exists(slug):
            return renderer_make(self.options.internal_link_format).render(url, text)
        return renderer_make(self.options.notcreated_link_format).render(url, text)

    def imageTag_render(self, match: re.Match[str]) -> str:
        """Render one {{source}} or {{source|alt}} match"""
        split = pipedTarget_split(match.group(1))
        if split is None:
            return match.group(0)
        source, alt = split

        if '/' not in source:
            source = self.options.img_base + source

        if alt:
            return f'<img src="{source}" alt="{alt}" />'
        return f'<img src="{source}" />'

    def freeUrl_render(self, match: re.Match[str]) -> str:
        """Render a URL found in running text"""
        url = match.group(0)
        return renderer_make(self.options.free_url_format).render(url, url)

    def freeUrls_link(self, text: str) -> str:
        """Autolink URLs preceded by whitespace"""
        return FREE_URL_REGEX.sub(self.freeUrl_render, text)

    def images_render(self, text: str) -> str:
        return IMAGE_TAG_REGEX.sub(self.imageTag_render, text)

    def linkTags_render(self, text: str) -> str:
        return LINK_TAG_REGEX.sub(self.linkTag_render, text)
