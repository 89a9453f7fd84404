#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/markup.py
"""BeautifulSoup adapter: parsing documents and fragments, serializing trees."""

from __future__ import annotations

import logging
from typing import IO, Union

from bs4 import BeautifulSoup
from bs4.builder import builder_registry
from bs4.element import PageElement, Tag
from bs4.exceptions import FeatureNotFound, ParserRejectedMarkup

from htmlstitch.constants import ANONYMOUS_TAG, FRAGMENT_CONTEXT_TAG, HTML_PARSER_PACKAGES
from htmlstitch.exceptions import DependencyError, FragmentParseError, ParsingError

logger = logging.getLogger(__name__)

MarkupSource = Union[str, bytes, IO[str], IO[bytes]]


def _make_soup(markup: str | bytes, parser: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(markup, parser)
    except FeatureNotFound as e:
        package = HTML_PARSER_PACKAGES.get(parser)
        raise DependencyError(parser, [package] if package else [], original_error=e) from e


def _read_source(source: MarkupSource) -> str | bytes:
    if isinstance(source, (str, bytes)):
        return source
    try:
        return source.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ParsingError(f"Could not read input document: {e}", parsing_stage="read", original_error=e) from e


def parse_document(source: MarkupSource, parser: str = "html5lib") -> BeautifulSoup:
    """Parse an HTML document into a BeautifulSoup tree.

    Parameters
    ----------
    source : str, bytes or file-like
        The document markup, or a stream to read it from
    parser : str, default "html5lib"
        BeautifulSoup tree builder name

    Returns
    -------
    BeautifulSoup
        The document node

    Raises
    ------
    ParsingError
        If the input cannot be read or the parser rejects it
    DependencyError
        If the tree builder is not installed

    """
    markup = _read_source(source)
    try:
        document = _make_soup(markup, parser)
    except ParserRejectedMarkup as e:
        raise ParsingError(f"Invalid HTML input: {e}", parsing_stage="parse", original_error=e) from e
    logger.debug("Parsed document with %s (%d bytes)", parser, len(markup))
    return document


def _parse_html5lib_fragment(markup: str) -> list[PageElement]:
    builder_class = builder_registry.lookup("html5lib")
    if builder_class is None:
        raise DependencyError("html5lib", [HTML_PARSER_PACKAGES["html5lib"]])

    import html5lib

    # bs4's html5lib tree builder, driven through the HTML5 fragment algorithm
    parser = html5lib.HTMLParser(tree=builder_class().create_treebuilder)
    fragment = parser.parseFragment(markup, container=FRAGMENT_CONTEXT_TAG)
    return list(fragment.contents)


def _parse_wrapped_fragment(markup: str, parser: str, url: str | None) -> list[PageElement]:
    soup = _make_soup(f"<{FRAGMENT_CONTEXT_TAG}>{markup}</{FRAGMENT_CONTEXT_TAG}>", parser)
    container = soup.find(FRAGMENT_CONTEXT_TAG)
    if not isinstance(container, Tag):
        raise FragmentParseError("Fragment body could not be parsed into a container", url=url)
    # a stray </content> in the body closes the wrapper early; keep what follows it
    return list(container.contents) + list(container.next_siblings)


def parse_fragment(markup: str, parser: str = "html5lib", url: str | None = None) -> list[PageElement]:
    """Parse ``markup`` as the content of a ``<content>`` container element.

    How the container context is established depends on the tree builder:

    - ``html5lib`` runs the HTML5 fragment parsing algorithm with ``content``
      as the context element, the way a browser parses ``innerHTML``.
      Document-level tags (``html``, ``head``, ``body``) and stray end tags
      are dropped, and everything else is kept.
    - ``html.parser`` implies no document structure, so the markup is parsed
      as it is.
    - ``lxml`` always builds a whole document. The markup is parsed inside a
      ``content`` element, and nodes the parser placed after that element are
      kept as well.

    Returns
    -------
    list[PageElement]
        The top-level parsed nodes, in document order

    Raises
    ------
    FragmentParseError
        If the parser rejects the markup
    DependencyError
        If the tree builder is not installed

    """
    try:
        if parser == "html5lib":
            return _parse_html5lib_fragment(markup)
        if parser == "html.parser":
            return list(_make_soup(markup, parser).contents)
        return _parse_wrapped_fragment(markup, parser, url)
    except ParserRejectedMarkup as e:
        raise FragmentParseError(f"Fragment body is not valid HTML: {e}", url=url, original_error=e) from e


def anonymous_element(document: BeautifulSoup | None = None) -> Tag:
    """Create a detached element without a tag name.

    It serializes as ``<>...</>`` and wraps resolved or fallback content.
    """
    if document is None:
        document = BeautifulSoup("", "html.parser")
    return document.new_tag(ANONYMOUS_TAG)


def owner_document(node: PageElement) -> BeautifulSoup | None:
    """Return the BeautifulSoup document ``node`` belongs to, if attached to one."""
    current: PageElement | None = node
    while current is not None:
        if isinstance(current, BeautifulSoup):
            return current
        current = current.parent
    return None


def serialize(node: PageElement) -> str:
    """Serialize a document or sub-tree back to HTML."""
    return str(node)
