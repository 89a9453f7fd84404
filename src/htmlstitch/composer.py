#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/htmlstitch/composer.py
"""Composition engine: substitutes ``<fragment>`` placeholders in a document.

For every placeholder, in walk order, the composer

1. resolves it remotely, or falls back to its own children on any
   ``ResolutionError``;
2. walks the resolved content once, composing nested placeholders
   recursively and moving ``<link>`` elements into the document ``<head>``;
3. splices the resolved content into the placeholder's position.

Placeholders are resolved one at a time and each is fetched at most once.
The tree is mutated in place and must not be composed from several threads.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional

import httpx
from bs4.element import PageElement, Tag

from htmlstitch.constants import FALLBACK_URL_LOG_FIELD, FRAGMENT_TAG, LINK_TAG, SCRIPT_TAG
from htmlstitch.exceptions import FragmentDepthError, MissingSourceError, ResolutionError, SectionNotFoundError
from htmlstitch.http import create_http_client
from htmlstitch.markup import MarkupSource, parse_document, serialize
from htmlstitch.options import ComposeOptions, FetchOptions
from htmlstitch.resolver import FragmentResolver, fallback_fragment, fragment_source
from htmlstitch.sections import add_header, add_script
from htmlstitch.walker import elements_named, is_element, walk

logger = logging.getLogger(__name__)


class Composer:
    """Resolve fragment placeholders in HTML documents.

    Parameters
    ----------
    options : ComposeOptions, optional
        Parsing, hoisting and depth settings
    fetch_options : FetchOptions, optional
        Settings for the HTTP client built when ``client`` is not given
    client : httpx.Client, optional
        Client used to fetch fragment sources. A client passed in is left
        open; one created by the composer is closed by ``close()``.

    Examples
    --------
    >>> with Composer(fetch_options=FetchOptions(timeout=2.0)) as composer:
    ...     html = composer.compose('<html><body><fragment src="https://example.com/nav"></fragment></body></html>')

    """

    def __init__(
        self,
        options: ComposeOptions | None = None,
        fetch_options: FetchOptions | None = None,
        client: httpx.Client | None = None,
    ):
        """Initialize the composer and its fragment resolver."""
        self.options = options or ComposeOptions()
        self._owns_client = client is None
        self.client = client if client is not None else create_http_client(fetch_options)
        self.resolver = FragmentResolver(self.client, parser=self.options.fragment_parser)

    def close(self) -> None:
        """Close the HTTP client if this composer created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "Composer":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        """Context manager exit."""
        self.close()

    def compose(self, source: MarkupSource) -> str:
        """Parse ``source``, substitute all placeholders and serialize the result.

        Parameters
        ----------
        source : str, bytes or file-like
            HTML document (or fragment) to compose

        Returns
        -------
        str
            The composed document

        Raises
        ------
        ParsingError
            If the input cannot be parsed; nothing is fetched in that case
        SectionNotFoundError
            If a link must be hoisted, the document has no ``<head>`` and
            ``strict_head`` is set

        """
        document = parse_document(source, parser=self.options.document_parser)
        self.compose_node(document)
        return serialize(document)

    def compose_node(self, node: PageElement) -> None:
        """Substitute every placeholder that follows ``node`` in walk order.

        Resolution failures never escape; the affected placeholder is replaced
        by its fallback content instead.
        """
        placeholders = elements_named(node, FRAGMENT_TAG)
        logger.debug("Found %d fragment placeholder(s)", len(placeholders))
        for placeholder in placeholders:
            self._substitute(placeholder, anchor=placeholder, depth=0)

    def _resolve_or_fallback(self, placeholder: Tag, depth: int) -> Tag:
        max_depth = self.options.max_depth
        try:
            if max_depth is not None and depth > max_depth:
                raise FragmentDepthError(depth, max_depth, url=fragment_source(placeholder))
            return self.resolver.resolve(placeholder)
        except MissingSourceError:
            logger.debug("Fragment without src, rendering fallback content")
        except ResolutionError as e:
            logger.warning("Rendering fallback content: %s", e.message, extra={FALLBACK_URL_LOG_FIELD: e.url or ""})
        return fallback_fragment(placeholder)

    def _substitute(self, placeholder: Tag, anchor: Tag, depth: int) -> None:
        # anchor is the outermost placeholder still attached to the document;
        # nested content is detached until it is spliced, so hoisting searches from there
        fragment = self._resolve_or_fallback(placeholder, depth)

        for node in walk(fragment):
            if is_element(node, FRAGMENT_TAG):
                self._substitute(node, anchor=anchor, depth=depth + 1)
            elif is_element(node, LINK_TAG) and self.options.hoist_links:
                self._hoist_link(anchor, node)
            elif is_element(node, SCRIPT_TAG):
                add_script(node)

        placeholder.insert_before(fragment)
        placeholder.decompose()

    def _hoist_link(self, anchor: Tag, link: Tag) -> None:
        try:
            add_header(anchor, link)
        except SectionNotFoundError:
            if self.options.strict_head:
                raise
            logger.warning("Document has no <head>; leaving <link> in place")
            return
        link.extract()


def compose(
    source: MarkupSource,
    options: ComposeOptions | None = None,
    fetch_options: FetchOptions | None = None,
    client: httpx.Client | None = None,
) -> str:
    """Compose an HTML document in one call.

    See ``Composer.compose`` for the parameters and errors. When ``client`` is
    omitted a client is created from ``fetch_options`` and closed afterwards.
    """
    with Composer(options=options, fetch_options=fetch_options, client=client) as composer:
        return composer.compose(source)
